from . import yin
