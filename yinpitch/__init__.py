###############################################################################
# Configuration
###############################################################################


# Default configuration parameters to be modified
from .config import defaults

# Modify configuration
import yapecs
yapecs.configure('yinpitch', defaults)

# Import configuration parameters
from .config.defaults import *
from .config.static import *


###############################################################################
# Module imports
###############################################################################


from .core import *
from .accumulate import Accumulator
from .dsp.yin import Estimate, Estimator
from .stream import Stream
from . import convert
from . import dsp
from . import evaluate
from . import load
from . import voicing
