from pathlib import Path

import numpy as np


###############################################################################
# Metadata
###############################################################################


# Configuration name
CONFIG = 'yinpitch'


###############################################################################
# Audio parameters
###############################################################################


# Root-mean-square energy below which a frame is treated as silence
ENERGY_THRESHOLD = .0002

# Maximum admissible frequency
FMAX = 800.  # Hz

# Minimum admissible frequency
FMIN = 80.  # Hz

# Size of the analysis window
FRAME_SIZE = 2048  # samples

# Distance between adjacent frames
HOPSIZE = 256  # samples

# One octave in cents
OCTAVE = 1200  # cents

# Cumulative mean normalized difference below which a period is accepted
THRESHOLD = .12

# Token indicating no pitch is present
UNVOICED = np.nan


###############################################################################
# Directories
###############################################################################


# Location to save evaluation artifacts
EVAL_DIR = Path(__file__).parent.parent.parent / 'eval'


###############################################################################
# Evaluation parameters
###############################################################################


# Number of samples delivered per streaming call during benchmarking
EVALUATION_BLOCK_SIZE = 128  # samples

# Frequencies of the synthetic evaluation tones
EVALUATION_FREQUENCIES = [82.41, 110., 220., 440., 659.26]  # Hz

# Sample rate of the synthetic evaluation tones
EVALUATION_SAMPLE_RATE = 44100  # hz

# Duration of each synthetic evaluation tone
EVALUATION_SECONDS = 2.  # seconds

# Number of worker processes for file estimation
NUM_WORKERS = 0
