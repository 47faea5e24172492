MODULE = 'yinpitch'

# Configuration name
CONFIG = 'low-latency'

# Distance between adjacent frames
HOPSIZE = 256  # samples
