MODULE = 'yinpitch'

# Configuration name
CONFIG = 'fallback'

# Distance between adjacent frames
HOPSIZE = 512  # samples
