"""Config parameters whose values depend on other config parameters"""
import yinpitch


###############################################################################
# Audio parameters
###############################################################################


# Number of samples shared by consecutive frames
OVERLAP = yinpitch.FRAME_SIZE - yinpitch.HOPSIZE  # samples

# Number of candidate lags searched per frame
YIN_SIZE = yinpitch.FRAME_SIZE // 2
