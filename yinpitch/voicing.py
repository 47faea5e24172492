import torch

import yinpitch


###############################################################################
# Voiced/unvoiced
###############################################################################


def interpolate(pitch, confidence, value):
    """Fill unvoiced regions via linear interpolation"""
    # Threshold confidence
    voiced = threshold(confidence, value) & ~torch.isnan(pitch)

    # Handle no voiced frames
    if not voiced.any():
        return pitch

    # Pitch is linear in base-2 log-space
    pitch = torch.log2(pitch)

    # Interpolate
    pitch[~voiced] = yinpitch.interpolate(
        torch.where(~voiced[0])[0][None].to(pitch.dtype),
        torch.where(voiced[0])[0][None].to(pitch.dtype),
        pitch[voiced][None])[0]

    return 2 ** pitch


def threshold(confidence, value):
    """Threshold confidence to produce voiced/unvoiced classifications"""
    return confidence > value
