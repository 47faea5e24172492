import torch

import yinpitch


###############################################################################
# Constants
###############################################################################


# Reference pitch of MIDI note 69
A4_FREQUENCY = 440.  # Hz

# MIDI note number of the reference pitch
A4_MIDI = 69


###############################################################################
# Pitch conversions
###############################################################################


def cents_to_frequency(cents, reference=yinpitch.FMIN):
    """Converts cents above a reference to frequency in Hz"""
    return reference * 2 ** (cents / yinpitch.OCTAVE)


def frequency_to_cents(frequency, reference=yinpitch.FMIN):
    """Convert frequency in Hz to cents above a reference"""
    return yinpitch.OCTAVE * torch.log2(frequency / reference)


def frequency_to_midi(frequency):
    """Convert frequency in Hz to MIDI note number"""
    return A4_MIDI + 12 * torch.log2(frequency / A4_FREQUENCY)


def frequency_to_samples(frequency, sample_rate):
    """Convert frequency in Hz to number of samples per period"""
    return sample_rate / frequency


def midi_to_frequency(midi):
    """Convert MIDI note number to frequency in Hz"""
    return A4_FREQUENCY * 2 ** ((midi - A4_MIDI) / 12)


def samples_to_frequency(samples, sample_rate):
    """Convert number of samples per period to frequency in Hz"""
    return sample_rate / samples


###############################################################################
# Time conversions
###############################################################################


def frames_to_samples(frames, hopsize=yinpitch.HOPSIZE):
    """Convert number of frames to samples"""
    return frames * hopsize


def frames_to_seconds(frames, sample_rate, hopsize=yinpitch.HOPSIZE):
    """Convert number of frames to seconds"""
    return samples_to_seconds(frames_to_samples(frames, hopsize), sample_rate)


def samples_to_seconds(samples, sample_rate):
    """Convert number of samples to seconds"""
    return samples / sample_rate


def seconds_to_samples(seconds, sample_rate):
    """Convert seconds to number of samples"""
    return seconds * sample_rate
