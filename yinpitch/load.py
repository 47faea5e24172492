import warnings

import torchaudio


def audio(file):
    """Load mono audio and its sample rate from disk"""
    audio, sample_rate = torchaudio.load(file)

    # If audio is multi-channel, convert to mono
    if audio.size(0) > 1:
        warnings.warn(
            f'Converting {audio.size(0)}-channel audio to mono: {file}')
        audio = audio.mean(dim=0, keepdim=True)

    return audio, sample_rate
