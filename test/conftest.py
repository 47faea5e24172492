import numpy as np
import pytest
import soundfile
import torch


###############################################################################
# Testing fixtures
###############################################################################


@pytest.fixture(scope='session')
def sample_rate():
    """Retrieve the test sample rate"""
    return 44100


@pytest.fixture(scope='session')
def sine(sample_rate):
    """Retrieve a sine tone synthesizer"""
    def synthesize(frequency, samples, amplitude=.5, rate=sample_rate):
        times = np.arange(samples) / rate
        return torch.from_numpy(
            amplitude * np.sin(2 * np.pi * frequency * times)).float()
    return synthesize


@pytest.fixture(scope='session')
def noise():
    """Retrieve reproducible white noise"""
    generator = np.random.default_rng(1234)
    return torch.from_numpy(generator.standard_normal(8192)).float()


@pytest.fixture
def audio_file(tmp_path, sine):
    """Write a mono 220 Hz tone to disk"""
    file = tmp_path / 'tone.wav'
    audio = sine(220., 22050, rate=22050)
    soundfile.write(file, audio.numpy(), 22050, subtype='PCM_16')
    return file


@pytest.fixture
def audio_stereo_file(tmp_path, sine):
    """Write a stereo 220 Hz tone to disk"""
    file = tmp_path / 'tone-stereo.wav'
    audio = sine(220., 22050, rate=22050)
    stereo = torch.stack((audio, .5 * audio), dim=1)
    soundfile.write(file, stereo.numpy(), 22050, subtype='PCM_16')
    return file
