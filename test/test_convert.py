import librosa
import torch

import yinpitch


###############################################################################
# Test convert.py
###############################################################################


def test_convert_frequency_to_midi():
    """Test that conversion from Hz to MIDI matches librosa implementation"""
    sample_data = torch.tensor([110.0, 220.0, 440.0, 500.0, 880.0])

    # Convert
    yinpitch_midi = yinpitch.convert.frequency_to_midi(sample_data)
    librosa_midi = librosa.hz_to_midi(sample_data.numpy())

    # Compare
    assert torch.allclose(
        yinpitch_midi,
        torch.tensor(librosa_midi, dtype=torch.float32))


def test_convert_midi_to_frequency():
    """Test that conversion from MIDI to Hz matches librosa implementation"""
    sample_data = torch.tensor([45.0, 57.0, 69.0, 71.2131, 81.0])

    # Convert
    yinpitch_frequency = yinpitch.convert.midi_to_frequency(sample_data)
    librosa_frequency = librosa.midi_to_hz(sample_data.numpy())

    # Compare
    assert torch.allclose(
        yinpitch_frequency,
        torch.tensor(librosa_frequency, dtype=torch.float32))


def test_convert_frequency_to_samples():
    """Test that period and frequency conversions are inverses"""
    samples = yinpitch.convert.frequency_to_samples(220., 44100)
    assert samples == 44100 / 220.
    assert yinpitch.convert.samples_to_frequency(samples, 44100) == 220.


def test_convert_frames_to_seconds():
    """Test that frame indices convert to hop-aligned times"""
    assert yinpitch.convert.frames_to_samples(3, 256) == 768
    assert yinpitch.convert.frames_to_seconds(3, 256, 256) == 3.


def test_estimate_midi():
    """Test that estimates report MIDI note numbers"""
    assert yinpitch.Estimate(440., .9).midi == 69.
    assert yinpitch.Estimate(None, 0.).midi is None


def test_convert_frequency_to_cents():
    """Test that cents above a reference match librosa MIDI differences"""
    sample_data = torch.tensor([110.0, 220.0, 440.0, 500.0, 880.0])

    # Convert
    yinpitch_cents = yinpitch.convert.frequency_to_cents(sample_data)
    librosa_cents = 100 * (
        librosa.hz_to_midi(sample_data.numpy()) -
        librosa.hz_to_midi(yinpitch.FMIN))

    # Compare
    assert torch.allclose(
        yinpitch_cents,
        torch.tensor(librosa_cents, dtype=torch.float32),
        atol=1e-3)


def test_convert_cents_to_frequency():
    """Test that conversion from cents matches librosa implementation"""
    sample_data = torch.tensor([0.0, 700.0, 1200.0, 2450.5, 3600.0])

    # Convert
    yinpitch_frequency = yinpitch.convert.cents_to_frequency(
        sample_data,
        440.)
    librosa_frequency = librosa.midi_to_hz(69 + sample_data.numpy() / 100)

    # Compare
    assert torch.allclose(
        yinpitch_frequency,
        torch.tensor(librosa_frequency, dtype=torch.float32))
