import pytest
import torch

import yinpitch


###############################################################################
# Test stream.py
###############################################################################


def test_stream_scenario(sine, sample_rate):
    """Test three hops of a 220 Hz tone at the low-latency configuration"""
    stream = yinpitch.Stream(sample_rate, 2048, 256)
    estimates = stream.append(sine(220., 2048 + 2 * 256))
    assert len(estimates) == 3
    for estimate in estimates:
        assert abs(estimate.frequency - 220.) <= 2.
        assert estimate.confidence >= .85


def test_stream_callback(sine, sample_rate):
    """Test that estimates are delivered in order with frame end times"""
    delivered = []
    stream = yinpitch.Stream(
        sample_rate,
        2048,
        512,
        callback=lambda estimate, seconds: delivered.append(
            (estimate, seconds)))
    audio = sine(330., 2048 + 4 * 512)

    estimates = []
    for i in range(0, audio.shape[-1], 128):
        estimates.extend(stream.append(audio[i:i + 128]))

    assert [estimate for estimate, _ in delivered] == estimates
    assert [seconds for _, seconds in delivered] == pytest.approx(
        [(2048 + 512 * i) / sample_rate for i in range(5)])
    assert stream.time == pytest.approx((2048 + 4 * 512) / sample_rate)


def test_stream_block_size(sine, noise, sample_rate):
    """Test that estimates do not depend on how audio is split into blocks"""
    audio = torch.cat((sine(196., 3000), noise[:1000] * .01, sine(523., 3000)))

    bulk = yinpitch.Stream(sample_rate).append(audio)

    stream = yinpitch.Stream(sample_rate)
    single = []
    for sample in audio.tolist():
        single.extend(stream.append([sample]))

    assert single == bulk


def test_stream_silence(sample_rate):
    """Test that silence yields absent estimates without interrupting"""
    stream = yinpitch.Stream(sample_rate)
    estimates = stream.append(torch.zeros(4096))
    assert len(estimates) == 9
    assert all(estimate == (None, 0.) for estimate in estimates)


def test_stream_reset(sine, sample_rate):
    """Test that reset discards buffered audio and restarts the clock"""
    stream = yinpitch.Stream(sample_rate)
    stream.append(sine(220., 3000))
    stream.reset()
    assert stream.time == 0.
    assert stream.append(sine(220., 2000)) == []


def test_stream_invalid():
    """Test that invalid stream configurations are rejected"""
    with pytest.raises(ValueError):
        yinpitch.Stream(0)
    with pytest.raises(ValueError):
        yinpitch.Stream(44100, 2048, 4096)
