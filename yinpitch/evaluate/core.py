import json
import math
import time

import torch
import torchutil

import yinpitch


###############################################################################
# Constants
###############################################################################


# Evaluation threshold for raw pitch accuracy
THRESHOLD = 50  # cents


###############################################################################
# Evaluate
###############################################################################


def tones(
    frequencies=yinpitch.EVALUATION_FREQUENCIES,
    seconds=yinpitch.EVALUATION_SECONDS,
    sample_rate=yinpitch.EVALUATION_SAMPLE_RATE,
    block_size=yinpitch.EVALUATION_BLOCK_SIZE):
    """Evaluate on synthetic tones and save results"""
    # Make output directory
    directory = yinpitch.EVAL_DIR / yinpitch.CONFIG
    directory.mkdir(exist_ok=True, parents=True)

    # Evaluate
    results = benchmark(frequencies, seconds, sample_rate, block_size)

    # Write results
    with open(directory / 'tones.json', 'w') as file:
        json.dump(results, file, indent=4)

    return results


###############################################################################
# Individual evaluations
###############################################################################


def benchmark(
    frequencies=yinpitch.EVALUATION_FREQUENCIES,
    seconds=yinpitch.EVALUATION_SECONDS,
    sample_rate=yinpitch.EVALUATION_SAMPLE_RATE,
    block_size=yinpitch.EVALUATION_BLOCK_SIZE):
    """Stream synthetic tones in fixed-size blocks and score the estimates"""
    results = {}
    for frequency in frequencies:
        audio = tone(frequency, seconds, sample_rate)

        # Stream in blocks, as an audio callback would deliver them
        stream = yinpitch.Stream(sample_rate)
        estimates = []
        start_time = time.time()
        for i in range(0, audio.shape[-1], block_size):
            with torchutil.time.context('estimate'):
                estimates.extend(stream.append(audio[i:i + block_size]))
        elapsed = time.time() - start_time

        results[str(frequency)] = score(estimates, frequency) | {
            'real-time-factor': elapsed / seconds}

    # Average over tones
    results['average'] = {
        key: sum(result[key] for result in results.values()) / len(results)
        for key in next(iter(results.values()))}

    return results


###############################################################################
# Utilities
###############################################################################


def score(estimates, frequency):
    """Accuracy of estimates of a tone with known frequency"""
    voiced = [estimate for estimate in estimates if estimate.voiced]
    if not voiced:
        return {
            'frames': len(estimates),
            'voiced': 0.,
            'rpa': 0.,
            'cents': math.nan,
            'confidence': 0.}

    # Pitch error in cents
    error = yinpitch.cents(
        torch.tensor([estimate.frequency for estimate in voiced]),
        torch.tensor(frequency)).abs()

    return {
        'frames': len(estimates),
        'voiced': len(voiced) / len(estimates),
        'rpa': (error < THRESHOLD).sum().item() / len(estimates),
        'cents': error.mean().item(),
        'confidence': sum(
            estimate.confidence for estimate in voiced) / len(voiced)}


def tone(frequency, seconds, sample_rate, amplitude=.5):
    """Synthesize a sine tone"""
    samples = int(yinpitch.convert.seconds_to_samples(seconds, sample_rate))
    times = torch.arange(samples, dtype=torch.float64) / sample_rate
    return (amplitude * torch.sin(2 * math.pi * frequency * times)).float()
