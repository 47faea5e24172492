import argparse

import yinpitch


###############################################################################
# Evaluate pitch estimation on synthetic tones
###############################################################################


def parse_args():
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser()
    parser.add_argument(
        '--frequencies',
        nargs='+',
        type=float,
        default=yinpitch.EVALUATION_FREQUENCIES,
        help='The frequencies of the tones to evaluate on in Hz')
    parser.add_argument(
        '--seconds',
        type=float,
        default=yinpitch.EVALUATION_SECONDS,
        help='The duration of each tone in seconds')
    parser.add_argument(
        '--sample_rate',
        type=int,
        default=yinpitch.EVALUATION_SAMPLE_RATE,
        help='The sample rate of the tones')
    parser.add_argument(
        '--block_size',
        type=int,
        default=yinpitch.EVALUATION_BLOCK_SIZE,
        help='The number of samples delivered per streaming call')

    return parser.parse_known_args()[0]


yinpitch.evaluate.tones(**vars(parse_args()))
