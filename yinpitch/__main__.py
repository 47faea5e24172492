import argparse
from pathlib import Path

import yinpitch


###############################################################################
# Entry point
###############################################################################


def parse_args():
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser()
    parser.add_argument(
        '--files',
        nargs='+',
        required=True,
        type=Path,
        help='The audio files to process')
    parser.add_argument(
        '--output_prefixes',
        nargs='+',
        type=Path,
        help=(
            'The files to save pitch and confidence without extension. '
            'Defaults to audio_files without extensions.'))
    parser.add_argument(
        '--hopsize',
        type=int,
        default=yinpitch.HOPSIZE,
        help=(
            'The hopsize in samples. '
            f'Defaults to {yinpitch.HOPSIZE} samples.'))
    parser.add_argument(
        '--frame_size',
        type=int,
        default=yinpitch.FRAME_SIZE,
        help=(
            'The analysis window size in samples. '
            f'Defaults to {yinpitch.FRAME_SIZE} samples.'))
    parser.add_argument(
        '--fmin',
        type=float,
        default=yinpitch.FMIN,
        help=(
            'The minimum frequency allowed in Hz. '
            f'Defaults to {yinpitch.FMIN} Hz.'))
    parser.add_argument(
        '--fmax',
        type=float,
        default=yinpitch.FMAX,
        help=(
            'The maximum frequency allowed in Hz. '
            f'Defaults to {yinpitch.FMAX} Hz.'))
    parser.add_argument(
        '--threshold',
        type=float,
        default=yinpitch.THRESHOLD,
        help=(
            'The normalized difference below which a period is accepted. '
            f'Defaults to {yinpitch.THRESHOLD}.'))
    parser.add_argument(
        '--energy_threshold',
        type=float,
        default=yinpitch.ENERGY_THRESHOLD,
        help=(
            'The RMS below which a frame is silent. '
            f'Defaults to {yinpitch.ENERGY_THRESHOLD}.'))
    parser.add_argument(
        '--batch_size',
        type=int,
        help='The number of frames per batch. Defaults to all frames.')
    parser.add_argument(
        '--interp_unvoiced_at',
        type=float,
        help='Specifies confidence threshold for interpolation')
    parser.add_argument(
        '--num_workers',
        type=int,
        default=yinpitch.NUM_WORKERS,
        help='Number of worker processes')

    return parser.parse_known_args()[0]


yinpitch.from_files_to_files(**vars(parse_args()))
