import functools
import multiprocessing as mp
from pathlib import Path
from typing import List, Optional, Tuple

import torch
import torchutil
import tqdm

import yinpitch


###############################################################################
# Pitch and confidence estimation
###############################################################################


def from_audio(
    audio: torch.Tensor,
    sample_rate: int,
    hopsize: int = yinpitch.HOPSIZE,
    frame_size: int = yinpitch.FRAME_SIZE,
    fmin: float = yinpitch.FMIN,
    fmax: float = yinpitch.FMAX,
    threshold: float = yinpitch.THRESHOLD,
    energy_threshold: float = yinpitch.ENERGY_THRESHOLD,
    batch_size: Optional[int] = None,
    interp_unvoiced_at: Optional[float] = None
) -> Tuple[torch.Tensor, torch.Tensor]:
    """Perform pitch and confidence estimation

    Frames are the same as those a Stream with the same frame and hop sizes
    produces when fed this audio.

    Args:
        audio: The mono audio to extract pitch and confidence from
        sample_rate: The audio sample rate
        hopsize: The number of samples between adjacent frames
        frame_size: The number of samples per frame
        fmin: The minimum allowable frequency in Hz
        fmax: The maximum allowable frequency in Hz
        threshold: Normalized difference below which a lag is accepted
        energy_threshold: RMS below which a frame is treated as silence
        batch_size: The number of frames per batch
        interp_unvoiced_at: Specifies confidence threshold for interpolation

    Returns:
        pitch: torch.tensor(shape=(1, frames))
        confidence: torch.tensor(shape=(1, frames))
    """
    estimator = yinpitch.Estimator(fmin, fmax, threshold, energy_threshold)

    # Estimate
    estimates = []
    with torchutil.time.context('estimate'):
        for frames in preprocess(audio, hopsize, frame_size, batch_size):
            estimates.extend(estimator.batch(frames, sample_rate))

    # Convert to tensors
    pitch = torch.tensor(
        [
            yinpitch.UNVOICED if estimate.frequency is None
            else estimate.frequency
            for estimate in estimates
        ],
        dtype=torch.float64)[None]
    confidence = torch.tensor(
        [estimate.confidence for estimate in estimates],
        dtype=torch.float64)[None]

    # Maybe interpolate unvoiced regions
    if interp_unvoiced_at is not None:
        pitch = yinpitch.voicing.interpolate(
            pitch,
            confidence,
            interp_unvoiced_at)

    return pitch, confidence


def from_file(
    file: Path,
    hopsize: int = yinpitch.HOPSIZE,
    frame_size: int = yinpitch.FRAME_SIZE,
    fmin: float = yinpitch.FMIN,
    fmax: float = yinpitch.FMAX,
    threshold: float = yinpitch.THRESHOLD,
    energy_threshold: float = yinpitch.ENERGY_THRESHOLD,
    batch_size: Optional[int] = None,
    interp_unvoiced_at: Optional[float] = None
) -> Tuple[torch.Tensor, torch.Tensor]:
    """Perform pitch and confidence estimation from audio on disk

    The audio is analyzed at its own sample rate.

    Args:
        file: The audio file
        hopsize: The number of samples between adjacent frames
        frame_size: The number of samples per frame
        fmin: The minimum allowable frequency in Hz
        fmax: The maximum allowable frequency in Hz
        threshold: Normalized difference below which a lag is accepted
        energy_threshold: RMS below which a frame is treated as silence
        batch_size: The number of frames per batch
        interp_unvoiced_at: Specifies confidence threshold for interpolation

    Returns:
        pitch: torch.tensor(shape=(1, frames))
        confidence: torch.tensor(shape=(1, frames))
    """
    # Load audio
    with torchutil.time.context('load'):
        audio, sample_rate = yinpitch.load.audio(file)

    # Inference
    return from_audio(
        audio,
        sample_rate,
        hopsize,
        frame_size,
        fmin,
        fmax,
        threshold,
        energy_threshold,
        batch_size,
        interp_unvoiced_at)


def from_file_to_file(
    file: Path,
    output_prefix: Optional[Path] = None,
    hopsize: int = yinpitch.HOPSIZE,
    frame_size: int = yinpitch.FRAME_SIZE,
    fmin: float = yinpitch.FMIN,
    fmax: float = yinpitch.FMAX,
    threshold: float = yinpitch.THRESHOLD,
    energy_threshold: float = yinpitch.ENERGY_THRESHOLD,
    batch_size: Optional[int] = None,
    interp_unvoiced_at: Optional[float] = None
) -> None:
    """Perform pitch and confidence estimation from audio on disk and save

    Args:
        file: The audio file
        output_prefix: The file to save pitch and confidence without extension
        hopsize: The number of samples between adjacent frames
        frame_size: The number of samples per frame
        fmin: The minimum allowable frequency in Hz
        fmax: The maximum allowable frequency in Hz
        threshold: Normalized difference below which a lag is accepted
        energy_threshold: RMS below which a frame is treated as silence
        batch_size: The number of frames per batch
        interp_unvoiced_at: Specifies confidence threshold for interpolation
    """
    # Inference
    pitch, confidence = from_file(
        file,
        hopsize,
        frame_size,
        fmin,
        fmax,
        threshold,
        energy_threshold,
        batch_size,
        interp_unvoiced_at)

    # Save to disk
    with torchutil.time.context('save'):

        # Maybe use same filename with new extension
        if output_prefix is None:
            output_prefix = file.parent / file.stem

        # Save
        Path(output_prefix).parent.mkdir(exist_ok=True, parents=True)
        torch.save(pitch, f'{output_prefix}-pitch.pt')
        torch.save(confidence, f'{output_prefix}-confidence.pt')


def from_files_to_files(
    files: List[Path],
    output_prefixes: Optional[List[Path]] = None,
    hopsize: int = yinpitch.HOPSIZE,
    frame_size: int = yinpitch.FRAME_SIZE,
    fmin: float = yinpitch.FMIN,
    fmax: float = yinpitch.FMAX,
    threshold: float = yinpitch.THRESHOLD,
    energy_threshold: float = yinpitch.ENERGY_THRESHOLD,
    batch_size: Optional[int] = None,
    interp_unvoiced_at: Optional[float] = None,
    num_workers: int = yinpitch.NUM_WORKERS
) -> None:
    """Perform pitch and confidence estimation from files on disk and save

    Args:
        files: The audio files
        output_prefixes: Files to save pitch and confidence without extension
        hopsize: The number of samples between adjacent frames
        frame_size: The number of samples per frame
        fmin: The minimum allowable frequency in Hz
        fmax: The maximum allowable frequency in Hz
        threshold: Normalized difference below which a lag is accepted
        energy_threshold: RMS below which a frame is treated as silence
        batch_size: The number of frames per batch
        interp_unvoiced_at: Specifies confidence threshold for interpolation
        num_workers: Number of worker processes. Zero runs in this process.
    """
    # Maybe use default output filenames
    if output_prefixes is None:
        output_prefixes = [file.parent / file.stem for file in files]
    elif len(output_prefixes) != len(files):
        raise ValueError(
            f'Received {len(files)} files but '
            f'{len(output_prefixes)} output prefixes')

    pitch_fn = functools.partial(
        from_file_to_file,
        hopsize=hopsize,
        frame_size=frame_size,
        fmin=fmin,
        fmax=fmax,
        threshold=threshold,
        energy_threshold=energy_threshold,
        batch_size=batch_size,
        interp_unvoiced_at=interp_unvoiced_at)
    items = list(zip(files, output_prefixes))

    # Single-process
    if num_workers == 0:
        for file, output_prefix in iterator(
            items,
            f'{yinpitch.CONFIG}',
            total=len(files)
        ):
            pitch_fn(file, output_prefix)

    # Multi-process
    else:
        with mp.get_context('spawn').Pool(num_workers) as pool:
            pool.starmap(pitch_fn, items)


###############################################################################
# Framing
###############################################################################


def preprocess(
    audio,
    hopsize=yinpitch.HOPSIZE,
    frame_size=yinpitch.FRAME_SIZE,
    batch_size=None):
    """Slice audio into batches of overlapping frames"""
    audio = torch.as_tensor(audio).reshape(-1)

    # Get number of frames
    total_frames = expected_frames(audio.shape[-1], frame_size, hopsize)
    if not total_frames:
        return

    # Slice and chunk audio
    frames = audio.unfold(0, frame_size, hopsize)

    # Default to running all frames in a single batch
    batch_size = total_frames if batch_size is None else batch_size

    # Generate batches
    for i in range(0, total_frames, batch_size):
        yield frames[i:i + batch_size]


def expected_frames(
    samples,
    frame_size=yinpitch.FRAME_SIZE,
    hopsize=yinpitch.HOPSIZE):
    """Compute expected number of complete frames"""
    if samples < frame_size:
        return 0
    return (samples - frame_size) // hopsize + 1


###############################################################################
# Utilities
###############################################################################


def cents(a, b):
    """Compute pitch difference in cents"""
    return yinpitch.OCTAVE * torch.log2(a / b)


def interpolate(x, xp, fp):
    """1D linear interpolation for monotonically increasing sample points"""
    # Handle edge cases
    if xp.shape[-1] == 0:
        return x
    if xp.shape[-1] == 1:
        return torch.full(
            x.shape,
            fp.squeeze().item(),
            device=fp.device,
            dtype=fp.dtype)

    # Get slope and intercept using right-side first-differences
    m = (fp[:, 1:] - fp[:, :-1]) / (xp[:, 1:] - xp[:, :-1])
    b = fp[:, :-1] - (m.mul(xp[:, :-1]))

    # Get indices to sample slope and intercept
    indices = torch.sum(torch.ge(x[:, :, None], xp[:, None, :]), -1) - 1
    indices = torch.clamp(indices, 0, m.shape[-1] - 1)
    line_idx = torch.zeros_like(indices)

    # Interpolate
    return m[line_idx, indices].mul(x) + b[line_idx, indices]


def iterator(iterable, message, initial=0, total=None):
    """Create a tqdm iterator"""
    total = len(iterable) if total is None else total
    return tqdm.tqdm(
        iterable,
        desc=message,
        dynamic_ncols=True,
        initial=initial,
        total=total)
