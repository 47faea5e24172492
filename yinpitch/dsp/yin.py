import math
from typing import List, NamedTuple, Optional

import torch

import yinpitch


###############################################################################
# Constants
###############################################################################


# Parabola denominators below this magnitude keep the integer lag
PARABOLIC_EPSILON = 1e-12

# Differences below this fraction of the frame energy are numerical noise
RELATIVE_TOLERANCE = 1e-10


###############################################################################
# YIN pitch estimation
###############################################################################


class Estimate(NamedTuple):
    """Pitch estimate of a single frame"""

    # Fundamental frequency in Hz, or None if no pitch is present
    frequency: Optional[float]

    # One minus the normalized difference at the selected lag
    confidence: float

    @property
    def midi(self) -> Optional[float]:
        """The frequency as a fractional MIDI note number"""
        if self.frequency is None:
            return None
        return yinpitch.convert.frequency_to_midi(
            torch.tensor(self.frequency, dtype=torch.float64)).item()

    @property
    def voiced(self) -> bool:
        return self.frequency is not None


# Result of frames without a usable pitch
ABSENT = Estimate(None, 0.)


class Estimator:
    """Stateless YIN estimator

    Args:
        fmin: The minimum admissible frequency in Hz
        fmax: The maximum admissible frequency in Hz
        threshold: Normalized difference below which a lag is accepted
        energy_threshold: RMS below which a frame is treated as silence
    """

    def __init__(
        self,
        fmin: float = yinpitch.FMIN,
        fmax: float = yinpitch.FMAX,
        threshold: float = yinpitch.THRESHOLD,
        energy_threshold: float = yinpitch.ENERGY_THRESHOLD):
        if fmin <= 0:
            raise ValueError(f'fmin must be positive, got {fmin}')
        if fmax <= fmin:
            raise ValueError(
                f'fmax ({fmax}) must be greater than fmin ({fmin})')
        if threshold <= 0:
            raise ValueError(f'threshold must be positive, got {threshold}')
        if energy_threshold < 0:
            raise ValueError(
                'energy_threshold must be non-negative, '
                f'got {energy_threshold}')
        self.fmin = fmin
        self.fmax = fmax
        self.threshold = threshold
        self.energy_threshold = energy_threshold

    def __call__(self, frame, sample_rate):
        return self.process(frame, sample_rate)

    def process(self, frame: torch.Tensor, sample_rate: float) -> Estimate:
        """Estimate the pitch of one frame

        Args:
            frame: The audio frame. shape=(frame_size,)
            sample_rate: The sample rate the frame was captured at

        Returns:
            The frequency (or None) and confidence of the frame
        """
        return from_frame(
            frame,
            sample_rate,
            self.fmin,
            self.fmax,
            self.threshold,
            self.energy_threshold)

    def batch(
        self,
        frames: torch.Tensor,
        sample_rate: float
    ) -> List[Estimate]:
        """Estimate the pitch of a batch of frames

        Args:
            frames: The audio frames. shape=(batch, frame_size)
            sample_rate: The sample rate the frames were captured at

        Returns:
            One estimate per frame, in order
        """
        return from_frames(
            frames,
            sample_rate,
            self.fmin,
            self.fmax,
            self.threshold,
            self.energy_threshold)


def from_frame(
    frame,
    sample_rate,
    fmin=yinpitch.FMIN,
    fmax=yinpitch.FMAX,
    threshold=yinpitch.THRESHOLD,
    energy_threshold=yinpitch.ENERGY_THRESHOLD):
    """Estimate pitch and confidence of one frame with yin"""
    frame = torch.as_tensor(frame).reshape(1, -1)
    return from_frames(
        frame,
        sample_rate,
        fmin,
        fmax,
        threshold,
        energy_threshold)[0]


def from_frames(
    frames,
    sample_rate,
    fmin=yinpitch.FMIN,
    fmax=yinpitch.FMAX,
    threshold=yinpitch.THRESHOLD,
    energy_threshold=yinpitch.ENERGY_THRESHOLD):
    """Estimate pitch and confidence of a batch of frames with yin"""
    frames = torch.as_tensor(frames).to(torch.float64)
    estimates = [ABSENT] * frames.shape[0]

    # Silence gate
    active = rms(frames) >= energy_threshold
    if not active.any():
        return estimates
    indices = torch.nonzero(active)[:, 0].tolist()

    # Cumulative mean normalized difference of frames with energy
    yin_frames = cumulative_mean_normalized_difference(
        difference(frames[active]))

    for index, yin_frame in zip(indices, yin_frames):

        # Find fundamental period
        tau = select_period(yin_frame, threshold)
        if tau is None:
            continue

        # Refine to sub-sample precision
        period = parabolic_interpolation(yin_frame, tau)
        if period <= 0.:
            continue

        # Range gate
        frequency = sample_rate / period
        if frequency < fmin or frequency > fmax:
            continue

        estimates[index] = Estimate(frequency, 1. - yin_frame[tau].item())

    return estimates


###############################################################################
# Utilities
###############################################################################


def cumulative_mean_normalized_difference(frames):
    """Rescale differences by their running mean over lags"""
    tau_range = torch.arange(frames.shape[-1], device=frames.device)
    cumulative = torch.cumsum(frames, dim=-1)
    tiny = torch.finfo(frames.dtype).tiny

    # Constant input has a zero running sum
    yin_frames = torch.where(
        cumulative > 0,
        frames * tau_range / cumulative.clamp(min=tiny),
        torch.ones_like(frames))

    # Lag zero is never a period
    yin_frames[..., 0] = 1.

    return yin_frames


def difference(frames):
    """Squared difference between each frame and its lagged copies

    Computes d(tau) = sum_{i < N - tau} (x[i] - x[i + tau]) ** 2 for
    tau in [0, N // 2) through energy terms and an FFT autocorrelation.
    """
    frames = frames.to(torch.float64)
    frame_size = frames.shape[-1]
    yin_size = frame_size // 2

    # Autocorrelation
    spectrum = torch.fft.rfft(frames, 2 * frame_size, dim=-1)
    acf_frames = torch.fft.irfft(
        spectrum * spectrum.conj(),
        2 * frame_size,
        dim=-1)[..., :yin_size]

    # Energy terms
    energy = torch.nn.functional.pad(
        torch.cumsum(frames ** 2, dim=-1),
        (1, 0))
    total = energy[..., -1:]
    lags = torch.arange(yin_size, device=frames.device)
    head = energy[..., frame_size - lags]
    tail = total - energy[..., lags]

    # Difference function
    yin_frames = head + tail - 2 * acf_frames
    yin_frames[yin_frames < RELATIVE_TOLERANCE * total] = 0.
    yin_frames[..., 0] = 0.

    return yin_frames


def parabolic_interpolation(frame, tau):
    """Sub-sample refinement of a lag by fitting a parabola to its neighbors"""
    if tau <= 0 or tau >= frame.shape[-1] - 1:
        return float(tau)
    previous, current, following = frame[tau - 1:tau + 2].tolist()

    # Collinear or flat neighborhoods have no vertex
    denominator = 2 * (2 * current - following - previous)
    if abs(denominator) < PARABOLIC_EPSILON:
        return float(tau)

    shift = (following - previous) / denominator
    if not math.isfinite(shift):
        return float(tau)
    return tau + shift


def rms(frames):
    """Root-mean-square energy of each frame"""
    frames = torch.as_tensor(frames).to(torch.float64)
    return torch.sqrt(torch.mean(frames ** 2, dim=-1))


def select_period(frame, threshold=yinpitch.THRESHOLD):
    """Integer lag of the fundamental period

    Takes the first lag from two upward whose normalized difference falls
    below the threshold, then follows the dip down to its local minimum. If
    no lag falls below the threshold, takes the global minimum instead.
    Returns None if the frame has no lags to search.
    """
    yin_size = frame.shape[-1]
    if yin_size <= 2:
        return None

    # Absolute threshold
    below = torch.nonzero(frame[2:] < threshold)
    if len(below):
        tau = below[0].item() + 2

        # Walk to the bottom of the dip
        rising = torch.nonzero(frame[tau + 1:] >= frame[tau:-1])
        if len(rising):
            return tau + rising[0].item()
        return yin_size - 1

    # No crossing
    return torch.argmin(frame[2:]).item() + 2
