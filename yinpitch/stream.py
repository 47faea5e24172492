from typing import Callable, List, Optional

import yinpitch


###############################################################################
# Streaming pitch estimation
###############################################################################


class Stream:
    """Pitch estimation over a live stream of audio blocks

    Each time a hop of new audio completes a frame, the frame is estimated
    and the estimate is delivered to the callback along with the stream time
    in seconds of the last sample of that frame.

    Args:
        sample_rate: The sample rate the stream was captured at
        frame_size: The number of samples per frame
        hopsize: The number of samples between adjacent frames
        fmin: The minimum admissible frequency in Hz
        fmax: The maximum admissible frequency in Hz
        threshold: Normalized difference below which a lag is accepted
        energy_threshold: RMS below which a frame is treated as silence
        callback: Receives (estimate, seconds) for each frame, in order
    """

    def __init__(
        self,
        sample_rate: float,
        frame_size: int = yinpitch.FRAME_SIZE,
        hopsize: int = yinpitch.HOPSIZE,
        fmin: float = yinpitch.FMIN,
        fmax: float = yinpitch.FMAX,
        threshold: float = yinpitch.THRESHOLD,
        energy_threshold: float = yinpitch.ENERGY_THRESHOLD,
        callback: Optional[Callable] = None):
        if sample_rate <= 0:
            raise ValueError(
                f'sample_rate must be positive, got {sample_rate}')
        self.sample_rate = sample_rate
        self.accumulator = yinpitch.Accumulator(frame_size, hopsize)
        self.estimator = yinpitch.Estimator(
            fmin,
            fmax,
            threshold,
            energy_threshold)
        self.callback = callback
        self.frames = 0

    def append(self, samples) -> List['yinpitch.Estimate']:
        """Estimate pitch of every frame completed by these samples"""
        estimates = []
        for frame in self.accumulator.append(samples):
            estimate = self.estimator.process(frame, self.sample_rate)
            self.frames += 1

            # Deliver
            if self.callback is not None:
                self.callback(estimate, self.time)

            estimates.append(estimate)
        return estimates

    def reset(self):
        """Discard buffered audio and restart the stream clock"""
        self.accumulator.reset()
        self.frames = 0

    @property
    def time(self) -> float:
        """Time in seconds of the last sample of the most recent frame"""
        if not self.frames:
            return 0.
        samples = yinpitch.convert.frames_to_samples(
            self.frames - 1,
            self.accumulator.hopsize) + self.accumulator.frame_size
        return yinpitch.convert.samples_to_seconds(samples, self.sample_rate)
