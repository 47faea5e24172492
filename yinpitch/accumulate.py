from typing import List, Optional

import torch

import yinpitch


###############################################################################
# Frame accumulation
###############################################################################


class Accumulator:
    """Regroups blocks of any size into overlapping fixed-size frames

    Args:
        frame_size: The number of samples per frame
        hopsize: The number of samples between the starts of adjacent frames
        dtype: The data type of buffered samples. Defaults to the data type
            of the first floating-point block appended.
    """

    def __init__(
        self,
        frame_size: int = yinpitch.FRAME_SIZE,
        hopsize: int = yinpitch.HOPSIZE,
        dtype: Optional[torch.dtype] = None):
        if int(frame_size) != frame_size or frame_size < 4:
            raise ValueError(
                'frame_size must be an integer of at least 4, '
                f'got {frame_size}')
        if int(hopsize) != hopsize or hopsize < 1:
            raise ValueError(
                f'hopsize must be a positive integer, got {hopsize}')
        if hopsize > frame_size:
            raise ValueError(
                f'hopsize ({hopsize}) cannot exceed frame_size ({frame_size})')
        self.frame_size = int(frame_size)
        self.hopsize = int(hopsize)
        self.dtype = dtype
        self.queue = torch.zeros(0, dtype=dtype)

    def __len__(self):
        return self.queue.shape[0]

    def append(self, samples) -> List[torch.Tensor]:
        """Buffer samples and extract every frame that becomes available

        Args:
            samples: Mono audio samples, oldest first

        Returns:
            The extracted frames, oldest first. Each has shape (frame_size,)
            and owns its memory.
        """
        samples = torch.as_tensor(samples)

        # Maybe adopt the precision of the input
        if self.dtype is None:
            self.dtype = (
                samples.dtype if samples.is_floating_point()
                else torch.get_default_dtype())
            self.queue = self.queue.to(self.dtype)

        samples = samples.to(self.dtype)
        self.queue = torch.cat((self.queue, samples.reshape(-1)))

        frames = []
        while len(self) >= self.frame_size:
            frames.append(self.queue[:self.frame_size].clone())
            self.queue = self.queue[self.hopsize:]

        # Release storage of dropped samples
        if frames:
            self.queue = self.queue.clone()

        return frames

    def reset(self):
        """Discard buffered samples"""
        self.queue = self.queue.new_zeros(0)
