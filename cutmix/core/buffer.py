"""
Immutable sample storage shared by every CutMix component.
"""
from __future__ import annotations
from dataclasses import dataclass
import numpy as np

from .errors import InvalidInputError
from .types import AudioArray, MonoArray


@dataclass(frozen=True, eq=False)
class SampleBuffer:
    """
    Decoded PCM audio, stored channel-major as float32 with shape (channels, frames).

    The array is copied on construction and marked read-only, so a buffer can be
    shared between clips, worker threads and the mixer without defensive copies.
    """
    data: AudioArray
    sample_rate: int

    def __post_init__(self) -> None:
        if self.sample_rate <= 0:
            raise InvalidInputError(f"sample_rate must be positive, got {self.sample_rate}")

        arr = np.array(self.data, dtype=np.float32)
        if arr.ndim == 1:
            arr = arr[np.newaxis, :]
        elif arr.ndim != 2:
            raise InvalidInputError(f"Expected (channels, frames) array, got shape {arr.shape}")

        arr.flags.writeable = False
        object.__setattr__(self, "data", arr)
        object.__setattr__(self, "sample_rate", int(self.sample_rate))

    @classmethod
    def from_frames(cls, frames: np.ndarray, sample_rate: int) -> "SampleBuffer":
        """Build from frame-major data, shape (frames,) or (frames, channels)."""
        arr = np.asarray(frames, dtype=np.float32)
        if arr.ndim == 2:
            arr = arr.T
        return cls(arr, sample_rate)

    @classmethod
    def silence(cls, frame_count: int, sample_rate: int, channels: int = 2) -> "SampleBuffer":
        return cls(np.zeros((channels, frame_count), dtype=np.float32), sample_rate)

    @property
    def channel_count(self) -> int:
        return self.data.shape[0]

    @property
    def frame_count(self) -> int:
        return self.data.shape[1]

    @property
    def duration(self) -> float:
        """Length in seconds."""
        return self.frame_count / self.sample_rate

    @property
    def is_mono(self) -> bool:
        return self.channel_count == 1

    def channel(self, index: int) -> MonoArray:
        return self.data[index]

    def to_frames(self) -> np.ndarray:
        """Frame-major view, shape (frames, channels), as soundfile expects."""
        return self.data.T

    def slice(self, start_frame: int, end_frame: int) -> "SampleBuffer":
        """Copy frames [start_frame, end_frame) of every channel into a new buffer."""
        start = max(0, start_frame)
        end = min(self.frame_count, end_frame)
        if end < start:
            end = start
        return SampleBuffer(self.data[:, start:end], self.sample_rate)

    def __len__(self) -> int:
        return self.frame_count

    def __repr__(self) -> str:
        return (
            f"SampleBuffer(channels={self.channel_count}, frames={self.frame_count}, "
            f"sample_rate={self.sample_rate})"
        )
