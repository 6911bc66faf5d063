"""
Silence-based segmentation.
All functions are pure (no side effects) and safe to call from worker threads.
Optimized with numpy vectorization for performance.
"""
from __future__ import annotations
from dataclasses import dataclass
import math
import numpy as np

from .buffer import SampleBuffer
from .config import SPLIT_CONFIG


@dataclass(frozen=True, slots=True)
class Segment:
    """Half-open frame range [start_frame, end_frame) of non-silent audio."""
    start_frame: int
    end_frame: int

    @property
    def length(self) -> int:
        return self.end_frame - self.start_frame

    def duration(self, sample_rate: int) -> float:
        return self.length / sample_rate


def db_to_amplitude(threshold_db: float) -> float:
    """Convert a dBFS threshold to a linear amplitude."""
    return float(10.0 ** (threshold_db / 20.0))


def segment(
    buffer: SampleBuffer,
    threshold_db: float = SPLIT_CONFIG.default_threshold_db,
    min_silence_seconds: float = SPLIT_CONFIG.default_min_silence_seconds
) -> list[Segment]:
    """
    Find the non-silent regions of a buffer.

    Only the first channel is analysed. A sample is loud when its magnitude
    exceeds the threshold amplitude. Silence runs of at least
    ``min_silence_seconds`` split the audio; shorter runs stay inside the
    surrounding segment. Segments shorter than the minimum clip length are
    dropped.

    Args:
        buffer: Audio to analyse
        threshold_db: Silence threshold in dBFS
        min_silence_seconds: Shortest silence that separates two segments

    Returns:
        Segments sorted ascending and non-overlapping (empty for silent input)
    """
    n = buffer.frame_count
    if n == 0 or buffer.channel_count == 0:
        return []

    sr = buffer.sample_rate
    threshold = db_to_amplitude(threshold_db)
    # Half-up rounding
    min_silence = max(1, int(math.floor(min_silence_seconds * sr + 0.5)))
    min_length = SPLIT_CONFIG.min_segment_seconds * sr

    loud = np.flatnonzero(np.abs(buffer.channel(0)) > threshold)
    if loud.size == 0:
        return []

    # Silence run between consecutive loud samples
    gaps = np.diff(loud) - 1
    breaks = np.flatnonzero(gaps >= min_silence)

    starts = np.concatenate(([loud[0]], loud[breaks + 1]))
    ends = np.concatenate((loud[breaks] + 1, [loud[-1] + 1]))

    # The first segment always opens at frame 0; short trailing silence
    # belongs to the last segment
    starts[0] = 0
    if n - ends[-1] < min_silence:
        ends[-1] = n

    return [
        Segment(int(s), int(e))
        for s, e in zip(starts, ends)
        if e - s >= min_length
    ]


def slice_segments(buffer: SampleBuffer, segments: list[Segment]) -> list[SampleBuffer]:
    """Copy each segment's frames (all channels) into its own buffer."""
    return [buffer.slice(seg.start_frame, seg.end_frame) for seg in segments]
