"""
Offline mixdown of a timeline into one stereo buffer.
"""
from __future__ import annotations
import logging
import math
import numpy as np

from .buffer import SampleBuffer
from .config import AUDIO_CONFIG
from .errors import EmptyResultError, InvalidInputError, RateMismatchError
from .timeline import Timeline

logger = logging.getLogger("CutMix")


def output_frame_count(total_duration: float, sample_rate: int) -> int:
    return int(math.ceil(total_duration * sample_rate))


def mix(timeline: Timeline, sample_rate: int = AUDIO_CONFIG.default_samplerate) -> SampleBuffer:
    """
    Render every clip at its start time into a stereo buffer.

    Clips are summed sample by sample at ``round(start_time * sample_rate)``.
    Mono clips feed both channels; clips with more than two channels use the
    first two. Sums are not clipped here; the WAV encoder clamps.

    Args:
        timeline: Resolved clip layout
        sample_rate: Output rate; every clip must already be at this rate

    Returns:
        Stereo SampleBuffer of ``ceil(total_duration * sample_rate)`` frames

    Raises:
        EmptyResultError: If the timeline has no clips
        InvalidInputError: If a clip has zero channels or zero frames
        RateMismatchError: If a clip's sample rate differs from the output rate
    """
    if not timeline:
        raise EmptyResultError("Cannot mix an empty timeline")

    for clip in timeline:
        if clip.buffer.channel_count == 0 or clip.buffer.frame_count == 0:
            raise InvalidInputError(f"Clip {clip.name or clip.id!r} has no audio to mix")
        if clip.sample_rate != sample_rate:
            raise RateMismatchError(clip.name or clip.id, clip.sample_rate, sample_rate)

    channels = AUDIO_CONFIG.output_channels
    max_len = output_frame_count(timeline.total_duration, sample_rate)

    # Pre-allocate output buffer
    output = np.zeros((channels, max_len), dtype=np.float32)

    for clip in timeline:
        data = clip.buffer.data
        offset = int(round(clip.start_time * sample_rate))

        # End of segment in output
        t_end = min(max_len, offset + data.shape[1])
        d_end = t_end - offset  # effective length to copy
        if d_end <= 0:
            continue

        if data.shape[0] == 1:
            # Mono: apply to both channels
            output[:, offset:t_end] += data[0, :d_end]
        else:
            output[:, offset:t_end] += data[:channels, :d_end]

    logger.info("Mixed %d clips into %d frames (%.2fs)", len(timeline), max_len, max_len / sample_rate)
    return SampleBuffer(output, sample_rate)
