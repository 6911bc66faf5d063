"""
16-bit PCM WAV serialization.
"""
from __future__ import annotations
import struct
import numpy as np

from .buffer import SampleBuffer
from .config import AUDIO_CONFIG
from .errors import InvalidInputError

HEADER_SIZE = 44
PCM_FORMAT = 1
BITS_PER_SAMPLE = 8 * AUDIO_CONFIG.sample_width_bytes

_HEADER = struct.Struct('<4sI4s4sIHHIIHH4sI')


def quantize(data: np.ndarray) -> np.ndarray:
    """
    Convert float samples to int16.

    Samples are clamped to [-1, 1]; negatives scale by 32768 and the rest by
    32767 so that both -1.0 and +1.0 map inside the int16 range. The result
    is truncated toward zero.
    """
    clamped = np.clip(np.asarray(data, dtype=np.float64), -1.0, 1.0)
    scaled = np.where(clamped < 0, clamped * 32768.0, clamped * 32767.0)
    return np.trunc(scaled).astype('<i2')


def build_header(channels: int, sample_rate: int, frame_count: int) -> bytes:
    width = AUDIO_CONFIG.sample_width_bytes
    data_size = frame_count * channels * width
    return _HEADER.pack(
        b'RIFF', HEADER_SIZE - 8 + data_size, b'WAVE',
        b'fmt ', 16, PCM_FORMAT, channels, sample_rate,
        sample_rate * channels * width,  # byte rate
        channels * width,                # block align
        BITS_PER_SAMPLE,
        b'data', data_size,
    )


def encode(buffer: SampleBuffer) -> bytes:
    """
    Serialize a buffer as a canonical 44-byte-header PCM WAV file.

    Args:
        buffer: Audio to encode (any channel count)

    Returns:
        Complete WAV file contents

    Raises:
        InvalidInputError: If the buffer has no frames or no channels
    """
    if buffer.frame_count == 0 or buffer.channel_count == 0:
        raise InvalidInputError(
            f"Cannot encode an empty buffer ({buffer.channel_count} channels, "
            f"{buffer.frame_count} frames)"
        )

    # (frames, channels) in C order gives frame-major interleaving
    samples = quantize(buffer.to_frames())
    header = build_header(buffer.channel_count, buffer.sample_rate, buffer.frame_count)
    return header + np.ascontiguousarray(samples).tobytes()
