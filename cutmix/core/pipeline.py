"""
Split and assembly output paths.

Both produce ``(suggested_file_name, wav_bytes)`` pairs; writing them to disk
or packing them into an archive is left to the caller.
"""
from __future__ import annotations
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Iterable, Optional

from . import wav
from .buffer import SampleBuffer
from .config import AUDIO_CONFIG
from .loader import AudioLoader
from .mixer import mix
from .segmenter import segment, slice_segments
from .timeline import Timeline
from .types import NamedBlob, SplitOptions, SplitResult

logger = logging.getLogger("CutMix")


def source_stem(source_name: str) -> str:
    """File name without directory or extension."""
    return os.path.splitext(os.path.basename(source_name))[0]


def part_file_name(source_name: str, index: int) -> str:
    """Name for the 1-based ``index``-th part split from ``source_name``."""
    return f"{source_stem(source_name)}_part_{index}.wav"


def mix_file_name(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"mixdown_{now.strftime('%Y%m%d_%H%M%S')}_{now.microsecond // 1000:03d}.wav"


def split_buffer(
    buffer: SampleBuffer,
    source_name: str,
    options: Optional[SplitOptions] = None
) -> SplitResult:
    """
    Split a decoded recording at silences and encode every part as WAV.

    Args:
        buffer: Decoded recording
        source_name: Original file name, used to name the parts
        options: Threshold and minimum silence (defaults if None)

    Returns:
        SplitResult; ``is_empty`` is True when nothing but silence was found

    Raises:
        InvalidInputError: If options are outside their documented ranges
    """
    options = (options or SplitOptions()).validate()
    segments = segment(buffer, options.threshold_db, options.min_silence_seconds)

    parts = [
        (part_file_name(source_name, i), wav.encode(part))
        for i, part in enumerate(slice_segments(buffer, segments), start=1)
    ]

    if parts:
        logger.info("Split %s into %d parts", source_name, len(parts))
    else:
        logger.info("No audio above %.1f dB in %s", options.threshold_db, source_name)
    return SplitResult(source_name, segments, parts)


def split_file(
    path: str,
    options: Optional[SplitOptions] = None,
    loader: Optional[AudioLoader] = None
) -> SplitResult:
    """Decode a file with ``loader`` and split it."""
    loader = loader or AudioLoader()
    return split_buffer(loader.load(path), os.path.basename(path), options)


def split_many(
    paths: Iterable[str],
    options: Optional[SplitOptions] = None,
    loader: Optional[AudioLoader] = None,
    max_workers: Optional[int] = None
) -> list[SplitResult]:
    """
    Split several files in parallel.

    Results are returned in input order. The first failure propagates once
    all submitted work has finished.
    """
    options = (options or SplitOptions()).validate()
    loader = loader or AudioLoader()
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [pool.submit(split_file, p, options, loader) for p in paths]
        return [f.result() for f in futures]


def export_mix(
    timeline: Timeline,
    sample_rate: int = AUDIO_CONFIG.default_samplerate,
    now: Optional[datetime] = None
) -> NamedBlob:
    """
    Mix the timeline and encode it.

    Raises:
        EmptyResultError: If the timeline has no clips
        RateMismatchError: If a clip is not at ``sample_rate``
    """
    return mix_file_name(now), wav.encode(mix(timeline, sample_rate))
