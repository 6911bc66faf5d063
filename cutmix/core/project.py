"""
Project abstraction for CutMix.
Encapsulates the assembly session state (timeline, drag, output rate).
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional
import logging
import os
import threading

from . import timeline as tl
from .buffer import SampleBuffer
from .clip import Clip
from .config import AUDIO_CONFIG
from .drag import DragSession, time_scale
from .errors import DecodeError, InvalidInputError
from .loader import AudioLoader
from .mixer import mix
from .pipeline import export_mix
from .timeline import Timeline
from .types import NamedBlob

logger = logging.getLogger("CutMix")


@dataclass
class Project:
    """
    Represents an assembly session.

    Holds the one shared Timeline. Every mutation runs under a single lock
    and leaves the timeline resolved before the next one starts, so the
    project can be driven from a UI thread and worker threads at once.
    """
    name: str = "Untitled Project"
    samplerate: int = field(default_factory=lambda: AUDIO_CONFIG.default_samplerate)
    loader: Optional[AudioLoader] = field(default=None, repr=False)
    _timeline: Timeline = field(default_factory=Timeline, repr=False)
    _drag: Optional[DragSession] = field(default=None, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def __post_init__(self) -> None:
        if self.loader is None:
            self.loader = AudioLoader(target_rate=self.samplerate)

    @property
    def timeline(self) -> Timeline:
        """Current resolved layout (immutable snapshot)."""
        with self._lock:
            return self._timeline

    @property
    def clips(self) -> tuple[Clip, ...]:
        return self.timeline.clips

    @property
    def duration_seconds(self) -> float:
        """Total project duration in seconds."""
        return self.timeline.total_duration

    @property
    def drag(self) -> Optional[DragSession]:
        return self._drag

    @property
    def is_dragging(self) -> bool:
        return self._drag is not None

    def view_time_scale(self) -> float:
        """Seconds per view width; frozen to the drag's scale while dragging."""
        with self._lock:
            if self._drag is not None:
                return self._drag.locked_time_scale
            return time_scale(self._timeline.total_duration)

    # --- Clip Management ---

    def add_clips(self, clips: Iterable[Clip]) -> list[Clip]:
        """Append clips after the current end; returns them as placed."""
        with self._lock:
            before = len(self._timeline)
            self._timeline = tl.append(self._timeline, clips)
            added = list(self._timeline.clips[before:])
        logger.info("Added %d clips, timeline now %.2fs", len(added), self.duration_seconds)
        return added

    def add_buffer(self, name: str, buffer: SampleBuffer) -> Clip:
        return self.add_clips([Clip(buffer=buffer, name=name)])[0]

    def load_files(self, paths: Iterable[str]) -> list[Clip]:
        """
        Decode files and append them in file-name order.

        Files that fail to decode are skipped and logged.

        Raises:
            DecodeError: If none of the files could be decoded
        """
        clips = []
        last_error: Optional[DecodeError] = None
        for path in paths:
            try:
                buffer = self.loader.load(path)
            except DecodeError as e:
                logger.error("Failed to load %s: %s", path, e.reason)
                last_error = e
                continue
            clips.append(Clip(buffer=buffer, name=os.path.basename(path)))

        if not clips and last_error is not None:
            raise last_error
        return self.add_clips(clips)

    def move_clip(self, clip_id: str, start_time: float) -> Timeline:
        """Set a clip's start (numeric edit) and push later clips as needed."""
        with self._lock:
            self._timeline = tl.resolve(self._timeline, clip_id, start_time)
            return self._timeline

    def remove_clip(self, clip_id: str) -> Clip:
        """Remove a clip without closing the gap it leaves."""
        with self._lock:
            clip = self._timeline.get(clip_id)
            if clip is None:
                raise InvalidInputError(f"No clip with id {clip_id!r} on the timeline")
            self._timeline = tl.remove(self._timeline, clip_id)
            if self._drag is not None and self._drag.clip_id == clip_id:
                self._drag = None
        logger.info("Removed clip %s", clip.name or clip.id)
        return clip

    def clear(self) -> None:
        """Reset project to empty state."""
        with self._lock:
            self._timeline = Timeline()
            self._drag = None

    # --- Dragging ---

    def begin_drag(self, clip_id: str, pointer_x: float) -> DragSession:
        """Start dragging a clip; locks the pixel-to-time scale."""
        with self._lock:
            clip = self._timeline.get(clip_id)
            if clip is None:
                raise InvalidInputError(f"No clip with id {clip_id!r} on the timeline")
            self._drag = DragSession(
                clip_id=clip_id,
                pointer_start_x=pointer_x,
                clip_start_time=clip.start_time,
                locked_time_scale=time_scale(self._timeline.total_duration),
            )
            logger.debug("Drag started on %s at x=%.1f", clip_id, pointer_x)
            return self._drag

    def drag_to(self, pointer_x: float, width_px: float) -> Timeline:
        """
        Apply one pointer movement event.

        Does nothing when idle, or when the move maps to the start time that
        was already applied.
        """
        with self._lock:
            drag = self._drag
            if drag is None:
                return self._timeline

            start_time = drag.start_time_at(pointer_x, width_px)
            if start_time == drag.last_applied_start:
                return self._timeline

            self._timeline = tl.resolve(self._timeline, drag.clip_id, start_time)
            self._drag = drag.applied(start_time)
            logger.debug("Drag %s to %.3fs", drag.clip_id, start_time)
            return self._timeline

    def end_drag(self) -> None:
        """Release the pointer; the last applied position stands."""
        with self._lock:
            self._drag = None

    # --- Rendering ---

    def mix_down(self) -> SampleBuffer:
        """Mix all clips to a single stereo buffer at the project rate."""
        return mix(self.timeline, self.samplerate)

    def export(self, now: Optional[datetime] = None) -> NamedBlob:
        """Mix down and encode as WAV, with a timestamped file name."""
        return export_mix(self.timeline, self.samplerate, now)
