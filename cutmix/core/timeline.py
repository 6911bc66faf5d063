"""
Timeline layout for CutMix.

A Timeline is an immutable, start-time ordered tuple of clips in which no two
clips overlap. ``resolve``, ``append`` and ``remove`` each return a new
Timeline with that invariant re-established.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional
import logging

from .clip import Clip
from .config import TIMELINE_CONFIG
from .errors import InvalidInputError

logger = logging.getLogger("CutMix")


@dataclass(frozen=True)
class Timeline:
    """Ordered, non-overlapping placement of clips."""
    clips: tuple[Clip, ...] = ()

    @property
    def total_duration(self) -> float:
        """End of the last-ending clip in seconds (0.0 when empty)."""
        if not self.clips:
            return 0.0
        return max(c.end_time for c in self.clips)

    @property
    def ids(self) -> list[str]:
        return [c.id for c in self.clips]

    def get(self, clip_id: str) -> Optional[Clip]:
        """Get clip by id safely."""
        for clip in self.clips:
            if clip.id == clip_id:
                return clip
        return None

    def index_of(self, clip_id: str) -> int:
        for i, clip in enumerate(self.clips):
            if clip.id == clip_id:
                return i
        raise InvalidInputError(f"No clip with id {clip_id!r} on the timeline")

    def is_resolved(self) -> bool:
        """Check the ordering and no-overlap invariant."""
        return all(
            a.start_time <= b.start_time and a.end_time <= b.start_time
            for a, b in zip(self.clips, self.clips[1:])
        )

    def __len__(self) -> int:
        return len(self.clips)

    def __iter__(self) -> Iterator[Clip]:
        return iter(self.clips)

    def __bool__(self) -> bool:
        return bool(self.clips)


def push_apart(clips: Iterable[Clip]) -> tuple[Clip, ...]:
    """
    Sort clips by start time and push each one right until it no longer
    overlaps its predecessor.

    One stable sort and one left-to-right pass: moving clip i+1 can only
    ever require moving i+2, so collision chains propagate in a single sweep.
    Running it on an already resolved layout changes nothing.
    """
    placed: list[Clip] = []
    for clip in sorted(clips, key=lambda c: c.start_time):
        if placed and placed[-1].end_time > clip.start_time:
            pushed_to = placed[-1].end_time
            logger.debug("Pushing %s from %.3fs to %.3fs", clip.id, clip.start_time, pushed_to)
            clip = clip.moved_to(pushed_to)
        placed.append(clip)
    return tuple(placed)


def resolve(timeline: Timeline, clip_id: str, new_start_time: float) -> Timeline:
    """
    Move one clip and restore the no-overlap invariant.

    Args:
        timeline: Current (resolved) layout
        clip_id: Clip being moved
        new_start_time: Requested start in seconds; negatives clamp to 0

    Returns:
        New resolved Timeline

    Raises:
        InvalidInputError: If no clip has that id
    """
    index = timeline.index_of(clip_id)
    clips = list(timeline.clips)
    clips[index] = clips[index].moved_to(max(0.0, float(new_start_time)))
    return Timeline(push_apart(clips))


def append(timeline: Timeline, new_clips: Iterable[Clip]) -> Timeline:
    """
    Place clips back-to-back after the current end of the timeline.

    New clips are ordered by source file name. Clips without a color get the
    next palette color. No push pass is needed because the placement cannot
    overlap anything.

    Raises:
        InvalidInputError: If a new clip reuses an existing or repeated id
    """
    incoming = sorted(new_clips, key=lambda c: (c.name.casefold(), c.name))

    seen = set(timeline.ids)
    for clip in incoming:
        if clip.id in seen:
            raise InvalidInputError(f"Duplicate clip id {clip.id!r}")
        seen.add(clip.id)

    palette = TIMELINE_CONFIG.colors
    cursor = timeline.total_duration
    placed = list(timeline.clips)
    for clip in incoming:
        color = clip.color or palette[len(placed) % len(palette)]
        placed.append(Clip(
            buffer=clip.buffer,
            name=clip.name,
            start_time=cursor,
            id=clip.id,
            color=color,
        ))
        cursor += clip.duration

    return Timeline(tuple(placed))


def remove(timeline: Timeline, clip_id: str) -> Timeline:
    """Delete a clip; the others keep their start times."""
    index = timeline.index_of(clip_id)
    return Timeline(timeline.clips[:index] + timeline.clips[index + 1:])
