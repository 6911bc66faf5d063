from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Optional
import uuid

from .buffer import SampleBuffer


def new_clip_id() -> str:
    return f"clip-{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class Clip:
    """
    A decoded audio buffer placed on the timeline.
    Only its start time ever changes; every move returns a new Clip.
    """
    buffer: SampleBuffer
    name: str = ""
    start_time: float = 0.0  # Seconds from the timeline start
    id: str = field(default_factory=new_clip_id)
    color: Optional[str] = None

    @property
    def duration(self) -> float:
        return self.buffer.duration

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    @property
    def sample_rate(self) -> int:
        return self.buffer.sample_rate

    def moved_to(self, start_time: float) -> 'Clip':
        return replace(self, start_time=start_time)

    def __repr__(self) -> str:
        return f"Clip({self.id!r}, {self.name!r}, start={self.start_time:.3f}s, duration={self.duration:.3f}s)"
