"""
Pointer-drag state for moving a clip along the timeline.

A drag is either absent (idle) or a DragSession value. The time scale used to
turn pixels into seconds is captured when the drag begins and never changes
while it lasts, even though the drag itself may grow the timeline.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional

from .config import TIMELINE_CONFIG


def time_scale(total_duration: float) -> float:
    """Seconds spanned by the full width of the timeline view."""
    if total_duration > 0:
        return total_duration * TIMELINE_CONFIG.view_padding_factor
    return TIMELINE_CONFIG.empty_view_seconds


@dataclass(frozen=True, slots=True)
class DragSession:
    clip_id: str
    pointer_start_x: float
    clip_start_time: float
    locked_time_scale: float
    last_applied_start: Optional[float] = None

    def start_time_at(self, pointer_x: float, width_px: float) -> float:
        """Clip start for the current pointer position (never negative)."""
        if width_px <= 0:
            return self.clip_start_time
        delta = (pointer_x - self.pointer_start_x) / width_px * self.locked_time_scale
        return max(0.0, self.clip_start_time + delta)

    def applied(self, start_time: float) -> "DragSession":
        return replace(self, last_applied_start=start_time)
