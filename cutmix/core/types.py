"""
Type definitions for the CutMix core module.
Provides type aliases, protocols and small result types shared across modules.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Protocol
import numpy as np
from numpy.typing import NDArray

from .config import SPLIT_CONFIG
from .errors import InvalidInputError

if TYPE_CHECKING:
    from .segmenter import Segment

# Audio data types
AudioArray = NDArray[np.float32]  # Shape: (channels, frames)
MonoArray = NDArray[np.float32]   # Shape: (frames,)

# (suggested file name, encoded bytes)
NamedBlob = tuple[str, bytes]


class PreviewStream(Protocol):
    """The subset of ``sounddevice.OutputStream`` used for previews."""
    def start(self) -> None: ...
    def stop(self) -> None: ...
    def close(self) -> None: ...


class AudioBackend(Protocol):
    """Module-like provider of output streams (sounddevice in production)."""
    CallbackStop: type[Exception]

    def OutputStream(self, **kwargs: Any) -> PreviewStream: ...


@dataclass(frozen=True, slots=True)
class SplitOptions:
    """User-adjustable silence splitting parameters."""
    threshold_db: float = SPLIT_CONFIG.default_threshold_db
    min_silence_seconds: float = SPLIT_CONFIG.default_min_silence_seconds

    def validate(self) -> "SplitOptions":
        """Raise InvalidInputError if a value is outside its documented range."""
        cfg = SPLIT_CONFIG
        if not (cfg.min_threshold_db <= self.threshold_db <= cfg.max_threshold_db):
            raise InvalidInputError(
                f"threshold_db must be within [{cfg.min_threshold_db}, {cfg.max_threshold_db}], "
                f"got {self.threshold_db}"
            )
        if not (cfg.min_silence_floor_seconds < self.min_silence_seconds <= cfg.max_min_silence_seconds):
            raise InvalidInputError(
                f"min_silence_seconds must be within ({cfg.min_silence_floor_seconds}, "
                f"{cfg.max_min_silence_seconds}], got {self.min_silence_seconds}"
            )
        return self


class SplitResult:
    """Result from a split operation."""
    __slots__ = ('source_name', 'segments', 'parts')

    def __init__(
        self,
        source_name: str,
        segments: Optional[list["Segment"]] = None,
        parts: Optional[list[NamedBlob]] = None
    ):
        self.source_name = source_name
        self.segments = segments or []
        self.parts = parts or []

    @property
    def is_empty(self) -> bool:
        """True when the source held no non-silent audio worth splitting out."""
        return not self.parts

    def __len__(self) -> int:
        return len(self.parts)

    def __repr__(self) -> str:
        return f"SplitResult(source_name={self.source_name!r}, parts={len(self.parts)})"
