"""
Centralized configuration for CutMix.
All magic numbers and default settings in one place.
"""
from dataclasses import dataclass
from enum import Enum, auto


class PlaybackState(Enum):
    """Preview playback state enumeration."""
    STOPPED = auto()
    PLAYING = auto()


@dataclass(frozen=True, slots=True)
class AudioConfig:
    """Audio rendering configuration."""
    default_samplerate: int = 44100
    output_channels: int = 2
    sample_width_bytes: int = 2  # 16-bit PCM
    preview_blocksize: int = 4096


@dataclass(frozen=True, slots=True)
class SplitConfig:
    """Silence splitting defaults and accepted ranges."""
    default_threshold_db: float = -30.0
    min_threshold_db: float = -60.0
    max_threshold_db: float = 0.0

    default_min_silence_seconds: float = 0.5
    min_silence_floor_seconds: float = 0.1  # exclusive
    max_min_silence_seconds: float = 5.0

    min_segment_seconds: float = 0.1


@dataclass(frozen=True, slots=True)
class TimelineConfig:
    """Timeline layout and cosmetic settings."""
    colors: tuple[str, ...] = (
        "#FF6B6B", "#4ECDC4", "#FFE66D", "#FF9F43", "#54A0FF", "#5F27CD",
    )
    view_padding_factor: float = 1.1
    empty_view_seconds: float = 10.0


# Global config instances (immutable singletons)
AUDIO_CONFIG = AudioConfig()
SPLIT_CONFIG = SplitConfig()
TIMELINE_CONFIG = TimelineConfig()
