"""
CutMix Core Module

This module contains the core audio processing logic:
- SampleBuffer: Immutable decoded audio
- segmenter: Silence-based splitting
- timeline: Non-overlapping clip layout (push resolution)
- mixer: Offline stereo mixdown
- wav: 16-bit PCM WAV encoding
- Project: Thread-safe assembly session with drag handling
- PreviewPlayer: Single-slot preview playback
"""
from .buffer import SampleBuffer
from .clip import Clip
from .config import (
    AUDIO_CONFIG,
    SPLIT_CONFIG,
    TIMELINE_CONFIG,
    PlaybackState
)
from .drag import DragSession
from .errors import (
    CutMixError,
    DecodeError,
    EmptyResultError,
    InvalidInputError,
    RateMismatchError
)
from .loader import AudioLoader
from .playback import PreviewPlayer
from .project import Project
from .segmenter import Segment
from .timeline import Timeline
from .types import SplitOptions, SplitResult
from . import mixer
from . import pipeline
from . import segmenter
from . import timeline
from . import wav

__all__ = [
    # Main classes
    'SampleBuffer',
    'Clip',
    'Segment',
    'Timeline',
    'Project',
    'DragSession',
    'AudioLoader',
    'PreviewPlayer',
    'SplitOptions',
    'SplitResult',
    # Errors
    'CutMixError',
    'DecodeError',
    'EmptyResultError',
    'InvalidInputError',
    'RateMismatchError',
    # Config
    'AUDIO_CONFIG',
    'SPLIT_CONFIG',
    'TIMELINE_CONFIG',
    'PlaybackState',
    # Submodules
    'mixer',
    'pipeline',
    'segmenter',
    'timeline',
    'wav',
]
