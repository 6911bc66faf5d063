"""
Exception types raised by the CutMix core.
"""


class CutMixError(Exception):
    """Base class for all CutMix errors."""


class InvalidInputError(CutMixError, ValueError):
    """Input buffer, clip id or option value is outside what an operation accepts."""


class RateMismatchError(InvalidInputError):
    """A clip's sample rate differs from the mixer's output rate."""

    def __init__(self, clip_name: str, clip_rate: int, output_rate: int):
        super().__init__(
            f"Clip '{clip_name}' is {clip_rate} Hz but the mix renders at {output_rate} Hz"
        )
        self.clip_name = clip_name
        self.clip_rate = clip_rate
        self.output_rate = output_rate


class EmptyResultError(CutMixError):
    """The operation has nothing to produce (e.g. mixing an empty timeline)."""


class DecodeError(CutMixError):
    """An audio file could not be decoded."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not decode {path}: {reason}")
        self.path = path
        self.reason = reason
