"""
Audio file decoding for CutMix.
Wraps soundfile (native rate) and librosa (resampled) behind one object that
callers pass to whatever needs to decode, instead of a global decoder.
"""
from __future__ import annotations
import logging
from typing import Optional
import numpy as np
import soundfile as sf

from .buffer import SampleBuffer
from .errors import DecodeError

logger = logging.getLogger("CutMix")


class AudioLoader:
    """
    Decodes audio files into SampleBuffers.

    When ``target_rate`` is set, files at any other rate are resampled on
    load so that they can be mixed without further conversion.
    """
    __slots__ = ('target_rate',)

    def __init__(self, target_rate: Optional[int] = None) -> None:
        self.target_rate = target_rate

    def load(self, path: str) -> SampleBuffer:
        """
        Decode one file.

        Raises:
            DecodeError: If the file is missing or cannot be decoded
        """
        logger.info("Loading file: %s", path)
        try:
            native_rate = sf.info(path).samplerate
            if self.target_rate is None or native_rate == self.target_rate:
                data, samplerate = sf.read(path, dtype='float32', always_2d=True)
                return SampleBuffer.from_frames(data, samplerate)
            return self._load_resampled(path)
        except (OSError, RuntimeError) as e:
            raise DecodeError(path, str(e)) from e

    def _load_resampled(self, path: str) -> SampleBuffer:
        import librosa

        logger.debug("Resampling %s to %d Hz", path, self.target_rate)
        data, samplerate = librosa.load(path, sr=self.target_rate, mono=False)
        # librosa returns (channels, frames) for multichannel input, (frames,) for mono
        return SampleBuffer(np.asarray(data, dtype=np.float32), samplerate)
