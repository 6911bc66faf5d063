"""
Preview playback for CutMix.
Plays one buffer at a time through sounddevice; starting a preview always
stops the previous one first.
"""
from __future__ import annotations
import logging
import threading
from typing import Callable, Hashable, Optional
import numpy as np

from .buffer import SampleBuffer
from .config import AUDIO_CONFIG, PlaybackState
from .types import AudioBackend, PreviewStream

logger = logging.getLogger("CutMix")


def load_sounddevice() -> AudioBackend:
    """Default backend; sounddevice needs PortAudio, so import on first use."""
    import sounddevice as sd
    return sd


class PreviewPlayer:
    """
    Single-slot preview player.

    At most one stream exists at any time. ``play`` on the key that is
    already playing stops it instead (toggle behaviour).
    """
    __slots__ = (
        '_backend', '_stream', '_key', '_frame', '_lock',
        '_on_state_changed', '_state', '_disposed'
    )

    def __init__(
        self,
        backend: Optional[AudioBackend] = None,
        on_state_changed: Optional[Callable[[PlaybackState], None]] = None
    ) -> None:
        """
        Initialize preview player.

        Args:
            backend: Module-like object providing ``OutputStream`` and
                ``CallbackStop`` (defaults to sounddevice, loaded lazily)
            on_state_changed: Callback for state changes
        """
        self._backend = backend
        self._stream: Optional[PreviewStream] = None
        self._key: Optional[Hashable] = None
        self._frame: int = 0
        self._lock = threading.RLock()
        self._on_state_changed = on_state_changed
        self._state = PlaybackState.STOPPED
        self._disposed: bool = False

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def current_key(self) -> Optional[Hashable]:
        """Key of the buffer being previewed, or None."""
        return self._key

    def is_playing(self, key: Optional[Hashable] = None) -> bool:
        if key is None:
            return self._state == PlaybackState.PLAYING
        return self._state == PlaybackState.PLAYING and self._key == key

    def _set_state(self, state: PlaybackState) -> None:
        if self._state != state:
            self._state = state
            if self._on_state_changed and not self._disposed:
                self._on_state_changed(state)

    def play(self, key: Hashable, buffer: SampleBuffer) -> bool:
        """
        Preview ``buffer``, stopping whatever was playing.

        Returns:
            True if a new preview started, False if this call toggled the
            same key off or the buffer is empty
        """
        with self._lock:
            if self._disposed:
                return False

            toggling_off = self.is_playing(key)
            self.stop()
            if toggling_off or buffer.frame_count == 0:
                return False

            frames = np.ascontiguousarray(buffer.to_frames())
            self._frame = 0
            stream_ref: list[PreviewStream] = []
            if self._backend is None:
                self._backend = load_sounddevice()
            stop_exc = self._backend.CallbackStop

            def playback_callback(outdata, frame_count, time, status) -> None:
                """Real-time audio callback."""
                start = self._frame
                chunk = frames[start:start + frame_count]
                outdata.fill(0)
                outdata[:len(chunk)] = chunk
                self._frame = start + frame_count
                if self._frame >= len(frames):
                    raise stop_exc()

            def on_finished() -> None:
                # A held lock means stop() or play() already owns the slot
                if not self._lock.acquire(blocking=False):
                    return
                try:
                    if stream_ref and self._stream is stream_ref[0]:
                        self._stream = None
                        self._key = None
                        self._set_state(PlaybackState.STOPPED)
                finally:
                    self._lock.release()

            try:
                stream = self._backend.OutputStream(
                    samplerate=buffer.sample_rate,
                    channels=buffer.channel_count,
                    dtype='float32',
                    blocksize=AUDIO_CONFIG.preview_blocksize,
                    callback=playback_callback,
                    finished_callback=on_finished,
                )
                stream_ref.append(stream)
                self._stream = stream
                self._key = key
                stream.start()
            except Exception as e:
                logger.error("Failed to start preview: %s", e, exc_info=True)
                self._stream = None
                self._key = None
                self._set_state(PlaybackState.STOPPED)
                raise

            self._set_state(PlaybackState.PLAYING)
            logger.info("Preview started: %s", key)
            return True

    def stop(self) -> None:
        """Stop the active preview, if any."""
        with self._lock:
            stream, self._stream = self._stream, None
            self._key = None
            if stream is not None:
                try:
                    stream.stop()
                    stream.close()
                except Exception as e:
                    logger.warning("Error stopping stream: %s", e)
            self._set_state(PlaybackState.STOPPED)

    def cleanup(self) -> None:
        """Clean up resources."""
        self.stop()
        self._disposed = True
        self._on_state_changed = None
