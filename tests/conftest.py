"""
Pytest configuration and fixtures for CutMix tests.
"""
import pytest
import numpy as np
import soundfile as sf

from cutmix.core.buffer import SampleBuffer
from cutmix.core.clip import Clip
from cutmix.core.config import AUDIO_CONFIG
from cutmix.core.project import Project


def constant_buffer(value: float, seconds: float, channels: int = 2,
                    sr: int = AUDIO_CONFIG.default_samplerate) -> SampleBuffer:
    frames = int(round(seconds * sr))
    return SampleBuffer(np.full((channels, frames), value, dtype=np.float32), sr)


class FakeStream:
    """Stands in for sounddevice.OutputStream."""

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.started = False
        self.stopped = False
        self.closed = False

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True

    def close(self):
        self.closed = True

    def finish(self):
        self.kwargs['finished_callback']()


class FakeBackend:
    """Module-like backend that records every stream it creates."""

    class CallbackStop(Exception):
        pass

    def __init__(self):
        self.streams = []

    def OutputStream(self, **kwargs):
        stream = FakeStream(**kwargs)
        self.streams.append(stream)
        return stream


@pytest.fixture
def sample_mono_audio() -> np.ndarray:
    """Generate 1 second of mono sine wave audio."""
    sr = AUDIO_CONFIG.default_samplerate
    t = np.linspace(0, 1, sr, dtype=np.float32)
    return (0.5 * np.sin(2 * np.pi * 440 * t)).astype(np.float32)


@pytest.fixture
def sample_stereo_buffer() -> SampleBuffer:
    """1 second of stereo sine wave audio."""
    sr = AUDIO_CONFIG.default_samplerate
    t = np.linspace(0, 1, sr, dtype=np.float32)
    left = 0.5 * np.sin(2 * np.pi * 440 * t)
    right = 0.5 * np.sin(2 * np.pi * 880 * t)
    return SampleBuffer(np.vstack((left, right)), sr)


@pytest.fixture
def scenario_buffer() -> SampleBuffer:
    """8 Hz mono buffer: 4 loud, 6 silent, 6 loud frames."""
    pattern = [1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 1, 1, 1, 1, 1, 1]
    return SampleBuffer(np.array(pattern, dtype=np.float32), 8)


@pytest.fixture
def three_clips() -> list[Clip]:
    """Clips of 2.0s, 1.5s and 3.0s named so that they sort a, b, c."""
    return [
        Clip(buffer=constant_buffer(0.1, 2.0, channels=1, sr=1000), name="a.wav", id="a"),
        Clip(buffer=constant_buffer(0.1, 1.5, channels=1, sr=1000), name="b.wav", id="b"),
        Clip(buffer=constant_buffer(0.1, 3.0, channels=1, sr=1000), name="c.wav", id="c"),
    ]


@pytest.fixture
def empty_project() -> Project:
    """Create an empty project."""
    return Project(name="Test Project")


@pytest.fixture
def project_with_clips(three_clips) -> Project:
    project = Project(name="Test Project", samplerate=1000)
    project.add_clips(three_clips)
    return project


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def wav_file(tmp_path, sample_stereo_buffer):
    """Write the stereo fixture to disk as 16-bit WAV."""
    path = tmp_path / "tone.wav"
    sf.write(str(path), sample_stereo_buffer.to_frames(), sample_stereo_buffer.sample_rate, subtype='PCM_16')
    return path
