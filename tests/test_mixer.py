"""
Tests for offline mixdown.
"""
import math
import pytest
import numpy as np

from cutmix.core.buffer import SampleBuffer
from cutmix.core.clip import Clip
from cutmix.core.errors import EmptyResultError, InvalidInputError, RateMismatchError
from cutmix.core.mixer import mix
from cutmix.core.timeline import Timeline

from conftest import constant_buffer

SR = 44100


def placed(*clips):
    return Timeline(tuple(clips))


class TestMix:

    def test_overlapping_clips_sum(self):
        a = Clip(buffer=constant_buffer(0.25, 1.0), name="a", start_time=0.0)
        b = Clip(buffer=constant_buffer(0.5, 1.0), name="b", start_time=0.5)
        out = mix(placed(a, b), SR)

        assert out.channel_count == 2
        assert out.sample_rate == SR
        assert out.frame_count == math.ceil(1.5 * SR)
        for i in (0, SR // 4, SR // 2 - 1):
            assert out.data[0, i] == 0.25
        for i in (SR // 2, 3 * SR // 4, SR - 1):
            assert out.data[0, i] == 0.75
            assert out.data[1, i] == 0.75
        for i in (SR, SR + SR // 4, out.frame_count - 1):
            assert out.data[1, i] == 0.5

    def test_gap_is_silent(self):
        a = Clip(buffer=constant_buffer(0.3, 1.0), name="a", start_time=0.0)
        b = Clip(buffer=constant_buffer(0.3, 1.0), name="b", start_time=2.0)
        out = mix(placed(a, b), SR)
        assert out.frame_count == 3 * SR
        assert np.all(out.data[:, SR:2 * SR] == 0.0)

    def test_mono_feeds_both_channels(self):
        clip = Clip(buffer=constant_buffer(0.4, 0.5, channels=1), name="m")
        out = mix(placed(clip), SR)
        assert np.all(out.data[0] == out.data[1])
        assert out.data[0, 100] == pytest.approx(0.4)

    def test_extra_channels_truncated(self):
        data = np.stack([
            np.full(SR, 0.1), np.full(SR, 0.2), np.full(SR, 0.9), np.full(SR, 0.9)
        ]).astype(np.float32)
        clip = Clip(buffer=SampleBuffer(data, SR), name="quad")
        out = mix(placed(clip), SR)
        assert out.channel_count == 2
        assert out.data[0, 10] == pytest.approx(0.1)
        assert out.data[1, 10] == pytest.approx(0.2)

    def test_no_clipping_during_mix(self):
        a = Clip(buffer=constant_buffer(0.8, 1.0), name="a")
        b = Clip(buffer=constant_buffer(0.8, 1.0), name="b")
        out = mix(placed(a, b), SR)
        assert out.data[0, 0] == pytest.approx(1.6)

    def test_empty_timeline(self):
        with pytest.raises(EmptyResultError):
            mix(Timeline(), SR)

    def test_zero_channel_clip_rejected(self):
        clip = Clip(buffer=SampleBuffer(np.zeros((0, 0), dtype=np.float32), SR), name="blank")
        with pytest.raises(InvalidInputError):
            mix(placed(clip), SR)

    def test_zero_length_clip_rejected(self):
        good = Clip(buffer=constant_buffer(0.3, 1.0), name="a")
        blank = Clip(buffer=constant_buffer(0.3, 0.0), name="b", start_time=1.0)
        with pytest.raises(InvalidInputError):
            mix(placed(good, blank), SR)

    def test_rate_mismatch(self):
        clip = Clip(buffer=constant_buffer(0.1, 1.0, sr=48000), name="hi-res.wav")
        with pytest.raises(RateMismatchError) as exc_info:
            mix(placed(clip), SR)
        assert exc_info.value.clip_rate == 48000
        assert exc_info.value.output_rate == SR

    def test_offset_rounds_to_nearest_frame(self):
        clip = Clip(buffer=constant_buffer(1.0, 0.01, sr=1000), name="tick", start_time=0.0016)
        out = mix(placed(clip), 1000)
        # round(1.6) = 2
        assert out.data[0, 1] == 0.0
        assert out.data[0, 2] == 1.0
