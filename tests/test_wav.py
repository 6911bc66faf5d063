"""
Tests for 16-bit PCM WAV encoding.
"""
import io
import struct
import pytest
import numpy as np
import soundfile as sf

from cutmix.core import wav
from cutmix.core.buffer import SampleBuffer
from cutmix.core.errors import InvalidInputError


class TestHeader:

    def test_layout(self, sample_stereo_buffer):
        data = wav.encode(sample_stereo_buffer)
        frames = sample_stereo_buffer.frame_count
        fields = struct.unpack('<4sI4s4sIHHIIHH4sI', data[:44])
        assert fields == (
            b'RIFF', len(data) - 8, b'WAVE',
            b'fmt ', 16, 1, 2, 44100, 44100 * 2 * 2, 4, 16,
            b'data', frames * 2 * 2,
        )
        assert len(data) == 44 + frames * 4

    def test_mono_header(self):
        buf = SampleBuffer(np.zeros(10, dtype=np.float32), 8000)
        fields = struct.unpack('<4sI4s4sIHHIIHH4sI', wav.encode(buf)[:44])
        assert fields[6] == 1          # channels
        assert fields[8] == 16000      # byte rate
        assert fields[9] == 2          # block align
        assert fields[12] == 20        # data size


class TestQuantize:

    def test_asymmetric_full_scale(self):
        result = wav.quantize(np.array([-1.0, 1.0, 0.0], dtype=np.float32))
        assert result.tolist() == [-32768, 32767, 0]

    def test_clamps_out_of_range(self):
        result = wav.quantize(np.array([-3.0, 2.5], dtype=np.float32))
        assert result.tolist() == [-32768, 32767]

    def test_truncates_toward_zero(self):
        result = wav.quantize(np.array([0.5, -0.5, 0.25], dtype=np.float64))
        # 0.5 * 32767 = 16383.5 ; -0.5 * 32768 = -16384 ; 0.25 * 32767 = 8191.75
        assert result.tolist() == [16383, -16384, 8191]

    def test_dtype_is_little_endian_int16(self):
        assert wav.quantize(np.zeros(3)).dtype == np.dtype('<i2')


class TestEncode:

    def test_interleaving_is_frame_major(self):
        left = np.array([1.0, 0.0], dtype=np.float32)
        right = np.array([-1.0, 0.5], dtype=np.float32)
        data = wav.encode(SampleBuffer(np.vstack((left, right)), 8000))
        samples = np.frombuffer(data[44:], dtype='<i2').tolist()
        assert samples == [32767, -32768, 0, 16383]

    def test_round_trip_within_one_step(self, sample_stereo_buffer):
        data = wav.encode(sample_stereo_buffer)
        decoded, sr = sf.read(io.BytesIO(data), dtype='int16', always_2d=True)
        assert sr == sample_stereo_buffer.sample_rate
        original = sample_stereo_buffer.to_frames()
        restored = np.where(decoded < 0, decoded / 32768.0, decoded / 32767.0)
        assert decoded.shape == original.shape
        assert np.max(np.abs(restored - original)) <= 1 / 32767

    def test_empty_buffer_rejected(self):
        with pytest.raises(InvalidInputError):
            wav.encode(SampleBuffer(np.zeros((2, 0), dtype=np.float32), 44100))

    def test_zero_channels_rejected(self):
        with pytest.raises(InvalidInputError):
            wav.encode(SampleBuffer(np.zeros((0, 0), dtype=np.float32), 44100))
