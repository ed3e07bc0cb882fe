"""Unit tests for ``wav_io``.

The suite checks that rendered buffers land on disk as mono 16-bit PCM WAV
files, that missing directories are created and that write failures surface
as ``AudioWriteError``.
"""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest
import soundfile as sf

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from euclid_generator import wav_io  # noqa: E402  # isort:skip
from euclid_generator.rhythm_engine import generate  # noqa: E402
from euclid_generator.synthesis import AudioParams, render  # noqa: E402


def test_write_wav_header_and_frames(tmp_path):
    """The file should be mono 16-bit PCM with one frame per sample."""
    params = AudioParams(sample_rate=8000, bpm=120)
    buf = render(generate(8, 3), params)
    out = wav_io.write_wav(buf, tmp_path / "nested" / "euclid.wav", params.sample_rate)

    assert out.is_file()
    info = sf.info(str(out))
    assert info.samplerate == 8000
    assert info.channels == 1
    assert info.subtype == "PCM_16"
    assert info.frames == len(buf)


def test_write_wav_round_trips_samples(tmp_path):
    """Samples read back as ``int16`` should equal the rendered buffer."""
    params = AudioParams(sample_rate=8000, bpm=240)
    buf = render(generate(5, 2), params)
    out = wav_io.write_wav(buf, tmp_path / "five_two.wav", params.sample_rate)
    data, rate = sf.read(str(out), dtype="int16")
    assert rate == 8000
    assert np.array_equal(data, buf.astype(np.int16))


def test_write_wav_wraps_out_of_range(tmp_path):
    """Out-of-range sums are stored with 16-bit wrap-around."""
    out = wav_io.write_wav(np.array([40000, -40000, 5]), tmp_path / "wrap.wav", 8000)
    data, _ = sf.read(str(out), dtype="int16")
    assert data.tolist() == [40000 - 65536, -40000 + 65536, 5]


def test_write_wav_rejects_bad_rate(tmp_path):
    """A non-positive sample rate is rejected before touching the disk."""
    with pytest.raises(ValueError):
        wav_io.write_wav([0, 0], tmp_path / "bad.wav", 0)
    assert not (tmp_path / "bad.wav").exists()


def test_write_wav_wraps_os_errors(monkeypatch, tmp_path):
    """Filesystem failures are reported as ``AudioWriteError``."""

    def _fail(*_a, **_k):
        raise OSError("disk full")

    monkeypatch.setattr(wav_io.sf, "write", _fail)
    with pytest.raises(wav_io.AudioWriteError) as exc:
        wav_io.write_wav([0, 1, 2], tmp_path / "out.wav", 8000)
    assert "disk full" in str(exc.value)


def test_summary_figures():
    """Duration and size helpers use the sample count."""
    buf = [0] * 44100
    assert wav_io.duration_seconds(buf, 44100) == pytest.approx(1.0)
    assert wav_io.file_size_kb(buf) == pytest.approx(44100 * 2 / 1024)
