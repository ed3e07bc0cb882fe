"""WAV container output for rendered sample buffers.

Buffers produced by :func:`euclid_generator.synthesis.render` are written as
mono, 16-bit signed little-endian PCM inside a standard RIFF/WAVE container.
Encoding is delegated to ``soundfile`` (libsndfile); this module only converts
the integer samples to 16-bit and prepares the destination path.

Example
-------
>>> from euclid_generator import generate, render, AudioParams
>>> from euclid_generator.wav_io import write_wav
>>> params = AudioParams()
>>> write_wav(render(generate(16, 6), params), "euclid.wav", params.sample_rate)
PosixPath('euclid.wav')
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence, Union

import soundfile as sf

from .synthesis import BIT_DEPTH, NUM_CHANNELS, to_pcm16

__all__ = ["AudioWriteError", "write_wav", "duration_seconds", "file_size_kb"]


logger = logging.getLogger(__name__)

# libsndfile subtype matching ``BIT_DEPTH``.
PCM_SUBTYPE = "PCM_16"


class AudioWriteError(RuntimeError):
    """Raised when a WAV file cannot be written."""


def write_wav(
    buffer: Sequence[int],
    output_file: Union[str, Path],
    sample_rate: int,
) -> Path:
    """Write ``buffer`` to ``output_file`` as a mono 16-bit WAV.

    The parent directory is created when missing.  Samples outside the
    16-bit range wrap around as described in
    :func:`euclid_generator.synthesis.to_pcm16`.

    Returns
    -------
    Path
        Location of the written file.

    Raises
    ------
    ValueError
        If ``sample_rate`` is not positive.
    AudioWriteError
        If the directory or file cannot be created, or libsndfile rejects
        the data.
    """

    if sample_rate <= 0:
        raise ValueError("sample_rate must be a positive integer")

    path = Path(output_file)
    data = to_pcm16(buffer)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        sf.write(str(path), data, sample_rate, subtype=PCM_SUBTYPE, format="WAV")
    except (OSError, RuntimeError) as exc:
        # ``soundfile`` reports libsndfile failures as ``RuntimeError``
        # subclasses while filesystem problems surface as ``OSError``.
        raise AudioWriteError(f"Could not write WAV file {path}: {exc}") from exc

    logger.debug(
        "Wrote %d frames (%d-bit, %d channel) at %d Hz to %s",
        len(data),
        BIT_DEPTH,
        NUM_CHANNELS,
        sample_rate,
        path,
    )
    return path


def duration_seconds(buffer: Sequence[int], sample_rate: int) -> float:
    """Return the playing time of ``buffer`` in seconds."""

    return len(buffer) / sample_rate


def file_size_kb(buffer: Sequence[int]) -> float:
    """Return the size of the PCM payload in kilobytes (two bytes per sample)."""

    return len(buffer) * (BIT_DEPTH // 8) / 1024
