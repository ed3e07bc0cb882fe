"""Drum synthesis and timeline mixing.

The engine turns a boolean rhythm pattern into a mono sample buffer.  One
percussive tone burst is synthesised per render and summed into a zeroed
buffer at the start of every hit step.

Timing uses integer arithmetic throughout::

    beat_ms      = 60000 // bpm
    total        = sample_rate * steps * beat_ms // 1000
    start(step)  = step * sample_rate * beat_ms // 1000

so tempos that do not divide a minute evenly are truncated rather than
rounded.  Bursts that overlap are added without clamping; values outside the
16-bit range survive in the returned buffer and are only wrapped when
converted with :func:`to_pcm16`.

Example
-------
>>> from euclid_generator import generate
>>> from euclid_generator.synthesis import AudioParams, render
>>> buf = render(generate(8, 3), AudioParams(sample_rate=8000, bpm=120))
>>> len(buf)
32000
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Sequence

import numpy as np

__all__ = [
    "InvalidParams",
    "AudioParams",
    "PCM_MAX",
    "BIT_DEPTH",
    "NUM_CHANNELS",
    "beat_duration_ms",
    "synth_drum",
    "render",
    "to_pcm16",
]


logger = logging.getLogger(__name__)

# Largest positive 16-bit sample; the synthesiser scales its [-0.5, 0.5]
# waveform by this value.
PCM_MAX = 32767
BIT_DEPTH = 16
NUM_CHANNELS = 1

# Peak amplitude and exponential decay rate of every drum hit.
DRUM_PEAK = 0.5
DRUM_DECAY = -4


class InvalidParams(ValueError):
    """Raised when audio parameters cannot produce a valid render."""


def _is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class AudioParams:
    """Tempo and synthesis settings for :func:`render`.

    Parameters
    ----------
    sample_rate:
        Output sample rate in Hz.
    bpm:
        Tempo in beats per minute. Each pattern step lasts one beat.
    drum_length_ms:
        Duration of a single drum hit in milliseconds.
    drum_freq_hz:
        Fundamental frequency of the drum tone.
    """

    sample_rate: int = 44100
    bpm: int = 120
    drum_length_ms: float = 80
    drum_freq_hz: float = 180.0

    def __post_init__(self) -> None:
        if not _is_integer(self.sample_rate) or self.sample_rate <= 0:
            raise InvalidParams("sample_rate must be a positive integer")
        if not _is_integer(self.bpm) or self.bpm <= 0:
            raise InvalidParams("bpm must be a positive integer")
        if self.drum_length_ms <= 0:
            raise InvalidParams("drum_length_ms must be positive")
        if self.drum_freq_hz <= 0:
            raise InvalidParams("drum_freq_hz must be positive")

    @property
    def beat_ms(self) -> int:
        """Milliseconds per beat, truncated to an integer."""

        return beat_duration_ms(self.bpm)

    @property
    def samples_per_beat(self) -> int:
        return self.sample_rate * self.beat_ms // 1000

    @property
    def burst_length(self) -> int:
        """Number of samples in one synthesised drum hit."""

        return int(self.sample_rate * self.drum_length_ms // 1000)

    def total_samples(self, steps: int) -> int:
        """Return the buffer length for a pattern of ``steps`` beats."""

        return self.sample_rate * steps * self.beat_ms // 1000

    def step_offset(self, step: int) -> int:
        """Return the first sample index of ``step``."""

        return step * self.sample_rate * self.beat_ms // 1000


def beat_duration_ms(bpm: int) -> int:
    """Return ``60000 // bpm`` after validating ``bpm``."""

    if bpm <= 0:
        raise InvalidParams("bpm must be a positive integer")
    return 60000 // bpm


def synth_drum(sample_rate: int, length_ms: float, freq: float) -> np.ndarray:
    """Return one decaying sine burst as 16-bit scaled integers.

    Sample ``i`` of the ``N`` sample burst is::

        trunc(0.5 * exp(-4 * i / N) * 32767 * sin(2 * pi * freq * i / sample_rate))

    The returned array is marked read-only because a single burst is shared
    by every hit of a render.

    Raises
    ------
    InvalidParams
        If ``sample_rate`` is not positive.
    """

    if sample_rate <= 0:
        raise InvalidParams("sample_rate must be a positive integer")
    n = int(sample_rate * length_ms // 1000)
    if n <= 0:
        burst = np.zeros(0, dtype=np.int64)
        burst.setflags(write=False)
        return burst

    idx = np.arange(n, dtype=np.float64)
    amp = DRUM_PEAK * np.exp(DRUM_DECAY * idx / n)
    phase = 2 * math.pi * freq * idx / sample_rate
    # ``astype`` truncates toward zero, matching an integer cast of each sample.
    burst = (amp * PCM_MAX * np.sin(phase)).astype(np.int64)
    burst.setflags(write=False)
    return burst


def render(pattern: Sequence[bool], params: AudioParams) -> np.ndarray:
    """Mix one drum hit onto every hit step of ``pattern``.

    Parameters
    ----------
    pattern:
        Hit/rest sequence, usually from :func:`euclid_generator.generate`.
    params:
        Tempo and synthesis settings.

    Returns
    -------
    numpy.ndarray
        ``int64`` samples of length ``params.total_samples(len(pattern))``.
        Overlapping hits are summed without clamping.
    """

    total = params.total_samples(len(pattern))
    out = np.zeros(total, dtype=np.int64)
    drum = synth_drum(params.sample_rate, params.drum_length_ms, params.drum_freq_hz)
    logger.debug(
        "Rendering %d steps at %d BPM: %d samples, %d-sample burst",
        len(pattern),
        params.bpm,
        total,
        len(drum),
    )

    hits = 0
    for step, hit in enumerate(pattern):
        if not hit:
            continue
        start = params.step_offset(step)
        if start >= total:
            continue
        # Only the tail of a burst is ever dropped.
        end = min(start + len(drum), total)
        out[start:end] += drum[: end - start]
        hits += 1
    logger.debug("Placed %d hits", hits)
    return out


def to_pcm16(buffer: Sequence[int]) -> np.ndarray:
    """Return ``buffer`` stored as 16-bit samples.

    Values outside ``[-32768, 32767]`` wrap around in two's complement, the
    way a 16-bit PCM encoder keeps only the low bytes of each sample.
    """

    return np.asarray(buffer, dtype=np.int64).astype(np.int16)
