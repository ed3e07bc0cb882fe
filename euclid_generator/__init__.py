"""Euclid Generator library.

This package builds Euclidean rhythms and renders them as percussive audio.
A typical workflow calls :func:`generate` with a number of steps and pulses,
passes the resulting pattern to :func:`render` together with
:class:`AudioParams`, then hands the sample buffer to
:func:`euclid_generator.wav_io.write_wav`.

Underlying Algorithm
--------------------
Patterns come from the grouping form of the Bjorklund algorithm: hits and
rests start as single-symbol groups and the last rest is repeatedly paired
with earlier hits until no pair can be formed.  Synthesis produces one
decaying sine burst per render and sums it into a zeroed buffer at the start
of every hit step, using integer millisecond timing::

    pattern = generate(steps, pulses)
    drum = synth_drum(sample_rate, drum_length_ms, drum_freq_hz)
    for step, hit in enumerate(pattern):
        if hit:
            buffer[start(step):] += drum

Features include:
- Pure pattern generation and rendering with no shared state.
- WAV export through ``soundfile`` and MIDI export through ``mido``.
- A catalogue of named rhythms and a batch renderer using worker processes
  or an optional Celery queue.
- A command line interface with persisted defaults.
"""

__version__ = "0.1.0"

from .rhythm_engine import (  # noqa: F401
    InvalidSpec,
    RhythmSpec,
    density,
    format_pattern,
    generate,
    group_pattern,
)
from .synthesis import (  # noqa: F401
    AudioParams,
    InvalidParams,
    render,
    synth_drum,
    to_pcm16,
)
from .wav_io import AudioWriteError, write_wav  # noqa: F401
from .cli import main  # noqa: F401

__all__ = [
    "__version__",
    "InvalidSpec",
    "RhythmSpec",
    "generate",
    "group_pattern",
    "format_pattern",
    "density",
    "AudioParams",
    "InvalidParams",
    "render",
    "synth_drum",
    "to_pcm16",
    "AudioWriteError",
    "write_wav",
    "main",
]
