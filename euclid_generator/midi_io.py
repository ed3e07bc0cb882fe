"""Utilities for exporting rhythm patterns as MIDI clips.

A pattern becomes a single percussion track: every hit is a short
``note_on``/``note_off`` pair on the General MIDI drum channel and every rest
simply advances time.  One pattern step lasts one beat, matching the audio
renderer, so a clip imported into a sequencer lines up with the WAV output.

Example
-------
>>> from euclid_generator import generate
>>> from euclid_generator import midi_io
>>> midi_io.create_midi_file(generate(8, 3), 120, "tresillo.mid")
MidiFile(...)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Sequence, Union

if TYPE_CHECKING:
    # ``MidiFile`` is only needed for type checking to avoid requiring the
    # dependency at import time.
    from mido import MidiFile

__all__ = ["create_midi_file", "DRUM_CHANNEL", "BASS_DRUM"]


logger = logging.getLogger(__name__)

# Channels are zero-based in the MIDI specification, so ``9`` is the
# percussion channel performers call "channel 10".
DRUM_CHANNEL = 9

# General MIDI "Bass Drum 1".
BASS_DRUM = 36

TICKS_PER_BEAT = 480


def create_midi_file(
    pattern: Sequence[bool],
    bpm: int,
    output_file: Union[str, Path],
    *,
    note: int = BASS_DRUM,
    velocity: int = 100,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> "MidiFile":
    """Write ``pattern`` to ``output_file`` as a one-track MIDI file.

    The parent directory of ``output_file`` is created automatically. Each
    hit sounds for a sixteenth of a beat; the remaining ticks of the step and
    any following rests are carried as delta time to the next event, and a
    trailing rest run is kept by delaying the end-of-track marker.

    Returns
    -------
    MidiFile
        In-memory representation of the written file.

    Raises
    ------
    ValueError
        If ``bpm`` is not positive, ``pattern`` is empty or ``note`` or
        ``velocity`` fall outside ``0-127``.
    """
    try:
        import mido
        from mido import Message, MetaMessage, MidiFile, MidiTrack
    except ModuleNotFoundError as exc:
        raise ImportError(
            "mido is required to create MIDI files; install it with 'pip install mido'"
        ) from exc

    if bpm <= 0:
        raise ValueError("bpm must be a positive integer")
    if not pattern:
        raise ValueError("pattern must not be empty")
    if not 0 <= note <= 127:
        raise ValueError("note must be between 0 and 127")
    if not 0 <= velocity <= 127:
        raise ValueError("velocity must be between 0 and 127")

    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)
    track.append(MetaMessage("set_tempo", tempo=mido.bpm2tempo(bpm)))

    gate = max(1, ticks_per_beat // 16)
    pending = 0
    hits = 0
    for hit in pattern:
        if not hit:
            pending += ticks_per_beat
            continue
        track.append(
            Message("note_on", note=note, velocity=velocity, time=pending, channel=DRUM_CHANNEL)
        )
        track.append(
            Message("note_off", note=note, velocity=0, time=gate, channel=DRUM_CHANNEL)
        )
        pending = ticks_per_beat - gate
        hits += 1
    track.append(MetaMessage("end_of_track", time=pending))

    path = Path(output_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    mid.save(str(path))
    logger.debug("Wrote %d hits over %d steps to %s", hits, len(pattern), path)
    return mid
