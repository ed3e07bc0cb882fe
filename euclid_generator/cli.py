"""Command line helpers for Euclid Generator.

This module implements the console entry point for the project. ``main``
parses one of four sub-commands:

``generate``
    Render a single rhythm to a WAV file (and optionally a MIDI clip).
``demo``
    Print the catalogue of named world-music rhythms.
``examples``
    Render the standard collection of named rhythms into a directory.
``clean``
    Remove generated WAV files from a directory.

Defaults for ``generate`` may be stored in a JSON settings file. The path is
taken from ``--settings-file``, then the ``EUCLID_SETTINGS_FILE`` environment
variable, then ``~/.euclid_generator_settings.json``. Unknown keys are ignored.

Example
-------
Running ``python -m euclid_generator generate --steps 8 --pulses 3 --bpm 100 \
    --output tresillo.wav`` writes an 8-step rhythm with three hits to
``tresillo.wav``.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .batch_generation import default_collection, generate_collection
from .demo import demo_text
from .rhythm_engine import InvalidSpec, format_pattern, generate
from .synthesis import BIT_DEPTH, AudioParams, InvalidParams, render
from .wav_io import AudioWriteError, duration_seconds, file_size_kb, write_wav

__all__ = ["main", "build_parser", "load_settings", "save_settings", "DEFAULTS"]


logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "EUCLID_SETTINGS_FILE"

# Defaults for ``generate``; a settings file may override any of these keys.
DEFAULTS: Dict[str, Any] = {
    "steps": 16,
    "pulses": 6,
    "bpm": 120,
    "sample_rate": 44100,
    "drum_length_ms": 80.0,
    "drum_freq_hz": 180.0,
    "output": "euclid.wav",
}


def default_settings_path() -> Path:
    """Return the settings file location, honouring ``EUCLID_SETTINGS_FILE``."""

    env_path = os.environ.get(SETTINGS_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".euclid_generator_settings.json"


def _matches_default_type(value: Any, default: Any) -> bool:
    """Return ``True`` when ``value`` may replace ``default`` as a CLI default."""

    if isinstance(value, bool):
        return False
    if isinstance(default, float):
        return isinstance(value, (int, float))
    return isinstance(value, type(default))


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load saved defaults from ``path`` if it exists.

    Unreadable or malformed files are logged and treated as empty, and values
    of the wrong type are logged and dropped, so a broken settings file never
    prevents rendering.
    """

    path = path or default_settings_path()
    if not path.is_file():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as exc:
        logger.error("Could not load settings: %s", exc)
        return {}
    if not isinstance(data, dict):
        logger.error("Settings file %s must contain a JSON object", path)
        return {}
    settings: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in DEFAULTS:
            continue
        if not _matches_default_type(value, DEFAULTS[key]):
            logger.error(
                "Ignoring setting %s=%r: expected %s", key, value, type(DEFAULTS[key]).__name__
            )
            continue
        settings[key] = value
    return settings


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """Save ``settings`` to ``path`` as JSON; failures are logged only."""

    path = path or default_settings_path()
    try:
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(settings, fh, indent=2)
    except OSError as exc:
        logger.error("Could not save settings: %s", exc)


def build_parser(defaults: Dict[str, Any]) -> argparse.ArgumentParser:
    """Return the argument parser with ``defaults`` applied to ``generate``."""

    parser = argparse.ArgumentParser(
        prog="euclid-generator",
        description="Generate Euclidean rhythms and render them as WAV audio.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--settings-file", type=str, help="JSON file with default generate options")
    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser("generate", help="Render one rhythm to a WAV file")
    gen.add_argument("--steps", type=int, default=defaults["steps"], help="Number of time steps in the pattern")
    gen.add_argument("--pulses", type=int, default=defaults["pulses"], help="Number of drum hits to distribute")
    gen.add_argument("--bpm", type=int, default=defaults["bpm"], help="Beats per minute (one step per beat)")
    gen.add_argument("--sample-rate", type=int, default=defaults["sample_rate"], help="Output sample rate in Hz")
    gen.add_argument("--drum-length", type=float, default=defaults["drum_length_ms"], help="Drum hit length in milliseconds")
    gen.add_argument("--drum-freq", type=float, default=defaults["drum_freq_hz"], help="Drum frequency in Hz")
    gen.add_argument("--output", type=str, default=defaults["output"], help="Output WAV file path")
    gen.add_argument("--midi", type=str, help="Also write the pattern as a MIDI file")
    gen.add_argument("--save-settings", action="store_true", help="Store these options as the new defaults")

    sub.add_parser("demo", help="Show famous Euclidean rhythms")

    ex = sub.add_parser("examples", help="Render a collection of named rhythms")
    ex.add_argument("--output-dir", type=str, default="examples", help="Directory for the WAV files")
    ex.add_argument("--workers", type=int, default=1, help="Worker processes used for rendering")

    clean = sub.add_parser("clean", help="Remove generated WAV files")
    clean.add_argument("--output-dir", type=str, default="examples", help="Directory to clean")
    clean.add_argument("--output", type=str, default=defaults["output"], help="Single WAV file to remove")
    return parser


def _run_generate(args: argparse.Namespace) -> None:
    try:
        params = AudioParams(
            sample_rate=args.sample_rate,
            bpm=args.bpm,
            drum_length_ms=args.drum_length,
            drum_freq_hz=args.drum_freq,
        )
        pattern = generate(args.steps, args.pulses)
    except (InvalidSpec, InvalidParams) as exc:
        logger.error(str(exc))
        sys.exit(1)

    print("=== Euclidean Rhythm Generator ===")
    print(f"Generating pattern: {args.steps} steps, {args.pulses} pulses")
    print(f"Tempo: {params.bpm} BPM")
    print(f"Audio: {params.sample_rate} Hz, {BIT_DEPTH}-bit")
    print(f"Pattern: {format_pattern(pattern)} (X=hit, .=rest)")

    buffer = render(pattern, params)
    try:
        write_wav(buffer, args.output, params.sample_rate)
    except AudioWriteError as exc:
        logger.error(str(exc))
        sys.exit(1)

    if args.midi:
        from . import midi_io

        try:
            midi_io.create_midi_file(pattern, params.bpm, args.midi)
        except OSError as exc:
            logger.error("Could not write MIDI file: %s", exc)
            sys.exit(1)

    if args.save_settings:
        settings_path = Path(args.settings_file).expanduser() if args.settings_file else None
        save_settings(
            {
                "steps": args.steps,
                "pulses": args.pulses,
                "bpm": params.bpm,
                "sample_rate": params.sample_rate,
                "drum_length_ms": params.drum_length_ms,
                "drum_freq_hz": params.drum_freq_hz,
                "output": args.output,
            },
            settings_path,
        )

    print(f"Generated '{args.output}' with Euclidean rhythm!")
    print(f"Duration: {duration_seconds(buffer, params.sample_rate):.1f} seconds")
    print(f"File size: {file_size_kb(buffer):.1f} KB")


def _run_examples(args: argparse.Namespace) -> None:
    if args.workers <= 0:
        logger.error("Workers must be a positive integer.")
        sys.exit(1)
    configs = default_collection(args.output_dir)
    print("EUCLIDEAN RHYTHM COLLECTION GENERATOR")
    print("=====================================")
    lines = generate_collection(configs, workers=args.workers)
    for line in lines:
        print(line)
    print(f"\nGenerated {len(lines)} rhythm examples in '{args.output_dir}/' directory")


def _run_clean(args: argparse.Namespace) -> None:
    removed: List[Path] = []
    targets = [Path(args.output)]
    out_dir = Path(args.output_dir)
    if out_dir.is_dir():
        targets.extend(sorted(out_dir.glob("*.wav")))
    for path in targets:
        if path.is_file():
            path.unlink()
            removed.append(path)
    if out_dir.is_dir() and not any(out_dir.iterdir()):
        out_dir.rmdir()
    logger.info("Removed %d generated files", len(removed))


def main(argv: Optional[List[str]] = None) -> None:
    """Parse ``argv`` (defaults to ``sys.argv[1:]``) and run a sub-command."""

    argv = sys.argv[1:] if argv is None else argv

    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("-v", "--verbose", action="store_true")
    pre_parser.add_argument("--settings-file", type=str)
    pre_args, _ = pre_parser.parse_known_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if pre_args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    settings_path = Path(pre_args.settings_file).expanduser() if pre_args.settings_file else None
    defaults = dict(DEFAULTS)
    defaults.update(load_settings(settings_path))

    parser = build_parser(defaults)
    args = parser.parse_args(argv)

    if args.command == "generate":
        _run_generate(args)
    elif args.command == "demo":
        print(demo_text())
    elif args.command == "examples":
        _run_examples(args)
    elif args.command == "clean":
        _run_clean(args)
    else:
        parser.print_help()
