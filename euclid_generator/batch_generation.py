"""Render collections of named rhythms to WAV files.

This module renders many rhythm configurations at once. Each render is a pure
function of its :class:`RhythmConfig`, so work can be fanned out to worker
processes via :class:`concurrent.futures.ProcessPoolExecutor` or queued on a
Celery worker when that optional dependency is installed. Parallel and serial
runs write identical files.

Example
-------
>>> from euclid_generator.batch_generation import default_collection, generate_collection
>>> generate_collection(default_collection("examples"), workers=2)
['Generated Cuban Tresillo: X.X.X... -> examples/cuban_tresillo.wav', ...]

Design Notes
------------
``generate_collection`` avoids custom process management and proxies each
config to :func:`render_config`. It raises ``ValueError`` if ``workers`` is
non-positive.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ProcessPoolExecutor
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .rhythm_engine import format_pattern, generate
from .synthesis import AudioParams, render
from .wav_io import AudioWriteError, write_wav

# Celery is optional; when it is unavailable the synchronous
# ``generate_collection`` helper remains the only entry point and callers
# attempting to use the asynchronous API receive a descriptive ``RuntimeError``.
try:  # pragma: no cover - Celery is not required for unit tests
    from celery import Celery
except Exception:  # pragma: no cover - optional dependency missing
    Celery = None  # type: ignore

__all__ = [
    "RhythmConfig",
    "COLLECTION_SAMPLE_RATE",
    "COLLECTION_DRUM_LENGTH_MS",
    "default_collection",
    "render_config",
    "generate_collection",
    "generate_collection_async",
]


logger = logging.getLogger(__name__)

# Every collection entry shares these synthesis settings; only tempo and
# pitch vary per rhythm.
COLLECTION_SAMPLE_RATE = 44100
COLLECTION_DRUM_LENGTH_MS = 80

_CELERY_TASK_NAME = "euclid_generator.batch_generation.generate_collection"


@dataclass(frozen=True)
class RhythmConfig:
    """Parameters for one rendered rhythm of a collection."""

    name: str
    steps: int
    pulses: int
    bpm: int
    drum_freq_hz: float
    output_file: str

    def audio_params(self) -> AudioParams:
        return AudioParams(
            sample_rate=COLLECTION_SAMPLE_RATE,
            bpm=self.bpm,
            drum_length_ms=COLLECTION_DRUM_LENGTH_MS,
            drum_freq_hz=self.drum_freq_hz,
        )


def default_collection(output_dir: Union[str, Path] = "examples") -> List[RhythmConfig]:
    """Return the standard set of named rhythms written under ``output_dir``."""

    out = Path(output_dir)
    return [
        RhythmConfig("Cuban Tresillo", 8, 3, 120, 180.0, str(out / "cuban_tresillo.wav")),
        RhythmConfig("Turkish Aksak", 8, 5, 100, 200.0, str(out / "turkish_aksak.wav")),
        RhythmConfig("West African", 12, 5, 110, 160.0, str(out / "west_african.wav")),
        RhythmConfig("Bossa Nova", 16, 6, 120, 180.0, str(out / "bossa_nova.wav")),
        RhythmConfig("Minimalist", 5, 2, 90, 220.0, str(out / "minimalist.wav")),
    ]


def render_config(config: RhythmConfig) -> str:
    """Render ``config`` to its WAV file and return a one-line summary.

    Raises
    ------
    InvalidSpec, InvalidParams
        If the rhythm or tempo settings are invalid.
    AudioWriteError
        If the file cannot be written.
    """

    params = config.audio_params()
    pattern = generate(config.steps, config.pulses)
    buffer = render(pattern, params)
    write_wav(buffer, config.output_file, params.sample_rate)
    return f"Generated {config.name}: {format_pattern(pattern)} -> {config.output_file}"


def _collect(name: str, produce: Callable[[], str]) -> Optional[str]:
    """Return ``produce()``, logging a failed render of ``name`` instead of raising."""

    try:
        return produce()
    except (AudioWriteError, ValueError) as exc:
        logger.error("Error generating %s: %s", name, exc)
        return None


def generate_collection(
    configs: Iterable[RhythmConfig], *, workers: Optional[int] = None
) -> List[str]:
    """Render every config, optionally in parallel.

    A rhythm that cannot be rendered or written is logged and skipped; the
    remaining rhythms are still produced.

    Parameters
    ----------
    configs:
        Rhythms to render.
    workers:
        Optional number of worker processes. When ``None`` the CPU count is
        used. ``1`` disables multiprocessing and runs serially. ``ValueError``
        is raised when ``workers`` is ``0`` or negative.

    Returns
    -------
    List[str]
        Summary line for each rhythm written, in input order.
    """

    cfg_list = list(configs)
    if workers is not None and workers <= 0:
        raise ValueError("workers must be positive")
    if workers is None:
        workers = os.cpu_count() or 1
    logger.debug("Rendering %d rhythms with %d workers", len(cfg_list), workers)
    if workers <= 1 or len(cfg_list) <= 1:
        results = [_collect(cfg.name, lambda: render_config(cfg)) for cfg in cfg_list]
    else:
        results = []
        with ProcessPoolExecutor(max_workers=workers) as pool:
            futs = [pool.submit(render_config, cfg) for cfg in cfg_list]
            for cfg, fut in zip(cfg_list, futs):
                results.append(_collect(cfg.name, fut.result))
    return [line for line in results if line is not None]


def _celery_task(app: "Celery"):
    """Return the collection task registered on ``app``, registering it once."""

    tasks = getattr(app, "tasks", {})
    if _CELERY_TASK_NAME in tasks:
        return tasks[_CELERY_TASK_NAME]

    @app.task(name=_CELERY_TASK_NAME)
    def task(configs: List[Dict[str, Any]]) -> List[str]:
        return generate_collection((RhythmConfig(**cfg) for cfg in configs), workers=1)

    return task


def generate_collection_async(
    configs: Iterable[RhythmConfig],
    app: "Celery",
    *,
    countdown: Optional[int] = None,
):
    """Queue ``configs`` on a worker of the Celery application ``app``.

    Configs travel as plain dictionaries so any Celery serializer can carry
    them. The worker renders them serially.

    Returns
    -------
    celery.result.AsyncResult
        Handle whose ``get()`` yields the summary lines.

    Raises
    ------
    RuntimeError
        If Celery is not installed.
    ValueError
        If ``countdown`` is negative.
    """

    if Celery is None:
        raise RuntimeError(
            "Celery is required for generate_collection_async; install the 'celery' extra."
        )
    if countdown is not None and countdown < 0:
        raise ValueError("countdown must be None or non-negative")

    payload = [asdict(cfg) for cfg in configs]
    return _celery_task(app).apply_async(args=[payload], countdown=countdown)
