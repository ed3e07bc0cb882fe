"""Euclidean rhythm generation.

This file implements the grouping form of the Bjorklund algorithm used to
spread ``pulses`` onsets across ``steps`` time intervals as evenly as the
grouping pass allows.  Patterns are plain lists of booleans where ``True``
marks a drum hit and ``False`` a rest, so callers can feed them straight into
:func:`euclid_generator.synthesis.render` or a display routine.

Algorithm
---------
The pattern starts as ``steps`` single-symbol groups, hits first::

    [X] [X] [X] [.] [.] [.] [.] [.]

Each round walks the groups from the left. Whenever the current group and the
last group are both single symbols of opposite value the last group's symbol
is appended to the current group and the last group is removed.  Rounds repeat
until one performs no merge; the surviving groups are then flattened in
order.  The result depends only on ``(steps, pulses)``.

Example
-------
>>> from euclid_generator.rhythm_engine import generate, format_pattern
>>> format_pattern(generate(16, 6))
'X.X.X.X.X.X.....'
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from typing import List, Sequence, Tuple

__all__ = [
    "InvalidSpec",
    "RhythmSpec",
    "generate",
    "group_pattern",
    "format_pattern",
    "density",
    "HIT_SYMBOL",
    "REST_SYMBOL",
]


logger = logging.getLogger(__name__)

# Characters used by :func:`format_pattern`.
HIT_SYMBOL = "X"
REST_SYMBOL = "."


class InvalidSpec(ValueError):
    """Raised when ``steps`` and ``pulses`` cannot describe a rhythm."""


def _validate(steps: int, pulses: int) -> None:
    for name, value in (("steps", steps), ("pulses", pulses)):
        if not isinstance(value, numbers.Integral) or isinstance(value, bool):
            raise InvalidSpec(f"{name} must be an integer, got {value!r}")
    if steps <= 0:
        raise InvalidSpec(f"steps must be a positive integer, got {steps}")
    if pulses < 0:
        raise InvalidSpec(f"pulses must be non-negative, got {pulses}")
    if pulses > steps:
        raise InvalidSpec(
            f"pulses ({pulses}) cannot exceed steps ({steps})"
        )


@dataclass(frozen=True)
class RhythmSpec:
    """Number of steps in a cycle and how many of them are hits.

    Instances validate themselves on construction so a ``RhythmSpec`` that
    exists is always safe to pass to :func:`generate`.
    """

    steps: int
    pulses: int

    def __post_init__(self) -> None:
        _validate(self.steps, self.pulses)

    def pattern(self) -> List[bool]:
        """Return the Euclidean pattern for these steps and pulses."""

        return generate(self.steps, self.pulses)


def group_pattern(steps: int, pulses: int) -> List[List[bool]]:
    """Return the groups left once the merge rounds reach a fixed point.

    Concatenating the groups yields :func:`generate`'s result.  The all-rest
    and all-hit edge cases return one single-symbol group per step.

    Raises
    ------
    InvalidSpec
        If ``steps`` is not positive or ``pulses`` lies outside ``[0, steps]``.
    """

    _validate(steps, pulses)
    if pulses == 0 or pulses == steps:
        return [[pulses == steps] for _ in range(steps)]

    groups: List[List[bool]] = [[i < pulses] for i in range(steps)]
    rounds = 0
    while True:
        merged = 0
        i = 0
        # ``len(groups)`` shrinks on every merge so the bound is re-read each
        # iteration rather than fixed at the start of the round.
        while i < len(groups) - 1:
            last = groups[-1]
            current = groups[i]
            if len(current) == 1 and len(last) == 1 and current[0] != last[0]:
                current.append(last[0])
                groups.pop()
                merged += 1
            i += 1
        rounds += 1
        if merged == 0:
            break
    logger.debug(
        "Grouped %d/%d into %d groups after %d rounds", pulses, steps, len(groups), rounds
    )
    return groups


def generate(steps: int, pulses: int) -> List[bool]:
    """Return a ``steps`` long pattern containing ``pulses`` hits.

    Parameters
    ----------
    steps:
        Total number of time intervals in the cycle. Must be positive.
    pulses:
        Number of hits to distribute. Must lie in ``[0, steps]``.

    Returns
    -------
    List[bool]
        ``True`` for a hit, ``False`` for a rest, in temporal order.

    Raises
    ------
    InvalidSpec
        If the arguments violate the constraints above. No partial pattern
        is returned.
    """

    _validate(steps, pulses)
    # Edge cases skip the grouping rounds entirely.
    if pulses == 0:
        return [False] * steps
    if pulses == steps:
        return [True] * steps

    pattern: List[bool] = []
    for group in group_pattern(steps, pulses):
        pattern.extend(group)
    return pattern


def format_pattern(pattern: Sequence[bool]) -> str:
    """Return ``pattern`` as text using ``X`` for hits and ``.`` for rests."""

    return "".join(HIT_SYMBOL if hit else REST_SYMBOL for hit in pattern)


def density(steps: int, pulses: int) -> Tuple[float, float]:
    """Return ``(percent, pulses_per_beat)`` for a rhythm.

    ``pulses_per_beat`` assumes four steps make up one beat, which is how the
    demonstration listing describes sixteenth-note grids.
    """

    _validate(steps, pulses)
    return pulses / steps * 100, pulses * 4 / steps
