"""Unit tests for the Euclidean pattern generator."""

import importlib
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

rhythm = importlib.import_module("euclid_generator.rhythm_engine")


def _is_fixed_point(groups):
    """Return ``True`` when no group can merge with the last group."""
    last = groups[-1]
    for group in groups[:-1]:
        if len(group) == 1 and len(last) == 1 and group[0] != last[0]:
            return False
    return True


@pytest.mark.parametrize("steps", range(1, 25))
def test_pulse_count_invariant(steps):
    """Every valid combination should yield ``steps`` entries and ``pulses`` hits."""
    for pulses in range(steps + 1):
        pattern = rhythm.generate(steps, pulses)
        assert len(pattern) == steps
        assert sum(pattern) == pulses


@pytest.mark.parametrize("steps", [1, 2, 7, 16, 33])
def test_edge_cases_all_rest_and_all_hit(steps):
    """``0`` pulses gives silence and ``steps`` pulses gives a hit every step."""
    assert rhythm.generate(steps, 0) == [False] * steps
    assert rhythm.generate(steps, steps) == [True] * steps


def test_bossa_nova_pattern():
    """``generate(16, 6)`` should alternate six hits and then rest."""
    pattern = rhythm.generate(16, 6)
    assert rhythm.format_pattern(pattern) == "X.X.X.X.X.X....."


def test_eight_three_grouping_result():
    """The grouping pass pairs each of the three hits with one trailing rest."""
    assert rhythm.format_pattern(rhythm.generate(8, 3)) == "X.X.X..."
    assert rhythm.group_pattern(8, 3) == [
        [True, False],
        [True, False],
        [True, False],
        [False],
        [False],
    ]


def test_five_two_pattern():
    """``generate(5, 2)`` holds two hits and reaches a fixed point."""
    pattern = rhythm.generate(5, 2)
    assert len(pattern) == 5
    assert sum(pattern) == 2
    assert pattern[0] is True
    assert _is_fixed_point(rhythm.group_pattern(5, 2))


def test_aksak_merges_stop_when_hits_remain():
    """Leftover hits at the tail cannot merge with other hits."""
    assert rhythm.format_pattern(rhythm.generate(8, 5)) == "X.X.X.XX"


@pytest.mark.parametrize("steps", range(2, 20))
def test_groups_reach_fixed_point(steps):
    """No singleton group should remain mergeable with the last group."""
    for pulses in range(1, steps):
        groups = rhythm.group_pattern(steps, pulses)
        assert _is_fixed_point(groups)
        flat = [s for g in groups for s in g]
        assert flat == rhythm.generate(steps, pulses)


def test_pattern_starts_with_hit():
    """Hits are placed first so any non-empty pattern opens on a hit."""
    for steps in range(1, 17):
        for pulses in range(1, steps + 1):
            assert rhythm.generate(steps, pulses)[0] is True


def test_generate_is_deterministic():
    """Repeated calls return equal but independent lists."""
    first = rhythm.generate(12, 5)
    second = rhythm.generate(12, 5)
    assert first == second
    first[0] = not first[0]
    assert rhythm.generate(12, 5) == second


@pytest.mark.parametrize(
    "steps, pulses",
    [(0, 0), (-1, 0), (4, 5), (3, -1), (8.0, 3), (8, 3.0), (True, True), ("8", 3)],
)
def test_invalid_spec_raises(steps, pulses):
    """Invalid arguments should raise ``InvalidSpec`` without a partial result."""
    with pytest.raises(rhythm.InvalidSpec):
        rhythm.generate(steps, pulses)


def test_invalid_spec_is_value_error():
    """``InvalidSpec`` subclasses ``ValueError`` for callers catching either."""
    with pytest.raises(ValueError):
        rhythm.RhythmSpec(steps=3, pulses=4)


def test_rhythm_spec_pattern():
    """``RhythmSpec.pattern`` should proxy to ``generate``."""
    spec = rhythm.RhythmSpec(steps=16, pulses=6)
    assert spec.pattern() == rhythm.generate(16, 6)


def test_format_pattern_symbols():
    """Hits render as ``X`` and rests as ``.``."""
    assert rhythm.format_pattern([True, False, False, True]) == "X..X"
    assert rhythm.format_pattern([]) == ""


def test_density():
    """Density reports percent filled and pulses per four steps."""
    percent, per_beat = rhythm.density(16, 6)
    assert percent == pytest.approx(37.5)
    assert per_beat == pytest.approx(1.5)
