"""Tests for the named rhythm catalogue and demonstration listing."""

import importlib
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

demo = importlib.import_module("euclid_generator.demo")


def test_examples_are_valid_rhythms():
    """Every catalogue entry should describe a valid ``(steps, pulses)`` pair."""
    assert len(demo.EXAMPLES) == 8
    for ex in demo.EXAMPLES:
        assert 0 <= ex.pulses <= ex.steps


def test_describe_example_block():
    """The block lists ratio, pattern, origin, notes and density."""
    bossa = next(e for e in demo.EXAMPLES if e.name == "Brazilian Bossa Nova")
    text = demo.describe_example(bossa, 5)
    lines = text.splitlines()
    assert lines[0] == "5. Brazilian Bossa Nova (6/16)"
    assert lines[1] == "   Pattern: X.X.X.X.X.X....."
    assert lines[2] == "   Origin:  Brazil"
    assert lines[4] == "   Density: 37.5% (1.5 pulses per beat)"


def test_demo_text_lists_every_example():
    """The full listing mentions each rhythm name in order."""
    text = demo.demo_text()
    positions = [text.index(e.name) for e in demo.EXAMPLES]
    assert positions == sorted(positions)
    assert "MATHEMATICAL INSIGHTS" in text
    assert "EXPERIMENT IDEAS" in text
