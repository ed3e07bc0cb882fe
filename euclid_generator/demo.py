"""Catalogue of named Euclidean rhythms and a text demonstration.

The listing mirrors how the patterns are usually introduced: each rhythm is
shown with its pulse/step ratio, the generated pattern, where it comes from
and how dense it is.  Only text is produced here; the CLI decides where to
print it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .rhythm_engine import density, format_pattern, generate

__all__ = ["RhythmExample", "EXAMPLES", "describe_example", "demo_text"]


@dataclass(frozen=True)
class RhythmExample:
    """A rhythm from the catalogue."""

    name: str
    steps: int
    pulses: int
    description: str
    origin: str


EXAMPLES: List[RhythmExample] = [
    RhythmExample("Cuban Tresillo", 8, 3, "The fundamental rhythm of Cuban music", "Cuba, Latin America"),
    RhythmExample("Turkish Aksak", 8, 5, "Asymmetrical rhythm common in Turkish folk music", "Turkey, Eastern Europe"),
    RhythmExample("West African Polyrhythm", 12, 5, "Complex polyrhythmic pattern", "West Africa"),
    RhythmExample("Flamenco Bulería", 12, 7, "Fast-paced rhythm in flamenco music", "Spain"),
    RhythmExample("Brazilian Bossa Nova", 16, 6, "Smooth, syncopated rhythm (current default)", "Brazil"),
    RhythmExample("Indian Classical Tala", 7, 3, "Asymmetrical cycle in Indian classical music", "India"),
    RhythmExample("Minimalist Pattern", 5, 2, "Simple, hypnotic pattern", "Modern/Minimal Music"),
    RhythmExample("Dense Polyrhythm", 16, 11, "Complex, dense rhythmic texture", "Contemporary/Experimental"),
]

_INSIGHTS = [
    "Euclidean rhythms maximize the temporal distance between pulses",
    "They solve: 'distribute k pulses among n intervals as evenly as possible'",
    "The Bjorklund algorithm is related to Euclid's algorithm for GCD",
    "These patterns naturally emerge in traditional music worldwide",
    "Musicians often discover them intuitively without knowing the mathematics",
]

_EXPERIMENTS = [
    "Change steps/pulses ratio for different feels",
    "Adjust BPM for different tempos",
    "Modify drum frequency for different pitches",
    "Layer multiple patterns for polyrhythms",
]


def describe_example(example: RhythmExample, index: int) -> str:
    """Return the listing block for ``example`` numbered ``index``."""

    percent, per_beat = density(example.steps, example.pulses)
    visual = format_pattern(generate(example.steps, example.pulses))
    return "\n".join(
        [
            f"{index}. {example.name} ({example.pulses}/{example.steps})",
            f"   Pattern: {visual}",
            f"   Origin:  {example.origin}",
            f"   Notes:   {example.description}",
            f"   Density: {percent:.1f}% ({per_beat:.1f} pulses per beat)",
        ]
    )


def _section(title: str, lines: Sequence[str]) -> List[str]:
    return [title, "=" * len(title)] + [f"• {line}" for line in lines] + [""]


def demo_text(examples: Sequence[RhythmExample] = EXAMPLES) -> str:
    """Return the full demonstration listing for ``examples``."""

    out = [
        "EUCLIDEAN RHYTHMS DEMONSTRATION",
        "===============================",
        "Exploring rhythmic patterns from around the world using mathematics!",
        "",
    ]
    for i, example in enumerate(examples, start=1):
        out.append(describe_example(example, i))
        out.append("")
    out.extend(_section("MATHEMATICAL INSIGHTS", _INSIGHTS))
    out.extend(_section("EXPERIMENT IDEAS", _EXPERIMENTS))
    out.append("To generate any of these patterns as audio run:")
    out.append("  euclid-generator generate --steps N --pulses K --output out.wav")
    return "\n".join(out)
