"""Suggestions for mistyped task names."""

from __future__ import annotations

import sys
from collections.abc import Iterable

from .style import style

MAX_DISTANCE = 3
MAX_SUGGESTIONS = 3


def levenshtein(a: str, b: str) -> int:
    """Return the edit distance between two strings."""
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost)
            )
        previous = current
    return previous[-1]


def similar_names(name: str, known_names: Iterable[str]) -> list[str]:
    """Return up to three known names within edit distance three, closest first."""
    scored = [(levenshtein(name, known), known) for known in known_names]
    close = [item for item in scored if item[0] <= MAX_DISTANCE]
    close.sort(key=lambda item: item[0])
    return [known for _, known in close[:MAX_SUGGESTIONS]]


def suggest_similar(name: str, known_names: Iterable[str]) -> list[str]:
    """Print a "Did you mean" hint to stderr and return the suggested names."""
    suggestions = similar_names(name, known_names)
    if suggestions:
        listed = ", ".join(style(s, "green") for s in suggestions)
        print(f"\n{style('Did you mean:', 'dimmed')} {listed}", file=sys.stderr)
    return suggestions