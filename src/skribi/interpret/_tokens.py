"""Word tokenizer for statements."""

from __future__ import annotations


def tokenize(line: str) -> list[str]:
    """Split a source line into whitespace-separated word tokens."""
    return line.split()
