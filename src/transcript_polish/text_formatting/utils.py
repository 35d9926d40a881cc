#!/usr/bin/env python3
"""Shared utility functions for text formatting modules."""
from __future__ import annotations

import re
from typing import Callable, Iterable, NamedTuple

from .common import Entity
from .constants import WORD_PUNCTUATION

_TOKEN_PATTERN = re.compile(r"\S+")

# Punctuation that can trail a spoken number or unit ("dollars.", "five,")
TRAILING_PUNCTUATION = ".,!?;:"


class Token(NamedTuple):
    """A whitespace-delimited token and its character span in the source text."""

    text: str
    start: int
    end: int


def tokenize(text: str) -> list[Token]:
    """Split text on whitespace, keeping offsets so spans can be rebuilt."""
    return [Token(match.group(), match.start(), match.end()) for match in _TOKEN_PATTERN.finditer(text)]


def split_trailing_punctuation(word: str, punctuation: str = TRAILING_PUNCTUATION) -> tuple[str, str]:
    """
    Split a token into its core and trailing punctuation.

    >>> split_trailing_punctuation("dollars.")
    ('dollars', '.')
    """
    core = word.rstrip(punctuation)
    return core, word[len(core):]


def strip_punctuation(word: str) -> str:
    """Remove leading and trailing punctuation, keeping inner apostrophes and hyphens."""
    return word.strip(WORD_PUNCTUATION)


def overlaps_with_entity(start: int, end: int, entities: list[Entity]) -> bool:
    """
    Check if a span overlaps with any existing entity.

    Args:
        start: Start position of the span to check
        end: End position of the span to check
        entities: List of existing entities to check against

    Returns:
        True if the span overlaps with any existing entity, False otherwise

    """
    return any(not (end <= entity.start or start >= entity.end) for entity in entities)


def rebuild_text(text: str, entities: Iterable[Entity], render: Callable[[Entity], str]) -> str:
    """
    Build a new string with every entity span replaced by its rendering.

    The input is never mutated: unaffected spans are copied between replacements,
    so offsets found on the original text stay valid. Overlapping entities after
    the first are ignored.
    """
    parts: list[str] = []
    cursor = 0
    for entity in sorted(entities, key=lambda e: (e.start, -e.end)):
        if entity.start < cursor:
            continue
        parts.append(text[cursor:entity.start])
        parts.append(render(entity))
        cursor = entity.end
    parts.append(text[cursor:])
    return "".join(parts)


def normalize_whitespace(text: str) -> str:
    """Collapse runs of spaces/tabs to one space and trim the ends."""
    return re.sub(r"[ \t]{2,}", " ", text).strip()
