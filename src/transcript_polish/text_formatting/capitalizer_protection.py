#!/usr/bin/env python3
"""Protected-word logic for the SmartCapitalizer."""
from __future__ import annotations

from typing import Iterable

from .constants import APOSTROPHES
from .utils import strip_punctuation

# "I" and its contractions keep their capital
_PRONOUN_SUFFIXES = ("", "m", "ll", "ve", "d")
PROTECTED_PRONOUNS = frozenset(
    "I" + (apostrophe + suffix if suffix else "") for apostrophe in APOSTROPHES for suffix in _PRONOUN_SUFFIXES
)


def _strip_possessive(word: str) -> str:
    for apostrophe in APOSTROPHES:
        suffix = apostrophe + "s"
        if word.lower().endswith(suffix) and len(word) > len(suffix):
            return word[: -len(suffix)]
    return word


def is_acronym(word: str) -> bool:
    """Two or more letters, all uppercase: "API", "CEO"."""
    return len(word) >= 2 and word.isalpha() and word.isupper()


def matches_vocabulary(word: str, vocabulary: Iterable[str]) -> bool:
    """Case-insensitive match against trimmed, non-empty vocabulary entries."""
    candidates = {word.lower(), _strip_possessive(word).lower()}
    for entry in vocabulary:
        entry = entry.strip()
        if entry and entry.lower() in candidates:
            return True
    return False


def is_protected_word(word: str, vocabulary: Iterable[str] = ()) -> bool:
    """
    Check whether a word must keep its capitalization.

    A word is protected when, after stripping surrounding punctuation, it is the
    pronoun "I" (or I'm, I'll, I've, I'd), an all-caps acronym of two or more
    letters, or an entry of the user's vocabulary.

    Args:
        word: Token as it appears in the text, punctuation included
        vocabulary: User vocabulary entries

    Returns:
        True if the word's casing must be preserved

    """
    stripped = strip_punctuation(word)
    if not stripped:
        return False
    if stripped in PROTECTED_PRONOUNS:
        return True
    if is_acronym(stripped):
        return True
    return matches_vocabulary(stripped, vocabulary)
