#!/usr/bin/env python3
"""
Step 1 of the text formatting pipeline: Cleanup.

Operations that tidy raw transcribed text before and after the entity stages:
- Collapsing immediately repeated words ("the the" -> "the")
- Normalizing whitespace
- Tidying the gaps left behind by word removal
"""

import re

from ... import regex_patterns
from ...utils import normalize_whitespace, split_trailing_punctuation, strip_punctuation, tokenize

__all__ = ["remove_duplicate_words", "normalize_whitespace", "clean_removal_gaps"]


def remove_duplicate_words(text: str) -> str:
    """
    Drop a word when it repeats the word right before it.

    Comparison ignores case and surrounding punctuation. The first copy is kept; when
    only the dropped copy carries trailing punctuation it moves onto the kept copy.
    Legitimate repeats such as "had had" are collapsed too.

    Args:
        text: Text to deduplicate

    Returns:
        Text with adjacent duplicates removed

    """
    tokens = tokenize(text)
    if len(tokens) < 2:
        return text

    # (whitespace before the token, token text)
    kept: list[list[str]] = []
    previous_key = None
    cursor = 0
    for token in tokens:
        separator = text[cursor:token.start]
        cursor = token.end
        key = strip_punctuation(token.text).lower()

        if key and key == previous_key:
            kept_core, kept_trailing = split_trailing_punctuation(kept[-1][1])
            _core, trailing = split_trailing_punctuation(token.text)
            if trailing and not kept_trailing:
                kept[-1][1] = kept_core + trailing
            continue

        kept.append([separator, token.text])
        previous_key = key

    return "".join(separator + word for separator, word in kept) + text[cursor:]


def clean_removal_gaps(text: str) -> str:
    """
    Tidy text after removal patterns stripped words out of it.

    Collapses doubled spaces and commas, removes spaces left before punctuation and
    punctuation orphaned at the start of the text.
    """
    text = regex_patterns.REPEATED_COMMA_PATTERN.sub(",", text)
    text = regex_patterns.SPACE_BEFORE_PUNCTUATION_PATTERN.sub(r"\1", text)
    text = regex_patterns.LEADING_PUNCTUATION_PATTERN.sub("", text)
    text = re.sub(r"([,;:])(?=[.!?])", "", text)
    return normalize_whitespace(text)
