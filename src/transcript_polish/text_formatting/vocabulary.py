#!/usr/bin/env python3
"""
User-driven rewrites applied after the formatting stage.

- VocabularyApplier: restores the canonical casing of vocabulary entries
- WordRemovalApplier: strips matches of user-authored regex patterns
- WordRemappingApplier: literal whole-word substitutions
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Sequence

from transcript_polish.core.config import setup_logging

from .formatter_components.pipeline.step1_cleanup import clean_removal_gaps
from .formatting_config import WordRemapping, WordRemoval

logger = setup_logging(__name__, log_filename="text_formatting.txt", include_console=False)


@lru_cache(maxsize=512)
def _whole_phrase_pattern(phrase: str) -> re.Pattern[str]:
    """Case-insensitive literal match of phrase, not inside a larger word."""
    return re.compile(rf"(?<!\w){re.escape(phrase)}(?!\w)", re.IGNORECASE)


@lru_cache(maxsize=512)
def _compile_removal(pattern: str) -> re.Pattern[str] | None:
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        logger.warning(f"Skipping invalid word removal pattern '{pattern}': {e}")
        return None


class VocabularyApplier:
    """Rewrite every case-insensitive occurrence of a vocabulary entry to its exact casing."""

    def __init__(self, vocabulary: Iterable[str] = ()):
        # Entries are trimmed; empty ones are ignored
        self.vocabulary = tuple(entry.strip() for entry in vocabulary if entry.strip())

    def apply(self, text: str) -> str:
        for entry in self.vocabulary:
            text = _whole_phrase_pattern(entry).sub(lambda _match, entry=entry: entry, text)
        return text


class WordRemovalApplier:
    """Remove every match of the enabled removal patterns, in list order."""

    def __init__(self, rules: Sequence[WordRemoval] = ()):
        self.rules = tuple(rules)

    def apply(self, text: str) -> str:
        removed_any = False
        for rule in self.rules:
            if not rule.is_enabled or not rule.pattern:
                continue
            pattern = _compile_removal(rule.pattern)
            if pattern is None:
                continue

            text, count = pattern.subn("", text)
            if count:
                removed_any = True
                logger.debug(f"Removed {count} match(es) of '{rule.pattern}'")

        return clean_removal_gaps(text) if removed_any else text


class WordRemappingApplier:
    """Replace whole-word, case-insensitive matches with a literal replacement."""

    def __init__(self, rules: Sequence[WordRemapping] = ()):
        self.rules = tuple(rules)

    def apply(self, text: str) -> str:
        for rule in self.rules:
            match = rule.match.strip()
            if not rule.is_enabled or not match:
                continue
            # A function replacement keeps backslashes in the replacement literal
            text = _whole_phrase_pattern(match).sub(lambda _m, rule=rule: rule.replacement, text)
        return text
