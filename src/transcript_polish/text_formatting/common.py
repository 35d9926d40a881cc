#!/usr/bin/env python3
"""Common data structures and classes shared across text formatting modules."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache
from typing import Any, Dict, Optional, Sequence

from .constants import get_resources


class EntityType(Enum):
    """Entity types for text formatting"""

    CARDINAL = auto()
    ORDINAL = auto()
    CURRENCY = auto()
    DOLLAR_CENTS = auto()
    PERCENT = auto()
    TIME_AMPM = auto()
    EMAIL = auto()
    SPOKEN_EMAIL = auto()


@dataclass
class Entity:
    """Represents a detected span of the text and its replacement"""

    start: int
    end: int
    text: str
    type: EntityType
    metadata: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.metadata is None:
            self.metadata = {}


class NumberParser:
    """Algorithmic parsing of spoken number words"""

    def __init__(self, language: str = "en"):
        resources = get_resources(language)
        number_resources = resources.get("number_words", {})

        self.ones: dict[str, int] = number_resources.get("ones", {})
        self.tens: dict[str, int] = number_resources.get("tens", {})
        self.scales: dict[str, int] = number_resources.get("scales", {})
        self.connectors = set(number_resources.get("connectors", ["and"]))
        self.articles = set(number_resources.get("articles", ["a", "an"]))

        # word -> (cardinal value, suffix)
        self.ordinals: dict[str, tuple[int, str]] = {
            word: (int(value), str(suffix)) for word, (value, suffix) in resources.get("ordinal_words", {}).items()
        }
        # Combine all number words for easy checking
        self.all_number_words = set(self.ones) | set(self.tens) | set(self.scales)

    def is_number_word(self, word: str) -> bool:
        return word.lower() in self.all_number_words

    def is_ordinal_word(self, word: str) -> bool:
        return word.lower() in self.ordinals

    def is_scale_word(self, word: str) -> bool:
        return word.lower() in self.scales

    def parse_number_words(self, words: Sequence[str]) -> Optional[int]:
        """
        Fold a sequence of number words into an integer.

        "and" connectors are ignored, "a"/"an" count as one before a scale word,
        "hundred" multiplies the current group and larger scales flush it into the
        total. Returns None when any word is not part of a spoken number.
        """
        tokens = [word.lower() for word in words if word.lower() not in self.connectors]
        if not tokens:
            return None

        current = 0
        total = 0
        for i, word in enumerate(tokens):
            if word in self.articles:
                # "a hundred", "a thousand"
                if current == 0 and i + 1 < len(tokens) and tokens[i + 1] in self.scales:
                    current = 1
                    continue
                return None
            if word in self.ones:
                current += self.ones[word]
            elif word in self.tens:
                current += self.tens[word]
            elif word in self.scales:
                scale = self.scales[word]
                # An empty group implies a standalone scale word ("hundred" == "one hundred")
                multiplier = current if current > 0 else 1
                if scale == 100:
                    current = multiplier * scale
                else:
                    total += multiplier * scale
                    current = 0
            else:
                return None

        result = total + current
        if result == 0 and "zero" not in tokens:
            return None
        return result

    def parse_ordinal(self, words: Sequence[str]) -> Optional[tuple[int, str]]:
        """
        Parse an ordinal phrase whose last word is an ordinal word.

        "tenth" -> (10, "th"); "twenty first" -> (21, "st"). A numeric prefix only
        combines with the ordinal when it ends on a round ten ("one hundred first" is
        101st, "five first" is not an ordinal).
        """
        if not words:
            return None

        last = words[-1].lower()
        if last not in self.ordinals:
            return None

        value, suffix = self.ordinals[last]
        prefix = words[:-1]
        if not prefix:
            return value, suffix

        prefix_value = self.parse_number_words(prefix)
        if prefix_value is None or prefix_value == 0 or prefix_value % 10 != 0 or value >= 10 and prefix_value % 100 != 0:
            return None
        return prefix_value + value, suffix

    def parse_clock_word(self, words: Sequence[str]) -> Optional[int]:
        """Parse hour/minute words of a spoken time, ones and tens only."""
        tokens = [word.lower() for word in words]
        if not tokens or len(tokens) > 2:
            return None
        if len(tokens) == 1:
            word = tokens[0]
            if word in self.ones:
                return self.ones[word]
            return self.tens.get(word)
        first, second = tokens
        if first in self.tens and second in self.ones and 0 < self.ones[second] < 10:
            return self.tens[first] + self.ones[second]
        return None


@lru_cache(maxsize=8)
def get_number_parser(language: str = "en") -> NumberParser:
    """Shared parser per language; NumberParser holds no per-call state."""
    return NumberParser(language=language)


def parse_number_words(words: Sequence[str], language: str = "en") -> Optional[int]:
    """Convert number-word tokens to an integer, or None when unparseable."""
    return get_number_parser(language).parse_number_words(words)
