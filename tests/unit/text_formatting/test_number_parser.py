#!/usr/bin/env python3
"""Tests for the spoken number parser.

The parser folds lowercase number words into an integer:
- ones and tens add to the current group
- "hundred" multiplies the group, larger scales flush it into the total
- "and" is ignored, "a"/"an" count as one before a scale word
"""

import pytest

from transcript_polish.text_formatting.common import NumberParser, parse_number_words


@pytest.fixture(scope="module")
def parser():
    return NumberParser(language="en")


class TestParseNumberWords:
    """Test folding word sequences into integers."""

    def test_cardinals(self):
        test_cases = [
            (["zero"], 0),
            (["seven"], 7),
            (["nineteen"], 19),
            (["twenty", "three"], 23),
            (["one", "hundred"], 100),
            (["one", "hundred", "and", "fifty"], 150),
            (["two", "thousand", "and", "twenty", "four"], 2024),
            (["one", "hundred", "thousand"], 100_000),
            (["seven", "million", "five", "hundred", "twenty", "seven", "thousand"], 7_527_000),
            (["seven", "million", "five", "hundred", "and", "twenty", "seven", "thousand"], 7_527_000),
            (["three", "billion"], 3_000_000_000),
        ]

        for words, expected in test_cases:
            result = parse_number_words(words)
            assert result == expected, f"{words} should parse to {expected}, got {result}"

    def test_articles_before_scale_words(self):
        assert parse_number_words(["a", "hundred"]) == 100
        assert parse_number_words(["a", "thousand"]) == 1000
        assert parse_number_words(["an", "hundred"]) == 100

    def test_standalone_scale_word_counts_as_one(self):
        assert parse_number_words(["hundred"]) == 100
        assert parse_number_words(["thousand"]) == 1000

    def test_case_insensitive(self):
        assert parse_number_words(["Twenty", "THREE"]) == 23

    def test_unparseable(self):
        test_cases = [
            [],
            ["and"],
            ["a"],
            ["a", "five"],
            ["hello"],
            ["twenty", "apples"],
            ["one", "hundred", "first"],
        ]

        for words in test_cases:
            result = parse_number_words(words)
            assert result is None, f"{words} should be unparseable, got {result}"


class TestNumberParserHelpers:
    """Test the ordinal and clock helpers of NumberParser."""

    def test_parse_ordinal(self, parser):
        test_cases = [
            (["tenth"], (10, "th")),
            (["first"], (1, "st")),
            (["twenty", "first"], (21, "st")),
            (["thirty", "second"], (32, "nd")),
            (["forty", "third"], (43, "rd")),
            (["one", "hundred", "first"], (101, "st")),
            (["one", "hundred", "twentieth"], (120, "th")),
        ]

        for words, expected in test_cases:
            result = parser.parse_ordinal(words)
            assert result == expected, f"{words} should parse to {expected}, got {result}"

    def test_parse_ordinal_rejects_non_round_prefix(self, parser):
        assert parser.parse_ordinal(["five", "first"]) is None
        assert parser.parse_ordinal(["twenty", "tenth"]) is None
        assert parser.parse_ordinal(["twenty"]) is None
        assert parser.parse_ordinal([]) is None

    def test_parse_clock_word(self, parser):
        assert parser.parse_clock_word(["seven"]) == 7
        assert parser.parse_clock_word(["thirty"]) == 30
        assert parser.parse_clock_word(["forty", "five"]) == 45
        assert parser.parse_clock_word(["forty", "fifteen"]) is None
        assert parser.parse_clock_word(["hundred"]) is None
