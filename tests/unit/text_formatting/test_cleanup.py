#!/usr/bin/env python3
"""Tests for the cleanup step: deduplication, whitespace, removal gaps."""

import pytest

from transcript_polish.text_formatting.formatter_components.pipeline.step1_cleanup import (
    clean_removal_gaps,
    normalize_whitespace,
    remove_duplicate_words,
)


@pytest.fixture
def dedup_only(formatter, formatting_config):
    config = formatting_config(deduplicate_words=True)
    return lambda text: formatter.apply(text, config)


class TestDuplicateWords:
    """Test removal of immediately repeated words."""

    def test_repeated_words_collapse(self, dedup_only):
        test_cases = [
            ("I went to the the store.", "I went to the store."),
            ("The the quick quick brown fox.", "The quick brown fox."),
            ("go go go now", "go now"),
        ]

        for input_text, expected in test_cases:
            result = dedup_only(input_text)
            assert result == expected, f"Input '{input_text}' should format to '{expected}' but got '{result}'"

    def test_legitimate_repeats_collapse_too(self, dedup_only):
        input_text = "I had had enough of this."
        expected = "I had enough of this."
        result = dedup_only(input_text)
        assert result == expected, f"Input '{input_text}' should format to '{expected}' but got '{result}'"

    def test_comparison_ignores_case_and_punctuation(self, dedup_only):
        test_cases = [
            ("Hello, hello world", "Hello, world"),
            ("the store store.", "the store."),
            ("wait. Wait for me", "wait. for me"),
        ]

        for input_text, expected in test_cases:
            result = dedup_only(input_text)
            assert result == expected, f"Input '{input_text}' should format to '{expected}' but got '{result}'"

    def test_distinct_neighbours_are_kept(self):
        test_cases = [
            "the then there",
            "one",
            "",
        ]

        for input_text in test_cases:
            assert remove_duplicate_words(input_text) == input_text


class TestWhitespace:
    """Test whitespace normalization."""

    def test_normalize_whitespace(self):
        test_cases = [
            ("hello  world", "hello world"),
            ("  hello world  ", "hello world"),
            ("tabs\t\tand  spaces", "tabs and spaces"),
            ("already clean", "already clean"),
        ]

        for input_text, expected in test_cases:
            result = normalize_whitespace(input_text)
            assert result == expected, f"Input '{input_text}' should normalize to '{expected}', got '{result}'"

    def test_pipeline_with_everything_off(self, formatter, formatting_config):
        config = formatting_config()
        test_cases = [
            ("hello  world", "hello world"),
            ("  hello world  ", "hello world"),
            (
                "This sentence keeps every Capital and its period.",
                "This sentence keeps every Capital and its period.",
            ),
        ]

        for input_text, expected in test_cases:
            result = formatter.apply(input_text, config)
            assert result == expected, f"Input '{input_text}' should format to '{expected}' but got '{result}'"


class TestRemovalGaps:
    """Test the tidy-up after word removal."""

    def test_clean_removal_gaps(self):
        test_cases = [
            (", so we went", "so we went"),
            ("well , , okay", "well, okay"),
            ("I  think we should", "I think we should"),
            ("that is it ,.", "that is it."),
            ("done !", "done!"),
        ]

        for input_text, expected in test_cases:
            result = clean_removal_gaps(input_text)
            assert result == expected, f"Input '{input_text}' should clean to '{expected}', got '{result}'"
