#!/usr/bin/env python3
"""Tests for SmartCapitalizer rules and protected words."""

import pytest

from conftest import assert_format
from transcript_polish.text_formatting.capitalizer import SmartCapitalizer
from transcript_polish.text_formatting.capitalizer_protection import is_acronym, is_protected_word
from transcript_polish.text_formatting.formatting_config import FormattingConfig


@pytest.fixture
def caps_only(formatter, formatting_config):
    config = formatting_config(fix_mid_sentence_capitalization=True)
    return lambda text, vocabulary=(): formatter.apply(text, config, vocabulary)


class TestProtectedWords:
    """Test which words keep their casing."""

    def test_protected(self):
        test_cases = [
            ("I", ()),
            ("I'm", ()),
            ("I’ll", ()),
            ("I've,", ()),
            ("API", ()),
            ("(NASA)", ()),
            ("Kubernetes", ("kubernetes",)),
            ("Docker's", ("Docker",)),
        ]

        for word, vocabulary in test_cases:
            assert is_protected_word(word, vocabulary), f"'{word}' should be protected"

    def test_not_protected(self):
        test_cases = [
            ("Hello", ()),
            ("A", ()),
            ("Im", ()),
            ("...", ()),
            ("Docker", ("  ",)),
        ]

        for word, vocabulary in test_cases:
            assert not is_protected_word(word, vocabulary), f"'{word}' should not be protected"

    def test_is_acronym(self):
        assert is_acronym("CEO")
        assert not is_acronym("C")
        assert not is_acronym("Ceo")
        assert not is_acronym("B2B")


class TestMidSentenceCapitals:
    """Test lowering of capitals that do not start a sentence."""

    def test_stray_capitals_are_lowered(self, caps_only):
        test_cases = [
            (
                "I need to make sure all active Customers are in the dashboard.",
                "I need to make sure all active customers are in the dashboard.",
            ),
            (
                "The goal is to Make sure Everyone is in the right Category.",
                "The goal is to make sure everyone is in the right category.",
            ),
            ("Then I think we Should proceed with the plan.", "Then I think we should proceed with the plan."),
        ]

        for input_text, expected in test_cases:
            result = caps_only(input_text)
            assert result == expected, f"Input '{input_text}' should format to '{expected}' but got '{result}'"

    def test_protected_words_survive(self, caps_only):
        input_text = "We deploy with Kubernetes and Docker every week."
        result = caps_only(input_text, ("Kubernetes", "Docker"))
        assert result == input_text, f"Input '{input_text}' should be unchanged but got '{result}'"

        test_cases = [
            "The API and CEO were discussed at the meeting.",
            "Yes and I'm sure I'll be there.",
        ]
        for input_text in test_cases:
            result = caps_only(input_text)
            assert result == input_text, f"Input '{input_text}' should be unchanged but got '{result}'"

    def test_sentence_starts_keep_capitals(self, caps_only):
        test_cases = [
            "First sentence ends. Second sentence begins.",
            "Is it done? Yes it is! Great.",
            'He said "stop." Then he left.',
        ]

        for input_text in test_cases:
            result = caps_only(input_text)
            assert result == input_text, f"Input '{input_text}' should be unchanged but got '{result}'"


class TestShortPhrases:
    """Test short phrase handling with the default configuration."""

    def test_short_phrases_lose_period_and_capital(self, formatter, default_config):
        test_cases = [
            ("awesome.", "awesome"),
            ("That sounds really good.", "that sounds really good"),
            ("Sounds good.", "sounds good"),
            ("Hello.", "hello"),
            ("Hello", "hello"),
            ("Really?", "really?"),
            ("Nice!", "nice!"),
        ]

        for input_text, expected in test_cases:
            assert_format(input_text, expected, formatter.apply(input_text, default_config), "short_phrases")

    def test_ellipsis_and_protected_first_words(self, formatter, default_config):
        test_cases = [
            ("well...", (), "well..."),
            ("Arman said hello", ("Arman",), "Arman said hello"),
            ("API is ready", (), "API is ready"),
            ("I agree.", (), "I agree"),
            ("Kubernetes rocks.", ("Kubernetes",), "Kubernetes rocks"),
        ]

        for input_text, vocabulary, expected in test_cases:
            result = formatter.apply(input_text, default_config, vocabulary)
            assert result == expected, f"Input '{input_text}' should format to '{expected}' but got '{result}'"

    def test_long_sentences_are_kept(self, formatter, default_config):
        input_text = "This is a much longer sentence that stays as it is."
        result = formatter.apply(input_text, default_config)
        assert result == input_text, f"Input '{input_text}' should be unchanged but got '{result}'"

    def test_empty_input(self, formatter, default_config):
        assert formatter.apply("", default_config) == ""
        assert formatter.apply("   ", default_config) == ""

    def test_keep_period_but_lowercase(self, formatter):
        config = FormattingConfig(remove_trailing_period=False, lowercase_short_phrases=True)
        test_cases = [
            ("Sounds good", "sounds good"),
            ("Sounds good.", "sounds good."),
            ("I agree", "I agree"),
            (
                "This is a much longer sentence that stays as it is.",
                "This is a much longer sentence that stays as it is.",
            ),
        ]

        for input_text, expected in test_cases:
            result = formatter.apply(input_text, config)
            assert result == expected, f"Input '{input_text}' should format to '{expected}' but got '{result}'"

    def test_word_threshold(self, formatter):
        test_cases = [
            (2, "Sounds really good.", "Sounds really good."),
            (3, "Sounds really good.", "sounds really good"),
        ]

        for max_words, input_text, expected in test_cases:
            config = FormattingConfig(short_phrase_max_words=max_words)
            result = formatter.apply(input_text, config)
            assert result == expected, f"Input '{input_text}' should format to '{expected}' but got '{result}'"


class TestSmartCapitalizer:
    """Test the capitalizer helpers directly."""

    def test_remove_trailing_period(self):
        test_cases = [
            ("done.", "done"),
            ("done. ", "done"),
            ("wait..", "wait.."),
            (".", "."),
            ("no period", "no period"),
        ]

        for input_text, expected in test_cases:
            result = SmartCapitalizer.remove_trailing_period(input_text)
            assert result == expected, f"Input '{input_text}' should become '{expected}', got '{result}'"

    def test_lowercase_first_letter_skips_leading_punctuation(self):
        capitalizer = SmartCapitalizer()
        assert capitalizer.lowercase_first_letter('"Great" idea') == '"great" idea'
        assert capitalizer.lowercase_first_letter("123 Go") == "123 Go"
