#!/usr/bin/env python3
"""Tests for spoken email addresses.

- SPOKEN_EMAIL: "john at gmail dot com" -> "john@gmail.com"
- EMAIL: "john at yahoo.com" -> "john@yahoo.com"
"""

import pytest


@pytest.fixture
def emails_only(formatter, formatting_config):
    config = formatting_config(format_emails=True)
    return lambda text: formatter.apply(text, config)


class TestSpokenEmails:
    """Test SPOKEN_EMAIL entity detection and formatting."""

    def test_fully_spoken_emails(self, emails_only):
        test_cases = [
            ("john at gmail dot com", "john@gmail.com"),
            ("Email me at john dot doe at company dot com", "Email me at john.doe@company.com"),
            ("reach support at mail dot example dot org", "reach support@mail.example.org"),
        ]

        for input_text, expected in test_cases:
            result = emails_only(input_text)
            assert result == expected, f"Input '{input_text}' should format to '{expected}' but got '{result}'"

    def test_emails_are_lowercased(self, emails_only):
        input_text = "Send it to Jane at Example dot org."
        expected = "Send it to jane@example.org."
        result = emails_only(input_text)
        assert result == expected, f"Input '{input_text}' should format to '{expected}' but got '{result}'"


class TestWrittenDomainEmails:
    """Test EMAIL entities whose domain was already transcribed with dots."""

    def test_written_domains(self, emails_only):
        test_cases = [
            ("john at yahoo.com", "john@yahoo.com"),
            ("arman at steno.ai", "arman@steno.ai"),
            ("write to jane dot smith at mail.company.io", "write to jane.smith@mail.company.io"),
        ]

        for input_text, expected in test_cases:
            result = emails_only(input_text)
            assert result == expected, f"Input '{input_text}' should format to '{expected}' but got '{result}'"


class TestNonEmails:
    """Plain uses of "at" and "dot" stay as spoken."""

    def test_at_in_sentences(self, emails_only):
        test_cases = [
            "I'll see you at home",
            "Look at this dot here",
            "meet me at the office dot",
            "we arrived at example dot xyz",
        ]

        for input_text in test_cases:
            result = emails_only(input_text)
            assert result == input_text, f"Input '{input_text}' should be unchanged but got '{result}'"
