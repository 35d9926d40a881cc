#!/usr/bin/env python3
"""
Centralized regular expression patterns for text formatting.

Patterns that depend on language resources are built per language and cached;
static patterns are compiled once at import time.
"""
from __future__ import annotations

import re
from functools import lru_cache

from .constants import get_resources


def _alternation(words) -> str:
    """Regex alternation of literal words, longest first so prefixes never win."""
    return "|".join(re.escape(word) for word in sorted(words, key=len, reverse=True))


# ==============================================================================
# NUMERIC PATTERNS
# ==============================================================================


@lru_cache(maxsize=8)
def build_hyphenated_number_pattern(language: str = "en") -> re.Pattern[str]:
    """Free-standing tens compounds joined by a hyphen: "twenty-three", "twenty-first".

    Compounds inside longer hyphenated words ("forty-two-year-old") are not matched.
    """
    resources = get_resources(language)
    number_words = resources["number_words"]
    tens = number_words["tens"]
    units = [word for word, value in number_words["ones"].items() if 0 < value < 10]
    units += [word for word, (value, _suffix) in resources["ordinal_words"].items() if value < 10]
    return re.compile(
        rf"""
        (?<![\w-])
        ({_alternation(tens)})          # Tens word
        -
        ({_alternation(units)})         # Unit cardinal or ordinal
        (?![\w-])
        """,
        re.IGNORECASE | re.VERBOSE,
    )


# Bare integers of four or more digits that are not already grouped, part of a
# decimal or a dollar amount
THOUSANDS_CANDIDATE_PATTERN = re.compile(r"(?<![\w.,$])(\d{4,})(?![\w,]|\.\d)")

# A plain digit token ("5", "12.5")
DIGIT_TOKEN_PATTERN = re.compile(r"\d+(?:\.\d+)?")


# ==============================================================================
# TEMPORAL PATTERNS
# ==============================================================================

# "a.m.", "p.m", "A. M." -> AM/PM
DOTTED_MERIDIEM_PATTERN = re.compile(r"\b([ap])\.\s?m\b(\.)?", re.IGNORECASE)


@lru_cache(maxsize=8)
def _clock_words(language: str) -> tuple[str, str, str]:
    number_words = get_resources(language)["number_words"]
    ones = _alternation(number_words["ones"])
    tens = _alternation(number_words["tens"])
    zero_words = _alternation(get_resources(language)["temporal"]["minute_zero_words"])
    return ones, tens, zero_words


@lru_cache(maxsize=8)
def build_bare_meridiem_pattern(language: str = "en") -> re.Pattern[str]:
    """Undotted am/pm directly after a time-like token ("seven pm", "7 pm", "7:30pm")."""
    ones, tens, _zero_words = _clock_words(language)
    return re.compile(
        rf"""
        (?<!\w)
        (?P<time>{ones}|{tens}|\d{{1,2}}(?::\d{{2}})?)   # Hour/minute word or digits
        (?P<space>\s*)
        (?P<meridiem>[ap])m
        \b
        """,
        re.IGNORECASE | re.VERBOSE,
    )


@lru_cache(maxsize=8)
def build_time_patterns(language: str = "en") -> dict[str, re.Pattern[str]]:
    """
    Spoken clock time patterns, keyed by kind.

    hour_minute: "three thirty PM", "three oh five PM"
    digits: "3 30 PM"
    hour_only: "seven PM"
    """
    ones, tens, zero_words = _clock_words(language)
    return {
        "hour_minute": re.compile(
            rf"""
            \b
            (?P<hour>{ones})
            \s+
            (?P<minute>
                (?:{zero_words})\s+(?:{ones})       # "oh five"
                | (?:{tens})(?:[\s-]+(?:{ones}))?   # "thirty", "forty five"
                | (?:{ones})                        # "fifteen"
            )
            \s+
            (?P<meridiem>AM|PM)
            \b
            """,
            re.IGNORECASE | re.VERBOSE,
        ),
        "digits": re.compile(
            r"\b(?P<hour>\d{1,2})\s+(?P<minute>\d{2})\s+(?P<meridiem>AM|PM)\b",
            re.IGNORECASE,
        ),
        "hour_only": re.compile(
            rf"\b(?P<hour>{ones})\s+(?P<meridiem>AM|PM)\b",
            re.IGNORECASE,
        ),
    }


# ==============================================================================
# WEB PATTERNS
# ==============================================================================


@lru_cache(maxsize=8)
def build_email_patterns(language: str = "en") -> dict[str, re.Pattern[str]]:
    """
    Email patterns built around the spoken "at"/"dot" words and the TLD allow-list.

    written_domain: "john dot doe at company.com"
    spoken_domain: "john dot doe at company dot com"
    """
    web = get_resources(language)["web"]
    at_word = re.escape(web["at_word"])
    dot_word = re.escape(web["dot_word"])
    tlds = _alternation(web["email_tlds"])
    # A local/domain word that is not itself one of the joining words
    word = rf"(?!(?:{at_word}|{dot_word})\b)[a-z0-9][\w+-]*"
    local = rf"{word}(?:\s+{dot_word}\s+{word})*"

    return {
        "written_domain": re.compile(
            rf"""
            \b
            (?P<local>{local})
            \s+{at_word}\s+
            (?P<domain>(?:[a-z0-9-]+\.)+(?:{tlds}))
            \b
            """,
            re.IGNORECASE | re.VERBOSE,
        ),
        "spoken_domain": re.compile(
            rf"""
            \b
            (?P<local>{local})
            \s+{at_word}\s+
            (?P<domain>{local})
            \s+{dot_word}\s+
            (?P<tld>{tlds})
            \b
            """,
            re.IGNORECASE | re.VERBOSE,
        ),
    }


@lru_cache(maxsize=8)
def build_spoken_dot_pattern(language: str = "en") -> re.Pattern[str]:
    dot_word = re.escape(get_resources(language)["web"]["dot_word"])
    return re.compile(rf"\s+{dot_word}\s+", re.IGNORECASE)


# ==============================================================================
# CLEANUP PATTERNS
# ==============================================================================

SPACE_BEFORE_PUNCTUATION_PATTERN = re.compile(r"\s+([,.!?;:])")
REPEATED_COMMA_PATTERN = re.compile(r",(?:\s*,)+")
LEADING_PUNCTUATION_PATTERN = re.compile(r"^[\s,;:]+")
