#!/usr/bin/env python3
"""Smart capitalization for short dictated phrases and mid-sentence capitals."""
from __future__ import annotations

from typing import Iterable

from transcript_polish.core.config import setup_logging

from .capitalizer_protection import is_protected_word
from .constants import CLOSING_PUNCTUATION, SENTENCE_ENDINGS
from .formatting_config import FormattingConfig
from .utils import tokenize

# Setup logging
logger = setup_logging(__name__, log_filename="text_formatting.txt", include_console=False)


def _first_cased_index(word: str) -> int | None:
    for index, char in enumerate(word):
        if char.isalpha():
            return index
    return None


class SmartCapitalizer:
    """
    Rule based capitalization driven by FormattingConfig.

    Short phrases (no more words than ``short_phrase_max_words``) lose a single
    trailing period and the capital of their first word; capitals in the middle of
    a sentence are lowered. Protected words (pronoun "I", acronyms, vocabulary) are
    never touched.
    """

    def __init__(self, config: FormattingConfig | None = None, vocabulary: Iterable[str] = ()):
        self.config = config or FormattingConfig()
        self.vocabulary = tuple(vocabulary)

    def is_short(self, text: str) -> bool:
        return len(text.split()) <= self.config.short_phrase_max_words

    def capitalize(self, text: str) -> str:
        """Apply every enabled capitalization rule in order."""
        short = self.is_short(text)

        if self.config.remove_trailing_period and short:
            text = self.remove_trailing_period(text)
            logger.debug(f"After trailing period removal: '{text}'")

        if self.config.lowercase_short_phrases and short:
            text = self.lowercase_first_letter(text)
            logger.debug(f"After short phrase lowercasing: '{text}'")

        if self.config.fix_mid_sentence_capitalization:
            text = self.fix_mid_sentence_capitals(text)
            logger.debug(f"After mid-sentence fix: '{text}'")

        return text

    @staticmethod
    def remove_trailing_period(text: str) -> str:
        """Strip one trailing "." unless it is part of an ellipsis or is all there is."""
        stripped = text.rstrip()
        if stripped.endswith(".") and not stripped.endswith("..") and len(stripped) > 1:
            return stripped[:-1]
        return text

    def lowercase_first_letter(self, text: str) -> str:
        """Lowercase the first letter of the first word unless that word is protected."""
        tokens = tokenize(text)
        if not tokens:
            return text

        first = tokens[0]
        if is_protected_word(first.text, self.vocabulary):
            return text

        index = _first_cased_index(first.text)
        if index is None or not first.text[index].isupper():
            return text

        position = first.start + index
        return text[:position] + text[position].lower() + text[position + 1:]

    def fix_mid_sentence_capitals(self, text: str) -> str:
        """
        Lowercase capitalized words that do not start a sentence.

        The first word and any word after a token ending in ".", "!" or "?" (closing
        quotes and brackets allowed after the mark) start a sentence.
        """
        parts: list[str] = []
        cursor = 0
        sentence_start = True
        for token in tokenize(text):
            word = token.text
            if not sentence_start and not is_protected_word(word, self.vocabulary):
                index = _first_cased_index(word)
                if index is not None and word[index].isupper():
                    word = word.lower()

            parts.append(text[cursor:token.start])
            parts.append(word)
            cursor = token.end
            sentence_start = token.text.rstrip(CLOSING_PUNCTUATION).endswith(SENTENCE_ENDINGS)

        parts.append(text[cursor:])
        return "".join(parts)
