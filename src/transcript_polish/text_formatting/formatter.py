#!/usr/bin/env python3
"""
Transcript normalization pipeline.

The formatting stage (``TextFormatter.apply``) runs its rules in a fixed order:
deduplication, email, time, currency, percentage, number conversion, thousands
grouping, then the capitalization rules and a final whitespace cleanup. ``normalize``
layers word removal, vocabulary correction and word remapping on top.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from transcript_polish.core.config import get_config, setup_logging

from .capitalizer import SmartCapitalizer
from .formatter_components.pipeline.step1_cleanup import normalize_whitespace, remove_duplicate_words
from .formatting_config import FormattingConfig, TranscriptSettings, WordRemapping, WordRemoval
from .processors import FinancialProcessor, NumericProcessor, PercentageProcessor, TemporalProcessor, WebProcessor
from .vocabulary import VocabularyApplier, WordRemappingApplier, WordRemovalApplier

# Setup logging for this module
logger = setup_logging(__name__, log_filename="text_formatting.txt", include_console=False)


class TextFormatter:
    """Runs the formatting stage and the full normalization pipeline."""

    def __init__(self, language: str = "en"):
        self.language = language

        # Processors keep no per-call state, one set serves every call
        self.web_processor = WebProcessor(language)
        self.temporal_processor = TemporalProcessor(language)
        self.financial_processor = FinancialProcessor(language)
        self.percentage_processor = PercentageProcessor(language)
        self.numeric_processor = NumericProcessor(language)

    def apply(self, text: str, config: FormattingConfig | None = None, vocabulary: Iterable[str] = ()) -> str:
        """
        Formatting stage.

        Args:
            text: Raw transcribed text
            config: Rule toggles (defaults to every rule enabled)
            vocabulary: User vocabulary, protects words from lowercasing

        Returns:
            Formatted text; empty or whitespace-only input gives ""

        """
        if not text or not text.strip():
            logger.debug("Empty text, skipping formatting")
            return ""

        config = config or FormattingConfig()

        if config.deduplicate_words:
            text = remove_duplicate_words(text)
            logger.debug(f"Step 1 - After deduplication: '{text}'")

        if config.format_emails:
            text = self.web_processor.process(text)
            logger.debug(f"Step 2 - After email formatting: '{text}'")

        if config.format_times:
            text = self.temporal_processor.process(text)
            logger.debug(f"Step 3 - After time formatting: '{text}'")

        if config.format_currency:
            text = self.financial_processor.process(text)
            logger.debug(f"Step 4 - After currency formatting: '{text}'")

        if config.format_percentages:
            text = self.percentage_processor.process(text)
            logger.debug(f"Step 5 - After percentage formatting: '{text}'")

        if config.convert_numbers_to_digits:
            text = self.numeric_processor.process(text)
            text = self.numeric_processor.group_thousands(text)
            logger.debug(f"Step 6 - After number conversion: '{text}'")

        text = SmartCapitalizer(config, vocabulary).capitalize(text)
        logger.debug(f"Step 7 - After capitalization: '{text}'")

        return normalize_whitespace(text)

    def normalize(
        self,
        text: str,
        config: FormattingConfig | None = None,
        vocabulary: Iterable[str] = (),
        removal_rules: Sequence[WordRemoval] = (),
        remapping_rules: Sequence[WordRemapping] = (),
        *,
        smart_formatting_enabled: bool = True,
        word_removals_enabled: bool = True,
    ) -> str:
        """Full pipeline: formatting stage, word removal, vocabulary, remapping."""
        if not text or not text.strip():
            logger.debug("Empty text, skipping normalization")
            return ""

        vocabulary = tuple(vocabulary)

        if smart_formatting_enabled:
            text = self.apply(text, config, vocabulary)

        if word_removals_enabled:
            text = WordRemovalApplier(removal_rules).apply(text)
            logger.debug(f"After word removal: '{text}'")

        text = VocabularyApplier(vocabulary).apply(text)
        text = WordRemappingApplier(remapping_rules).apply(text)
        logger.debug(f"After vocabulary and remapping: '{text}'")
        return text

    def format_transcription(self, text: str, settings: TranscriptSettings | None = None) -> str:
        """Normalize text with a settings snapshot (the loaded config file by default)."""
        if settings is None:
            settings = get_config().settings

        if not text or not text.strip():
            logger.debug("Empty text, skipping formatting")
            return ""

        logger.info(f"Original text: '{text}'")
        result = self.normalize(
            text,
            settings.smart_formatting_config,
            settings.custom_vocabulary,
            settings.word_removals,
            settings.word_remappings,
            smart_formatting_enabled=settings.smart_formatting_enabled,
            word_removals_enabled=settings.word_removals_enabled,
        )
        logger.info(f"Final formatted: '{result}'")
        return result


_formatter_instance: TextFormatter | None = None


def get_formatter() -> TextFormatter:
    global _formatter_instance
    if _formatter_instance is None:
        _formatter_instance = TextFormatter()
    return _formatter_instance


def apply_formatting(text: str, config: FormattingConfig | None = None, vocabulary: Iterable[str] = ()) -> str:
    """Run only the formatting stage."""
    return get_formatter().apply(text, config, vocabulary)


def normalize(
    text: str,
    config: FormattingConfig | None = None,
    vocabulary: Iterable[str] = (),
    removal_rules: Sequence[WordRemoval] = (),
    remapping_rules: Sequence[WordRemapping] = (),
    *,
    smart_formatting_enabled: bool = True,
    word_removals_enabled: bool = True,
) -> str:
    """
    Normalize raw transcribed text.

    Pure function of its arguments: formatting stage (when enabled), word removal
    (when enabled), vocabulary correction, then word remapping.
    """
    return get_formatter().normalize(
        text,
        config,
        vocabulary,
        removal_rules,
        remapping_rules,
        smart_formatting_enabled=smart_formatting_enabled,
        word_removals_enabled=word_removals_enabled,
    )


def format_transcription(text: str, settings: TranscriptSettings | None = None) -> str:
    """
    Format transcribed text with the user's settings.

    This is the main entry point for host applications: it reads the settings file
    through ``get_config()`` unless a snapshot is passed in.

    Args:
        text: The raw transcribed text
        settings: Settings snapshot to use instead of the loaded config

    Returns:
        Fully normalized text

    """
    return get_formatter().format_transcription(text, settings)
