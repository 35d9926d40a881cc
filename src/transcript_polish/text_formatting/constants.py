#!/usr/bin/env python3
"""Shared constants and the language resource loader for text formatting modules."""
from __future__ import annotations

import json
import logging
import os
import string
import threading
from typing import Any

# ==============================================================================
# I18N RESOURCE LOADER
# ==============================================================================

_RESOURCES: dict[str, dict[str, Any]] = {}  # Cache for loaded languages
_RESOURCE_PATH = os.path.join(os.path.dirname(__file__), "resources")
_LOCK = threading.Lock()  # For thread-safe lazy loading

# Suppress repeated warnings for missing language files
_WARNED_LANGUAGES: set[str] = set()


def get_resources(language: str = "en") -> dict[str, Any]:
    """
    Loads and caches language-specific resources from a JSON file.
    This is the single point of entry for all language-dependent constants.

    Args:
        language: Language code (e.g., 'en')

    Returns:
        dict: Loaded language resources

    Raises:
        ValueError: If the default language resource is missing or invalid

    """
    if language in _RESOURCES:
        return _RESOURCES[language]

    with _LOCK:
        # Another thread may have loaded it while we were waiting
        if language in _RESOURCES:
            return _RESOURCES[language]

        try:
            filepath = os.path.join(_RESOURCE_PATH, f"{language}.json")
            with open(filepath, encoding="utf-8") as f:
                resources: dict[str, Any] = json.load(f)
                _RESOURCES[language] = resources
            return resources
        except FileNotFoundError:
            if language != "en":
                if language not in _WARNED_LANGUAGES:
                    _WARNED_LANGUAGES.add(language)
                    logging.getLogger(__name__).warning(
                        f"Language resource '{language}.json' not found. Falling back to 'en'."
                    )
            else:
                raise ValueError("Default language resource 'en.json' not found.") from None
        except json.JSONDecodeError as e:
            raise ValueError(f"Error decoding JSON from {language}.json") from e

    # Only reached for a missing non-English file; the lock is released before recursing
    return get_resources("en")


# ==============================================================================
# PUNCTUATION
# ==============================================================================

# Punctuation stripped from a token before it is compared as a word
WORD_PUNCTUATION = string.punctuation + "‘’“”…"

# Token endings that close a sentence
SENTENCE_ENDINGS = (".", "!", "?")

# Closing characters that may follow sentence-ending punctuation ('done." next')
CLOSING_PUNCTUATION = "\"')]}’”"

# Apostrophes accepted in pronoun contractions
APOSTROPHES = ("'", "’")
