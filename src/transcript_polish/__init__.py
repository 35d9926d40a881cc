"""
Transcript Polish - rule based normalization of raw speech-to-text output.

This package provides:
- Spoken number, ordinal, currency, percentage, time and email formatting
- Duplicate word removal and capitalization fixes for dictated phrases
- Vocabulary casing, filler word removal and word remapping
"""

__version__ = "1.0.0"

# Import the pipeline with: from transcript_polish.text_formatting.formatter import normalize

__all__ = [
    "__version__",
]
