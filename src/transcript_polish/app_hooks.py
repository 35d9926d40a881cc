#!/usr/bin/env python3
"""
App hooks for the transcript-polish CLI - implementation of every command.
Each hook returns the process exit code.
"""

import json as json_lib
import logging
import sys
from dataclasses import replace
from typing import Optional, Sequence

import click
from rich.console import Console

from transcript_polish.core.config import ConfigurationError, get_config, load_config
from transcript_polish.core.logging import LogContext, StructuredFormatter
from transcript_polish.text_formatting.common import parse_number_words
from transcript_polish.text_formatting.formatting_config import TranscriptSettings

error_console = Console(stderr=True)


def _enable_debug_logging() -> None:
    """Send DEBUG output of every transcript_polish logger to stderr."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter())
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("transcript_polish") and isinstance(logger, logging.Logger):
            logger.setLevel(logging.DEBUG)
            logger.addHandler(handler)


def _report_error(error: Exception, debug: bool) -> int:
    if debug:
        error_console.print_exception()
    else:
        error_console.print(f"[red]Error:[/red] {error}")
    return 1


def _load_settings(config: Optional[str]) -> TranscriptSettings:
    loader = load_config(config) if config else get_config()
    return loader.settings


def on_format(
    text: Optional[str],
    config: Optional[str],
    vocab: Sequence[str],
    no_formatting: bool,
    json: bool,
    debug: bool,
    **kwargs,
) -> int:
    """Handle the format command - normalize text from the argument or stdin"""
    if debug:
        _enable_debug_logging()

    if text is None:
        if sys.stdin.isatty():
            error_console.print("[red]Error:[/red] no text given (pass TEXT or pipe it on stdin)")
            return 1
        text = sys.stdin.read().rstrip("\n")

    try:
        settings = _load_settings(config)
    except ConfigurationError as e:
        return _report_error(e, debug)

    if vocab:
        settings = settings.with_vocabulary(vocab)
    if no_formatting:
        settings = replace(settings, smart_formatting_enabled=False)

    # Imported here so --help stays fast
    from transcript_polish.text_formatting.formatter import format_transcription

    with LogContext(command="format"):
        result = format_transcription(text, settings)

    if json:
        click.echo(json_lib.dumps({"input": text, "output": result}, ensure_ascii=False))
    else:
        click.echo(result)
    return 0


def on_parse_number(words: Sequence[str], json: bool = False, **kwargs) -> int:
    """Handle the parse-number command - fold number words into an integer"""
    tokens = [token for word in words for token in word.lower().replace("-", " ").split()]
    value = parse_number_words(tokens)
    if value is None:
        error_console.print(f"[red]Error:[/red] cannot parse '{' '.join(words)}' as a number")
        return 1

    if json:
        click.echo(json_lib.dumps({"words": tokens, "value": value}))
    else:
        click.echo(str(value))
    return 0


def on_config(config: Optional[str], defaults: bool, debug: bool = False, **kwargs) -> int:
    """Handle the config command - print the effective settings as JSON"""
    try:
        settings = TranscriptSettings() if defaults else _load_settings(config)
    except ConfigurationError as e:
        return _report_error(e, debug)

    click.echo(json_lib.dumps(settings.to_dict(), indent=2, ensure_ascii=False))
    return 0
