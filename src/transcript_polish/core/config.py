#!/usr/bin/env python3
"""Configuration loader that reads transcript settings from config.json"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

from transcript_polish.text_formatting.formatting_config import TranscriptSettings

CONFIG_ENV_VAR = "TRANSCRIPT_POLISH_CONFIG"
CONFIG_FILENAMES = ("config.jsonc", "config.json")


class ConfigurationError(Exception):
    """Raised when a settings file exists but cannot be used."""
    pass


class ConfigLoader:
    """Load transcript settings from config.json (comments allowed)"""

    def __init__(self, config_path: str | Path | None = None) -> None:
        if config_path is None:
            config_path = self._find_config_file()
        elif not Path(config_path).is_file():
            raise ConfigurationError(f"Config file not found: {config_path}")

        # None means built-in defaults
        self.config_file = str(config_path) if config_path is not None else None
        self._config: dict[str, Any] = self._read(Path(config_path)) if config_path is not None else {}

    @staticmethod
    def _find_config_file() -> Path | None:
        """Find a config file: environment variable first, then the working directory"""
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            if not Path(env_path).is_file():
                raise ConfigurationError(f"{CONFIG_ENV_VAR} points to a missing file: {env_path}")
            return Path(env_path)

        for filename in CONFIG_FILENAMES:
            config_path = Path.cwd() / filename
            if config_path.exists():
                return config_path

        return None

    @staticmethod
    def _read(config_path: Path) -> dict[str, Any]:
        try:
            content = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e

        # Remove single-line comments (// ...) for JSONC support, leaving "://" in URLs alone
        content = re.sub(r"(?<![:\"])//.*$", "", content, flags=re.MULTILINE)

        try:
            config = json.loads(content) if content.strip() else {}
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a JSON object")
        return config

    @property
    def settings(self) -> TranscriptSettings:
        """Immutable settings snapshot decoded field by field from the file."""
        return TranscriptSettings.from_dict(self._config)


# Global instance, created on first use
_config_loader: ConfigLoader | None = None


def get_config() -> ConfigLoader:
    """Get the global config loader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def reset_config() -> None:
    """Forget the global loader so the next get_config() reads the file again."""
    global _config_loader
    _config_loader = None


def load_config(config_path: str | Path | None = None) -> ConfigLoader:
    """Load configuration from config file (alias for creating ConfigLoader)."""
    return ConfigLoader(config_path)


# ========================= CENTRALIZED LOGGING SETUP =========================


def setup_logging(
    module_name: str,
    log_level: str | None = None,
    include_console: bool | None = None,
    include_file: bool | None = None,
    log_filename: str | None = None,
) -> logging.LoggerAdapter:
    """
    Setup standardized logging for transcript_polish modules.

    Args:
        module_name: Name of the module (usually __name__)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        include_console: Whether to log to console (None follows LOG_OUTPUT)
        include_file: Whether to log to file (None follows LOG_OUTPUT)
        log_filename: Optional custom log filename (defaults to module-based name)

    Returns:
        Configured ContextLogger instance

    """
    from .logging import get_log_output, setup_structured_logging

    env_output = get_log_output()
    if include_console is None:
        include_console = env_output in ("console", "both")
    if include_file is None:
        include_file = env_output in ("file", "both")

    if include_console and include_file:
        log_output = "both"
    elif include_console:
        log_output = "console"
    elif include_file:
        log_output = "file"
    else:
        log_output = "none"

    return setup_structured_logging(
        module_name,
        log_level=log_level,
        log_output=log_output,
        log_filename=log_filename,
    )
