#!/usr/bin/env python3
"""
Value types configuring the normalization pipeline.

Every type decodes field by field: a missing or wrongly typed key falls back to
that field's default instead of failing the whole decode, and unknown keys are
ignored. Serialized keys use the camelCase names the settings file stores.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields, replace
from typing import Any, Iterable, Mapping

from .constants import get_resources


def _to_camel_case(name: str) -> str:
    first, *rest = name.split("_")
    return first + "".join(part.title() for part in rest)


def _read_bool(data: Mapping[str, Any], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def _read_int(data: Mapping[str, Any], key: str, default: int, minimum: int = 1) -> int:
    value = data.get(key)
    # bool is an int subclass, reject it explicitly
    if isinstance(value, int) and not isinstance(value, bool) and value >= minimum:
        return value
    return default


def _read_str(data: Mapping[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else default


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class FormattingConfig:
    """Independent toggles for the formatting stage."""

    remove_trailing_period: bool = True
    lowercase_short_phrases: bool = True
    fix_mid_sentence_capitalization: bool = True
    convert_numbers_to_digits: bool = True
    format_currency: bool = True
    format_percentages: bool = True
    format_times: bool = True
    deduplicate_words: bool = True
    format_emails: bool = True
    short_phrase_max_words: int = 5

    @classmethod
    def all_disabled(cls, **enabled: bool) -> "FormattingConfig":
        """Config with every rule off except the ones passed as keyword arguments."""
        toggles = {f.name: False for f in fields(cls) if f.type in ("bool", bool)}
        toggles.update(enabled)
        return cls(**toggles)

    @classmethod
    def from_dict(cls, data: Any) -> "FormattingConfig":
        if not isinstance(data, Mapping):
            return cls()

        defaults = cls()
        values: dict[str, Any] = {}
        for f in fields(cls):
            key = _to_camel_case(f.name)
            default = getattr(defaults, f.name)
            if f.name == "short_phrase_max_words":
                values[f.name] = _read_int(data, key, default)
            else:
                values[f.name] = _read_bool(data, key, default)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {_to_camel_case(f.name): getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class WordRemoval:
    """A user-authored, case-insensitive regex whose matches are stripped."""

    pattern: str
    is_enabled: bool = True
    id: str = field(default_factory=_new_id, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WordRemoval":
        return cls(
            pattern=_read_str(data, "pattern", ""),
            is_enabled=_read_bool(data, "isEnabled", True),
            id=_read_str(data, "id", "") or _new_id(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "isEnabled": self.is_enabled, "pattern": self.pattern}


@dataclass(frozen=True)
class WordRemapping:
    """A literal whole-word substitution applied after vocabulary correction."""

    match: str
    replacement: str
    is_enabled: bool = True
    id: str = field(default_factory=_new_id, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WordRemapping":
        return cls(
            match=_read_str(data, "match", ""),
            replacement=_read_str(data, "replacement", ""),
            is_enabled=_read_bool(data, "isEnabled", True),
            id=_read_str(data, "id", "") or _new_id(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "isEnabled": self.is_enabled,
            "match": self.match,
            "replacement": self.replacement,
        }


def default_word_removals(language: str = "en") -> tuple[WordRemoval, ...]:
    """Filler-word removal rules shipped with the language resources."""
    patterns = get_resources(language).get("filtering", {}).get("default_removal_patterns", [])
    return tuple(WordRemoval(pattern=pattern) for pattern in patterns)


def _decode_list(data: Mapping[str, Any], key: str, item_type, default: tuple) -> tuple:
    value = data.get(key)
    if not isinstance(value, list):
        return default
    return tuple(item_type.from_dict(item) for item in value if isinstance(item, Mapping))


@dataclass(frozen=True)
class TranscriptSettings:
    """
    Immutable snapshot of everything the pipeline reads for one call.

    Collections are stored as tuples so a snapshot handed to ``normalize`` cannot be
    mutated while the call is in flight.
    """

    smart_formatting_enabled: bool = True
    smart_formatting_config: FormattingConfig = field(default_factory=FormattingConfig)
    custom_vocabulary: tuple[str, ...] = ()
    word_removals_enabled: bool = True
    word_removals: tuple[WordRemoval, ...] = field(default_factory=default_word_removals)
    word_remappings: tuple[WordRemapping, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "custom_vocabulary", tuple(self.custom_vocabulary))
        object.__setattr__(self, "word_removals", tuple(self.word_removals))
        object.__setattr__(self, "word_remappings", tuple(self.word_remappings))

    @classmethod
    def from_dict(cls, data: Any) -> "TranscriptSettings":
        if not isinstance(data, Mapping):
            return cls()

        vocabulary = data.get("customVocabulary")
        if isinstance(vocabulary, list):
            vocabulary = tuple(word for word in vocabulary if isinstance(word, str))
        else:
            vocabulary = ()

        return cls(
            smart_formatting_enabled=_read_bool(data, "smartFormattingEnabled", True),
            smart_formatting_config=FormattingConfig.from_dict(data.get("smartFormattingConfig")),
            custom_vocabulary=vocabulary,
            word_removals_enabled=_read_bool(data, "wordRemovalsEnabled", True),
            word_removals=_decode_list(data, "wordRemovals", WordRemoval, default_word_removals()),
            word_remappings=_decode_list(data, "wordRemappings", WordRemapping, ()),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "smartFormattingEnabled": self.smart_formatting_enabled,
            "smartFormattingConfig": self.smart_formatting_config.to_dict(),
            "customVocabulary": list(self.custom_vocabulary),
            "wordRemovalsEnabled": self.word_removals_enabled,
            "wordRemovals": [removal.to_dict() for removal in self.word_removals],
            "wordRemappings": [remapping.to_dict() for remapping in self.word_remappings],
        }

    def with_vocabulary(self, extra: Iterable[str]) -> "TranscriptSettings":
        """Copy of these settings with ``extra`` appended to the vocabulary."""
        return replace(self, custom_vocabulary=self.custom_vocabulary + tuple(extra))
