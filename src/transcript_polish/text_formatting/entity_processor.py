"""
Generic base class for entity detection and conversion.

Every formatter follows the same detector/converter pattern: detect entity spans on
the unmodified input, convert each span, then rebuild the output by copying the
text between spans. Nothing is rewritten in place, so offsets found during
detection never go stale.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Pattern

from transcript_polish.core.config import setup_logging
from transcript_polish.text_formatting.common import Entity, EntityType, get_number_parser
from transcript_polish.text_formatting.constants import get_resources
from transcript_polish.text_formatting.regex_patterns import DIGIT_TOKEN_PATTERN
from transcript_polish.text_formatting.utils import (
    Token,
    overlaps_with_entity,
    rebuild_text,
    split_trailing_punctuation,
    tokenize,
)

logger = setup_logging(__name__, log_filename="text_formatting.txt", include_console=False)


@dataclass
class ProcessingRule:
    """Defines a rule for processing entities."""
    pattern: Pattern[str]
    entity_type: EntityType
    # Returning None rejects the match
    metadata_extractor: Optional[Callable[[re.Match], Optional[Dict[str, Any]]]] = None
    priority: int = 0

    def __post_init__(self):
        """Ensure pattern is compiled."""
        if isinstance(self.pattern, str):
            self.pattern = re.compile(self.pattern, re.IGNORECASE)


class EntityProcessor(ABC):
    """
    Generic base class for entity detection and conversion.

    Subclasses declare their regex rules and the conversion method for each entity
    type; ``process`` runs detection and conversion over one string.
    """

    def __init__(self, language: str = "en"):
        self.language = language
        self.number_parser = get_number_parser(language)
        self.resources = get_resources(language)

        self.detection_rules = self._init_detection_rules()
        self.conversion_methods = self._init_conversion_methods()

    @abstractmethod
    def _init_detection_rules(self) -> List[ProcessingRule]:
        """Initialize detection rules specific to this processor."""
        pass

    @abstractmethod
    def _init_conversion_methods(self) -> Dict[EntityType, str]:
        """Initialize conversion method mapping."""
        pass

    def process(self, text: str) -> str:
        """Detect entities in text and return the text with every entity converted."""
        entities: List[Entity] = []
        self.detect_entities(text, entities)
        if not entities:
            return text

        logger.debug(f"{type(self).__name__} found {len(entities)} entities: {[e.text for e in entities]}")
        return rebuild_text(text, entities, lambda entity: self.convert_entity(entity, text))

    def detect_entities(self, text: str, entities: List[Entity],
                        all_entities: Optional[List[Entity]] = None) -> None:
        """
        Generic entity detection using processing rules.

        Args:
            text: Text to process
            entities: List to append detected entities to
            all_entities: Optional list of all entities for overlap checking
        """
        # Sort rules by priority (highest first)
        for rule in sorted(self.detection_rules, key=lambda r: r.priority, reverse=True):
            self._apply_detection_rule(rule, text, entities, all_entities)

    def _apply_detection_rule(self, rule: ProcessingRule, text: str,
                              entities: List[Entity], all_entities: Optional[List[Entity]]) -> None:
        """Apply a single detection rule."""
        check_entities = all_entities if all_entities is not None else entities

        for match in rule.pattern.finditer(text):
            if not self._is_valid_entity_position(match.start(), match.end(), check_entities):
                continue

            metadata: Optional[Dict[str, Any]] = {}
            if rule.metadata_extractor:
                metadata = rule.metadata_extractor(match)
                if metadata is None:
                    continue

            self._add_entity(
                Entity(start=match.start(), end=match.end(), text=match.group(), type=rule.entity_type, metadata=metadata),
                entities,
                all_entities,
            )

    def _add_entity(self, entity: Entity, entities: List[Entity],
                    all_entities: Optional[List[Entity]] = None) -> bool:
        check_entities = all_entities if all_entities is not None else entities
        if not self._is_valid_entity_position(entity.start, entity.end, check_entities):
            return False
        entities.append(entity)
        if all_entities is not None and all_entities is not entities:
            all_entities.append(entity)
        return True

    def convert_entity(self, entity: Entity, full_text: str = "") -> str:
        """
        Generic entity conversion using method dispatch.

        Args:
            entity: Entity to convert
            full_text: Full text for context analysis

        Returns:
            Converted text, or the original entity text when no converter applies
        """
        converter_method = self.conversion_methods.get(entity.type)
        if converter_method and hasattr(self, converter_method):
            converted = getattr(self, converter_method)(entity, full_text)
            if converted is not None:
                return converted
        return entity.text

    # Common utility methods

    def _is_valid_entity_position(self, start: int, end: int, existing_entities: List[Entity]) -> bool:
        """Check if entity position doesn't overlap with existing entities."""
        return not overlaps_with_entity(start, end, existing_entities)


class BaseNumericProcessor(EntityProcessor):
    """Base class for processors that anchor on a unit word and read the number before it."""

    def _init_detection_rules(self) -> List[ProcessingRule]:
        # Anchor scanning is token based, see detect_entities
        return []

    def _number_words_in(self, token: Token) -> Optional[List[str]]:
        """
        Number words carried by one token, splitting hyphenated compounds.

        Returns None when the token has trailing punctuation or holds anything other
        than number words, connectors or articles.
        """
        core, trailing = split_trailing_punctuation(token.text)
        if trailing or not core:
            return None
        parser = self.number_parser
        words = core.lower().split("-")
        if all(parser.is_number_word(w) or w in parser.connectors or w in parser.articles for w in words):
            if len(words) > 1 and not all(parser.is_number_word(w) for w in words):
                return None
            return words
        return None

    def scan_number_before(self, tokens: List[Token], anchor: int,
                           allow_digits: bool = False) -> Optional[tuple[int, Any]]:
        """
        Find the spoken number immediately before ``tokens[anchor]``.

        Walks left while tokens are number words, then trims leading connectors and
        dangling articles. With ``allow_digits`` a single digit token directly before
        the anchor is accepted instead.

        Returns:
            (index of the first number token, parsed value) or None; the value is
            the digit string itself when a digit token was accepted
        """
        if anchor == 0:
            return None

        previous = tokens[anchor - 1]
        if allow_digits and DIGIT_TOKEN_PATTERN.fullmatch(previous.text):
            return anchor - 1, previous.text

        first = anchor
        collected: List[List[str]] = []
        while first > 0:
            words = self._number_words_in(tokens[first - 1])
            if words is None:
                break
            collected.insert(0, words)
            first -= 1

        parser = self.number_parser
        # "and fifty dollars": a leading connector belongs to the surrounding sentence
        while collected:
            head = collected[0]
            if head[0] in parser.connectors:
                collected.pop(0)
                first += 1
            elif head[0] in parser.articles and (len(collected) < 2 or not parser.is_scale_word(collected[1][0])):
                collected.pop(0)
                first += 1
            else:
                break

        if not collected:
            return None

        value = parser.parse_number_words([word for words in collected for word in words])
        if value is None:
            return None
        return first, value

    def scan_number_after(self, tokens: List[Token], start: int, end_words: set) -> Optional[tuple[int, int]]:
        """
        Read number words from ``tokens[start]`` up to a token whose core is in ``end_words``.

        Returns:
            (index of the end word token, parsed value) or None
        """
        words: List[str] = []
        index = start
        while index < len(tokens):
            core, _trailing = split_trailing_punctuation(tokens[index].text)
            if core.lower() in end_words:
                break
            token_words = self._number_words_in(tokens[index])
            if token_words is None:
                return None
            words.extend(token_words)
            index += 1
        else:
            return None

        value = self.number_parser.parse_number_words(words)
        if value is None:
            return None
        return index, value

    @staticmethod
    def token_core_end(token: Token) -> int:
        """End offset of a token without its trailing punctuation."""
        core, _trailing = split_trailing_punctuation(token.text)
        return token.start + len(core)

    def anchor_indices(self, tokens: List[Token], anchor_words: set) -> List[int]:
        return [
            index for index, token in enumerate(tokens)
            if split_trailing_punctuation(token.text)[0].lower() in anchor_words
        ]

    def detect_entities(self, text: str, entities: List[Entity],
                        all_entities: Optional[List[Entity]] = None) -> None:
        tokens = tokenize(text)
        for anchor in self.anchor_indices(tokens, self.anchor_words()):
            entity = self.detect_at_anchor(text, tokens, anchor)
            if entity is not None:
                self._add_entity(entity, entities, all_entities)

    def anchor_words(self) -> set:
        return set()

    def detect_at_anchor(self, text: str, tokens: List[Token], anchor: int) -> Optional[Entity]:
        return None
