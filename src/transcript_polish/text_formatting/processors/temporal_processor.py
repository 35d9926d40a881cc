"""
Temporal entity processor.

AM/PM spellings are normalized first ("a.m.", "pm" -> "AM", "PM"), then spoken clock
times are rewritten: "three thirty PM" -> "3:30 PM", "seven PM" -> "7 PM",
"3 30 PM" -> "3:30 PM".
"""

import re
from typing import Any, Dict, List, Optional

from transcript_polish.text_formatting import regex_patterns
from transcript_polish.text_formatting.common import Entity, EntityType
from transcript_polish.text_formatting.entity_processor import EntityProcessor, ProcessingRule


class TemporalProcessor(EntityProcessor):
    """Processor for clock times with AM/PM."""

    def __init__(self, language: str = "en"):
        self.time_patterns = regex_patterns.build_time_patterns(language)
        super().__init__(language)
        self.minute_zero_words = set(self.resources.get("temporal", {}).get("minute_zero_words", []))
        self.bare_meridiem_pattern = regex_patterns.build_bare_meridiem_pattern(language)

    def _init_detection_rules(self) -> List[ProcessingRule]:
        """Initialize detection rules for clock times."""
        return [
            # "three thirty PM", "three oh five PM"
            ProcessingRule(
                pattern=self.time_patterns["hour_minute"],
                entity_type=EntityType.TIME_AMPM,
                metadata_extractor=self._extract_spoken_time,
                priority=20,
            ),
            # "3 30 PM"
            ProcessingRule(
                pattern=self.time_patterns["digits"],
                entity_type=EntityType.TIME_AMPM,
                metadata_extractor=self._extract_digit_time,
                priority=15,
            ),
            # "seven PM"
            ProcessingRule(
                pattern=self.time_patterns["hour_only"],
                entity_type=EntityType.TIME_AMPM,
                metadata_extractor=self._extract_spoken_time,
                priority=10,
            ),
        ]

    def _init_conversion_methods(self) -> Dict[EntityType, str]:
        return {EntityType.TIME_AMPM: "convert_time"}

    def process(self, text: str) -> str:
        return super().process(self.normalize_meridiem(text))

    def normalize_meridiem(self, text: str) -> str:
        """Rewrite AM/PM spellings to "AM"/"PM"; bare am/pm only after a time-like token."""

        def replace_dotted(match: re.Match) -> str:
            meridiem = f"{match.group(1).upper()}M"
            # The last period of "a.m." also ends the sentence at the end of the text
            # or before a capitalized word
            if match.group(2):
                rest = text[match.end():].lstrip()
                if not rest or rest[0].isupper():
                    return meridiem + "."
            return meridiem

        text = regex_patterns.DOTTED_MERIDIEM_PATTERN.sub(replace_dotted, text)
        return self.bare_meridiem_pattern.sub(
            lambda m: f"{m.group('time')} {m.group('meridiem').upper()}M", text
        )

    # Metadata extractors

    def _extract_spoken_time(self, match: re.Match) -> Optional[Dict[str, Any]]:
        hour = self.number_parser.parse_clock_word([match.group("hour")])
        if hour is None or not 1 <= hour <= 12:
            return None

        minute = None
        if "minute" in match.groupdict():
            minute = self._parse_minute(match.group("minute"))
            if minute is None:
                return None

        return {"hour": hour, "minute": minute, "meridiem": match.group("meridiem").upper()}

    def _parse_minute(self, minute_text: str) -> Optional[int]:
        words = re.split(r"[\s-]+", minute_text.lower())
        if words[0] in self.minute_zero_words:
            # "oh five" -> 5
            minute = self.number_parser.parse_clock_word(words[1:])
            return minute if minute is not None and 1 <= minute <= 9 else None

        # "five" -> 5, "thirty" -> 30, "forty five" -> 45
        minute = self.number_parser.parse_clock_word(words)
        return minute if minute is not None and 0 <= minute <= 59 else None

    def _extract_digit_time(self, match: re.Match) -> Optional[Dict[str, Any]]:
        hour = int(match.group("hour"))
        minute = int(match.group("minute"))
        if not 1 <= hour <= 12 or not 0 <= minute <= 59:
            return None
        return {"hour": hour, "minute": minute, "meridiem": match.group("meridiem").upper()}

    # Conversion methods

    def convert_time(self, entity: Entity, full_text: str = "") -> str:
        metadata = entity.metadata
        if metadata["minute"] is None:
            return f"{metadata['hour']} {metadata['meridiem']}"
        return f"{metadata['hour']}:{metadata['minute']:02d} {metadata['meridiem']}"
