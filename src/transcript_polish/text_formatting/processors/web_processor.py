"""
Web entity processor for spoken email addresses.

"john dot doe at company dot com" -> "john.doe@company.com"
"arman at steno.ai" -> "arman@steno.ai"
"""

import re
from typing import Any, Dict, List, Optional

from transcript_polish.text_formatting import regex_patterns
from transcript_polish.text_formatting.common import Entity, EntityType
from transcript_polish.text_formatting.entity_processor import EntityProcessor, ProcessingRule


class WebProcessor(EntityProcessor):
    """Processor for email addresses spoken with "at" and "dot"."""

    def __init__(self, language: str = "en"):
        self.email_patterns = regex_patterns.build_email_patterns(language)
        self.spoken_dot_pattern = regex_patterns.build_spoken_dot_pattern(language)
        super().__init__(language)

    def _init_detection_rules(self) -> List[ProcessingRule]:
        """Initialize detection rules for email entities."""
        return [
            # Domain fully spoken: "john at gmail dot com"
            ProcessingRule(
                pattern=self.email_patterns["spoken_domain"],
                entity_type=EntityType.SPOKEN_EMAIL,
                metadata_extractor=self._extract_spoken_email,
                priority=20,
            ),
            # Domain already written: "john at yahoo.com"
            ProcessingRule(
                pattern=self.email_patterns["written_domain"],
                entity_type=EntityType.EMAIL,
                metadata_extractor=self._extract_written_email,
                priority=10,
            ),
        ]

    def _init_conversion_methods(self) -> Dict[EntityType, str]:
        return {
            EntityType.SPOKEN_EMAIL: "convert_email",
            EntityType.EMAIL: "convert_email",
        }

    def _join_dots(self, spoken: str) -> str:
        return self.spoken_dot_pattern.sub(".", spoken)

    def _extract_spoken_email(self, match: re.Match) -> Optional[Dict[str, Any]]:
        local = self._join_dots(match.group("local"))
        domain = f"{self._join_dots(match.group('domain'))}.{match.group('tld')}"
        return {"local": local, "domain": domain}

    def _extract_written_email(self, match: re.Match) -> Optional[Dict[str, Any]]:
        return {"local": self._join_dots(match.group("local")), "domain": match.group("domain")}

    def convert_email(self, entity: Entity, full_text: str = "") -> str:
        return f"{entity.metadata['local']}@{entity.metadata['domain']}".lower()
