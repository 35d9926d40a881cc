"""Percentage entity processor: "fifty percent" -> "50%", "12.5 percent" -> "12.5%"."""

from typing import Dict, List, Optional

from transcript_polish.text_formatting.common import Entity, EntityType
from transcript_polish.text_formatting.entity_processor import BaseNumericProcessor
from transcript_polish.text_formatting.utils import Token


class PercentageProcessor(BaseNumericProcessor):
    """Processor for spoken percentages."""

    def __init__(self, language: str = "en"):
        super().__init__(language)
        percent = self.resources.get("percent", {})
        self.units = {unit.lower() for unit in percent.get("units", [])}
        self.symbol = percent.get("symbol", "%")

    def _init_conversion_methods(self) -> Dict[EntityType, str]:
        return {EntityType.PERCENT: "convert_percent"}

    def anchor_words(self) -> set:
        return self.units

    def detect_at_anchor(self, text: str, tokens: List[Token], anchor: int) -> Optional[Entity]:
        # A digit token stands alone; it never chains with number words further left
        found = self.scan_number_before(tokens, anchor, allow_digits=True)
        if found is None:
            return None

        first, value = found
        start = tokens[first].start
        end = self.token_core_end(tokens[anchor])
        return Entity(start=start, end=end, text=text[start:end], type=EntityType.PERCENT, metadata={"value": value})

    def convert_percent(self, entity: Entity, full_text: str = "") -> str:
        value = entity.metadata["value"]
        amount = value if isinstance(value, str) else f"{value:,}"
        return f"{amount}{self.symbol}"
