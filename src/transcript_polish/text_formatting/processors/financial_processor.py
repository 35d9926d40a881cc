"""
Financial entity processor.

Anchors on the dollar unit word and reads the spoken amount to its left, with an
optional "and <number> cents" tail: "five dollars and ninety nine cents" -> "$5.99".
"""

from typing import Dict, List, Optional

from transcript_polish.text_formatting.common import Entity, EntityType
from transcript_polish.text_formatting.entity_processor import BaseNumericProcessor
from transcript_polish.text_formatting.utils import Token, split_trailing_punctuation


class FinancialProcessor(BaseNumericProcessor):
    """Processor for spoken dollar amounts."""

    def __init__(self, language: str = "en"):
        super().__init__(language)
        currency = self.resources.get("currency", {})
        self.dollar_units = {unit.lower() for unit in currency.get("dollar_units", [])}
        self.cent_units = {unit.lower() for unit in currency.get("cent_units", [])}
        self.symbol = currency.get("symbol", "$")

    def _init_conversion_methods(self) -> Dict[EntityType, str]:
        return {
            EntityType.CURRENCY: "convert_currency",
            EntityType.DOLLAR_CENTS: "convert_dollar_cents",
        }

    def anchor_words(self) -> set:
        return self.dollar_units

    def detect_at_anchor(self, text: str, tokens: List[Token], anchor: int) -> Optional[Entity]:
        found = self.scan_number_before(tokens, anchor, allow_digits=True)
        if found is None:
            return None
        first, dollars = found
        if isinstance(dollars, str):
            # Only whole digit amounts, "5.5 dollars" is left alone
            if not dollars.isdigit():
                return None
            dollars = int(dollars)

        start = tokens[first].start
        end = self.token_core_end(tokens[anchor])

        cents = self._scan_cents_tail(tokens, anchor)
        if cents is not None:
            cents_index, cents_value = cents
            end = self.token_core_end(tokens[cents_index])
            return Entity(
                start=start,
                end=end,
                text=text[start:end],
                type=EntityType.DOLLAR_CENTS,
                metadata={"dollars": dollars, "cents": cents_value},
            )

        return Entity(
            start=start,
            end=end,
            text=text[start:end],
            type=EntityType.CURRENCY,
            metadata={"dollars": dollars},
        )

    def _scan_cents_tail(self, tokens: List[Token], anchor: int) -> Optional[tuple[int, int]]:
        """Match "and <number words> cents" right after the anchor; cents must be below 100."""
        _core, trailing = split_trailing_punctuation(tokens[anchor].text)
        if trailing or anchor + 2 >= len(tokens):
            return None
        if tokens[anchor + 1].text.lower() not in self.number_parser.connectors:
            return None

        found = self.scan_number_after(tokens, anchor + 2, self.cent_units)
        if found is None or found[1] >= 100:
            return None
        return found

    # Conversion methods

    def convert_currency(self, entity: Entity, full_text: str = "") -> str:
        return f"{self.symbol}{entity.metadata['dollars']:,}"

    def convert_dollar_cents(self, entity: Entity, full_text: str = "") -> str:
        return f"{self.symbol}{entity.metadata['dollars']:,}.{entity.metadata['cents']:02d}"
