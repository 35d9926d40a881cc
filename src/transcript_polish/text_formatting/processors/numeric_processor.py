"""
Numeric entity processor for cardinals and ordinals.

Contiguous spoken number words are folded into digits ("one hundred and fifty" ->
"150", "seven million five hundred and twenty seven thousand" -> "7,527,000") and
ordinals closing a number become numeric ordinals ("twenty-first" -> "21st").
"""

from typing import Dict, List, Optional

from transcript_polish.core.config import setup_logging
from transcript_polish.text_formatting import regex_patterns
from transcript_polish.text_formatting.common import Entity, EntityType
from transcript_polish.text_formatting.entity_processor import EntityProcessor, ProcessingRule
from transcript_polish.text_formatting.utils import Token, split_trailing_punctuation, tokenize

logger = setup_logging(__name__, log_filename="text_formatting.txt", include_console=False)


class NumericProcessor(EntityProcessor):
    """Processor for spoken cardinal and ordinal numbers."""

    def __init__(self, language: str = "en"):
        super().__init__(language)
        self.hyphenated_pattern = regex_patterns.build_hyphenated_number_pattern(language)

    def _init_detection_rules(self) -> List[ProcessingRule]:
        # Runs of number words are found by scanning tokens, see detect_entities
        return []

    def _init_conversion_methods(self) -> Dict[EntityType, str]:
        return {
            EntityType.CARDINAL: "convert_cardinal",
            EntityType.ORDINAL: "convert_ordinal",
        }

    def process(self, text: str) -> str:
        # "twenty-three" -> "twenty three", "twenty-first" -> "twenty first"
        return super().process(self.hyphenated_pattern.sub(r"\1 \2", text))

    def detect_entities(self, text: str, entities: List[Entity],
                        all_entities: Optional[List[Entity]] = None) -> None:
        """
        Walk the tokens collecting runs of number words.

        "and" joins a run only when a run is open and a number follows; "a"/"an"
        opens a run only in front of a scale word. Trailing punctuation on a token
        closes the run after that token.
        """
        parser = self.number_parser
        tokens = tokenize(text)
        run: List[Token] = []

        def flush() -> None:
            if run:
                self._add_run(text, list(run), entities, all_entities)
                run.clear()

        for index, token in enumerate(tokens):
            word, trailing = split_trailing_punctuation(token.text.lower())
            next_word = self._word_at(tokens, index + 1)

            if parser.is_number_word(word):
                run.append(token)
            elif word in parser.connectors and run and not trailing and (
                parser.is_number_word(next_word) or parser.is_ordinal_word(next_word)
            ):
                run.append(token)
            elif word in parser.articles and not run and not trailing and parser.is_scale_word(next_word):
                run.append(token)
            elif parser.is_ordinal_word(word):
                # An ordinal only counts when it closes an open run; alone it stays a word
                if run:
                    run.append(token)
                flush()
                continue
            else:
                flush()
                continue

            if trailing:
                flush()

        flush()

    def _word_at(self, tokens: List[Token], index: int) -> str:
        if index >= len(tokens):
            return ""
        core, _trailing = split_trailing_punctuation(tokens[index].text)
        return core.lower()

    def _add_run(self, text: str, run: List[Token], entities: List[Entity],
                 all_entities: Optional[List[Entity]]) -> None:
        start = run[0].start
        core, _trailing = split_trailing_punctuation(run[-1].text)
        end = run[-1].start + len(core)
        words = [split_trailing_punctuation(token.text)[0].lower() for token in run]

        if self.number_parser.is_ordinal_word(words[-1]):
            parsed = self.number_parser.parse_ordinal(words)
            if parsed is not None:
                value, suffix = parsed
                self._add_entity(
                    Entity(start, end, text[start:end], EntityType.ORDINAL, {"value": value, "suffix": suffix}),
                    entities,
                    all_entities,
                )
            elif len(run) > 1:
                # "five first": convert the cardinal prefix, keep the ordinal word as spoken
                self._add_run(text, run[:-1], entities, all_entities)
            return

        value = self.number_parser.parse_number_words(words)
        if value is None:
            logger.debug(f"Leaving unparseable number words as spoken: '{text[start:end]}'")
            return
        self._add_entity(
            Entity(start, end, text[start:end], EntityType.CARDINAL, {"value": value}),
            entities,
            all_entities,
        )

    # Conversion methods

    def convert_cardinal(self, entity: Entity, full_text: str = "") -> str:
        return f"{entity.metadata['value']:,}"

    def convert_ordinal(self, entity: Entity, full_text: str = "") -> str:
        return f"{entity.metadata['value']}{entity.metadata['suffix']}"

    def group_thousands(self, text: str) -> str:
        """Insert thousands separators into bare digit runs: "1033" -> "1,033"."""
        return regex_patterns.THOUSANDS_CANDIDATE_PATTERN.sub(lambda m: f"{int(m.group(1)):,}", text)
