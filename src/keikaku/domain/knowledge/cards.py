"""
Card content variants.

A Card is one of VocabularyCard, KanjiCard or GrammarRuleCard. Each variant
owns its payload outright and projects it onto a Question/Answer pair.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from ..errors import InvalidQuestion, InvalidValues
from ..japanese import contains_kanji
from ..value_objects import Answer, Question


class CardKind(str, Enum):
    VOCABULARY = "vocabulary"
    KANJI = "kanji"
    GRAMMAR = "grammar"


@dataclass(frozen=True)
class ExamplePhrase:
    text: str
    translation: str


@dataclass(frozen=True)
class ExampleKanjiWord:
    word: str
    meaning: str


@dataclass(frozen=True)
class VocabularyCard:
    kind: ClassVar[CardKind] = CardKind.VOCABULARY

    word: Question
    meaning: Answer
    example_phrases: tuple[ExamplePhrase, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "example_phrases", tuple(self.example_phrases))

    def question(self) -> Question:
        return self.word

    def answer(self) -> Answer:
        return self.meaning


@dataclass(frozen=True)
class KanjiCard:
    kind: ClassVar[CardKind] = CardKind.KANJI

    kanji: Question
    description: Answer
    example_words: tuple[ExampleKanjiWord, ...] = ()
    radicals: tuple[str, ...] = ()
    stroke_count: int | None = None

    def __post_init__(self):
        if not contains_kanji(self.kanji.text):
            raise InvalidQuestion(f"'{self.kanji.text}' contains no kanji")
        if self.stroke_count is not None and self.stroke_count <= 0:
            raise InvalidValues(f"stroke count must be positive, got {self.stroke_count}")
        object.__setattr__(self, "example_words", tuple(self.example_words))
        object.__setattr__(self, "radicals", tuple(self.radicals))

    def question(self) -> Question:
        return self.kanji

    def answer(self) -> Answer:
        return self.description


@dataclass(frozen=True)
class GrammarRuleCard:
    kind: ClassVar[CardKind] = CardKind.GRAMMAR

    title: Question
    description: Answer
    attachment_rules: str = ""
    examples: tuple[ExamplePhrase, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "examples", tuple(self.examples))

    def question(self) -> Question:
        return self.title

    def answer(self) -> Answer:
        return self.description


Card = VocabularyCard | KanjiCard | GrammarRuleCard
