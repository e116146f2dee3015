# Domain Knowledge Package
from .cards import (
    Card,
    CardKind,
    ExampleKanjiWord,
    ExamplePhrase,
    GrammarRuleCard,
    KanjiCard,
    VocabularyCard,
)
from .daily_history import DailyHistoryItem, KnowledgeStats
from .knowledge_set import KnowledgeSet
from .study_card import StudyCard

__all__ = [
    "Card",
    "CardKind",
    "ExampleKanjiWord",
    "ExamplePhrase",
    "GrammarRuleCard",
    "KanjiCard",
    "VocabularyCard",
    "DailyHistoryItem",
    "KnowledgeStats",
    "KnowledgeSet",
    "StudyCard",
]
