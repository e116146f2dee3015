# Domain Package
from .errors import (
    CardNotFound,
    DuplicateCard,
    FuriganaError,
    InvalidAnswer,
    InvalidDifficulty,
    InvalidMemoryState,
    InvalidQuestion,
    InvalidStability,
    InvalidValues,
    KeikakuError,
    LlmError,
    RepositoryError,
    SrsCalculationFailed,
    TranslationError,
    UserNotFound,
    WellKnownSetError,
)
from .identity import new_id, parse_id
from .memory import Difficulty, MemoryHistory, MemoryState, Rating, ReviewLog, Stability
from .value_objects import Answer, JapaneseLevel, NativeLanguage, Question
from .knowledge import (
    Card,
    CardKind,
    DailyHistoryItem,
    ExampleKanjiWord,
    ExamplePhrase,
    GrammarRuleCard,
    KanjiCard,
    KnowledgeSet,
    KnowledgeStats,
    StudyCard,
    VocabularyCard,
)
from .user import User, UserSettings
from .ports import LlmService, ScheduledReview, SrsService, UserRepository

__all__ = [
    "CardNotFound",
    "DuplicateCard",
    "FuriganaError",
    "InvalidAnswer",
    "InvalidDifficulty",
    "InvalidMemoryState",
    "InvalidQuestion",
    "InvalidStability",
    "InvalidValues",
    "KeikakuError",
    "LlmError",
    "RepositoryError",
    "SrsCalculationFailed",
    "TranslationError",
    "UserNotFound",
    "WellKnownSetError",
    "new_id",
    "parse_id",
    "Difficulty",
    "MemoryHistory",
    "MemoryState",
    "Rating",
    "ReviewLog",
    "Stability",
    "Answer",
    "JapaneseLevel",
    "NativeLanguage",
    "Question",
    "Card",
    "CardKind",
    "DailyHistoryItem",
    "ExampleKanjiWord",
    "ExamplePhrase",
    "GrammarRuleCard",
    "KanjiCard",
    "KnowledgeSet",
    "KnowledgeStats",
    "StudyCard",
    "VocabularyCard",
    "User",
    "UserSettings",
    "LlmService",
    "ScheduledReview",
    "SrsService",
    "UserRepository",
]
