from .complete_lesson import CompleteLessonUseCase
from .create_card import CreateCardUseCase, CreateKanjiCardUseCase, CreateVocabularyCardUseCase
from .delete_card import DeleteCardUseCase
from .import_well_known_set import ImportResult, ImportWellKnownSetUseCase
from .rate_card import RateCardUseCase
from .reference import (
    KanjiInfoUseCase,
    KanjiListUseCase,
    ListWellKnownSetsUseCase,
    WellKnownSetSummary,
)
from .select_cards import SelectCardsToFixationUseCase, SelectCardsToLessonUseCase
from .users import CreateUserUseCase, GetUserInfoUseCase, ListUsersUseCase, UserInfo

__all__ = [
    "CompleteLessonUseCase",
    "CreateCardUseCase",
    "CreateKanjiCardUseCase",
    "CreateVocabularyCardUseCase",
    "DeleteCardUseCase",
    "ImportResult",
    "ImportWellKnownSetUseCase",
    "RateCardUseCase",
    "KanjiInfoUseCase",
    "KanjiListUseCase",
    "ListWellKnownSetsUseCase",
    "WellKnownSetSummary",
    "SelectCardsToFixationUseCase",
    "SelectCardsToLessonUseCase",
    "CreateUserUseCase",
    "GetUserInfoUseCase",
    "ListUsersUseCase",
    "UserInfo",
]
