"""
The User aggregate root.

A user exclusively owns one KnowledgeSet. Persistence collaborators load and
save a User as a whole, so every knowledge-set mutation goes through here.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from ulid import ULID

from .constants import DEFAULT_FIXATION_CARDS_LIMIT, DEFAULT_NEW_CARDS_PER_LESSON
from .errors import InvalidValues
from .identity import new_id
from .knowledge import Card, DailyHistoryItem, KnowledgeSet, StudyCard
from .memory import MemoryState, Rating
from .value_objects import JapaneseLevel, NativeLanguage


@dataclass(frozen=True)
class UserSettings:
    new_cards_per_lesson: int = DEFAULT_NEW_CARDS_PER_LESSON
    fixation_cards_limit: int = DEFAULT_FIXATION_CARDS_LIMIT

    def __post_init__(self):
        if self.new_cards_per_lesson <= 0:
            raise InvalidValues("new_cards_per_lesson must be positive")
        if self.fixation_cards_limit <= 0:
            raise InvalidValues("fixation_cards_limit must be positive")


class User:
    def __init__(
        self,
        user_id: ULID,
        username: str,
        native_language: NativeLanguage,
        current_level: JapaneseLevel,
        settings: UserSettings | None = None,
        knowledge_set: KnowledgeSet | None = None,
    ):
        if not username or not username.strip():
            raise InvalidValues("username must not be empty")
        self._id = user_id
        self._username = username.strip()
        self._native_language = native_language
        self._current_level = current_level
        self._settings = settings or UserSettings()
        self._knowledge_set = knowledge_set if knowledge_set is not None else KnowledgeSet()

    @classmethod
    def new(
        cls,
        username: str,
        current_level: JapaneseLevel,
        native_language: NativeLanguage,
    ) -> "User":
        return cls(new_id(), username, native_language, current_level)

    @property
    def id(self) -> ULID:
        return self._id

    @property
    def username(self) -> str:
        return self._username

    @property
    def native_language(self) -> NativeLanguage:
        return self._native_language

    @property
    def current_level(self) -> JapaneseLevel:
        return self._current_level

    @property
    def settings(self) -> UserSettings:
        return self._settings

    @property
    def knowledge_set(self) -> KnowledgeSet:
        return self._knowledge_set

    def set_current_level(self, level: JapaneseLevel) -> None:
        self._current_level = level

    def update_settings(self, settings: UserSettings) -> None:
        self._settings = settings

    def create_card(self, card: Card) -> StudyCard:
        return self._knowledge_set.create_card(card)

    def delete_card(self, card_id: ULID) -> None:
        self._knowledge_set.delete_card(card_id)

    def rate_card(
        self,
        card_id: ULID,
        rating: Rating,
        interval: timedelta,
        memory_state: MemoryState,
        now: datetime | None = None,
    ) -> StudyCard:
        return self._knowledge_set.rate_card(card_id, rating, interval, memory_state, now=now)

    def add_lesson_duration(self, duration: timedelta, now: datetime | None = None) -> None:
        self._knowledge_set.add_lesson_duration(duration, now=now)

    def complete_lesson(self, now: datetime | None = None) -> DailyHistoryItem:
        return self._knowledge_set.complete_lesson(now=now)

    def __repr__(self) -> str:
        return f"User(id={self._id}, username={self._username!r}, cards={len(self._knowledge_set)})"
