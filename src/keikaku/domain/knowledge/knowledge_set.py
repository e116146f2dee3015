"""
The knowledge set: a user's collection of study cards.

Owns every StudyCard exclusively (cards hold no back-reference), guards the
duplicate-question invariant, records ratings, answers the two scheduling
questions ("what is new" / "what is due") and keeps the daily rollup.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta, timezone
from types import MappingProxyType

from ulid import ULID

from ..errors import CardNotFound, DuplicateCard, InvalidValues
from ..japanese import normalize_question
from ..memory import MemoryState, Rating, ReviewLog
from .cards import Card
from .daily_history import DailyHistoryItem, KnowledgeStats
from .study_card import StudyCard


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _moment(now: datetime | None) -> datetime:
    if now is None:
        return _utcnow()
    if now.tzinfo is None or now.utcoffset() is None:
        raise InvalidValues(f"now must be timezone-aware, got {now.isoformat()}")
    return now


class KnowledgeSet:
    def __init__(
        self,
        study_cards: Iterable[StudyCard] = (),
        history: Iterable[DailyHistoryItem] = (),
        current_day: DailyHistoryItem | None = None,
    ):
        self._study_cards: dict[ULID, StudyCard] = {}
        self._questions: dict[str, ULID] = {}
        for study_card in study_cards:
            self._insert(study_card)
        self._history: list[DailyHistoryItem] = list(history)
        self._current_day = current_day if current_day is not None else DailyHistoryItem()

    # ---------- Queries ----------

    @property
    def study_cards(self) -> Mapping[ULID, StudyCard]:
        return MappingProxyType(self._study_cards)

    def get_card(self, card_id: ULID) -> StudyCard:
        try:
            return self._study_cards[card_id]
        except KeyError:
            raise CardNotFound(card_id) from None

    def contains_question(self, text: str) -> bool:
        return normalize_question(text) in self._questions

    def __len__(self) -> int:
        return len(self._study_cards)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._study_cards

    def cards_to_lesson(self, limit: int | None = None) -> list[StudyCard]:
        """Never-reviewed cards in creation order."""
        new_cards = sorted(
            (sc for sc in self._study_cards.values() if sc.is_new),
            key=lambda sc: sc.card_id,
        )
        return new_cards if limit is None else new_cards[:limit]

    def cards_to_fixation(
        self, now: datetime | None = None, limit: int | None = None
    ) -> list[StudyCard]:
        """
        Cards that need attention at `now`: due reviewed cards, then new cards.

        Due cards are ordered by due date (earliest first), new cards by id.
        Ties on due date also fall back to the id. Nothing is mutated.
        """
        now = _moment(now)
        due: list[StudyCard] = []
        new: list[StudyCard] = []
        for study_card in self._study_cards.values():
            state = study_card.memory.current
            if state is None:
                new.append(study_card)
            elif state.is_due(now):
                due.append(study_card)

        due.sort(key=lambda sc: (sc.memory.current.next_review_date, sc.card_id))
        new.sort(key=lambda sc: sc.card_id)
        selected = due + new
        return selected if limit is None else selected[:limit]

    def knowledge_stats(self) -> KnowledgeStats:
        return KnowledgeStats.from_states(
            sc.memory.current for sc in self._study_cards.values()
        )

    @property
    def current_day(self) -> DailyHistoryItem:
        return self._current_day

    @property
    def daily_history(self) -> tuple[DailyHistoryItem, ...]:
        """Closed days in chronological order, followed by the current day."""
        return (*self._history, self._current_day)

    @property
    def total_study_duration(self) -> timedelta:
        return sum((day.total_duration for day in self.daily_history), timedelta())

    # ---------- Lifecycle ----------

    def create_card(self, card: Card) -> StudyCard:
        question = card.question().text
        if self.contains_question(question):
            raise DuplicateCard(question)
        study_card = StudyCard.new(card)
        self._insert(study_card)
        return study_card

    def delete_card(self, card_id: ULID) -> None:
        study_card = self.get_card(card_id)
        del self._study_cards[card_id]
        del self._questions[normalize_question(study_card.card.question().text)]

    def rate_card(
        self,
        card_id: ULID,
        rating: Rating,
        interval: timedelta,
        memory_state: MemoryState,
        now: datetime | None = None,
    ) -> StudyCard:
        """
        Record a review produced by the scheduler.

        A `now` earlier than the card's last review is recorded at the last
        review time instead, so the card's history never goes backwards.
        """
        timestamp = _moment(now)
        study_card = self.get_card(card_id)
        last_reviewed_at = study_card.memory.last_reviewed_at
        if last_reviewed_at is not None and timestamp < last_reviewed_at:
            timestamp = last_reviewed_at

        review = ReviewLog(
            timestamp=timestamp,
            rating=rating,
            interval=interval,
            memory_state=memory_state,
        )
        study_card._add_review(memory_state, review)
        return study_card

    # ---------- Daily history ----------

    def add_lesson_duration(self, duration: timedelta, now: datetime | None = None) -> None:
        if duration < timedelta():
            raise InvalidValues(f"lesson duration must not be negative, got {duration}")
        self._roll_day(_moment(now)).add_lesson_duration(duration)

    def complete_lesson(self, now: datetime | None = None) -> DailyHistoryItem:
        day = self._roll_day(_moment(now))
        day.update(self.knowledge_stats())
        return day

    def _roll_day(self, now: datetime) -> DailyHistoryItem:
        """
        Return the day that activity at `now` accrues to.

        Days only move forward: a later UTC date closes the current day, an
        earlier one accrues to the open day. An empty open day may move to
        any date after the last closed one.
        """
        today = now.astimezone(timezone.utc).date()
        current = self._current_day
        if today == current.day:
            return current

        last_closed = self._history[-1].day if self._history else None
        if current.is_empty:
            if last_closed is None or today > last_closed:
                self._current_day = DailyHistoryItem(timestamp=now)
        elif today > current.day:
            self._history.append(current)
            self._current_day = DailyHistoryItem(timestamp=now)
        return self._current_day

    def _insert(self, study_card: StudyCard) -> None:
        key = normalize_question(study_card.card.question().text)
        if key in self._questions:
            raise DuplicateCard(study_card.card.question().text)
        self._study_cards[study_card.card_id] = study_card
        self._questions[key] = study_card.card_id
