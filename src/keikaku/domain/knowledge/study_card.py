from ulid import ULID

from ..identity import new_id
from ..memory import MemoryHistory, MemoryState, ReviewLog
from .cards import Card


class StudyCard:
    """
    A card accepted into a knowledge set: identity + content + memory.

    The id and the card never change. The memory history only grows, and only
    through KnowledgeSet.rate_card.
    """

    def __init__(self, card_id: ULID, card: Card, memory: MemoryHistory | None = None):
        self._card_id = card_id
        self._card = card
        self._memory = memory if memory is not None else MemoryHistory()

    @classmethod
    def new(cls, card: Card) -> "StudyCard":
        return cls(new_id(), card)

    @property
    def card_id(self) -> ULID:
        return self._card_id

    @property
    def card(self) -> Card:
        return self._card

    @property
    def memory(self) -> MemoryHistory:
        return self._memory

    @property
    def is_new(self) -> bool:
        return self._memory.is_new

    def _add_review(self, memory_state: MemoryState, review: ReviewLog) -> None:
        self._memory._add_review(memory_state, review)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StudyCard):
            return NotImplemented
        return (
            self._card_id == other._card_id
            and self._card == other._card
            and self._memory == other._memory
        )

    def __repr__(self) -> str:
        return f"StudyCard(card_id={self._card_id}, question={self._card.question().text!r})"
