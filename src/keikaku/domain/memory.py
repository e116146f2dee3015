"""
Domain models for the memory of a single study card.

These are pure data structures with no I/O. The numbers inside them are
produced by an external scheduler (see keikaku.domain.ports.SrsService);
this module only validates and records them.
"""

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import IntEnum

from .constants import (
    DIFFICULTY_MAX,
    DIFFICULTY_MIN,
    HIGH_DIFFICULTY_THRESHOLD,
    KNOWN_STABILITY_DAYS,
)
from .errors import InvalidDifficulty, InvalidMemoryState, InvalidStability, InvalidValues


@dataclass(frozen=True, order=True)
class Stability:
    """Days until recall probability decays to the target retention."""

    value: float

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise InvalidStability(f"expected a number, got {self.value!r}")
        if not math.isfinite(self.value) or self.value <= 0:
            raise InvalidStability(f"must be a positive finite number, got {self.value}")
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True, order=True)
class Difficulty:
    """Intrinsic hardness of an item on the FSRS 1-10 scale."""

    value: float

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise InvalidDifficulty(f"expected a number, got {self.value!r}")
        if not math.isfinite(self.value) or not DIFFICULTY_MIN <= self.value <= DIFFICULTY_MAX:
            raise InvalidDifficulty(
                f"must be within [{DIFFICULTY_MIN}, {DIFFICULTY_MAX}], got {self.value}"
            )
        object.__setattr__(self, "value", float(self.value))


class Rating(IntEnum):
    """Button pressed after an exposure (1=Again, 2=Hard, 3=Good, 4=Easy)."""

    AGAIN = 1
    HARD = 2
    GOOD = 3
    EASY = 4

    @classmethod
    def parse(cls, value: str | int) -> "Rating":
        """Accept a rating name (any case) or its number."""
        text = str(value).strip()
        if text.isdigit():
            try:
                return cls(int(text))
            except ValueError:
                pass
        else:
            try:
                return cls[text.upper()]
            except KeyError:
                pass
        raise InvalidValues(f"unknown rating '{value}', expected one of again/hard/good/easy")


def _require_aware(value: datetime, name: str) -> None:
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidMemoryState(f"{name} must be timezone-aware, got {value.isoformat()}")


@dataclass(frozen=True)
class MemoryState:
    """
    The current belief about how well an item is remembered.

    Attributes:
        stability: Days until recall probability drops to the target retention.
        difficulty: Item difficulty (1-10).
        next_review_date: When the item is due again.
    """

    stability: Stability
    difficulty: Difficulty
    next_review_date: datetime

    def __post_init__(self):
        _require_aware(self.next_review_date, "next_review_date")

    def is_due(self, now: datetime) -> bool:
        _require_aware(now, "now")
        return self.next_review_date <= now

    def is_known(self) -> bool:
        return self.stability.value >= KNOWN_STABILITY_DAYS

    def is_in_progress(self) -> bool:
        return not self.is_known()

    def is_high_difficulty(self) -> bool:
        return self.difficulty.value >= HIGH_DIFFICULTY_THRESHOLD


@dataclass(frozen=True)
class ReviewLog:
    """
    A single, immutable review record.

    Attributes:
        timestamp: When the review happened.
        rating: Button pressed.
        interval: Interval recommended by the scheduler after this review.
        memory_state: Memory state that resulted from this review.
    """

    timestamp: datetime
    rating: Rating
    interval: timedelta
    memory_state: MemoryState

    def __post_init__(self):
        _require_aware(self.timestamp, "timestamp")
        if not isinstance(self.rating, Rating):
            object.__setattr__(self, "rating", Rating(self.rating))


class MemoryHistory:
    """
    Append-only review log of one study card plus its current memory state.

    An empty history means the card has never been studied.
    """

    def __init__(self, reviews: Iterable[ReviewLog] = ()):
        self._reviews: list[ReviewLog] = []
        self._current: MemoryState | None = None
        for review in reviews:
            last = self.last_reviewed_at
            if last is not None and review.timestamp < last:
                raise InvalidMemoryState(
                    f"review at {review.timestamp.isoformat()} precedes {last.isoformat()}"
                )
            self._add_review(review.memory_state, review)

    @property
    def current(self) -> MemoryState | None:
        return self._current

    @property
    def reviews(self) -> tuple[ReviewLog, ...]:
        return tuple(self._reviews)

    @property
    def last_reviewed_at(self) -> datetime | None:
        return self._reviews[-1].timestamp if self._reviews else None

    @property
    def is_new(self) -> bool:
        return not self._reviews

    def _add_review(self, memory_state: MemoryState, review: ReviewLog) -> None:
        self._reviews.append(review)
        self._current = memory_state

    def __len__(self) -> int:
        return len(self._reviews)

    def __iter__(self) -> Iterator[ReviewLog]:
        return iter(tuple(self._reviews))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MemoryHistory):
            return NotImplemented
        return self._reviews == other._reviews and self._current == other._current

    def __repr__(self) -> str:
        return f"MemoryHistory(reviews={len(self._reviews)}, current={self._current!r})"
