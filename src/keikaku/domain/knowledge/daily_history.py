"""
Daily rollup statistics for a knowledge set.

Classification thresholds come from keikaku.domain.constants:
- new: never reviewed
- known: stability >= KNOWN_STABILITY_DAYS
- in progress: reviewed but not yet known
- high difficulty: reviewed and difficulty >= HIGH_DIFFICULTY_THRESHOLD

new + known + in progress always equals the total; high difficulty overlaps
with the other reviewed buckets.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone

from ..memory import MemoryState


@dataclass(frozen=True)
class KnowledgeStats:
    """A point-in-time scan of every card's current memory state."""

    total_words: int = 0
    new_words: int = 0
    known_words: int = 0
    in_progress_words: int = 0
    high_difficulty_words: int = 0
    avg_stability: float | None = None
    avg_difficulty: float | None = None

    @classmethod
    def from_states(cls, states: Iterable[MemoryState | None]) -> "KnowledgeStats":
        total = new = known = in_progress = high_difficulty = 0
        stabilities: list[float] = []
        difficulties: list[float] = []

        for state in states:
            total += 1
            if state is None:
                new += 1
                continue

            stabilities.append(state.stability.value)
            difficulties.append(state.difficulty.value)
            if state.is_known():
                known += 1
            else:
                in_progress += 1
            if state.is_high_difficulty():
                high_difficulty += 1

        return cls(
            total_words=total,
            new_words=new,
            known_words=known,
            in_progress_words=in_progress,
            high_difficulty_words=high_difficulty,
            avg_stability=sum(stabilities) / len(stabilities) if stabilities else None,
            avg_difficulty=sum(difficulties) / len(difficulties) if difficulties else None,
        )


@dataclass
class DailyHistoryItem:
    """
    Snapshot of one study day.

    update() overwrites the aggregate fields and counts a completed lesson;
    add_lesson_duration() accumulates independently of update().
    """

    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    avg_stability: float | None = None
    avg_difficulty: float | None = None
    total_words: int = 0
    new_words: int = 0
    known_words: int = 0
    in_progress_words: int = 0
    high_difficulty_words: int = 0
    lessons_completed: int = 0
    total_duration: timedelta = field(default_factory=timedelta)

    def update(self, stats: KnowledgeStats) -> None:
        self.avg_stability = stats.avg_stability
        self.avg_difficulty = stats.avg_difficulty
        self.total_words = stats.total_words
        self.new_words = stats.new_words
        self.known_words = stats.known_words
        self.in_progress_words = stats.in_progress_words
        self.high_difficulty_words = stats.high_difficulty_words
        self.lessons_completed += 1

    def add_lesson_duration(self, duration: timedelta) -> None:
        self.total_duration += duration

    @property
    def day(self) -> date:
        """The UTC calendar date this day covers."""
        return self.timestamp.astimezone(timezone.utc).date()

    def is_same_day(self, moment: datetime) -> bool:
        return self.day == moment.astimezone(timezone.utc).date()

    @property
    def is_empty(self) -> bool:
        return self.lessons_completed == 0 and not self.total_duration
