"""
FSRS Scheduling Service: infrastructure adapter for the `fsrs` package.

Implements SrsService by replaying the stored memory state into an FSRS card
and letting the FSRS scheduler compute the next stability, difficulty and due
date. Cards that were reviewed before are treated as being in the Review
state; never-reviewed cards start in the scheduler's Learning state.
"""

import logging
from datetime import datetime, timedelta, timezone

from fsrs import Card as FsrsCard
from fsrs import Rating as FsrsRating
from fsrs import Scheduler, State

from keikaku.domain import (
    Difficulty,
    KeikakuError,
    MemoryState,
    Rating,
    ScheduledReview,
    SrsCalculationFailed,
    SrsService,
    Stability,
)
from keikaku.domain.constants import DEFAULT_DESIRED_RETENTION, DEFAULT_MAXIMUM_INTERVAL

logger = logging.getLogger(__name__)


class FsrsSrsService(SrsService):
    def __init__(
        self,
        desired_retention: float = DEFAULT_DESIRED_RETENTION,
        maximum_interval: int = DEFAULT_MAXIMUM_INTERVAL,
        enable_fuzzing: bool = False,
    ):
        self._scheduler = Scheduler(
            desired_retention=desired_retention,
            maximum_interval=maximum_interval,
            enable_fuzzing=enable_fuzzing,
        )

    async def review(
        self,
        previous: MemoryState | None,
        last_reviewed_at: datetime | None,
        rating: Rating,
        now: datetime,
    ) -> ScheduledReview:
        now = now.astimezone(timezone.utc)
        try:
            card = self._to_fsrs_card(previous, last_reviewed_at, now)
            updated, _ = self._scheduler.review_card(
                card, FsrsRating(int(rating)), review_datetime=now
            )
            memory_state = MemoryState(
                stability=Stability(updated.stability),
                difficulty=Difficulty(updated.difficulty),
                next_review_date=updated.due,
            )
        except KeikakuError as e:
            raise SrsCalculationFailed(str(e)) from e
        except (ValueError, TypeError, ArithmeticError) as e:
            logger.error(f"FSRS scheduling failed for rating {rating.name}: {e}")
            raise SrsCalculationFailed(str(e)) from e

        interval = max(memory_state.next_review_date - now, timedelta())
        logger.debug(
            f"FSRS {rating.name}: S={memory_state.stability.value:.2f} "
            f"D={memory_state.difficulty.value:.2f} interval={interval}"
        )
        return ScheduledReview(memory_state=memory_state, interval=interval)

    @staticmethod
    def _to_fsrs_card(
        previous: MemoryState | None, last_reviewed_at: datetime | None, now: datetime
    ) -> FsrsCard:
        if previous is None:
            return FsrsCard(due=now)
        last_review = last_reviewed_at.astimezone(timezone.utc) if last_reviewed_at else now
        return FsrsCard(
            state=State.Review,
            stability=previous.stability.value,
            difficulty=previous.difficulty.value,
            due=previous.next_review_date.astimezone(timezone.utc),
            last_review=last_review,
        )
