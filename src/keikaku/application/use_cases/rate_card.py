"""
Rating a card: the core scheduling step.

The scheduler is asked for the next memory state before anything is
recorded, so a scheduling failure leaves the user untouched and unsaved.
"""

import logging
from datetime import datetime, timezone

from ulid import ULID

from keikaku.domain import (
    KeikakuError,
    Rating,
    SrsCalculationFailed,
    SrsService,
    StudyCard,
    UserRepository,
)

from .common import load_user

logger = logging.getLogger(__name__)


class RateCardUseCase:
    def __init__(self, repository: UserRepository, srs: SrsService):
        self._repo = repository
        self._srs = srs

    async def execute(
        self,
        user_id: ULID,
        card_id: ULID,
        rating: Rating,
        now: datetime | None = None,
    ) -> StudyCard:
        """
        Rate a card and persist the resulting review.

        Raises:
            UserNotFound: Unknown user.
            CardNotFound: The card is not in the user's knowledge set.
            SrsCalculationFailed: The scheduler could not produce a state.
        """
        user = await load_user(self._repo, user_id)
        study_card = user.knowledge_set.get_card(card_id)

        now = now or datetime.now(timezone.utc)
        last_reviewed_at = study_card.memory.last_reviewed_at
        if last_reviewed_at is not None and now < last_reviewed_at:
            now = last_reviewed_at

        try:
            scheduled = await self._srs.review(
                study_card.memory.current, last_reviewed_at, rating, now
            )
        except SrsCalculationFailed:
            logger.error(f"Scheduling failed for card {card_id}, rating not recorded")
            raise
        except KeikakuError as e:
            logger.error(f"Scheduling failed for card {card_id}: {e}")
            raise SrsCalculationFailed(str(e)) from e
        except Exception as e:
            logger.error(f"Scheduler raised unexpectedly for card {card_id}: {e}")
            raise SrsCalculationFailed(str(e)) from e

        rated = user.rate_card(
            card_id, rating, scheduled.interval, scheduled.memory_state, now=now
        )
        await self._repo.save(user)
        logger.info(
            f"Rated card {card_id} {rating.name} for user {user_id}, "
            f"next review {scheduled.memory_state.next_review_date.isoformat()}"
        )
        return rated
