import logging
from datetime import datetime, timedelta, timezone

from ulid import ULID

from keikaku.domain import DailyHistoryItem, UserRepository

from .common import load_user

logger = logging.getLogger(__name__)


class CompleteLessonUseCase:
    """Adds the lesson's duration to today and snapshots the knowledge stats."""

    def __init__(self, repository: UserRepository):
        self._repo = repository

    async def execute(
        self,
        user_id: ULID,
        duration: timedelta,
        now: datetime | None = None,
    ) -> DailyHistoryItem:
        user = await load_user(self._repo, user_id)
        now = now or datetime.now(timezone.utc)
        user.add_lesson_duration(duration, now=now)
        day = user.complete_lesson(now=now)
        await self._repo.save(user)
        logger.info(
            f"Completed lesson for user {user_id}: {day.lessons_completed} today, "
            f"{day.total_duration} studied"
        )
        return day
