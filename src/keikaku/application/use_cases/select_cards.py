"""
Read-only selection of cards for a study session.

Limits come from the user's settings unless the caller passes one.
"""

from datetime import datetime, timezone

from ulid import ULID

from keikaku.domain import StudyCard, UserRepository

from .common import load_user


class SelectCardsToLessonUseCase:
    """New cards to learn, oldest first."""

    def __init__(self, repository: UserRepository):
        self._repo = repository

    async def execute(self, user_id: ULID, limit: int | None = None) -> list[StudyCard]:
        user = await load_user(self._repo, user_id)
        if limit is None:
            limit = user.settings.new_cards_per_lesson
        return user.knowledge_set.cards_to_lesson(limit)


class SelectCardsToFixationUseCase:
    """Due cards followed by new ones."""

    def __init__(self, repository: UserRepository):
        self._repo = repository

    async def execute(
        self,
        user_id: ULID,
        now: datetime | None = None,
        limit: int | None = None,
    ) -> list[StudyCard]:
        user = await load_user(self._repo, user_id)
        if limit is None:
            limit = user.settings.fixation_cards_limit
        now = now or datetime.now(timezone.utc)
        return user.knowledge_set.cards_to_fixation(now, limit)
