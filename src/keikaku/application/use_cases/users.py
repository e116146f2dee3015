"""
User lifecycle use cases: registration, lookup and the info summary.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta

from ulid import ULID

from keikaku.domain import (
    JapaneseLevel,
    KnowledgeStats,
    NativeLanguage,
    User,
    UserRepository,
)

from .common import load_user

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserInfo:
    """Read-only summary of a user and their knowledge set."""

    id: ULID
    username: str
    native_language: NativeLanguage
    current_level: JapaneseLevel
    new_cards_per_lesson: int
    fixation_cards_limit: int
    stats: KnowledgeStats
    lessons_completed_today: int
    total_study_duration: timedelta

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        knowledge_set = user.knowledge_set
        return cls(
            id=user.id,
            username=user.username,
            native_language=user.native_language,
            current_level=user.current_level,
            new_cards_per_lesson=user.settings.new_cards_per_lesson,
            fixation_cards_limit=user.settings.fixation_cards_limit,
            stats=knowledge_set.knowledge_stats(),
            lessons_completed_today=knowledge_set.current_day.lessons_completed,
            total_study_duration=knowledge_set.total_study_duration,
        )


class CreateUserUseCase:
    def __init__(self, repository: UserRepository):
        self._repo = repository

    async def execute(
        self,
        username: str,
        current_level: JapaneseLevel,
        native_language: NativeLanguage,
    ) -> User:
        user = User.new(username, current_level, native_language)
        await self._repo.save(user)
        logger.info(f"Created user {user.username} ({user.id})")
        return user


class GetUserInfoUseCase:
    def __init__(self, repository: UserRepository):
        self._repo = repository

    async def execute(self, user_id: ULID) -> UserInfo:
        user = await load_user(self._repo, user_id)
        return UserInfo.from_user(user)


class ListUsersUseCase:
    def __init__(self, repository: UserRepository):
        self._repo = repository

    async def execute(self) -> list[UserInfo]:
        users = await self._repo.list()
        return [UserInfo.from_user(user) for user in users]
