import logging

from ulid import ULID

from keikaku.domain import UserRepository

from .common import load_user

logger = logging.getLogger(__name__)


class DeleteCardUseCase:
    def __init__(self, repository: UserRepository):
        self._repo = repository

    async def execute(self, user_id: ULID, card_id: ULID) -> None:
        user = await load_user(self._repo, user_id)
        user.delete_card(card_id)
        await self._repo.save(user)
        logger.info(f"Deleted card {card_id} for user {user_id}")
