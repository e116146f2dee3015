from ulid import ULID

from keikaku.domain import User, UserNotFound, UserRepository


async def load_user(repository: UserRepository, user_id: ULID) -> User:
    """Fetch a user or raise UserNotFound."""
    user = await repository.find_by_id(user_id)
    if user is None:
        raise UserNotFound(user_id)
    return user
