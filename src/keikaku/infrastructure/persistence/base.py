"""
Shared logic for repositories that store whole-user snapshots.

Each stored user carries a revision number. A User instance remembers the
revision it was loaded at; saving it after someone else saved a newer
revision fails with RepositoryError instead of silently overwriting.
"""

import asyncio
import logging
from abc import abstractmethod
from typing import Any
from weakref import WeakKeyDictionary

from ulid import ULID

from keikaku.domain import KeikakuError, RepositoryError, User, UserRepository

from .serialization import user_from_dict, user_to_dict

logger = logging.getLogger(__name__)


class SnapshotUserRepository(UserRepository):
    def __init__(self):
        self._loaded_revisions: WeakKeyDictionary[User, int] = WeakKeyDictionary()
        self._write_lock = asyncio.Lock()

    # ---------- Storage primitives ----------

    @abstractmethod
    def _read(self, user_id: ULID) -> tuple[int, dict[str, Any]] | None:
        """Return (revision, snapshot) or None if the user is not stored."""

    @abstractmethod
    def _read_ids(self) -> list[ULID]:
        pass

    @abstractmethod
    def _write(self, user_id: ULID, revision: int, snapshot: dict[str, Any]) -> None:
        pass

    @abstractmethod
    def _remove(self, user_id: ULID) -> bool:
        """Remove the stored user; return False if it did not exist."""

    # ---------- UserRepository ----------

    async def list(self) -> list[User]:
        users = []
        for user_id in sorted(self._read_ids()):
            user = await self.find_by_id(user_id)
            if user is not None:
                users.append(user)
        return users

    async def find_by_id(self, user_id: ULID) -> User | None:
        stored = self._read(user_id)
        if stored is None:
            return None
        revision, snapshot = stored
        try:
            user = user_from_dict(snapshot)
        except (KeikakuError, KeyError, TypeError, ValueError) as e:
            raise RepositoryError(f"stored user {user_id} is corrupt: {e}") from e
        self._loaded_revisions[user] = revision
        return user

    async def save(self, user: User) -> None:
        async with self._write_lock:
            stored = self._read(user.id)
            stored_revision = stored[0] if stored is not None else None
            expected = self._loaded_revisions.get(user)

            if stored_revision != expected:
                raise RepositoryError(
                    f"user {user.id} was modified concurrently "
                    f"(loaded revision {expected}, stored revision {stored_revision})"
                )

            revision = (stored_revision or 0) + 1
            self._write(user.id, revision, user_to_dict(user))
            self._loaded_revisions[user] = revision
            logger.debug(f"Saved user {user.id} at revision {revision}")

    async def delete(self, user_id: ULID) -> None:
        async with self._write_lock:
            if not self._remove(user_id):
                logger.debug(f"Delete requested for unknown user {user_id}")
