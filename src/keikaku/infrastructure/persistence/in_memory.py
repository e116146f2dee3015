import copy
from typing import Any

from ulid import ULID

from .base import SnapshotUserRepository


class InMemoryUserRepository(SnapshotUserRepository):
    """
    Keeps user snapshots in a dict.

    Snapshots, not live objects, are stored so that a caller mutating a
    loaded User without saving it never changes what the repository holds.
    """

    def __init__(self):
        super().__init__()
        self._store: dict[ULID, tuple[int, dict[str, Any]]] = {}

    def _read(self, user_id: ULID) -> tuple[int, dict[str, Any]] | None:
        stored = self._store.get(user_id)
        if stored is None:
            return None
        revision, snapshot = stored
        return revision, copy.deepcopy(snapshot)

    def _read_ids(self) -> list[ULID]:
        return list(self._store)

    def _write(self, user_id: ULID, revision: int, snapshot: dict[str, Any]) -> None:
        self._store[user_id] = (revision, copy.deepcopy(snapshot))

    def _remove(self, user_id: ULID) -> bool:
        return self._store.pop(user_id, None) is not None
