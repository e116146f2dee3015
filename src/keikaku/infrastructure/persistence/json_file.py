"""
File-backed user repository.

Layout: <data_dir>/users/<user_id>.json, one document per user:
    {"revision": <int>, "user": <snapshot>}
Writes go to a temporary file in the same directory and are moved into place
with os.replace, so a crash never leaves a half-written document behind.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from ulid import ULID

from keikaku.domain import RepositoryError

from .base import SnapshotUserRepository

logger = logging.getLogger(__name__)


class FileUserRepository(SnapshotUserRepository):
    def __init__(self, data_dir: Path):
        super().__init__()
        self.users_dir = Path(data_dir) / "users"

    def _path(self, user_id: ULID) -> Path:
        return self.users_dir / f"{user_id}.json"

    def _read(self, user_id: ULID) -> tuple[int, dict[str, Any]] | None:
        path = self._path(user_id)
        if not path.exists():
            return None
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
            return int(document["revision"]), document["user"]
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise RepositoryError(f"cannot read {path}: {e}") from e

    def _read_ids(self) -> list[ULID]:
        if not self.users_dir.exists():
            return []
        ids = []
        for path in self.users_dir.glob("*.json"):
            try:
                ids.append(ULID.from_str(path.stem))
            except ValueError:
                logger.warning(f"Ignoring unexpected file in user store: {path.name}")
        return ids

    def _write(self, user_id: ULID, revision: int, snapshot: dict[str, Any]) -> None:
        path = self._path(user_id)
        document = {"revision": revision, "user": snapshot}
        try:
            self.users_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.users_dir, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise RepositoryError(f"cannot write {path}: {e}") from e

    def _remove(self, user_id: ULID) -> bool:
        path = self._path(user_id)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise RepositoryError(f"cannot delete {path}: {e}") from e
