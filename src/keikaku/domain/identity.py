"""Time-ordered identifiers for users and study cards."""

import threading

from ulid import ULID

from .errors import InvalidValues

_lock = threading.Lock()
_last: ULID | None = None


def new_id() -> ULID:
    """
    Generate a ULID that sorts after every id previously generated in this process.

    Two ids minted in the same millisecond would otherwise be ordered by their
    random part, which would break creation-order tie-breaks.
    """
    global _last
    with _lock:
        candidate = ULID()
        if _last is not None and candidate <= _last:
            candidate = ULID.from_int(int(_last) + 1)
        _last = candidate
        return candidate


def parse_id(value: str | ULID) -> ULID:
    """Parse a user-supplied id, raising InvalidValues when it is not a ULID."""
    if isinstance(value, ULID):
        return value
    try:
        return ULID.from_str(str(value).strip())
    except ValueError as e:
        raise InvalidValues(f"'{value}' is not a valid id") from e
