from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Iterable, Mapping, Optional

from .model import User


@dataclass(frozen=True)
class UserQuery:
    """Search criteria for the user list. Unset criteria do not constrain."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    telegram: Optional[str] = None
    building: Optional[str] = None
    room: Optional[str] = None
    department: Optional[str] = None

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "UserQuery":
        # Empty strings (e.g. "?name=") count as not supplied.
        values = {}
        for f in fields(cls):
            raw = args.get(f.name)
            if raw is not None and str(raw) != "":
                values[f.name] = str(raw)
        return cls(**values)

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


def _contains(haystack: Any, needle: str) -> bool:
    return needle.lower() in str(haystack or "").lower()


def matches(user: User, query: UserQuery) -> bool:
    if query.name is not None:
        candidates = (user.id, user.first_name, user.last_name, user.native_full_name)
        if not any(_contains(c, query.name) for c in candidates):
            return False

    for attr in ("email", "phone", "telegram"):
        needle = getattr(query, attr)
        if needle is not None and not _contains(getattr(user, attr), needle):
            return False

    for attr in ("building", "room", "department"):
        expected = getattr(query, attr)
        actual = getattr(user, attr)
        if expected is not None and ("" if actual is None else str(actual)) != expected:
            return False

    return True


def filter_users(users: Iterable[User], query: Optional[UserQuery]) -> list[User]:
    if query is None or query.is_empty:
        return list(users)
    return [u for u in users if matches(u, query)]
