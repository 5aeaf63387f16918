from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from ..database.connection import JsonFileStore
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class JsonUserRepository(UserRepository):
    """In-memory user collection mirrored to a JSON file on every mutation.

    Mutations run inside `transaction()`, which holds a single writer lock and
    overwrites the whole document once the block finishes. If the block raises,
    nothing is written; changes already made to the in-memory records are not
    undone.
    """

    def __init__(self, store: JsonFileStore):
        self._store = store
        self._lock = threading.RLock()
        self._users: list[User] = [User.from_dict(row) for row in store.load_all() if row.get("id")]
        logger.info("Loaded %d users from %s", len(self._users), store.path)

    def list_all(self) -> Sequence[User]:
        return list(self._users)

    def get_by_id(self, user_id: str) -> Optional[User]:
        return next((u for u in self._users if u.id == user_id), None)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._users if u.email == email), None)

    def add(self, user: User) -> None:
        with self._lock:
            self._users.append(user)

    @contextmanager
    def transaction(self) -> Iterator[Sequence[User]]:
        with self._lock:
            yield self._users
            self._commit()

    def _commit(self) -> None:
        self._store.save_all([u.to_dict() for u in self._users])
        logger.debug("Wrote %d users to %s", len(self._users), self._store.path)
