from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.identifiers import new_id
from ..common.validators import require_all_present, require_role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError
from .model import User, new_user
from .query import UserQuery, filter_users
from .repository import UserRepository
from .updates import apply_partial_update

logger = logging.getLogger(__name__)


class AuthService:
    """Use cases: sign up and sign in."""

    def __init__(self, users: UserRepository):
        self._users = users

    def sign_up(self, *, first_name: str, last_name: str, email: str, password: str) -> User:
        require_all_present(
            {"first_name": first_name, "last_name": last_name, "email": email, "password": password}
        )

        with self._users.transaction():
            if self._users.get_by_email(email):
                raise ConflictError("User already exists")

            user = new_user(
                user_id=new_id(),
                email=email,
                password_hash=generate_password_hash(password),
                first_name=first_name,
                last_name=last_name,
            )
            self._users.add(user)

        logger.info("Created user %s", user.id)
        return user

    def sign_in(self, *, email: str, password: str) -> dict[str, Any]:
        user = self._users.get_by_email(email) if email else None
        if not user:
            raise AuthenticationError("Invalid credentials")

        if not isinstance(password, str):
            ok = False
        else:
            try:
                ok = check_password_hash(user.password_hash, password)
            except (TypeError, ValueError):
                # e.g. empty or corrupted digests
                ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        return user.session_dict()


class UserService:
    """Use cases: browse and edit directory records."""

    def __init__(self, users: UserRepository, *, enforce_role_on_update: bool = False):
        self._users = users
        self._enforce_role_on_update = enforce_role_on_update

    def list_users(self, query: Optional[UserQuery] = None) -> Sequence[User]:
        return filter_users(self._users.list_all(), query)

    def get_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_role(self, *, user_id: str, role: Any) -> User:
        new_role = require_role(role)

        with self._users.transaction():
            user = self.get_user(user_id)
            user.role = new_role.value

        logger.info("Changed role of user %s to %s", user_id, new_role.value)
        return user

    def update_user(self, *, user_id: str, updates: Mapping[str, Any]) -> User:
        with self._users.transaction() as all_users:
            user = self.get_user(user_id)
            apply_partial_update(user, updates, all_users, enforce_role=self._enforce_role_on_update)

        logger.info("Updated user %s (fields: %s)", user_id, ", ".join(sorted(updates)))
        return user
