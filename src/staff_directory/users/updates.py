from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from ..common.validators import require_mapping, require_role
from ..core.constants import PROTECTED_UPDATE_KEYS
from ..core.exceptions import ValidationError
from .manager_resolver import resolve_manager
from .model import BirthDate, ManagerRef, User

logger = logging.getLogger(__name__)


def _check_updates(updates: Mapping[str, Any], *, enforce_role: bool) -> None:
    # Reject bad shapes before touching the record so a failed update changes nothing.
    for key in ("manager", "birth_date"):
        if key in updates and updates[key] is not None and not isinstance(updates[key], dict):
            raise ValidationError(f"{key} must be an object")
    if enforce_role and "role" in updates:
        require_role(updates["role"])


def merge_birth_date(current: BirthDate, value: Mapping[str, Any]) -> BirthDate:
    merged = current.to_dict()
    for part in BirthDate.PARTS:
        if part in value:
            merged[part] = value[part]
    return BirthDate(**merged)


def merge_nested(current: Any, value: Mapping[str, Any]) -> dict[str, Any]:
    base = dict(current) if isinstance(current, Mapping) else {}
    base.update(value)
    return base


def apply_partial_update(
    user: User,
    updates: Mapping[str, Any],
    all_users: Sequence[User],
    *,
    enforce_role: bool = False,
) -> User:
    """Apply a partial update to `user` in place and return it.

    Only keys present in `updates` are touched. `manager` goes through manager
    resolution against `all_users` (the user itself included), `birth_date`
    merges its parts, any other object merges one level deep, everything else
    (scalars, lists, None) replaces the field.

    Keys that are not on the schema are stored as-is. This permissive write is
    long-standing behaviour that clients rely on. The role is not checked
    unless `enforce_role` is set; the dedicated role update always checks it.

    Raises `ValidationError`, before any field is changed, when the payload is
    not a mapping, when `manager` or `birth_date` is neither an object nor None,
    or when `enforce_role` is set and the role is unknown.
    """
    updates = require_mapping(updates)
    _check_updates(updates, enforce_role=enforce_role)

    for key, value in updates.items():
        if key in PROTECTED_UPDATE_KEYS:
            logger.warning("Ignoring protected key %r in update of user %s", key, user.id)
            continue

        if key == "manager":
            if value is None:
                user.manager = ManagerRef()
            else:
                user.manager = resolve_manager(value, user.manager, all_users)
        elif key == "birth_date":
            if value is None:
                user.birth_date = BirthDate()
            else:
                user.birth_date = merge_birth_date(user.birth_date, value)
        elif isinstance(value, dict):
            user.set_field(key, merge_nested(user.get_field(key), value))
        else:
            user.set_field(key, value)

    return user
