from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional

from ..common.identifiers import new_id
from ..common.names import clean_name, normalize_name
from .model import ManagerRef, User


def find_by_full_name(users: Iterable[User], first_name: str, last_name: str) -> Optional[User]:
    """First user (in collection order) whose normalized first and last names match.

    Two users sharing a first and last name cannot be told apart here; the
    earlier one always wins.
    """
    first = normalize_name(first_name)
    last = normalize_name(last_name)
    for user in users:
        if normalize_name(user.first_name) == first and normalize_name(user.last_name) == last:
            return user
    return None


def resolve_manager(
    manager_input: Mapping[str, Any],
    current: ManagerRef,
    all_users: Iterable[User],
    *,
    id_factory: Callable[[], str] = new_id,
) -> ManagerRef:
    """Compute the new manager reference for a `manager` update.

    The input is laid over the current reference key by key. Then:

    - no first and no last name: the reference is cleared, even if an id was sent;
    - both names: link to the first user with the same normalized name, keeping
      the names as typed;
    - otherwise (one name, or nobody matched): keep the id, minting a
      placeholder id if there is none yet.
    """
    merged = current.to_dict()
    for key, value in (manager_input or {}).items():
        if key in merged:
            merged[key] = value

    first = clean_name(merged.get("first_name"))
    last = clean_name(merged.get("last_name"))

    if not first and not last:
        return ManagerRef()

    if first and last:
        match = find_by_full_name(all_users, first, last)
        if match is not None:
            return ManagerRef(id=match.id, first_name=first, last_name=last)

    manager_id = merged.get("id")
    if not manager_id:
        manager_id = id_factory()
    return ManagerRef(id=str(manager_id), first_name=first, last_name=last)
