from __future__ import annotations

import logging
from pathlib import Path

from werkzeug.security import generate_password_hash

from ..common.identifiers import new_id
from ..core.enums import Role
from ..users.model import User, new_user
from .connection import JsonFileStore

logger = logging.getLogger(__name__)

DEMO_USERS = (
    # (first_name, last_name, email, password, role)
    ("Admin", "Demo", "admin@example.com", "admin123", Role.ADMIN),
    ("Employee", "Demo", "employee@example.com", "employee123", Role.EMPLOYEE),
)


def ensure_data_file(store: JsonFileStore) -> Path:
    """Create an empty `{"users": []}` document if the store file is missing."""
    if not store.exists():
        store.save_all([])
        logger.info("Created empty data file %s", store.path)
    return store.path


def ensure_demo_users(store: JsonFileStore) -> int:
    """Upsert the demo accounts by email. Returns how many were created."""
    rows = store.load_all()
    users = [User.from_dict(r) for r in rows if r.get("id")]
    by_email = {u.email: u for u in users}

    created = 0
    for first_name, last_name, email, password, role in DEMO_USERS:
        password_hash = generate_password_hash(password)
        existing = by_email.get(email)
        if existing:
            existing.first_name = first_name
            existing.last_name = last_name
            existing.password_hash = password_hash
            existing.role = role.value
            continue

        user = new_user(
            user_id=new_id(),
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
        )
        user.role = role.value
        users.append(user)
        created += 1

    store.save_all([u.to_dict() for u in users])
    return created
