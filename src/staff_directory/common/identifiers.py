from __future__ import annotations

import uuid


def new_id() -> str:
    """Globally unique opaque identifier for users and placeholder managers."""
    return str(uuid.uuid4())
