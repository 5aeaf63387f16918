from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role tag. Always checked on the role-update path."""

    EMPLOYEE = "employee"
    HR = "hr"
    ADMIN = "admin"
