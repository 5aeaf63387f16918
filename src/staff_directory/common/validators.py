from __future__ import annotations

from typing import Any

from ..core.enums import Role
from ..core.exceptions import ValidationError


def require_all_present(values: dict[str, Any], message: str = "All fields are required") -> None:
    """Raise one uniform error if any of the given values is missing or empty."""
    for value in values.values():
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(message)
    for name, value in values.items():
        if not isinstance(value, str):
            raise ValidationError(f"{name} must be a string")


def require_role(value: Any) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Invalid role")


def require_mapping(value: Any, field_name: str = "payload") -> dict:
    if not isinstance(value, dict):
        raise ValidationError(f"{field_name} must be a JSON object")
    return value
