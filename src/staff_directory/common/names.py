from __future__ import annotations

from typing import Any


def normalize_name(value: Any) -> str:
    """Canonical form of a display name, for comparison only (never stored)."""
    if value is None:
        return ""
    return str(value).strip().lower()


def clean_name(value: Any) -> str:
    """Trimmed display name as stored; absent becomes empty."""
    if value is None:
        return ""
    return str(value).strip()


def join_name_parts(*parts: Any) -> str:
    return " ".join(p for p in (clean_name(x) for x in parts) if p)
