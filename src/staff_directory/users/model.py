from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Optional

from ..common.names import join_name_parts
from ..core.enums import Role


@dataclass
class BirthDate:
    """Date of birth; each part is independently optional."""

    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None

    PARTS = ("year", "month", "day")

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "BirthDate":
        data = data if isinstance(data, dict) else {}
        return cls(year=data.get("year"), month=data.get("month"), day=data.get("day"))

    def to_dict(self) -> dict[str, Optional[int]]:
        return {"year": self.year, "month": self.month, "day": self.day}


@dataclass
class ManagerRef:
    """Link from a user to their manager.

    `id` is "" when no manager is assigned. Otherwise it is either the id of a
    user in the directory or a generated placeholder id for a manager who is not
    (yet) a user. The names are always the last ones supplied.
    """

    id: str = ""
    first_name: str = ""
    last_name: str = ""

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "ManagerRef":
        data = data if isinstance(data, dict) else {}
        return cls(
            id=data.get("id") or "",
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
        )

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "first_name": self.first_name, "last_name": self.last_name}


@dataclass
class User:
    """Domain entity: a directory employee record.

    Note: Plain data object, no storage access. Keys that are not part of the
    schema (written by the permissive general update) live in `extra` and are
    stored flat next to the known fields.
    """

    id: str
    email: str
    password_hash: str
    first_name: str = ""
    last_name: str = ""
    first_native_name: str = ""
    middle_native_name: str = ""
    last_native_name: str = ""
    is_remote_work: bool = False
    user_avatar: str = ""
    department: str = ""
    building: str = ""
    room: str = ""
    birth_date: BirthDate = field(default_factory=BirthDate)
    desk_number: int = 0
    manager: ManagerRef = field(default_factory=ManagerRef)
    phone: str = ""
    telegram: str = ""
    employee_number: str = ""
    citizenship: str = ""
    visa: list = field(default_factory=list)
    role: Any = Role.EMPLOYEE.value
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def field_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls) if f.name != "extra")

    @property
    def native_full_name(self) -> str:
        return join_name_parts(self.first_native_name, self.middle_native_name, self.last_native_name)

    def get_field(self, key: str, default: Any = None) -> Any:
        if key in self.field_names():
            return getattr(self, key)
        return self.extra.get(key, default)

    def set_field(self, key: str, value: Any) -> None:
        if key in self.field_names():
            setattr(self, key, value)
        else:
            self.extra[key] = value

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        known = cls.field_names()
        user = cls(
            id=str(data["id"]),
            email=data.get("email") or "",
            password_hash=data.get("password_hash") or "",
        )
        for key, value in data.items():
            if key in ("id", "email", "password_hash"):
                continue
            if key == "birth_date":
                user.birth_date = BirthDate.from_dict(value)
            elif key == "manager":
                user.manager = ManagerRef.from_dict(value)
            elif key in known:
                setattr(user, key, value)
            else:
                user.extra[key] = value
        return user

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if isinstance(value, (BirthDate, ManagerRef)):
                value = value.to_dict()
            elif isinstance(value, Role):
                value = value.value
            out[f.name] = value
        for key, value in self.extra.items():
            out.setdefault(key, value)
        return out

    def public_dict(self) -> dict[str, Any]:
        out = self.to_dict()
        out.pop("password_hash", None)
        return out

    def session_dict(self) -> dict[str, Any]:
        """What sign-in hands back to the client."""
        role = self.role.value if isinstance(self.role, Role) else self.role
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "user_avatar": self.user_avatar,
            "role": role,
        }


def new_user(*, user_id: str, email: str, password_hash: str, first_name: str = "", last_name: str = "") -> User:
    """Sign-up template: every optional field at its default."""
    return User(
        id=user_id,
        email=email,
        password_hash=password_hash,
        first_name=first_name or "",
        last_name=last_name or "",
    )
