from __future__ import annotations

from contextlib import contextmanager
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from staff_directory.core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from staff_directory.users.model import BirthDate, User
from staff_directory.users.query import UserQuery
from staff_directory.users.service import AuthService, UserService


class InMemoryUsers:
    def __init__(self, users: Optional[list[User]] = None):
        self.users: list[User] = list(users or [])
        self.commits = 0

    def list_all(self):
        return list(self.users)

    def get_by_id(self, user_id: str) -> Optional[User]:
        return next((u for u in self.users if u.id == user_id), None)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users if u.email == email), None)

    def add(self, user: User) -> None:
        self.users.append(user)

    @contextmanager
    def transaction(self):
        yield self.users
        self.commits += 1


def make_user(user_id: str = "u-1", email: str = "jane@example.com", password: str = "secret", **kwargs) -> User:
    return User(id=user_id, email=email, password_hash=generate_password_hash(password), **kwargs)


def test_sign_up_creates_default_record():
    repo = InMemoryUsers()
    user = AuthService(repo).sign_up(first_name="Jane", last_name="Doe", email="jane@example.com", password="secret")

    assert repo.users == [user]
    assert repo.commits == 1
    assert user.id
    assert user.role == "employee"
    assert user.manager.id == ""
    assert user.birth_date == BirthDate()
    assert user.desk_number == 0
    assert user.visa == []
    assert user.password_hash != "secret"


@pytest.mark.parametrize("missing", ["first_name", "last_name", "email", "password"])
def test_sign_up_requires_all_fields(missing):
    repo = InMemoryUsers()
    fields = {"first_name": "Jane", "last_name": "Doe", "email": "jane@example.com", "password": "secret"}
    fields[missing] = ""

    with pytest.raises(ValidationError):
        AuthService(repo).sign_up(**fields)
    assert repo.users == []
    assert repo.commits == 0


def test_sign_up_rejects_duplicate_email_and_keeps_original_digest():
    original = make_user(password="first")
    repo = InMemoryUsers([original])
    digest = original.password_hash

    with pytest.raises(ConflictError):
        AuthService(repo).sign_up(first_name="X", last_name="Y", email="jane@example.com", password="second")

    assert repo.users == [original]
    assert original.password_hash == digest
    assert repo.commits == 0


def test_sign_in_returns_session_payload_without_digest():
    repo = InMemoryUsers([make_user(first_name="Jane", last_name="Doe", user_avatar="a.png")])
    payload = AuthService(repo).sign_in(email="jane@example.com", password="secret")

    assert payload == {
        "id": "u-1",
        "email": "jane@example.com",
        "first_name": "Jane",
        "last_name": "Doe",
        "user_avatar": "a.png",
        "role": "employee",
    }


def test_sign_in_error_is_identical_for_unknown_email_and_wrong_password():
    repo = InMemoryUsers([make_user()])
    svc = AuthService(repo)

    with pytest.raises(AuthenticationError) as unknown:
        svc.sign_in(email="nobody@example.com", password="secret")
    with pytest.raises(AuthenticationError) as wrong:
        svc.sign_in(email="jane@example.com", password="nope")

    assert str(unknown.value) == str(wrong.value) == "Invalid credentials"


def test_sign_in_with_corrupt_digest_fails_as_bad_credentials():
    user = make_user()
    user.password_hash = "CHANGE_ME"
    with pytest.raises(AuthenticationError):
        AuthService(InMemoryUsers([user])).sign_in(email="jane@example.com", password="secret")


def test_update_role_accepts_known_roles():
    repo = InMemoryUsers([make_user()])
    user = UserService(repo).update_role(user_id="u-1", role="hr")
    assert user.role == "hr"
    assert repo.commits == 1


@pytest.mark.parametrize("role", ["superuser", "", None, "Admin"])
def test_update_role_rejects_unknown_roles_and_keeps_role(role):
    user = make_user(role="admin")
    repo = InMemoryUsers([user])

    with pytest.raises(ValidationError):
        UserService(repo).update_role(user_id="u-1", role=role)

    assert user.role == "admin"
    assert repo.commits == 0


def test_update_role_unknown_user():
    with pytest.raises(NotFoundError):
        UserService(InMemoryUsers()).update_role(user_id="missing", role="hr")


def test_update_user_merges_and_commits():
    boss = make_user(user_id="boss", email="ada@example.com", first_name="Ada", last_name="Lovelace")
    user = make_user(birth_date=BirthDate(year=1990, month=5, day=1))
    repo = InMemoryUsers([user, boss])

    UserService(repo).update_user(
        user_id="u-1",
        updates={"birth_date": {"month": 6}, "manager": {"first_name": "ada", "last_name": "lovelace"}},
    )

    assert user.birth_date == BirthDate(year=1990, month=6, day=1)
    assert user.manager.id == "boss"
    assert repo.commits == 1


def test_update_user_role_policy_is_configurable():
    user = make_user()
    repo = InMemoryUsers([user])

    UserService(repo).update_user(user_id="u-1", updates={"role": "intern"})
    assert user.role == "intern"

    with pytest.raises(ValidationError):
        UserService(repo, enforce_role_on_update=True).update_user(user_id="u-1", updates={"role": "ceo"})
    assert user.role == "intern"


def test_update_user_unknown_user():
    repo = InMemoryUsers()
    with pytest.raises(NotFoundError):
        UserService(repo).update_user(user_id="missing", updates={"room": "1"})
    assert repo.commits == 0


def test_get_and_list_users():
    a = make_user(user_id="a", email="a@example.com", department="Eng")
    b = make_user(user_id="b", email="b@example.com", department="Ops")
    svc = UserService(InMemoryUsers([a, b]))

    assert svc.get_user("b") is b
    assert svc.list_users() == [a, b]
    assert svc.list_users(UserQuery(department="Ops")) == [b]
    with pytest.raises(NotFoundError):
        svc.get_user("c")


@pytest.mark.parametrize("password", [123, None, ["secret"], b"secret"])
def test_sign_in_with_non_string_password_is_bad_credentials(password):
    svc = AuthService(InMemoryUsers([make_user()]))
    with pytest.raises(AuthenticationError) as known:
        svc.sign_in(email="jane@example.com", password=password)
    with pytest.raises(AuthenticationError) as unknown:
        svc.sign_in(email="nobody@example.com", password=password)
    assert str(known.value) == str(unknown.value)


@pytest.mark.parametrize("missing,value", [("password", 123), ("email", 42), ("first_name", ["Jane"]), ("last_name", True)])
def test_sign_up_rejects_non_string_fields(missing, value):
    repo = InMemoryUsers()
    fields = {"first_name": "Jane", "last_name": "Doe", "email": "jane@example.com", "password": "secret"}
    fields[missing] = value

    with pytest.raises(ValidationError):
        AuthService(repo).sign_up(**fields)
    assert repo.users == []
    assert repo.commits == 0
