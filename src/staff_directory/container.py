from __future__ import annotations

from dataclasses import dataclass

from .database.connection import JsonFileStore, StoreConfig
from .users.json_user_repository import JsonUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    store: JsonFileStore

    users_repo: JsonUserRepository

    auth_service: AuthService
    user_service: UserService


def build_container(*, data_file: str, enforce_role_on_update: bool = False) -> Container:
    store = JsonFileStore.get_instance(StoreConfig(data_file=str(data_file)))

    users_repo = JsonUserRepository(store)

    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo, enforce_role_on_update=enforce_role_on_update)

    return Container(
        store=store,
        users_repo=users_repo,
        auth_service=auth_service,
        user_service=user_service,
    )
