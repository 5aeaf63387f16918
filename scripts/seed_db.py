from __future__ import annotations

import importlib

from dotenv import load_dotenv

from staff_directory.config import get_settings_module
from staff_directory.database.bootstrap import ensure_data_file, ensure_demo_users
from staff_directory.database.connection import JsonFileStore, StoreConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())

    store = JsonFileStore.get_instance(StoreConfig(data_file=settings.DATA_FILE))
    ensure_data_file(store)
    created = ensure_demo_users(store)

    print(f"OK: Seeded data file -> {store.path} (created={created})")


if __name__ == "__main__":
    main()
