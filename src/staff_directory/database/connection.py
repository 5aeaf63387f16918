from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from ..core.exceptions import StorageError


@dataclass
class StoreConfig:
    data_file: str


class JsonFileStore:
    """Durable mirror of the user collection: one JSON document `{"users": [...]}`.

    The whole collection is read at startup and overwritten on every commit.
    Writes go to a sibling temp file first and are moved into place, so a
    crash mid-write leaves the previous document intact.
    """

    _instances: dict[str, "JsonFileStore"] = {}

    def __init__(self, config: StoreConfig):
        self._config = config
        self._path = Path(config.data_file)

    @classmethod
    def get_instance(cls, config: StoreConfig) -> "JsonFileStore":
        key = str(Path(config.data_file).resolve())
        if key not in cls._instances:
            cls._instances[key] = JsonFileStore(config)
        return cls._instances[key]

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load_all(self) -> list[dict[str, Any]]:
        if not self._path.exists():
            return []
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot read {self._path}: {e}") from e
        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise StorageError(f"Corrupt data file {self._path}: {e}") from e

        users: Optional[Any] = data.get("users") if isinstance(data, dict) else None
        if users is None:
            return []
        if not isinstance(users, list):
            raise StorageError(f"Corrupt data file {self._path}: 'users' is not a list")
        return [u for u in users if isinstance(u, dict)]

    def save_all(self, users: list[dict[str, Any]]) -> None:
        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=str(directory))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump({"users": users}, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Cannot write {self._path}: {e}") from e
