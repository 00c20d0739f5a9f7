"""Where the domain state database and HTTP cache live."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var, positive_float_env_var

DEFAULT_DB_FILENAME: Final[str] = "preloadsync.db"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"
DEFAULT_STORE_TIMEOUT_SECONDS: Final[float] = 10.0


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path

    def file(self, filename: str) -> Path:
        """Path of ``filename`` inside the data directory, creating the directory."""

        data_dir = self.data_dir.expanduser().resolve()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir / filename

    def http_cache_path(self) -> Path:
        return self.file(HTTP_CACHE_FILENAME)

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.file(DEFAULT_DB_FILENAME)}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str
    # Ceiling for any single store operation.
    timeout_seconds: float = DEFAULT_STORE_TIMEOUT_SECONDS


def get_storage_config() -> StorageConfig:
    env_dir = optional_env_var("PRELOADSYNC_DATA_DIR")
    if env_dir:
        return StorageConfig(data_dir=Path(env_dir))
    xdg_data_home = os.getenv("XDG_DATA_HOME")
    base = Path(xdg_data_home) if xdg_data_home else Path.home() / ".local" / "share"
    return StorageConfig(data_dir=base / "preloadsync")


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    timeout = positive_float_env_var("PRELOADSYNC_STORE_TIMEOUT", DEFAULT_STORE_TIMEOUT_SECONDS)
    env_uri = optional_env_var("DATABASE_URI")
    if env_uri:
        return DatabaseConfig(uri=env_uri, timeout_seconds=timeout)
    return DatabaseConfig(
        uri=(storage or get_storage_config()).database_uri(),
        timeout_seconds=timeout,
    )
