"""Database settings for the local document mirror."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var

DEFAULT_DATABASE_URI = "sqlite+pysqlite:///catalogsync.db"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def get_database_config() -> DatabaseConfig:
    return DatabaseConfig(uri=optional_env_var("DATABASE_URI", DEFAULT_DATABASE_URI, parse=str))
