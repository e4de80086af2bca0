from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL, make_url


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class AppConfig:
    # Either a full URL (DATABASE_URL) or the POSTGRES_* parts below
    database_url: Optional[str]
    postgres_user: Optional[str] = None
    postgres_password: Optional[str] = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_database: Optional[str] = None

    # Connection pool bounds (fetch_card_data needs 3 connections at once)
    pool_size: int = 5
    max_overflow: int = 5

    log_level: str = "INFO"

    @property
    def sqlalchemy_url(self) -> URL:
        """
        URL handed to SQLAlchemy.
        - DATABASE_URL wins when set; `postgres://` style schemes are pinned to psycopg 3
        - otherwise the URL is assembled from the POSTGRES_* parts
        """
        if self.database_url:
            url = make_url(self.database_url)
            if url.drivername in ("postgres", "postgresql"):
                url = url.set(drivername="postgresql+psycopg")
            return url

        if not self.postgres_database:
            raise ConfigError(
                "Missing database settings. Set DATABASE_URL, or POSTGRES_DATABASE "
                "(plus POSTGRES_USER / POSTGRES_PASSWORD / POSTGRES_HOST / POSTGRES_PORT)."
            )
        return URL.create(
            "postgresql+psycopg",
            username=self.postgres_user,
            password=self.postgres_password,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_database,
        )


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _getenv_int(name: str, default: int) -> int:
    v = _getenv(name)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {v!r}") from None


def get_config() -> AppConfig:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - Built once at startup and passed explicitly to every data call
    """
    load_dotenv(override=False)

    cfg = AppConfig(
        database_url=_getenv("DATABASE_URL"),
        postgres_user=_getenv("POSTGRES_USER"),
        postgres_password=_getenv("POSTGRES_PASSWORD"),
        postgres_host=_getenv("POSTGRES_HOST", "localhost") or "localhost",
        postgres_port=_getenv_int("POSTGRES_PORT", 5432),
        postgres_database=_getenv("POSTGRES_DATABASE"),
        pool_size=_getenv_int("DB_POOL_SIZE", 5),
        max_overflow=_getenv_int("DB_MAX_OVERFLOW", 5),
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
    )
    # Fail at startup rather than on the first query
    _ = cfg.sqlalchemy_url
    return cfg
