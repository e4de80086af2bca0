from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

import pandas as pd
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from invoice_dashboard.config import AppConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SqlClient:
    cfg: AppConfig
    engine: Engine = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        engine = create_engine(
            self.cfg.sqlalchemy_url,
            pool_size=self.cfg.pool_size,
            max_overflow=self.cfg.max_overflow,
            pool_pre_ping=True,
        )
        object.__setattr__(self, "engine", engine)
        logger.debug("Created connection pool for %s", engine.url.render_as_string(hide_password=True))

    def query(self, query: str, params: Optional[Mapping[str, Any]] = None) -> pd.DataFrame:
        """
        Returns a pandas.DataFrame for a read query.
        The connection goes back to the pool on every exit path, errors included.
        """
        with self.engine.connect() as conn:
            result = conn.execute(text(query), dict(params or {}))
            cols = list(result.keys())
            rows = [tuple(r) for r in result.fetchall()]
            return pd.DataFrame(rows, columns=cols)

    def execute(self, statement: str, params: Optional[Mapping[str, Any]] = None) -> None:
        with self.engine.begin() as conn:
            conn.execute(text(statement), dict(params or {}))

    def execute_many(self, statement: str, rows: Sequence[Mapping[str, Any]]) -> None:
        if not rows:
            return
        with self.engine.begin() as conn:
            conn.execute(text(statement), [dict(r) for r in rows])

    def dispose(self) -> None:
        self.engine.dispose()


# Keyed on the process-wide config; normally holds a single pool
_clients: dict[AppConfig, SqlClient] = {}
_clients_lock = threading.Lock()


def get_sql_client(cfg: AppConfig) -> SqlClient:
    """One pooled client per config, shared by every data call in the process."""
    with _clients_lock:
        client = _clients.get(cfg)
        if client is None:
            client = _clients[cfg] = SqlClient(cfg=cfg)
        return client


def dispose_clients() -> None:
    with _clients_lock:
        for client in _clients.values():
            client.dispose()
        _clients.clear()
