from __future__ import annotations

from datetime import date, timedelta

import pytest

from invoice_dashboard.config import AppConfig
from invoice_dashboard.data.connection import dispose_clients
from invoice_dashboard.data.seed import DEMO_USER, MONTHS, seed_database


def _sqlite_cfg(path) -> AppConfig:
    return AppConfig(database_url=f"sqlite:///{path}")


def dashboard_rows() -> dict[str, list[dict]]:
    """
    - Lee Robinson: 13 invoices, one per day from 2023-01-01, amounts 1000..13000 cents
    - Delba de Oliveira: a single paid invoice of 4500 cents
    - Hector Simpson: no invoices
    """
    customers = [
        {"id": "cust-lee", "name": "Lee Robinson", "email": "lee@robinson.com", "image_url": "/customers/lee-robinson.png"},
        {"id": "cust-delba", "name": "Delba de Oliveira", "email": "delba@oliveira.com", "image_url": "/customers/delba-de-oliveira.png"},
        {"id": "cust-hector", "name": "Hector Simpson", "email": "hector@simpson.com", "image_url": "/customers/hector-simpson.png"},
    ]
    start = date(2023, 1, 1)
    invoices = [
        {
            "id": f"inv-lee-{k:02d}",
            "customer_id": "cust-lee",
            "amount": 1000 * (k + 1),
            "status": "paid" if k % 2 == 0 else "pending",
            "date": (start + timedelta(days=k)).isoformat(),
        }
        for k in range(13)
    ]
    invoices.append(
        {"id": "inv-delba", "customer_id": "cust-delba", "amount": 4500, "status": "paid", "date": "2022-06-05"}
    )
    revenue = [{"month": m, "revenue": 1000 + 100 * i} for i, m in enumerate(MONTHS)]
    users = [{"id": "user-1", **DEMO_USER}]
    return {"users": users, "customers": customers, "invoices": invoices, "revenue": revenue}


@pytest.fixture(autouse=True)
def _dispose_pools():
    yield
    dispose_clients()


@pytest.fixture
def empty_cfg(tmp_path) -> AppConfig:
    cfg = _sqlite_cfg(tmp_path / "empty.db")
    seed_database(cfg, {}, bcrypt_rounds=4)
    return cfg


@pytest.fixture
def cfg(tmp_path) -> AppConfig:
    cfg = _sqlite_cfg(tmp_path / "dashboard.db")
    seed_database(cfg, dashboard_rows(), bcrypt_rounds=4)
    return cfg


@pytest.fixture
def broken_cfg(tmp_path) -> AppConfig:
    # Parent directory does not exist, so every connect fails
    return _sqlite_cfg(tmp_path / "missing" / "dir" / "dashboard.db")
