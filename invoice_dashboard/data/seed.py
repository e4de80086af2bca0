"""
Schema + placeholder data for local dev and tests.

The dashboard itself only reads; this module is the one place that writes.
Data is synthetic (Faker + seeded `random`) so repeated runs give the same rows.
"""

from __future__ import annotations

import logging
import random
import uuid
from datetime import date, timedelta
from typing import Any, Optional

import bcrypt
from faker import Faker

from invoice_dashboard.config import AppConfig
from invoice_dashboard.data.connection import SqlClient, get_sql_client

logger = logging.getLogger(__name__)

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
STATUSES = ["pending", "paid"]

DEMO_USER = {"name": "User", "email": "user@nextmail.com", "password": "123456"}

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS users (
      id VARCHAR(36) PRIMARY KEY,
      name VARCHAR(255) NOT NULL,
      email TEXT NOT NULL UNIQUE,
      password TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS customers (
      id VARCHAR(36) PRIMARY KEY,
      name VARCHAR(255) NOT NULL,
      email VARCHAR(255) NOT NULL,
      image_url VARCHAR(255) NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS invoices (
      id VARCHAR(36) PRIMARY KEY,
      customer_id VARCHAR(36) NOT NULL REFERENCES customers (id),
      amount INTEGER NOT NULL,
      status VARCHAR(255) NOT NULL,
      date DATE NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS revenue (
      month VARCHAR(4) NOT NULL UNIQUE,
      revenue INTEGER NOT NULL
    )
    """,
]

INSERTS = {
    "users": "INSERT INTO users (id, name, email, password) VALUES (:id, :name, :email, :password)",
    "customers": (
        "INSERT INTO customers (id, name, email, image_url) "
        "VALUES (:id, :name, :email, :image_url)"
    ),
    "invoices": (
        "INSERT INTO invoices (id, customer_id, amount, status, date) "
        "VALUES (:id, :customer_id, :amount, :status, :date)"
    ),
    "revenue": "INSERT INTO revenue (month, revenue) VALUES (:month, :revenue)",
}

# Parents first (invoices reference customers)
TABLE_ORDER = ["users", "customers", "invoices", "revenue"]


def create_schema(client: SqlClient) -> None:
    for ddl in SCHEMA:
        client.execute(ddl)


def generate_placeholder_data(
    seed: int = 7,
    n_customers: int = 10,
    n_invoices: int = 15,
    end: date | None = None,
) -> dict[str, list[dict[str, Any]]]:
    rng = random.Random(seed)
    fake = Faker()
    fake.seed_instance(seed)
    end = end or date.today()

    customers = []
    for _ in range(n_customers):
        name = fake.unique.name()
        slug = name.lower().replace(" ", "-").replace(".", "")
        customers.append(
            {
                "id": str(uuid.UUID(int=rng.getrandbits(128), version=4)),
                "name": name,
                "email": f"{slug}@{fake.free_email_domain()}",
                "image_url": f"/customers/{slug}.png",
            }
        )

    invoices = []
    # every invoice needs a customer to reference
    for _ in range(n_invoices if customers else 0):
        invoices.append(
            {
                "id": str(uuid.UUID(int=rng.getrandbits(128), version=4)),
                "customer_id": rng.choice(customers)["id"],
                # cents
                "amount": rng.randint(500, 50_000) * 10,
                "status": rng.choice(STATUSES),
                "date": (end - timedelta(days=rng.randint(0, 540))).isoformat(),
            }
        )

    revenue = [{"month": m, "revenue": rng.randint(10, 50) * 100} for m in MONTHS]

    users = [{"id": str(uuid.UUID(int=rng.getrandbits(128), version=4)), **DEMO_USER}]

    return {"users": users, "customers": customers, "invoices": invoices, "revenue": revenue}


def _hash_password(password: str, rounds: int) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def _row_count(client: SqlClient, table: str) -> int:
    df = client.query(f"SELECT COUNT(*) AS count FROM {table}")
    return int(df.iloc[0]["count"])


def seed_database(
    cfg: AppConfig,
    data: Optional[dict[str, list[dict[str, Any]]]] = None,
    bcrypt_rounds: int = 12,
) -> dict[str, int]:
    """
    Create tables and insert placeholder rows.
    Tables that already hold rows are left alone. Returns rows inserted per table.
    """
    client = get_sql_client(cfg)
    data = data if data is not None else generate_placeholder_data()

    create_schema(client)

    inserted: dict[str, int] = {}
    for table in TABLE_ORDER:
        rows = data.get(table, [])
        if _row_count(client, table):
            logger.info("Skipping %s: table already has rows", table)
            inserted[table] = 0
            continue
        if table == "users":
            rows = [{**r, "password": _hash_password(r["password"], bcrypt_rounds)} for r in rows]
        client.execute_many(INSERTS[table], rows)
        logger.info("Seeded %d rows into %s", len(rows), table)
        inserted[table] = len(rows)
    return inserted
