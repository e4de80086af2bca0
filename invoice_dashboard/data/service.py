from __future__ import annotations

import functools
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

import pandas as pd

from invoice_dashboard.config import AppConfig
from invoice_dashboard.data import queries
from invoice_dashboard.data.connection import get_sql_client
from invoice_dashboard.formatting import cents_to_dollars, format_currency

logger = logging.getLogger(__name__)

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5

F = TypeVar("F", bound=Callable[..., Any])


class DatabaseError(RuntimeError):
    """Raised by every data call; the driver error is logged, never attached."""


@dataclass(frozen=True)
class CardData:
    number_of_customers: int
    number_of_invoices: int
    total_paid_invoices: str
    total_pending_invoices: str


def _db_errors(message: str) -> Callable[[F], F]:
    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return fn(*args, **kwargs)
            except Exception as e:
                logger.error("Database Error: %s", e, exc_info=e)
                raise DatabaseError(message) from None

        return wrapper  # type: ignore[return-value]

    return decorator


def _first_row(df: pd.DataFrame) -> Optional[dict[str, Any]]:
    if df.empty:
        return None
    return df.to_dict("records")[0]


def _number(v: Any) -> Any:
    # SUM() over an empty table is NULL
    return 0 if v is None or pd.isna(v) else v


@_db_errors("Failed to fetch revenue data.")
def fetch_revenue(cfg: AppConfig) -> pd.DataFrame:
    logger.debug("Fetching revenue data")
    return get_sql_client(cfg).query(queries.q_revenue())


@_db_errors("Failed to fetch the latest invoices.")
def fetch_latest_invoices(cfg: AppConfig) -> pd.DataFrame:
    df = get_sql_client(cfg).query(queries.q_latest_invoices(LATEST_INVOICES_LIMIT))
    return df.assign(amount=df["amount"].map(format_currency))


@_db_errors("Failed to fetch card data.")
def fetch_card_data(cfg: AppConfig) -> CardData:
    """
    Dashboard summary cards.
    The three aggregates are independent, so they run side by side on separate
    pooled connections; any failure fails the whole call.
    """
    client = get_sql_client(cfg)
    with ThreadPoolExecutor(max_workers=3, thread_name_prefix="card-data") as pool:
        invoice_count = pool.submit(client.query, queries.q_invoice_count())
        customer_count = pool.submit(client.query, queries.q_customer_count())
        status_totals = pool.submit(client.query, queries.q_invoice_status_totals())

        invoices = invoice_count.result()
        customers = customer_count.result()
        totals = status_totals.result()

    return CardData(
        number_of_customers=int(_number(customers.iloc[0]["count"])),
        number_of_invoices=int(_number(invoices.iloc[0]["count"])),
        total_paid_invoices=format_currency(_number(totals.iloc[0]["paid"])),
        total_pending_invoices=format_currency(_number(totals.iloc[0]["pending"])),
    )


def fetch_filtered_invoices(cfg: AppConfig, query: str, current_page: int) -> pd.DataFrame:
    """One page (ITEMS_PER_PAGE rows max) of invoices matching `query`, newest first."""
    if current_page < 1:
        raise ValueError(f"current_page must be >= 1, got {current_page}")
    return _fetch_filtered_invoices(cfg, query, current_page)


@_db_errors("Failed to fetch invoices.")
def _fetch_filtered_invoices(cfg: AppConfig, query: str, current_page: int) -> pd.DataFrame:
    offset = (current_page - 1) * ITEMS_PER_PAGE
    return get_sql_client(cfg).query(
        queries.q_filtered_invoices(),
        {"query": queries.like_pattern(query), "limit": ITEMS_PER_PAGE, "offset": offset},
    )


@_db_errors("Failed to fetch total number of invoices.")
def fetch_invoices_pages(cfg: AppConfig, query: str) -> int:
    df = get_sql_client(cfg).query(
        queries.q_filtered_invoices_count(),
        {"query": queries.like_pattern(query)},
    )
    count = int(_number(df.iloc[0]["count"]))
    return math.ceil(count / ITEMS_PER_PAGE)


@_db_errors("Failed to fetch invoice.")
def fetch_invoice_by_id(cfg: AppConfig, invoice_id: str) -> Optional[dict[str, Any]]:
    """Invoice form data with `amount` in dollars, or None if the id is unknown."""
    row = _first_row(get_sql_client(cfg).query(queries.q_invoice_by_id(), {"id": invoice_id}))
    if row is None:
        return None
    row["amount"] = cents_to_dollars(row["amount"])
    return row


@_db_errors("Failed to fetch all customers.")
def fetch_customers(cfg: AppConfig) -> pd.DataFrame:
    return get_sql_client(cfg).query(queries.q_customers())


@_db_errors("Failed to fetch customer table.")
def fetch_filtered_customers(cfg: AppConfig, query: str) -> pd.DataFrame:
    df = get_sql_client(cfg).query(
        queries.q_filtered_customers(),
        {"query": queries.like_pattern(query)},
    )
    return df.assign(
        total_invoices=df["total_invoices"].map(lambda v: int(_number(v))),
        total_pending=df["total_pending"].map(lambda v: format_currency(_number(v))),
        total_paid=df["total_paid"].map(lambda v: format_currency(_number(v))),
    )


@_db_errors("Failed to fetch user.")
def get_user(cfg: AppConfig, email: str) -> Optional[dict[str, Any]]:
    return _first_row(get_sql_client(cfg).query(queries.q_user_by_email(), {"email": email}))
