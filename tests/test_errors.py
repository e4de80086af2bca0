import logging

import pytest

from invoice_dashboard.data import (
    DatabaseError,
    fetch_card_data,
    fetch_customers,
    fetch_filtered_customers,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
    fetch_latest_invoices,
    fetch_revenue,
    get_user,
)
from invoice_dashboard.data import queries
from invoice_dashboard.data.connection import SqlClient, get_sql_client

SERVICE_LOGGER = "invoice_dashboard.data.service"

CALLS = [
    (lambda cfg: fetch_revenue(cfg), "Failed to fetch revenue data."),
    (lambda cfg: fetch_latest_invoices(cfg), "Failed to fetch the latest invoices."),
    (lambda cfg: fetch_card_data(cfg), "Failed to fetch card data."),
    (lambda cfg: fetch_filtered_invoices(cfg, "lee", 1), "Failed to fetch invoices."),
    (lambda cfg: fetch_invoices_pages(cfg, "lee"), "Failed to fetch total number of invoices."),
    (lambda cfg: fetch_invoice_by_id(cfg, "inv-1"), "Failed to fetch invoice."),
    (lambda cfg: fetch_customers(cfg), "Failed to fetch all customers."),
    (lambda cfg: fetch_filtered_customers(cfg, "lee"), "Failed to fetch customer table."),
    (lambda cfg: get_user(cfg, "user@nextmail.com"), "Failed to fetch user."),
]


def _service_errors(caplog):
    return [r for r in caplog.records if r.name == SERVICE_LOGGER and r.levelno == logging.ERROR]


@pytest.mark.parametrize("call, message", CALLS)
def test_connection_failure_is_wrapped_and_logged_once(broken_cfg, caplog, call, message):
    caplog.set_level(logging.ERROR, logger=SERVICE_LOGGER)

    with pytest.raises(DatabaseError) as exc_info:
        call(broken_cfg)

    assert str(exc_info.value) == message
    assert exc_info.value.__cause__ is None
    assert exc_info.value.__suppress_context__ is True
    records = _service_errors(caplog)
    assert len(records) == 1
    assert records[0].exc_info is not None


def test_driver_detail_stays_in_the_log(cfg, caplog, monkeypatch):
    def boom(self, query, params=None):
        raise RuntimeError("password authentication failed for user postgres")

    monkeypatch.setattr(SqlClient, "query", boom)
    caplog.set_level(logging.ERROR, logger=SERVICE_LOGGER)

    with pytest.raises(DatabaseError) as exc_info:
        fetch_customers(cfg)

    assert "password" not in str(exc_info.value)
    assert "password authentication failed" in caplog.text


def test_card_data_fails_when_any_query_fails(cfg, caplog, monkeypatch):
    monkeypatch.setattr(queries, "q_customer_count", lambda: "SELECT COUNT(*) AS count FROM no_such_table")
    caplog.set_level(logging.ERROR, logger=SERVICE_LOGGER)

    with pytest.raises(DatabaseError, match="Failed to fetch card data."):
        fetch_card_data(cfg)

    assert len(_service_errors(caplog)) == 1


def test_connection_returned_to_pool_after_query_error(cfg, monkeypatch):
    monkeypatch.setattr(queries, "q_revenue", lambda: "SELECT * FROM no_such_table")

    with pytest.raises(DatabaseError):
        fetch_revenue(cfg)

    assert get_sql_client(cfg).engine.pool.checkedout() == 0


def test_page_validation_is_not_a_database_error(broken_cfg):
    with pytest.raises(ValueError):
        fetch_filtered_invoices(broken_cfg, "lee", 0)
