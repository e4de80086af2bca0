"""
Data access layer.

Design rules:
- Callers use ONLY functions in this package.
- Every call gets the AppConfig passed in; no env var reads here (config-only).
- Failures surface as DatabaseError; driver details stay in the logs.
"""

from invoice_dashboard.data.service import (
    ITEMS_PER_PAGE,
    CardData,
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

__all__ = [
    "ITEMS_PER_PAGE",
    "CardData",
    "DatabaseError",
    "fetch_card_data",
    "fetch_customers",
    "fetch_filtered_customers",
    "fetch_filtered_invoices",
    "fetch_invoice_by_id",
    "fetch_invoices_pages",
    "fetch_latest_invoices",
    "fetch_revenue",
    "get_user",
]
