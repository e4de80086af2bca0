"""Invoice dashboard data layer: invoices, customers, revenue and users for display."""

__version__ = "0.1.0"
