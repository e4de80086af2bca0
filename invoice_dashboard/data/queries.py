from __future__ import annotations

# Case-insensitive substring match, written so it runs on Postgres and SQLite alike
# (equivalent to `col ILIKE :query` / `col::text ILIKE :query`).
_INVOICE_SEARCH = """
      (LOWER(c.name) LIKE LOWER(:query)
       OR LOWER(c.email) LIKE LOWER(:query)
       OR CAST(i.amount AS TEXT) LIKE :query
       OR CAST(i.date AS TEXT) LIKE :query
       OR LOWER(i.status) LIKE LOWER(:query))
"""


def like_pattern(term: str) -> str:
    return f"%{term}%"


def q_revenue() -> str:
    return """
    SELECT month, revenue
    FROM revenue
    """


def q_latest_invoices(limit: int = 5) -> str:
    return f"""
    SELECT
      i.amount,
      c.name,
      c.image_url,
      c.email,
      i.id
    FROM invoices i
    JOIN customers c ON i.customer_id = c.id
    ORDER BY i.date DESC
    LIMIT {int(limit)}
    """


def q_invoice_count() -> str:
    return "SELECT COUNT(*) AS count FROM invoices"


def q_customer_count() -> str:
    return "SELECT COUNT(*) AS count FROM customers"


def q_invoice_status_totals() -> str:
    return """
    SELECT
      SUM(CASE WHEN status = 'paid' THEN amount ELSE 0 END) AS paid,
      SUM(CASE WHEN status = 'pending' THEN amount ELSE 0 END) AS pending
    FROM invoices
    """


def q_filtered_invoices() -> str:
    """Binds: query (wildcard-wrapped), limit, offset."""
    return f"""
    SELECT
      i.id,
      i.amount,
      i.date,
      i.status,
      c.name,
      c.email,
      c.image_url
    FROM invoices i
    JOIN customers c ON i.customer_id = c.id
    WHERE {_INVOICE_SEARCH}
    ORDER BY i.date DESC
    LIMIT :limit OFFSET :offset
    """


def q_filtered_invoices_count() -> str:
    """Binds: query (wildcard-wrapped)."""
    return f"""
    SELECT COUNT(*) AS count
    FROM invoices i
    JOIN customers c ON i.customer_id = c.id
    WHERE {_INVOICE_SEARCH}
    """


def q_invoice_by_id() -> str:
    return """
    SELECT
      id,
      customer_id,
      amount,
      status
    FROM invoices
    WHERE id = :id
    """


def q_customers() -> str:
    return """
    SELECT id, name
    FROM customers
    ORDER BY name ASC
    """


def q_filtered_customers() -> str:
    """Per-customer invoice totals; customers without invoices still appear (LEFT JOIN)."""
    return """
    SELECT
      customers.id,
      customers.name,
      customers.email,
      customers.image_url,
      COUNT(invoices.id) AS total_invoices,
      SUM(CASE WHEN invoices.status = 'pending' THEN invoices.amount ELSE 0 END) AS total_pending,
      SUM(CASE WHEN invoices.status = 'paid' THEN invoices.amount ELSE 0 END) AS total_paid
    FROM customers
    LEFT JOIN invoices ON customers.id = invoices.customer_id
    WHERE
      LOWER(customers.name) LIKE LOWER(:query)
      OR LOWER(customers.email) LIKE LOWER(:query)
    GROUP BY customers.id, customers.name, customers.email, customers.image_url
    ORDER BY customers.name ASC
    """


def q_user_by_email() -> str:
    return """
    SELECT id, name, email, password
    FROM users
    WHERE email = :email
    """
