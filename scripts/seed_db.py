#!/usr/bin/env python3
"""
Create the dashboard tables and load placeholder data.

Usage:
    python scripts/seed_db.py [--customers 10] [--invoices 15] [--seed 7]

Environment variables (or .env):
    DATABASE_URL - full connection URL, or
    POSTGRES_USER / POSTGRES_PASSWORD / POSTGRES_HOST / POSTGRES_PORT / POSTGRES_DATABASE
"""

from __future__ import annotations

import argparse
import logging
import sys

from invoice_dashboard.config import ConfigError, get_config
from invoice_dashboard.data.connection import dispose_clients
from invoice_dashboard.data.seed import generate_placeholder_data, seed_database
from invoice_dashboard.logging_setup import configure_logging

logger = logging.getLogger("seed_db")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--customers", type=int, default=10)
    parser.add_argument("--invoices", type=int, default=15)
    parser.add_argument("--seed", type=int, default=7)
    args = parser.parse_args(argv)

    try:
        cfg = get_config()
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    configure_logging(cfg.log_level)

    data = generate_placeholder_data(seed=args.seed, n_customers=args.customers, n_invoices=args.invoices)
    try:
        inserted = seed_database(cfg, data)
    finally:
        dispose_clients()

    logger.info("Done: %s", ", ".join(f"{t}={n}" for t, n in inserted.items()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
