from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Console logging for scripts and host apps. Safe to call more than once."""
    root = logging.getLogger()
    root.setLevel(level)

    for h in root.handlers:
        if getattr(h, "_invoice_dashboard", False):
            h.setLevel(level)
            return

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    handler._invoice_dashboard = True  # type: ignore[attr-defined]
    root.addHandler(handler)
