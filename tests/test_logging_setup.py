import logging

import pytest

from invoice_dashboard.logging_setup import configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _ours(root):
    return [h for h in root.handlers if getattr(h, "_invoice_dashboard", False)]


def test_configure_logging_installs_one_handler(root_logger):
    configure_logging("INFO")
    configure_logging("DEBUG")

    handlers = _ours(root_logger)
    assert len(handlers) == 1
    assert handlers[0].level == logging.DEBUG
    assert root_logger.level == logging.DEBUG
