"""
Tests for the shared logging setup.
"""

import sys
import os
import logging

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.logging_config import setup_logging, get_logger, QUIET_LOGGERS


def test_setup_logging_replaces_root_handlers():
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    try:
        setup_logging(logging.DEBUG)
        setup_logging(logging.WARNING)

        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stdout
        for name, level in QUIET_LOGGERS.items():
            assert logging.getLogger(name).level == level
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


def test_get_logger_uses_module_name():
    assert get_logger("app.services.storage").name == "app.services.storage"
