# Tests for logging_setup.py
# Created: 2026-03-12

import logging

from rich.logging import RichHandler

import hanafs.logging_setup as logging_setup


def test_installs_single_rich_handler(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(logging_setup, "_configured", False)
    before = list(root.handlers)
    try:
        logging_setup.setup_logging("debug")
        logging_setup.setup_logging("info")
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
        assert isinstance(added[0], RichHandler)
        assert root.level == logging.INFO
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        for handler in [h for h in root.handlers if h not in before]:
            root.removeHandler(handler)
