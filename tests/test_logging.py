"""
Tests for logging setup.
"""

import logging

from ops.logging import setup_logging


def test_setup_logging_writes_file(tmp_path):
    log_path = tmp_path / "logs" / "engine.log"
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level

    try:
        setup_logging(str(log_path), "debug")
        logging.getLogger("tracking").debug("track registered")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.DEBUG
        text = log_path.read_text()
        assert "tracking - DEBUG - track registered" in text
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)
