"""Tests for logging setup."""

import json
import logging
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest
from pythonjsonlogger.json import JsonFormatter

from phi_scrubber.logging_config import configure_logging


@pytest.fixture(autouse=True)
def _restore_root():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_plain_handler():
    configure_logging("debug")
    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG
    assert not isinstance(root.handlers[0].formatter, JsonFormatter)


def test_json_lines_renamed_fields():
    configure_logging("INFO", json_format=True)
    formatter = logging.getLogger().handlers[0].formatter
    assert isinstance(formatter, JsonFormatter)
    record = logging.LogRecord("phi_scrubber.redactor", logging.INFO, __file__, 1, "note %s", ("n1",), None)
    line = json.loads(formatter.format(record))
    assert line["severity"] == "INFO"
    assert line["name"] == "phi_scrubber.redactor"
    assert line["message"] == "note n1"
    assert "timestamp" in line
