"""Tests for structured logging configuration."""

from __future__ import annotations

import io
import json
import logging
import sys

import pytest
import structlog

from uniquekey.core.logging import configure_logging


@pytest.fixture(autouse=True)
def reset_logging() -> None:
    """Reset logging configuration between tests."""
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)


def test_configure_logging_console_output() -> None:
    configure_logging(json_output=False, level="INFO")
    assert logging.getLogger().level == logging.INFO
    assert len(logging.getLogger().handlers) == 1


def test_configure_logging_json_output() -> None:
    """JSON mode renders structlog events as one JSON object per line."""
    captured = io.StringIO()

    configure_logging(json_output=True, level="INFO")

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    handler = logging.StreamHandler(captured)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)

    log = structlog.get_logger("test_json")
    log.info("keys allocated", definition="yarp", count=3)

    data = json.loads(captured.getvalue().strip())
    assert data["event"] == "keys allocated"
    assert data["definition"] == "yarp"
    assert data["count"] == 3
    assert data["level"] == "info"
    assert "timestamp" in data


@pytest.mark.parametrize(
    ("name", "level"),
    [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), ("ERROR", logging.ERROR)],
)
def test_configure_logging_levels(name: str, level: int) -> None:
    configure_logging(level=name)
    assert logging.getLogger().level == level


def test_reconfigure_replaces_handler() -> None:
    configure_logging()
    configure_logging()
    assert len(logging.getLogger().handlers) == 1


def test_logs_go_to_stderr() -> None:
    """stdout is reserved for generated keys."""
    configure_logging()
    handler = logging.getLogger().handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is sys.stderr
