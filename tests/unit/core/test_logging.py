"""Tests for loguru sink configuration."""

import pytest
from loguru import logger

from schemaledger.core.logging import configure_logging


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    logger.remove()


def test_configure_logging_filters_by_level(capsys):
    """Messages below the configured level are dropped."""
    configure_logging("warning")

    logger.info("hidden message")
    logger.warning("shown message")

    err = capsys.readouterr().err
    assert "shown message" in err
    assert "hidden message" not in err


def test_configure_logging_replaces_sinks(capsys):
    """Calling twice leaves a single sink."""
    configure_logging("INFO")
    configure_logging("INFO")

    logger.info("once")

    assert capsys.readouterr().err.count("once") == 1
