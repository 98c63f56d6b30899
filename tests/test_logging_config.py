"""
Unit tests for logging_config module
"""
import json
import logging

import pytest

from floodcore.logging_config import JsonFormatter, configure_logging


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def restore_floodcore_logger():
    logger = logging.getLogger("floodcore")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="floodcore.risk",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Risk score %s exceeds %s",
        args=(110, 100),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


# ============================================================================
# FORMATTER TESTS
# ============================================================================

class TestJsonFormatter:

    def test_basic_fields(self):
        payload = json.loads(JsonFormatter().format(make_record()))

        assert payload["level"] == "WARNING"
        assert payload["logger"] == "floodcore.risk"
        assert payload["message"] == "Risk score 110 exceeds 100"
        assert "ts" in payload
        assert "property_id" not in payload

    def test_structured_extras(self):
        payload = json.loads(JsonFormatter().format(
            make_record(property_id=7, caller="ST1", error_code=101)
        ))

        assert payload["property_id"] == 7
        assert payload["caller"] == "ST1"
        assert payload["error_code"] == 101


# ============================================================================
# CONFIGURE TESTS
# ============================================================================

class TestConfigureLogging:

    def test_single_json_handler(self, restore_floodcore_logger):
        configure_logging("debug")
        logger = configure_logging("debug")

        assert logger is restore_floodcore_logger
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JsonFormatter)
