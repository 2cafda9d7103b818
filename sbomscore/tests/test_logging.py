"""Tests for the structured logging helpers."""

import logging

import pytest

from sbomscore.logging import format_log_value, getLogger, log_debug, log_info
from sbomscore.scoring.enums import GraphStatus


class TestGetLogger:
    """Tests for logger naming."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("sbomscore", "sbomscore"),
            ("sbomscore.scoring.engine", "sbomscore.scoring.engine"),
            ("reporting", "sbomscore.reporting"),
        ],
    )
    def test_namespace(self, name: str, expected: str) -> None:
        """Test that every logger lives under the package namespace."""
        assert getLogger(name).name == expected


class TestFormatLogValue:
    """Tests for message rendering of context values."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (7.909090, "7.91"),
            (10.0, "10.0"),
            (3, "3"),
            (True, "True"),
            (GraphStatus.UNREACHABLE, "unreachable"),
            (["ntia", "bsi-v1.1"], "ntia,bsi-v1.1"),
            (("structural",), "structural"),
            ({"b", "a"}, "a,b"),
            ("profiles: no profiles found", "profiles: no profiles found"),
        ],
    )
    def test_values(self, value, expected: str) -> None:
        """Test the rendering of each supported value type."""
        assert format_log_value(value) == expected


class TestLogEvent:
    """Tests for structured log records."""

    def test_message_and_context(self, caplog) -> None:
        """Test that the message is rendered while the context keeps raw values."""
        logger = getLogger("tests.events")
        with caplog.at_level(logging.INFO, logger="sbomscore.tests.events"):
            log_info(logger, "[Engine] profile evaluation selected", profiles=["ntia", "fsct"], score=9.254, skip=None)

        (record,) = caplog.records
        assert record.getMessage() == "[Engine] profile evaluation selected profiles=ntia,fsct score=9.25"
        assert record.context == {"profiles": ["ntia", "fsct"], "score": 9.254}

    def test_disabled_level_emits_nothing(self, caplog) -> None:
        """Test that events below the logger level are dropped."""
        logger = getLogger("tests.quiet")
        with caplog.at_level(logging.WARNING, logger="sbomscore.tests.quiet"):
            log_debug(logger, "[Engine] category evaluated", category="structural")
        assert caplog.records == []
