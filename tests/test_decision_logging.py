"""Unit tests for decision audit logging.

Tests verify behavior through actual log output to temp files.
"""

import json
import logging
from pathlib import Path

import pytest

from authn_restrictions.exceptions import InvalidResourceRestrictions
from authn_restrictions.resources import IdentitySpec
from authn_restrictions.result import AuthorizationResult, Stage
from authn_restrictions.telemetry.audit.decision_logger import DecisionEventLogger, create_decision_logger
from authn_restrictions.telemetry.system.system_logger import ConsoleFormatter
from authn_restrictions.utils.logging.iso_formatter import ISO8601Formatter


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "logs" / "decisions.jsonl"


@pytest.fixture
def system_logger() -> logging.Logger:
    """Isolated system logger that records what it receives."""
    logger = logging.getLogger("test.decision_logging.system")
    logger.handlers.clear()
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    records: list[logging.LogRecord] = []

    class _Collect(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            records.append(record)

    logger.addHandler(_Collect())
    logger.records = records  # type: ignore[attr-defined]
    return logger


@pytest.fixture
def audit(log_path: Path, system_logger: logging.Logger) -> DecisionEventLogger:
    return DecisionEventLogger(logger=create_decision_logger(log_path), system_logger=system_logger)


def read_entries(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text().splitlines() if line]


# ============================================================================
# Tests
# ============================================================================


class TestDecisionEventLogger:
    """Tests for DecisionEventLogger."""

    def test_accept_written(self, audit: DecisionEventLogger, log_path: Path) -> None:
        """An accepted decision is written with declared types but no values."""
        # Act
        audit.log(
            "k8s",
            AuthorizationResult.accept(),
            service_id="prod",
            role_id="acct:host:web",
            declared=IdentitySpec.of({"namespace": "secret-ns"}),
            eval_ms=1.23456,
        )

        # Assert
        [entry] = read_entries(log_path)
        assert entry["event"] == "authorization_decision"
        assert entry["decision"] == "accept"
        assert entry["stage"] == "match"
        assert entry["declared_types"] == ["namespace"]
        assert entry["eval_ms"] == 1.235
        assert "time" in entry
        assert "secret-ns" not in log_path.read_text()
        assert "failure_type" not in entry

    def test_empty_declared_spec_is_not_missing(self, audit: DecisionEventLogger) -> None:
        """An empty declared spec logs an empty type list, the same as no spec."""
        event = audit.log("azure", AuthorizationResult.accept(), declared=IdentitySpec())

        assert event.declared_types == []

    def test_reject_written_and_warned(
        self, audit: DecisionEventLogger, log_path: Path, system_logger: logging.Logger
    ) -> None:
        """A rejection carries error details and warns on the system logger."""
        # Arrange
        result = AuthorizationResult.reject(Stage.MATCH, InvalidResourceRestrictions("pod"))

        # Act
        event = audit.log("azure", result)

        # Assert
        [entry] = read_entries(log_path)
        assert entry["decision"] == "reject"
        assert entry["failure_type"] == "invalid_resource_restrictions"
        assert entry["error_type"] == "InvalidResourceRestrictions"
        assert entry["error_details"] == {"resource_type": "pod"}
        assert event.provider == "azure"

        [warning] = system_logger.records  # type: ignore[attr-defined]
        assert warning.levelno == logging.WARNING
        assert warning.msg["event"] == "authorization_rejected"


class TestFormatters:
    """Tests for the log formatters."""

    def _record(self, msg: object) -> logging.LogRecord:
        return logging.LogRecord("test", logging.WARNING, __file__, 1, msg, None, None)

    def test_iso_formatter_dict(self) -> None:
        """Dict messages are merged into the JSON entry."""
        entry = json.loads(ISO8601Formatter().format(self._record({"event": "x", "n": 1})))

        assert entry["event"] == "x"
        assert entry["level"] == "WARNING"
        assert entry["time"].endswith("Z")

    def test_iso_formatter_string(self) -> None:
        entry = json.loads(ISO8601Formatter().format(self._record("hello")))
        assert entry["message"] == "hello"

    def test_console_formatter_uses_event(self) -> None:
        assert ConsoleFormatter().format(self._record({"event": "annotation_resolved"})) == (
            "WARNING: annotation_resolved"
        )
