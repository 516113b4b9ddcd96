"""Tests for structured logging."""

from __future__ import annotations

from wingo.core.logging import get_audit_logger, get_logger, log_prediction_event


class TestStructuredLogging:
    def test_get_logger_returns_bound_logger(self) -> None:
        logger = get_logger("test.module")
        assert logger is not None

    def test_get_audit_logger(self) -> None:
        logger = get_audit_logger()
        assert logger is not None

    def test_log_stored_event_does_not_raise(self) -> None:
        log_prediction_event(
            action="stored",
            issue="20240101100010061",
            prediction="BIG",
            confidence=64,
        )

    def test_log_verdict_event_does_not_raise(self) -> None:
        log_prediction_event(
            action="verdict",
            issue="20240101100010060",
            status="LOSS",
            predicted="BIG",
            actual="SMALL",
        )
