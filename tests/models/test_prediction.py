"""Tests for prediction models and the error taxonomy."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from wingo.errors import DataSourceError, InsufficientDataError, SessionError, WingoError
from wingo.models.draw import DrawRecord, Outcome
from wingo.models.prediction import (
    AccuracyReport,
    CachedPrediction,
    EnsembleResult,
    NextPrediction,
    SessionResult,
    Verdict,
    WinLossResult,
)

B = Outcome.BIG
S = Outcome.SMALL


class TestEnsembleResult:
    def test_default_breakdown_for_no_votes(self) -> None:
        result = EnsembleResult(prediction=S, confidence=0, total_votes=0)
        assert result.breakdown == {B: 0, S: 0}

    def test_breakdown_must_sum_to_total(self) -> None:
        with pytest.raises(ValidationError, match="breakdown must sum"):
            EnsembleResult(prediction=B, confidence=60, total_votes=5, breakdown={B: 3, S: 1})

    def test_confidence_bounds(self) -> None:
        with pytest.raises(ValidationError):
            EnsembleResult(prediction=B, confidence=101, total_votes=0)


class TestCachedPrediction:
    def test_json_round_trip_through_cache_payload(self) -> None:
        cached = CachedPrediction(
            prediction=B, confidence=64, for_issue="20240101100010061", total_votes=125,
            breakdown={B: 80, S: 45},
        )
        payload = cached.model_dump(mode="json")

        assert payload["prediction"] == "BIG"
        assert payload["breakdown"] == {"BIG": 80, "SMALL": 45}
        assert CachedPrediction.model_validate(payload) == cached

    def test_rejects_unknown_outcome(self) -> None:
        with pytest.raises(ValidationError):
            CachedPrediction.model_validate({"prediction": "MAYBE", "confidence": 50, "for_issue": "1"})


class TestSessionResult:
    def _result(self, win_loss: WinLossResult | None) -> SessionResult:
        return SessionResult(
            win_loss=win_loss,
            next_prediction=NextPrediction(
                prediction=S, confidence=55, for_issue="11", model_count=120,
                breakdown={B: 54, S: 66},
            ),
            accuracy=AccuracyReport(rate=52, tested=49, correct=25),
            latest=DrawRecord(issue_id="10", number=3),
            record_count=60,
        )

    def test_first_prediction_message(self) -> None:
        assert self._result(None).message == "First prediction - no previous data to compare"

    def test_verdict_message(self) -> None:
        loss = WinLossResult(
            status=Verdict.LOSS, predicted=B, actual=S, issue_id="10", for_issue="10",
            confidence=70,
        )
        assert not loss.is_win
        assert self._result(loss).message == "Previous prediction: LOSS"


class TestErrors:
    def test_hierarchy(self) -> None:
        assert issubclass(DataSourceError, WingoError)
        assert issubclass(InsufficientDataError, WingoError)
        assert issubclass(SessionError, WingoError)

    def test_insufficient_data_message(self) -> None:
        err = InsufficientDataError(required=10, available=4)
        assert str(err) == "Insufficient historical data for analysis: need 10 records, got 4"

    def test_session_error_retryable(self) -> None:
        assert SessionError("x", cause=InsufficientDataError(10, 3)).is_retryable
        assert not SessionError("x", cause=DataSourceError("HTTP 500")).is_retryable
        assert not SessionError("x").is_retryable
