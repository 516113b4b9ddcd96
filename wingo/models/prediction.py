"""Prediction models — ensemble output, cached prediction, session results."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from wingo.models.draw import DrawRecord, Outcome  # noqa: TCH001 — Pydantic needs runtime access


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _empty_breakdown() -> dict[Outcome, int]:
    return {Outcome.BIG: 0, Outcome.SMALL: 0}


class Verdict(str, Enum):
    WIN = "WIN"
    LOSS = "LOSS"


class EnsembleResult(BaseModel):
    """Majority decision over every non-abstaining vote."""

    prediction: Outcome
    confidence: int = Field(ge=0, le=100)
    total_votes: int = Field(ge=0)
    breakdown: dict[Outcome, int] = Field(default_factory=_empty_breakdown)

    @model_validator(mode="after")
    def breakdown_sums_to_total(self) -> EnsembleResult:
        if sum(self.breakdown.values()) != self.total_votes:
            msg = "breakdown must sum to total_votes"
            raise ValueError(msg)
        return self

    model_config = {"frozen": True}


class CachedPrediction(BaseModel):
    """Last prediction kept in the cache until the next draw is observed."""

    prediction: Outcome
    confidence: int = Field(ge=0, le=100)
    for_issue: str
    total_votes: int = 0
    breakdown: dict[Outcome, int] = Field(default_factory=_empty_breakdown)
    timestamp: datetime = Field(default_factory=_now)

    model_config = {"frozen": True}


class WinLossResult(BaseModel):
    """Outcome of comparing the cached prediction with the latest draw."""

    status: Verdict
    predicted: Outcome
    actual: Outcome
    issue_id: str
    for_issue: str
    confidence: int

    @property
    def is_win(self) -> bool:
        return self.status == Verdict.WIN

    model_config = {"frozen": True}


class NextPrediction(BaseModel):
    prediction: Outcome
    confidence: int
    for_issue: str
    model_count: int
    breakdown: dict[Outcome, int]
    timestamp: datetime = Field(default_factory=_now)

    model_config = {"frozen": True}


class AccuracyReport(BaseModel):
    """Walk-forward backtest hit rate."""

    rate: int = Field(ge=0, le=100)
    tested: int = Field(ge=0)
    correct: int = Field(ge=0)

    model_config = {"frozen": True}


class SessionResult(BaseModel):
    win_loss: WinLossResult | None = None
    next_prediction: NextPrediction
    accuracy: AccuracyReport
    latest: DrawRecord
    record_count: int
    timestamp: datetime = Field(default_factory=_now)

    @property
    def message(self) -> str:
        if self.win_loss is None:
            return "First prediction - no previous data to compare"
        return f"Previous prediction: {self.win_loss.status.value}"

    model_config = {"frozen": True}


class StatsSnapshot(BaseModel):
    """Recent draw statistics, computed without running the model bank."""

    total_records: int
    latest_issue: str
    last10_results: list[Outcome]
    distribution: dict[Outcome, int]
    recent_numbers: list[int]
    timestamp: datetime = Field(default_factory=_now)

    model_config = {"frozen": True}
