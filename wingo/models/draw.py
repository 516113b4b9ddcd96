"""Draw history models — Outcome, DrawRecord, HistorySeries."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

BIG_THRESHOLD = 5


class Outcome(str, Enum):
    BIG = "BIG"
    SMALL = "SMALL"

    @classmethod
    def from_number(cls, number: int) -> Outcome:
        return cls.BIG if number >= BIG_THRESHOLD else cls.SMALL

    @property
    def opposite(self) -> Outcome:
        return Outcome.SMALL if self is Outcome.BIG else Outcome.BIG


# A single predictor's output; None means the predictor abstains.
Vote = Outcome | None


class DrawRecord(BaseModel):
    """One completed draw, as published by the upstream history feed."""

    issue_id: str
    number: int = Field(ge=0, le=9)
    result: Outcome
    timestamp: str | int = ""

    @model_validator(mode="before")
    @classmethod
    def derive_result(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("result") is None and "number" in data:
            data = {**data, "result": Outcome.from_number(int(data["number"]))}
        return data

    @field_validator("issue_id")
    @classmethod
    def issue_is_numeric(cls, value: str) -> str:
        if not value.isdigit():
            msg = f"issue_id must be numeric, got {value!r}"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def result_matches_number(self) -> DrawRecord:
        if self.result != Outcome.from_number(self.number):
            msg = f"result {self.result.value} does not match number {self.number}"
            raise ValueError(msg)
        return self

    @property
    def next_issue(self) -> str:
        return str(int(self.issue_id) + 1)

    model_config = {"frozen": True}


class HistorySeries(BaseModel):
    """Draw records ordered oldest first."""

    records: list[DrawRecord] = Field(default_factory=list)

    @property
    def numbers(self) -> list[int]:
        return extract_number_sequence(self.records)

    @property
    def results(self) -> list[Outcome]:
        return extract_result_sequence(self.records)

    @property
    def latest(self) -> DrawRecord:
        if not self.records:
            msg = "history is empty"
            raise IndexError(msg)
        return self.records[-1]

    def __len__(self) -> int:
        return len(self.records)

    model_config = {"frozen": True}


def extract_number_sequence(records: Sequence[DrawRecord]) -> list[int]:
    return [r.number for r in records]


def extract_result_sequence(records: Sequence[DrawRecord]) -> list[Outcome]:
    return [r.result for r in records]
