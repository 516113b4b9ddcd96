"""Ensemble aggregator — majority vote over the model bank."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from wingo.core.logging import get_logger
from wingo.models.draw import Outcome, Vote
from wingo.models.prediction import EnsembleResult

if TYPE_CHECKING:
    from wingo.engine.model_bank import ModelBank

log = get_logger(__name__)


def round_half_up(value: float) -> int:
    """Round .5 upward (not to even) for non-negative percentages."""
    return math.floor(value + 0.5)


class EnsembleAggregator:
    """Combines individual votes into one prediction with a confidence.

    Ties, and a vote list with no opinions at all, resolve to SMALL.
    """

    def aggregate(self, votes: Iterable[Vote]) -> EnsembleResult:
        valid = [v for v in votes if v is not None]

        if not valid:
            log.debug("ensemble.no_votes")
            return EnsembleResult(prediction=Outcome.SMALL, confidence=0, total_votes=0)

        big = sum(1 for v in valid if v == Outcome.BIG)
        small = len(valid) - big
        total = big + small

        prediction = Outcome.BIG if big > small else Outcome.SMALL
        confidence = round_half_up(max(big, small) / total * 100)

        return EnsembleResult(
            prediction=prediction,
            confidence=confidence,
            total_votes=total,
            breakdown={Outcome.BIG: big, Outcome.SMALL: small},
        )

    def predict(
        self,
        model_bank: ModelBank,
        numbers: Sequence[int],
        results: Sequence[Outcome],
    ) -> EnsembleResult:
        """Run the model bank over a history and aggregate its votes."""
        return self.aggregate(model_bank.votes(numbers, results))
