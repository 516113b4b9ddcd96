"""Walk-forward backtest of the ensemble — no lookahead."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from wingo.core.logging import get_logger
from wingo.engine.aggregator import round_half_up
from wingo.models.prediction import AccuracyReport

if TYPE_CHECKING:
    from wingo.config.loader import ConfigLoader
    from wingo.engine.aggregator import EnsembleAggregator
    from wingo.engine.model_bank import ModelBank
    from wingo.models.draw import Outcome

log = get_logger(__name__)


class BacktestEvaluator:
    """Replays the model bank over the trailing window of history.

    At each tested index i the ensemble sees only the strict prefix [0, i)
    and its prediction is scored against results[i]. The final point is
    never tested. Steps are independent of each other, so the report is
    identical for identical input.
    """

    def __init__(
        self,
        config: ConfigLoader,
        model_bank: ModelBank,
        aggregator: EnsembleAggregator,
    ) -> None:
        self._model_bank = model_bank
        self._aggregator = aggregator
        self._max_tested = int(config.get("backtest.max_tested", 50))
        self._trailing_reserve = int(config.get("backtest.trailing_reserve", 10))
        self._min_history = int(config.get("backtest.min_history", 20))

    def scored_indices(self, length: int) -> range:
        """Indices scored for a history of ``length`` points."""
        if length < self._min_history:
            return range(0)
        test_size = min(self._max_tested, length - self._trailing_reserve)
        if test_size <= 0:
            return range(0)
        return range(length - test_size, length - 1)

    def evaluate(
        self,
        numbers: Sequence[int],
        results: Sequence[Outcome],
    ) -> AccuracyReport:
        """Compute the historical hit rate of the ensemble.

        Args:
            numbers: Full number sequence, oldest first.
            results: Parallel BIG/SMALL sequence.

        Returns:
            AccuracyReport with rate (0-100), tested and correct counts.
        """
        indices = self.scored_indices(len(numbers))
        if not indices:
            log.debug("backtest.skipped", points=len(numbers), min_history=self._min_history)
            return AccuracyReport(rate=0, tested=0, correct=0)

        correct = 0
        tested = 0
        for i in indices:
            prediction = self._aggregator.predict(self._model_bank, numbers[:i], results[:i])
            if prediction.prediction == results[i]:
                correct += 1
            tested += 1

        rate = round_half_up(correct / tested * 100)
        log.info("backtest.complete", tested=tested, correct=correct, rate=rate)
        return AccuracyReport(rate=rate, tested=tested, correct=correct)
