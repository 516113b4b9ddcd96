"""Prediction session — fetch, vote, score the previous call, backtest.

Flow of ``PredictionSession.run``:
1. Fetch draw history (fail fast when too short)
2. Derive number/result sequences
3. Read the cached previous prediction (absent on cold start)
4. Score it WIN/LOSS against the latest draw
5. Run the model bank + aggregator for the next issue
6. Backtest the ensemble over the trailing window
7. Cache the new prediction (only once everything above succeeded)
8. Return the composed SessionResult

Overlapping sessions sharing one cache race only on which stored
prediction is written last; there is no lock.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from wingo.backtesting.evaluator import BacktestEvaluator
from wingo.core.logging import get_logger, log_prediction_event
from wingo.data.draw_client import DEFAULT_URL, DEFAULT_USER_AGENT, DrawHistoryClient
from wingo.data.memory_cache import MemoryCache
from wingo.data.redis_cache import RedisCache
from wingo.engine.aggregator import EnsembleAggregator
from wingo.engine.model_bank import ModelBank
from wingo.errors import InsufficientDataError, SessionError
from wingo.models.draw import Outcome
from wingo.models.prediction import (
    AccuracyReport,
    CachedPrediction,
    NextPrediction,
    SessionResult,
    StatsSnapshot,
    Verdict,
    WinLossResult,
)

if TYPE_CHECKING:
    from wingo.config.loader import ConfigLoader
    from wingo.interfaces import DataSource, PredictionCache
    from wingo.models.draw import DrawRecord, HistorySeries

log = get_logger(__name__)

_RECENT_WINDOW = 10


class PredictionSession:
    """Orchestrates one prediction request against injected collaborators."""

    def __init__(
        self,
        config: ConfigLoader,
        data_source: DataSource,
        cache: PredictionCache,
        model_bank: ModelBank | None = None,
        aggregator: EnsembleAggregator | None = None,
        evaluator: BacktestEvaluator | None = None,
    ) -> None:
        self._data_source = data_source
        self._cache = cache
        self._model_bank = model_bank if model_bank is not None else ModelBank(config)
        self._aggregator = aggregator or EnsembleAggregator()
        self._evaluator = evaluator or BacktestEvaluator(
            config, self._model_bank, self._aggregator
        )
        self._min_records = int(config.get("session.min_records", 10))
        self._cache_key = str(config.get("session.cache_key", "last_prediction"))
        self._ttl = float(config.get("session.prediction_ttl_seconds", 60))

    @property
    def model_bank(self) -> ModelBank:
        return self._model_bank

    @property
    def cache(self) -> PredictionCache:
        return self._cache

    async def run(self) -> SessionResult:
        """Run a full prediction session.

        Raises:
            SessionError: Wrapping whatever failed; nothing is cached then.
        """
        try:
            return await self._run()
        except Exception as exc:
            log.error("session.failed", error=str(exc), error_type=type(exc).__name__)
            msg = f"Prediction engine failed: {exc}"
            raise SessionError(msg, cause=exc) from exc

    async def stats(self) -> StatsSnapshot:
        """Recent draw statistics from a fresh fetch. No models are run.

        Raises:
            SessionError: If the fetch fails or returns no records.
        """
        try:
            history = await self._fetch(minimum=1)
        except Exception as exc:
            msg = f"Stats retrieval failed: {exc}"
            raise SessionError(msg, cause=exc) from exc

        last10 = history.results[-_RECENT_WINDOW:]
        counts = Counter(last10)
        return StatsSnapshot(
            total_records=len(history),
            latest_issue=history.latest.issue_id,
            last10_results=last10,
            distribution={Outcome.BIG: counts[Outcome.BIG], Outcome.SMALL: counts[Outcome.SMALL]},
            recent_numbers=history.numbers[-_RECENT_WINDOW:],
        )

    async def backtest(self) -> AccuracyReport:
        """Backtest the ensemble on freshly fetched history without caching."""
        try:
            history = await self._fetch(minimum=self._min_records)
            return self._evaluator.evaluate(history.numbers, history.results)
        except Exception as exc:
            msg = f"Backtest failed: {exc}"
            raise SessionError(msg, cause=exc) from exc

    async def close(self) -> None:
        """Release the HTTP client and cache connection, when they hold one."""
        for resource in (self._data_source, self._cache):
            close = getattr(resource, "close", None)
            if close is not None:
                await close()

    async def _fetch(self, minimum: int) -> HistorySeries:
        history = await self._data_source.fetch()
        if len(history) < minimum:
            raise InsufficientDataError(required=minimum, available=len(history))
        return history

    async def _run(self) -> SessionResult:
        history = await self._fetch(minimum=self._min_records)
        numbers = history.numbers
        results = history.results
        latest = history.latest

        previous = await self._load_previous()
        win_loss = self._score(previous, latest) if previous is not None else None

        ensemble = self._aggregator.predict(self._model_bank, numbers, results)
        next_prediction = NextPrediction(
            prediction=ensemble.prediction,
            confidence=ensemble.confidence,
            for_issue=latest.next_issue,
            model_count=ensemble.total_votes,
            breakdown=ensemble.breakdown,
        )

        accuracy = self._evaluator.evaluate(numbers, results)

        await self._store(next_prediction)

        log.info(
            "session.complete",
            records=len(history),
            prediction=next_prediction.prediction.value,
            confidence=next_prediction.confidence,
            accuracy=accuracy.rate,
        )
        return SessionResult(
            win_loss=win_loss,
            next_prediction=next_prediction,
            accuracy=accuracy,
            latest=latest,
            record_count=len(history),
        )

    async def _load_previous(self) -> CachedPrediction | None:
        raw: Any = await self._cache.get(self._cache_key)
        if raw is None:
            log.info("session.cold_start")
            return None
        try:
            return CachedPrediction.model_validate(raw)
        except ValidationError as exc:
            log.warning("session.cached_prediction_invalid", error=str(exc))
            return None

    def _score(self, previous: CachedPrediction, latest: DrawRecord) -> WinLossResult:
        status = Verdict.WIN if previous.prediction == latest.result else Verdict.LOSS
        log_prediction_event(
            "verdict",
            latest.issue_id,
            status=status.value,
            predicted=previous.prediction.value,
            actual=latest.result.value,
            for_issue=previous.for_issue,
        )
        return WinLossResult(
            status=status,
            predicted=previous.prediction,
            actual=latest.result,
            issue_id=latest.issue_id,
            for_issue=previous.for_issue,
            confidence=previous.confidence,
        )

    async def _store(self, prediction: NextPrediction) -> None:
        cached = CachedPrediction(
            prediction=prediction.prediction,
            confidence=prediction.confidence,
            for_issue=prediction.for_issue,
            total_votes=prediction.model_count,
            breakdown=prediction.breakdown,
            timestamp=prediction.timestamp,
        )
        await self._cache.set(self._cache_key, cached.model_dump(mode="json"), ttl=self._ttl)
        log_prediction_event(
            "stored",
            prediction.for_issue,
            prediction=prediction.prediction.value,
            confidence=prediction.confidence,
        )


def build_cache(config: ConfigLoader) -> PredictionCache:
    """Create the cache backend named by ``cache.backend``."""
    ttl = config.get("session.prediction_ttl_seconds", 60)
    if config.get("cache.backend", "memory") == "redis":
        return RedisCache(
            url=config.get("cache.redis_url"),
            prefix=str(config.get("cache.prefix", "wingo:")),
            default_ttl=int(ttl),
        )
    return MemoryCache(default_ttl=float(ttl))


def build_session(config: ConfigLoader) -> PredictionSession:
    """Wire a session from config: validated ranges, HTTP client, cache backend."""
    config.validate_ranges()
    client = DrawHistoryClient(
        url=str(config.get("data_source.url", DEFAULT_URL)),
        timeout_seconds=float(config.get("data_source.timeout_seconds", 8.0)),
        user_agent=str(config.get("data_source.user_agent", DEFAULT_USER_AGENT)),
    )
    return PredictionSession(config, data_source=client, cache=build_cache(config))
