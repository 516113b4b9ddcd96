"""Model bank — the fixed grid of predictor parameterizations voted each run."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from wingo.core.logging import get_logger
from wingo.engine.registry import ModelSpec
from wingo.engine.registry import PredictorKind as K

if TYPE_CHECKING:
    from wingo.config.loader import ConfigLoader
    from wingo.models.draw import Outcome, Vote

log = get_logger(__name__)

_DEFAULT_GRID: dict[str, Any] = {
    "moving_average_periods": [3, 5, 7, 10, 14, 20, 30],
    "weighted_max_period": 20,
    "rsi_periods": [7, 9, 14, 21, 28],
    "momentum_periods": [5, 7, 10, 12, 15],
    "fibonacci_tails": [30, 25, 20],
    "cycle_lengths": [5, 6, 7, 8, 9, 10],
    "consecutive_tails": list(range(10, 23)),
    "frequency_lookbacks": [20, 30, 40, 50, 60],
    "frequency_extra_lookbacks": [25, 28, 31, 34, 37],
    "volatility_periods": [10, 15, 20, 25, 30],
    "bollinger_multiplier_period": 20,
    "bollinger_multipliers": [1.5, 2.0, 2.5],
    "trend_periods": [5, 10, 15, 20, 25],
    "trend_strength_tails": [20, 22, 24, 26, 28],
    "support_resistance_lookbacks": [20, 25, 30, 35, 40],
    "gap_tails": list(range(15, 25)),
}


def build_specs(grid: dict[str, Any]) -> tuple[ModelSpec, ...]:
    """Expand a parameter grid into the ordered model set."""
    specs: list[ModelSpec] = []

    for period in grid["moving_average_periods"]:
        specs.append(ModelSpec(K.SMA, {"period": period}))
        specs.append(ModelSpec(K.EMA, {"period": period}))
        if period <= grid["weighted_max_period"]:
            specs.append(ModelSpec(K.WMA, {"period": period}))

    for period in grid["rsi_periods"]:
        specs.append(ModelSpec(K.RSI, {"period": period}))
        specs.append(ModelSpec(K.STOCH_RSI, {"period": period}))

    for period in grid["momentum_periods"]:
        specs.append(ModelSpec(K.MOMENTUM, {"period": period}))
        specs.append(ModelSpec(K.RATE_OF_CHANGE, {"period": period}))

    specs.append(ModelSpec(K.FIB_RETRACEMENT))
    specs.append(ModelSpec(K.FIB_SEQUENCE))
    specs.extend(ModelSpec(K.FIB_RETRACEMENT, tail=t) for t in grid["fibonacci_tails"])

    specs.append(ModelSpec(K.CONSECUTIVE))
    specs.append(ModelSpec(K.ZIGZAG))
    specs.append(ModelSpec(K.STREAK_BREAKER))
    specs.extend(ModelSpec(K.CYCLIC, {"cycle": c}) for c in grid["cycle_lengths"])
    specs.extend(ModelSpec(K.CONSECUTIVE, tail=t) for t in grid["consecutive_tails"])

    for lookback in grid["frequency_lookbacks"]:
        specs.append(ModelSpec(K.FREQUENCY, {"lookback": lookback}))
        specs.append(ModelSpec(K.HOT_COLD, {"lookback": lookback}))
    specs.extend(
        ModelSpec(K.FREQUENCY, {"lookback": lb}) for lb in grid["frequency_extra_lookbacks"]
    )

    for period in grid["volatility_periods"]:
        specs.append(ModelSpec(K.STD_DEV, {"period": period}))
        specs.append(ModelSpec(K.BOLLINGER, {"period": period}))
    specs.extend(
        ModelSpec(
            K.BOLLINGER,
            {"period": grid["bollinger_multiplier_period"], "multiplier": float(m)},
        )
        for m in grid["bollinger_multipliers"]
    )

    for period in grid["trend_periods"]:
        specs.append(ModelSpec(K.LINEAR_REGRESSION, {"period": period}))
        specs.append(ModelSpec(K.TREND_STRENGTH, {"period": period}))
    specs.extend(ModelSpec(K.TREND_STRENGTH, tail=t) for t in grid["trend_strength_tails"])

    specs.extend(
        ModelSpec(K.SUPPORT_RESISTANCE, {"lookback": lb})
        for lb in grid["support_resistance_lookbacks"]
    )
    specs.extend(ModelSpec(K.GAP, tail=t) for t in grid["gap_tails"])

    return tuple(specs)


class ModelBank:
    """Evaluates every configured predictor over a history prefix.

    The same instance is shared by the live prediction and the backtest so
    both vote with an identical model set.
    """

    def __init__(self, config: ConfigLoader) -> None:
        grid = {
            key: config.get(f"model_bank.{key}", default)
            for key, default in _DEFAULT_GRID.items()
        }
        self._specs = build_specs(grid)
        log.debug("model_bank.built", models=len(self._specs))

    @property
    def specs(self) -> tuple[ModelSpec, ...]:
        return self._specs

    def __len__(self) -> int:
        return len(self._specs)

    def votes(self, numbers: Sequence[int], results: Sequence[Outcome]) -> list[Vote]:
        """Run every model. ABSTAIN (None) entries are kept in order."""
        return [spec.evaluate(numbers, results) for spec in self._specs]
