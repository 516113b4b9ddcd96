"""Predictor registry — a closed set of heuristic kinds and their parameterizations."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from wingo.models.draw import Outcome, Vote


class PredictorKind(str, Enum):
    SMA = "sma"
    EMA = "ema"
    WMA = "wma"
    RSI = "rsi"
    STOCH_RSI = "stoch_rsi"
    MOMENTUM = "momentum"
    RATE_OF_CHANGE = "roc"
    FIB_RETRACEMENT = "fib_retracement"
    FIB_SEQUENCE = "fib_sequence"
    CONSECUTIVE = "consecutive"
    ZIGZAG = "zigzag"
    STREAK_BREAKER = "streak_breaker"
    CYCLIC = "cyclic"
    FREQUENCY = "frequency"
    HOT_COLD = "hot_cold"
    STD_DEV = "std_dev"
    BOLLINGER = "bollinger"
    LINEAR_REGRESSION = "linear_regression"
    TREND_STRENGTH = "trend_strength"
    SUPPORT_RESISTANCE = "support_resistance"
    GAP = "gap"


class Source(str, Enum):
    """Which parallel sequence a predictor reads."""

    NUMBERS = "numbers"
    RESULTS = "results"


@dataclass(frozen=True)
class Predictor:
    kind: PredictorKind
    source: Source
    func: Callable[..., Vote]


_REGISTRY: dict[PredictorKind, Predictor] = {}


def register(kind: PredictorKind, source: Source = Source.NUMBERS) -> Any:
    """Decorator to register a predictor function.

    Usage:
        @register(PredictorKind.SMA)
        def simple_moving_average(numbers, period): ...
    """

    def decorator(func: Callable[..., Vote]) -> Callable[..., Vote]:
        _REGISTRY[kind] = Predictor(kind=kind, source=source, func=func)
        return func

    return decorator


def get(kind: PredictorKind) -> Predictor:
    """Get a registered predictor by kind.

    Raises:
        KeyError: If no predictor is registered for the kind.
    """
    if kind not in _REGISTRY:
        available = ", ".join(sorted(k.value for k in _REGISTRY)) or "(none)"
        msg = f"Unknown predictor '{kind}'. Available: {available}"
        raise KeyError(msg)
    return _REGISTRY[kind]


def list_kinds() -> list[PredictorKind]:
    """List all registered predictor kinds."""
    return sorted(_REGISTRY, key=lambda k: k.value)


@dataclass(frozen=True)
class ModelSpec:
    """One entry of the model bank: a predictor kind plus its parameters.

    ``tail`` restricts the predictor to the trailing ``tail`` elements of its
    source sequence; a tail longer than the history uses the whole history.
    """

    kind: PredictorKind
    params: dict[str, Any] = field(default_factory=dict)
    tail: int | None = None

    def evaluate(self, numbers: Sequence[int], results: Sequence[Outcome]) -> Vote:
        predictor = get(self.kind)
        data = numbers if predictor.source == Source.NUMBERS else results
        if self.tail is not None:
            data = data[-self.tail :]
        return predictor.func(data, **self.params)

    @property
    def label(self) -> str:
        args = ", ".join(f"{k}={v}" for k, v in self.params.items())
        label = f"{self.kind.value}({args})"
        if self.tail is not None:
            label += f"[-{self.tail}:]"
        return label
