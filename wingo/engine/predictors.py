"""Signal predictors — micro-statistical heuristics over draw history.

Every predictor is a pure function of a number sequence (digits 0-9) or a
result sequence (BIG/SMALL), oldest first. Each returns a Vote, or None when
the sequence is shorter than the window the heuristic needs.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence

from wingo.engine.registry import PredictorKind, Source, register
from wingo.models.draw import Outcome, Vote

# Midpoint of 0-9: averages at or above it vote BIG.
_MIDPOINT = 4.5
_FIBONACCI_DIGITS = frozenset({0, 1, 2, 3, 5, 8})


def _level(value: float) -> Outcome:
    return Outcome.BIG if value >= _MIDPOINT else Outcome.SMALL


def _mean(values: Sequence[int]) -> float:
    return sum(values) / len(values)


def _population_std(values: Sequence[int], mean: float) -> float:
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


# ---------------------------------------------------------------- averages


@register(PredictorKind.SMA)
def simple_moving_average(numbers: Sequence[int], period: int) -> Vote:
    if len(numbers) < period:
        return None
    return _level(_mean(numbers[-period:]))


@register(PredictorKind.EMA)
def exponential_moving_average(numbers: Sequence[int], period: int) -> Vote:
    """EMA seeded with the first element and run over the whole sequence."""
    if len(numbers) < period:
        return None
    multiplier = 2 / (period + 1)
    ema = float(numbers[0])
    for value in numbers[1:]:
        ema = (value - ema) * multiplier + ema
    return _level(ema)


@register(PredictorKind.WMA)
def weighted_moving_average(numbers: Sequence[int], period: int) -> Vote:
    if len(numbers) < period:
        return None
    weighted = 0
    weights = 0
    for weight, value in enumerate(numbers[-period:], start=1):
        weighted += value * weight
        weights += weight
    return _level(weighted / weights)


# ---------------------------------------------------------------- oscillators


@register(PredictorKind.RSI)
def relative_strength_index(numbers: Sequence[int], period: int = 14) -> Vote:
    if len(numbers) < period + 1:
        return None

    gains = 0
    losses = 0
    for i in range(len(numbers) - period, len(numbers)):
        change = numbers[i] - numbers[i - 1]
        if change > 0:
            gains += change
        else:
            losses += abs(change)

    avg_gain = gains / period
    avg_loss = losses / period
    if avg_loss == 0:
        return Outcome.BIG

    rsi = 100 - 100 / (1 + avg_gain / avg_loss)
    return Outcome.BIG if rsi > 50 else Outcome.SMALL


@register(PredictorKind.STOCH_RSI)
def stochastic_rsi(numbers: Sequence[int], period: int = 14) -> Vote:
    if len(numbers) < period * 2:
        return None

    recent = numbers[-period:]
    high = max(recent)
    low = min(recent)
    if high == low:
        return Outcome.SMALL

    stoch = (recent[-1] - low) / (high - low) * 100
    return Outcome.BIG if stoch > 50 else Outcome.SMALL


@register(PredictorKind.MOMENTUM)
def momentum(numbers: Sequence[int], period: int = 10) -> Vote:
    if len(numbers) < period:
        return None
    change = numbers[-1] - numbers[len(numbers) - period]
    return Outcome.BIG if change >= 0 else Outcome.SMALL


@register(PredictorKind.RATE_OF_CHANGE)
def rate_of_change(numbers: Sequence[int], period: int = 12) -> Vote:
    if len(numbers) < period:
        return None
    previous = numbers[len(numbers) - period]
    if previous == 0:
        return Outcome.SMALL
    roc = (numbers[-1] - previous) / previous * 100
    return Outcome.BIG if roc >= 0 else Outcome.SMALL


# ---------------------------------------------------------------- fibonacci


@register(PredictorKind.FIB_RETRACEMENT)
def fibonacci_retracement(numbers: Sequence[int]) -> Vote:
    if len(numbers) < 20:
        return None

    recent = numbers[-20:]
    high = max(recent)
    low = min(recent)
    current = numbers[-1]

    span = high - low
    fib618 = high - span * 0.618
    fib382 = high - span * 0.382

    if current > fib382:
        return Outcome.BIG
    if current < fib618:
        return Outcome.SMALL
    return _level(current)


@register(PredictorKind.FIB_SEQUENCE)
def fibonacci_sequence_pattern(numbers: Sequence[int]) -> Vote:
    if len(numbers) < 5:
        return None
    matches = sum(1 for n in numbers[-5:] if n in _FIBONACCI_DIGITS)
    return Outcome.BIG if matches >= 3 else Outcome.SMALL


# ---------------------------------------------------------------- result patterns


@register(PredictorKind.CONSECUTIVE, source=Source.RESULTS)
def consecutive_pattern(results: Sequence[Outcome]) -> Vote:
    """Three identical results in a row vote for the reversal."""
    if len(results) < 3:
        return None
    last3 = results[-3:]
    if last3[0] == last3[1] == last3[2]:
        return last3[0].opposite
    return results[-1]


@register(PredictorKind.ZIGZAG, source=Source.RESULTS)
def zigzag_pattern(results: Sequence[Outcome]) -> Vote:
    if len(results) < 4:
        return None
    a, b, c, d = results[-4:]
    if a != b and b != c and c != d:
        return d.opposite
    return d


@register(PredictorKind.STREAK_BREAKER, source=Source.RESULTS)
def streak_breaker(results: Sequence[Outcome]) -> Vote:
    if len(results) < 5:
        return None
    last5 = results[-5:]
    big_count = sum(1 for r in last5 if r == Outcome.BIG)
    if big_count >= 4:
        return Outcome.SMALL
    if big_count <= 1:
        return Outcome.BIG
    return last5[-1]


@register(PredictorKind.CYCLIC, source=Source.RESULTS)
def cyclic_pattern(results: Sequence[Outcome], cycle: int = 7) -> Vote:
    """Follow the previous cycle when the last two cycles mostly agree."""
    if len(results) < cycle * 2:
        return None

    recent = results[-cycle:]
    previous = results[-cycle * 2 : -cycle]
    similarity = sum(1 for r, p in zip(recent, previous) if r == p)

    if similarity >= cycle * 0.6:
        return results[len(results) - cycle]
    return results[-1]


# ---------------------------------------------------------------- frequency


@register(PredictorKind.FREQUENCY)
def frequency_distribution(numbers: Sequence[int], lookback: int = 30) -> Vote:
    """Vote for whichever side has been under-represented."""
    if len(numbers) < lookback:
        return None
    big_count = sum(1 for n in numbers[-lookback:] if n >= 5)
    return Outcome.BIG if big_count / lookback < 0.5 else Outcome.SMALL


@register(PredictorKind.HOT_COLD)
def hot_cold_numbers(numbers: Sequence[int], lookback: int = 50) -> Vote:
    if len(numbers) < lookback:
        return None
    # most_common keeps first-encountered order among equal counts
    hot = [n for n, _ in Counter(numbers[-lookback:]).most_common(3)]
    return _level(sum(hot) / len(hot))


# ---------------------------------------------------------------- volatility


@register(PredictorKind.STD_DEV)
def standard_deviation(numbers: Sequence[int], period: int = 20) -> Vote:
    if len(numbers) < period:
        return None
    recent = numbers[-period:]
    std = _population_std(recent, sum(recent) / period)
    return Outcome.BIG if std > 2 else Outcome.SMALL


@register(PredictorKind.BOLLINGER)
def bollinger_bands(
    numbers: Sequence[int], period: int = 20, multiplier: float = 2.0
) -> Vote:
    if len(numbers) < period:
        return None

    recent = numbers[-period:]
    sma = sum(recent) / period
    std = _population_std(recent, sma)
    upper = sma + std * multiplier
    lower = sma - std * multiplier
    current = numbers[-1]

    if current >= upper:
        return Outcome.SMALL
    if current <= lower:
        return Outcome.BIG
    return Outcome.BIG if current >= sma else Outcome.SMALL


# ---------------------------------------------------------------- trend


@register(PredictorKind.LINEAR_REGRESSION)
def linear_regression(numbers: Sequence[int], period: int = 15) -> Vote:
    if len(numbers) < period:
        return None

    recent = numbers[-period:]
    n = len(recent)
    sum_x = sum_y = sum_xy = sum_xx = 0
    for x, y in enumerate(recent):
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_xx += x * x

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return Outcome.SMALL
    slope = (n * sum_xy - sum_x * sum_y) / denominator
    return Outcome.BIG if slope > 0 else Outcome.SMALL


@register(PredictorKind.TREND_STRENGTH)
def trend_strength(numbers: Sequence[int], period: int = 10) -> Vote:
    if len(numbers) < period:
        return None
    recent = numbers[-period:]
    if len(recent) < 2:
        return Outcome.SMALL
    up_moves = sum(1 for i in range(1, len(recent)) if recent[i] > recent[i - 1])
    return Outcome.BIG if up_moves / (len(recent) - 1) > 0.5 else Outcome.SMALL


# ---------------------------------------------------------------- structure


@register(PredictorKind.SUPPORT_RESISTANCE)
def support_resistance(numbers: Sequence[int], lookback: int = 30) -> Vote:
    if len(numbers) < lookback:
        return None

    recent = numbers[-lookback:]
    resistance = max(recent)
    support = min(recent)
    current = numbers[-1]

    span = resistance - support
    if span == 0:
        return _level(current)
    position = (current - support) / span

    if position > 0.7:
        return Outcome.SMALL
    if position < 0.3:
        return Outcome.BIG
    return _level(current)


@register(PredictorKind.GAP)
def gap_analysis(numbers: Sequence[int]) -> Vote:
    if len(numbers) < 10:
        return None
    recent = numbers[-10:]
    gaps = sum(1 for i in range(1, len(recent)) if abs(recent[i] - recent[i - 1]) >= 3)
    return Outcome.BIG if gaps >= 3 else Outcome.SMALL
