"""Backtesting — walk-forward accuracy of the ensemble."""

from __future__ import annotations

from wingo.backtesting.evaluator import BacktestEvaluator

__all__ = ["BacktestEvaluator"]
