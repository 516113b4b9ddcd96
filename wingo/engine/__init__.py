"""Ensemble engine — predictors, model bank and vote aggregation."""

from __future__ import annotations

from wingo.engine import predictors
from wingo.engine.aggregator import EnsembleAggregator
from wingo.engine.model_bank import ModelBank
from wingo.engine.registry import ModelSpec, PredictorKind

__all__ = [
    "EnsembleAggregator",
    "ModelBank",
    "ModelSpec",
    "PredictorKind",
    "predictors",
]
