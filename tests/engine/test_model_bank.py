"""Tests for ModelBank."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

import pytest

from wingo.config.loader import ConfigLoader
from wingo.engine.model_bank import _DEFAULT_GRID, ModelBank, build_specs
from wingo.engine.registry import PredictorKind as K
from wingo.models.draw import Outcome


@pytest.fixture()
def model_bank(config_loader: ConfigLoader) -> ModelBank:
    return ModelBank(config_loader)


class TestBuildSpecs:
    def test_default_grid_size(self) -> None:
        assert len(build_specs(_DEFAULT_GRID)) == 125

    def test_default_grid_composition(self) -> None:
        counts = Counter(spec.kind for spec in build_specs(_DEFAULT_GRID))
        assert counts[K.SMA] == 7
        assert counts[K.EMA] == 7
        assert counts[K.WMA] == 6
        assert counts[K.CONSECUTIVE] == 14
        assert counts[K.FREQUENCY] == 10
        assert counts[K.BOLLINGER] == 8
        assert counts[K.TREND_STRENGTH] == 10
        assert counts[K.GAP] == 10

    def test_weighted_skips_long_periods(self) -> None:
        specs = build_specs(_DEFAULT_GRID)
        wma_periods = [s.params["period"] for s in specs if s.kind == K.WMA]
        assert 30 not in wma_periods

    def test_order_starts_with_moving_averages(self) -> None:
        specs = build_specs(_DEFAULT_GRID)
        assert [s.kind for s in specs[:3]] == [K.SMA, K.EMA, K.WMA]
        assert specs[-1].kind == K.GAP


class TestModelBank:
    def test_default_size(self, model_bank: ModelBank) -> None:
        assert len(model_bank) == 125
        assert len(model_bank.specs) == 125

    def test_votes_one_per_model(
        self, model_bank: ModelBank, sample_numbers: list[int]
    ) -> None:
        results = [Outcome.from_number(n) for n in sample_numbers]
        votes = model_bank.votes(sample_numbers, results)
        assert len(votes) == 125

    def test_every_model_votes_with_sixty_points(
        self, model_bank: ModelBank, sample_numbers: list[int]
    ) -> None:
        results = [Outcome.from_number(n) for n in sample_numbers]
        assert None not in model_bank.votes(sample_numbers, results)

    def test_short_history_abstains(self, model_bank: ModelBank) -> None:
        votes = model_bank.votes([3, 7], [Outcome.SMALL, Outcome.BIG])
        assert None in votes
        assert len(votes) == 125

    def test_grid_override_from_config(self, config_dir: Path) -> None:
        (config_dir / "test.toml").write_text(
            "[model_bank]\nmoving_average_periods = [3]\n"
        )
        loader = ConfigLoader(config_dir=config_dir, env="test")
        loader.load()

        bank = ModelBank(loader)
        assert len(bank) == 108
