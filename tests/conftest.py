"""Shared test fixtures."""

from __future__ import annotations

import random
from collections.abc import Callable
from pathlib import Path  # noqa: TCH003

import pytest

from wingo.config.loader import ConfigLoader
from wingo.models.draw import DrawRecord, HistorySeries

FIRST_ISSUE = 20240101100010001


@pytest.fixture()
def config_dir(tmp_path: Path) -> Path:
    """Create a temp config directory with default.toml."""
    config = tmp_path / "config"
    config.mkdir()

    default_toml = config / "default.toml"
    default_toml.write_text(
        """\
[data_source]
url = "https://draw.example.com/WinGo/GetHistoryIssuePage.json"
timeout_seconds = 8.0

[cache]
backend = "memory"

[session]
min_records = 10
cache_key = "last_prediction"
prediction_ttl_seconds = 60

[backtest]
max_tested = 50
trailing_reserve = 10
min_history = 20
"""
    )
    return config


@pytest.fixture()
def config_loader(config_dir: Path) -> ConfigLoader:
    """ConfigLoader with test config."""
    loader = ConfigLoader(config_dir=config_dir, env="test")
    loader.load()
    return loader


@pytest.fixture()
def make_history() -> Callable[..., HistorySeries]:
    """Factory building an oldest-first history from a list of digits."""

    def _make(numbers: list[int], first_issue: int = FIRST_ISSUE) -> HistorySeries:
        return HistorySeries(
            records=[
                DrawRecord(
                    issue_id=str(first_issue + i),
                    number=n,
                    timestamp=f"2024-01-01 10:{i // 60:02d}:{i % 60:02d}",
                )
                for i, n in enumerate(numbers)
            ]
        )

    return _make


@pytest.fixture()
def sample_numbers() -> list[int]:
    """60 reproducible pseudo-random draws."""
    rng = random.Random(7)
    return [rng.randint(0, 9) for _ in range(60)]


@pytest.fixture()
def sample_history(
    make_history: Callable[..., HistorySeries], sample_numbers: list[int]
) -> HistorySeries:
    return make_history(sample_numbers)
