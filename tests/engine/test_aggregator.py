"""Tests for EnsembleAggregator."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from hypothesis import given
from hypothesis import strategies as st

from wingo.engine.aggregator import EnsembleAggregator, round_half_up
from wingo.models.draw import Outcome

B = Outcome.BIG
S = Outcome.SMALL


@pytest.fixture()
def aggregator() -> EnsembleAggregator:
    return EnsembleAggregator()


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(62.5, 63), (50.0, 50), (66.666, 67), (0.4, 0), (99.5, 100), (2.5, 3)],
    )
    def test_rounds_half_away_from_even(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected


class TestAggregate:
    def test_majority_big(self, aggregator: EnsembleAggregator) -> None:
        result = aggregator.aggregate([B] * 5 + [S] * 3)
        assert result.prediction == B
        assert result.confidence == 63
        assert result.total_votes == 8
        assert result.breakdown == {B: 5, S: 3}

    def test_two_to_one(self, aggregator: EnsembleAggregator) -> None:
        result = aggregator.aggregate([B, B, S])
        assert result.prediction == B
        assert result.confidence == 67

    def test_majority_small(self, aggregator: EnsembleAggregator) -> None:
        result = aggregator.aggregate([S, S, S, B])
        assert result.prediction == S
        assert result.confidence == 75

    def test_tie_resolves_small(self, aggregator: EnsembleAggregator) -> None:
        result = aggregator.aggregate([B, S, B, S])
        assert result.prediction == S
        assert result.confidence == 50

    def test_abstentions_are_ignored(self, aggregator: EnsembleAggregator) -> None:
        result = aggregator.aggregate([None, B, None, B, S, None])
        assert result.total_votes == 3
        assert result.breakdown == {B: 2, S: 1}

    def test_no_votes(self, aggregator: EnsembleAggregator) -> None:
        result = aggregator.aggregate([])
        assert result.prediction == S
        assert result.confidence == 0
        assert result.total_votes == 0
        assert result.breakdown == {B: 0, S: 0}

    def test_only_abstentions(self, aggregator: EnsembleAggregator) -> None:
        result = aggregator.aggregate([None, None])
        assert result.prediction == S
        assert result.total_votes == 0

    def test_unanimous(self, aggregator: EnsembleAggregator) -> None:
        assert aggregator.aggregate([B] * 7).confidence == 100

    @given(votes=st.lists(st.sampled_from([B, S, None]), max_size=200))
    def test_totals_match_votes(self, votes: list[Outcome | None]) -> None:
        result = EnsembleAggregator().aggregate(votes)
        big = votes.count(B)
        small = votes.count(S)

        assert result.total_votes == big + small
        assert result.breakdown[B] + result.breakdown[S] == result.total_votes
        assert (result.prediction == B) == (big > small)
        if result.total_votes:
            assert 50 <= result.confidence <= 100
        else:
            assert result.confidence == 0


class TestPredict:
    def test_aggregates_model_bank_votes(self, aggregator: EnsembleAggregator) -> None:
        bank = MagicMock()
        bank.votes.return_value = [B, B, None, S]

        result = aggregator.predict(bank, [5, 6, 7], [B, B, B])

        bank.votes.assert_called_once_with([5, 6, 7], [B, B, B])
        assert result.prediction == B
        assert result.total_votes == 3

    @given(votes=st.lists(st.sampled_from([B, S, None]), max_size=50))
    def test_deterministic(self, votes: list[Outcome | None]) -> None:
        aggregator = EnsembleAggregator()
        assert aggregator.aggregate(votes) == aggregator.aggregate(list(votes))
