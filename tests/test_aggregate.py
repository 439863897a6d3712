"""Tests for category aggregation."""

import pytest

from preference_engine.fusion import (
    AggregationConfig,
    CompatibilityAggregator,
    ScoringAlgorithm,
    aggregate,
    parse_algorithm,
)
from preference_engine.configs import FilteringConfig
from preference_engine.profiles import CategoryWeights
from preference_engine.scoring import CategoryScores


SCENARIO_SCORES = {"physical": 0.9, "lifestyle": 0.5, "social": 0.5, "relationship": 0.5}


def test_weighted_average_example():
    weights = CategoryWeights(physical=0.6, lifestyle=0.2, social=0.1, relationship=0.1)
    assert aggregate(SCENARIO_SCORES, weights, "weighted_average") == pytest.approx(0.74)


@pytest.mark.parametrize("factor", [0.5, 2.0, 10.0, 123.4])
def test_weighted_average_invariant_to_weight_scaling(factor):
    weights = CategoryWeights(physical=0.4, lifestyle=0.3, social=0.2, relationship=0.5)
    scaled = CategoryWeights(**{k: v * factor for k, v in weights.as_dict().items()})
    scores = {"physical": 0.8, "lifestyle": 0.3, "social": 0.65, "relationship": 0.9}
    assert aggregate(scores, scaled) == pytest.approx(aggregate(scores, weights))


def test_accepts_category_scores_object():
    scores = CategoryScores.from_scores(0.9, 0.5, 0.5, 0.5)
    weights = CategoryWeights(0.6, 0.2, 0.1, 0.1)
    assert aggregate(scores, weights) == pytest.approx(aggregate(SCENARIO_SCORES, weights))


@pytest.mark.parametrize("zeroed", ["physical", "lifestyle", "social", "relationship"])
def test_multiplicative_zero_floor(zeroed):
    scores = {"physical": 1.0, "lifestyle": 1.0, "social": 1.0, "relationship": 1.0}
    scores[zeroed] = 0.0
    assert aggregate(scores, algorithm="multiplicative") == 0.0


def test_multiplicative_is_geometric_mean():
    scores = {"physical": 0.8, "lifestyle": 0.5, "social": 0.4, "relationship": 1.0}
    expected = (0.8 * 0.5 * 0.4 * 1.0) ** 0.25
    assert aggregate(scores, algorithm=ScoringAlgorithm.MULTIPLICATIVE) == pytest.approx(expected)


def test_hybrid_penalizes_weak_category():
    weights = CategoryWeights(0.25, 0.25, 0.25, 0.25)
    scores = {"physical": 0.9, "lifestyle": 0.9, "social": 0.9, "relationship": 0.15}
    base = aggregate(scores, weights, "weighted_average")
    assert aggregate(scores, weights, "hybrid") == pytest.approx(base * 0.5)


def test_hybrid_matches_weighted_average_without_weak_category():
    weights = CategoryWeights(0.25, 0.25, 0.25, 0.25)
    scores = {"physical": 0.9, "lifestyle": 0.6, "social": 0.3, "relationship": 0.7}
    assert aggregate(scores, weights, "hybrid") == pytest.approx(aggregate(scores, weights))


def test_unknown_algorithm_is_neutral():
    assert aggregate(SCENARIO_SCORES, algorithm="neural_magic") == 0.5
    assert parse_algorithm("neural_magic") is None


class TestWeightNormalization:

    def test_zero_weights_use_equal_split(self):
        weights = CategoryWeights(0.0, 0.0, 0.0, 0.0).normalized()
        assert weights.as_dict() == {"physical": 0.25, "lifestyle": 0.25, "social": 0.25, "relationship": 0.25}

    def test_negative_weights_clamped_before_normalizing(self):
        weights = CategoryWeights(physical=-1.0, lifestyle=1.0, social=1.0, relationship=2.0).normalized()
        assert weights.physical == 0.0
        assert weights.relationship == pytest.approx(0.5)
        assert sum(weights.as_dict().values()) == pytest.approx(1.0)

    def test_result_clamped_to_unit_interval(self):
        scores = {"physical": 1.0, "lifestyle": 1.0, "social": 1.0, "relationship": 1.0}
        assert aggregate(scores, CategoryWeights(5.0, 5.0, 5.0, 5.0)) == pytest.approx(1.0)


class TestAggregator:

    def test_from_filtering_config(self):
        filtering = FilteringConfig(scoring_algorithm="multiplicative", default_weights=CategoryWeights(1, 1, 1, 1))
        aggregator = CompatibilityAggregator(AggregationConfig.from_filtering_config(filtering))
        assert aggregator.config.algorithm == "multiplicative"
        assert aggregator.score(SCENARIO_SCORES) == pytest.approx(aggregate(SCENARIO_SCORES, None, "multiplicative"))

    def test_default_weights_apply_without_request_weights(self):
        aggregator = CompatibilityAggregator(AggregationConfig(weights=CategoryWeights(0.6, 0.2, 0.1, 0.1)))
        assert aggregator.score(SCENARIO_SCORES) == pytest.approx(0.74)

    def test_request_weights_override_defaults(self):
        aggregator = CompatibilityAggregator()
        weights = CategoryWeights(0.6, 0.2, 0.1, 0.1)
        assert aggregator.score(SCENARIO_SCORES, weights) == pytest.approx(0.74)
