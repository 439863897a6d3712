"""Tests for result analytics and tabular export."""

import json
from types import SimpleNamespace

import numpy as np
import pytest

from conftest import build_criteria
from preference_engine.evaluation import (
    compute_preference_match_analytics,
    compute_quality_distribution,
    compute_score_distribution_stats,
    results_to_frame,
)
from preference_engine.evaluation.metrics import QUALITY_BANDS, compute_score_agreement
from preference_engine.profiles import CategoryWeights


def fake_result(candidate_id, compatibility, basic, categories):
    return SimpleNamespace(
        match_id=f"match_s_{candidate_id}",
        candidate_id=candidate_id,
        compatibility_score=compatibility,
        score=basic,
        distance_km=1.0,
        category_scores=dict(zip(["physical", "lifestyle", "social", "relationship"], categories)),
        preference_alignment=SimpleNamespace(must_haves_satisfied=1, nice_to_haves_matched=0),
    )


@pytest.fixture
def results():
    return [
        fake_result("a", 0.9, 0.8, (0.9, 0.9, 0.9, 0.9)),
        fake_result("b", 0.72, 0.6, (0.8, 0.7, 0.6, 0.7)),
        fake_result("c", 0.58, 0.55, (0.6, 0.5, 0.6, 0.6)),
        fake_result("d", 0.4, 0.3, (0.9, 0.2, 0.1, 0.3)),
    ]


def test_quality_bands_follow_assessment_tiers():
    assert QUALITY_BANDS == ("excellent", "very_good", "good", "fair")
    assert compute_quality_distribution([0.9, 0.7, 0.55, 0.2]) == dict.fromkeys(QUALITY_BANDS, 1)
    assert compute_quality_distribution([0.9, 0.86, 0.1]) == {
        "excellent": 2, "very_good": 0, "good": 0, "fair": 1,
    }


def test_score_distribution_stats():
    stats = compute_score_distribution_stats(np.array([0.2, 0.4, 0.6, 0.8]))
    assert stats.mean == pytest.approx(0.5)
    assert stats.min == 0.2
    assert stats.max == 0.8
    assert stats.quantiles["p50"] == pytest.approx(0.5)
    assert list(stats.quantiles) == ["p10", "p25", "p50", "p75", "p90"]


class TestScoreAgreement:

    def test_perfect_rank_agreement(self):
        assert compute_score_agreement(np.array([0.1, 0.5, 0.9]), np.array([0.3, 0.4, 0.8])) == pytest.approx(1.0)

    def test_too_few_results(self):
        assert compute_score_agreement(np.array([0.1, 0.5]), np.array([0.3, 0.4])) is None

    def test_constant_side(self):
        assert compute_score_agreement(np.array([0.5, 0.5, 0.5]), np.array([0.3, 0.4, 0.8])) is None


def test_analytics(results):
    analytics = compute_preference_match_analytics("s", results, CategoryWeights(0.7, 0.1, 0.1, 0.1))

    assert analytics.total_matches == 4
    assert analytics.quality_distribution == {"excellent": 1, "very_good": 1, "good": 1, "fair": 1}
    assert analytics.category_performance["physical"].average_score == pytest.approx(0.8)
    assert analytics.category_performance["physical"].importance == pytest.approx(0.7)
    assert analytics.most_influential_factors[0] == "physical"
    assert analytics.score_agreement == pytest.approx(1.0)
    assert "Total matches: 4" in analytics.summary()


def test_analytics_without_results():
    analytics = compute_preference_match_analytics("s", [])
    assert analytics.total_matches == 0
    assert analytics.score_distribution is None
    assert analytics.most_influential_factors == []
    assert analytics.score_agreement is None


def test_analytics_save(results, tmp_path):
    path = tmp_path / "analytics.json"
    compute_preference_match_analytics("s", results).save(str(path))
    assert json.loads(path.read_text())["seeker_id"] == "s"


def test_results_to_frame(results):
    df = results_to_frame(results)
    assert list(df["rank"]) == [1, 2, 3, 4]
    assert list(df["candidate_id"]) == ["a", "b", "c", "d"]
    assert list(df["assessment"]) == ["excellent", "very_good", "good", "fair"]
    assert {"physical", "lifestyle", "social", "relationship", "must_haves_satisfied"} <= set(df.columns)


def test_results_to_frame_empty():
    df = results_to_frame([])
    assert df.empty
    assert "compatibility_score" in df.columns


def test_frame_from_real_results(make_orchestrator, seeker, make_profile):
    results = make_orchestrator().find_matches(seeker, build_criteria(), [make_profile("a"), make_profile("b")])
    df = results_to_frame(results)
    assert list(df["match_id"]) == ["match_seeker_a", "match_seeker_b"]
    assert df["compatibility_score"].between(0, 1).all()
