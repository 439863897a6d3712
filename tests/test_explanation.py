"""Tests for match explanations."""

import pytest

from preference_engine.explanation import (
    assessment_tier,
    explain,
    improvement_suggestions,
    summarize_match,
    top_category,
)
from preference_engine.explanation.explain import WELL_OPTIMIZED_MESSAGE


def test_reasons_and_concerns_by_band():
    scores = {"physical": 0.85, "lifestyle": 0.65, "social": 0.5, "relationship": 0.3}
    explanation = explain(scores, ["Shared interests: hiking"], 0.62, match_id="match_s_c")

    assert explanation.primary_reasons == ["Excellent physical compatibility (85%)"]
    assert explanation.secondary_reasons == ["Good lifestyle compatibility (65%)"]
    assert explanation.concerns == ["Lower relationship compatibility (30%)"]
    assert explanation.highlights == ["Shared interests: hiking"]
    assert explanation.assessment == "good"
    assert explanation.strength == 0.62
    assert explanation.match_id == "match_s_c"


def test_band_edges():
    scores = {"physical": 0.8, "lifestyle": 0.6, "social": 0.4, "relationship": 0.39}
    explanation = explain(scores, [], 0.5)
    assert len(explanation.primary_reasons) == 1
    assert len(explanation.secondary_reasons) == 1
    assert explanation.concerns == ["Lower relationship compatibility (39%)"]


def test_to_dict_keys():
    data = explain({"physical": 0.9, "lifestyle": 0.9, "social": 0.9, "relationship": 0.9}, [], 0.9).to_dict()
    assert data["overall_assessment"] == "excellent"
    assert data["recommendation_strength"] == 0.9
    assert set(data) >= {"primary_reasons", "secondary_reasons", "compatibility_highlights", "potential_concerns"}


@pytest.mark.parametrize("score,tier", [
    (0.85, "excellent"), (0.849, "very_good"), (0.7, "very_good"), (0.55, "good"), (0.549, "fair"), (0.0, "fair"),
])
def test_assessment_tiers(score, tier):
    assert assessment_tier(score) == tier


def test_top_category_ties_go_to_earlier_category():
    assert top_category({"physical": 0.5, "lifestyle": 0.7, "social": 0.7, "relationship": 0.1}) == "lifestyle"


def test_summary_names_tier_and_top_category():
    scores = {"physical": 0.6, "lifestyle": 0.95, "social": 0.8, "relationship": 0.7}
    summary = summarize_match(0.88, scores)
    assert summary.startswith("Excellent match (88%)")
    assert "lifestyle" in summary
    assert summarize_match(0.3, scores).startswith("Fair match (30%)")


def test_improvement_suggestions():
    scores = {"physical": 0.45, "lifestyle": 0.9, "social": 0.2, "relationship": 0.5}
    assert improvement_suggestions(scores) == [
        "Consider adjusting physical preferences to find more compatible matches",
        "Consider adjusting social preferences to find more compatible matches",
    ]
    assert improvement_suggestions({k: 0.9 for k in scores}) == [WELL_OPTIMIZED_MESSAGE]
