"""Tests for the preference optimization advisor."""

import pytest

from conftest import build_criteria
from preference_engine.optimization import (
    PRESETS,
    OptimizationGoals,
    optimize,
    restrictiveness_band,
)
from preference_engine.optimization.advisor import analyze_current_settings, generate_suggestions


@pytest.mark.parametrize("average,band", [
    (0.85, "very_strict"), (0.8, "strict"), (0.7, "strict"), (0.6, "moderate"),
    (0.4, "relaxed"), (0.35, "very_relaxed"), (0.0, "very_relaxed"),
])
def test_restrictiveness_bands(average, band):
    assert restrictiveness_band(average) == band


def test_current_settings_from_raw_scores():
    settings = analyze_current_settings([0.7, 0.7, 0.7])
    assert settings.expected_matches == 3
    assert settings.average_compatibility == pytest.approx(0.7)
    assert settings.restrictiveness == "strict"


def test_current_settings_without_results():
    settings = analyze_current_settings([])
    assert settings.expected_matches == 0
    assert settings.restrictiveness == "very_relaxed"


def test_quantity_goal_with_few_results():
    types = [s.type for s in generate_suggestions(OptimizationGoals(prioritize_quantity=True), 3)]
    assert types == ["expand_age", "increase_distance"]


def test_quantity_goal_with_enough_results():
    assert generate_suggestions(OptimizationGoals(prioritize_quantity=True), 25) == []


def test_suggestions_are_not_duplicated():
    goals = OptimizationGoals(prioritize_quantity=True, expand_age=True, increase_distance=True)
    types = [s.type for s in generate_suggestions(goals, 0)]
    assert types == ["expand_age", "increase_distance"]


def test_quality_goal_suggests_fewer_matches():
    suggestions = generate_suggestions(OptimizationGoals(prioritize_quality=True), 40)
    assert [s.type for s in suggestions] == ["add_preference"]
    assert suggestions[0].expected_increase < 0


def test_relax_deal_breakers_needs_active_deal_breakers():
    goals = OptimizationGoals(relax_deal_breakers=True)
    assert generate_suggestions(goals, 5, build_criteria()) == []
    types = [s.type for s in generate_suggestions(goals, 5, build_criteria(deal_breakers=["smoking"]))]
    assert types == ["remove_dealbreaker"]


def test_goals_from_dict():
    goals = OptimizationGoals.from_dict({"expand_age": 1, "unknown_goal": True})
    assert goals.expand_age is True
    assert goals.prioritize_quality is False


def test_optimize_includes_presets(seeker):
    result = optimize(seeker, OptimizationGoals(prioritize_quantity=True), [0.9, 0.95])
    data = result.to_dict()
    assert data["current_settings"]["restrictiveness"] == "very_strict"
    assert [p["name"] for p in data["presets"]] == [p.name for p in PRESETS]
    assert len(data["suggestions"]) == 2


def test_edited_output_leaves_templates_intact(seeker):
    goals = OptimizationGoals(prioritize_quantity=True)
    first = optimize(seeker, goals, [0.5])
    first.presets[0].changes.append("Something else")
    first.suggestions[0].expected_increase = 999

    second = optimize(seeker, goals, [0.5])
    assert second.presets[0].changes == ["Add education filter", "Increase minimum compatibility"]
    assert second.suggestions[0].expected_increase == 40
    assert PRESETS[0].changes == ["Add education filter", "Increase minimum compatibility"]
