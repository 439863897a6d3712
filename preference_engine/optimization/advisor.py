"""
Preference optimization advisor.

Suggests how a seeker could change their preferences to get more (or
better) matches. Suggestions are static, goal-conditioned templates and
the presets are a fixed catalog; nothing here is learned or computed from
the pool beyond the restrictiveness band of recent results.
"""

import logging
from dataclasses import dataclass, field, asdict, replace
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..profiles.schema import AdvancedMatchingCriteria, Profile

logger = logging.getLogger(__name__)

QUANTITY_RESULT_LIMIT = 10

# (exclusive lower bound on mean compatibility, band), checked in order
RESTRICTIVENESS_BANDS = (
    (0.8, "very_strict"),
    (0.65, "strict"),
    (0.5, "moderate"),
    (0.35, "relaxed"),
)
LOOSEST_BAND = "very_relaxed"


@dataclass
class OptimizationGoals:
    """What the seeker wants more of."""
    prioritize_quantity: bool = False
    prioritize_quality: bool = False
    increase_distance: bool = False
    expand_age: bool = False
    relax_deal_breakers: bool = False

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "OptimizationGoals":
        d = d or {}
        return cls(**{name: bool(d.get(name, False)) for name in cls.__dataclass_fields__})


@dataclass
class Suggestion:
    """
    One suggested preference change.

    Attributes:
        type: expand_age, increase_distance, remove_dealbreaker, adjust_weight or add_preference
        description: Text shown to the seeker
        impact: low, medium or high
        expected_increase: Expected change in match count, in percent (negative means fewer)
        tradeoff: What the seeker gives up (optional)
    """
    type: str
    description: str
    impact: str
    expected_increase: int
    tradeoff: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Preset:
    """A named bundle of preference changes."""
    name: str
    description: str
    changes: List[str]
    expected_matches: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CurrentSettings:
    restrictiveness: str
    expected_matches: int
    average_compatibility: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class OptimizationSuggestions:
    """Advisor output: current settings, suggestions and presets."""
    current_settings: CurrentSettings
    suggestions: List[Suggestion] = field(default_factory=list)
    presets: List[Preset] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_settings": self.current_settings.to_dict(),
            "suggestions": [s.to_dict() for s in self.suggestions],
            "presets": [p.to_dict() for p in self.presets],
        }


EXPAND_AGE = Suggestion(
    type="expand_age",
    description="Expand your age range by 5 years to find more matches",
    impact="high",
    expected_increase=40,
    tradeoff="May include matches outside your preferred age range",
)

INCREASE_DISTANCE = Suggestion(
    type="increase_distance",
    description="Increase your search radius to find more matches",
    impact="high",
    expected_increase=60,
    tradeoff="Matches may be further away",
)

ADD_EDUCATION_FILTER = Suggestion(
    type="add_preference",
    description="Add education level filter for higher quality matches",
    impact="medium",
    expected_increase=-20,
    tradeoff="Fewer matches but better compatibility",
)

REMOVE_DEAL_BREAKER = Suggestion(
    type="remove_dealbreaker",
    description="Remove your least important deal-breaker to see more candidates",
    impact="medium",
    expected_increase=25,
    tradeoff="Some matches may have traits you prefer to avoid",
)

PRESETS = (
    Preset(
        name="Quality Focused",
        description="Prioritize high compatibility over quantity",
        changes=["Add education filter", "Increase minimum compatibility"],
        expected_matches=5,
    ),
    Preset(
        name="Quantity Focused",
        description="Expand criteria for more potential matches",
        changes=["Expand age range", "Increase distance", "Remove strict filters"],
        expected_matches=25,
    ),
    Preset(
        name="Balanced",
        description="Good balance of quality and quantity",
        changes=["Moderate filters", "Balanced weights"],
        expected_matches=15,
    ),
)


def restrictiveness_band(average_compatibility: float) -> str:
    """Map mean compatibility of recent results to a restrictiveness band."""
    for lower_bound, band in RESTRICTIVENESS_BANDS:
        if average_compatibility > lower_bound:
            return band
    return LOOSEST_BAND


def _compatibility_scores(recent_results: Sequence[Any]) -> np.ndarray:
    return np.array(
        [float(getattr(r, "compatibility_score", r)) for r in recent_results],
        dtype=float,
    )


def analyze_current_settings(recent_results: Sequence[Any]) -> CurrentSettings:
    """
    Summarize recent results.

    Args:
        recent_results: Match results (anything with compatibility_score) or raw scores

    Returns:
        CurrentSettings with restrictiveness band, result count and mean compatibility
    """
    scores = _compatibility_scores(recent_results)
    average = float(np.mean(scores)) if len(scores) else 0.0
    return CurrentSettings(
        restrictiveness=restrictiveness_band(average),
        expected_matches=len(scores),
        average_compatibility=average,
    )


def generate_suggestions(
    goals: OptimizationGoals,
    result_count: int,
    criteria: Optional[AdvancedMatchingCriteria] = None
) -> List[Suggestion]:
    """Static suggestion templates for the given goals, without duplicates."""
    suggestions: List[Suggestion] = []

    def add(suggestion: Suggestion) -> None:
        if all(s.type != suggestion.type for s in suggestions):
            suggestions.append(replace(suggestion))

    if goals.prioritize_quantity and result_count < QUANTITY_RESULT_LIMIT:
        add(EXPAND_AGE)
        add(INCREASE_DISTANCE)
    if goals.expand_age:
        add(EXPAND_AGE)
    if goals.increase_distance:
        add(INCREASE_DISTANCE)
    if goals.relax_deal_breakers and criteria is not None and criteria.deal_breakers:
        add(REMOVE_DEAL_BREAKER)
    if goals.prioritize_quality:
        add(ADD_EDUCATION_FILTER)

    return suggestions


def optimize(
    seeker: Profile,
    goals: OptimizationGoals,
    recent_results: Sequence[Any],
    criteria: Optional[AdvancedMatchingCriteria] = None
) -> OptimizationSuggestions:
    """
    Build optimization suggestions for a seeker.

    Args:
        seeker: The seeker's profile
        goals: Optimization goals
        recent_results: Recent match results used for the restrictiveness band
        criteria: Current criteria, used to decide deal-breaker suggestions

    Returns:
        OptimizationSuggestions
    """
    current = analyze_current_settings(recent_results)
    suggestions = generate_suggestions(goals, current.expected_matches, criteria)
    logger.info(
        f"Optimization for {seeker.profile_id}: {current.restrictiveness}, "
        f"{current.expected_matches} recent results, {len(suggestions)} suggestions"
    )
    return OptimizationSuggestions(
        current_settings=current,
        suggestions=suggestions,
        presets=[replace(p, changes=list(p.changes)) for p in PRESETS],
    )
