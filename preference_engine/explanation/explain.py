"""
Human-readable explanations for scored matches.

Per category:
- score >= 0.8        -> primary reason
- 0.6 <= score < 0.8  -> secondary reason
- score < 0.4         -> concern

Matched preference labels become highlights verbatim. The overall
assessment is a tier on the total score, and strength is the total score
itself so callers can use it for ranking ties.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from ..scoring.base import CATEGORIES, CategoryScores

logger = logging.getLogger(__name__)

PRIMARY_REASON_MIN = 0.8
SECONDARY_REASON_MIN = 0.6
CONCERN_BELOW = 0.4
IMPROVEMENT_BELOW = 0.5

# (minimum total score, tier), checked in order
ASSESSMENT_TIERS = (
    (0.85, "excellent"),
    (0.70, "very_good"),
    (0.55, "good"),
)
DEFAULT_TIER = "fair"

WELL_OPTIMIZED_MESSAGE = "Your preferences are well-optimized for finding compatible matches"


@dataclass
class MatchExplanation:
    """
    Explanation of one match.

    Attributes:
        primary_reasons: Categories scoring >= 0.8
        secondary_reasons: Categories scoring in [0.6, 0.8)
        highlights: Matched preference labels
        concerns: Categories scoring < 0.4
        assessment: excellent / very_good / good / fair
        strength: Total score
        match_id: Match the explanation belongs to (optional)
    """
    primary_reasons: List[str] = field(default_factory=list)
    secondary_reasons: List[str] = field(default_factory=list)
    highlights: List[str] = field(default_factory=list)
    concerns: List[str] = field(default_factory=list)
    assessment: str = DEFAULT_TIER
    strength: float = 0.0
    match_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "match_id": self.match_id,
            "primary_reasons": list(self.primary_reasons),
            "secondary_reasons": list(self.secondary_reasons),
            "compatibility_highlights": list(self.highlights),
            "potential_concerns": list(self.concerns),
            "overall_assessment": self.assessment,
            "recommendation_strength": float(self.strength),
        }


def _scores_of(category_scores: Union[CategoryScores, Dict[str, float]]) -> Dict[str, float]:
    if isinstance(category_scores, CategoryScores):
        return category_scores.scores()
    return {name: float(category_scores[name]) for name in CATEGORIES}


def assessment_tier(total_score: float) -> str:
    """Map a total score to its assessment tier."""
    for minimum, tier in ASSESSMENT_TIERS:
        if total_score >= minimum:
            return tier
    return DEFAULT_TIER


def top_category(category_scores: Union[CategoryScores, Dict[str, float]]) -> str:
    """Highest-scoring category; ties resolve to the earlier category."""
    scores = _scores_of(category_scores)
    return max(CATEGORIES, key=lambda name: (scores[name], -CATEGORIES.index(name)))


def explain(
    category_scores: Union[CategoryScores, Dict[str, float]],
    matched_preferences: Iterable[str],
    total_score: float,
    match_id: Optional[str] = None
) -> MatchExplanation:
    """
    Build a MatchExplanation from category scores and matched labels.

    Args:
        category_scores: Raw category scores
        matched_preferences: Matched preference labels (become highlights)
        total_score: Overall compatibility score
        match_id: Optional match id to attach

    Returns:
        MatchExplanation
    """
    explanation = MatchExplanation(
        highlights=list(matched_preferences),
        assessment=assessment_tier(total_score),
        strength=total_score,
        match_id=match_id,
    )

    for name, score in _scores_of(category_scores).items():
        percent = round(score * 100)
        if score >= PRIMARY_REASON_MIN:
            explanation.primary_reasons.append(f"Excellent {name} compatibility ({percent}%)")
        elif score >= SECONDARY_REASON_MIN:
            explanation.secondary_reasons.append(f"Good {name} compatibility ({percent}%)")
        elif score < CONCERN_BELOW:
            explanation.concerns.append(f"Lower {name} compatibility ({percent}%)")

    return explanation


def summarize_match(
    total_score: float,
    category_scores: Union[CategoryScores, Dict[str, float]]
) -> str:
    """One-sentence summary naming the strongest category."""
    score = round(total_score * 100)
    top = top_category(category_scores)
    tier = assessment_tier(total_score)

    if tier == "excellent":
        return f"Excellent match ({score}%) with outstanding {top} compatibility and strong overall alignment."
    if tier == "very_good":
        return f"Very good match ({score}%) with strong {top} compatibility and good overall fit."
    if tier == "good":
        return f"Good match ({score}%) with decent {top} compatibility and potential for connection."
    return f"Fair match ({score}%) with some compatible factors but mixed overall alignment."


def improvement_suggestions(category_scores: Union[CategoryScores, Dict[str, float]]) -> List[str]:
    """One suggestion per category scoring below 0.5."""
    suggestions = [
        f"Consider adjusting {name} preferences to find more compatible matches"
        for name, score in _scores_of(category_scores).items()
        if score < IMPROVEMENT_BELOW
    ]
    return suggestions or [WELL_OPTIMIZED_MESSAGE]
