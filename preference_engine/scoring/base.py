"""
Score containers shared by the category scorers.

A category score is the arithmetic mean of its sub-factor scores. The
breakdown is kept for explanation only; aggregation across categories uses
the category score itself.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Iterator, Tuple

CATEGORIES = ("physical", "lifestyle", "social", "relationship")

# Neutral score for missing data and for signals that are not modeled yet
NEUTRAL_SCORE = 0.5


@dataclass(frozen=True)
class CategoryScore:
    """Score in [0, 1] for one category plus its labeled sub-factors."""
    score: float
    breakdown: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_breakdown(cls, breakdown: Dict[str, float]) -> "CategoryScore":
        """Build a category score as the unweighted mean of its sub-factors."""
        if not breakdown:
            return cls(score=NEUTRAL_SCORE, breakdown={})
        return cls(score=sum(breakdown.values()) / len(breakdown), breakdown=dict(breakdown))

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "breakdown": dict(self.breakdown)}


@dataclass(frozen=True)
class CategoryScores:
    """The four category scores for one candidate."""
    physical: CategoryScore
    lifestyle: CategoryScore
    social: CategoryScore
    relationship: CategoryScore

    def items(self) -> Iterator[Tuple[str, CategoryScore]]:
        """Iterate (name, CategoryScore) in canonical category order."""
        for name in CATEGORIES:
            yield name, getattr(self, name)

    def scores(self) -> Dict[str, float]:
        """Raw category scores keyed by category name."""
        return {name: category.score for name, category in self.items()}

    def min_score(self) -> float:
        return min(self.scores().values())

    def to_dict(self) -> Dict[str, Any]:
        return {name: category.to_dict() for name, category in self.items()}

    @classmethod
    def from_scores(
        cls,
        physical: float,
        lifestyle: float,
        social: float,
        relationship: float
    ) -> "CategoryScores":
        """Build from raw category scores (no breakdown)."""
        return cls(
            physical=CategoryScore(physical),
            lifestyle=CategoryScore(lifestyle),
            social=CategoryScore(social),
            relationship=CategoryScore(relationship),
        )
