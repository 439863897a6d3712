"""Match explanations and improvement suggestions."""

from .explain import (
    MatchExplanation,
    assessment_tier,
    explain,
    improvement_suggestions,
    summarize_match,
    top_category,
)

__all__ = [
    "MatchExplanation",
    "assessment_tier",
    "explain",
    "improvement_suggestions",
    "summarize_match",
    "top_category",
]
