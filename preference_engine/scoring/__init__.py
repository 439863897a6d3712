"""Category scorers (physical, lifestyle, social, relationship)."""

from .base import CATEGORIES, NEUTRAL_SCORE, CategoryScore, CategoryScores
from .categories import calculate_category_scores
from .lifestyle import score_lifestyle
from .physical import score_physical
from .relationship import score_relationship
from .social import score_social

__all__ = [
    "CATEGORIES",
    "NEUTRAL_SCORE",
    "CategoryScore",
    "CategoryScores",
    "calculate_category_scores",
    "score_lifestyle",
    "score_physical",
    "score_relationship",
    "score_social",
]
