"""
Category scoring orchestration.

This module coordinates the four independent category scorers.
It does not contain scoring logic itself.
"""

from ..profiles.schema import Profile
from .base import CategoryScores
from .lifestyle import score_lifestyle
from .physical import score_physical
from .relationship import score_relationship
from .social import score_social


def calculate_category_scores(seeker: Profile, candidate: Profile) -> CategoryScores:
    """
    Entry point for category scoring.
    Returns the four category scores with their sub-factor breakdowns.
    """
    return CategoryScores(
        physical=score_physical(seeker, candidate),
        lifestyle=score_lifestyle(seeker, candidate),
        social=score_social(seeker, candidate),
        relationship=score_relationship(seeker, candidate),
    )
