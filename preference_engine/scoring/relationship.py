"""
Relationship compatibility.

Sub-factors: relationship type, sexual orientation, commitment level,
family goals, communication.
"""

from ..profiles.schema import Profile, SexualOrientation
from .base import CategoryScore, NEUTRAL_SCORE


def score_relationship_type(seeker: Profile, candidate: Profile) -> float:
    """1.0 when the sought relationship types intersect, 0.2 otherwise."""
    if not seeker.looking_for or not candidate.looking_for:
        return NEUTRAL_SCORE
    return 1.0 if seeker.looking_for & candidate.looking_for else 0.2


def score_sexual_orientation(seeker: Profile, candidate: Profile) -> float:
    """
    Simplified orientation fit.

    Rules:
    - Same orientation: 1.0
    - Either party bisexual: 0.8
    - Otherwise: 0.3
    """
    if seeker.sexual_orientation == candidate.sexual_orientation:
        return 1.0
    if SexualOrientation.BISEXUAL in (seeker.sexual_orientation, candidate.sexual_orientation):
        return 0.8
    return 0.3


def score_commitment_level(seeker: Profile, candidate: Profile) -> float:
    return NEUTRAL_SCORE


def score_family_goals(seeker: Profile, candidate: Profile) -> float:
    return NEUTRAL_SCORE


def score_communication(seeker: Profile, candidate: Profile) -> float:
    return NEUTRAL_SCORE


def score_relationship(seeker: Profile, candidate: Profile) -> CategoryScore:
    return CategoryScore.from_breakdown({
        "relationship_type": score_relationship_type(seeker, candidate),
        "sexual_orientation": score_sexual_orientation(seeker, candidate),
        "commitment_level": score_commitment_level(seeker, candidate),
        "family_goals": score_family_goals(seeker, candidate),
        "communication": score_communication(seeker, candidate),
    })
