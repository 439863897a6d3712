"""
Physical compatibility.

Sub-factors: body type, height, age, appearance.
"""

from ..profiles.schema import BodyType, Profile
from .base import CategoryScore


def score_body_type(seeker: Profile, candidate: Profile) -> float:
    """
    Preference fit.

    Rules:
    - 1.0 when the candidate's body type is in the seeker's preferred set
    - 0.3 when the seeker has preferences and the candidate is outside them
    - 0.7 when the seeker has no preference or the candidate's type is unknown
    """
    preferred = seeker.preferences.body_types if seeker.preferences else frozenset()
    if not preferred or candidate.body_type == BodyType.UNKNOWN:
        return 0.7
    return 1.0 if candidate.body_type in preferred else 0.3


def score_height(seeker: Profile, candidate: Profile) -> float:
    """Banded on absolute height difference; 0.7 when either height is missing."""
    if seeker.height_cm is None or candidate.height_cm is None:
        return 0.7

    difference = abs(seeker.height_cm - candidate.height_cm)
    if difference <= 5:
        return 1.0
    if difference <= 15:
        return 0.8
    if difference <= 25:
        return 0.6
    return 0.3


def score_age(seeker: Profile, candidate: Profile) -> float:
    """
    Age fit.

    With an explicit preferred range the boundary is inclusive and scores
    decay with the distance outside the range. Without one, fall back to
    absolute age difference bands.
    """
    age_range = seeker.preferences.age_range if seeker.preferences else None

    if age_range is None:
        difference = abs(seeker.age - candidate.age)
        if difference <= 3:
            return 1.0
        if difference <= 7:
            return 0.8
        if difference <= 12:
            return 0.6
        return 0.3

    if age_range.contains(candidate.age):
        return 1.0

    outside_by = min(abs(candidate.age - age_range.min), abs(candidate.age - age_range.max))
    if outside_by <= 2:
        return 0.7
    if outside_by <= 5:
        return 0.4
    return 0.1


def score_appearance(candidate: Profile) -> float:
    """Monotonic in photo count."""
    photos = candidate.photo_count
    if photos == 0:
        return 0.2
    if photos >= 5:
        return 1.0
    if photos >= 3:
        return 0.8
    if photos >= 2:
        return 0.6
    return 0.4


def score_physical(seeker: Profile, candidate: Profile) -> CategoryScore:
    return CategoryScore.from_breakdown({
        "body_type": score_body_type(seeker, candidate),
        "height": score_height(seeker, candidate),
        "age": score_age(seeker, candidate),
        "appearance": score_appearance(candidate),
    })
