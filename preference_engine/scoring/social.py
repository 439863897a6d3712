"""
Social compatibility.

Sub-factors: education, occupation, interests, languages, personality.
"""

from ..profiles.schema import Profile, education_level
from .base import CategoryScore, NEUTRAL_SCORE


def score_education(seeker: Profile, candidate: Profile) -> float:
    """Distance on the 5-level education scale; neutral when either is missing."""
    if seeker.education is None or candidate.education is None:
        return NEUTRAL_SCORE

    difference = abs(education_level(seeker.education) - education_level(candidate.education))
    if difference == 0:
        return 1.0
    if difference == 1:
        return 0.8
    if difference == 2:
        return 0.6
    return 0.4


def score_occupation(seeker: Profile, candidate: Profile) -> float:
    # Schedule / income compatibility is not modeled
    return NEUTRAL_SCORE


def score_interests(seeker: Profile, candidate: Profile) -> float:
    """
    Overlap of interest tags.

    Rule:
    - |A ∩ B| / min(|A|, |B|), capped at 1.0
    - Neutral when either side lists no interests
    """
    if not seeker.interests or not candidate.interests:
        return NEUTRAL_SCORE

    common = seeker.interests & candidate.interests
    overlap = len(common) / min(len(seeker.interests), len(candidate.interests))
    return min(overlap, 1.0)


def score_languages(seeker: Profile, candidate: Profile) -> float:
    """1.0 with a shared language, 0.2 without; 0.7 when either list is empty."""
    if not seeker.languages or not candidate.languages:
        return 0.7
    return 1.0 if seeker.languages & candidate.languages else 0.2


def score_personality(seeker: Profile, candidate: Profile) -> float:
    # Personality test results are not modeled
    return NEUTRAL_SCORE


def score_social(seeker: Profile, candidate: Profile) -> CategoryScore:
    return CategoryScore.from_breakdown({
        "education": score_education(seeker, candidate),
        "occupation": score_occupation(seeker, candidate),
        "interests": score_interests(seeker, candidate),
        "languages": score_languages(seeker, candidate),
        "personality": score_personality(seeker, candidate),
    })
