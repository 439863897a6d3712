"""
Lifestyle compatibility.

Sub-factors: smoking, drinking, exercise, diet, social habits.

Smoking, drinking and exercise are compared by index distance on their
ordered scales. An exact match scores 1.0; UNKNOWN on either side scores
neutral.
"""

from enum import Enum
from typing import Dict, FrozenSet, List, Sequence, Tuple

from ..profiles.schema import Diet, Drinking, Exercise, Profile, Smoking
from .base import CategoryScore, NEUTRAL_SCORE

SMOKING_SCALE: List[Smoking] = [Smoking.NEVER, Smoking.SOCIALLY, Smoking.REGULARLY]
DRINKING_SCALE: List[Drinking] = [
    Drinking.NEVER, Drinking.RARELY, Drinking.SOCIALLY, Drinking.REGULARLY, Drinking.FREQUENTLY,
]
EXERCISE_SCALE: List[Exercise] = [
    Exercise.NEVER, Exercise.RARELY, Exercise.SOMETIMES, Exercise.REGULARLY, Exercise.DAILY,
]

# (max level difference, score) bands, checked in order; last entry is the floor
SMOKING_BANDS: Sequence[Tuple[int, float]] = ((1, 0.6), (99, 0.2))
DRINKING_BANDS: Sequence[Tuple[int, float]] = ((1, 0.8), (2, 0.6), (99, 0.3))
EXERCISE_BANDS: Sequence[Tuple[int, float]] = ((1, 0.8), (2, 0.6), (99, 0.4))

DIET_COMPATIBILITY: Dict[FrozenSet[Diet], float] = {
    frozenset({Diet.VEGETARIAN, Diet.VEGAN}): 0.7,
    frozenset({Diet.OMNIVORE, Diet.VEGETARIAN}): 0.6,
}
DIET_DEFAULT = 0.5


def score_ordered_level(
    seeker_value: Enum,
    candidate_value: Enum,
    scale: Sequence[Enum],
    bands: Sequence[Tuple[int, float]]
) -> float:
    """
    Score two values on an ordered scale by their index difference.

    Values outside the scale (UNKNOWN) score neutral.
    """
    if seeker_value not in scale or candidate_value not in scale:
        return NEUTRAL_SCORE
    if seeker_value == candidate_value:
        return 1.0

    difference = abs(scale.index(seeker_value) - scale.index(candidate_value))
    for max_difference, score in bands:
        if difference <= max_difference:
            return score
    return bands[-1][1]


def score_smoking(seeker: Profile, candidate: Profile) -> float:
    return score_ordered_level(
        seeker.lifestyle.smoking, candidate.lifestyle.smoking, SMOKING_SCALE, SMOKING_BANDS
    )


def score_drinking(seeker: Profile, candidate: Profile) -> float:
    return score_ordered_level(
        seeker.lifestyle.drinking, candidate.lifestyle.drinking, DRINKING_SCALE, DRINKING_BANDS
    )


def score_exercise(seeker: Profile, candidate: Profile) -> float:
    return score_ordered_level(
        seeker.lifestyle.exercise, candidate.lifestyle.exercise, EXERCISE_SCALE, EXERCISE_BANDS
    )


def score_diet(seeker: Profile, candidate: Profile) -> float:
    """Small symmetric compatibility table; exact match is best."""
    seeker_diet = seeker.lifestyle.diet
    candidate_diet = candidate.lifestyle.diet
    if Diet.UNKNOWN in (seeker_diet, candidate_diet):
        return NEUTRAL_SCORE
    if seeker_diet == candidate_diet:
        return 1.0
    return DIET_COMPATIBILITY.get(frozenset({seeker_diet, candidate_diet}), DIET_DEFAULT)


def score_social_habits(seeker: Profile, candidate: Profile) -> float:
    # Party frequency / social circle data is not modeled
    return NEUTRAL_SCORE


def score_lifestyle(seeker: Profile, candidate: Profile) -> CategoryScore:
    return CategoryScore.from_breakdown({
        "smoking": score_smoking(seeker, candidate),
        "drinking": score_drinking(seeker, candidate),
        "exercise": score_exercise(seeker, candidate),
        "diet": score_diet(seeker, candidate),
        "social_habits": score_social_habits(seeker, candidate),
    })
