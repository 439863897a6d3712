"""
Basic candidate filtering and location-matching factors.

This is the first discovery phase: self, hidden and excluded profiles are
removed, the age and orientation preferences and the search filters are
applied, and candidates beyond the search radius are dropped. Candidates
with an unknown distance are kept.

The match factors and the basic score come from plain location matching
and are reported next to the preference compatibility score.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..geo.distance import DistanceFn, calculate_distance_score
from ..profiles.schema import AdvancedMatchingCriteria, Profile
from .results import MatchFactors

logger = logging.getLogger(__name__)

RECENTLY_ACTIVE_DAYS = 3
DETAILED_BIO_CHARS = 50
VERIFICATION_BONUS = 0.1
PREMIUM_BONUS = 0.05

BASIC_SCORE_WEIGHTS = {
    "distance": 0.3,
    "age": 0.2,
    "preference_alignment": 0.25,
    "activity": 0.15,
    "completeness": 0.1,
}


def passes_basic_filters(
    seeker: Profile,
    candidate: Profile,
    criteria: AdvancedMatchingCriteria,
    now: datetime,
    enable_age_filtering: bool = True
) -> bool:
    """
    Check a candidate against the non-location basic filters.

    Args:
        seeker: The seeker's profile
        candidate: The candidate's profile
        criteria: Discovery request
        now: Reference time for the activity window
        enable_age_filtering: Apply the requested age range

    Returns:
        True if the candidate stays in the pool
    """
    prefs = criteria.preferences
    filters = criteria.filters

    if candidate.profile_id == seeker.profile_id:
        return False
    if not candidate.is_visible:
        return False
    if candidate.profile_id in filters.exclude_profile_ids:
        return False

    if enable_age_filtering and prefs.age_range is not None and not prefs.age_range.contains(candidate.age):
        return False
    if prefs.sexual_orientations and candidate.sexual_orientation not in prefs.sexual_orientations:
        return False

    if filters.is_verified and not candidate.is_verified:
        return False
    if filters.has_photos and candidate.photo_count == 0:
        return False
    if filters.minimum_photo_count is not None and candidate.photo_count < filters.minimum_photo_count:
        return False
    if filters.include_premium_only and not candidate.is_premium:
        return False
    if filters.last_active_within_hours is not None:
        if candidate.last_active_at is None:
            return False
        if candidate.last_active_at < now - timedelta(hours=filters.last_active_within_hours):
            return False

    return True


def candidate_distance(seeker: Profile, candidate: Profile, distance_fn: DistanceFn) -> Optional[float]:
    """Distance in km between the two profiles, or None if either location is unknown."""
    if seeker.location is None or candidate.location is None:
        return None
    return distance_fn(seeker.location, candidate.location).distance_km


def within_radius(distance_km: Optional[float], max_distance_km: float) -> bool:
    """Unknown distances are never filtered out."""
    return distance_km is None or distance_km <= max_distance_km


def age_compatibility(seeker: Profile, candidate: Profile) -> float:
    """Prefer small age differences."""
    difference = abs(seeker.age - candidate.age)
    if difference <= 2:
        return 1.0
    if difference <= 5:
        return 0.8
    if difference <= 10:
        return 0.6
    if difference <= 15:
        return 0.4
    return 0.2


def preference_alignment(seeker: Profile, candidate: Profile) -> float:
    """0.5 base, +0.3 for a shared relationship type, +0.2 for the same orientation."""
    score = 0.5
    if seeker.looking_for & candidate.looking_for:
        score += 0.3
    if seeker.sexual_orientation == candidate.sexual_orientation:
        score += 0.2
    return min(score, 1.0)


def activity_score(candidate: Profile, now: datetime) -> float:
    """0.5 base, +0.2 with photos, +0.2 with a detailed bio, +0.1 if recently active."""
    score = 0.5
    if candidate.photo_count > 0:
        score += 0.2
    if len(candidate.bio) > DETAILED_BIO_CHARS:
        score += 0.2
    days = candidate.days_since_active(now)
    if days is not None and days < RECENTLY_ACTIVE_DAYS:
        score += 0.1
    return min(score, 1.0)


def compute_match_factors(
    seeker: Profile,
    candidate: Profile,
    distance_km: Optional[float],
    max_distance_km: float,
    now: datetime
) -> MatchFactors:
    return MatchFactors(
        location_score=calculate_distance_score(distance_km, max_distance_km),
        age_compatibility=age_compatibility(seeker, candidate),
        preference_alignment=preference_alignment(seeker, candidate),
        activity_score=activity_score(candidate, now),
        verification_bonus=VERIFICATION_BONUS if candidate.is_verified else 0.0,
        premium_bonus=PREMIUM_BONUS if candidate.is_premium else 0.0,
    )


def basic_score(factors: MatchFactors, candidate: Profile) -> float:
    """Weighted sum of the basic factors and profile completeness, rounded to 2 places."""
    completeness = min(max(candidate.completeness, 0.0), 100.0) / 100.0
    total = (
        factors.location_score * BASIC_SCORE_WEIGHTS["distance"]
        + factors.age_compatibility * BASIC_SCORE_WEIGHTS["age"]
        + factors.preference_alignment * BASIC_SCORE_WEIGHTS["preference_alignment"]
        + factors.activity_score * BASIC_SCORE_WEIGHTS["activity"]
        + completeness * BASIC_SCORE_WEIGHTS["completeness"]
    )
    return round(total, 2)
