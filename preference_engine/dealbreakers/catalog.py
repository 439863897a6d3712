"""
Deal-breaker catalog and filter.

A deal-breaker is a named boolean predicate over a (seeker, candidate) pair.
If any active deal-breaker triggers, the candidate is removed from
consideration unconditionally, before any scoring happens.

Key Design Decisions:
- The catalog is fixed: each DealBreaker member maps to one predicate in
  DEAL_BREAKER_PREDICATES
- Unknown ids are no-ops (they never trigger)
- Missing data never triggers a deal-breaker, except for the deal-breakers
  that are about absence itself (no_photos, no_verification)
- Activity rules are evaluated against an explicit reference time so that
  results are reproducible
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional

from ..profiles.schema import (
    Drinking,
    Drugs,
    Exercise,
    Profile,
    Smoking,
    BodyType,
    education_level,
)

logger = logging.getLogger(__name__)

HEIGHT_MISMATCH_CM = 20
EDUCATION_GAP_LEVELS = 2
INACTIVE_AFTER_DAYS = 14
NEW_PROFILE_DAYS = 1
MAX_AGE_GAP_YEARS = 15


class DealBreaker(Enum):
    """Catalog of supported deal-breakers."""
    # Physical
    SMOKING = "smoking"
    NO_PHOTOS = "no_photos"
    HEIGHT_MISMATCH = "height_mismatch"
    BODY_TYPE_MISMATCH = "body_type_mismatch"
    # Lifestyle
    DRINKING_HEAVILY = "drinking_heavily"
    DRUG_USE = "drug_use"
    NO_EXERCISE = "no_exercise"
    # Social
    NO_VERIFICATION = "no_verification"
    EDUCATION_MISMATCH = "education_mismatch"
    LANGUAGE_BARRIER = "language_barrier"
    # Activity
    INACTIVE_USERS = "inactive_users"
    NEW_PROFILES = "new_profiles"
    # Relationship
    AGE_GAPS = "age_gaps"
    RELATIONSHIP_MISMATCH = "relationship_mismatch"


Predicate = Callable[[Profile, Profile, datetime], bool]


def _smoking(seeker: Profile, candidate: Profile, now: datetime) -> bool:
    return candidate.lifestyle.smoking in (Smoking.REGULARLY, Smoking.SOCIALLY)


def _no_photos(seeker: Profile, candidate: Profile, now: datetime) -> bool:
    return candidate.photo_count == 0


def _height_mismatch(seeker: Profile, candidate: Profile, now: datetime) -> bool:
    if seeker.height_cm is None or candidate.height_cm is None:
        return False
    return abs(seeker.height_cm - candidate.height_cm) > HEIGHT_MISMATCH_CM


def _body_type_mismatch(seeker: Profile, candidate: Profile, now: datetime) -> bool:
    preferred = seeker.preferences.body_types if seeker.preferences else frozenset()
    if not preferred or candidate.body_type == BodyType.UNKNOWN:
        return False
    return candidate.body_type not in preferred


def _drinking_heavily(seeker: Profile, candidate: Profile, now: datetime) -> bool:
    return candidate.lifestyle.drinking == Drinking.FREQUENTLY


def _drug_use(seeker: Profile, candidate: Profile, now: datetime) -> bool:
    return candidate.lifestyle.drugs in (Drugs.REGULARLY, Drugs.OCCASIONALLY)


def _no_exercise(seeker: Profile, candidate: Profile, now: datetime) -> bool:
    return candidate.lifestyle.exercise == Exercise.NEVER


def _no_verification(seeker: Profile, candidate: Profile, now: datetime) -> bool:
    return not candidate.is_verified


def _education_mismatch(seeker: Profile, candidate: Profile, now: datetime) -> bool:
    if seeker.education is None or candidate.education is None:
        return False
    return education_level(seeker.education) - education_level(candidate.education) > EDUCATION_GAP_LEVELS


def _language_barrier(seeker: Profile, candidate: Profile, now: datetime) -> bool:
    if not seeker.languages or not candidate.languages:
        return False
    return not (seeker.languages & candidate.languages)


def _inactive_users(seeker: Profile, candidate: Profile, now: datetime) -> bool:
    days = candidate.days_since_active(now)
    return days is not None and days > INACTIVE_AFTER_DAYS


def _new_profiles(seeker: Profile, candidate: Profile, now: datetime) -> bool:
    days = candidate.days_since_created(now)
    return days is not None and days < NEW_PROFILE_DAYS


def _age_gaps(seeker: Profile, candidate: Profile, now: datetime) -> bool:
    return abs(seeker.age - candidate.age) > MAX_AGE_GAP_YEARS


def _relationship_mismatch(seeker: Profile, candidate: Profile, now: datetime) -> bool:
    if not seeker.looking_for or not candidate.looking_for:
        return False
    return not (seeker.looking_for & candidate.looking_for)


DEAL_BREAKER_PREDICATES: Dict[DealBreaker, Predicate] = {
    DealBreaker.SMOKING: _smoking,
    DealBreaker.NO_PHOTOS: _no_photos,
    DealBreaker.HEIGHT_MISMATCH: _height_mismatch,
    DealBreaker.BODY_TYPE_MISMATCH: _body_type_mismatch,
    DealBreaker.DRINKING_HEAVILY: _drinking_heavily,
    DealBreaker.DRUG_USE: _drug_use,
    DealBreaker.NO_EXERCISE: _no_exercise,
    DealBreaker.NO_VERIFICATION: _no_verification,
    DealBreaker.EDUCATION_MISMATCH: _education_mismatch,
    DealBreaker.LANGUAGE_BARRIER: _language_barrier,
    DealBreaker.INACTIVE_USERS: _inactive_users,
    DealBreaker.NEW_PROFILES: _new_profiles,
    DealBreaker.AGE_GAPS: _age_gaps,
    DealBreaker.RELATIONSHIP_MISMATCH: _relationship_mismatch,
}


def parse_deal_breaker(deal_breaker_id: str) -> Optional[DealBreaker]:
    """Resolve a deal-breaker id, returning None for ids outside the catalog."""
    try:
        return DealBreaker(str(deal_breaker_id).strip().lower())
    except ValueError:
        return None


def is_deal_breaker_triggered(
    seeker: Profile,
    candidate: Profile,
    deal_breaker_id: str,
    now: Optional[datetime] = None
) -> bool:
    """
    Evaluate a single deal-breaker for a (seeker, candidate) pair.

    Args:
        seeker: The seeker's profile
        candidate: The candidate's profile
        deal_breaker_id: Deal-breaker id (unknown ids never trigger)
        now: Reference time for activity rules (defaults to current UTC time)

    Returns:
        True if the candidate should be eliminated
    """
    deal_breaker = parse_deal_breaker(deal_breaker_id)
    if deal_breaker is None:
        logger.debug(f"Ignoring unknown deal-breaker id {deal_breaker_id!r}")
        return False
    now = now or datetime.now(timezone.utc)
    return DEAL_BREAKER_PREDICATES[deal_breaker](seeker, candidate, now)


def apply_deal_breakers(
    seeker: Profile,
    candidates: List[Profile],
    active_ids: Iterable[str],
    now: Optional[datetime] = None,
    enabled: bool = True
) -> List[Profile]:
    """
    Remove candidates that trigger any active deal-breaker.

    Evaluation short-circuits on the first triggered deal-breaker. With no
    active ids, or with the feature disabled, the input list is returned
    unchanged.

    Args:
        seeker: The seeker's profile
        candidates: Candidate pool
        active_ids: Active deal-breaker ids
        now: Reference time for activity rules
        enabled: Feature flag for deal-breaker filtering

    Returns:
        Candidates that triggered no deal-breaker, in input order
    """
    active = [db for db in (parse_deal_breaker(i) for i in active_ids) if db is not None]
    if not enabled or not active:
        return candidates

    now = now or datetime.now(timezone.utc)
    # Sorted so evaluation order is stable across runs
    predicates = [DEAL_BREAKER_PREDICATES[db] for db in sorted(active, key=lambda d: d.value)]

    kept = [
        candidate for candidate in candidates
        if not any(predicate(seeker, candidate, now) for predicate in predicates)
    ]
    logger.debug(f"Deal-breakers removed {len(candidates) - len(kept)} of {len(candidates)} candidates")
    return kept


@dataclass
class DealBreakerAnalysis:
    """Per-candidate deal-breaker outcome."""
    passed: bool
    triggered: List[str] = field(default_factory=list)
    passed_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "passed": self.passed,
            "triggered_deal_breakers": list(self.triggered),
            "passed_deal_breakers": list(self.passed_ids),
        }


def analyze_deal_breakers(
    seeker: Profile,
    candidate: Profile,
    active_ids: Iterable[str],
    now: Optional[datetime] = None
) -> DealBreakerAnalysis:
    """
    Evaluate every active deal-breaker without short-circuiting.

    Used for explanation output; unknown ids are reported as passed.
    """
    now = now or datetime.now(timezone.utc)
    triggered: List[str] = []
    passed: List[str] = []
    for deal_breaker_id in sorted(set(active_ids)):
        if is_deal_breaker_triggered(seeker, candidate, deal_breaker_id, now):
            triggered.append(deal_breaker_id)
        else:
            passed.append(deal_breaker_id)
    return DealBreakerAnalysis(passed=not triggered, triggered=triggered, passed_ids=passed)
