"""
Validation of discovery criteria.

Every check runs, so a caller receives all violated fields in one round
trip rather than only the first.
"""

import logging
from typing import List, Optional

from ..configs.settings import MatchingConfig
from ..dealbreakers.catalog import parse_deal_breaker
from ..profiles.schema import AdvancedMatchingCriteria
from .errors import MatchingValidationError, ValidationIssue

logger = logging.getLogger(__name__)

MIN_DISTANCE_KM = 1.0


def active_deal_breakers(criteria: AdvancedMatchingCriteria) -> List[str]:
    """Deal-breakers from the request and from its preferences, sorted and de-duplicated."""
    return sorted(set(criteria.deal_breakers) | set(criteria.preferences.deal_breakers))


def validate_criteria(
    criteria: AdvancedMatchingCriteria,
    matching_config: Optional[MatchingConfig] = None,
    seeker_id: Optional[str] = None
) -> List[ValidationIssue]:
    """
    Check discovery criteria against platform limits.

    Args:
        criteria: Discovery request
        matching_config: Platform limits (defaults when None)
        seeker_id: Profile id of the requesting seeker; checked against criteria.seeker_id when given

    Returns:
        Every issue found (empty if valid)
    """
    config = matching_config or MatchingConfig()
    prefs = criteria.preferences
    issues: List[ValidationIssue] = []

    if seeker_id is not None and criteria.seeker_id != seeker_id:
        issues.append(ValidationIssue(
            "SEEKER_MISMATCH", f"Criteria belong to {criteria.seeker_id}, not {seeker_id}", "seeker_id"
        ))

    age_range = prefs.age_range
    if age_range is not None:
        if age_range.min < config.min_age:
            issues.append(ValidationIssue(
                "AGE_MIN_TOO_LOW", f"Minimum age must be at least {config.min_age}", "preferences.age_range.min"
            ))
        if age_range.max > config.max_age:
            issues.append(ValidationIssue(
                "AGE_MAX_TOO_HIGH", f"Maximum age cannot exceed {config.max_age}", "preferences.age_range.max"
            ))
        if age_range.min >= age_range.max:
            issues.append(ValidationIssue(
                "INVALID_AGE_RANGE", "Minimum age must be less than maximum age", "preferences.age_range"
            ))
        elif age_range.max - age_range.min < config.min_age_span:
            issues.append(ValidationIssue(
                "AGE_RANGE_TOO_NARROW",
                f"Age range must span at least {config.min_age_span} years",
                "preferences.age_range",
            ))

    if prefs.max_distance_km < MIN_DISTANCE_KM:
        issues.append(ValidationIssue(
            "DISTANCE_TOO_LOW", f"Maximum distance must be at least {MIN_DISTANCE_KM:g}km",
            "preferences.max_distance_km",
        ))
    if prefs.max_distance_km > config.max_radius_km:
        issues.append(ValidationIssue(
            "DISTANCE_TOO_HIGH", f"Maximum distance cannot exceed {config.max_radius_km:g}km",
            "preferences.max_distance_km",
        ))

    if not prefs.sexual_orientations:
        issues.append(ValidationIssue(
            "NO_SEXUAL_ORIENTATIONS", "At least one sexual orientation must be selected",
            "preferences.sexual_orientations",
        ))
    if not prefs.relationship_types:
        issues.append(ValidationIssue(
            "NO_RELATIONSHIP_TYPES", "At least one relationship type must be selected",
            "preferences.relationship_types",
        ))

    deal_breakers = active_deal_breakers(criteria)
    if len(deal_breakers) > config.max_deal_breakers:
        issues.append(ValidationIssue(
            "TOO_MANY_DEAL_BREAKERS", f"Cannot have more than {config.max_deal_breakers} deal-breakers",
            "deal_breakers",
        ))
    for deal_breaker_id in deal_breakers:
        if parse_deal_breaker(deal_breaker_id) is None:
            issues.append(ValidationIssue(
                "INVALID_DEAL_BREAKER", f"Unknown deal-breaker: {deal_breaker_id}", "deal_breakers"
            ))

    height_range = prefs.height_range
    if height_range is not None and (height_range.min <= 0 or height_range.min >= height_range.max):
        issues.append(ValidationIssue(
            "INVALID_HEIGHT_RANGE", "Height range must be positive with minimum below maximum",
            "preferences.height_range",
        ))

    return issues


def ensure_valid_criteria(
    criteria: AdvancedMatchingCriteria,
    matching_config: Optional[MatchingConfig] = None,
    seeker_id: Optional[str] = None
) -> None:
    """
    Raise MatchingValidationError listing every issue, if any.

    Raises:
        MatchingValidationError: If the criteria are invalid
    """
    issues = validate_criteria(criteria, matching_config, seeker_id)
    if issues:
        logger.warning(f"Rejected criteria for {criteria.seeker_id}: {[i.code for i in issues]}")
        raise MatchingValidationError(issues)
