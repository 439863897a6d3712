"""
Preference alignment between a seeker and one candidate.

Two outputs:
1. Matched / mismatched preference labels per category, derived from the
   seeker's explicit preferences. Matched labels become explanation
   highlights verbatim.
2. Must-have / nice-to-have analysis. Each item is satisfied when its
   normalized form is contained in the candidate's tag set (see
   profile_tags). The check is deterministic, so repeated runs over the
   same inputs give identical results.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set

from ..profiles.schema import (
    BodyType,
    Diet,
    Drinking,
    Exercise,
    Profile,
    Smoking,
    education_level,
)
from ..scoring.base import CATEGORIES

logger = logging.getLogger(__name__)

ACTIVE_WITHIN_DAYS = 7
LOCAL_RESIDENT_KM = 10.0
GOOD_EDUCATION_LEVEL = 3


def normalize_item(item: str) -> str:
    """Lower-case and snake_case a tag or preference id."""
    return "_".join(str(item).strip().lower().replace("-", " ").split())


def profile_tags(
    candidate: Profile,
    seeker: Optional[Profile] = None,
    distance_km: Optional[float] = None,
    now: Optional[datetime] = None
) -> FrozenSet[str]:
    """
    Build the tag set that must-haves and nice-to-haves are checked against.

    Tags include interests, languages, relationship types, body type,
    education, diet, occupation, key:value lifestyle tags and derived tags
    such as verified, has_photos, non_smoker, non_drinker, active.

    Args:
        candidate: Candidate profile
        seeker: Seeker profile, enables seeker-relative tags (same_interests)
        distance_km: Distance to the seeker, enables local_resident
        now: Reference time for the active tag

    Returns:
        Normalized tags
    """
    tags: Set[str] = set()
    tags.update(normalize_item(i) for i in candidate.interests)
    tags.update(normalize_item(l) for l in candidate.languages)
    tags.update(r.value for r in candidate.looking_for)
    if candidate.body_type != BodyType.UNKNOWN:
        tags.add(candidate.body_type.value)
    if candidate.education is not None:
        tags.add(candidate.education.value)
        if education_level(candidate.education) >= GOOD_EDUCATION_LEVEL:
            tags.add("good_education")
    if candidate.lifestyle.diet != Diet.UNKNOWN:
        tags.add(candidate.lifestyle.diet.value)
    if candidate.occupation:
        tags.add(normalize_item(candidate.occupation))

    for key, value in candidate.lifestyle.to_dict().items():
        if value != "unknown":
            tags.add(f"{key}:{value}")

    if candidate.is_verified:
        tags.add("verified")
    if candidate.photo_count > 0:
        tags.add("has_photos")
    if candidate.lifestyle.smoking == Smoking.NEVER:
        tags.add("non_smoker")
    if candidate.lifestyle.drinking == Drinking.NEVER:
        tags.add("non_drinker")
    if candidate.lifestyle.exercise in (Exercise.REGULARLY, Exercise.DAILY):
        tags.add("fitness_oriented")
    if now is not None:
        days = candidate.days_since_active(now)
        if days is not None and days <= ACTIVE_WITHIN_DAYS:
            tags.add("active")
    if seeker is not None and seeker.interests & candidate.interests:
        tags.add("same_interests")
    if distance_km is not None and distance_km <= LOCAL_RESIDENT_KM:
        tags.add("local_resident")

    return frozenset(tags)


@dataclass
class SoftPreferenceAnalysis:
    """Outcome of checking must-haves or nice-to-haves against a candidate."""
    total: int = 0
    matched_items: List[str] = field(default_factory=list)
    missed_items: List[str] = field(default_factory=list)

    @property
    def matched(self) -> int:
        return len(self.matched_items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "matched": self.matched,
            "matched_items": list(self.matched_items),
            "missed_items": list(self.missed_items),
        }


def analyze_soft_preferences(items: Iterable[str], tags: FrozenSet[str]) -> SoftPreferenceAnalysis:
    """Split items into those contained in tags and those missed, keeping input order."""
    analysis = SoftPreferenceAnalysis()
    for item in dict.fromkeys(items):
        analysis.total += 1
        if normalize_item(item) in tags:
            analysis.matched_items.append(item)
        else:
            analysis.missed_items.append(item)
    return analysis


@dataclass
class PreferenceLabels:
    """Human-readable preference labels grouped by category."""
    physical: List[str] = field(default_factory=list)
    lifestyle: List[str] = field(default_factory=list)
    social: List[str] = field(default_factory=list)
    relationship: List[str] = field(default_factory=list)

    def flattened(self) -> List[str]:
        """All labels in canonical category order."""
        return [label for name in CATEGORIES for label in getattr(self, name)]

    def to_dict(self) -> Dict[str, List[str]]:
        return {name: list(getattr(self, name)) for name in CATEGORIES}


def _label(value: str) -> str:
    return value.replace("_", " ")


def _physical_labels(seeker: Profile, candidate: Profile, matched: PreferenceLabels, mismatched: PreferenceLabels):
    prefs = seeker.preferences
    if prefs is None:
        return

    if prefs.body_types and candidate.body_type != BodyType.UNKNOWN:
        target = matched if candidate.body_type in prefs.body_types else mismatched
        target.physical.append(f"Body type: {_label(candidate.body_type.value)}")

    if prefs.height_range is not None and candidate.height_cm is not None:
        if prefs.height_range.contains(candidate.height_cm):
            matched.physical.append("Height within preferred range")
        else:
            mismatched.physical.append("Height outside preferred range")

    if prefs.age_range is not None:
        if prefs.age_range.contains(candidate.age):
            matched.physical.append("Age within preferred range")
        else:
            mismatched.physical.append("Age outside preferred range")


def _lifestyle_labels(seeker: Profile, candidate: Profile, matched: PreferenceLabels, mismatched: PreferenceLabels):
    for habit, seeker_value in seeker.lifestyle.to_dict().items():
        candidate_value = candidate.lifestyle.to_dict()[habit]
        if "unknown" in (seeker_value, candidate_value):
            continue
        if seeker_value == candidate_value:
            matched.lifestyle.append(f"Same {habit} habits")
        else:
            mismatched.lifestyle.append(f"Different {habit} habits")


def _social_labels(seeker: Profile, candidate: Profile, matched: PreferenceLabels, mismatched: PreferenceLabels):
    prefs = seeker.preferences
    if prefs is not None and prefs.education and candidate.education is not None:
        target = matched if candidate.education in prefs.education else mismatched
        target.social.append(f"Education: {_label(candidate.education.value)}")

    if seeker.interests and candidate.interests:
        shared = sorted(seeker.interests & candidate.interests)
        if shared:
            matched.social.append(f"Shared interests: {', '.join(shared)}")
        else:
            mismatched.social.append("No shared interests")

    if seeker.languages and candidate.languages:
        shared = sorted(seeker.languages & candidate.languages)
        if shared:
            matched.social.append(f"Speaks {', '.join(shared)}")
        else:
            mismatched.social.append("No shared languages")


def _relationship_labels(seeker: Profile, candidate: Profile, matched: PreferenceLabels, mismatched: PreferenceLabels):
    if seeker.looking_for and candidate.looking_for:
        shared = sorted(r.value for r in seeker.looking_for & candidate.looking_for)
        if shared:
            matched.relationship.append(f"Both looking for {', '.join(_label(s) for s in shared)}")
        else:
            mismatched.relationship.append("Looking for different relationships")

    prefs = seeker.preferences
    if prefs is not None and prefs.sexual_orientations:
        target = matched if candidate.sexual_orientation in prefs.sexual_orientations else mismatched
        target.relationship.append(f"Orientation: {_label(candidate.sexual_orientation.value)}")


@dataclass
class PreferenceAlignment:
    """Matched/mismatched labels plus must-have and nice-to-have analyses."""
    matched: PreferenceLabels
    mismatched: PreferenceLabels
    must_haves: SoftPreferenceAnalysis
    nice_to_haves: SoftPreferenceAnalysis

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matched_preferences": self.matched.to_dict(),
            "mismatched_preferences": self.mismatched.to_dict(),
            "must_have_analysis": self.must_haves.to_dict(),
            "nice_to_have_analysis": self.nice_to_haves.to_dict(),
        }


def align_preferences(
    seeker: Profile,
    candidate: Profile,
    must_haves: Iterable[str] = (),
    nice_to_haves: Iterable[str] = (),
    distance_km: Optional[float] = None,
    now: Optional[datetime] = None
) -> PreferenceAlignment:
    """
    Compute preference alignment for one (seeker, candidate) pair.

    Args:
        seeker: The seeker's profile
        candidate: The candidate's profile
        must_haves: Required soft preferences
        nice_to_haves: Optional soft preferences
        distance_km: Distance between the two, if known
        now: Reference time for activity-derived tags

    Returns:
        PreferenceAlignment
    """
    matched = PreferenceLabels()
    mismatched = PreferenceLabels()
    _physical_labels(seeker, candidate, matched, mismatched)
    _lifestyle_labels(seeker, candidate, matched, mismatched)
    _social_labels(seeker, candidate, matched, mismatched)
    _relationship_labels(seeker, candidate, matched, mismatched)

    tags = profile_tags(candidate, seeker=seeker, distance_km=distance_km, now=now)
    return PreferenceAlignment(
        matched=matched,
        mismatched=mismatched,
        must_haves=analyze_soft_preferences(must_haves, tags),
        nice_to_haves=analyze_soft_preferences(nice_to_haves, tags),
    )
