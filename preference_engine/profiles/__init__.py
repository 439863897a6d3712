"""Profile and preference value objects consumed by the engine."""

from .schema import (
    AdvancedMatchingCriteria,
    AgeRange,
    BodyType,
    CategoryWeights,
    Diet,
    Drinking,
    Drugs,
    Education,
    Exercise,
    GeoPoint,
    HeightRange,
    Lifestyle,
    MatchingPreferences,
    MinimumThresholds,
    Profile,
    RelationshipType,
    SearchFilters,
    SexualOrientation,
    Smoking,
    SortBy,
    SortDirection,
    SortSpec,
    education_level,
    profiles_from_records,
)

__all__ = [
    "AdvancedMatchingCriteria",
    "AgeRange",
    "BodyType",
    "CategoryWeights",
    "Diet",
    "Drinking",
    "Drugs",
    "Education",
    "Exercise",
    "GeoPoint",
    "HeightRange",
    "Lifestyle",
    "MatchingPreferences",
    "MinimumThresholds",
    "Profile",
    "RelationshipType",
    "SearchFilters",
    "SexualOrientation",
    "Smoking",
    "SortBy",
    "SortDirection",
    "SortSpec",
    "education_level",
    "profiles_from_records",
]
