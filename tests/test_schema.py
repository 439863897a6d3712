"""Tests for profile and criteria value objects."""

from datetime import datetime, timezone

import pytest

from preference_engine.profiles import (
    AdvancedMatchingCriteria,
    BodyType,
    CategoryWeights,
    Education,
    Exercise,
    MatchingPreferences,
    MinimumThresholds,
    Profile,
    RelationshipType,
    SexualOrientation,
    Smoking,
    SortBy,
    SortDirection,
)
from preference_engine.profiles.schema import education_level


class TestProfileCoercion:

    def test_minimal_profile_defaults(self):
        profile = Profile(profile_id="u1", age=30)
        assert profile.body_type == BodyType.UNKNOWN
        assert profile.lifestyle.smoking == Smoking.UNKNOWN
        assert profile.education is None
        assert profile.sexual_orientation == SexualOrientation.OTHER
        assert profile.interests == frozenset()
        assert profile.location is None
        assert profile.days_since_active(datetime.now(timezone.utc)) is None

    def test_raw_values_are_coerced(self):
        profile = Profile(
            profile_id="u1",
            age=30,
            body_type="Plus Size",
            lifestyle={"exercise": "weekly"},
            education="phd_law_md",
            interests=[" Hiking ", "hiking", ""],
            looking_for="long-term",
            last_active_at="2024-06-01T10:00:00",
            location={"latitude": 10, "longitude": 20},
        )
        assert profile.body_type == BodyType.PLUS_SIZE
        assert profile.lifestyle.exercise == Exercise.REGULARLY
        assert profile.education == Education.PHD
        assert profile.interests == frozenset({"hiking"})
        assert profile.looking_for == frozenset({RelationshipType.LONG_TERM})
        assert profile.last_active_at.tzinfo is not None
        assert profile.location.latitude == 10.0

    def test_unrecognised_education_is_other(self):
        assert Profile(profile_id="u1", age=30, education="clown college").education == Education.OTHER
        assert education_level(Education.OTHER) == 2
        assert education_level(Education.MASTERS) == 4

    def test_non_positive_height_is_missing(self):
        assert Profile(profile_id="u1", age=30, height_cm=0).height_cm is None

    @pytest.mark.parametrize("kwargs", [
        {"profile_id": "", "age": 30},
        {"profile_id": "u1", "age": -1},
        {"profile_id": "u1", "age": True},
        {"profile_id": "u1", "age": 30, "photo_count": -2},
        {"profile_id": "u1", "age": 30, "location": {"latitude": 95, "longitude": 0}},
    ])
    def test_invalid_profiles(self, kwargs):
        with pytest.raises(ValueError):
            Profile(**kwargs)

    def test_dict_round_trip(self, make_profile):
        profile = make_profile("u1", preferences=MatchingPreferences(age_range={"min": 20, "max": 30}))
        assert Profile.from_dict(profile.to_dict()) == profile


class TestCategoryWeights:

    def test_normalized_sums_to_one(self):
        weights = CategoryWeights(2, 1, 1, 0).normalized()
        assert weights.physical == pytest.approx(0.5)
        assert sum(weights.as_dict().values()) == pytest.approx(1.0)

    def test_negative_and_nan_clamped(self):
        weights = CategoryWeights(-1, float("nan"), 1, 1).normalized()
        assert weights.physical == 0.0
        assert weights.lifestyle == 0.0
        assert weights.social == pytest.approx(0.5)

    def test_all_zero_uses_equal_split(self):
        assert CategoryWeights(0, 0, 0, 0).normalized() == CategoryWeights(0.25, 0.25, 0.25, 0.25)


class TestMinimumThresholds:

    def test_clamped(self):
        thresholds = MinimumThresholds(overall=1.4, physical=-0.2, social=float("nan")).clamped()
        assert thresholds.overall == 1.0
        assert thresholds.physical == 0.0
        assert thresholds.social is None
        assert thresholds.lifestyle is None

    def test_from_dict_defaults(self):
        thresholds = MinimumThresholds.from_dict(None)
        assert thresholds.overall == 0.6
        assert all(v is None for v in thresholds.category_thresholds().values())


class TestCriteria:

    def test_from_dict_nested(self):
        criteria = AdvancedMatchingCriteria.from_dict({
            "seeker_id": 42,
            "deal_breakers": ["Smoking", " drugs "],
            "sort": {"by": "ACTIVITY", "direction": "asc"},
            "filters": {"has_photos": True, "exclude_profile_ids": [1, 2]},
        })
        assert criteria.seeker_id == "42"
        assert criteria.deal_breakers == frozenset({"smoking", "drugs"})
        assert criteria.sort.by == SortBy.ACTIVITY
        assert criteria.sort.direction == SortDirection.ASC
        assert criteria.filters.exclude_profile_ids == frozenset({"1", "2"})

    def test_unknown_sort_falls_back(self):
        criteria = AdvancedMatchingCriteria(seeker_id="s", sort={"by": "luck"})
        assert criteria.sort.by == SortBy.COMPATIBILITY
        assert criteria.sort.direction == SortDirection.DESC

    def test_preferences_drop_unknown_body_type(self):
        preferences = MatchingPreferences(body_types=["athletic", "unknown", "nonsense"])
        assert preferences.body_types == frozenset({BodyType.ATHLETIC})
