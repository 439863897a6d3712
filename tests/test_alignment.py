"""Tests for preference labels and must-have / nice-to-have analysis."""

from datetime import timedelta

from conftest import NOW, build_preferences
from preference_engine.alignment import (
    align_preferences,
    analyze_soft_preferences,
    normalize_item,
    profile_tags,
)


def test_normalize_item():
    assert normalize_item("  Good Education ") == "good_education"
    assert normalize_item("non-smoker") == "non_smoker"
    assert normalize_item("hiking") == "hiking"


class TestProfileTags:

    def test_basic_tags(self, candidate):
        tags = profile_tags(candidate)
        assert {"hiking", "reading", "english", "serious", "athletic", "bachelors", "omnivore",
                "engineer", "verified", "has_photos", "non_smoker", "smoking:never"} <= tags

    def test_derived_tags(self, seeker, candidate):
        tags = profile_tags(candidate, seeker=seeker, distance_km=3.0, now=NOW)
        assert {"good_education", "fitness_oriented", "active", "same_interests", "local_resident"} <= tags

    def test_context_tags_need_context(self, candidate):
        tags = profile_tags(candidate)
        assert "active" not in tags
        assert "same_interests" not in tags
        assert "local_resident" not in tags

    def test_inactive_far_candidate(self, make_profile, seeker):
        candidate = make_profile("a", last_active_at=NOW - timedelta(days=10), education="high_school",
                                 interests=["gaming"], lifestyle={"exercise": "rarely"})
        tags = profile_tags(candidate, seeker=seeker, distance_km=30.0, now=NOW)
        assert not tags & {"active", "local_resident", "same_interests", "good_education", "fitness_oriented"}


def test_soft_preferences_keep_order_and_dedupe():
    analysis = analyze_soft_preferences(
        ["Hiking", "verified", "gaming", "Hiking"], frozenset({"hiking", "verified"})
    )
    assert analysis.total == 3
    assert analysis.matched_items == ["Hiking", "verified"]
    assert analysis.missed_items == ["gaming"]
    assert analysis.matched == 2
    assert analysis.to_dict()["matched"] == 2


class TestAlignPreferences:

    def test_matched_labels(self, make_profile):
        seeker = make_profile(
            "seeker",
            preferences=build_preferences(body_types=["athletic"], height_range={"min": 160, "max": 185},
                                          education=["bachelors"]),
        )
        alignment = align_preferences(seeker, make_profile("a"))

        assert alignment.matched.physical == [
            "Body type: athletic", "Height within preferred range", "Age within preferred range",
        ]
        assert "Same smoking habits" in alignment.matched.lifestyle
        assert alignment.matched.social == ["Education: bachelors", "Shared interests: hiking, reading",
                                            "Speaks english"]
        assert alignment.matched.relationship == ["Both looking for serious", "Orientation: straight"]
        assert alignment.mismatched.flattened() == []

    def test_mismatched_labels(self, make_profile):
        seeker = make_profile("seeker", preferences=build_preferences(body_types=["slim"]))
        candidate = make_profile("a", body_type="curvy", age=50, interests=["gaming"], languages=["french"],
                                 looking_for=["casual"], lifestyle={"smoking": "regularly"})
        alignment = align_preferences(seeker, candidate)

        assert "Body type: curvy" in alignment.mismatched.physical
        assert "Age outside preferred range" in alignment.mismatched.physical
        assert "Different smoking habits" in alignment.mismatched.lifestyle
        assert "No shared interests" in alignment.mismatched.social
        assert "No shared languages" in alignment.mismatched.social
        assert alignment.mismatched.relationship == ["Looking for different relationships"]

    def test_unknown_habits_produce_no_labels(self, make_profile):
        alignment = align_preferences(make_profile("seeker"), make_profile("a", lifestyle={}))
        assert alignment.matched.lifestyle == []
        assert alignment.mismatched.lifestyle == []

    def test_must_and_nice_to_haves(self, seeker, make_profile):
        candidate = make_profile("a", is_verified=False)
        alignment = align_preferences(
            seeker, candidate,
            must_haves=["fitness_oriented", "verified"],
            nice_to_haves=["same_interests", "local_resident", "Good Education"],
            distance_km=2.0, now=NOW,
        )
        assert alignment.must_haves.matched_items == ["fitness_oriented"]
        assert alignment.must_haves.missed_items == ["verified"]
        assert alignment.nice_to_haves.matched == 3

    def test_deterministic(self, seeker, candidate):
        first = align_preferences(seeker, candidate, ["active"], ["hiking"], distance_km=1.0, now=NOW)
        second = align_preferences(seeker, candidate, ["active"], ["hiking"], distance_km=1.0, now=NOW)
        assert first.to_dict() == second.to_dict()
