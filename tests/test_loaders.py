"""Tests for profile and criteria loading."""

import json

import pandas as pd
import pytest
import yaml

from preference_engine.data_loading import (
    create_synthetic_profiles,
    load_criteria,
    load_profile,
    load_profiles,
)
from preference_engine.profiles import Drinking, Exercise, RelationshipType, SortBy

RECORD = {
    "profile_id": "u1",
    "age": 29,
    "height_cm": 170,
    "body_type": "Athletic",
    "photos": ["a.jpg", "b.jpg"],
    "lifestyle": {"smoking": "never", "exercise": "weekly"},
    "interests": ["Hiking", "music"],
    "looking_for": ["serious", "not_a_type"],
    "sexual_orientation": "straight",
    "verification": {"is_verified": True, "score": 0.9},
    "last_active_at": "2024-06-01T10:00:00Z",
    "location": {"latitude": 51.5, "longitude": -0.1},
    "preferences": {"age_range": {"min": 25, "max": 35}, "max_distance": 30, "deal_breakers": ["Smoking"]},
}


def test_load_yaml_list(tmp_path):
    path = tmp_path / "pool.yaml"
    path.write_text(yaml.safe_dump([RECORD, dict(RECORD, profile_id="u2")]))
    profiles = load_profiles(str(path))

    assert [p.profile_id for p in profiles] == ["u1", "u2"]
    profile = profiles[0]
    assert profile.photo_count == 2
    assert profile.lifestyle.exercise == Exercise.REGULARLY
    assert profile.lifestyle.drinking == Drinking.UNKNOWN
    assert profile.interests == frozenset({"hiking", "music"})
    assert profile.looking_for == frozenset({RelationshipType.SERIOUS})
    assert profile.is_verified is True
    assert profile.verification_score == 0.9
    assert profile.preferences.max_distance_km == 30.0
    assert profile.preferences.deal_breakers == frozenset({"smoking"})


def test_load_json_mapping(tmp_path):
    path = tmp_path / "pool.json"
    path.write_text(json.dumps({"profiles": [RECORD]}))
    assert [p.profile_id for p in load_profiles(str(path))] == ["u1"]


def test_load_single_profile(tmp_path):
    path = tmp_path / "seeker.yaml"
    path.write_text(yaml.safe_dump(RECORD))
    assert load_profile(str(path)).profile_id == "u1"


def test_load_profile_requires_exactly_one(tmp_path):
    path = tmp_path / "pool.yaml"
    path.write_text(yaml.safe_dump([RECORD, RECORD]))
    with pytest.raises(ValueError):
        load_profile(str(path))


def test_load_csv(tmp_path):
    path = tmp_path / "pool.csv"
    pd.DataFrame([
        {"profile_id": "c1", "age": 31, "smoking": "never", "drinking": "socially",
         "interests": "hiking|reading", "languages": "english", "looking_for": "serious|long_term",
         "latitude": 51.5, "longitude": -0.12, "photo_count": 3, "completeness": 75.0},
        {"profile_id": "c2", "age": 27, "smoking": None, "drinking": None,
         "interests": None, "languages": "french", "looking_for": "casual",
         "latitude": None, "longitude": None, "photo_count": None, "completeness": None},
    ]).to_csv(path, index=False)

    first, second = load_profiles(str(path))

    assert first.interests == frozenset({"hiking", "reading"})
    assert first.location.latitude == 51.5
    assert first.photo_count == 3
    assert second.location is None
    assert second.interests == frozenset()
    assert second.photo_count == 0
    assert second.completeness == 0.0


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_profiles(str(tmp_path / "nope.yaml"))
    with pytest.raises(FileNotFoundError):
        load_profiles(str(tmp_path / "nope.csv"))


def test_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    with pytest.raises(ValueError):
        load_profiles(str(path))


def test_load_criteria(tmp_path):
    path = tmp_path / "criteria.yaml"
    path.write_text(yaml.safe_dump({
        "seeker_id": "u1",
        "preferences": {"age_range": {"min": 25, "max": 35}, "max_distance_km": 30,
                        "sexual_orientations": ["straight"], "relationship_types": ["serious"]},
        "weights": {"physical": 0.6, "lifestyle": 0.2, "social": 0.1, "relationship": 0.1},
        "thresholds": {"overall": 0.5, "social": 0.3},
        "deal_breakers": ["smoking"],
        "must_haves": ["verified"],
        "sort": {"by": "distance", "direction": "asc"},
    }))
    criteria = load_criteria(str(path))

    assert criteria.seeker_id == "u1"
    assert criteria.weights.physical == 0.6
    assert criteria.thresholds.social == 0.3
    assert criteria.thresholds.physical is None
    assert criteria.must_haves == ("verified",)
    assert criteria.sort.by == SortBy.DISTANCE
    assert criteria.enable_advanced_filtering is True


def test_synthetic_profiles_are_reproducible():
    first = create_synthetic_profiles(n_profiles=20, random_seed=7)
    second = create_synthetic_profiles(n_profiles=20, random_seed=7)
    assert [p.to_dict() for p in first][0]["lifestyle"] == [p.to_dict() for p in second][0]["lifestyle"]
    assert [p.profile_id for p in first] == [f"user_{i:04d}" for i in range(20)]
    assert all(18 <= p.age < 60 for p in first)
