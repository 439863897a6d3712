"""Shared fixtures: profile and criteria factories with a fixed reference time."""

from datetime import datetime, timedelta, timezone

import pytest

from preference_engine.configs import FilteringConfig, MatchingConfig
from preference_engine.matching import MatchOrchestrator
from preference_engine.profiles import (
    AdvancedMatchingCriteria,
    MatchingPreferences,
    MinimumThresholds,
    Profile,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
LONDON = {"latitude": 51.5074, "longitude": -0.1278}
PARIS = {"latitude": 48.8566, "longitude": 2.3522}


def build_profile(profile_id="candidate", **overrides) -> Profile:
    """A fully populated profile; every attribute can be overridden."""
    data = dict(
        profile_id=profile_id,
        age=30,
        height_cm=175,
        body_type="athletic",
        photo_count=3,
        lifestyle={
            "smoking": "never",
            "drinking": "socially",
            "drugs": "never",
            "exercise": "regularly",
            "diet": "omnivore",
        },
        education="bachelors",
        occupation="engineer",
        interests=["hiking", "reading"],
        languages=["english"],
        looking_for=["serious"],
        sexual_orientation="straight",
        is_verified=True,
        last_active_at=NOW - timedelta(hours=2),
        created_at=NOW - timedelta(days=90),
        location=LONDON,
        bio="Weekend hiker and avid reader looking for something serious.",
        completeness=80.0,
    )
    data.update(overrides)
    return Profile(**data)


def build_preferences(**overrides) -> MatchingPreferences:
    data = dict(
        age_range={"min": 25, "max": 35},
        max_distance_km=50.0,
        sexual_orientations=["straight"],
        relationship_types=["serious"],
    )
    data.update(overrides)
    return MatchingPreferences(**data)


def build_criteria(seeker_id="seeker", **overrides) -> AdvancedMatchingCriteria:
    """Valid criteria that let every default candidate through the gate."""
    data = dict(
        seeker_id=seeker_id,
        preferences=build_preferences(),
        thresholds=MinimumThresholds(overall=0.0),
    )
    data.update(overrides)
    return AdvancedMatchingCriteria(**data)


@pytest.fixture
def make_profile():
    return build_profile


@pytest.fixture
def make_preferences():
    return build_preferences


@pytest.fixture
def make_criteria():
    return build_criteria


@pytest.fixture
def seeker():
    return build_profile("seeker")


@pytest.fixture
def candidate():
    return build_profile("candidate")


@pytest.fixture
def make_orchestrator():
    """Orchestrator factory with a frozen clock; keyword args go to MatchingConfig."""
    def factory(filtering_config=None, clock=lambda: NOW, **matching_overrides):
        return MatchOrchestrator(
            filtering_config=filtering_config or FilteringConfig(),
            matching_config=MatchingConfig(**matching_overrides),
            clock=clock,
        )
    return factory
