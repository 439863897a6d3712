"""Synthetic profiles for demonstrations and smoke tests when no real pool is available."""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import numpy as np

from ..profiles.schema import (
    BodyType,
    Diet,
    Drinking,
    Drugs,
    Education,
    Exercise,
    Profile,
    RelationshipType,
    SexualOrientation,
    Smoking,
)

logger = logging.getLogger(__name__)

INTERESTS = ["hiking", "reading", "music", "movies", "travel", "cooking",
             "gaming", "art", "sports", "photography"]
LANGUAGES = ["english", "spanish", "french", "german"]
OCCUPATIONS = ["engineer", "nurse", "teacher", "designer", "analyst", "chef"]

# Around central London
CENTER_LATITUDE = 51.5074
CENTER_LONGITUDE = -0.1278


def _members(enum_cls, exclude=("unknown", "other")) -> List:
    return [m for m in enum_cls if m.value not in exclude]


def create_synthetic_profiles(
    n_profiles: int = 200,
    random_seed: int = 42,
    now: Optional[datetime] = None,
    id_prefix: str = "user"
) -> List[Profile]:
    """
    Create a reproducible pool of synthetic profiles.

    Args:
        n_profiles: Number of profiles
        random_seed: Seed for np.random.RandomState
        now: Reference time for activity timestamps
        id_prefix: Prefix for generated profile ids

    Returns:
        List of Profile
    """
    rng = np.random.RandomState(random_seed)
    now = now or datetime.now(timezone.utc)

    body_types = _members(BodyType)
    orientations = [SexualOrientation.STRAIGHT, SexualOrientation.GAY, SexualOrientation.BISEXUAL]
    relationship_types = [RelationshipType.CASUAL, RelationshipType.SERIOUS, RelationshipType.LONG_TERM]
    educations = _members(Education)

    profiles = []
    for i in range(n_profiles):
        interests = rng.choice(INTERESTS, size=rng.randint(2, 6), replace=False)
        languages = rng.choice(LANGUAGES, size=rng.randint(1, 3), replace=False)
        looking_for = rng.choice([r.value for r in relationship_types], size=rng.randint(1, 3), replace=False)

        profiles.append(Profile(
            profile_id=f"{id_prefix}_{i:04d}",
            age=int(rng.randint(18, 60)),
            height_cm=int(rng.normal(170, 10)),
            body_type=body_types[rng.randint(len(body_types))],
            photo_count=int(rng.randint(0, 7)),
            lifestyle={
                "smoking": rng.choice([m.value for m in _members(Smoking)]),
                "drinking": rng.choice([m.value for m in _members(Drinking)]),
                "drugs": rng.choice([m.value for m in _members(Drugs)], p=[0.8, 0.15, 0.05]),
                "exercise": rng.choice([m.value for m in _members(Exercise)]),
                "diet": rng.choice([m.value for m in _members(Diet)]),
            },
            education=educations[rng.randint(len(educations))],
            occupation=str(rng.choice(OCCUPATIONS)),
            interests=list(interests),
            languages=list(languages),
            looking_for=[str(r) for r in looking_for],
            sexual_orientation=orientations[rng.randint(len(orientations))],
            is_verified=bool(rng.rand() < 0.6),
            last_active_at=now - timedelta(hours=float(rng.exponential(72))),
            created_at=now - timedelta(days=float(rng.uniform(0.5, 365))),
            location={
                "latitude": CENTER_LATITUDE + float(rng.uniform(-0.3, 0.3)),
                "longitude": CENTER_LONGITUDE + float(rng.uniform(-0.4, 0.4)),
            },
            bio="I enjoy " + ", ".join(interests) + ". Looking for someone who shares my interests.",
            completeness=float(rng.uniform(40, 100)),
            is_premium=bool(rng.rand() < 0.2),
        ))

    logger.info(f"Created synthetic profile pool: {n_profiles} profiles")
    return profiles
