"""
Value objects for seekers, candidates and their matching preferences.

Profiles are immutable snapshots supplied by the external profile store for
the duration of one scoring pass. Every optional attribute is modeled
explicitly: categorical fields fall back to an UNKNOWN (or OTHER) member,
numeric fields to None, and collections to an empty frozenset.

Raw inputs (strings, lists, ISO timestamps) are accepted by the constructors
and coerced in __post_init__, so both of these produce the same profile:

    Profile(profile_id="u1", age=30, body_type="athletic")
    Profile.from_dict({"profile_id": "u1", "age": 30, "body_type": "athletic"})
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Dict, Any, List, FrozenSet, Iterable, Tuple, Type

logger = logging.getLogger(__name__)


class SexualOrientation(Enum):
    """Sexual orientation options."""
    STRAIGHT = "straight"
    GAY = "gay"
    LESBIAN = "lesbian"
    BISEXUAL = "bisexual"
    PANSEXUAL = "pansexual"
    QUEER = "queer"
    QUESTIONING = "questioning"
    OTHER = "other"


class RelationshipType(Enum):
    """Relationship types a profile can be looking for."""
    CASUAL = "casual"
    HOOKUP = "hookup"
    FRIENDS_WITH_BENEFITS = "friends_with_benefits"
    SHORT_TERM = "short_term"
    SERIOUS = "serious"
    LONG_TERM = "long_term"
    OPEN_RELATIONSHIP = "open_relationship"
    POLYAMOROUS = "polyamorous"


class BodyType(Enum):
    """Body type options."""
    SLIM = "slim"
    AVERAGE = "average"
    ATHLETIC = "athletic"
    CURVY = "curvy"
    PLUS_SIZE = "plus_size"
    MUSCULAR = "muscular"
    UNKNOWN = "unknown"


class Smoking(Enum):
    """Smoking habit, ordered from least to most."""
    NEVER = "never"
    SOCIALLY = "socially"
    REGULARLY = "regularly"
    UNKNOWN = "unknown"


class Drinking(Enum):
    """Drinking habit, ordered from least to most."""
    NEVER = "never"
    RARELY = "rarely"
    SOCIALLY = "socially"
    REGULARLY = "regularly"
    FREQUENTLY = "frequently"
    UNKNOWN = "unknown"


class Drugs(Enum):
    """Drug use, ordered from least to most."""
    NEVER = "never"
    OCCASIONALLY = "occasionally"
    REGULARLY = "regularly"
    UNKNOWN = "unknown"


class Exercise(Enum):
    """Exercise frequency, ordered from least to most."""
    NEVER = "never"
    RARELY = "rarely"
    SOMETIMES = "sometimes"
    REGULARLY = "regularly"
    DAILY = "daily"
    UNKNOWN = "unknown"


class Diet(Enum):
    """Diet options (unordered)."""
    OMNIVORE = "omnivore"
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    PESCATARIAN = "pescatarian"
    KETO = "keto"
    PALEO = "paleo"
    UNKNOWN = "unknown"


class Education(Enum):
    """Highest education level. OTHER covers unrecognised values."""
    HIGH_SCHOOL = "high_school"
    SOME_COLLEGE = "some_college"
    TRADE_SCHOOL = "trade_school"
    ASSOCIATE = "associate"
    BACHELORS = "bachelors"
    MASTERS = "masters"
    PHD = "phd"
    OTHER = "other"


class SortBy(Enum):
    """Ranking keys for discovery results."""
    COMPATIBILITY = "compatibility"
    DISTANCE = "distance"
    ACTIVITY = "activity"
    VERIFICATION = "verification"
    RANDOM = "random"


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


# Numeric education scale shared by the education deal-breaker and scorer
EDUCATION_LEVELS: Dict[Education, int] = {
    Education.HIGH_SCHOOL: 1,
    Education.SOME_COLLEGE: 2,
    Education.TRADE_SCHOOL: 2,
    Education.ASSOCIATE: 2,
    Education.BACHELORS: 3,
    Education.MASTERS: 4,
    Education.PHD: 5,
}

# Input aliases accepted for enum fields
_ALIASES: Dict[Type[Enum], Dict[str, str]] = {
    Exercise: {"weekly": "regularly"},
    Education: {"phd_law_md": "phd", "two_year_college": "associate"},
}


def education_level(education: Optional[Education]) -> int:
    """Map an education value onto the 1-5 scale (unknown values rank 2)."""
    return EDUCATION_LEVELS.get(education, 2)


def _coerce_enum(enum_cls: Type[Enum], value: Any, default: Optional[Enum]) -> Optional[Enum]:
    """Convert a raw value to enum_cls, falling back to default when unrecognised."""
    if value is None or value == "":
        return default
    if isinstance(value, enum_cls):
        return value
    key = str(value).strip().lower().replace(" ", "_").replace("-", "_")
    key = _ALIASES.get(enum_cls, {}).get(key, key)
    try:
        return enum_cls(key)
    except ValueError:
        logger.debug(f"Unrecognised {enum_cls.__name__} value {value!r}, using {default}")
        return default


def _coerce_enum_set(enum_cls: Type[Enum], values: Optional[Iterable[Any]]) -> FrozenSet:
    """Convert an iterable of raw values to a frozenset of enum members, dropping unknowns."""
    if not values:
        return frozenset()
    if isinstance(values, (str, Enum)):
        values = [values]
    members = (_coerce_enum(enum_cls, v, None) for v in values)
    return frozenset(m for m in members if m is not None)


def _normalize_tags(values: Optional[Iterable[Any]]) -> FrozenSet[str]:
    """Lower-case, strip and de-duplicate free-text tags."""
    if not values:
        return frozenset()
    if isinstance(values, str):
        values = [values]
    return frozenset(str(v).strip().lower() for v in values if str(v).strip())


def _coerce_datetime(value: Any) -> Optional[datetime]:
    """Parse ISO-8601 strings; naive datetimes are treated as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if not isinstance(value, datetime):
        raise ValueError(f"Expected datetime or ISO string, got {type(value)}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _coerce_optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    result = float(value)
    return None if math.isnan(result) else result


def _set(obj: Any, name: str, value: Any) -> None:
    object.__setattr__(obj, name, value)


@dataclass(frozen=True)
class GeoPoint:
    """A (latitude, longitude) pair in decimal degrees."""
    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude must be in [-90, 90], got {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude must be in [-180, 180], got {self.longitude}")

    def to_dict(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> Optional["GeoPoint"]:
        if not d:
            return None
        return cls(latitude=float(d["latitude"]), longitude=float(d["longitude"]))


@dataclass(frozen=True)
class Lifestyle:
    """
    Lifestyle habits of a profile.

    Every attribute defaults to its UNKNOWN member; strings are coerced.
    """
    smoking: Smoking = Smoking.UNKNOWN
    drinking: Drinking = Drinking.UNKNOWN
    drugs: Drugs = Drugs.UNKNOWN
    exercise: Exercise = Exercise.UNKNOWN
    diet: Diet = Diet.UNKNOWN

    def __post_init__(self):
        _set(self, "smoking", _coerce_enum(Smoking, self.smoking, Smoking.UNKNOWN))
        _set(self, "drinking", _coerce_enum(Drinking, self.drinking, Drinking.UNKNOWN))
        _set(self, "drugs", _coerce_enum(Drugs, self.drugs, Drugs.UNKNOWN))
        _set(self, "exercise", _coerce_enum(Exercise, self.exercise, Exercise.UNKNOWN))
        _set(self, "diet", _coerce_enum(Diet, self.diet, Diet.UNKNOWN))

    def to_dict(self) -> Dict[str, str]:
        return {
            "smoking": self.smoking.value,
            "drinking": self.drinking.value,
            "drugs": self.drugs.value,
            "exercise": self.exercise.value,
            "diet": self.diet.value,
        }

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "Lifestyle":
        d = d or {}
        return cls(
            smoking=d.get("smoking"),
            drinking=d.get("drinking"),
            drugs=d.get("drugs"),
            exercise=d.get("exercise"),
            diet=d.get("diet"),
        )


@dataclass(frozen=True)
class AgeRange:
    """Inclusive age range."""
    min: int
    max: int

    def contains(self, age: int) -> bool:
        return self.min <= age <= self.max

    def to_dict(self) -> Dict[str, int]:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class HeightRange:
    """Inclusive height range in cm."""
    min: int
    max: int

    def contains(self, height_cm: int) -> bool:
        return self.min <= height_cm <= self.max

    def to_dict(self) -> Dict[str, int]:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class MatchingPreferences:
    """
    Seeker-owned matching preferences.

    Attributes:
        age_range: Preferred candidate age range (None means no explicit range)
        max_distance_km: Maximum search radius in km
        sexual_orientations: Accepted candidate orientations (empty accepts all)
        relationship_types: Accepted relationship types
        body_types: Preferred body types (empty means no preference)
        height_range: Preferred height range (optional)
        education: Accepted education levels (empty means no preference)
        deal_breakers: Deal-breaker ids (capped at 10 by validation)
    """
    age_range: Optional[AgeRange] = None
    max_distance_km: float = 25.0
    sexual_orientations: FrozenSet[SexualOrientation] = frozenset()
    relationship_types: FrozenSet[RelationshipType] = frozenset()
    body_types: FrozenSet[BodyType] = frozenset()
    height_range: Optional[HeightRange] = None
    education: FrozenSet[Education] = frozenset()
    deal_breakers: FrozenSet[str] = frozenset()

    def __post_init__(self):
        if isinstance(self.age_range, dict):
            _set(self, "age_range", AgeRange(int(self.age_range["min"]), int(self.age_range["max"])))
        if isinstance(self.height_range, dict):
            _set(self, "height_range", HeightRange(int(self.height_range["min"]), int(self.height_range["max"])))
        _set(self, "sexual_orientations", _coerce_enum_set(SexualOrientation, self.sexual_orientations))
        _set(self, "relationship_types", _coerce_enum_set(RelationshipType, self.relationship_types))
        _set(self, "body_types", _coerce_enum_set(BodyType, self.body_types) - {BodyType.UNKNOWN})
        _set(self, "education", _coerce_enum_set(Education, self.education))
        _set(self, "deal_breakers", _normalize_tags(self.deal_breakers))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "age_range": self.age_range.to_dict() if self.age_range else None,
            "max_distance_km": self.max_distance_km,
            "sexual_orientations": sorted(o.value for o in self.sexual_orientations),
            "relationship_types": sorted(r.value for r in self.relationship_types),
            "body_types": sorted(b.value for b in self.body_types),
            "height_range": self.height_range.to_dict() if self.height_range else None,
            "education": sorted(e.value for e in self.education),
            "deal_breakers": sorted(self.deal_breakers),
        }

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "MatchingPreferences":
        d = d or {}
        return cls(
            age_range=d.get("age_range"),
            max_distance_km=float(d.get("max_distance_km", d.get("max_distance", 25.0))),
            sexual_orientations=d.get("sexual_orientations"),
            relationship_types=d.get("relationship_types"),
            body_types=d.get("body_types"),
            height_range=d.get("height_range"),
            education=d.get("education"),
            deal_breakers=d.get("deal_breakers"),
        )


@dataclass(frozen=True)
class Profile:
    """
    A seeker or candidate profile snapshot.

    Attributes:
        profile_id: Stable identifier
        age: Age in years
        height_cm: Height in cm (None if not provided)
        body_type: Body type (UNKNOWN if not provided)
        photo_count: Number of approved photos (appearance proxy)
        lifestyle: Lifestyle habits
        education: Highest education level (None if not provided)
        occupation: Free-text occupation
        interests: Normalized interest tags
        languages: Normalized spoken languages
        looking_for: Relationship types sought
        sexual_orientation: Sexual orientation
        is_verified: Identity verification status (external subsystem)
        verification_score: Optional verification confidence (external subsystem)
        last_active_at: Last activity timestamp
        created_at: Account creation timestamp
        location: Last known coordinates (external geolocation)
        bio: Free-text biography
        completeness: Profile completion percentage (0-100)
        is_visible: Whether the profile may appear in discovery
        is_premium: Whether the account has an active subscription
        preferences: The profile's own matching preferences
    """
    profile_id: str
    age: int
    height_cm: Optional[int] = None
    body_type: BodyType = BodyType.UNKNOWN
    photo_count: int = 0
    lifestyle: Lifestyle = field(default_factory=Lifestyle)
    education: Optional[Education] = None
    occupation: Optional[str] = None
    interests: FrozenSet[str] = frozenset()
    languages: FrozenSet[str] = frozenset()
    looking_for: FrozenSet[RelationshipType] = frozenset()
    sexual_orientation: SexualOrientation = SexualOrientation.OTHER
    is_verified: bool = False
    verification_score: Optional[float] = None
    last_active_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    location: Optional[GeoPoint] = None
    bio: str = ""
    completeness: float = 0.0
    is_visible: bool = True
    is_premium: bool = False
    preferences: Optional[MatchingPreferences] = None

    def __post_init__(self):
        """Coerce raw inputs and validate bounds."""
        if not self.profile_id:
            raise ValueError("profile_id must be a non-empty string")
        if not isinstance(self.age, int) or isinstance(self.age, bool) or self.age < 0:
            raise ValueError(f"age must be a non-negative integer, got {self.age!r}")
        if self.photo_count < 0:
            raise ValueError(f"photo_count must be >= 0, got {self.photo_count}")

        if self.height_cm is not None:
            height = int(self.height_cm)
            _set(self, "height_cm", height if height > 0 else None)
        _set(self, "body_type", _coerce_enum(BodyType, self.body_type, BodyType.UNKNOWN))
        if isinstance(self.lifestyle, dict):
            _set(self, "lifestyle", Lifestyle.from_dict(self.lifestyle))
        elif self.lifestyle is None:
            _set(self, "lifestyle", Lifestyle())
        _set(self, "education", _coerce_enum(Education, self.education, Education.OTHER)
             if self.education not in (None, "") else None)
        _set(self, "interests", _normalize_tags(self.interests))
        _set(self, "languages", _normalize_tags(self.languages))
        _set(self, "looking_for", _coerce_enum_set(RelationshipType, self.looking_for))
        _set(self, "sexual_orientation",
             _coerce_enum(SexualOrientation, self.sexual_orientation, SexualOrientation.OTHER))
        _set(self, "verification_score", _coerce_optional_float(self.verification_score))
        _set(self, "last_active_at", _coerce_datetime(self.last_active_at))
        _set(self, "created_at", _coerce_datetime(self.created_at))
        if isinstance(self.location, dict):
            _set(self, "location", GeoPoint.from_dict(self.location))
        if isinstance(self.preferences, dict):
            _set(self, "preferences", MatchingPreferences.from_dict(self.preferences))

    def days_since_active(self, now: datetime) -> Optional[float]:
        """Days elapsed since last activity, or None if unknown."""
        if self.last_active_at is None:
            return None
        return (now - self.last_active_at).total_seconds() / 86400.0

    def days_since_created(self, now: datetime) -> Optional[float]:
        """Days elapsed since account creation, or None if unknown."""
        if self.created_at is None:
            return None
        return (now - self.created_at).total_seconds() / 86400.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-encodable dictionary."""
        return {
            "profile_id": self.profile_id,
            "age": self.age,
            "height_cm": self.height_cm,
            "body_type": self.body_type.value,
            "photo_count": self.photo_count,
            "lifestyle": self.lifestyle.to_dict(),
            "education": self.education.value if self.education else None,
            "occupation": self.occupation,
            "interests": sorted(self.interests),
            "languages": sorted(self.languages),
            "looking_for": sorted(r.value for r in self.looking_for),
            "sexual_orientation": self.sexual_orientation.value,
            "is_verified": self.is_verified,
            "verification_score": self.verification_score,
            "last_active_at": self.last_active_at.isoformat() if self.last_active_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "location": self.location.to_dict() if self.location else None,
            "bio": self.bio,
            "completeness": self.completeness,
            "is_visible": self.is_visible,
            "is_premium": self.is_premium,
            "preferences": self.preferences.to_dict() if self.preferences else None,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Profile":
        """Create from dictionary (e.g. a record from the profile store)."""
        verification = d.get("verification") or {}
        return cls(
            profile_id=str(d.get("profile_id", d.get("user_id", ""))),
            age=int(d["age"]),
            height_cm=d.get("height_cm", d.get("height")),
            body_type=d.get("body_type"),
            photo_count=int(d.get("photo_count") or len(d.get("photos") or [])),
            lifestyle=Lifestyle.from_dict(d.get("lifestyle")),
            education=d.get("education"),
            occupation=d.get("occupation"),
            interests=d.get("interests"),
            languages=d.get("languages"),
            looking_for=d.get("looking_for"),
            sexual_orientation=d.get("sexual_orientation"),
            is_verified=bool(d.get("is_verified", verification.get("is_verified", False))),
            verification_score=d.get("verification_score", verification.get("score")),
            last_active_at=d.get("last_active_at"),
            created_at=d.get("created_at"),
            location=d.get("location"),
            bio=d.get("bio") or "",
            completeness=float(d.get("completeness") or 0.0),
            is_visible=bool(d.get("is_visible", True)),
            is_premium=bool(d.get("is_premium", False)),
            preferences=d.get("preferences"),
        )


@dataclass(frozen=True)
class CategoryWeights:
    """
    Relative importance of the four compatibility categories.

    Weights need not sum to 1; normalized() produces the derived copy used at
    aggregation time.
    """
    physical: float = 0.3
    lifestyle: float = 0.25
    social: float = 0.25
    relationship: float = 0.2

    def as_dict(self) -> Dict[str, float]:
        return {
            "physical": self.physical,
            "lifestyle": self.lifestyle,
            "social": self.social,
            "relationship": self.relationship,
        }

    def normalized(self) -> "CategoryWeights":
        """
        Return a copy whose weights are non-negative and sum to 1.

        Negative or NaN weights are clamped to 0. If nothing positive remains,
        the neutral equal split is returned.
        """
        clamped = {}
        for name, value in self.as_dict().items():
            value = float(value) if value is not None else 0.0
            clamped[name] = 0.0 if math.isnan(value) or value < 0 else value

        total = sum(clamped.values())
        if total <= 0 or math.isinf(total):
            logger.warning(f"Unusable category weights {self.as_dict()}, using equal weights")
            return CategoryWeights(0.25, 0.25, 0.25, 0.25)
        return CategoryWeights(**{name: value / total for name, value in clamped.items()})

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "CategoryWeights":
        d = d or {}
        defaults = cls()
        return cls(
            physical=float(d.get("physical", defaults.physical)),
            lifestyle=float(d.get("lifestyle", defaults.lifestyle)),
            social=float(d.get("social", defaults.social)),
            relationship=float(d.get("relationship", defaults.relationship)),
        )


@dataclass(frozen=True)
class MinimumThresholds:
    """
    Minimum acceptable scores.

    Attributes:
        overall: Required minimum overall compatibility
        physical, lifestyle, social, relationship: Optional per-category minimums
    """
    overall: float = 0.6
    physical: Optional[float] = None
    lifestyle: Optional[float] = None
    social: Optional[float] = None
    relationship: Optional[float] = None

    def category_thresholds(self) -> Dict[str, Optional[float]]:
        return {
            "physical": self.physical,
            "lifestyle": self.lifestyle,
            "social": self.social,
            "relationship": self.relationship,
        }

    def clamped(self) -> "MinimumThresholds":
        """Return a copy with every defined threshold clamped to [0, 1]."""
        def clamp(value: Optional[float]) -> Optional[float]:
            if value is None:
                return None
            value = float(value)
            if math.isnan(value):
                return None
            return min(max(value, 0.0), 1.0)

        return MinimumThresholds(
            overall=clamp(self.overall) or 0.0,
            **{name: clamp(value) for name, value in self.category_thresholds().items()},
        )

    def to_dict(self) -> Dict[str, Optional[float]]:
        return {"overall": self.overall, **self.category_thresholds()}

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "MinimumThresholds":
        d = d or {}
        return cls(
            overall=float(d.get("overall", 0.6)),
            physical=_coerce_optional_float(d.get("physical")),
            lifestyle=_coerce_optional_float(d.get("lifestyle")),
            social=_coerce_optional_float(d.get("social")),
            relationship=_coerce_optional_float(d.get("relationship")),
        )


@dataclass(frozen=True)
class SortSpec:
    """Ranking key and direction for discovery results."""
    by: SortBy = SortBy.COMPATIBILITY
    direction: SortDirection = SortDirection.DESC

    def __post_init__(self):
        _set(self, "by", _coerce_enum(SortBy, self.by, SortBy.COMPATIBILITY))
        _set(self, "direction", _coerce_enum(SortDirection, self.direction, SortDirection.DESC))

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "SortSpec":
        d = d or {}
        return cls(by=d.get("by"), direction=d.get("direction"))


@dataclass(frozen=True)
class SearchFilters:
    """
    Basic candidate filters applied before preference scoring.

    Attributes:
        is_verified: Only verified candidates when True
        has_photos: Only candidates with at least one photo when True
        last_active_within_hours: Only candidates active within this window
        exclude_profile_ids: Previously seen or rejected candidates
        include_premium_only: Only premium candidates when True
        minimum_photo_count: Minimum number of photos
    """
    is_verified: Optional[bool] = None
    has_photos: Optional[bool] = None
    last_active_within_hours: Optional[float] = None
    exclude_profile_ids: FrozenSet[str] = frozenset()
    include_premium_only: bool = False
    minimum_photo_count: Optional[int] = None

    def __post_init__(self):
        _set(self, "exclude_profile_ids", frozenset(str(p) for p in (self.exclude_profile_ids or ())))

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "SearchFilters":
        d = d or {}
        return cls(
            is_verified=d.get("is_verified"),
            has_photos=d.get("has_photos"),
            last_active_within_hours=_coerce_optional_float(d.get("last_active_within_hours")),
            exclude_profile_ids=d.get("exclude_profile_ids") or (),
            include_premium_only=bool(d.get("include_premium_only", False)),
            minimum_photo_count=d.get("minimum_photo_count"),
        )


@dataclass(frozen=True)
class AdvancedMatchingCriteria:
    """
    Full criteria for one preference-based discovery request.

    Attributes:
        seeker_id: Profile id of the seeker
        preferences: Basic matching preferences
        weights: Category weights (normalized at aggregation time)
        thresholds: Minimum overall and per-category scores
        deal_breakers: Active deal-breaker ids (hard elimination)
        must_haves: Required soft preferences (ranking/explanation only)
        nice_to_haves: Optional soft preferences (ranking/explanation only)
        sort: Ranking specification
        filters: Basic search filters
        enable_advanced_filtering: When False, deal-breakers are skipped; thresholds still apply
    """
    seeker_id: str
    preferences: MatchingPreferences = field(default_factory=MatchingPreferences)
    weights: CategoryWeights = field(default_factory=CategoryWeights)
    thresholds: MinimumThresholds = field(default_factory=MinimumThresholds)
    deal_breakers: FrozenSet[str] = frozenset()
    must_haves: Tuple[str, ...] = ()
    nice_to_haves: Tuple[str, ...] = ()
    sort: SortSpec = field(default_factory=SortSpec)
    filters: SearchFilters = field(default_factory=SearchFilters)
    enable_advanced_filtering: bool = True

    def __post_init__(self):
        if isinstance(self.preferences, dict):
            _set(self, "preferences", MatchingPreferences.from_dict(self.preferences))
        if isinstance(self.weights, dict):
            _set(self, "weights", CategoryWeights.from_dict(self.weights))
        if isinstance(self.thresholds, dict):
            _set(self, "thresholds", MinimumThresholds.from_dict(self.thresholds))
        if isinstance(self.sort, dict):
            _set(self, "sort", SortSpec.from_dict(self.sort))
        if isinstance(self.filters, dict):
            _set(self, "filters", SearchFilters.from_dict(self.filters))
        _set(self, "deal_breakers", _normalize_tags(self.deal_breakers))
        _set(self, "must_haves", tuple(self.must_haves or ()))
        _set(self, "nice_to_haves", tuple(self.nice_to_haves or ()))

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AdvancedMatchingCriteria":
        """Create from dictionary."""
        return cls(
            seeker_id=str(d["seeker_id"]),
            preferences=MatchingPreferences.from_dict(d.get("preferences")),
            weights=CategoryWeights.from_dict(d.get("weights")),
            thresholds=MinimumThresholds.from_dict(d.get("thresholds")),
            deal_breakers=d.get("deal_breakers") or (),
            must_haves=d.get("must_haves") or (),
            nice_to_haves=d.get("nice_to_haves") or (),
            sort=SortSpec.from_dict(d.get("sort")),
            filters=SearchFilters.from_dict(d.get("filters")),
            enable_advanced_filtering=bool(d.get("enable_advanced_filtering", True)),
        )


def profiles_from_records(records: List[Dict[str, Any]]) -> List[Profile]:
    """Build profiles from a list of raw records."""
    return [Profile.from_dict(r) for r in records]
