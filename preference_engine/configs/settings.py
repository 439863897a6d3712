"""
Typed settings for preference filtering and match discovery.

Both dataclasses are built from the main YAML config (see loader.py) with
from_config, and round-trip through to_dict / from_dict / save / load like
the other config objects in this package.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..profiles.schema import CategoryWeights, MinimumThresholds

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_THRESHOLDS = MinimumThresholds(
    overall=0.6,
    physical=0.4,
    lifestyle=0.3,
    social=0.3,
    relationship=0.4,
)


@dataclass
class FilteringConfig:
    """
    Settings for preference-based filtering.

    Attributes:
        enable_category_weighting: Use request weights; when False the default weights apply
        enable_deal_breaker_filtering: Apply deal-breakers at all
        enable_must_have_filtering: Use must-haves satisfied as a ranking tie-break
        enable_nice_to_have_boosts: Use nice-to-haves matched as a ranking tie-break
        default_weights: Category weights for requests that give none
        default_thresholds: Thresholds for requests built from a profile
        scoring_algorithm: weighted_average, multiplicative or hybrid
    """
    enable_category_weighting: bool = True
    enable_deal_breaker_filtering: bool = True
    enable_must_have_filtering: bool = True
    enable_nice_to_have_boosts: bool = True
    default_weights: CategoryWeights = field(default_factory=CategoryWeights)
    default_thresholds: MinimumThresholds = field(default_factory=lambda: DEFAULT_CATEGORY_THRESHOLDS)
    scoring_algorithm: str = "weighted_average"

    def validate(self) -> List[str]:
        """Return configuration issues (empty if valid)."""
        issues = []
        if self.scoring_algorithm not in ("weighted_average", "multiplicative", "hybrid"):
            issues.append(f"Unknown scoring algorithm: {self.scoring_algorithm}")
        weights = self.default_weights.as_dict()
        if any(v < 0 for v in weights.values()):
            issues.append(f"Negative default weights: {weights}")
        if sum(max(v, 0.0) for v in weights.values()) <= 0:
            issues.append("Default weights sum to zero")
        for name, value in self.default_thresholds.to_dict().items():
            if value is not None and not 0 <= value <= 1:
                issues.append(f"Default threshold {name} must be in [0, 1], got {value}")
        return issues

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "enable_category_weighting": self.enable_category_weighting,
            "enable_deal_breaker_filtering": self.enable_deal_breaker_filtering,
            "enable_must_have_filtering": self.enable_must_have_filtering,
            "enable_nice_to_have_boosts": self.enable_nice_to_have_boosts,
            "default_weights": self.default_weights.as_dict(),
            "default_thresholds": self.default_thresholds.to_dict(),
            "scoring_algorithm": self.scoring_algorithm,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "FilteringConfig":
        """Create from dictionary."""
        defaults = cls()
        thresholds = d.get("default_thresholds")
        return cls(
            enable_category_weighting=bool(d.get("enable_category_weighting", True)),
            enable_deal_breaker_filtering=bool(d.get("enable_deal_breaker_filtering", True)),
            enable_must_have_filtering=bool(d.get("enable_must_have_filtering", True)),
            enable_nice_to_have_boosts=bool(d.get("enable_nice_to_have_boosts", True)),
            default_weights=CategoryWeights.from_dict(d.get("default_weights")),
            default_thresholds=(
                MinimumThresholds.from_dict(thresholds) if thresholds else defaults.default_thresholds
            ),
            scoring_algorithm=d.get("scoring_algorithm", "weighted_average"),
        )

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "FilteringConfig":
        """Create from main config dictionary."""
        return cls.from_dict(config.get("filtering", {}) or {})

    def save(self, filepath: str) -> None:
        """Save to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved filtering config to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "FilteringConfig":
        """Load from JSON file."""
        with open(filepath, "r") as f:
            d = json.load(f)
        return cls.from_dict(d)


@dataclass
class MatchingConfig:
    """
    Settings for match discovery.

    Attributes:
        default_radius_km: Search radius when a profile states none
        max_radius_km: Largest radius a request may use
        max_results: Results kept after ranking
        cooldown_minutes: Minimum time between discovery requests per seeker
        enable_location_filtering: Drop candidates beyond the requested radius
        enable_age_filtering: Drop candidates outside the requested age range
        max_deal_breakers: Most deal-breakers a request may activate
        min_age: Lowest age a request may ask for
        max_age: Highest age a request may ask for
        min_age_span: Narrowest allowed age range, in years
        match_expiry_days: Days until a match result expires
        max_workers: Thread pool size for candidate scoring (None scores inline)
    """
    default_radius_km: float = 25.0
    max_radius_km: float = 100.0
    max_results: int = 50
    cooldown_minutes: float = 5.0
    enable_location_filtering: bool = True
    enable_age_filtering: bool = True
    max_deal_breakers: int = 10
    min_age: int = 18
    max_age: int = 99
    min_age_span: int = 3
    match_expiry_days: int = 30
    max_workers: Optional[int] = None

    def validate(self) -> List[str]:
        """Return configuration issues (empty if valid)."""
        issues = []
        if self.default_radius_km > self.max_radius_km:
            issues.append(
                f"default_radius_km ({self.default_radius_km}) exceeds max_radius_km ({self.max_radius_km})"
            )
        if self.max_results < 1:
            issues.append(f"max_results must be >= 1, got {self.max_results}")
        if self.cooldown_minutes < 0:
            issues.append(f"cooldown_minutes must be >= 0, got {self.cooldown_minutes}")
        if self.min_age >= self.max_age:
            issues.append(f"min_age ({self.min_age}) must be below max_age ({self.max_age})")
        if self.max_workers is not None and self.max_workers < 1:
            issues.append(f"max_workers must be >= 1, got {self.max_workers}")
        return issues

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "default_radius_km": self.default_radius_km,
            "max_radius_km": self.max_radius_km,
            "max_results": self.max_results,
            "cooldown_minutes": self.cooldown_minutes,
            "enable_location_filtering": self.enable_location_filtering,
            "enable_age_filtering": self.enable_age_filtering,
            "max_deal_breakers": self.max_deal_breakers,
            "min_age": self.min_age,
            "max_age": self.max_age,
            "min_age_span": self.min_age_span,
            "match_expiry_days": self.match_expiry_days,
            "max_workers": self.max_workers,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MatchingConfig":
        """Create from dictionary; unknown keys are ignored."""
        known = {k: v for k, v in d.items() if k in cls.__dataclass_fields__}
        return cls(**known)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "MatchingConfig":
        """Create from main config dictionary."""
        return cls.from_dict(config.get("matching", {}) or {})

    def save(self, filepath: str) -> None:
        """Save to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved matching config to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "MatchingConfig":
        """Load from JSON file."""
        with open(filepath, "r") as f:
            d = json.load(f)
        return cls.from_dict(d)
