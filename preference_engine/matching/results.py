"""
Result types returned by match discovery.

Every type has a to_dict() producing a JSON-encodable structure for the
calling API layer.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..alignment.preferences import PreferenceLabels, SoftPreferenceAnalysis
from ..dealbreakers.catalog import DealBreakerAnalysis


def make_match_id(seeker_id: str, candidate_id: str) -> str:
    """Deterministic match id for a (seeker, candidate) pair."""
    return f"match_{seeker_id}_{candidate_id}"


@dataclass
class MatchFactors:
    """Basic location-matching factors, each in [0, 1] except the bonuses."""
    location_score: float
    age_compatibility: float
    preference_alignment: float
    activity_score: float
    verification_bonus: float = 0.0
    premium_bonus: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class PreferenceAlignmentSummary:
    """Flattened preference alignment carried on each result."""
    matches: List[str] = field(default_factory=list)
    mismatches: List[str] = field(default_factory=list)
    deal_breakers_passed: bool = True
    must_haves_satisfied: int = 0
    nice_to_haves_matched: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PreferenceMatchResult:
    """
    One ranked candidate for a seeker.

    Attributes:
        match_id: match_<seeker>_<candidate>
        seeker_id: Seeker profile id
        candidate_id: Candidate profile id
        score: Basic location-matching score (2 decimals)
        compatibility_score: Aggregated preference compatibility in [0, 1]
        category_scores: Raw score per category
        category_breakdown: Sub-factor scores per category
        preference_alignment: Flattened alignment summary
        matched_preferences: Matched labels per category
        mismatched_preferences: Mismatched labels per category
        deal_breaker_analysis: Outcome of every active deal-breaker
        must_have_analysis: Must-have containment outcome
        nice_to_have_analysis: Nice-to-have containment outcome
        match_explanation: One-sentence summary
        improvement_suggestions: Suggestions for weak categories
        distance_km: Distance to the candidate (None if unknown)
        match_factors: Basic matching factors
        created_at: When the result was produced
        expires_at: When the result expires
    """
    match_id: str
    seeker_id: str
    candidate_id: str
    score: float
    compatibility_score: float
    category_scores: Dict[str, float]
    category_breakdown: Dict[str, Dict[str, float]]
    preference_alignment: PreferenceAlignmentSummary
    matched_preferences: PreferenceLabels
    mismatched_preferences: PreferenceLabels
    deal_breaker_analysis: DealBreakerAnalysis
    must_have_analysis: SoftPreferenceAnalysis
    nice_to_have_analysis: SoftPreferenceAnalysis
    match_explanation: str
    improvement_suggestions: List[str]
    distance_km: Optional[float]
    match_factors: MatchFactors
    created_at: datetime
    expires_at: datetime
    distance_unit: str = "km"
    status: str = "pending"
    is_new_match: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-encodable dictionary."""
        return {
            "match_id": self.match_id,
            "seeker_id": self.seeker_id,
            "candidate_id": self.candidate_id,
            "score": self.score,
            "compatibility_score": self.compatibility_score,
            "category_scores": dict(self.category_scores),
            "category_breakdown": {k: dict(v) for k, v in self.category_breakdown.items()},
            "preference_alignment": self.preference_alignment.to_dict(),
            "matched_preferences": self.matched_preferences.to_dict(),
            "mismatched_preferences": self.mismatched_preferences.to_dict(),
            "deal_breaker_analysis": self.deal_breaker_analysis.to_dict(),
            "must_have_analysis": self.must_have_analysis.to_dict(),
            "nice_to_have_analysis": self.nice_to_have_analysis.to_dict(),
            "match_explanation": self.match_explanation,
            "improvement_suggestions": list(self.improvement_suggestions),
            "distance": self.distance_km,
            "distance_unit": self.distance_unit,
            "match_factors": self.match_factors.to_dict(),
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
            "status": self.status,
            "is_new_match": self.is_new_match,
        }


@dataclass
class DiscoveryStats:
    """
    Pool size after each discovery state.

    Attributes:
        stage_counts: Candidates remaining after each state, in state order
        dropped: Candidates dropped because scoring raised
        dropped_ids: Ids of those candidates
    """
    stage_counts: Dict[str, int] = field(default_factory=dict)
    dropped: int = 0
    dropped_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DiscoveryResult:
    """Ranked results plus per-state statistics."""
    results: List[PreferenceMatchResult]
    stats: DiscoveryStats

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "stats": self.stats.to_dict(),
        }
