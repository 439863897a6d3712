"""
Analytics over a seeker's match results.

There are no outcome labels here (likes, conversations), so analytics
describe the result set only:
1. Quality distribution over the assessment tiers
2. Per-category average score and importance (normalized weight)
3. Score distribution statistics
4. Agreement between the basic location score and preference compatibility
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from scipy.stats import spearmanr

from ..explanation.explain import ASSESSMENT_TIERS, DEFAULT_TIER, assessment_tier
from ..profiles.schema import CategoryWeights
from ..scoring.base import CATEGORIES

logger = logging.getLogger(__name__)

QUALITY_BANDS = tuple(tier for _, tier in ASSESSMENT_TIERS) + (DEFAULT_TIER,)


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 0.2, "p50": 0.5, "p90": 0.8}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class CategoryPerformance:
    average_score: float
    importance: float

    def to_dict(self) -> Dict[str, float]:
        return {"average_score": float(self.average_score), "importance": float(self.importance)}


@dataclass
class PreferenceMatchAnalytics:
    """
    Analytics for one seeker's results.

    Attributes:
        seeker_id: Seeker profile id
        total_matches: Number of results analysed
        quality_distribution: Result count per assessment tier
        category_performance: Average score and importance per category
        score_distribution: Compatibility score statistics (None without results)
        most_influential_factors: Categories contributing most (average score x importance)
        least_influential_factors: Categories contributing least
        score_agreement: Spearman correlation between basic and compatibility scores
    """
    seeker_id: str
    total_matches: int
    quality_distribution: Dict[str, int]
    category_performance: Dict[str, CategoryPerformance]
    score_distribution: Optional[ScoreDistributionStats] = None
    most_influential_factors: List[str] = field(default_factory=list)
    least_influential_factors: List[str] = field(default_factory=list)
    score_agreement: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seeker_id": self.seeker_id,
            "total_matches": self.total_matches,
            "quality_distribution": dict(self.quality_distribution),
            "category_performance": {k: v.to_dict() for k, v in self.category_performance.items()},
            "score_distribution": self.score_distribution.to_dict() if self.score_distribution else None,
            "most_influential_factors": list(self.most_influential_factors),
            "least_influential_factors": list(self.least_influential_factors),
            "score_agreement": self.score_agreement,
        }

    def save(self, filepath: str) -> None:
        """Save analytics to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved match analytics to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the analytics."""
        lines = [
            f"Match Analytics: {self.seeker_id}",
            "=" * 50,
            f"Total matches: {self.total_matches}",
            "",
            "Quality Distribution:",
        ]
        for band in QUALITY_BANDS:
            lines.append(f"  {band}: {self.quality_distribution.get(band, 0)}")

        lines.extend(["", "Category Performance:"])
        for name, performance in self.category_performance.items():
            lines.append(
                f"  {name}: avg {performance.average_score:.4f} (importance {performance.importance:.2f})"
            )

        if self.score_distribution:
            lines.extend([
                "",
                "Score Distribution:",
                f"  Mean: {self.score_distribution.mean:.4f}",
                f"  Std:  {self.score_distribution.std:.4f}",
                f"  Min:  {self.score_distribution.min:.4f}",
                f"  Max:  {self.score_distribution.max:.4f}",
            ])
            for q_name, q_value in self.score_distribution.quantiles.items():
                lines.append(f"  {q_name}: {q_value:.4f}")

        if self.score_agreement is not None:
            lines.extend(["", f"Basic/compatibility agreement (Spearman): {self.score_agreement:.4f}"])

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: np.ndarray,
    quantiles: Sequence[float] = (0.1, 0.25, 0.5, 0.75, 0.9)
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for scores.

    Args:
        scores: Array of compatibility scores
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance
    """
    quantile_dict = {
        f"p{int(q * 100)}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


def compute_quality_distribution(scores: Sequence[float]) -> Dict[str, int]:
    distribution = {band: 0 for band in QUALITY_BANDS}
    for score in scores:
        distribution[assessment_tier(score)] += 1
    return distribution


def compute_score_agreement(basic_scores: np.ndarray, compatibility_scores: np.ndarray) -> Optional[float]:
    """
    Spearman correlation between basic and compatibility scores.

    Returns None with fewer than 3 results or when either side is constant.
    """
    if len(basic_scores) < 3:
        return None
    if np.ptp(basic_scores) == 0 or np.ptp(compatibility_scores) == 0:
        return None
    correlation, _ = spearmanr(basic_scores, compatibility_scores)
    return float(correlation)


def compute_preference_match_analytics(
    seeker_id: str,
    results: Sequence[Any],
    weights: Optional[CategoryWeights] = None
) -> PreferenceMatchAnalytics:
    """
    Build analytics for a list of PreferenceMatchResult.

    Args:
        seeker_id: Seeker profile id
        results: Match results
        weights: Category weights used for the results (importance); defaults when None

    Returns:
        PreferenceMatchAnalytics
    """
    importance = (weights or CategoryWeights()).normalized().as_dict()
    compatibility = np.array([r.compatibility_score for r in results], dtype=float)

    performance = {}
    for name in CATEGORIES:
        category_scores = np.array([r.category_scores[name] for r in results], dtype=float)
        average = float(np.mean(category_scores)) if len(category_scores) else 0.0
        performance[name] = CategoryPerformance(average_score=average, importance=importance[name])

    influence = sorted(
        CATEGORIES,
        key=lambda name: (-performance[name].average_score * performance[name].importance, CATEGORIES.index(name)),
    )

    analytics = PreferenceMatchAnalytics(
        seeker_id=seeker_id,
        total_matches=len(results),
        quality_distribution=compute_quality_distribution(compatibility),
        category_performance=performance,
        score_distribution=compute_score_distribution_stats(compatibility) if len(compatibility) else None,
        most_influential_factors=influence[:2] if len(results) else [],
        least_influential_factors=influence[-2:][::-1] if len(results) else [],
        score_agreement=compute_score_agreement(
            np.array([r.score for r in results], dtype=float), compatibility
        ),
    )
    logger.debug(f"Analytics for {seeker_id}: {analytics.quality_distribution}")
    return analytics


def results_to_frame(results: Sequence[Any]) -> pd.DataFrame:
    """
    Flatten match results into a DataFrame (one row per candidate).

    Columns: rank, match_id, candidate_id, compatibility_score, score,
    distance_km, one column per category score, must_haves_satisfied,
    nice_to_haves_matched, assessment.
    """
    rows = []
    for rank, result in enumerate(results, start=1):
        row = {
            "rank": rank,
            "match_id": result.match_id,
            "candidate_id": result.candidate_id,
            "compatibility_score": result.compatibility_score,
            "score": result.score,
            "distance_km": result.distance_km,
        }
        for name in CATEGORIES:
            row[name] = result.category_scores[name]
        row["must_haves_satisfied"] = result.preference_alignment.must_haves_satisfied
        row["nice_to_haves_matched"] = result.preference_alignment.nice_to_haves_matched
        row["assessment"] = assessment_tier(result.compatibility_score)
        rows.append(row)

    columns = [
        "rank", "match_id", "candidate_id", "compatibility_score", "score", "distance_km",
        *CATEGORIES, "must_haves_satisfied", "nice_to_haves_matched", "assessment",
    ]
    return pd.DataFrame(rows, columns=columns)
