"""Analytics over match results."""

from .metrics import (
    compute_score_distribution_stats,
    compute_quality_distribution,
    compute_preference_match_analytics,
    results_to_frame,
    PreferenceMatchAnalytics,
    ScoreDistributionStats,
)

__all__ = [
    "compute_score_distribution_stats",
    "compute_quality_distribution",
    "compute_preference_match_analytics",
    "results_to_frame",
    "PreferenceMatchAnalytics",
    "ScoreDistributionStats",
]
