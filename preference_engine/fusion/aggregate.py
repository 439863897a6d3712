"""
Aggregation of category scores into one overall compatibility score.

The four category scores (physical, lifestyle, social, relationship) are
combined at the score level. Weights are normalized before use, so only
their ratios matter.

Algorithms:
    weighted_average: sum(score_i * weight_i)
    multiplicative:   geometric mean of the four scores (unweighted)
    hybrid:           weighted_average * min(1, min_score / 0.3)
                      when min_score < 0.3, else weighted_average

An unknown algorithm is a configuration error: it yields the neutral score
0.5 and a warning instead of raising.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Union

import numpy as np
from scipy.stats import gmean

from ..configs.settings import FilteringConfig
from ..profiles.schema import CategoryWeights
from ..scoring.base import CATEGORIES, CategoryScores

logger = logging.getLogger(__name__)

NEUTRAL_OVERALL_SCORE = 0.5
HYBRID_PENALTY_FLOOR = 0.3


class ScoringAlgorithm(Enum):
    """Supported aggregation algorithms."""
    WEIGHTED_AVERAGE = "weighted_average"
    MULTIPLICATIVE = "multiplicative"
    HYBRID = "hybrid"


def parse_algorithm(algorithm: Union[str, ScoringAlgorithm, None]) -> Optional[ScoringAlgorithm]:
    """Resolve an algorithm id, returning None when it is not recognised."""
    if isinstance(algorithm, ScoringAlgorithm):
        return algorithm
    try:
        return ScoringAlgorithm(str(algorithm).strip().lower())
    except ValueError:
        return None


def _score_vector(category_scores: Union[CategoryScores, Dict[str, float]]) -> np.ndarray:
    if isinstance(category_scores, CategoryScores):
        scores = category_scores.scores()
    else:
        scores = category_scores
    return np.array([float(scores[name]) for name in CATEGORIES])


def _weight_vector(weights: CategoryWeights) -> np.ndarray:
    normalized = weights.normalized().as_dict()
    return np.array([normalized[name] for name in CATEGORIES])


def weighted_average(scores: np.ndarray, weights: np.ndarray) -> float:
    """Dot product of category scores with normalized weights."""
    return float(np.dot(scores, weights))


def multiplicative(scores: np.ndarray) -> float:
    """
    Unweighted geometric mean.

    A single zero category collapses the result to exactly 0.
    """
    if np.any(scores <= 0.0):
        return 0.0
    return float(gmean(scores))


def hybrid(scores: np.ndarray, weights: np.ndarray) -> float:
    """Weighted average penalized when the weakest category is below 0.3."""
    base = weighted_average(scores, weights)
    min_score = float(np.min(scores))
    penalty = 1.0
    if min_score < HYBRID_PENALTY_FLOOR:
        penalty = min(1.0, min_score / HYBRID_PENALTY_FLOOR)
    return base * penalty


def aggregate(
    category_scores: Union[CategoryScores, Dict[str, float]],
    weights: Optional[CategoryWeights] = None,
    algorithm: Union[str, ScoringAlgorithm] = ScoringAlgorithm.WEIGHTED_AVERAGE
) -> float:
    """
    Combine four category scores into an overall score in [0, 1].

    Args:
        category_scores: CategoryScores or a mapping of category name to score
        weights: Category weights (normalized here; defaults when None)
        algorithm: Aggregation algorithm id

    Returns:
        Overall compatibility score, or 0.5 for an unknown algorithm
    """
    resolved = parse_algorithm(algorithm)
    if resolved is None:
        logger.warning(f"Unknown scoring algorithm {algorithm!r}, using neutral score {NEUTRAL_OVERALL_SCORE}")
        return NEUTRAL_OVERALL_SCORE

    scores = _score_vector(category_scores)
    weight_vector = _weight_vector(weights or CategoryWeights())

    if resolved == ScoringAlgorithm.WEIGHTED_AVERAGE:
        overall = weighted_average(scores, weight_vector)
    elif resolved == ScoringAlgorithm.MULTIPLICATIVE:
        overall = multiplicative(scores)
    else:
        overall = hybrid(scores, weight_vector)

    return float(min(max(overall, 0.0), 1.0))


@dataclass
class AggregationConfig:
    """
    Configuration for category aggregation.

    Attributes:
        algorithm: Aggregation algorithm id
        weights: Default category weights used when a request gives none
    """
    algorithm: str = ScoringAlgorithm.WEIGHTED_AVERAGE.value
    weights: CategoryWeights = field(default_factory=CategoryWeights)

    @classmethod
    def from_filtering_config(cls, filtering_config: FilteringConfig) -> "AggregationConfig":
        """Take the algorithm and default weights from the filtering settings."""
        return cls(
            algorithm=filtering_config.scoring_algorithm,
            weights=filtering_config.default_weights,
        )


class CompatibilityAggregator:
    """
    Combines category scores into overall compatibility scores.

    Per-request weights override the configured defaults; the algorithm is
    fixed by configuration.

    Attributes:
        config: AggregationConfig with algorithm and default weights
    """

    def __init__(self, config: Optional[AggregationConfig] = None):
        self.config = config or AggregationConfig()
        logger.debug(f"Initialized CompatibilityAggregator with algorithm={self.config.algorithm}")

    def score(
        self,
        category_scores: Union[CategoryScores, Dict[str, float]],
        weights: Optional[CategoryWeights] = None
    ) -> float:
        """Aggregate one candidate's category scores."""
        return aggregate(category_scores, weights or self.config.weights, self.config.algorithm)
