"""
Minimum-threshold gate applied after scoring.

A candidate is rejected when its overall score is below the overall
threshold, or when any defined per-category threshold exceeds that
category's raw score. Thresholds never look at weighted contributions and
do not depend on the aggregation algorithm.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence, TypeVar, Union

from ..profiles.schema import MinimumThresholds
from ..scoring.base import CategoryScores

logger = logging.getLogger(__name__)

T = TypeVar("T")


def meets_minimum_thresholds(
    overall: float,
    category_scores: Union[CategoryScores, Dict[str, float]],
    thresholds: MinimumThresholds
) -> bool:
    """
    Check one candidate against the minimum thresholds.

    Args:
        overall: Aggregated overall score
        category_scores: Raw category scores
        thresholds: Minimum thresholds (clamped to [0, 1] before comparison)

    Returns:
        True if the candidate passes every defined threshold
    """
    thresholds = thresholds.clamped()
    if overall < thresholds.overall:
        return False

    scores = category_scores.scores() if isinstance(category_scores, CategoryScores) else category_scores
    for name, minimum in thresholds.category_thresholds().items():
        if minimum is not None and scores[name] < minimum:
            return False
    return True


class ThresholdGate:
    """
    Filters scored candidates on minimum thresholds.

    The gate always applies; advanced-filtering toggles on a request only
    affect the deal-breaker step.
    """

    def __init__(self, thresholds: MinimumThresholds):
        self.thresholds = thresholds.clamped()

    def passes(self, overall: float, category_scores: Union[CategoryScores, Dict[str, float]]) -> bool:
        return meets_minimum_thresholds(overall, category_scores, self.thresholds)

    def apply(
        self,
        scored: Sequence[T],
        overall_of: Callable[[T], float],
        categories_of: Callable[[T], Union[CategoryScores, Dict[str, float]]]
    ) -> List[T]:
        """
        Keep the items that pass the gate, in input order.

        Args:
            scored: Scored items of any type
            overall_of: Extracts the overall score from an item
            categories_of: Extracts the category scores from an item

        Returns:
            Items passing every threshold
        """
        kept = [item for item in scored if self.passes(overall_of(item), categories_of(item))]
        logger.debug(f"Threshold gate kept {len(kept)} of {len(scored)} candidates")
        return kept

    @classmethod
    def from_thresholds(cls, thresholds: Optional[MinimumThresholds]) -> "ThresholdGate":
        """Gate for the given thresholds, or the default minimums when None."""
        return cls(thresholds or MinimumThresholds())
