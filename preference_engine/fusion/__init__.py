"""Aggregation of category scores into an overall compatibility score."""

from .aggregate import (
    AggregationConfig,
    CompatibilityAggregator,
    ScoringAlgorithm,
    aggregate,
    parse_algorithm,
)

__all__ = [
    "AggregationConfig",
    "CompatibilityAggregator",
    "ScoringAlgorithm",
    "aggregate",
    "parse_algorithm",
]
