"""Distance utility (default implementation of the external geolocation contract)."""

from .distance import (
    DistanceCalculation,
    DistanceFn,
    calculate_distance_score,
    haversine_distance,
)

__all__ = [
    "DistanceCalculation",
    "DistanceFn",
    "calculate_distance_score",
    "haversine_distance",
]
