"""
Great-circle distance and bearing between two coordinates.

Geolocation acquisition is owned by an external service; the engine only
consumes the resulting distance. This module provides the default
implementation of that contract so the orchestrator can run stand-alone.

Formulas:
    a = sin²(Δφ/2) + cos φ1 · cos φ2 · sin²(Δλ/2)
    distance = 2R · atan2(√a, √(1−a))
    bearing = atan2(sin Δλ · cos φ2, cos φ1 · sin φ2 − sin φ1 · cos φ2 · cos Δλ)
"""

import logging
from dataclasses import dataclass, asdict
from typing import Callable, Dict, Optional

import numpy as np

from ..profiles.schema import GeoPoint

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class DistanceCalculation:
    """Distance in km and initial bearing in degrees [0, 360)."""
    distance_km: float
    bearing_degrees: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


DistanceFn = Callable[[GeoPoint, GeoPoint], DistanceCalculation]


def haversine_distance(origin: GeoPoint, destination: GeoPoint) -> DistanceCalculation:
    """
    Compute the great-circle distance and initial bearing between two points.

    Args:
        origin: Starting coordinates
        destination: Target coordinates

    Returns:
        DistanceCalculation with distance in km and bearing in degrees
    """
    lat1, lon1, lat2, lon2 = np.radians(
        [origin.latitude, origin.longitude, destination.latitude, destination.longitude]
    )
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    distance = 2 * EARTH_RADIUS_KM * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    y = np.sin(dlon) * np.cos(lat2)
    x = np.cos(lat1) * np.sin(lat2) - np.sin(lat1) * np.cos(lat2) * np.cos(dlon)
    bearing = (np.degrees(np.arctan2(y, x)) + 360.0) % 360.0

    return DistanceCalculation(distance_km=float(distance), bearing_degrees=float(bearing))


def calculate_distance_score(distance_km: Optional[float], max_distance_km: float) -> float:
    """
    Linear location score in [0, 1] (closer is better).

    Unknown distances score a neutral 0.5.
    """
    if distance_km is None:
        return 0.5
    if max_distance_km <= 0 or distance_km >= max_distance_km:
        return 0.0
    return 1.0 - (distance_km / max_distance_km)
