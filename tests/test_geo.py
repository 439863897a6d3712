"""Tests for great-circle distance and the location score."""

import pytest

from preference_engine.geo import calculate_distance_score, haversine_distance
from preference_engine.profiles import GeoPoint


class TestHaversine:

    def test_same_point_is_zero(self):
        point = GeoPoint(51.5074, -0.1278)
        result = haversine_distance(point, point)
        assert result.distance_km == pytest.approx(0.0, abs=1e-9)

    def test_london_to_paris(self):
        result = haversine_distance(GeoPoint(51.5074, -0.1278), GeoPoint(48.8566, 2.3522))
        assert result.distance_km == pytest.approx(343.5, abs=1.0)

    def test_symmetric_distance(self):
        a, b = GeoPoint(40.7128, -74.0060), GeoPoint(34.0522, -118.2437)
        assert haversine_distance(a, b).distance_km == pytest.approx(haversine_distance(b, a).distance_km)

    def test_bearing_due_north(self):
        result = haversine_distance(GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0))
        assert result.bearing_degrees == pytest.approx(0.0, abs=1e-6)

    def test_bearing_due_east(self):
        result = haversine_distance(GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0))
        assert result.bearing_degrees == pytest.approx(90.0, abs=1e-6)

    def test_bearing_in_range(self):
        result = haversine_distance(GeoPoint(0.0, 0.0), GeoPoint(-1.0, -1.0))
        assert 0.0 <= result.bearing_degrees < 360.0

    def test_invalid_latitude_rejected(self):
        with pytest.raises(ValueError):
            GeoPoint(91.0, 0.0)


class TestDistanceScore:

    def test_unknown_distance_is_neutral(self):
        assert calculate_distance_score(None, 25.0) == 0.5

    def test_zero_distance_scores_one(self):
        assert calculate_distance_score(0.0, 25.0) == 1.0

    def test_linear_decay(self):
        assert calculate_distance_score(12.5, 25.0) == pytest.approx(0.5)

    def test_at_or_beyond_radius_scores_zero(self):
        assert calculate_distance_score(25.0, 25.0) == 0.0
        assert calculate_distance_score(40.0, 25.0) == 0.0
