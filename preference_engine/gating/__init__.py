"""Minimum-threshold gate."""

from .thresholds import ThresholdGate, meets_minimum_thresholds

__all__ = ["ThresholdGate", "meets_minimum_thresholds"]
