"""Preference alignment: matched labels and must-have / nice-to-have analysis."""

from .preferences import (
    PreferenceAlignment,
    PreferenceLabels,
    SoftPreferenceAnalysis,
    align_preferences,
    analyze_soft_preferences,
    normalize_item,
    profile_tags,
)

__all__ = [
    "PreferenceAlignment",
    "PreferenceLabels",
    "SoftPreferenceAnalysis",
    "align_preferences",
    "analyze_soft_preferences",
    "normalize_item",
    "profile_tags",
]
