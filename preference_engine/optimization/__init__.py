"""Preference optimization advisor."""

from .advisor import (
    PRESETS,
    CurrentSettings,
    OptimizationGoals,
    OptimizationSuggestions,
    Preset,
    Suggestion,
    optimize,
    restrictiveness_band,
)

__all__ = [
    "PRESETS",
    "CurrentSettings",
    "OptimizationGoals",
    "OptimizationSuggestions",
    "Preset",
    "Suggestion",
    "optimize",
    "restrictiveness_band",
]
