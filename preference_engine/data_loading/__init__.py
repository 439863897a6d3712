"""Data loading for profiles and discovery criteria."""

from .loaders import load_criteria, load_profile, load_profile_records, load_profiles
from .synthetic import create_synthetic_profiles

__all__ = [
    "load_criteria",
    "load_profile",
    "load_profile_records",
    "load_profiles",
    "create_synthetic_profiles",
]
