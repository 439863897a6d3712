"""
Configuration loading and validation.

This module loads the engine's YAML configuration file and checks the
values the filtering and matching layers depend on. Validation never
raises: it returns a list of issues that callers log, and the typed
settings fall back to safe defaults.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ["global", "filtering", "matching"]
KNOWN_ALGORITHMS = ["weighted_average", "multiplicative", "hybrid"]


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file is empty
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    for section in REQUIRED_SECTIONS:
        if section not in config:
            issues.append(f"Missing required section: {section}")

    if "filtering" in config:
        filtering = config["filtering"] or {}

        algorithm = filtering.get("scoring_algorithm", "weighted_average")
        if algorithm not in KNOWN_ALGORITHMS:
            issues.append(f"Unknown filtering.scoring_algorithm: {algorithm}")

        weights = filtering.get("default_weights", {}) or {}
        for name, value in weights.items():
            if value < 0:
                issues.append(f"filtering.default_weights.{name} must be >= 0, got {value}")
        if weights and sum(max(v, 0) for v in weights.values()) <= 0:
            issues.append("filtering.default_weights sum to zero")

        thresholds = filtering.get("default_thresholds", {}) or {}
        for name, value in thresholds.items():
            if value is not None and not 0 <= value <= 1:
                issues.append(f"filtering.default_thresholds.{name} must be in [0, 1], got {value}")

    if "matching" in config:
        matching = config["matching"] or {}
        default_radius = matching.get("default_radius_km", 25)
        max_radius = matching.get("max_radius_km", 100)
        if default_radius > max_radius:
            issues.append(f"matching.default_radius_km ({default_radius}) exceeds max_radius_km ({max_radius})")
        if matching.get("max_results", 50) < 1:
            issues.append("matching.max_results must be >= 1")
        if matching.get("cooldown_minutes", 5) < 0:
            issues.append("matching.cooldown_minutes must be >= 0")
        if matching.get("min_age", 18) >= matching.get("max_age", 99):
            issues.append("matching.min_age must be below matching.max_age")

    if "global" in config:
        if "log_level" not in (config["global"] or {}):
            issues.append("Missing global.log_level")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "filtering.default_weights.physical")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
