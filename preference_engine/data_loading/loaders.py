"""
Data loading functions for profiles and discovery criteria.

Profiles come from YAML/JSON documents (a list of records, or a mapping
with a "profiles" key) or from flat CSV exports. Criteria come from YAML.
Coercion of raw values into enums and timestamps happens in the profile
schema, not here.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Any

import pandas as pd
import yaml

from ..profiles.schema import AdvancedMatchingCriteria, Profile, profiles_from_records

logger = logging.getLogger(__name__)

LIFESTYLE_COLUMNS = ["smoking", "drinking", "drugs", "exercise", "diet"]
LIST_COLUMNS = ["interests", "languages", "looking_for"]
LIST_SEPARATOR = "|"


def _read_document(filepath: str) -> Any:
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {filepath}")

    with open(filepath, "r") as f:
        if path.suffix.lower() == ".json":
            document = json.load(f)
        else:
            document = yaml.safe_load(f)

    if document is None:
        raise ValueError(f"Data file is empty: {filepath}")
    return document


def load_profile_records(filepath: str) -> List[Dict[str, Any]]:
    """
    Load raw profile records from YAML, JSON or CSV.

    Args:
        filepath: Path to the profile file

    Returns:
        List of raw profile dictionaries

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or malformed
    """
    if Path(filepath).suffix.lower() == ".csv":
        return _records_from_csv(filepath)

    document = _read_document(filepath)
    if isinstance(document, dict):
        if "profiles" in document:
            document = document["profiles"]
        else:
            document = [document]
    if not isinstance(document, list):
        raise ValueError(f"Expected a list of profiles in {filepath}, got {type(document).__name__}")
    return document


def _records_from_csv(filepath: str) -> List[Dict[str, Any]]:
    """
    Turn a flat CSV export into nested profile records.

    Lifestyle columns are grouped under "lifestyle", latitude/longitude
    under "location", and list columns are split on "|".
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {filepath}")

    logger.info(f"Loading profiles from {filepath}")
    df = pd.read_csv(filepath)
    if df.empty:
        raise ValueError(f"Data file is empty: {filepath}")

    # NaN -> None so optional fields stay unset
    df = df.astype(object).where(pd.notna(df), None)

    records = []
    for row in df.to_dict(orient="records"):
        record = {k: v for k, v in row.items() if k not in LIFESTYLE_COLUMNS + ["latitude", "longitude"]}
        record["lifestyle"] = {k: row.get(k) for k in LIFESTYLE_COLUMNS if k in row}
        if row.get("latitude") is not None and row.get("longitude") is not None:
            record["location"] = {"latitude": row["latitude"], "longitude": row["longitude"]}
        for column in LIST_COLUMNS:
            value = row.get(column)
            record[column] = [v for v in str(value).split(LIST_SEPARATOR) if v] if value else []
        records.append(record)
    return records


def load_profiles(filepath: str) -> List[Profile]:
    """
    Load profiles from YAML, JSON or CSV.

    Args:
        filepath: Path to the profile file

    Returns:
        List of Profile
    """
    profiles = profiles_from_records(load_profile_records(filepath))
    logger.info(f"Loaded {len(profiles)} profiles from {filepath}")
    return profiles


def load_profile(filepath: str) -> Profile:
    """
    Load exactly one profile (e.g. the seeker).

    Raises:
        ValueError: If the file does not contain exactly one profile
    """
    profiles = load_profiles(filepath)
    if len(profiles) != 1:
        raise ValueError(f"Expected exactly one profile in {filepath}, found {len(profiles)}")
    return profiles[0]


def load_criteria(filepath: str) -> AdvancedMatchingCriteria:
    """
    Load discovery criteria from YAML or JSON.

    Args:
        filepath: Path to the criteria file

    Returns:
        AdvancedMatchingCriteria
    """
    document = _read_document(filepath)
    if not isinstance(document, dict):
        raise ValueError(f"Expected a mapping of criteria in {filepath}")
    logger.info(f"Loaded matching criteria for {document.get('seeker_id')} from {filepath}")
    return AdvancedMatchingCriteria.from_dict(document)
