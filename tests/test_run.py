"""Tests for the command-line runner."""

import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pandas as pd
import yaml

from conftest import build_preferences, build_profile
from preference_engine import run

REPO_CONFIG = str(Path(__file__).parent.parent / "configs" / "config.yaml")


def recent_profile(profile_id, **overrides):
    """Profile active an hour ago relative to the real clock the runner uses."""
    last_active = datetime.now(timezone.utc) - timedelta(hours=1)
    return build_profile(profile_id, last_active_at=last_active, **overrides).to_dict()


def write_inputs(tmp_path):
    seeker = recent_profile("seeker")
    seeker["preferences"] = build_preferences().to_dict()
    pool = [
        recent_profile("c1"),
        recent_profile("c2", lifestyle={"smoking": "regularly"}),
        recent_profile("c3", interests=["gaming"]),
    ]
    criteria = {
        "seeker_id": "seeker",
        "preferences": build_preferences().to_dict(),
        "thresholds": {"overall": 0.0},
        "deal_breakers": ["smoking"],
    }
    paths = {}
    for name, document in (("seeker", seeker), ("pool", pool), ("criteria", criteria)):
        paths[name] = tmp_path / f"{name}.yaml"
        paths[name].write_text(yaml.safe_dump(document))
    return paths


def test_run_discovery_writes_outputs(tmp_path):
    paths = write_inputs(tmp_path)
    output = tmp_path / "out" / "matches.json"
    csv = tmp_path / "out" / "matches.csv"

    result = run.run_discovery(
        REPO_CONFIG, str(paths["seeker"]), str(paths["pool"]), str(paths["criteria"]),
        output=str(output), csv=str(csv), explain=True, optimize=True, goals=["prioritize_quantity"],
    )

    assert result["success"] is True
    assert result["match_count"] == 2
    payload = json.loads(output.read_text())
    assert [r["candidate_id"] for r in payload["results"]] == ["c1", "c3"]
    assert payload["stats"]["stage_counts"]["deal_breaker_filter"] == 2
    assert len(payload["explanations"]) == 2
    assert payload["optimization"]["current_settings"]["expected_matches"] == 2
    assert payload["analytics"]["total_matches"] == 2
    assert list(pd.read_csv(csv)["candidate_id"]) == ["c1", "c3"]


def test_run_discovery_default_criteria(tmp_path):
    paths = write_inputs(tmp_path)
    output = tmp_path / "matches.json"

    result = run.run_discovery(REPO_CONFIG, str(paths["seeker"]), str(paths["pool"]), output=str(output))

    assert result["success"] is True
    assert result["csv"] is None
    payload = json.loads(output.read_text())
    assert "explanations" not in payload
    assert "optimization" not in payload


def test_main_success(tmp_path, monkeypatch):
    paths = write_inputs(tmp_path)
    monkeypatch.setattr(sys, "argv", [
        "run", "--config", REPO_CONFIG, "--seeker", str(paths["seeker"]),
        "--candidates", str(paths["pool"]), "--criteria", str(paths["criteria"]),
        "--output", str(tmp_path / "matches.json"),
    ])
    assert run.main() == 0


def test_main_reports_failure(tmp_path, monkeypatch):
    paths = write_inputs(tmp_path)
    monkeypatch.setattr(sys, "argv", [
        "run", "--config", REPO_CONFIG, "--seeker", str(tmp_path / "missing.yaml"),
        "--candidates", str(paths["pool"]),
    ])
    assert run.main() == 1


def test_setup_logging_sets_root_level():
    import logging

    run.setup_logging("warning")
    assert logging.getLogger().level == logging.WARNING
    run.setup_logging("INFO")
