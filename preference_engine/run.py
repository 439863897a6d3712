"""
Command-line runner for preference-based match discovery.

Runs one discovery pass for one seeker over a candidate pool and writes the
ranked results to JSON (and optionally CSV).

Usage:
    python -m preference_engine.run --config configs/config.yaml \\
        --seeker seeker.yaml --candidates pool.yaml [--criteria criteria.yaml] \\
        [--output out.json] [--csv out.csv] [--explain] [--optimize]

The runner performs the following steps:
1. Load and validate configuration
2. Load the seeker, the candidate pool and the criteria
3. Run discovery (filter, deal-breakers, score, gate, rank, truncate)
4. Optionally explain the results and suggest preference changes
5. Write results, stats and analytics
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Any, List, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

OPTIMIZATION_GOALS = [
    "prioritize_quantity",
    "prioritize_quality",
    "increase_distance",
    "expand_age",
    "relax_deal_breakers",
]


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def run_discovery(
    config_path: str,
    seeker_path: str,
    candidates_path: str,
    criteria_path: Optional[str] = None,
    output: Optional[str] = None,
    csv: Optional[str] = None,
    explain: bool = False,
    optimize: bool = False,
    goals: Optional[List[str]] = None
) -> Dict[str, Any]:
    """
    Run one discovery pass from files.

    Args:
        config_path: Path to the configuration YAML file
        seeker_path: Path to the seeker profile (YAML/JSON)
        candidates_path: Path to the candidate pool (YAML/JSON/CSV)
        criteria_path: Path to the criteria file; derived from the seeker when None
        output: JSON output path; defaults to <output_dir>/matches_<seeker>.json
        csv: Optional CSV output path for a flat results table
        explain: Include per-result explanations
        optimize: Include preference optimization suggestions
        goals: Optimization goal names (see OPTIMIZATION_GOALS)

    Returns:
        Dictionary with run status, match count and output paths
    """
    from .configs import FilteringConfig, MatchingConfig, load_config, validate_config
    from .data_loading import create_synthetic_profiles, load_criteria, load_profile, load_profiles
    from .evaluation import results_to_frame
    from .matching import MatchOrchestrator
    from .optimization import OptimizationGoals

    # =========================================================================
    # 1. Load and validate configuration
    # =========================================================================
    logger.info("=" * 60)
    logger.info("PREFERENCE MATCH DISCOVERY")
    logger.info("=" * 60)

    config = load_config(config_path)
    issues = validate_config(config)
    if issues:
        for issue in issues:
            logger.warning(f"Config issue: {issue}")

    setup_logging(config.get("global", {}).get("log_level", "INFO"))

    orchestrator = MatchOrchestrator(
        filtering_config=FilteringConfig.from_config(config),
        matching_config=MatchingConfig.from_config(config),
    )

    # =========================================================================
    # 2. Load seeker, candidates and criteria
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 1: Loading Profiles")
    logger.info("=" * 60)

    seeker = load_profile(seeker_path)

    try:
        candidates = load_profiles(candidates_path)
    except FileNotFoundError as e:
        logger.error(f"Candidate pool not found: {e}")
        logger.info("Creating synthetic candidate pool for demonstration...")
        candidates = create_synthetic_profiles()

    if criteria_path:
        criteria = load_criteria(criteria_path)
    else:
        logger.info(f"No criteria given, using defaults for {seeker.profile_id}")
        criteria = orchestrator.default_criteria(seeker)

    # =========================================================================
    # 3. Discovery
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 2: Discovering Matches")
    logger.info("=" * 60)

    discovery = orchestrator.discover(seeker, criteria, candidates)
    for stage, count in discovery.stats.stage_counts.items():
        logger.info(f"  {stage}: {count}")
    if discovery.stats.dropped:
        logger.warning(f"  Dropped after scoring errors: {discovery.stats.dropped_ids}")

    payload = discovery.to_dict()

    # =========================================================================
    # 4. Explanations and optimization
    # =========================================================================
    if explain:
        logger.info("\n" + "=" * 60)
        logger.info("STEP 3: Explaining Matches")
        logger.info("=" * 60)
        explanations = orchestrator.explain_match_reasons(discovery.results)
        payload["explanations"] = [e.to_dict() for e in explanations]
        for result, explanation in zip(discovery.results[:5], explanations):
            logger.info(f"  {result.candidate_id}: {explanation.assessment}")

    if optimize:
        logger.info("\n" + "=" * 60)
        logger.info("STEP 4: Optimization Suggestions")
        logger.info("=" * 60)
        optimization_goals = OptimizationGoals.from_dict({name: True for name in goals or []})
        suggestions = orchestrator.suggest_preference_optimizations(
            seeker, optimization_goals, candidates, criteria
        )
        payload["optimization"] = suggestions.to_dict()
        logger.info(f"  Restrictiveness: {suggestions.current_settings.restrictiveness}")
        for suggestion in suggestions.suggestions:
            logger.info(f"  - {suggestion.description} ({suggestion.impact})")

    # =========================================================================
    # 5. Analytics and outputs
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 5: Saving Results")
    logger.info("=" * 60)

    analytics = orchestrator.get_preference_match_analytics(seeker, candidates, criteria)
    payload["analytics"] = analytics.to_dict()
    logger.info("\n" + analytics.summary())

    output_dir = Path(config.get("global", {}).get("output_dir", "artifacts"))
    output_path = Path(output) if output else output_dir / f"matches_{seeker.profile_id}.json"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(payload, f, indent=2)
    logger.info(f"Saved {len(discovery.results)} matches to {output_path}")

    csv_path = None
    if csv:
        csv_path = Path(csv)
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        results_to_frame(discovery.results).to_csv(csv_path, index=False)
        logger.info(f"Saved results table to {csv_path}")

    return {
        "success": True,
        "seeker_id": seeker.profile_id,
        "match_count": len(discovery.results),
        "output": str(output_path),
        "csv": str(csv_path) if csv_path else None,
    }


def main():
    """Main entry point for match discovery."""
    parser = argparse.ArgumentParser(
        description="Run preference-based match discovery for one seeker"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--seeker",
        type=str,
        required=True,
        help="Path to the seeker profile (YAML or JSON)"
    )
    parser.add_argument(
        "--candidates",
        type=str,
        required=True,
        help="Path to the candidate pool (YAML, JSON or CSV)"
    )
    parser.add_argument(
        "--criteria",
        type=str,
        default=None,
        help="Path to discovery criteria (defaults derived from the seeker)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="JSON output path (overrides config output_dir)"
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Also write a flat CSV of the results"
    )
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Include per-match explanations"
    )
    parser.add_argument(
        "--optimize",
        action="store_true",
        help="Include preference optimization suggestions"
    )
    parser.add_argument(
        "--goal",
        action="append",
        choices=OPTIMIZATION_GOALS,
        default=[],
        help="Optimization goal (repeatable, used with --optimize)"
    )

    args = parser.parse_args()

    try:
        result = run_discovery(
            args.config,
            args.seeker,
            args.candidates,
            criteria_path=args.criteria,
            output=args.output,
            csv=args.csv,
            explain=args.explain,
            optimize=args.optimize,
            goals=args.goal,
        )
        if result["success"]:
            logger.info("\nDiscovery completed successfully!")
            return 0
        else:
            logger.error("\nDiscovery failed!")
            return 1
    except Exception as e:
        logger.exception(f"Discovery failed with error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
