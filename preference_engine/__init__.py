"""
Preference Compatibility Engine

This package implements the preference-based compatibility scoring and
filtering engine used during match discovery. Given a seeker and a pool of
candidate profiles it eliminates candidates via deal-breakers, scores four
compatibility categories, aggregates them under a configurable algorithm,
gates on minimum thresholds and returns ranked, explainable results.

Key Design Decisions:
- Scoring functions are pure and synchronous over immutable value objects
- Missing profile data scores neutral and never triggers a deal-breaker
- Ranking is deterministic (score, then candidate id) for identical inputs
- Process-wide state (cooldowns, match queues) lives behind small store interfaces
"""

__version__ = "1.0.0"
