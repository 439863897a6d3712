"""Match discovery: orchestrator, validation, stores and result types."""

from .errors import CooldownActiveError, MatchingError, MatchingValidationError, ValidationIssue
from .orchestrator import DiscoveryState, MatchOrchestrator
from .results import (
    DiscoveryResult,
    DiscoveryStats,
    MatchFactors,
    PreferenceAlignmentSummary,
    PreferenceMatchResult,
    make_match_id,
)
from .stores import (
    CooldownStore,
    InMemoryCooldownStore,
    InMemoryMatchQueueStore,
    MatchQueue,
    MatchQueueStore,
)
from .validation import active_deal_breakers, ensure_valid_criteria, validate_criteria

__all__ = [
    "CooldownActiveError",
    "MatchingError",
    "MatchingValidationError",
    "ValidationIssue",
    "DiscoveryState",
    "MatchOrchestrator",
    "DiscoveryResult",
    "DiscoveryStats",
    "MatchFactors",
    "PreferenceAlignmentSummary",
    "PreferenceMatchResult",
    "make_match_id",
    "CooldownStore",
    "InMemoryCooldownStore",
    "InMemoryMatchQueueStore",
    "MatchQueue",
    "MatchQueueStore",
    "active_deal_breakers",
    "ensure_valid_criteria",
    "validate_criteria",
]
