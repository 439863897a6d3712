"""Deal-breaker catalog and hard-elimination filter."""

from .catalog import (
    DEAL_BREAKER_PREDICATES,
    DealBreaker,
    DealBreakerAnalysis,
    analyze_deal_breakers,
    apply_deal_breakers,
    is_deal_breaker_triggered,
    parse_deal_breaker,
)

__all__ = [
    "DEAL_BREAKER_PREDICATES",
    "DealBreaker",
    "DealBreakerAnalysis",
    "analyze_deal_breakers",
    "apply_deal_breakers",
    "is_deal_breaker_triggered",
    "parse_deal_breaker",
]
