"""
Match orchestrator: one discovery pass for one seeker.

States (each runs exactly once, in order):
    INIT -> LOCATION_FILTER -> DEAL_BREAKER_FILTER -> CATEGORY_SCORE
         -> THRESHOLD_GATE -> RANK -> TRUNCATE -> DONE

INIT rejects seekers on cooldown and invalid criteria. A failure while
scoring one candidate drops that candidate and is logged; it never aborts
the pass. DONE starts the seeker's cooldown and stores the ranked queue.

All collaborators are injected, so tests can pass fakes for the stores,
the distance function and the clock.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from ..alignment.preferences import align_preferences
from ..configs.settings import FilteringConfig, MatchingConfig
from ..dealbreakers.catalog import analyze_deal_breakers, apply_deal_breakers
from ..evaluation.metrics import PreferenceMatchAnalytics, compute_preference_match_analytics
from ..explanation.explain import MatchExplanation, explain, improvement_suggestions, summarize_match
from ..fusion.aggregate import AggregationConfig, CompatibilityAggregator
from ..gating.thresholds import ThresholdGate
from ..geo.distance import DistanceFn, haversine_distance
from ..optimization.advisor import OptimizationGoals, OptimizationSuggestions, optimize
from ..profiles.schema import (
    AdvancedMatchingCriteria,
    AgeRange,
    CategoryWeights,
    MatchingPreferences,
    Profile,
    RelationshipType,
    SearchFilters,
    SexualOrientation,
    SortBy,
    SortDirection,
)
from ..scoring.categories import calculate_category_scores
from .errors import CooldownActiveError
from .filters import basic_score, candidate_distance, compute_match_factors, passes_basic_filters, within_radius
from .results import (
    DiscoveryResult,
    DiscoveryStats,
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
from .validation import active_deal_breakers, ensure_valid_criteria

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DEFAULT_AGE_RANGE = AgeRange(22, 35)
DEFAULT_ACTIVE_WITHIN_HOURS = 168.0


class DiscoveryState(Enum):
    INIT = "init"
    LOCATION_FILTER = "location_filter"
    DEAL_BREAKER_FILTER = "deal_breaker_filter"
    CATEGORY_SCORE = "category_score"
    THRESHOLD_GATE = "threshold_gate"
    RANK = "rank"
    TRUNCATE = "truncate"
    DONE = "done"


@dataclass
class _Scored:
    """A scored result kept next to its candidate for ranking."""
    result: PreferenceMatchResult
    candidate: Profile


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MatchOrchestrator:
    """
    Runs preference-based discovery over a candidate pool.

    Attributes:
        filtering_config: Preference filtering settings
        matching_config: Discovery limits and feature flags
        cooldown_store: Per-seeker cooldown deadlines
        queue_store: Latest ranked queue per seeker
        distance_fn: (GeoPoint, GeoPoint) -> DistanceCalculation
        clock: Returns the current UTC time
        aggregator: Combines category scores under the configured algorithm
    """

    def __init__(
        self,
        filtering_config: Optional[FilteringConfig] = None,
        matching_config: Optional[MatchingConfig] = None,
        cooldown_store: Optional[CooldownStore] = None,
        queue_store: Optional[MatchQueueStore] = None,
        distance_fn: DistanceFn = haversine_distance,
        clock: Clock = _utc_now
    ):
        self.filtering_config = filtering_config or FilteringConfig()
        self.matching_config = matching_config or MatchingConfig()
        self.cooldown_store = cooldown_store or InMemoryCooldownStore()
        self.queue_store = queue_store or InMemoryMatchQueueStore()
        self.distance_fn = distance_fn
        self.clock = clock
        self.aggregator = CompatibilityAggregator(AggregationConfig.from_filtering_config(self.filtering_config))

        for issue in self.filtering_config.validate() + self.matching_config.validate():
            logger.warning(f"Config issue: {issue}")
        logger.info(
            f"Initialized MatchOrchestrator with algorithm={self.filtering_config.scoring_algorithm}, "
            f"max_results={self.matching_config.max_results}"
        )

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def find_matches(
        self,
        seeker: Profile,
        criteria: AdvancedMatchingCriteria,
        candidates: Sequence[Profile]
    ) -> List[PreferenceMatchResult]:
        """Ranked, truncated results for one discovery request."""
        return self.discover(seeker, criteria, candidates).results

    def discover(
        self,
        seeker: Profile,
        criteria: AdvancedMatchingCriteria,
        candidates: Sequence[Profile]
    ) -> DiscoveryResult:
        """
        Run one full discovery pass.

        Args:
            seeker: The seeker's profile
            criteria: Discovery request
            candidates: Candidate pool

        Returns:
            DiscoveryResult with ranked results and per-state counts

        Raises:
            CooldownActiveError: If the seeker is on cooldown
            MatchingValidationError: If the criteria are invalid (lists every issue)
        """
        now = self.clock()

        # INIT
        cooldown_until = self.cooldown_store.get(seeker.profile_id)
        if cooldown_until is not None and now < cooldown_until:
            raise CooldownActiveError(seeker.profile_id, cooldown_until)
        ensure_valid_criteria(criteria, self.matching_config, seeker_id=seeker.profile_id)

        discovery = self._run_pipeline(seeker, criteria, candidates, now)

        # DONE
        if self.matching_config.cooldown_minutes > 0:
            self.cooldown_store.set(
                seeker.profile_id, now + timedelta(minutes=self.matching_config.cooldown_minutes)
            )
        self.queue_store.set(seeker.profile_id, MatchQueue(
            queue_id=f"queue_{seeker.profile_id}_{int(now.timestamp())}",
            seeker_id=seeker.profile_id,
            pending_matches=list(discovery.results),
            total_count=len(discovery.results),
            last_processed_at=now,
        ))
        discovery.stats.stage_counts[DiscoveryState.DONE.value] = len(discovery.results)

        logger.info(f"Returning {len(discovery.results)} matches for user {seeker.profile_id}")
        return discovery

    def _run_pipeline(
        self,
        seeker: Profile,
        criteria: AdvancedMatchingCriteria,
        candidates: Sequence[Profile],
        now: datetime
    ) -> DiscoveryResult:
        """States LOCATION_FILTER through TRUNCATE; no cooldown or queue side effects."""
        stats = DiscoveryStats()
        stats.stage_counts[DiscoveryState.INIT.value] = len(candidates)

        # Scorers read the request's preferences through the seeker profile
        effective_seeker = replace(seeker, preferences=criteria.preferences)

        # LOCATION_FILTER
        pool = []
        for candidate in candidates:
            if not passes_basic_filters(
                effective_seeker, candidate, criteria, now, self.matching_config.enable_age_filtering
            ):
                continue
            try:
                distance_km = candidate_distance(effective_seeker, candidate, self.distance_fn)
            except Exception as e:
                logger.warning(f"Error computing distance to {candidate.profile_id}, dropping it: {e}")
                stats.dropped += 1
                stats.dropped_ids.append(candidate.profile_id)
                continue
            if self.matching_config.enable_location_filtering and not within_radius(
                distance_km, criteria.preferences.max_distance_km
            ):
                continue
            pool.append((candidate, distance_km))
        stats.stage_counts[DiscoveryState.LOCATION_FILTER.value] = len(pool)
        logger.info(f"Found {len(pool)} potential candidates for {seeker.profile_id}")

        # DEAL_BREAKER_FILTER
        deal_breaker_ids = active_deal_breakers(criteria)
        kept = apply_deal_breakers(
            effective_seeker,
            [candidate for candidate, _ in pool],
            deal_breaker_ids,
            now=now,
            enabled=criteria.enable_advanced_filtering and self.filtering_config.enable_deal_breaker_filtering,
        )
        kept_ids = {candidate.profile_id for candidate in kept}
        pool = [(candidate, distance) for candidate, distance in pool if candidate.profile_id in kept_ids]
        stats.stage_counts[DiscoveryState.DEAL_BREAKER_FILTER.value] = len(pool)

        # CATEGORY_SCORE
        weights = self._effective_weights(criteria)
        scored = self._score_pool(effective_seeker, criteria, pool, deal_breaker_ids, weights, now, stats)
        stats.stage_counts[DiscoveryState.CATEGORY_SCORE.value] = len(scored)

        # THRESHOLD_GATE
        gate = ThresholdGate.from_thresholds(criteria.thresholds)
        scored = gate.apply(
            scored,
            overall_of=lambda s: s.result.compatibility_score,
            categories_of=lambda s: s.result.category_scores,
        )
        stats.stage_counts[DiscoveryState.THRESHOLD_GATE.value] = len(scored)

        # RANK
        ranked = self._rank(scored, criteria)
        stats.stage_counts[DiscoveryState.RANK.value] = len(ranked)

        # TRUNCATE
        results = [s.result for s in ranked[:self.matching_config.max_results]]
        stats.stage_counts[DiscoveryState.TRUNCATE.value] = len(results)

        logger.info(
            f"Advanced matching completed for {seeker.profile_id}: {len(results)} matches "
            f"({stats.dropped} dropped)"
        )
        return DiscoveryResult(results=results, stats=stats)

    def _effective_weights(self, criteria: AdvancedMatchingCriteria) -> CategoryWeights:
        if self.filtering_config.enable_category_weighting:
            return criteria.weights
        return self.aggregator.config.weights

    def _score_pool(
        self,
        seeker: Profile,
        criteria: AdvancedMatchingCriteria,
        pool: List[tuple],
        deal_breaker_ids: List[str],
        weights: CategoryWeights,
        now: datetime,
        stats: DiscoveryStats
    ) -> List[_Scored]:
        def safe_score(item):
            candidate, distance_km = item
            try:
                return self._score_candidate(seeker, candidate, criteria, distance_km, deal_breaker_ids, weights, now)
            except Exception as e:
                logger.warning(f"Error scoring candidate {candidate.profile_id}, dropping it: {e}")
                return candidate.profile_id

        max_workers = self.matching_config.max_workers
        if max_workers and len(pool) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                outcomes = list(executor.map(safe_score, pool))
        else:
            outcomes = [safe_score(item) for item in pool]

        scored = []
        for outcome in outcomes:
            if isinstance(outcome, _Scored):
                scored.append(outcome)
            else:
                stats.dropped += 1
                stats.dropped_ids.append(outcome)
        return scored

    def _score_candidate(
        self,
        seeker: Profile,
        candidate: Profile,
        criteria: AdvancedMatchingCriteria,
        distance_km: Optional[float],
        deal_breaker_ids: List[str],
        weights: CategoryWeights,
        now: datetime
    ) -> _Scored:
        category_scores = calculate_category_scores(seeker, candidate)
        overall = self.aggregator.score(category_scores, weights)
        alignment = align_preferences(
            seeker, candidate, criteria.must_haves, criteria.nice_to_haves, distance_km=distance_km, now=now
        )
        deal_breaker_analysis = analyze_deal_breakers(seeker, candidate, deal_breaker_ids, now)
        factors = compute_match_factors(seeker, candidate, distance_km, criteria.preferences.max_distance_km, now)

        logger.debug(f"Scored {candidate.profile_id}: overall={overall:.4f} {category_scores.scores()}")

        result = PreferenceMatchResult(
            match_id=make_match_id(seeker.profile_id, candidate.profile_id),
            seeker_id=seeker.profile_id,
            candidate_id=candidate.profile_id,
            score=basic_score(factors, candidate),
            compatibility_score=overall,
            category_scores=category_scores.scores(),
            category_breakdown={name: dict(c.breakdown) for name, c in category_scores.items()},
            preference_alignment=PreferenceAlignmentSummary(
                matches=alignment.matched.flattened(),
                mismatches=alignment.mismatched.flattened(),
                deal_breakers_passed=deal_breaker_analysis.passed,
                must_haves_satisfied=alignment.must_haves.matched,
                nice_to_haves_matched=alignment.nice_to_haves.matched,
            ),
            matched_preferences=alignment.matched,
            mismatched_preferences=alignment.mismatched,
            deal_breaker_analysis=deal_breaker_analysis,
            must_have_analysis=alignment.must_haves,
            nice_to_have_analysis=alignment.nice_to_haves,
            match_explanation=summarize_match(overall, category_scores),
            improvement_suggestions=improvement_suggestions(category_scores),
            distance_km=distance_km,
            match_factors=factors,
            created_at=now,
            expires_at=now + timedelta(days=self.matching_config.match_expiry_days),
        )
        return _Scored(result=result, candidate=candidate)

    def _rank(self, scored: List[_Scored], criteria: AdvancedMatchingCriteria) -> List[_Scored]:
        """
        Deterministic ranking.

        The primary key follows the sort spec, where DESC means best first
        (highest compatibility, closest, most recently active, verified).
        Ties break on must-haves satisfied, then nice-to-haves matched, then
        candidate id ascending. Stable sorts are applied from the last key
        to the first.
        """
        ranked = sorted(scored, key=lambda s: s.result.candidate_id)
        if self.filtering_config.enable_nice_to_have_boosts:
            ranked.sort(key=lambda s: s.result.preference_alignment.nice_to_haves_matched, reverse=True)
        if self.filtering_config.enable_must_have_filtering:
            ranked.sort(key=lambda s: s.result.preference_alignment.must_haves_satisfied, reverse=True)

        sort_by = criteria.sort.by
        if sort_by == SortBy.RANDOM:
            logger.debug("Random sort is not supported, ranking by compatibility")
            sort_by = SortBy.COMPATIBILITY
        ranked.sort(
            key=lambda s: self._primary_key(s, sort_by),
            reverse=criteria.sort.direction == SortDirection.DESC,
        )
        return ranked

    @staticmethod
    def _primary_key(scored: _Scored, sort_by: SortBy) -> tuple:
        result, candidate = scored.result, scored.candidate
        if sort_by == SortBy.DISTANCE:
            distance = result.distance_km
            return (distance is not None, -distance if distance is not None else 0.0)
        if sort_by == SortBy.ACTIVITY:
            active = candidate.last_active_at
            return (active is not None, active.timestamp() if active is not None else 0.0)
        if sort_by == SortBy.VERIFICATION:
            return (candidate.is_verified, candidate.verification_score or 0.0)
        return (result.compatibility_score,)

    # ------------------------------------------------------------------
    # Explanation, optimization and analytics
    # ------------------------------------------------------------------

    def default_criteria(self, profile: Profile) -> AdvancedMatchingCriteria:
        """Criteria derived from a profile's own preferences and the configured defaults."""
        prefs = profile.preferences or MatchingPreferences(max_distance_km=self.matching_config.default_radius_km)
        if prefs.age_range is None:
            prefs = replace(prefs, age_range=DEFAULT_AGE_RANGE)
        # No stated orientation or relationship preference accepts every option
        if not prefs.sexual_orientations:
            prefs = replace(prefs, sexual_orientations=frozenset(SexualOrientation))
        if not prefs.relationship_types:
            prefs = replace(prefs, relationship_types=profile.looking_for or frozenset(RelationshipType))
        return AdvancedMatchingCriteria(
            seeker_id=profile.profile_id,
            preferences=prefs,
            weights=self.filtering_config.default_weights,
            thresholds=self.filtering_config.default_thresholds,
            deal_breakers=prefs.deal_breakers,
            filters=SearchFilters(
                is_verified=True,
                has_photos=True,
                last_active_within_hours=DEFAULT_ACTIVE_WITHIN_HOURS,
            ),
        )

    def explain_match_reasons(self, results: Sequence[PreferenceMatchResult]) -> List[MatchExplanation]:
        """Explain why each result was suggested."""
        return [
            explain(
                result.category_scores,
                result.preference_alignment.matches,
                result.compatibility_score,
                match_id=result.match_id,
            )
            for result in results
        ]

    def suggest_preference_optimizations(
        self,
        seeker: Profile,
        goals: OptimizationGoals,
        candidates: Sequence[Profile],
        criteria: Optional[AdvancedMatchingCriteria] = None
    ) -> OptimizationSuggestions:
        """
        Suggest preference changes based on a fresh pass over the pool.

        The pass does not check or start the seeker's cooldown.
        """
        criteria = criteria or self.default_criteria(seeker)
        results = self._run_pipeline(seeker, criteria, candidates, self.clock()).results
        return optimize(seeker, goals, results, criteria)

    def get_preference_match_analytics(
        self,
        seeker: Profile,
        candidates: Sequence[Profile],
        criteria: Optional[AdvancedMatchingCriteria] = None
    ) -> PreferenceMatchAnalytics:
        """Analytics for a fresh pass over the pool (no cooldown side effects)."""
        criteria = criteria or self.default_criteria(seeker)
        results = self._run_pipeline(seeker, criteria, candidates, self.clock()).results
        return compute_preference_match_analytics(seeker.profile_id, results, self._effective_weights(criteria))

    # ------------------------------------------------------------------
    # Queue and cooldown administration
    # ------------------------------------------------------------------

    def get_match_queue(self, seeker_id: str) -> Optional[MatchQueue]:
        return self.queue_store.get(seeker_id)

    def clear_cooldown(self, seeker_id: str) -> None:
        self.cooldown_store.clear(seeker_id)

    def active_cooldowns(self) -> Dict[str, datetime]:
        """Cooldowns that have not yet elapsed."""
        now = self.clock()
        return {seeker_id: until for seeker_id, until in self.cooldown_store.items().items() if until > now}
