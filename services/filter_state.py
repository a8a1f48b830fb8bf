# services/filter_state.py
"""
Validated filter state for the tract search.

FilterState is an immutable value. Every update goes through
apply_filters()/update_weight()/... and returns a new state with all
ranges clamped and weights summing to 100.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from config.scoring_defaults import (
    AGE_BOUNDS,
    DEFAULT_AGE_RANGE,
    DEFAULT_DEMOGRAPHIC_REASONING,
    DEFAULT_DEMOGRAPHIC_WEIGHTS,
    DEFAULT_INCOME_RANGE,
    DEFAULT_RENT_RANGE,
    DEMO_WEIGHT_BOUNDS,
    DEMO_WEIGHT_TOLERANCE,
    INCOME_BOUNDS,
    RENT_BOUNDS,
    VALID_GENDERS,
    VALID_TIME_PERIODS,
)
from services import weight_balancer
from services.weight_balancer import WeightEntry, WeightSet

logger = logging.getLogger(__name__)

Range = Tuple[float, float]


@dataclass(frozen=True)
class DemographicScoring:
    weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_DEMOGRAPHIC_WEIGHTS))
    threshold_bonuses: List[Dict[str, Any]] = field(default_factory=list)
    penalties: List[Dict[str, Any]] = field(default_factory=list)
    reasoning: str = DEFAULT_DEMOGRAPHIC_REASONING


@dataclass(frozen=True)
class FilterState:
    weights: WeightSet = field(default_factory=weight_balancer.default_weights)
    rent_range: Range = DEFAULT_RENT_RANGE
    age_range: Range = DEFAULT_AGE_RANGE
    income_range: Range = DEFAULT_INCOME_RANGE
    selected_ethnicities: List[str] = field(default_factory=list)
    selected_genders: List[str] = field(default_factory=lambda: list(VALID_GENDERS))
    selected_time_periods: List[str] = field(default_factory=lambda: list(VALID_TIME_PERIODS))
    demographic_scoring: DemographicScoring = field(default_factory=DemographicScoring)


# ------------------------------------------------------------
# Validation helpers
# ------------------------------------------------------------
def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def clamp_range(value: Sequence[float], lo: float, hi: float) -> Range:
    """
    Clamps both ends into [lo, hi] and returns them in ascending order.
    """
    start, end = value[0], value[1]
    a = _clamp(start, lo, hi)
    b = _clamp(end, lo, hi)
    return (min(a, b), max(a, b))


def validate_genders(genders: Optional[Sequence[str]]) -> List[str]:
    if not genders:
        logger.warning("Invalid gender selection, defaulting to both")
        return list(VALID_GENDERS)

    valid = [g for g in genders if g in VALID_GENDERS]
    if not valid:
        logger.warning("No valid genders found, defaulting to both")
        return list(VALID_GENDERS)
    return valid


def validate_time_periods(periods: Optional[Sequence[str]]) -> List[str]:
    valid = [p for p in (periods or []) if p in VALID_TIME_PERIODS]
    return valid or list(VALID_TIME_PERIODS)


def normalize_demographic_weights(weights: Mapping[str, float]) -> Dict[str, float]:
    lo, hi = DEMO_WEIGHT_BOUNDS
    clamped = {
        key: _clamp(float(weights.get(key, 0.0) or 0.0), lo, hi)
        for key in DEFAULT_DEMOGRAPHIC_WEIGHTS
    }
    total = sum(clamped.values())

    if total < DEMO_WEIGHT_TOLERANCE:
        logger.warning("Demographic weights sum to ~0, using balanced defaults")
        return dict(DEFAULT_DEMOGRAPHIC_WEIGHTS)

    if abs(total - 1.0) < DEMO_WEIGHT_TOLERANCE:
        return clamped

    logger.info("Normalizing demographic weights (total: %s)", total)
    return {key: value / total for key, value in clamped.items()}


def validate_demographic_scoring(scoring: DemographicScoring) -> DemographicScoring:
    return DemographicScoring(
        weights=normalize_demographic_weights(scoring.weights),
        threshold_bonuses=list(scoring.threshold_bonuses) if isinstance(scoring.threshold_bonuses, list) else [],
        penalties=list(scoring.penalties) if isinstance(scoring.penalties, list) else [],
        reasoning=scoring.reasoning if isinstance(scoring.reasoning, str) else "",
    )


# ------------------------------------------------------------
# State transitions
# ------------------------------------------------------------
def initial_state() -> FilterState:
    return FilterState()


def reset_state() -> FilterState:
    logger.info("Resetting filter state to initial values")
    return initial_state()


def apply_filters(state: FilterState, updates: Mapping[str, Any]) -> FilterState:
    """
    Returns `state` with the supplied fields validated and applied.
    Unknown keys are ignored.
    """
    changes: Dict[str, Any] = {}

    if updates.get("rent_range") is not None:
        changes["rent_range"] = clamp_range(updates["rent_range"], *RENT_BOUNDS)
    if updates.get("age_range") is not None:
        changes["age_range"] = clamp_range(updates["age_range"], *AGE_BOUNDS)
    if updates.get("income_range") is not None:
        changes["income_range"] = clamp_range(updates["income_range"], *INCOME_BOUNDS)

    if updates.get("selected_genders") is not None:
        changes["selected_genders"] = validate_genders(updates["selected_genders"])
    if updates.get("selected_ethnicities") is not None:
        ethnicities = updates["selected_ethnicities"]
        changes["selected_ethnicities"] = [e for e in ethnicities if isinstance(e, str)] if isinstance(ethnicities, list) else []
    if updates.get("selected_time_periods") is not None:
        changes["selected_time_periods"] = validate_time_periods(updates["selected_time_periods"])

    if updates.get("weights") is not None:
        changes["weights"] = weight_balancer.normalize_weights(updates["weights"])
    if updates.get("demographic_scoring") is not None:
        changes["demographic_scoring"] = validate_demographic_scoring(updates["demographic_scoring"])

    return replace(state, **changes)


def update_weight(state: FilterState, weight_id: str, value: float) -> FilterState:
    return replace(state, weights=weight_balancer.redistribute(state.weights, weight_id, value))


def add_weight(state: FilterState, layer_id: str) -> FilterState:
    entry = weight_balancer.entry_for_layer(layer_id)
    return replace(state, weights=weight_balancer.add_weight(state.weights, entry))


def remove_weight(state: FilterState, weight_id: str) -> FilterState:
    return replace(state, weights=weight_balancer.remove_weight(state.weights, weight_id))


def update_demographic_weights(state: FilterState, weights: Mapping[str, float]) -> FilterState:
    merged = {**state.demographic_scoring.weights, **weights}
    scoring = replace(state.demographic_scoring, weights=normalize_demographic_weights(merged))
    return replace(state, demographic_scoring=scoring)


def inactive_layers(weights: Sequence[WeightEntry]) -> List[Dict[str, str]]:
    active = {w.id for w in weights}
    return [layer for layer in weight_balancer.layer_catalog() if layer["id"] not in active]
