# utils/state_codec.py
"""
FilterState <-> wire models.

The frontend speaks camelCase JSON; services work on FilterState values.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from schemas import (
    DemographicScoringModel,
    FilterStateModel,
    FilterStateResponse,
    WeightIn,
    WeightOut,
)
from services.filter_state import DemographicScoring, FilterState, apply_filters, inactive_layers, initial_state
from services.weight_balancer import WeightEntry, entry_for_layer


def weights_from_wire(items: Sequence[WeightIn]) -> List[WeightEntry]:
    out: List[WeightEntry] = []
    for item in items:
        base = entry_for_layer(item.id)
        out.append(
            WeightEntry(
                id=item.id,
                value=item.value,
                label=item.label if item.label is not None else base.label,
                icon=item.icon if item.icon is not None else base.icon,
                color=item.color if item.color is not None else base.color,
            )
        )
    return out


def weights_to_wire(weights: Sequence[WeightEntry]) -> List[WeightOut]:
    return [WeightOut(id=w.id, value=int(w.value), label=w.label, icon=w.icon, color=w.color) for w in weights]


def _scoring_from_wire(model: DemographicScoringModel) -> DemographicScoring:
    return DemographicScoring(
        weights=dict(model.weights),
        threshold_bonuses=list(model.thresholdBonuses),
        penalties=list(model.penalties),
        reasoning=model.reasoning or "",
    )


def scoring_to_wire(scoring: DemographicScoring) -> DemographicScoringModel:
    return DemographicScoringModel(
        weights=dict(scoring.weights),
        thresholdBonuses=list(scoring.threshold_bonuses),
        penalties=list(scoring.penalties),
        reasoning=scoring.reasoning,
    )


def updates_from_wire(model: FilterStateModel) -> Dict[str, Any]:
    """
    Only the fields the caller actually sent, keyed by FilterState names.
    """
    updates: Dict[str, Any] = {}
    if model.weights is not None:
        updates["weights"] = weights_from_wire(model.weights)
    if model.rentRange is not None:
        updates["rent_range"] = model.rentRange
    if model.ageRange is not None:
        updates["age_range"] = model.ageRange
    if model.incomeRange is not None:
        updates["income_range"] = model.incomeRange
    if model.selectedEthnicities is not None:
        updates["selected_ethnicities"] = model.selectedEthnicities
    if model.selectedGenders is not None:
        updates["selected_genders"] = model.selectedGenders
    if model.selectedTimePeriods is not None:
        updates["selected_time_periods"] = model.selectedTimePeriods
    if model.demographicScoring is not None:
        updates["demographic_scoring"] = _scoring_from_wire(model.demographicScoring)
    return updates


def state_from_wire(model: Optional[FilterStateModel], base: Optional[FilterState] = None) -> FilterState:
    state = base or initial_state()
    if model is None:
        return state
    return apply_filters(state, updates_from_wire(model))


def state_to_wire(state: FilterState) -> FilterStateResponse:
    return FilterStateResponse(
        weights=weights_to_wire(state.weights),
        rentRange=tuple(state.rent_range),
        ageRange=tuple(state.age_range),
        incomeRange=tuple(state.income_range),
        selectedEthnicities=list(state.selected_ethnicities),
        selectedGenders=list(state.selected_genders),
        selectedTimePeriods=list(state.selected_time_periods),
        demographicScoring=scoring_to_wire(state.demographic_scoring),
        inactiveLayers=inactive_layers(state.weights),
    )
