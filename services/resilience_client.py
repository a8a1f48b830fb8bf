# services/resilience_client.py

"""
Client for the `calculate-resilience` Supabase edge function.

build_request() turns a FilterState into the edge-function body:
weights as [{id, value}], ethnicity labels resolved to conflict-free codes,
and every range already clamped. fetch_resilience_scores() posts it and
validates the zones that come back.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from config.scoring_defaults import CRIME_YEARS, DEFAULT_TOP_N
from config.supabase_env import load_supabase_env
from schemas import ResilienceRequest, ResilienceResponse, WeightPayload
from services.ethnicity_resolver import resolve
from services.filter_state import FilterState
from utils import supabase_client
from utils.state_codec import scoring_to_wire

logger = logging.getLogger(__name__)


def build_request(state: FilterState, top_n: int = DEFAULT_TOP_N) -> ResilienceRequest:
    return ResilienceRequest(
        weights=[WeightPayload(**w.as_payload()) for w in state.weights],
        ethnicities=sorted(resolve(state.selected_ethnicities)),
        genders=list(state.selected_genders),
        ageRange=tuple(state.age_range),
        incomeRange=tuple(state.income_range),
        rentRange=tuple(state.rent_range),
        selectedTimePeriods=list(state.selected_time_periods),
        demographicScoring=scoring_to_wire(state.demographic_scoring),
        crimeYears=list(CRIME_YEARS),
        topN=top_n,
    )


def fetch_resilience_scores(
    request: ResilienceRequest,
    function_name: Optional[str] = None,
) -> ResilienceResponse:
    name = function_name or load_supabase_env().function_name

    logger.info(
        "Requesting resilience scores: %d weights, %d ethnicity codes, topN=%d",
        len(request.weights),
        len(request.ethnicities),
        request.topN,
    )

    try:
        data = supabase_client.invoke_function(name, request.model_dump())
    except RuntimeError as e:
        logger.error("Resilience edge function failed: %s", e)
        raise

    try:
        response = ResilienceResponse.model_validate(data)
    except ValidationError as e:
        raise RuntimeError(f"Resilience edge function returned a malformed payload: {e}") from e

    logger.info(
        "Resilience scores received: %d zones (%d found)",
        len(response.zones),
        response.total_zones_found,
    )
    return response
