# routers/weights.py

from typing import List

from fastapi import APIRouter

from schemas import (
    AddWeightRequest,
    NormalizeWeightsRequest,
    RedistributeRequest,
    RemoveWeightRequest,
    WeightDefaultsResponse,
    WeightIn,
    WeightSetResponse,
)
from services import weight_balancer
from services.weight_balancer import WeightEntry, clamp_weight
from utils.state_codec import weights_from_wire, weights_to_wire


router = APIRouter(
    prefix="/api/weights",
    tags=["Score Weighting"],
)


# ============================================================
# Helpers
# ============================================================

def _clamped(items: List[WeightIn]) -> List[WeightEntry]:
    """
    Slider values arrive as floats; the balancer works on clamped ints.
    """
    return [
        WeightEntry(id=w.id, value=clamp_weight(w.value), label=w.label, icon=w.icon, color=w.color)
        for w in weights_from_wire(items)
    ]


def _respond(weights: List[WeightEntry]) -> WeightSetResponse:
    return WeightSetResponse(weights=weights_to_wire(weights), total=weight_balancer.total_of(weights))


# ============================================================
# Endpoints
# ============================================================

@router.get("/defaults", response_model=WeightDefaultsResponse)
def get_default_weights():
    return {
        "weights": weights_to_wire(weight_balancer.default_weights()),
        "catalog": weight_balancer.layer_catalog(),
    }


@router.post("/redistribute", response_model=WeightSetResponse)
def redistribute_weights(body: RedistributeRequest):
    weights = _clamped(body.weights)
    return _respond(weight_balancer.redistribute(weights, body.changedId, clamp_weight(body.newValue)))


@router.post("/remove", response_model=WeightSetResponse)
def remove_weight(body: RemoveWeightRequest):
    return _respond(weight_balancer.remove_weight(_clamped(body.weights), body.id))


@router.post("/add", response_model=WeightSetResponse)
def add_weight(body: AddWeightRequest):
    entry = weight_balancer.entry_for_layer(body.layerId)
    return _respond(weight_balancer.add_weight(_clamped(body.weights), entry))


@router.post("/normalize", response_model=WeightSetResponse)
def normalize_weights(body: NormalizeWeightsRequest):
    return _respond(weight_balancer.normalize_weights(weights_from_wire(body.weights)))
