# routers/filters.py

from fastapi import APIRouter

from schemas import FilterStateModel, FilterStateResponse
from services.filter_state import initial_state
from utils.state_codec import state_from_wire, state_to_wire


router = APIRouter(
    prefix="/api/filters",
    tags=["Filters"],
)


@router.get("/defaults", response_model=FilterStateResponse)
def get_default_filters():
    return state_to_wire(initial_state())


@router.post("/apply", response_model=FilterStateResponse)
def apply_filter_updates(body: FilterStateModel):
    """
    Validates a (partial) filter state: ranges clamped and ordered, genders
    filtered, weights normalized to 100, demographic weights to 1.0.
    """
    return state_to_wire(state_from_wire(body))
