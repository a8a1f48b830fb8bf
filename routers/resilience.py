# routers/resilience.py

import logging

from fastapi import APIRouter, HTTPException

from schemas import ResilienceRequest, ResilienceResponse, ResilienceSearchRequest
from services.resilience_client import build_request, fetch_resilience_scores
from utils.state_codec import state_from_wire

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/resilience",
    tags=["Resilience Scores"],
)


@router.post("/request", response_model=ResilienceRequest)
def preview_request(body: ResilienceSearchRequest):
    """
    Returns the exact body that would be sent to the edge function.
    """
    return build_request(state_from_wire(body.filters), top_n=body.topN)


@router.post("/scores", response_model=ResilienceResponse)
def get_resilience_scores(body: ResilienceSearchRequest):
    request = build_request(state_from_wire(body.filters), top_n=body.topN)
    try:
        return fetch_resilience_scores(request)
    except RuntimeError as e:
        raise HTTPException(status_code=502, detail=f"Resilience scoring failed: {e}")
