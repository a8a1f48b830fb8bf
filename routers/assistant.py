# routers/assistant.py

from fastapi import APIRouter, HTTPException

from schemas import AssistantChatRequest, AssistantChatResponse
from services.assistant_reply import AssistantReplyError
from services.filter_state import apply_filters, reset_state
from services.gemini_assistant import AssistantUnavailableError, ask_assistant
from utils.state_codec import state_from_wire, state_to_wire


router = APIRouter(
    prefix="/api/assistant",
    tags=["Bricky Assistant"],
)


@router.post("/chat", response_model=AssistantChatResponse)
def chat(body: AssistantChatRequest):
    """
    One assistant turn. The reply's filter changes are validated and merged
    into the caller's current state; a reset intent returns the defaults.
    """
    current = state_from_wire(body.currentState)

    try:
        reply = ask_assistant(body.message, state_to_wire(current).model_dump())
    except AssistantUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except AssistantReplyError as e:
        raise HTTPException(status_code=502, detail=str(e))

    state = reset_state() if reply.is_reset else apply_filters(current, reply.updates)

    return {
        "intent": reply.intent,
        "message": reply.message,
        "businessType": reply.business_type,
        "filters": state_to_wire(state),
    }
