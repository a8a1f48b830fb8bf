# services/gemini_assistant.py

import json
import logging
import os
from typing import Any, Dict

import google.generativeai as genai
from dotenv import load_dotenv

from services.assistant_reply import AssistantReply, parse_assistant_reply
from services.business_context import analyze_business_request

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


class AssistantUnavailableError(RuntimeError):
    pass


def build_prompt(message: str, current_state: Dict[str, Any]) -> str:
    return f"""
You are Bricky, a stateful AI assistant for an NYC neighborhood filtering app. Your ONLY task is to return a valid JSON object. Do not add any markdown, comments, or text outside of the JSON object itself.

Your response should be a FLAT JSON object. It can also include a "message" key for user feedback and an "intent" key for special commands.
Example response:
{{
  "weights": [{{"id": "foot_traffic", "value": 40}}, {{"id": "crime", "value": 60}}],
  "selectedEthnicities": ["korean"],
  "message": "Okay, I've updated the filters for you."
}}

Allowed keys: weights, selectedEthnicities, selectedGenders, ageRange, incomeRange, rentRange, selectedTimePeriods, demographicScoring, message, intent.
Weight ids: foot_traffic, demographic, crime, flood_risk, rent_score, poi. Weight values must sum to 100.

--- SPECIAL COMMAND: RESET ---
If the user's request is to "reset", "start over", or "return to defaults", your ONLY response MUST be:
{{
  "intent": "reset",
  "message": "Okay, I've reset all filters to their defaults for you."
}}

--- CORE BEHAVIOR ---
- You are STATEFUL. The user's current filter settings are provided below.
- MODIFY the current state based on the user's new request. Do NOT reset filters unless the RESET rule applies.
- When you are only asking a clarifying question, return the current state unchanged and put your question in "message".

--- CURRENT FILTER STATE ---
{json.dumps(current_state, indent=2)}

--- USER REQUEST ---
{message}
"""


def ask_assistant(message: str, current_state: Dict[str, Any]) -> AssistantReply:
    """
    One assistant turn: classify the business, ask Gemini for updated filters,
    and validate the reply.
    """
    api_key = os.getenv("GOOGLE_API_KEY")
    if not api_key:
        raise AssistantUnavailableError("GOOGLE_API_KEY is not configured.")

    ctx = analyze_business_request(message)
    logger.info("Assistant request classified as %s (%s)", ctx.type, ctx.priority)

    genai.configure(api_key=api_key)
    model = genai.GenerativeModel(os.getenv("GEMINI_MODEL", DEFAULT_MODEL))

    try:
        response = model.generate_content(
            build_prompt(message, current_state),
            generation_config={"temperature": 0.25, "response_mime_type": "application/json"},
        )
        text = response.text
    except Exception as e:
        logger.error("Gemini request failed: %s", e)
        raise AssistantUnavailableError(f"Gemini request failed: {e}") from e

    return parse_assistant_reply(text, ctx)
