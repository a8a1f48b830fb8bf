# services/assistant_reply.py
"""
Validation of the AI assistant's JSON replies.

The model is asked for a flat JSON object with any subset of the filter
fields (camelCase, as the UI uses them). Everything it sends is clamped to
realistic NYC values for the detected business type before it can reach
the filter state.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from config.scoring_defaults import LAYER_IDS, VALID_TIME_PERIODS
from services.business_context import BusinessContext
from services.ethnicity_resolver import resolve
from services.filter_state import DemographicScoring, normalize_demographic_weights, validate_genders
from services.weight_balancer import WeightEntry, entry_for_layer, normalize_weights

logger = logging.getLogger(__name__)

AGE_LIMITS = (18, 80)
INCOME_LIMITS = (20000, 250000)
RENT_LIMITS = (26, 160)
MAX_AGE_SPAN = 40


class AssistantReplyError(ValueError):
    pass


@dataclass
class AssistantReply:
    business_type: str
    intent: Optional[str] = None
    message: Optional[str] = None
    # FilterState field name -> validated value
    updates: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_reset(self) -> bool:
        return self.intent == "reset"


# ------------------------------------------------------------
# Helpers
# ------------------------------------------------------------
def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _pair(value: Any) -> Optional[Tuple[float, float]]:
    if isinstance(value, (list, tuple)) and len(value) >= 2 and _is_number(value[0]) and _is_number(value[1]):
        return float(value[0]), float(value[1])
    return None


def _strip_fences(text: str) -> str:
    text = (text or "").strip()
    if text.startswith("```"):
        text = text.strip("`").strip()
        if text.lower().startswith("json"):
            text = text[4:].strip()
    return text


# ------------------------------------------------------------
# Field validators
# ------------------------------------------------------------
def validate_age_range(age: Tuple[float, float], ctx: BusinessContext) -> Tuple[float, float]:
    lo, hi = age
    lo = max(lo, AGE_LIMITS[0])
    hi = min(hi, AGE_LIMITS[1])

    if lo >= hi:
        lo, hi = ctx.age

    if hi - lo > MAX_AGE_SPAN and ctx.type != "general":
        logger.info("Narrowing age range for %s business", ctx.type)
        lo, hi = ctx.age

    return (lo, hi)


def validate_income_range(income: Tuple[float, float], ctx: BusinessContext) -> Tuple[float, float]:
    lo, hi = income
    lo = max(lo, INCOME_LIMITS[0])
    hi = min(hi, INCOME_LIMITS[1])

    if lo >= hi:
        lo, hi = ctx.income or (30000, 100000)

    if ctx.type == "professional_services" and lo < 50000:
        lo = 50000
    if ctx.type == "heritage_food" and lo > 60000:
        lo = 30000

    return (lo, hi)


def validate_rent_range(rent: Tuple[float, float], ctx: BusinessContext) -> Tuple[float, float]:
    lo, hi = rent
    lo = max(lo, RENT_LIMITS[0])
    hi = min(hi, RENT_LIMITS[1])

    if lo >= hi:
        if ctx.type == "professional_services":
            lo, hi = 80, 150
        elif ctx.type == "heritage_food":
            lo, hi = 40, 90
        else:
            lo, hi = 60, 120

    return (lo, hi)


def validate_time_periods(periods: Sequence[Any], ctx: BusinessContext) -> List[str]:
    kept = [p for p in periods if p in VALID_TIME_PERIODS]

    if ctx.type == "nightlife":
        kept = ["evening"]
    elif ctx.type == "professional_services":
        kept = [p for p in kept if p != "evening"] or ["morning", "afternoon"]
    elif ctx.type == "all_hours":
        kept = list(VALID_TIME_PERIODS)

    return kept or list(ctx.time_preference) or ["afternoon"]


def validate_ethnicities(labels: Sequence[Any]) -> List[str]:
    kept = [e for e in labels if isinstance(e, str) and resolve([e])]
    dropped = [e for e in labels if e not in kept]
    if dropped:
        logger.warning("Invalid ethnicities filtered out: %s", dropped)
    return kept


def validate_weights(items: Sequence[Any]) -> List[WeightEntry]:
    entries: List[WeightEntry] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        wid, value = item.get("id"), item.get("value")
        if not isinstance(wid, str) or not _is_number(value) or value < 0:
            continue
        base = entry_for_layer(wid)
        entries.append(
            WeightEntry(
                id=wid,
                value=value,
                label=item.get("label") or base.label,
                icon=item.get("icon") or base.icon,
                color=item.get("color") or base.color,
            )
        )

    weights = normalize_weights(entries)

    present = {w.id for w in weights}
    weights.extend(entry_for_layer(layer_id, 0) for layer_id in LAYER_IDS if layer_id not in present)
    return weights


def validate_demographic_scoring(raw: Dict[str, Any]) -> DemographicScoring:
    weights = raw.get("weights") if isinstance(raw.get("weights"), dict) else {}
    numeric = {k: float(v) for k, v in weights.items() if _is_number(v) and math.isfinite(v)}
    if len(numeric) != len(weights):
        logger.warning("Non-numeric demographic weights ignored: %s", sorted(set(weights) - set(numeric)))

    bonuses = raw.get("thresholdBonuses")
    penalties = raw.get("penalties")
    reasoning = raw.get("reasoning")
    return DemographicScoring(
        weights=normalize_demographic_weights(numeric),
        threshold_bonuses=bonuses if isinstance(bonuses, list) else [],
        penalties=penalties if isinstance(penalties, list) else [],
        reasoning=reasoning if isinstance(reasoning, str) else "",
    )


# ------------------------------------------------------------
# Public entrypoint
# ------------------------------------------------------------
def parse_assistant_reply(reply_text: str, ctx: BusinessContext) -> AssistantReply:
    """
    Parses and validates one model reply. Raises AssistantReplyError when the
    reply is not a JSON object.
    """
    try:
        data = json.loads(_strip_fences(reply_text))
    except (TypeError, ValueError) as e:
        logger.error("Failed to parse assistant reply: %s", e)
        raise AssistantReplyError("Invalid JSON response from AI") from e

    if not isinstance(data, dict):
        raise AssistantReplyError("Invalid JSON response from AI")

    reply = AssistantReply(
        business_type=ctx.type,
        intent=data.get("intent") if isinstance(data.get("intent"), str) else None,
        message=data.get("message") if isinstance(data.get("message"), str) else None,
    )
    if reply.is_reset:
        return reply

    updates = reply.updates

    if isinstance(data.get("weights"), list):
        updates["weights"] = validate_weights(data["weights"])

    age = _pair(data.get("ageRange"))
    if age:
        updates["age_range"] = validate_age_range(age, ctx)

    income = _pair(data.get("incomeRange"))
    if income:
        updates["income_range"] = validate_income_range(income, ctx)

    rent = _pair(data.get("rentRange"))
    if rent:
        updates["rent_range"] = validate_rent_range(rent, ctx)

    if isinstance(data.get("selectedTimePeriods"), list):
        updates["selected_time_periods"] = validate_time_periods(data["selectedTimePeriods"], ctx)

    if isinstance(data.get("selectedGenders"), list):
        updates["selected_genders"] = validate_genders(data["selectedGenders"])

    if isinstance(data.get("selectedEthnicities"), list):
        updates["selected_ethnicities"] = validate_ethnicities(data["selectedEthnicities"])

    if isinstance(data.get("demographicScoring"), dict):
        updates["demographic_scoring"] = validate_demographic_scoring(data["demographicScoring"])

    logger.info("Assistant reply validated for %s business: %s", ctx.type, sorted(updates))
    return reply
