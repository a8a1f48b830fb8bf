# services/business_context.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

# ------------------------------------------------------------
# Keyword tables
# ------------------------------------------------------------
_NIGHTLIFE = [
    "bar", "club", "nightclub", "cocktail", "lounge", "speakeasy",
    "nightlife", "drinks", "alcohol", "beer", "wine", "spirits",
    "late night", "party", "dance", "dj", "music venue",
]

_HERITAGE = [
    "traditional", "authentic", "heritage", "ethnic", "cultural",
    "family recipe", "homemade", "grandmother", "old school",
    "chinese", "korean", "japanese", "italian", "mexican", "indian",
    "thai", "vietnamese", "greek", "lebanese", "ethiopian", "jamaican",
]
_FOOD = ["restaurant", "food", "cuisine", "kitchen", "deli", "bakery"]

_PREMIUM = [
    "artisan", "craft", "gourmet", "premium", "specialty", "boutique",
    "farm to table", "organic", "locally sourced", "fine dining",
    "coffee roaster", "third wave", "single origin", "small batch",
]

_ALL_HOURS = [
    "24 hour", "24/7", "all hours", "round the clock", "always open",
    "convenience store", "diner", "late night", "early morning",
]

_PROFESSIONAL = [
    "office", "consulting", "lawyer", "attorney", "accountant",
    "financial", "medical", "dental", "clinic", "therapy",
    "professional services", "business services", "corporate",
]


@dataclass(frozen=True)
class BusinessContext:
    type: str
    priority: str
    time_preference: List[str] = field(default_factory=list)
    age: Tuple[int, int] = (25, 45)
    income: Optional[Tuple[int, int]] = None


def _has_any(message: str, keywords: List[str]) -> bool:
    return any(k in message for k in keywords)


def analyze_business_request(message: str) -> BusinessContext:
    """
    Keyword classification of what the user wants to open.
    Checked in priority order; the first category that matches wins.
    """
    text = (message or "").lower()

    if _has_any(text, _NIGHTLIFE):
        return BusinessContext("nightlife", "cultural_fit", ["evening"], (22, 38), (45000, 120000))

    if _has_any(text, _HERITAGE) and _has_any(text, _FOOD):
        return BusinessContext("heritage_food", "cultural_fit", ["afternoon", "evening"], (25, 55), (30000, 100000))

    if _has_any(text, _PREMIUM):
        return BusinessContext(
            "premium_food", "cultural_fit", ["morning", "afternoon", "evening"], (22, 40), (50000, 130000)
        )

    if _has_any(text, _ALL_HOURS):
        return BusinessContext("all_hours", "foot_traffic", ["morning", "afternoon", "evening"], (18, 65))

    if _has_any(text, _PROFESSIONAL):
        return BusinessContext(
            "professional_services", "foot_traffic", ["morning", "afternoon"], (25, 45), (60000, 150000)
        )

    return BusinessContext("general", "balanced", ["afternoon"], (25, 45), (40000, 100000))
