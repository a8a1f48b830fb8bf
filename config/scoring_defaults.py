# config/scoring_defaults.py
from __future__ import annotations

from typing import Dict, List, Tuple

# ------------------------------------------------------------
# Layer catalog (every scoring factor the edge function knows)
# ------------------------------------------------------------
LAYER_CATALOG: List[Dict[str, str]] = [
    {"id": "foot_traffic", "label": "Foot Traffic", "icon": "🚶", "color": "#4299E1"},
    {"id": "demographic", "label": "Demographics", "icon": "👥", "color": "#48BB78"},
    {"id": "crime", "label": "Crime Score", "icon": "🚨", "color": "#E53E3E"},
    {"id": "flood_risk", "label": "Flood Risk", "icon": "🌊", "color": "#3182CE"},
    {"id": "rent_score", "label": "Rent Score", "icon": "💰", "color": "#ED8936"},
    {"id": "poi", "label": "Points of Interest", "icon": "📍", "color": "#805AD5"},
]

LAYER_IDS: List[str] = [layer["id"] for layer in LAYER_CATALOG]

# Default allocation must sum to 100.
DEFAULT_WEIGHT_VALUES: Dict[str, int] = {
    "foot_traffic": 45,
    "demographic": 0,
    "crime": 25,
    "flood_risk": 15,
    "rent_score": 10,
    "poi": 5,
}

# ------------------------------------------------------------
# Validation bounds
# ------------------------------------------------------------
RENT_BOUNDS: Tuple[float, float] = (0, 500)
AGE_BOUNDS: Tuple[float, float] = (0, 100)
INCOME_BOUNDS: Tuple[float, float] = (0, 1_000_000)
WEIGHT_BOUNDS: Tuple[int, int] = (0, 100)
DEMO_WEIGHT_BOUNDS: Tuple[float, float] = (0.0, 1.0)
DEMO_WEIGHT_TOLERANCE = 0.001

# ------------------------------------------------------------
# Initial filter state
# ------------------------------------------------------------
DEFAULT_RENT_RANGE: Tuple[float, float] = (26, 160)
DEFAULT_AGE_RANGE: Tuple[float, float] = (0, 100)
DEFAULT_INCOME_RANGE: Tuple[float, float] = (0, 250_000)
VALID_GENDERS: List[str] = ["male", "female"]
VALID_TIME_PERIODS: List[str] = ["morning", "afternoon", "evening"]

DEFAULT_DEMOGRAPHIC_WEIGHTS: Dict[str, float] = {
    "ethnicity": 0.25,
    "gender": 0.25,
    "age": 0.25,
    "income": 0.25,
}
DEFAULT_DEMOGRAPHIC_REASONING = (
    "Default balanced weighting - all demographic factors equally important."
)

# Years requested from the edge function for crime trend charts.
CRIME_YEARS: List[str] = [
    "year_2021",
    "year_2022",
    "year_2023",
    "year_2024",
    "pred_2025",
    "pred_2026",
    "pred_2027",
]
DEFAULT_TOP_N = 10


def validate_defaults() -> None:
    total = sum(DEFAULT_WEIGHT_VALUES.values())
    if total != 100:
        raise ValueError(f"DEFAULT_WEIGHT_VALUES must sum to 100. Current sum = {total}")

    unknown = set(DEFAULT_WEIGHT_VALUES) - set(LAYER_IDS)
    if unknown:
        raise ValueError(f"DEFAULT_WEIGHT_VALUES references unknown layers: {sorted(unknown)}")


validate_defaults()
