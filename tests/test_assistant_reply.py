# tests/test_assistant_reply.py

import json

import pytest

from config.scoring_defaults import LAYER_IDS
from services.assistant_reply import (
    AssistantReplyError,
    parse_assistant_reply,
    validate_age_range,
    validate_demographic_scoring,
    validate_ethnicities,
    validate_income_range,
    validate_rent_range,
    validate_time_periods,
    validate_weights,
)
from services.business_context import analyze_business_request

GENERAL = analyze_business_request("a bookstore")
NIGHTLIFE = analyze_business_request("a cocktail bar")
HERITAGE = analyze_business_request("traditional mexican restaurant")
PROFESSIONAL = analyze_business_request("law office for an attorney")
ALL_HOURS = analyze_business_request("24 hour laundromat")


# ----------------------------------------------------------
# Ranges
# ----------------------------------------------------------
def test_age_range_is_clamped():
    assert validate_age_range((10, 90), GENERAL) == (18, 80)


def test_age_range_inverted_uses_context():
    assert validate_age_range((50, 30), GENERAL) == GENERAL.age


def test_age_range_too_wide_for_specific_business():
    assert validate_age_range((18, 80), NIGHTLIFE) == (22, 38)


def test_income_range_rules():
    assert validate_income_range((30000, 90000), PROFESSIONAL) == (50000, 90000)
    assert validate_income_range((70000, 150000), HERITAGE) == (30000, 150000)
    assert validate_income_range((5000, 999999), GENERAL) == (20000, 250000)
    assert validate_income_range((90000, 10000), ALL_HOURS) == (30000, 100000)


def test_rent_range_rules():
    assert validate_rent_range((10, 500), GENERAL) == (26, 160)
    assert validate_rent_range((200, 300), GENERAL) == (60, 120)
    assert validate_rent_range((200, 300), PROFESSIONAL) == (80, 150)
    assert validate_rent_range((200, 300), HERITAGE) == (40, 90)


def test_time_period_rules():
    assert validate_time_periods(["morning"], NIGHTLIFE) == ["evening"]
    assert validate_time_periods(["morning", "evening"], PROFESSIONAL) == ["morning"]
    assert validate_time_periods(["evening"], PROFESSIONAL) == ["morning", "afternoon"]
    assert validate_time_periods([], ALL_HOURS) == ["morning", "afternoon", "evening"]
    assert validate_time_periods(["midnight"], GENERAL) == ["afternoon"]


# ----------------------------------------------------------
# Collections
# ----------------------------------------------------------
def test_ethnicities_drop_unresolvable():
    assert validate_ethnicities(["korean", "klingon", 5]) == ["korean"]


def test_weights_normalized_and_filled():
    weights = validate_weights(
        [{"id": "crime", "value": 60}, {"id": "foot_traffic", "value": 60}, {"id": "poi", "value": -1}, "junk"]
    )
    values = {w.id: w.value for w in weights}
    assert values["crime"] == 50
    assert values["foot_traffic"] == 50
    assert sum(values.values()) == 100
    assert set(values) == set(LAYER_IDS)


def test_weights_with_repeated_id_keep_first():
    weights = validate_weights([{"id": "crime", "value": 60}, {"id": "crime", "value": 40}])
    ids = [w.id for w in weights]
    assert ids.count("crime") == 1
    assert len(ids) == len(LAYER_IDS)
    assert {w.id: w.value for w in weights}["crime"] == 100


def test_demographic_scoring_out_of_range_is_clamped_and_normalized():
    scoring = validate_demographic_scoring({"weights": {"ethnicity": 2, "age": 0.1, "income": 0.1, "gender": 0.1}})
    assert scoring.weights["ethnicity"] == pytest.approx(1 / 1.3)
    assert scoring.weights["age"] == pytest.approx(0.1 / 1.3)
    assert sum(scoring.weights.values()) == pytest.approx(1.0)


def test_demographic_scoring_sums_to_one_without_rounding_loss():
    scoring = validate_demographic_scoring({"weights": {"ethnicity": 0.3, "age": 0.3, "income": 0.3, "gender": 0.2}})
    assert sum(scoring.weights.values()) == pytest.approx(1.0)
    assert scoring.weights["gender"] == pytest.approx(0.2 / 1.1)


def test_demographic_scoring_ignores_non_numeric_weights():
    scoring = validate_demographic_scoring({"weights": {"ethnicity": "high", "age": 1}})
    assert scoring.weights == {"ethnicity": 0.0, "gender": 0.0, "age": 1.0, "income": 0.0}


def test_demographic_scoring_normalized_to_one():
    scoring = validate_demographic_scoring(
        {
            "weights": {"ethnicity": 0.5, "age": 0.5, "income": 0.5, "gender": 0.5},
            "reasoning": "Cultural fit first",
            "thresholdBonuses": [{"condition": "ethnic_pct > 0.4", "bonus": 0.15}],
        }
    )
    assert scoring.weights == {"ethnicity": 0.25, "age": 0.25, "income": 0.25, "gender": 0.25}
    assert scoring.reasoning == "Cultural fit first"
    assert len(scoring.threshold_bonuses) == 1
    assert scoring.penalties == []


# ----------------------------------------------------------
# Full replies
# ----------------------------------------------------------
def test_parse_reply_with_fences():
    text = "```json\n" + json.dumps({"ageRange": [25, 35], "message": "Done"}) + "\n```"
    reply = parse_assistant_reply(text, GENERAL)
    assert reply.message == "Done"
    assert reply.updates == {"age_range": (25.0, 35.0)}
    assert not reply.is_reset


def test_parse_reply_builds_updates():
    reply = parse_assistant_reply(
        json.dumps(
            {
                "selectedEthnicities": ["korean", "klingon"],
                "selectedGenders": ["female"],
                "selectedTimePeriods": ["morning"],
                "rentRange": [40, 90],
                "weights": [{"id": "demographic", "value": 100}],
            }
        ),
        NIGHTLIFE,
    )
    assert reply.business_type == "nightlife"
    assert reply.updates["selected_ethnicities"] == ["korean"]
    assert reply.updates["selected_genders"] == ["female"]
    assert reply.updates["selected_time_periods"] == ["evening"]
    assert reply.updates["rent_range"] == (40.0, 90.0)
    assert {w.id: w.value for w in reply.updates["weights"]}["demographic"] == 100


def test_parse_reset_reply():
    reply = parse_assistant_reply('{"intent": "reset", "message": "Reset!", "ageRange": [20, 30]}', GENERAL)
    assert reply.is_reset
    assert reply.updates == {}


@pytest.mark.parametrize("text", ["not json", "[1, 2]", "", None])
def test_parse_invalid_reply(text):
    with pytest.raises(AssistantReplyError, match="Invalid JSON response from AI"):
        parse_assistant_reply(text, GENERAL)
