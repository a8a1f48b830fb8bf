# tests/test_ethnicity_resolver.py

import logging

from config.ethnicity_data import ETHNICITY_DATA
from services.ethnicity_resolver import (
    ancestors_of,
    children_of,
    detect_conflicts,
    find_by_code,
    hierarchy_path,
    normalize_label,
    race_categories,
    resolve,
    validate_selection,
)

ASIAN_REGIONS = {"AEA", "ASA", "ASEA", "ACA", "AOth"}


def test_normalize_label():
    assert normalize_label("  Puerto Rican ") == "puertorican"
    assert normalize_label("Sub-Saharan African") == "subsaharanafrican"
    assert normalize_label("") == ""


def test_resolve_alias():
    assert resolve(["korean"]) == {"AEAKrn"}
    assert resolve(["Asian"]) == ASIAN_REGIONS


def test_resolve_parent_wins_over_child():
    assert resolve(["asian", "korean"]) == ASIAN_REGIONS


def test_resolve_direct_code_is_case_insensitive():
    assert resolve(["aeakrn"]) == {"AEAKrn"}
    assert resolve(["HMex"]) == {"HMex"}


def test_resolve_label_search():
    assert resolve(["Japanese"]) == {"AEAJpns"}
    assert resolve(["samoan"]) == {"NHPIPlySmn"}


def test_resolve_unmatched_and_junk_input(caplog):
    with caplog.at_level(logging.WARNING, logger="services.ethnicity_resolver"):
        assert resolve(["klingon"]) == set()
    assert any(
        r.levelno == logging.WARNING and "No ethnicity mapping found" in r.getMessage() for r in caplog.records
    )
    assert resolve([]) == set()
    assert resolve(["", "   ", 42, None]) == set()


def test_resolve_caribbean_spans_two_races():
    assert resolve(["caribbean"]) == {"BCrb", "HCH"}
    assert resolve(["caribbean", "cuban"]) == {"BCrb", "HCH"}


def test_resolve_is_idempotent():
    for labels in (["asian", "korean"], ["hispanic", "irish"], ["caribbean", "Japanese", "arab"]):
        first = resolve(labels)
        assert resolve(sorted(first)) == first


def test_resolve_never_returns_ancestor_descendant_pairs():
    labels = [opt.label for opt in ETHNICITY_DATA[::3]] + ["asian", "white", "latino"]
    codes = resolve(labels)
    for code in codes:
        assert not any(a in codes for a in ancestors_of(code))


def test_tree_lookups():
    assert ancestors_of("AEAKrn") == ["AEA", "A"]
    assert ancestors_of("A") == []
    assert ancestors_of("nope") == []
    assert "AEAKrn" in children_of("AEA")
    assert children_of("AEAKrn") == []
    assert [r.code for r in race_categories()] == ["H", "W", "B", "AIANA", "A", "NHPI", "SOR"]
    assert find_by_code("HMex").label == "Mexican"
    assert find_by_code("nope") is None


def test_hierarchy_path():
    assert hierarchy_path("AEAKrn") == ["Asian (A)", "East Asian", "Korean"]
    assert hierarchy_path("nope") == []


def test_detect_conflicts():
    conflicts = detect_conflicts({"AEA", "AEAKrn", "AEAJpns", "HMex"})
    assert len(conflicts) == 1
    assert conflicts[0].parent == "AEA"
    assert set(conflicts[0].children) == {"AEAKrn", "AEAJpns"}
    assert detect_conflicts({"HMex", "AEAKrn"}) == []


def test_validate_selection_empty():
    report = validate_selection([])
    assert report.is_valid
    assert report.suggestions


def test_validate_selection_flags_conflicts_and_unmapped():
    report = validate_selection(["asian", "korean", "klingon"])
    assert report.is_valid is False
    assert any("Hierarchy conflicts" in w for w in report.warnings)
    assert any("klingon" in w for w in report.warnings)


def test_validate_selection_many():
    labels = ["korean", "chinese", "mexican", "irish", "italian", "german", "cuban", "dominican", "arab"]
    report = validate_selection(labels)
    assert report.is_valid
    assert any("Many ethnicities" in w for w in report.warnings)
