# services/ethnicity_resolver.py
"""
Free-form ethnicity labels → census ancestry codes.

Resolution order per label:
  1) alias table (common names)
  2) direct code match
  3) substring match against display labels

The resolved set never contains a code together with one of its ancestors;
the ancestor wins. Unmatched labels are dropped with a warning.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Set, Tuple

from config.ethnicity_data import (
    ETHNICITY_ALIASES,
    ETHNICITY_BY_CODE,
    ETHNICITY_DATA,
    EthnicityOption,
)

logger = logging.getLogger(__name__)

_NON_LETTERS = re.compile(r"[^a-z]")

MAX_RECOMMENDED_SELECTION = 8


# =============================================================================
# Data structures
# =============================================================================

@dataclass(frozen=True)
class Conflict:
    parent: str
    children: Tuple[str, ...]


@dataclass
class SelectionReport:
    is_valid: bool = True
    warnings: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)


# =============================================================================
# Tree lookups
# =============================================================================

def normalize_label(text: str) -> str:
    return _NON_LETTERS.sub("", (text or "").lower())


@lru_cache(maxsize=1)
def _children_map() -> Dict[str, Tuple[str, ...]]:
    out: Dict[str, List[str]] = {}
    for opt in ETHNICITY_DATA:
        if opt.is_race:
            continue
        out.setdefault(opt.parent, []).append(opt.code)
    return {k: tuple(v) for k, v in out.items()}


@lru_cache(maxsize=1)
def _normalized_labels() -> Tuple[Tuple[str, str], ...]:
    return tuple((normalize_label(opt.label), opt.code) for opt in ETHNICITY_DATA)


@lru_cache(maxsize=1)
def _codes_by_lower() -> Dict[str, str]:
    return {opt.code.lower(): opt.code for opt in ETHNICITY_DATA}


def find_by_code(code: str) -> Optional[EthnicityOption]:
    return ETHNICITY_BY_CODE.get(code)


def children_of(code: str) -> List[str]:
    return list(_children_map().get(code, ()))


def race_categories() -> List[EthnicityOption]:
    return [opt for opt in ETHNICITY_DATA if opt.is_race]


def ancestors_of(code: str) -> List[str]:
    """
    Parent chain from the direct parent up to the race root.
    """
    out: List[str] = []
    current = ETHNICITY_BY_CODE.get(code)
    while current is not None and not current.is_race:
        out.append(current.parent)
        current = ETHNICITY_BY_CODE.get(current.parent)
    return out


def hierarchy_path(code: str) -> List[str]:
    """
    Labels from the race root down to `code`. Empty for unknown codes.
    """
    if code not in ETHNICITY_BY_CODE:
        return []
    chain = [code] + ancestors_of(code)
    return [ETHNICITY_BY_CODE[c].label for c in reversed(chain)]


# =============================================================================
# Matching
# =============================================================================

def _match_label(raw: str) -> Tuple[List[str], str]:
    """
    Returns (codes, method). Empty codes means no match.
    """
    normalized = normalize_label(raw)
    if not normalized:
        return [], "empty"

    mapped = ETHNICITY_ALIASES.get(normalized)
    if mapped:
        return list(mapped), "alias"

    direct = _codes_by_lower().get(normalized)
    if direct:
        return [direct], "direct_code"

    for label_norm, code in _normalized_labels():
        if normalized in label_norm:
            return [code], "label_search"

    return [], "no_match"


def detect_conflicts(codes: Iterable[str]) -> List[Conflict]:
    """
    Every selected code that has selected descendants, with those descendants.
    """
    selected = set(codes)
    found: Dict[str, List[str]] = {}
    for code in sorted(selected):
        for ancestor in ancestors_of(code):
            if ancestor in selected:
                found.setdefault(ancestor, []).append(code)
    return [Conflict(parent=p, children=tuple(c)) for p, c in sorted(found.items())]


def _drop_descendants(codes: Set[str]) -> Set[str]:
    return {c for c in codes if not any(a in codes for a in ancestors_of(c))}


# =============================================================================
# Public API
# =============================================================================

def resolve(input_labels: Iterable[object]) -> Set[str]:
    """
    Resolves labels to a conflict-free set of ethnicity codes.
    """
    resolved: Set[str] = set()
    unmatched: List[str] = []

    for raw in input_labels or []:
        if not isinstance(raw, str) or not raw.strip():
            continue
        codes, method = _match_label(raw)
        if not codes:
            unmatched.append(raw)
            continue
        logger.debug("ethnicity %r resolved via %s -> %s", raw, method, codes)
        resolved.update(codes)

    if unmatched:
        logger.warning("No ethnicity mapping found for %s", ", ".join(repr(u) for u in unmatched))

    conflicts = detect_conflicts(resolved)
    if conflicts:
        logger.info(
            "Ethnicity hierarchy conflicts folded into parents: %s",
            "; ".join(f"{c.parent} + [{','.join(c.children)}]" for c in conflicts),
        )
        resolved = _drop_descendants(resolved)

    return resolved


def validate_selection(labels: List[str]) -> SelectionReport:
    report = SelectionReport()

    if not labels:
        report.suggestions.append("Select ethnicities to filter by demographic composition")
        return report

    candidate: Set[str] = set()
    unmapped: List[str] = []
    for raw in labels:
        codes, _ = _match_label(raw) if isinstance(raw, str) else ([], "invalid")
        if codes:
            candidate.update(codes)
        else:
            unmapped.append(str(raw))

    conflicts = detect_conflicts(candidate)
    if conflicts:
        overlaps = "; ".join(f"{c.parent} overlaps with {', '.join(c.children)}" for c in conflicts)
        report.warnings.append(f"Hierarchy conflicts detected: {overlaps}")
        report.suggestions.append(
            "Consider using either broad categories (Asian) OR specific ethnicities (Korean, Chinese) but not both"
        )

    if unmapped:
        report.is_valid = False
        report.warnings.append(f"Some selections may not have database mappings: {', '.join(unmapped)}")
        report.suggestions.append('Try using common ethnicity names like "korean", "chinese", "hispanic", etc.')

    if len(labels) > MAX_RECOMMENDED_SELECTION:
        report.warnings.append("Many ethnicities selected - may affect search performance")
        report.suggestions.append("Consider narrowing selection to 3-5 most important ethnicities")

    return report
