# services/weight_balancer.py
"""
Score-weight auto-balancing.

A WeightSet is an ordered list of WeightEntry sliders whose values are
integer percentages. After any committed change the values sum to 100.

All functions are pure: they never mutate the input list or its entries and
never raise for well-formed input. Unknown ids are no-ops.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Sequence

from config.scoring_defaults import (
    DEFAULT_WEIGHT_VALUES,
    LAYER_CATALOG,
    WEIGHT_BOUNDS,
)

logger = logging.getLogger(__name__)

TOTAL = 100

_LAYERS_BY_ID: Dict[str, Dict[str, str]] = {layer["id"]: layer for layer in LAYER_CATALOG}


# =====================================================================
# Types
# =====================================================================
@dataclass(frozen=True)
class WeightEntry:
    id: str
    value: int
    label: str = ""
    icon: str = ""
    color: str = ""

    def as_payload(self) -> Dict[str, object]:
        return {"id": self.id, "value": self.value}


WeightSet = List[WeightEntry]


# =====================================================================
# Helpers
# =====================================================================
def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _round_ratio(numerator: int, denominator: int) -> int:
    """
    round(numerator / denominator) half-up, in exact integer arithmetic.
    """
    return (2 * numerator + denominator) // (2 * denominator)


def clamp_weight(value: float) -> int:
    lo, hi = WEIGHT_BOUNDS
    try:
        v = float(value)
    except (TypeError, ValueError):
        return lo
    if math.isnan(v):
        return lo
    return int(max(lo, min(hi, _round_half_up(v) if math.isfinite(v) else v)))


def _index_of(weights: Sequence[WeightEntry], weight_id: str) -> Optional[int]:
    for i, w in enumerate(weights):
        if w.id == weight_id:
            return i
    return None


def _equal_split(amount: int, count: int) -> List[int]:
    share, extra = divmod(amount, count)
    return [share + (1 if n < extra else 0) for n in range(count)]


def _correct_drift(
    values: List[int],
    candidates: Iterable[int],
    before: Sequence[float],
    target: int = TOTAL,
) -> None:
    """
    Pushes values[] back to `target` in place.

    The difference lands on the first candidate that is currently positive.
    A negative difference never takes an entry below zero; what is left over
    moves on to the next positive candidate. A positive difference with no
    positive candidate goes to the first candidate that was positive before
    the change, so zero entries stay zero.
    """
    candidates = list(candidates)
    difference = target - sum(values)
    if difference == 0:
        return

    for i in candidates:
        if values[i] <= 0:
            continue
        if difference > 0:
            values[i] += difference
            return
        taken = min(values[i], -difference)
        values[i] -= taken
        difference += taken
        if difference == 0:
            return

    if difference > 0:
        for i in candidates:
            if before[i] > 0:
                values[i] += difference
                return


def entry_for_layer(layer_id: str, value: int = 0) -> WeightEntry:
    layer = _LAYERS_BY_ID.get(layer_id, {})
    return WeightEntry(
        id=layer_id,
        value=value,
        label=layer.get("label", layer_id),
        icon=layer.get("icon", "⚙️"),
        color=layer.get("color", "#666666"),
    )


def default_weights() -> WeightSet:
    return [entry_for_layer(layer["id"], DEFAULT_WEIGHT_VALUES.get(layer["id"], 0)) for layer in LAYER_CATALOG]


def layer_catalog() -> List[Dict[str, str]]:
    return [dict(layer) for layer in LAYER_CATALOG]


def total_of(weights: Sequence[WeightEntry]) -> int:
    return int(sum(w.value for w in weights))


# =====================================================================
# Core operations
# =====================================================================
def redistribute(weights: Sequence[WeightEntry], changed_id: str, new_value: float) -> WeightSet:
    """
    Sets one slider and rebalances the others so the set sums to 100.

    Others keep their relative shares (half-up rounded). When every other
    slider is at zero the remainder is split equally, the first
    `remaining % count` sliders taking one extra point.
    """
    idx = _index_of(weights, changed_id)
    if idx is None:
        logger.debug("redistribute: unknown weight id %r, no-op", changed_id)
        return list(weights)

    target = clamp_weight(new_value)

    if len(weights) == 1:
        return [replace(weights[0], value=target)]

    if weights[idx].value == target:
        return list(weights)

    before = [w.value for w in weights]
    values = list(before)
    values[idx] = target
    remaining = TOTAL - target

    others = [i for i in range(len(weights)) if i != idx]
    others_total = sum(before[i] for i in others)

    if others_total > 0:
        for i in others:
            values[i] = max(0, _round_ratio(remaining * before[i], others_total))
    else:
        for i, share in zip(others, _equal_split(remaining, len(others))):
            values[i] = share

    _correct_drift(values, others, before)

    return [replace(w, value=v) for w, v in zip(weights, values)]


def remove_weight(weights: Sequence[WeightEntry], weight_id: str) -> WeightSet:
    """
    Drops a slider and lets the rest absorb its value proportionally.

    If the remaining sliders are all zero the freed value is split equally
    among them. The last remaining slider cannot be removed.
    """
    idx = _index_of(weights, weight_id)
    if idx is None:
        logger.debug("remove_weight: unknown weight id %r, no-op", weight_id)
        return list(weights)
    if len(weights) == 1:
        return list(weights)

    freed = weights[idx].value
    kept = [w for i, w in enumerate(weights) if i != idx]
    if freed <= 0:
        return kept

    before = [w.value for w in kept]
    kept_total = sum(before)
    target = kept_total + freed

    if kept_total > 0:
        values = [max(0, _round_ratio(v * target, kept_total)) for v in before]
        _correct_drift(values, range(len(values)), before, target=target)
    else:
        values = _equal_split(freed, len(kept))

    return [replace(w, value=v) for w, v in zip(kept, values)]


def add_weight(weights: Sequence[WeightEntry], entry: WeightEntry) -> WeightSet:
    """
    Appends a new slider at 0. Existing sliders are untouched.
    """
    if _index_of(weights, entry.id) is not None:
        return list(weights)
    return list(weights) + [replace(entry, value=0)]


def normalize_weights(weights: Sequence[WeightEntry]) -> WeightSet:
    """
    Scales an externally supplied WeightSet to integer percentages summing
    to 100. Entries with missing, negative or non-finite values are dropped,
    and a repeated id keeps only its first usable entry.
    Falls back to the default allocation when nothing usable is left.
    """
    valid: List[WeightEntry] = []
    seen = set()
    for w in weights:
        v = w.value
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            continue
        if not math.isfinite(v) or v < 0:
            continue
        if w.id in seen:
            logger.warning("normalize_weights: duplicate weight id %r dropped", w.id)
            continue
        seen.add(w.id)
        valid.append(w)

    if not valid:
        logger.warning("normalize_weights: no valid weights, using defaults")
        return default_weights()

    total = sum(w.value for w in valid)
    if total <= 0:
        logger.warning("normalize_weights: all weights are zero, using defaults")
        return default_weights()

    before = [w.value for w in valid]
    if total == TOTAL and all(float(v).is_integer() for v in before):
        return [replace(w, value=int(w.value)) for w in valid]

    logger.info("normalize_weights: scaling weights from %s%% to 100%%", total)
    values = [_round_half_up(v * TOTAL / total) for v in before]
    _correct_drift(values, range(len(values)), before)

    return [replace(w, value=v) for w, v in zip(valid, values)]
