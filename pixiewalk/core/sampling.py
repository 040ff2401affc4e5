"""
pixiewalk.core.sampling — Lottery (cumulative weight) sampling over a candidate list.
"""
from __future__ import annotations
import math
from typing import Any, Callable, Optional, Sequence
import numpy as np


def clamp_weight(weight: float) -> float:
    """Negative, infinite and NaN weights count as zero."""
    w = float(weight)
    if not math.isfinite(w) or w < 0.0:
        return 0.0
    return w


def weighted_sample(
    candidates: Sequence[Any],
    weight_fn: Callable[[Any], float],
    rng: Optional[np.random.Generator] = None,
) -> Optional[Any]:
    """
    Pick one candidate with probability proportional to its clamped weight.

    Candidates are enumerated in the order given, so a fixed order plus a
    seeded ``rng`` gives a reproducible draw. Returns ``None`` when every
    weight clamps to zero (or there are no candidates).
    """
    if rng is None:
        rng = np.random.default_rng()

    weights = [clamp_weight(weight_fn(c)) for c in candidates]
    total = sum(weights)
    if total == 0.0:
        return None

    goal = rng.uniform(0.0, total)
    for candidate, w in zip(candidates, weights):
        if w == 0.0:
            continue
        goal -= w
        if goal <= 0.0:
            return candidate
    # Float rounding can leave a sliver of the draw; it belongs to the last weighted candidate.
    return next(c for c, w in zip(reversed(candidates), reversed(weights)) if w > 0.0)
