from __future__ import annotations

import math
from itertools import combinations
from typing import Dict

from ..model.game import ShapleyResult, ValueFunction
from ..utils.coalition_encoding import iter_coalitions

EFFICIENCY_TOLERANCE = 1e-10


def verify_efficiency_axiom(
    result: ShapleyResult, tolerance: float = EFFICIENCY_TOLERANCE
) -> bool:
    """Check that the attributed values sum to v(N) within ``tolerance``."""
    try:
        gap = abs(math.fsum(result.values.values()) - result.total_value)
    except (TypeError, ValueError, OverflowError):
        return False
    return gap < tolerance


def verify_null_player(
    result: ShapleyResult,
    value_function: ValueFunction,
    tolerance: float = EFFICIENCY_TOLERANCE,
) -> bool:
    """Every active component that never changes v(S) must get zero credit."""
    active = list(result.active)
    for i in active:
        others = [p for p in active if p != i]
        is_null = all(
            abs(value_function(s | {i}) - value_function(s)) <= tolerance
            for s in iter_coalitions(others)
        )
        if is_null and abs(result.value(i)) > tolerance:
            return False
    return True


def verify_symmetry(
    result: ShapleyResult,
    value_function: ValueFunction,
    tolerance: float = EFFICIENCY_TOLERANCE,
) -> bool:
    """Interchangeable components must receive equal credit."""
    active = list(result.active)
    for i, j in combinations(active, 2):
        rest = [p for p in active if p not in (i, j)]
        interchangeable = all(
            abs(value_function(s | {i}) - value_function(s | {j})) <= tolerance
            for s in iter_coalitions(rest)
        )
        if interchangeable and abs(result.value(i) - result.value(j)) > tolerance:
            return False
    return True


def check_axioms(
    result: ShapleyResult, value_function: ValueFunction
) -> Dict[str, bool]:
    return {
        "efficiency": verify_efficiency_axiom(result),
        "null_player": verify_null_player(result, value_function),
        "symmetry": verify_symmetry(result, value_function),
    }
