from __future__ import annotations

from typing import Dict, Sequence

from ..model.game import Coalition, ComponentId, ValueFunction
from ..utils.coalition_encoding import iter_coalitions


def compute_interaction_value(
    coalition: Coalition, value_function: ValueFunction
) -> float:
    """v(S) minus the sum of the members' standalone values."""
    if not coalition:
        return 0.0
    singles_sum = sum(value_function(frozenset({c})) for c in coalition)
    return value_function(coalition) - singles_sum


def compute_synergy(
    components: Sequence[ComponentId], value_function: ValueFunction
) -> Dict[Coalition, float]:
    return {
        coalition: compute_interaction_value(coalition, value_function)
        for coalition in iter_coalitions(components)
        if coalition
    }
