"""Naive attribution rules that Shapley values are compared against."""

from __future__ import annotations

from typing import Dict, Sequence

from ..model.game import ComponentId, ValueFunction


def compute_equal_split(
    active_components: Sequence[ComponentId], value_function: ValueFunction
) -> Dict[ComponentId, float]:
    """Divide v(N) evenly, ignoring what each component actually adds."""
    active = list(active_components)
    if not active:
        return {}
    share = value_function(frozenset(active)) / len(active)
    return {c: share for c in active}


def compute_marginal_attribution(
    order: Sequence[ComponentId], value_function: ValueFunction
) -> Dict[ComponentId, float]:
    """Credit each component with its increment when added in ``order``.

    This is a single term of the Shapley average and depends on the order.
    """
    if len(set(order)) != len(order):
        msg = f"Ordering must not repeat components: {list(order)}"
        raise ValueError(msg)

    result: dict[ComponentId, float] = {}
    coalition: set[ComponentId] = set()
    prev_value = value_function(frozenset())
    for c in order:
        coalition.add(c)
        current_value = value_function(frozenset(coalition))
        result[c] = current_value - prev_value
        prev_value = current_value
    return result
