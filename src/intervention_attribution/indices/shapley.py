from __future__ import annotations

import math
from functools import lru_cache
from typing import Dict, Iterable, Sequence

from ..model.game import ComponentId, ShapleyResult, ValueFunction
from ..utils.coalition_encoding import iter_coalitions
from ..utils.logging_utils import get_logger

EMPTY_VALUE_TOLERANCE = 1e-10

logger = get_logger(__name__)


@lru_cache(maxsize=None)
def _factorial(n: int) -> int:
    return math.factorial(n)


def shapley_weight(s: int, n: int) -> float:
    """Probability that exactly ``s`` given players precede a fixed player.

    weight(s, n) = s! (n - s - 1)! / n!, with exact integer factorials.
    """
    if n < 1:
        msg = f"Shapley weight needs at least one player, got n={n}."
        raise ValueError(msg)
    if not 0 <= s < n:
        msg = f"Coalition size {s} is outside 0..{n - 1}."
        raise ValueError(msg)
    return _factorial(s) * _factorial(n - s - 1) / _factorial(n)


def compute_shapley_value(
    component: ComponentId,
    all_components: Sequence[ComponentId],
    value_function: ValueFunction,
) -> float:
    players = list(all_components)
    if component not in players:
        msg = f"Component {component!r} is not one of {players}."
        raise ValueError(msg)

    n = len(players)
    others = [p for p in players if p != component]

    phi = 0.0
    for s in iter_coalitions(others):
        weight = shapley_weight(len(s), n)
        marginal = value_function(s | {component}) - value_function(s)
        phi += weight * marginal
    return phi


def compute_shapley_values(
    active_components: Iterable[ComponentId],
    value_function: ValueFunction,
    universe: Sequence[ComponentId] | None = None,
    check_empty: bool = True,
) -> ShapleyResult:
    """Exact Shapley attribution over the active components.

    Components of ``universe`` that are not active are excluded from the
    game and reported as 0.0. With ``check_empty`` the game must satisfy
    v(∅) = 0, otherwise ``ValueError`` is raised.
    """
    active = list(active_components)
    if len(set(active)) != len(active):
        msg = f"Active components must be distinct: {active}"
        raise ValueError(msg)

    components = list(universe) if universe is not None else list(active)
    unknown = [c for c in active if c not in components]
    if unknown:
        msg = f"Active components {unknown} are not in the universe {components}."
        raise ValueError(msg)

    empty_value = value_function(frozenset())
    if check_empty and abs(empty_value) > EMPTY_VALUE_TOLERANCE:
        msg = f"Value function must map the empty coalition to 0, got {empty_value}."
        raise ValueError(msg)

    values: Dict[ComponentId, float] = {c: 0.0 for c in components}
    if not active:
        return ShapleyResult(
            values=values,
            total_value=empty_value,
            interaction_value=empty_value,
            components=tuple(components),
            active=(),
        )

    for component in active:
        values[component] = compute_shapley_value(component, active, value_function)

    total_value = value_function(frozenset(active))
    individual_sum = sum(value_function(frozenset({c})) for c in active)

    logger.debug(
        "Computed Shapley values for %d components (total=%.6f)",
        len(active),
        total_value,
    )
    return ShapleyResult(
        values=values,
        total_value=total_value,
        interaction_value=total_value - individual_sum,
        components=tuple(components),
        active=tuple(active),
    )
