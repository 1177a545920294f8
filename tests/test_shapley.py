from __future__ import annotations

from math import comb

import pytest

from intervention_attribution.aggregation.axioms import verify_efficiency_axiom
from intervention_attribution.indices.shapley import (
    compute_shapley_value,
    compute_shapley_values,
    shapley_weight,
)
from intervention_attribution.model.causal import (
    DEFAULT_CAUSAL_MODEL,
    CausalModel,
    Interaction,
    create_value_function,
)
from intervention_attribution.model.scenarios import (
    ADAPTIVE_TASKS,
    PARENT,
    ROBOT,
    scenario_value_function,
)


def _table_game(table: dict[str, float]):  # type: ignore[no-untyped-def]
    values = {frozenset(k.split("+")) if k else frozenset(): v for k, v in table.items()}
    return lambda coalition: values[frozenset(coalition)]


def test_weight_single_player_gets_everything() -> None:
    assert shapley_weight(0, 1) == 1.0


def test_weights_sum_to_one_over_orderings() -> None:
    # sum over coalition sizes of C(n-1, s) * weight(s, n) == 1
    for n in range(1, 9):
        total = sum(comb(n - 1, s) * shapley_weight(s, n) for s in range(n))
        assert abs(total - 1.0) < 1e-12


def test_weight_rejects_invalid_sizes() -> None:
    with pytest.raises(ValueError):
        shapley_weight(0, 0)
    with pytest.raises(ValueError):
        shapley_weight(3, 3)


def test_two_component_scenario() -> None:
    v = _table_game({"": 0.0, "A": 0.15, "B": 0.20, "A+B": 0.45})

    result = compute_shapley_values(["A", "B"], v)

    assert abs(result.values["A"] - 0.20) < 1e-10
    assert abs(result.values["B"] - 0.25) < 1e-10
    assert abs(result.total_value - 0.45) < 1e-10
    assert abs(result.interaction_value - 0.10) < 1e-10
    assert verify_efficiency_axiom(result)


def test_three_component_scenario() -> None:
    v = scenario_value_function("fullIntervention")

    result = compute_shapley_values([ROBOT, ADAPTIVE_TASKS, PARENT], v)

    assert abs(result.total_value - 0.72) < 1e-10
    assert abs(result.values[ROBOT] - 0.26) < 1e-10
    assert abs(result.values[ADAPTIVE_TASKS] - 0.28) < 1e-10
    assert abs(result.values[PARENT] - 0.18) < 1e-10
    assert verify_efficiency_axiom(result)


def test_null_player_gets_zero() -> None:
    v = _table_game(
        {"": 0.0, "A": 0.3, "N": 0.0, "B": 0.1, "A+N": 0.3, "B+N": 0.1, "A+B": 0.5, "A+B+N": 0.5}
    )

    result = compute_shapley_values(["A", "B", "N"], v)

    assert result.values["N"] == 0.0
    assert verify_efficiency_axiom(result)


def test_symmetric_components_share_equally() -> None:
    model = CausalModel(
        base_effects={"x": 0.1, "y": 0.1, "z": 0.4},
        interactions=(Interaction(("x", "z"), 0.05), Interaction(("y", "z"), 0.05)),
    )
    v = create_value_function(model)

    result = compute_shapley_values(["x", "y", "z"], v)

    assert abs(result.values["x"] - result.values["y"]) < 1e-12
    assert verify_efficiency_axiom(result)


def test_singleton_gets_own_value_minus_empty() -> None:
    v = _table_game({"": 0.05, "solo": 0.35})

    assert abs(compute_shapley_value("solo", ["solo"], v) - 0.30) < 1e-12


def test_additive_game_has_no_interaction() -> None:
    model = CausalModel(base_effects={"a": 0.1, "b": 0.25, "c": 0.05, "d": 0.3})
    v = create_value_function(model)

    result = compute_shapley_values(model.components, v)

    for c, base in model.base_effects.items():
        assert abs(result.values[c] - base) < 1e-12
    assert abs(result.interaction_value) < 1e-12
    assert verify_efficiency_axiom(result)


def test_inactive_components_report_zero() -> None:
    v = create_value_function(DEFAULT_CAUSAL_MODEL)
    universe = DEFAULT_CAUSAL_MODEL.components
    active = ["scaffoldedHints", "adaptiveDifficulty"]

    result = compute_shapley_values(active, v, universe=universe)

    assert set(result.values) == set(universe)
    assert result.values["positiveReinforcement"] == 0.0
    assert result.values["personalizedContent"] == 0.0
    # 0.12 + 0.11 and 0.18 + 0.11
    assert abs(result.values["scaffoldedHints"] - 0.23) < 1e-10
    assert abs(result.values["adaptiveDifficulty"] - 0.29) < 1e-10
    assert abs(result.interaction_value - 0.22) < 1e-10
    assert verify_efficiency_axiom(result)


def test_full_default_model_is_efficient() -> None:
    v = create_value_function(DEFAULT_CAUSAL_MODEL)

    result = compute_shapley_values(DEFAULT_CAUSAL_MODEL.components, v)

    assert abs(result.total_value - 0.84) < 1e-10
    assert verify_efficiency_axiom(result)


def test_result_is_order_insensitive() -> None:
    v = scenario_value_function("fullIntervention")

    forward = compute_shapley_values([ROBOT, ADAPTIVE_TASKS, PARENT], v)
    backward = compute_shapley_values([PARENT, ADAPTIVE_TASKS, ROBOT], v)

    for c in (ROBOT, ADAPTIVE_TASKS, PARENT):
        assert abs(forward.values[c] - backward.values[c]) < 1e-12


def test_value_function_called_twice_per_subset() -> None:
    calls: list[frozenset[str]] = []

    def v(coalition: frozenset[str]) -> float:
        calls.append(coalition)
        return float(len(coalition))

    compute_shapley_value("a", ["a", "b", "c", "d"], v)

    assert len(calls) == 2 * 2**3


def test_empty_active_set_returns_zero_result() -> None:
    v = create_value_function(DEFAULT_CAUSAL_MODEL)

    result = compute_shapley_values([], v, universe=DEFAULT_CAUSAL_MODEL.components)

    assert all(value == 0.0 for value in result.values.values())
    assert result.total_value == 0.0
    assert result.active == ()
    assert verify_efficiency_axiom(result)


def test_nonzero_empty_value_is_rejected_unless_allowed() -> None:
    v = _table_game({"": 0.1, "A": 0.3, "B": 0.2, "A+B": 0.6})

    with pytest.raises(ValueError):
        compute_shapley_values(["A", "B"], v)

    result = compute_shapley_values(["A", "B"], v, check_empty=False)
    assert abs(result.attributed_sum - (0.6 - 0.1)) < 1e-12


def test_duplicate_and_unknown_components_are_rejected() -> None:
    v = create_value_function(DEFAULT_CAUSAL_MODEL)

    with pytest.raises(ValueError):
        compute_shapley_values(["scaffoldedHints", "scaffoldedHints"], v)
    with pytest.raises(ValueError):
        compute_shapley_values(["scaffoldedHints"], v, universe=["adaptiveDifficulty"])
    with pytest.raises(ValueError):
        compute_shapley_value("missing", ["scaffoldedHints"], v)


def test_value_function_errors_propagate() -> None:
    v = create_value_function(DEFAULT_CAUSAL_MODEL)

    with pytest.raises(KeyError):
        compute_shapley_values(["notModeled"], v)
