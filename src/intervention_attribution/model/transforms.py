from __future__ import annotations

from typing import Dict, Iterable, List

import pandas as pd

from .game import Coalition, ComponentId, ValueFunction


def table_to_values(
    df: pd.DataFrame,
    value_column: str = "value",
    coalition_column: str = "coalition",
) -> Dict[Coalition, float]:
    """Map each coalition of a normalized game table to its value.

    The coalition column must already hold frozensets (see ``read_value_table``).
    Repeated coalitions must agree on the value.
    """
    if value_column not in df.columns:
        msg = f"Column '{value_column}' not found in value table."
        raise ValueError(msg)

    values: dict[Coalition, float] = {}
    for _, row in df.iterrows():
        c = frozenset(row[coalition_column])
        if pd.isna(row[value_column]):
            continue
        v = float(row[value_column])
        if c in values and values[c] != v:
            msg = f"Conflicting values for coalition {sorted(c)}: {values[c]} and {v}"
            raise ValueError(msg)
        values[c] = v
    return values


def infer_components(coalitions: Iterable[Coalition]) -> List[ComponentId]:
    components: set[ComponentId] = set()
    for c in coalitions:
        components.update(c)
    return sorted(components)


def build_value_function_from_table(
    df: pd.DataFrame,
    value_column: str = "value",
    coalition_column: str = "coalition",
    empty_value: float | None = 0.0,
) -> ValueFunction:
    """Turn a tabulated game into a value function.

    The empty coalition defaults to ``empty_value`` when the table omits it;
    any other coalition missing from the table raises ``KeyError``.
    """
    values = table_to_values(df, value_column, coalition_column)
    if empty_value is not None:
        values.setdefault(frozenset(), float(empty_value))

    def value(coalition: Coalition) -> float:
        key = frozenset(coalition)
        if key not in values:
            raise KeyError(f"No value tabulated for coalition {sorted(key)}")
        return values[key]

    return value
