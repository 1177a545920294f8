from __future__ import annotations

from typing import Sequence

import pandas as pd

from ..utils.coalition_encoding import iter_coalitions


def validate_value_table(
    df: pd.DataFrame, components: Sequence[str] | None = None
) -> None:
    """Check a normalized value table before it is turned into a game.

    With ``components`` given, every non-empty subset of them must be
    tabulated and no coalition may mention anything else.
    """
    required = {"coalition", "value"}
    missing = required - set(df.columns)
    if missing:
        msg = f"Missing required columns: {sorted(missing)}"
        raise ValueError(msg)

    if components is None:
        return

    universe = set(components)
    present = set(df["coalition"])
    stray = sorted({c for s in present for c in s} - universe)
    if stray:
        msg = f"Table mentions components outside {sorted(universe)}: {stray}"
        raise ValueError(msg)

    absent = [
        sorted(s) for s in iter_coalitions(list(components)) if s and s not in present
    ]
    if absent:
        msg = f"Value table is missing coalitions: {absent}"
        raise ValueError(msg)
