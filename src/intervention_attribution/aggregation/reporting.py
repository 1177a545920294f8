from __future__ import annotations

from typing import Mapping, Sequence, TextIO

import pandas as pd

from ..model.causal import CausalModel
from ..model.game import ComponentId


def print_summary(df: pd.DataFrame, file: TextIO) -> None:
    df.to_markdown(file, index=False)
    file.write("\n")


def generate_insight(
    active_components: Sequence[ComponentId],
    shapley_values: Mapping[ComponentId, float],
    model: CausalModel | None = None,
    labels: Mapping[ComponentId, str] | None = None,
) -> str:
    """One-sentence reading of an attribution for the summary report."""
    labels = labels or {}

    def name(c: ComponentId) -> str:
        return labels.get(c, c)

    active = list(active_components)
    if not active:
        return "Enable intervention components to see how they contribute to learning gains."

    if len(active) == 1:
        comp = active[0]
        return (
            f'With only "{name(comp)}" active, it accounts for 100% of the '
            f"{shapley_values.get(comp, 0.0):.2f} learning gain."
        )

    ranked = sorted(active, key=lambda c: shapley_values.get(c, 0.0), reverse=True)
    top = ranked[0]
    total = sum(shapley_values.get(c, 0.0) for c in active)
    if total == 0:
        return "The active components produce no net learning gain."
    top_percent = shapley_values.get(top, 0.0) / total * 100

    strongest = model.strongest_interaction() if model is not None else None
    if strongest is not None:
        first, second = strongest.components
        if first in active and second in active:
            first_percent = shapley_values.get(first, 0.0) / total * 100
            return (
                f'"{name(top)}" contributes {top_percent:.0f}% of learning gains. '
                f'Note: "{name(first)}" ({first_percent:.0f}%) is amplified by '
                f'"{name(second)}"; the pair adds {strongest.effect:.2f} on top of '
                "their separate effects."
            )
        if first in active or second in active:
            missing = second if first in active else first
            return (
                f'"{name(top)}" leads with {top_percent:.0f}%. Try enabling '
                f'"{name(missing)}" to see how it amplifies the effect.'
            )

    return (
        f'"{name(top)}" contributes {top_percent:.0f}% of the total '
        f"{total:.2f} learning gain."
    )
