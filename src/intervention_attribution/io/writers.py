from __future__ import annotations

from pathlib import Path
from typing import Mapping

import pandas as pd

from ..model.game import Coalition, ComponentId, ShapleyResult
from ..model.simulation import SimulationResult
from ..utils.coalition_encoding import coalition_key, format_coalition


def write_table(
    df: pd.DataFrame, path: str | Path, fmt: str | None = None
) -> None:
    p = Path(path)
    if fmt is None:
        fmt = p.suffix.lstrip(".").lower()

    if fmt == "csv":
        df.to_csv(p, index=False)
    elif fmt in {"parquet", "pq"}:
        df.to_parquet(p, index=False)
    else:
        msg = f"Unsupported output format: {fmt}"
        raise ValueError(msg)


def shapley_result_to_frame(
    result: ShapleyResult,
    labels: Mapping[ComponentId, str] | None = None,
    baselines: Mapping[str, Mapping[ComponentId, float]] | None = None,
) -> pd.DataFrame:
    """One row per component: Shapley value, share and optional baselines."""
    labels = labels or {}
    active = set(result.active)
    rows = []
    for c in result.components:
        row = {
            "component": c,
            "label": labels.get(c, c),
            "active": c in active,
            "shapley": result.value(c),
            "share": result.share(c) if c in active else None,
        }
        for name, values in (baselines or {}).items():
            row[name] = values.get(c)
        rows.append(row)
    return pd.DataFrame(rows)


def coalition_values_to_frame(
    values: Mapping[Coalition, float],
    synergy: Mapping[Coalition, float] | None = None,
) -> pd.DataFrame:
    rows = [
        {
            "coalition": coalition_key(c),
            "label": format_coalition(c),
            "size": len(c),
            "value": v,
            "interaction": (synergy or {}).get(c),
        }
        for c, v in values.items()
    ]
    df = pd.DataFrame(rows, columns=["coalition", "label", "size", "value", "interaction"])
    return df.sort_values(["size", "coalition"], kind="mergesort").reset_index(drop=True)


def trials_to_frame(result: SimulationResult) -> pd.DataFrame:
    rows = [
        {
            "trial": t.trial_number,
            "skill": t.skill_level,
            "correct": t.correct,
            "active_components": "+".join(t.active_components),
        }
        for t in result.trials
    ]
    return pd.DataFrame(rows, columns=["trial", "skill", "correct", "active_components"])

