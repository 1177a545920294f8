from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd

from ..utils.coalition_encoding import normalize_coalition


def read_value_table(
    path: str | Path,
    fmt: str | None = None,
    coalition_column: str = "coalition",
    universe: Sequence[str] | None = None,
) -> pd.DataFrame:
    """Read a ``coalition,value`` table and normalize coalitions to frozensets.

    Integer coalition cells are read as bitmasks over ``universe``.
    """
    p = Path(path)
    if fmt is None:
        fmt = p.suffix.lstrip(".").lower()

    if fmt == "csv":
        df = pd.read_csv(p, dtype={coalition_column: object})
    elif fmt in {"parquet", "pq"}:
        df = pd.read_parquet(p)
    else:
        msg = f"Unsupported format: {fmt}"
        raise ValueError(msg)

    if coalition_column not in df.columns:
        msg = f"Input table must contain '{coalition_column}' column."
        raise ValueError(msg)

    df = df.copy()
    if coalition_column != "coalition":
        df = df.rename(columns={coalition_column: "coalition"})
    df["coalition"] = df["coalition"].fillna("").map(
        lambda cell: normalize_coalition(_maybe_bitmask(cell, universe), universe)
    )
    return df


def _maybe_bitmask(cell: object, universe: Sequence[str] | None) -> object:
    if universe is not None and isinstance(cell, str) and cell.strip().isdigit():
        return int(cell.strip())
    return cell
