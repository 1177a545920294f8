from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd


def plot_attribution(df: pd.DataFrame, out_dir: Path, title_prefix: str = "") -> None:
    """Bar chart of per-component credit, one bar group per method column."""
    out_dir.mkdir(parents=True, exist_ok=True)
    if "component" not in df.columns or "shapley" not in df.columns:
        return

    active = df[df["active"]] if "active" in df.columns else df
    if active.empty:
        return

    methods = [c for c in ("shapley", "equal_split", "marginal") if c in active.columns]
    labels = active["label"].astype(str) if "label" in active.columns else active["component"].astype(str)
    width = 0.8 / len(methods)
    positions = range(len(active))

    plt.figure(figsize=(8, 4))
    for k, method in enumerate(methods):
        offsets = [p + (k - (len(methods) - 1) / 2) * width for p in positions]
        plt.bar(offsets, active[method].astype(float), width=width, label=method)
    plt.axhline(0, color="black", linewidth=0.5)
    plt.xticks(list(positions), labels)
    plt.ylabel("attributed gain")
    plt.title(f"{title_prefix}attribution")
    if len(methods) > 1:
        plt.legend()
    plt.tight_layout()
    plt.savefig(out_dir / "attribution.png")
    plt.close()


def plot_coalition_values(df: pd.DataFrame, out_dir: Path, title_prefix: str = "") -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    if df.empty or "coalition" not in df.columns:
        return

    plt.figure(figsize=(max(6, 0.6 * len(df)), 4))
    plt.bar(df["coalition"].astype(str), df["value"].astype(float))
    plt.xlabel("coalition")
    plt.ylabel("v(S)")
    plt.xticks(rotation=45, ha="right")
    plt.title(f"{title_prefix}coalition values")
    plt.tight_layout()
    plt.savefig(out_dir / "coalition_values.png")
    plt.close()


def plot_learning_curve(df: pd.DataFrame, out_dir: Path, title_prefix: str = "") -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    if df.empty or "skill" not in df.columns:
        return

    plt.figure(figsize=(8, 4))
    plt.plot(df["trial"], df["skill"], marker="o", markersize=3)
    if "correct" in df.columns:
        hits = df[df["correct"].astype(bool)]
        plt.scatter(hits["trial"], hits["skill"], color="tab:green", zorder=3, label="correct")
        plt.legend()
    plt.ylim(0, 1.05)
    plt.xlabel("trial")
    plt.ylabel("skill level")
    plt.title(f"{title_prefix}learning curve")
    plt.tight_layout()
    plt.savefig(out_dir / "learning_curve.png")
    plt.close()
