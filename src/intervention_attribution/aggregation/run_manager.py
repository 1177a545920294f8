from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from .axioms import check_axioms
from .reporting import generate_insight, print_summary
from .visualization import plot_attribution, plot_coalition_values, plot_learning_curve
from ..config_loader import load_config
from ..indices.baselines import compute_equal_split, compute_marginal_attribution
from ..indices.shapley import compute_shapley_values
from ..indices.synergy import compute_synergy
from ..io.readers import read_value_table
from ..io.validators import validate_value_table
from ..io.writers import (
    coalition_values_to_frame,
    shapley_result_to_frame,
    trials_to_frame,
    write_table,
)
from ..model.causal import (
    COMPONENT_LABELS,
    DEFAULT_CAUSAL_MODEL,
    CausalModel,
    causal_model_from_mapping,
    create_value_function,
)
from ..model.game import ComponentId, ShapleyResult, ValueFunction
from ..model.scenarios import get_scenario
from ..model.simulation import SimulationConfig, SimulationResult, run_averaged_simulation
from ..model.transforms import build_value_function_from_table, infer_components
from ..utils.coalition_encoding import iter_coalitions
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class ValueSource:
    components: List[ComponentId]
    value_function: ValueFunction
    model: Optional[CausalModel] = None
    labels: Optional[Dict[ComponentId, str]] = None


@dataclass
class RunOutcome:
    result: Optional[ShapleyResult]
    simulation: Optional[SimulationResult]
    insight: str
    output_dir: Path


def resolve_value_source(cfg: Mapping[str, Any]) -> ValueSource:
    if "model" in cfg:
        model = causal_model_from_mapping(cfg["model"])
        return ValueSource(model.components, create_value_function(model), model)

    if "scenario" in cfg:
        scenario = get_scenario(str(cfg["scenario"]))
        return ValueSource(
            scenario.components, create_value_function(scenario.model), scenario.model
        )

    if "input" in cfg:
        input_cfg: Mapping[str, Any] = cfg["input"]
        declared = input_cfg.get("components")
        df = read_value_table(
            input_cfg["path"],
            fmt=input_cfg.get("format"),
            coalition_column=input_cfg.get("coalition_column", "coalition"),
            universe=declared,
        )
        value_column = input_cfg.get("value_column", "value")
        if value_column != "value":
            df = df.rename(columns={value_column: "value"})
        components = list(declared) if declared else infer_components(df["coalition"])
        validate_value_table(df, components)
        return ValueSource(components, build_value_function_from_table(df))

    return ValueSource(
        DEFAULT_CAUSAL_MODEL.components,
        create_value_function(DEFAULT_CAUSAL_MODEL),
        DEFAULT_CAUSAL_MODEL,
        COMPONENT_LABELS,
    )


def _output_dir(cfg: Mapping[str, Any], config_path: Path) -> Path:
    raw_out_path = cfg.get("output", {}).get("path")
    if raw_out_path is None:
        return Path("outputs") / config_path.stem
    return Path(str(raw_out_path))


def run_from_config(config_path: Path, simulate_only: bool = False) -> RunOutcome:
    cfg = load_config(config_path)
    source = resolve_value_source(cfg)
    labels = source.labels or {}

    active: List[ComponentId] = [str(c) for c in cfg.get("active", source.components)]
    fmt = str(cfg.get("output", {}).get("format", "csv"))
    base_dir = _output_dir(cfg, config_path)
    base_dir.mkdir(parents=True, exist_ok=True)

    result: ShapleyResult | None = None
    individuals_df = pd.DataFrame()
    coalitions_df = pd.DataFrame()
    if not simulate_only:
        result = compute_shapley_values(active, source.value_function, source.components)
        axioms = check_axioms(result, source.value_function)
        logger.info(
            "Attributed total %.4f over %d active components (interaction %.4f)",
            result.total_value,
            len(active),
            result.interaction_value,
        )
        if not axioms["efficiency"]:
            logger.error(
                "Efficiency axiom violated: sum=%r total=%r",
                result.attributed_sum,
                result.total_value,
            )
            msg = "Shapley values do not sum to the grand-coalition value."
            raise RuntimeError(msg)
        for name, ok in axioms.items():
            if not ok:
                logger.warning("Axiom check failed: %s", name)

        order = [str(c) for c in cfg.get("marginal_order", active)]
        baselines = {
            "equal_split": compute_equal_split(active, source.value_function),
            "marginal": compute_marginal_attribution(order, source.value_function),
        }
        individuals_df = shapley_result_to_frame(result, labels, baselines)
        values = {c: source.value_function(c) for c in iter_coalitions(active)}
        coalitions_df = coalition_values_to_frame(
            values, compute_synergy(active, source.value_function)
        )
        write_table(individuals_df, base_dir / f"individuals.{fmt}", fmt=fmt)
        write_table(coalitions_df, base_dir / f"coalitions.{fmt}", fmt=fmt)
        logger.info("Wrote attribution tables to %s", base_dir)

    simulation: SimulationResult | None = None
    trials_df = pd.DataFrame()
    sim_cfg: Mapping[str, Any] = cfg.get("simulation", {})
    if simulate_only or sim_cfg.get("enabled", True):
        if source.model is None:
            logger.warning("Simulation needs a causal model; skipping for tabulated input.")
        else:
            seed = sim_cfg.get("seed")
            simulation = run_averaged_simulation(
                SimulationConfig(
                    active_components=active,
                    num_trials=int(sim_cfg.get("num_trials", 20)),
                    initial_skill=float(sim_cfg.get("initial_skill", 0.2)),
                ),
                num_runs=int(sim_cfg.get("num_runs", 10)),
                model=source.model,
                rng=random.Random(seed) if seed is not None else None,
            )
            trials_df = trials_to_frame(simulation)
            write_table(trials_df, base_dir / f"trials.{fmt}", fmt=fmt)
            logger.info(
                "Simulated skill %.3f -> %.3f (gain %.3f)",
                simulation.initial_value,
                simulation.final_value,
                simulation.gain,
            )

    insight = ""
    if result is not None:
        insight = generate_insight(active, result.values, source.model, labels)
        summary_path = base_dir / "summary.md"
        with summary_path.open("w", encoding="utf-8") as f:
            f.write(f"{insight}\n\n")
            print_summary(individuals_df, f)
        logger.info("Wrote %s", summary_path)

    viz_cfg: Mapping[str, Any] = cfg.get("visualization", {})
    if viz_cfg.get("enabled", True):
        try:
            if not individuals_df.empty:
                plot_attribution(individuals_df, base_dir)
            if not coalitions_df.empty:
                plot_coalition_values(coalitions_df, base_dir)
            if not trials_df.empty:
                plot_learning_curve(trials_df, base_dir)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Visualization failed: %s", exc)

    return RunOutcome(result=result, simulation=simulation, insight=insight, output_dir=base_dir)
