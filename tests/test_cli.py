from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from intervention_attribution.aggregation.run_manager import run_from_config
from intervention_attribution.cli import main


def test_cli_compute(tmp_path: Path, capsys) -> None:  # type: ignore[no-untyped-def]
    cfg = tmp_path / "config.yaml"
    out_dir = tmp_path / "out"

    cfg.write_text(
        f"""
model:
  base_effects:
    A: 0.15
    B: 0.20
  interactions:
    - components: [A, B]
      effect: 0.10
simulation:
  num_trials: 8
  num_runs: 3
  seed: 5
output:
  path: {out_dir}
  format: csv
visualization:
  enabled: false
""",
        encoding="utf-8",
    )

    main(["compute", "--config", str(cfg)])

    individuals = pd.read_csv(out_dir / "individuals.csv")
    shapley = dict(zip(individuals["component"], individuals["shapley"]))
    assert abs(shapley["A"] - 0.20) < 1e-10
    assert abs(shapley["B"] - 0.25) < 1e-10
    assert {"equal_split", "marginal"} <= set(individuals.columns)

    coalitions = pd.read_csv(out_dir / "coalitions.csv")
    assert len(coalitions) == 4

    trials = pd.read_csv(out_dir / "trials.csv")
    assert len(trials) == 8
    assert (out_dir / "summary.md").exists()
    assert "contributes" in capsys.readouterr().out


def test_run_from_scenario_with_subset(tmp_path: Path) -> None:
    cfg = tmp_path / "scenario.yaml"
    cfg.write_text(
        f"""
scenario: fullIntervention
active: [Robot, Parent]
simulation:
  enabled: false
output:
  path: {tmp_path / "out"}
visualization:
  enabled: false
""",
        encoding="utf-8",
    )

    outcome = run_from_config(cfg)

    assert outcome.result is not None
    assert outcome.result.values["Adaptive Tasks"] == 0.0
    # 0.15 + 0.06 and 0.09 + 0.06
    assert abs(outcome.result.values["Robot"] - 0.21) < 1e-10
    assert abs(outcome.result.values["Parent"] - 0.15) < 1e-10
    assert outcome.simulation is None


def test_run_from_table_input(tmp_path: Path) -> None:
    table = tmp_path / "game.csv"
    table.write_text(
        "coalition,value\n{A},0.15\n{B},0.20\n\"{A,B}\",0.45\n",
        encoding="utf-8",
    )
    cfg = tmp_path / "table.yaml"
    cfg.write_text(
        f"""
input:
  path: {table}
output:
  path: {tmp_path / "out"}
visualization:
  enabled: false
""",
        encoding="utf-8",
    )

    outcome = run_from_config(cfg)

    assert outcome.result is not None
    assert abs(outcome.result.interaction_value - 0.10) < 1e-10
    assert outcome.simulation is None


def test_cli_simulate_writes_only_trials(tmp_path: Path) -> None:
    cfg = tmp_path / "sim.yaml"
    out_dir = tmp_path / "out"
    cfg.write_text(
        f"""
simulation:
  num_trials: 6
  seed: 1
output:
  path: {out_dir}
visualization:
  enabled: false
""",
        encoding="utf-8",
    )

    main(["simulate", "-c", str(cfg)])

    assert (out_dir / "trials.csv").exists()
    assert not (out_dir / "individuals.csv").exists()


def test_cli_scenarios_lists_all(capsys) -> None:  # type: ignore[no-untyped-def]
    main(["scenarios"])
    out = capsys.readouterr().out
    assert "fullIntervention" in out
    assert "0.72" in out


def test_cli_rejects_unknown_command_and_missing_config() -> None:
    with pytest.raises(SystemExit):
        main(["explode"])
    with pytest.raises(SystemExit):
        main(["compute"])
