from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

import pandas as pd

from .aggregation.reporting import print_summary
from .aggregation.run_manager import run_from_config
from .model.scenarios import SCENARIOS
from .utils.logging_utils import configure_logging

COMMANDS = ("compute", "simulate", "scenarios")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intervention-attribution",
        description="Attribute intervention effects to their components with Shapley values.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        help="Subcommand: 'compute' (default), 'simulate' or 'scenarios'.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to YAML configuration file.",
    )
    parser.add_argument(
        "--log-config",
        type=Path,
        help="Optional YAML logging dictConfig.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    command = args.command or "compute"
    if command not in COMMANDS:
        parser.error(f"Unknown command: {args.command}")

    configure_logging(args.log_config)

    if command == "scenarios":
        df = pd.DataFrame(
            [
                {
                    "scenario": s.id,
                    "title": s.title,
                    "components": ", ".join(s.components),
                    "total_gain": round(s.total_gain, 4),
                }
                for s in SCENARIOS.values()
            ]
        )
        print_summary(df, sys.stdout)
        return

    if args.config is None:
        parser.error(f"'{command}' requires --config")

    outcome = run_from_config(args.config, simulate_only=command == "simulate")
    if outcome.insight:
        print(outcome.insight)


if __name__ == "__main__":
    main()
