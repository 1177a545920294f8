from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

SOURCE_KEYS = ("model", "scenario", "input")


def load_config(path: Path) -> Mapping[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        msg = "Configuration file must contain a mapping at top level."
        raise ValueError(msg)

    sources = [k for k in SOURCE_KEYS if k in data]
    if len(sources) > 1:
        msg = f"Configure exactly one value source, got {sources}."
        raise ValueError(msg)
    return data
