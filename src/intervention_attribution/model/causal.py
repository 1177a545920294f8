"""Additive causal model with pairwise interaction terms.

v(S) = sum of base effects of the members of S
     + sum of the effects of every interaction pair contained in S
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from .game import Coalition, ComponentId, ValueFunction


@dataclass(frozen=True)
class Interaction:
    components: Tuple[ComponentId, ComponentId]
    effect: float

    def applies_to(self, coalition: Coalition) -> bool:
        first, second = self.components
        return first in coalition and second in coalition


@dataclass(frozen=True)
class CausalModel:
    base_effects: Mapping[ComponentId, float]
    interactions: Sequence[Interaction] = field(default_factory=tuple)

    @property
    def components(self) -> List[ComponentId]:
        return list(self.base_effects)

    def strongest_interaction(self) -> Interaction | None:
        if not self.interactions:
            return None
        return max(self.interactions, key=lambda it: it.effect)


def create_value_function(model: CausalModel) -> ValueFunction:
    """Build v(S) from ``model``.

    Unknown components raise ``KeyError``.
    """

    def value(coalition: Coalition) -> float:
        total = 0.0
        for component in coalition:
            total += model.base_effects[component]
        for interaction in model.interactions:
            if interaction.applies_to(coalition):
                total += interaction.effect
        return total

    return value


def causal_model_from_mapping(cfg: Mapping[str, Any]) -> CausalModel:
    """Build a model from a ``{base_effects: ..., interactions: [...]}`` mapping."""
    raw_bases = cfg.get("base_effects")
    if not isinstance(raw_bases, Mapping) or not raw_bases:
        msg = "Causal model needs a non-empty 'base_effects' mapping."
        raise ValueError(msg)
    base_effects: Dict[ComponentId, float] = {
        str(k): float(v) for k, v in raw_bases.items()
    }

    interactions: list[Interaction] = []
    for entry in cfg.get("interactions") or []:
        pair = [str(c) for c in entry.get("components", [])]
        if len(pair) != 2 or pair[0] == pair[1]:
            msg = f"Interaction must name two distinct components: {entry!r}"
            raise ValueError(msg)
        missing = [c for c in pair if c not in base_effects]
        if missing:
            msg = f"Interaction references unknown components {missing}."
            raise ValueError(msg)
        interactions.append(
            Interaction(components=(pair[0], pair[1]), effect=float(entry["effect"]))
        )

    return CausalModel(base_effects=base_effects, interactions=tuple(interactions))


DEFAULT_CAUSAL_MODEL = CausalModel(
    base_effects={
        "adaptiveDifficulty": 0.18,
        "scaffoldedHints": 0.12,
        "positiveReinforcement": 0.10,
        "personalizedContent": 0.08,
    },
    interactions=(
        # hints only help when the task sits at the right difficulty
        Interaction(("scaffoldedHints", "adaptiveDifficulty"), 0.22),
        Interaction(("positiveReinforcement", "scaffoldedHints"), 0.08),
        Interaction(("personalizedContent", "adaptiveDifficulty"), 0.06),
    ),
)

COMPONENT_LABELS: Dict[ComponentId, str] = {
    "adaptiveDifficulty": "Adaptive Difficulty",
    "scaffoldedHints": "Scaffolded Hints",
    "positiveReinforcement": "Positive Reinforcement",
    "personalizedContent": "Personalized Content",
}
