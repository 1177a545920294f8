"""Documented demo scenarios: one, two and three intervention components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from .causal import CausalModel, Interaction, create_value_function
from .game import ComponentId, ValueFunction

ROBOT = "Robot"
ADAPTIVE_TASKS = "Adaptive Tasks"
PARENT = "Parent"


@dataclass(frozen=True)
class Scenario:
    id: str
    title: str
    description: str
    model: CausalModel

    @property
    def components(self) -> List[ComponentId]:
        return self.model.components

    @property
    def total_gain(self) -> float:
        return create_value_function(self.model)(frozenset(self.components))


SCENARIOS: Dict[str, Scenario] = {
    "robotOnly": Scenario(
        id="robotOnly",
        title="Robot Only",
        description="Robot tutors child with fixed difficulty tasks",
        model=CausalModel(base_effects={ROBOT: 0.15}),
    ),
    "robotPlusAdaptive": Scenario(
        id="robotPlusAdaptive",
        title="Robot + Adaptive Tasks",
        description="Robot tutors child with skill-matched tasks",
        model=CausalModel(
            base_effects={ROBOT: 0.15, ADAPTIVE_TASKS: 0.20},
            interactions=(Interaction((ROBOT, ADAPTIVE_TASKS), 0.10),),
        ),
    ),
    "fullIntervention": Scenario(
        id="fullIntervention",
        title="Full Intervention",
        description="Robot + adaptive tasks + parent involvement",
        model=CausalModel(
            base_effects={ROBOT: 0.15, ADAPTIVE_TASKS: 0.20, PARENT: 0.09},
            interactions=(
                Interaction((ROBOT, ADAPTIVE_TASKS), 0.10),
                Interaction((ROBOT, PARENT), 0.12),
                Interaction((ADAPTIVE_TASKS, PARENT), 0.06),
            ),
        ),
    ),
}


def get_scenario(scenario_id: str) -> Scenario:
    try:
        return SCENARIOS[scenario_id]
    except KeyError:
        msg = f"Unknown scenario: {scenario_id} (known: {sorted(SCENARIOS)})"
        raise ValueError(msg) from None


def scenario_value_function(scenario_id: str) -> ValueFunction:
    return create_value_function(get_scenario(scenario_id).model)
