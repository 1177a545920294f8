"""Stochastic learner-skill simulation driven by a causal model.

Each trial succeeds with a logistic probability of the current skill plus a
small uniform jitter. Skill grows every trial by a rate derived from the
model's value of the active coalition, faster after a success.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .causal import DEFAULT_CAUSAL_MODEL, CausalModel, create_value_function
from .game import ComponentId
from ..utils.logging_utils import get_logger

MAX_SKILL = 1.0
NOISE_AMPLITUDE = 0.15
SUCCESS_BOOST = 1.2
FAILURE_DAMPING = 0.8

logger = get_logger(__name__)


@dataclass(frozen=True)
class SimulationConfig:
    active_components: Sequence[ComponentId]
    num_trials: int = 20
    initial_skill: float = 0.2

    def __post_init__(self) -> None:
        if self.num_trials < 1:
            msg = f"num_trials must be positive, got {self.num_trials}."
            raise ValueError(msg)


@dataclass(frozen=True)
class Trial:
    trial_number: int
    skill_level: float
    correct: bool
    active_components: Tuple[ComponentId, ...]


@dataclass(frozen=True)
class SimulationResult:
    trials: List[Trial] = field(default_factory=list)
    initial_value: float = 0.0
    final_value: float = 0.0

    @property
    def gain(self) -> float:
        return self.final_value - self.initial_value


def success_probability(skill: float) -> float:
    return 1.0 / (1.0 + math.exp(-2.0 * (skill - 0.5)))


def run_simulation(
    config: SimulationConfig,
    model: CausalModel = DEFAULT_CAUSAL_MODEL,
    rng: random.Random | None = None,
) -> SimulationResult:
    if rng is None:
        rng = random.Random()

    active = tuple(config.active_components)
    value_function = create_value_function(model)
    learning_rate = value_function(frozenset(active)) / config.num_trials

    trials: list[Trial] = []
    skill = config.initial_skill
    for i in range(config.num_trials):
        jitter = NOISE_AMPLITUDE * (rng.random() - 0.5)
        correct = rng.random() < success_probability(skill) + jitter
        trials.append(
            Trial(
                trial_number=i + 1,
                skill_level=skill,
                correct=correct,
                active_components=active,
            )
        )
        step = learning_rate * (SUCCESS_BOOST if correct else FAILURE_DAMPING)
        skill = min(MAX_SKILL, skill + step)

    return SimulationResult(
        trials=trials,
        initial_value=config.initial_skill,
        final_value=skill,
    )


def run_averaged_simulation(
    config: SimulationConfig,
    num_runs: int = 10,
    model: CausalModel = DEFAULT_CAUSAL_MODEL,
    rng: random.Random | None = None,
) -> SimulationResult:
    """Average ``num_runs`` independent runs trial by trial.

    Skill is the mean across runs; a trial counts as correct when more than
    half of the runs got it right.
    """
    if num_runs < 1:
        msg = f"num_runs must be positive, got {num_runs}."
        raise ValueError(msg)

    active = tuple(config.active_components)
    if not active:
        flat = [
            Trial(i + 1, config.initial_skill, False, ())
            for i in range(config.num_trials)
        ]
        return SimulationResult(
            trials=flat,
            initial_value=config.initial_skill,
            final_value=config.initial_skill,
        )

    if rng is None:
        rng = random.Random()
    runs = [run_simulation(config, model, rng) for _ in range(num_runs)]

    trials: list[Trial] = []
    for idx in range(config.num_trials):
        mean_skill = sum(r.trials[idx].skill_level for r in runs) / num_runs
        correct_count = sum(1 for r in runs if r.trials[idx].correct)
        trials.append(
            Trial(
                trial_number=idx + 1,
                skill_level=mean_skill,
                correct=correct_count > num_runs / 2,
                active_components=active,
            )
        )

    final_value = sum(r.final_value for r in runs) / num_runs
    logger.debug(
        "Averaged %d runs of %d trials: final skill %.4f",
        num_runs,
        config.num_trials,
        final_value,
    )
    return SimulationResult(
        trials=trials,
        initial_value=config.initial_skill,
        final_value=final_value,
    )
