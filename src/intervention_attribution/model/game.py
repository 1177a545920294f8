from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Mapping, Tuple


ComponentId = str
Coalition = FrozenSet[ComponentId]
ValueFunction = Callable[[Coalition], float]


@dataclass(frozen=True)
class ShapleyResult:
    """Per-component attribution for one game.

    ``values`` holds an entry for every component of the reporting universe;
    components outside ``active`` are fixed at 0.0.
    """

    values: Mapping[ComponentId, float]
    total_value: float
    interaction_value: float
    components: Tuple[ComponentId, ...] = field(default_factory=tuple)
    active: Tuple[ComponentId, ...] = field(default_factory=tuple)

    def value(self, component: ComponentId) -> float:
        return self.values.get(component, 0.0)

    @property
    def attributed_sum(self) -> float:
        return sum(self.values.values())

    def share(self, component: ComponentId) -> float | None:
        """Fraction of the attributed sum credited to ``component``."""
        total = self.attributed_sum
        if total == 0:
            return None
        return self.value(component) / total
