"""Modelo random-walk para el modo simulación.

Cada tick, cada canal se mueve un paso uniforme en [-10.0, +10.0] con
resolución 0.1 (randint(-100, 100) / 10).
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Sequence

# (low, high) -> entero uniforme en [low, high], como random.randint
RandomDraw = Callable[[int, int], int]

STEP_RANGE = (-100, 100)
STEP_SCALE = 10.0

DEFAULT_CHANNELS = ("temperature_1", "temperature_2", "temperature_3")
DEFAULT_INITIAL_VALUE = 50.0


@dataclass(frozen=True)
class RandomWalkState:
    """Posición actual de cada canal. Valor inmutable."""

    values: tuple[tuple[str, float], ...]

    @classmethod
    def initial(
        cls,
        channels: Sequence[str] = DEFAULT_CHANNELS,
        value: float = DEFAULT_INITIAL_VALUE,
    ) -> "RandomWalkState":
        return cls(values=tuple((name, float(value)) for name in channels))

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "RandomWalkState":
        return cls(values=tuple((k, float(v)) for k, v in values.items()))

    def as_fields(self) -> dict[str, float]:
        return dict(self.values)


def step(state: RandomWalkState, draw: RandomDraw) -> RandomWalkState:
    """Función pura: (estado, fuente aleatoria) -> nuevo estado."""
    low, high = STEP_RANGE
    return RandomWalkState(
        values=tuple((name, value + draw(low, high) / STEP_SCALE) for name, value in state.values)
    )


class RandomWalkModel:
    """Envuelve el estado y la fuente aleatoria para el Acquirer."""

    def __init__(
        self,
        initial: Optional[RandomWalkState] = None,
        draw: Optional[RandomDraw] = None,
    ):
        self._state = initial or RandomWalkState.initial()
        self._draw = draw or random.randint

    @property
    def state(self) -> RandomWalkState:
        return self._state

    def advance(self) -> dict[str, float]:
        """Devuelve los valores actuales y avanza un paso."""
        current = self._state.as_fields()
        self._state = step(self._state, self._draw)
        return current
