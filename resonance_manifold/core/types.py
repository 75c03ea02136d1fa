from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Position:
    """A point on the 2-D plane the agent moves over."""

    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Gradient:
    direction: Tuple[float, float]
    magnitude: float

    @staticmethod
    def from_components(dx: float, dy: float) -> "Gradient":
        return Gradient(direction=(dx, dy), magnitude=math.hypot(dx, dy))


@dataclass(frozen=True)
class Resonance:
    amplitude: float
    frequency: float
