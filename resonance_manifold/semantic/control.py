"""Control-law synthesis and integration into a new position."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Tuple

from ..core.config import ControlConfig
from ..core.types import Position, Resonance


@dataclass(frozen=True)
class ControlLaw:
    torque: float
    alignment: float


class LawSynthesizer(Protocol):
    def synthesize(self, posterior: Any, resonance: Any, entanglement: Any) -> ControlLaw: ...


class ResonanceSynth:
    """torque = amplitude * (1 - mean), alignment = frequency * mean."""

    def synthesize(self, posterior: Any, resonance: Resonance, entanglement: Any) -> ControlLaw:
        mean = float(posterior.mean())
        return ControlLaw(
            torque=resonance.amplitude * (1.0 - mean),
            alignment=resonance.frequency * mean,
        )


class ControlIntegrator(Protocol):
    def apply(self, position: Position, law: ControlLaw) -> Position: ...


class HoldPosition:
    """Identity integration: the agent never moves."""

    def apply(self, position: Position, law: ControlLaw) -> Position:
        return position


class HeadingIntegrator:
    """Unicycle-style integration.

    heading += torque * dt
    position += alignment * dt * (cos(heading), sin(heading))

    The result is clamped into `bounds` (xmin, ymin, xmax, ymax) when set.
    """

    def __init__(self, config: Optional[ControlConfig] = None, heading: float = 0.0):
        self.cfg = config or ControlConfig()
        self.heading = float(heading)

    def apply(self, position: Position, law: ControlLaw) -> Position:
        dt = float(self.cfg.dt)
        self.heading += law.torque * dt
        x = position.x + law.alignment * dt * math.cos(self.heading)
        y = position.y + law.alignment * dt * math.sin(self.heading)
        if self.cfg.bounds is not None:
            x, y = _clamp((x, y), self.cfg.bounds)
        return Position(x, y)


def _clamp(xy: Tuple[float, float], bounds: Tuple[float, float, float, float]) -> Tuple[float, float]:
    xmin, ymin, xmax, ymax = bounds
    return (min(max(xy[0], xmin), xmax), min(max(xy[1], ymin), ymax))
