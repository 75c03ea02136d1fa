from __future__ import annotations

import copy
import math
from typing import Optional

import torch

from ..core.config import FieldConfig
from ..core.types import Position, Resonance
from ..spectral.decomposition import FusionContext
from .base import ResonanceField


class SyntheticField(ResonanceField[Position, float, Resonance]):
    """Procedural field: trigonometric in the position, stateless.

    - observe:   sin(x) + cos(y) + U(0, observation_noise)
    - resonance: amplitude = |cos(x) + sin(y)|, frequency = 1 + sin(x) + cos(y)

    `signal()` is a fixed two-sample placeholder; this variant is not meant
    for spectral fusion.
    """

    def __init__(self, generator: torch.Generator, config: Optional[FieldConfig] = None):
        self.generator = generator
        self.cfg = config or FieldConfig()

    def __deepcopy__(self, memo):
        # The random source is shared, never copied.
        clone = copy.copy(self)
        clone.cfg = copy.deepcopy(self.cfg, memo)
        return clone

    def observe(self, position: Position) -> float:
        jitter = float(torch.rand((), generator=self.generator, dtype=torch.float64))
        return math.sin(position.x) + math.cos(position.y) + self.cfg.observation_noise * jitter

    def compute_resonance(self, position: Position) -> Resonance:
        return Resonance(
            amplitude=abs(math.cos(position.x) + math.sin(position.y)),
            frequency=1.0 + math.sin(position.x) + math.cos(position.y),
        )

    def propagate(self, position: Position, influence: Resonance) -> None:
        return None

    def signal(self) -> torch.Tensor:
        return torch.zeros(2, dtype=torch.float64)

    def domain_label(self) -> str:
        return "synthetic"

    def fusion_context(self) -> FusionContext:
        return FusionContext()
