from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple, Union

import torch

from ..core.config import FieldConfig
from ..core.errors import FieldBoundsError
from ..core.types import Gradient, Position, Resonance
from ..spectral.decomposition import FusionContext
from .base import ResonanceField


class GridField(ResonanceField[Position, Gradient, Resonance]):
    """Coherence scalars on a 2-D grid, indexed as `grid[y, x]`.

    - Gradient: backward difference along each axis, clamped at index 0.
    - Resonance: amplitude = |gradient|, frequency = |dx| + |dy|.
    - Propagation: adds `propagation_gain * amplitude` to the target cell.
    """

    def __init__(
        self,
        coherence_map: Union[torch.Tensor, Sequence[Sequence[float]]],
        config: Optional[FieldConfig] = None,
    ):
        grid = torch.as_tensor(coherence_map, dtype=torch.float64)
        if grid.ndim != 2:
            raise ValueError(f"coherence_map must be 2-D, got shape {tuple(grid.shape)}")
        self._grid = grid.clone()
        self.cfg = config or FieldConfig()

    @classmethod
    def uniform(cls, width: int, height: int, value: float = 0.5, config: Optional[FieldConfig] = None) -> "GridField":
        return cls(torch.full((height, width), float(value), dtype=torch.float64), config)

    @property
    def width(self) -> int:
        return int(self._grid.shape[1])

    @property
    def height(self) -> int:
        return int(self._grid.shape[0])

    def bounds(self) -> Tuple[float, float, float, float]:
        """Closed box of positions that address a cell."""
        return (0.0, 0.0, float(self.width) - 1.0, float(self.height) - 1.0)

    def cell(self, position: Position) -> Tuple[int, int]:
        x = int(math.floor(position.x))
        y = int(math.floor(position.y))
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise FieldBoundsError(
                f"Position ({position.x:.3f}, {position.y:.3f}) is outside a {self.width}x{self.height} grid"
            )
        return x, y

    def value_at(self, x: int, y: int) -> float:
        return float(self._grid[y, x])

    def observe(self, position: Position) -> Gradient:
        x, y = self.cell(position)
        center = self._grid[y, x]
        dx = float(self._grid[y, max(x - 1, 0)] - center)
        dy = float(self._grid[max(y - 1, 0), x] - center)
        return Gradient.from_components(dx, dy)

    def compute_resonance(self, position: Position) -> Resonance:
        grad = self.observe(position)
        return Resonance(
            amplitude=grad.magnitude,
            frequency=abs(grad.direction[0]) + abs(grad.direction[1]),
        )

    def propagate(self, position: Position, influence: Resonance) -> None:
        x, y = self.cell(position)
        self._grid[y, x] += influence.amplitude * self.cfg.propagation_gain

    def signal(self) -> torch.Tensor:
        # Row 0 is the spectral view of the grid.
        if self.height == 0:
            return self._grid.new_empty(0)
        return self._grid[0].clone()

    def flat_signal(self) -> torch.Tensor:
        """Whole grid, row-major."""
        return self._grid.reshape(-1).clone()

    def domain_label(self) -> str:
        return "grid"

    def fusion_context(self) -> FusionContext:
        return FusionContext(coherence_map=self.flat_signal(), domain_label=self.domain_label())
