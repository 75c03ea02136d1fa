from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np


@dataclass(eq=False)
class PathMetrics:
    length: float
    manhattan_distance: float
    x: np.ndarray
    y: np.ndarray


@dataclass
class TrajectoryPath:
    """Integrate a curvature sequence into a planar path.

    angle += k * dt; x += cos(angle) * dt; y += sin(angle) * dt
    """

    dz_dt: float = 0.0  # z drift; carried for 3-D extensions, unused in the planar metrics

    def evaluate(self, curvature: Sequence[float], dt: float) -> PathMetrics:
        k = np.asarray(curvature, dtype=np.float64).ravel()
        theta = np.cumsum(k * dt)
        x = np.cumsum(np.cos(theta) * dt)
        y = np.cumsum(np.sin(theta) * dt)

        if k.size:
            manhattan = abs(float(x[-1] - x[0])) + abs(float(y[-1] - y[0]))
        else:
            manhattan = 0.0

        return PathMetrics(length=float(k.size * dt), manhattan_distance=manhattan, x=x, y=y)
