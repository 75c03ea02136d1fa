from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np


@dataclass
class PercentileHotspot:
    """Indices whose value reaches the given percentile (80.0 keeps the top 20%)."""

    percentile: float = 80.0

    def threshold(self, signal: Sequence[float]) -> float:
        y = np.sort(np.asarray(signal, dtype=np.float64).ravel())
        index = int(np.floor(self.percentile / 100.0 * y.size))
        return float(y[min(index, y.size - 1)])

    def detect(self, signal: Sequence[float]) -> np.ndarray:
        y = np.asarray(signal, dtype=np.float64).ravel()
        if y.size == 0:
            return np.empty(0, dtype=np.int64)
        return np.flatnonzero(y >= self.threshold(y))
