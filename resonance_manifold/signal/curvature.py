from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from scipy.signal import lombscargle


@dataclass
class CurvatureSignal:
    """Sparse curvature samples at (not necessarily uniform) positions."""

    positions: Sequence[float]
    values: Sequence[float]

    def _arrays(self) -> tuple[np.ndarray, np.ndarray]:
        return (
            np.asarray(self.positions, dtype=np.float64).ravel(),
            np.asarray(self.values, dtype=np.float64).ravel(),
        )

    def reconstruct(self, steps: int = 10) -> np.ndarray:
        """Dense signal by linear interpolation, `steps` samples per segment.

        Each segment contributes its left endpoint and `steps - 1` interior
        samples; the final sample position is not emitted. Mismatched inputs or
        fewer than two samples give an empty array.
        """
        _, y = self._arrays()
        if len(self.positions) != len(self.values) or y.size < 2:
            return np.empty(0, dtype=np.float64)

        t = np.arange(steps, dtype=np.float64) / steps
        y0 = y[:-1, None]
        y1 = y[1:, None]
        return (y0 + t[None, :] * (y1 - y0)).ravel()

    def estimate_frequencies(self, n_frequencies: int = 3, n_grid: int = 256) -> np.ndarray:
        """Dominant angular frequencies of the sparse samples (Lomb-Scargle).

        Returns up to `n_frequencies` frequencies ordered by descending power.
        """
        x, y = self._arrays()
        if x.size != y.size or x.size < 3:
            return np.empty(0, dtype=np.float64)
        span = float(x.max() - x.min())
        if span <= 0.0:
            return np.empty(0, dtype=np.float64)

        spacing = np.diff(np.sort(x))
        spacing = spacing[spacing > 0]
        # Nyquist-like ceiling from the densest sampling.
        w_max = np.pi / float(spacing.min())
        w_min = 2.0 * np.pi / span
        freqs = np.linspace(w_min, max(w_max, w_min * 2.0), n_grid)

        power = lombscargle(x, y - y.mean(), freqs)
        order = np.argsort(power)[::-1]
        return freqs[order[:n_frequencies]]


def densify(positions: Sequence[float], values: Sequence[float], steps: Optional[int] = None) -> np.ndarray:
    signal = CurvatureSignal(positions, values)
    return signal.reconstruct() if steps is None else signal.reconstruct(steps)
