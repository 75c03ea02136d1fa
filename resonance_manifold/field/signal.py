from __future__ import annotations

from typing import Iterable, Optional, Sequence, Union

import torch

from ..spectral.basis import as_signal
from ..spectral.decomposition import FusionContext, compute_entropy
from .base import ResonanceField

SeriesLike = Union[torch.Tensor, Sequence[float]]


class SignalField(ResonanceField[int, float, float]):
    """A 1-D signal with a parallel resonance series, indexed by sample.

    Out-of-range indices read as 0.0 and propagation there is a no-op.
    Negative indices are out of range (no wrap-around).
    """

    def __init__(
        self,
        signal: SeriesLike,
        resonance: Optional[SeriesLike] = None,
        *,
        tags: Iterable[str] = (),
        curvature: Optional[SeriesLike] = None,
        label: str = "biological",
    ):
        self._signal = as_signal(signal).clone()
        n = self._signal.numel()
        self._resonance = as_signal(resonance).clone() if resonance is not None else torch.zeros(n, dtype=torch.float64)
        self._curvature = as_signal(curvature).clone() if curvature is not None else torch.zeros(n, dtype=torch.float64)
        self._tags = tuple(tags)
        self._label = label

    @staticmethod
    def _read(series: torch.Tensor, index: int) -> float:
        if 0 <= index < series.numel():
            return float(series[index])
        return 0.0

    def observe(self, position: int) -> float:
        return self._read(self._signal, int(position))

    def compute_resonance(self, position: int) -> float:
        return self._read(self._resonance, int(position))

    def propagate(self, position: int, influence: float) -> None:
        index = int(position)
        if 0 <= index < self._resonance.numel():
            self._resonance[index] += float(influence)

    def signal(self) -> torch.Tensor:
        return self._signal.clone()

    def resonance_series(self) -> torch.Tensor:
        return self._resonance.clone()

    def domain_label(self) -> str:
        return self._label

    def fusion_context(self) -> FusionContext:
        return FusionContext(
            domain_entropy=compute_entropy(self._signal),
            resonance_profile=self._resonance.clone(),
            semantic_tags=self._tags,
            curvature_profile=self._curvature.clone(),
            domain_label=self._label,
        )
