"""Fusion strategies: combine per-basis decompositions into one.

Both strategies fuse index by index, so every input decomposition must have the
same coefficient count. Mismatched inputs raise `SpectralShapeError` instead of
being truncated.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import torch

from ..core.errors import EmptyBasisSetError, SpectralShapeError
from .basis import Custom, SignalLike, WaveletBasis
from .decomposition import FusionContext, WaveletDecomposition, compute_entropy


def _stack(decompositions: Sequence[WaveletDecomposition]) -> torch.Tensor:
    if not decompositions:
        raise EmptyBasisSetError("Nothing to fuse: no decompositions were produced")
    lengths = {len(d) for d in decompositions}
    if len(lengths) != 1:
        detail = ", ".join(f"{d.basis.label}={len(d)}" for d in decompositions)
        raise SpectralShapeError(f"Cannot fuse decompositions of different lengths ({detail})")
    return torch.stack([d.coefficients.to(torch.float64) for d in decompositions])


class WaveletFusionStrategy(ABC):
    """Contract shared by every fusion strategy."""

    name: str = "fused"

    def __init__(self, eps: float = 1e-6):
        self.eps = float(eps)

    @abstractmethod
    def fuse(
        self,
        decompositions: Sequence[WaveletDecomposition],
        context: FusionContext,
    ) -> WaveletDecomposition:
        """Fuse decompositions of equal length into a single decomposition."""

    @abstractmethod
    def score_basis(self, basis: WaveletBasis, signal: SignalLike, context: FusionContext) -> float:
        """Score how well `basis` fits `signal`; higher is better."""

    def _result(self, coefficients: torch.Tensor, decompositions: Sequence[WaveletDecomposition]) -> WaveletDecomposition:
        return WaveletDecomposition(
            basis=Custom(self.name),
            coefficients=coefficients,
            level=decompositions[0].level,
        )


class EntropyWeightedFusion(WaveletFusionStrategy):
    """Weight each decomposition by 1 / (entropy + eps).

    Compact (low-entropy) decompositions dominate the fused result.
    """

    name = "EntropyFused"

    def weight(self, coefficients: torch.Tensor) -> float:
        return 1.0 / (compute_entropy(coefficients) + self.eps)

    def fuse(self, decompositions, context):
        stacked = _stack(decompositions)
        weights = torch.tensor([self.weight(d.coefficients) for d in decompositions], dtype=stacked.dtype)
        fused = (weights[:, None] * stacked).sum(dim=0) / weights.sum()
        return self._result(fused, decompositions)

    def score_basis(self, basis, signal, context):
        return self.weight(basis.transform(signal))


class ResonanceWeightedFusion(WaveletFusionStrategy):
    """Weight coefficient index i by the context's resonance profile (unit when absent)."""

    name = "ResonanceFused"

    def fuse(self, decompositions, context):
        stacked = _stack(decompositions)
        k, n = stacked.shape
        r = context.resonance_weights(n, dtype=stacked.dtype)
        weighted = (stacked * r[None, :]).sum(dim=0)
        # Every decomposition contributes r_i at index i.
        total = r * k
        fused = weighted / total.clamp(min=self.eps)
        return self._result(fused, decompositions)

    def score_basis(self, basis, signal, context):
        coeffs = basis.transform(signal).to(torch.float64)
        r = context.resonance_weights(int(coeffs.numel()), dtype=coeffs.dtype)
        return float((r * coeffs.abs()).sum())
