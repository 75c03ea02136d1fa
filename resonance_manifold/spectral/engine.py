from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..core.config import SpectralConfig
from ..core.errors import EmptyBasisSetError
from .basis import SignalLike, WaveletBasis, as_signal
from .decomposition import FusionContext, WaveletDecomposition
from .fusion import WaveletFusionStrategy


class WaveletEngine:
    """Decompose a signal under every configured basis, fuse, and score bases.

    Basis order is preserved from construction and drives every output order,
    including tie-breaking in `dominant_basis`.
    """

    def __init__(
        self,
        basis_set: Sequence[WaveletBasis],
        fusion_strategy: WaveletFusionStrategy,
        config: Optional[SpectralConfig] = None,
    ):
        if not basis_set:
            raise EmptyBasisSetError("WaveletEngine needs at least one basis")
        self.basis_set: Tuple[WaveletBasis, ...] = tuple(basis_set)
        self.fusion_strategy = fusion_strategy
        self.cfg = config or SpectralConfig()

    def decompose_all(self, signal: SignalLike, level: Optional[int] = None) -> List[WaveletDecomposition]:
        lvl = self.cfg.level if level is None else int(level)
        s = as_signal(signal)
        return [
            WaveletDecomposition(basis=basis, coefficients=basis.transform(s), level=lvl)
            for basis in self.basis_set
        ]

    def fuse(
        self,
        signal: SignalLike,
        context: Optional[FusionContext] = None,
        level: Optional[int] = None,
    ) -> WaveletDecomposition:
        decompositions = self.decompose_all(signal, level)
        return self.fusion_strategy.fuse(decompositions, context or FusionContext())

    def score_bases(
        self,
        signal: SignalLike,
        context: Optional[FusionContext] = None,
    ) -> List[Tuple[WaveletBasis, float]]:
        ctx = context or FusionContext()
        s = as_signal(signal)
        return [(basis, float(self.fusion_strategy.score_basis(basis, s, ctx))) for basis in self.basis_set]

    def dominant_basis(
        self,
        signal: SignalLike,
        context: Optional[FusionContext] = None,
    ) -> Optional[WaveletBasis]:
        return select_dominant(self.score_bases(signal, context))


def select_dominant(scores: Sequence[Tuple[WaveletBasis, float]]) -> Optional[WaveletBasis]:
    """Highest-scoring basis; the first one wins ties."""
    best: Optional[WaveletBasis] = None
    best_score = float("-inf")
    for basis, score in scores:
        if best is None or score > best_score:
            best, best_score = basis, score
    return best
