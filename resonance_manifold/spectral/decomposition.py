from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

import torch

from .basis import WaveletBasis


@dataclass(frozen=True, eq=False)
class WaveletDecomposition:
    """Coefficients of one signal under one basis at one level.

    Decompositions are never patched; fusion always builds a new one.
    """

    basis: WaveletBasis
    coefficients: torch.Tensor
    level: int

    def __len__(self) -> int:
        return int(self.coefficients.numel())


@dataclass(frozen=True, eq=False)
class FusionContext:
    """Side information that biases fusion and basis scoring.

    Every field is optional; `domain_entropy` defaults to zero. `semantic_tags`
    is an ordered set: duplicates are dropped, first occurrence wins.
    """

    domain_entropy: float = 0.0
    resonance_profile: Optional[torch.Tensor] = None
    semantic_tags: Tuple[str, ...] = field(default_factory=tuple)
    coherence_map: Optional[torch.Tensor] = None
    curvature_profile: Optional[torch.Tensor] = None
    domain_label: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "semantic_tags", tuple(dict.fromkeys(self.semantic_tags)))

    def resonance_weights(self, n: int, *, dtype: torch.dtype = torch.float64) -> torch.Tensor:
        """Per-index weights for `n` coefficients.

        Indices without a profile entry (no profile, or a profile shorter than
        `n`) get the unit weight.
        """
        weights = torch.ones(n, dtype=dtype)
        if self.resonance_profile is None:
            return weights
        profile = torch.as_tensor(self.resonance_profile, dtype=dtype).reshape(-1)
        m = min(n, int(profile.numel()))
        weights[:m] = profile[:m]
        return weights


def compute_entropy(coeffs: torch.Tensor) -> float:
    """Shannon entropy (bits) of the coefficient magnitudes.

    p_i = |c_i| / sum_j |c_j|; zero-probability terms are skipped, so an
    all-zero (or empty) sequence has entropy 0.
    """
    c = torch.as_tensor(coeffs, dtype=torch.float64).reshape(-1).abs()
    norm = c.sum()
    if c.numel() == 0 or float(norm) == 0.0:
        return 0.0
    p = c / norm
    p = p[p > 0]
    return float(-(p * torch.log2(p)).sum())
