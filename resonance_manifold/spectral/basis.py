"""Wavelet bases and their transforms.

A basis is an immutable, value-comparable description of one decomposition
strategy. Every basis knows how to transform a 1-D signal into a coefficient
sequence; the engine treats all of them interchangeably.

Bases:
- `Haar()`                       elementary pairwise average/difference
- `Daubechies(order)`            moving-average smoothing, window = max(order, 2)
- `Biorthogonal(analysis, synth)` mean of an analysis and a synthesis window
- `Custom(name)`                 a named transform from the custom registry

Degenerate inputs (empty signals, signals no longer than a window) yield an
empty coefficient tensor. Haar is the exception: an odd-length signal cannot be
paired and raises `SpectralShapeError`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Sequence, Union

import torch

from ..core.errors import SpectralShapeError

SignalLike = Union[torch.Tensor, Sequence[float]]


def as_signal(signal: SignalLike, *, dtype: torch.dtype = torch.float64) -> torch.Tensor:
    """Coerce any 1-D numeric sequence into a flat float tensor."""
    t = torch.as_tensor(signal, dtype=dtype)
    return t.reshape(-1)


# =============================================================================
# Haar
# =============================================================================


@dataclass(frozen=True, eq=False)
class HaarCoefficients:
    approximation: torch.Tensor
    detail: torch.Tensor


class HaarWavelet:
    """Single-level Haar analysis/synthesis with averaging normalization.

    Reversible: `reconstruct(decompose(s))` recovers `s` up to float rounding.
    """

    @staticmethod
    def decompose(signal: SignalLike) -> HaarCoefficients:
        s = as_signal(signal)
        if s.numel() % 2 != 0:
            raise SpectralShapeError(f"Haar decomposition needs an even-length signal, got {s.numel()}")
        even = s[0::2]
        odd = s[1::2]
        return HaarCoefficients(approximation=(even + odd) / 2.0, detail=(even - odd) / 2.0)

    @staticmethod
    def reconstruct(coeffs: HaarCoefficients) -> torch.Tensor:
        a = as_signal(coeffs.approximation)
        d = as_signal(coeffs.detail)
        if a.numel() != d.numel():
            raise SpectralShapeError(
                f"approximation/detail length mismatch: {a.numel()} != {d.numel()}"
            )
        out = torch.empty(2 * a.numel(), dtype=a.dtype)
        out[0::2] = a + d
        out[1::2] = a - d
        return out


def haar_transform(signal: SignalLike) -> torch.Tensor:
    """Elementary basis: `[approximation..., detail...]`, same length as the signal."""
    coeffs = HaarWavelet.decompose(signal)
    return torch.cat([coeffs.approximation, coeffs.detail])


# =============================================================================
# Parametrized smoothing bases
# =============================================================================


def daubechies_transform(signal: SignalLike, order: int) -> torch.Tensor:
    s = as_signal(signal)
    window = max(int(order), 2)
    n = s.numel()
    if n <= window:
        return s.new_empty(0)
    # unfold yields n - window + 1 windows; the last one is never emitted.
    windows = s.unfold(0, window, 1)[: n - window]
    return (windows * (1.0 / window)).sum(dim=1)


def biorthogonal_transform(signal: SignalLike, analysis: int, synthesis: int) -> torch.Tensor:
    s = as_signal(signal)
    wa = max(int(analysis), 2)
    ws = max(int(synthesis), 2)
    n = s.numel()
    if n <= wa:
        return s.new_empty(0)

    csum = torch.cat([s.new_zeros(1), torch.cumsum(s, dim=0)])
    idx = torch.arange(n - wa)

    analysis_mean = (csum[idx + wa] - csum[idx]) / wa

    start = (idx - ws // 2).clamp(min=0)
    end = (start + ws).clamp(max=n)
    # Divided by the nominal window even when clipped at the right edge.
    synthesis_mean = (csum[end] - csum[start]) / ws

    return (analysis_mean + synthesis_mean) / 2.0


# =============================================================================
# Custom named transforms
# =============================================================================

CustomTransform = Callable[[torch.Tensor], torch.Tensor]

_CUSTOM_TRANSFORMS: Dict[str, CustomTransform] = {
    "identity": lambda s: s.clone(),
    "reverse": lambda s: torch.flip(s, dims=(0,)),
    "pulse": lambda s: torch.sin(s) * s,
}


def register_transform(name: str, fn: CustomTransform) -> None:
    """Make `Custom(name)` resolve to `fn`. Replaces an existing registration."""
    _CUSTOM_TRANSFORMS[name] = fn


def custom_transform(signal: SignalLike, name: str) -> torch.Tensor:
    s = as_signal(signal)
    fn = _CUSTOM_TRANSFORMS.get(name)
    if fn is None:
        return s.clone()
    return as_signal(fn(s), dtype=s.dtype)


# =============================================================================
# Basis identifiers
# =============================================================================


class WaveletBasis(ABC):
    """Closed family of decomposition strategies (see module docstring)."""

    @abstractmethod
    def transform(self, signal: SignalLike) -> torch.Tensor:
        """Coefficient sequence of `signal` under this basis."""

    @property
    @abstractmethod
    def label(self) -> str:
        """Short display name, e.g. "haar" or "db4"."""


@dataclass(frozen=True)
class Haar(WaveletBasis):
    def transform(self, signal: SignalLike) -> torch.Tensor:
        return haar_transform(signal)

    @property
    def label(self) -> str:
        return "haar"


@dataclass(frozen=True)
class Daubechies(WaveletBasis):
    order: int

    def transform(self, signal: SignalLike) -> torch.Tensor:
        return daubechies_transform(signal, self.order)

    @property
    def label(self) -> str:
        return f"db{self.order}"


@dataclass(frozen=True)
class Biorthogonal(WaveletBasis):
    analysis: int
    synthesis: int

    def transform(self, signal: SignalLike) -> torch.Tensor:
        return biorthogonal_transform(signal, self.analysis, self.synthesis)

    @property
    def label(self) -> str:
        return f"bior{self.analysis}.{self.synthesis}"


@dataclass(frozen=True)
class Custom(WaveletBasis):
    name: str

    def transform(self, signal: SignalLike) -> torch.Tensor:
        return custom_transform(signal, self.name)

    @property
    def label(self) -> str:
        return self.name
