"""Resonance field capability.

A field is a store of scalar state that can be observed, queried for resonance
and updated at a position. Each variant chooses its own position, gradient and
resonance types. The store is private to the field: reads happen only through
`observe`/`compute_resonance`, writes only through `propagate`.

The spectral bridge (`fused_spectrum`, `dominant_basis`) is written as free
functions over the read-only accessors `signal()` and `fusion_context()`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, Optional, TypeVar

import torch

from ..spectral.decomposition import FusionContext, WaveletDecomposition
from ..spectral.engine import select_dominant

if TYPE_CHECKING:  # pragma: no cover
    from ..spectral.basis import WaveletBasis
    from ..spectral.engine import WaveletEngine

P = TypeVar("P")
G = TypeVar("G")
R = TypeVar("R")


class ResonanceField(ABC, Generic[P, G, R]):
    """Shared operation set of every field variant."""

    @abstractmethod
    def observe(self, position: P) -> G:
        """Local gradient (or scalar reading) at `position`."""

    @abstractmethod
    def compute_resonance(self, position: P) -> R:
        """Resonance at `position`."""

    @abstractmethod
    def propagate(self, position: P, influence: R) -> None:
        """Deposit `influence` into the field at `position`."""

    @abstractmethod
    def signal(self) -> torch.Tensor:
        """Flat numeric view used as spectral input. Callers must not mutate it."""

    @abstractmethod
    def domain_label(self) -> str:
        """Identifying domain string, e.g. "biological"."""

    @abstractmethod
    def fusion_context(self) -> FusionContext:
        """Fresh snapshot of the side information for spectral fusion."""


def fused_spectrum(field: ResonanceField, engine: "WaveletEngine", level: Optional[int] = None) -> WaveletDecomposition:
    return engine.fuse(field.signal(), field.fusion_context(), level)


def dominant_basis(field: ResonanceField, engine: "WaveletEngine") -> Optional["WaveletBasis"]:
    return select_dominant(engine.score_bases(field.signal(), field.fusion_context()))
