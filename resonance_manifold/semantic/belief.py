"""Belief capability consumed by the semantic engine, with a Gaussian example.

The engine only relies on `BeliefTensor`: observe, update, entropy, mean and
prior. Inference itself lives outside the engine; `GaussianBelief` is the
reference implementation used by the demos and tests.
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass
from typing import Any, Protocol, Sequence, runtime_checkable

import torch


@dataclass(frozen=True)
class Observation:
    signal: float
    noise: float


@runtime_checkable
class BeliefTensor(Protocol):
    def observe(self) -> Any: ...

    def update(self, observation: Any) -> None: ...

    def entropy(self) -> float: ...

    def mean(self) -> float: ...

    def prior(self) -> Any: ...


@runtime_checkable
class Recoherable(Protocol):
    """Beliefs whose spread a coherence pulse can tighten."""

    def recohere(self, factor: float) -> None: ...


class GaussianBelief:
    """Scalar Gaussian belief with noisy self-observation.

    update: mean <- (mean + obs) / 2, variance <- 0.9 * variance.
    """

    def __init__(
        self,
        mean: float,
        variance: float,
        *,
        generator: torch.Generator,
        noise: float = 0.1,
    ):
        if variance <= 0.0:
            raise ValueError(f"variance must be positive, got {variance}")
        self._mean = float(mean)
        self.variance = float(variance)
        self.noise = float(noise)
        self.generator = generator

    def __deepcopy__(self, memo):
        # Snapshots share the random source.
        return copy.copy(self)

    def observe(self) -> Observation:
        u = float(torch.rand((), generator=self.generator, dtype=torch.float64))
        return Observation(signal=self._mean + self.noise * u, noise=self.noise)

    def update(self, observation: Observation) -> None:
        self._mean = (self._mean + observation.signal) / 2.0
        self.variance *= 0.9

    def entropy(self) -> float:
        """Differential entropy (nats) of N(mean, variance)."""
        return 0.5 * math.log(2.0 * math.pi * math.e * self.variance)

    def mean(self) -> float:
        return self._mean

    def prior(self) -> "GaussianBelief":
        return copy.copy(self)

    def recohere(self, factor: float) -> None:
        self.variance *= float(factor)

    def __repr__(self) -> str:
        return f"GaussianBelief(mean={self._mean:.4f}, variance={self.variance:.4f})"


# =============================================================================
# Belief fusion
# =============================================================================


class BeliefFusion(Protocol):
    def fuse(self, beliefs: Sequence[GaussianBelief]) -> GaussianBelief: ...


def _require(beliefs: Sequence[Any]) -> None:
    if not beliefs:
        raise ValueError("Cannot fuse an empty belief set")


class PrecisionWeightedFusion:
    """Product of Gaussians: precisions add, means are precision-weighted."""

    def fuse(self, beliefs: Sequence[GaussianBelief]) -> GaussianBelief:
        _require(beliefs)
        precision = sum(1.0 / b.variance for b in beliefs)
        mean = sum(b.mean() / b.variance for b in beliefs) / precision
        return GaussianBelief(mean, 1.0 / precision, generator=beliefs[0].generator, noise=beliefs[0].noise)


class MeanFusion:
    """Arithmetic mean of means and variances."""

    def fuse(self, beliefs: Sequence[GaussianBelief]) -> GaussianBelief:
        _require(beliefs)
        k = len(beliefs)
        mean = sum(b.mean() for b in beliefs) / k
        variance = sum(b.variance for b in beliefs) / k
        return GaussianBelief(mean, variance, generator=beliefs[0].generator, noise=beliefs[0].noise)
