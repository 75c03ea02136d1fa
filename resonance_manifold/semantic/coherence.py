"""Entropy-triggered coherence pulses."""

from __future__ import annotations

from typing import Optional, Protocol

from ..console import console
from ..core.config import CoherenceConfig
from .belief import BeliefTensor, Recoherable
from .entangle import SimpleEntangleMap


class CoherencePulse(Protocol):
    def should_trigger(self, belief: BeliefTensor) -> bool: ...

    def trigger(self, belief: BeliefTensor, entanglement) -> None: ...


class EntropyPulse:
    """Fires when belief entropy exceeds `threshold`.

    On trigger the entropy is reported, the belief variance is multiplied by
    `variance_damping` (beliefs that support `recohere`) and every entanglement
    strength by `coupling_decay` (maps that support `scale_strengths`). With
    both factors at 1.0 the pulse only observes.
    """

    def __init__(self, threshold: Optional[float] = None, config: Optional[CoherenceConfig] = None):
        self.cfg = config or CoherenceConfig()
        self.threshold = float(self.cfg.threshold if threshold is None else threshold)
        self.triggered = 0

    def should_trigger(self, belief: BeliefTensor) -> bool:
        return belief.entropy() > self.threshold

    def trigger(self, belief: BeliefTensor, entanglement) -> None:
        self.triggered += 1
        console.warn("Coherence pulse triggered", detail=f"entropy {belief.entropy():.2f}")

        if self.cfg.variance_damping != 1.0 and isinstance(belief, Recoherable):
            belief.recohere(self.cfg.variance_damping)
        if self.cfg.coupling_decay != 1.0 and isinstance(entanglement, SimpleEntangleMap):
            entanglement.scale_strengths(self.cfg.coupling_decay)
