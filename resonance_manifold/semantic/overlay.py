"""Render-ready views of engine state (nodes, edges, entanglement links)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from ..core.types import Position, Resonance
from ..field.graph import GraphKernel
from .belief import BeliefTensor
from .entangle import SemanticDomain, SimpleEntangleMap


@dataclass(frozen=True)
class VisualNode:
    id: int
    position: Tuple[float, float]
    coherence: float  # color intensity
    phase: float      # hue
    entropy: float    # size / blur


@dataclass(frozen=True)
class VisualEdge:
    source: int
    target: int
    amplitude: float  # thickness
    frequency: float  # animation speed


@dataclass(frozen=True)
class EntanglementOverlay:
    domain_a: SemanticDomain
    domain_b: SemanticDomain
    strength: float     # link opacity
    phase_shift: float  # color gradient


def visual_node(id: int, position: Position, belief: BeliefTensor, resonance: Resonance) -> VisualNode:
    return VisualNode(
        id=id,
        position=position.as_tuple(),
        coherence=float(belief.mean()),
        phase=float(resonance.frequency),
        entropy=float(belief.entropy()),
    )


def visual_edges(graph: GraphKernel) -> List[VisualEdge]:
    return [VisualEdge(e.source, e.target, e.amplitude, e.frequency) for e in graph.edges]


def entanglement_overlays(entanglement: SimpleEntangleMap) -> List[EntanglementOverlay]:
    return [
        EntanglementOverlay(domain_a=a, domain_b=b, strength=c.strength, phase_shift=c.phase_shift)
        for (a, b), c in entanglement.items()
    ]
