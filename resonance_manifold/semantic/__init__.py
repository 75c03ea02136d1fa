"""Beliefs, entanglement, coherence pulses, control and the semantic engine."""

from .belief import (
    BeliefFusion,
    BeliefTensor,
    GaussianBelief,
    MeanFusion,
    Observation,
    PrecisionWeightedFusion,
    Recoherable,
)
from .coherence import CoherencePulse, EntropyPulse
from .control import ControlIntegrator, ControlLaw, HeadingIntegrator, HoldPosition, LawSynthesizer, ResonanceSynth
from .engine import SemanticEngine
from .entangle import Coupling, EntangleMap, NEUTRAL_COUPLING, SemanticDomain, SimpleEntangleMap, canonical_pair
from .overlay import EntanglementOverlay, VisualEdge, VisualNode, entanglement_overlays, visual_edges, visual_node

__all__ = [
    "BeliefFusion",
    "BeliefTensor",
    "GaussianBelief",
    "MeanFusion",
    "Observation",
    "PrecisionWeightedFusion",
    "Recoherable",
    "CoherencePulse",
    "EntropyPulse",
    "ControlIntegrator",
    "ControlLaw",
    "HeadingIntegrator",
    "HoldPosition",
    "LawSynthesizer",
    "ResonanceSynth",
    "SemanticEngine",
    "Coupling",
    "EntangleMap",
    "NEUTRAL_COUPLING",
    "SemanticDomain",
    "SimpleEntangleMap",
    "canonical_pair",
    "EntanglementOverlay",
    "VisualEdge",
    "VisualNode",
    "entanglement_overlays",
    "visual_edges",
    "visual_node",
]
