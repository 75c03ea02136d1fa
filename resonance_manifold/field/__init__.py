"""Resonance field variants and their bridge into the spectral engine."""

from .base import ResonanceField, dominant_basis, fused_spectrum
from .graph import GraphKernel, ResonanceEdge, ResonanceNode
from .grid import GridField
from .signal import SignalField
from .synthetic import SyntheticField

__all__ = [
    "ResonanceField",
    "dominant_basis",
    "fused_spectrum",
    "GraphKernel",
    "ResonanceEdge",
    "ResonanceNode",
    "GridField",
    "SignalField",
    "SyntheticField",
]
