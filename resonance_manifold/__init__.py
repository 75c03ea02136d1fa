"""Resonance Manifold: spectral fusion and resonance-field control loops."""

from __future__ import annotations

from .core.config import EngineConfig

__all__ = [
    "EngineConfig",
    # Lazily resolved (torch-backed):
    "WaveletEngine",
    "SemanticEngine",
    "GridField",
    "SignalField",
    "SyntheticField",
]


def __getattr__(name: str):  # pragma: no cover
    # Avoid importing the heavier subpackages unless they are actually used.
    if name == "WaveletEngine":
        from .spectral.engine import WaveletEngine as _WaveletEngine

        return _WaveletEngine
    if name == "SemanticEngine":
        from .semantic.engine import SemanticEngine as _SemanticEngine

        return _SemanticEngine
    if name == "GridField":
        from .field.grid import GridField as _GridField

        return _GridField
    if name == "SignalField":
        from .field.signal import SignalField as _SignalField

        return _SignalField
    if name == "SyntheticField":
        from .field.synthetic import SyntheticField as _SyntheticField

        return _SyntheticField
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
