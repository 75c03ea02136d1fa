"""Shared configuration, value types, errors and diagnostics."""

from .config import (
    CoherenceConfig,
    ControlConfig,
    EngineConfig,
    FieldConfig,
    SpectralConfig,
    load_config,
    make_generator,
)
from .errors import EmptyBasisSetError, FieldBoundsError, SpectralShapeError
from .types import Gradient, Position, Resonance

__all__ = [
    "CoherenceConfig",
    "ControlConfig",
    "EngineConfig",
    "FieldConfig",
    "SpectralConfig",
    "load_config",
    "make_generator",
    "EmptyBasisSetError",
    "FieldBoundsError",
    "SpectralShapeError",
    "Gradient",
    "Position",
    "Resonance",
]
