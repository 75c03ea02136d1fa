from __future__ import annotations


class SpectralShapeError(ValueError):
    """Coefficient sequences whose lengths cannot be combined."""


class EmptyBasisSetError(ValueError):
    """A spectral engine was asked to work without any basis."""


class FieldBoundsError(IndexError):
    """A position that does not address a cell of a grid field."""
