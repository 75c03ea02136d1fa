"""Test suite for resonance-manifold.

This package contains:
- Unit tests for the spectral bases, fusion strategies and engine
- Unit tests for the resonance field variants and the graph kernel
- Semantic engine loop tests (ordering, rollback, diagnostics)
"""
