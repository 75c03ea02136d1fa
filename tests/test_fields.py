"""Unit tests for resonance fields, the spectral bridge and the graph kernel."""

from __future__ import annotations

import math

import pytest
import torch

from resonance_manifold.core.config import FieldConfig
from resonance_manifold.core.errors import FieldBoundsError
from resonance_manifold.core.types import Position, Resonance
from resonance_manifold.field import (
    GraphKernel,
    GridField,
    ResonanceField,
    SignalField,
    SyntheticField,
    dominant_basis,
    fused_spectrum,
)
from resonance_manifold.spectral import Custom, EntropyWeightedFusion, Haar, WaveletEngine, compute_entropy


@pytest.fixture
def grid():
    return GridField([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])


class TestGridField:
    def test_dimensions_and_bounds(self, grid):
        assert grid.width == 3
        assert grid.height == 2
        assert grid.bounds() == (0.0, 0.0, 2.0, 1.0)

    def test_backward_difference_gradient(self, grid):
        grad = grid.observe(Position(2.0, 1.0))

        assert grad.direction == pytest.approx((-1.0, -3.0))
        assert grad.magnitude == pytest.approx(math.sqrt(10.0))

    def test_gradient_clamps_at_origin(self, grid):
        grad = grid.observe(Position(0.0, 0.0))

        assert grad.direction == (0.0, 0.0)
        assert grad.magnitude == 0.0

    def test_fractional_positions_floor(self, grid):
        assert grid.observe(Position(2.9, 1.7)) == grid.observe(Position(2.0, 1.0))

    def test_resonance_from_gradient(self, grid):
        res = grid.compute_resonance(Position(2.0, 1.0))

        assert res.amplitude == pytest.approx(math.sqrt(10.0))
        assert res.frequency == pytest.approx(4.0)

    def test_propagate_adds_scaled_amplitude(self, grid):
        grid.propagate(Position(1.0, 0.0), Resonance(amplitude=2.0, frequency=0.0))

        assert grid.value_at(1, 0) == pytest.approx(2.02)
        assert torch.allclose(grid.signal(), torch.tensor([1.0, 2.02, 3.0], dtype=torch.float64))

    def test_propagation_gain_is_configurable(self):
        field = GridField.uniform(2, 2, 0.0, FieldConfig(propagation_gain=0.5))
        field.propagate(Position(1.0, 1.0), Resonance(amplitude=2.0, frequency=1.0))

        assert field.value_at(1, 1) == pytest.approx(1.0)

    @pytest.mark.parametrize("pos", [Position(3.0, 0.0), Position(0.0, 2.0), Position(-0.5, 0.0)])
    def test_out_of_bounds_raises(self, grid, pos):
        with pytest.raises(FieldBoundsError):
            grid.observe(pos)
        with pytest.raises(FieldBoundsError):
            grid.propagate(pos, Resonance(1.0, 1.0))

    def test_bounds_error_is_an_index_error(self, grid):
        with pytest.raises(IndexError):
            grid.compute_resonance(Position(10.0, 10.0))

    def test_signal_is_a_copy(self, grid):
        s = grid.signal()
        s[0] = 99.0

        assert grid.value_at(0, 0) == 1.0

    def test_flat_signal_row_major(self, grid):
        assert grid.flat_signal().tolist() == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]

    def test_fusion_context(self, grid):
        ctx = grid.fusion_context()

        assert ctx.domain_label == "grid"
        assert ctx.coherence_map.tolist() == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]

    def test_rejects_non_2d(self):
        with pytest.raises(ValueError):
            GridField([1.0, 2.0])


class TestSignalField:
    @pytest.fixture
    def field(self):
        return SignalField([1.0, 2.0, 3.0], [0.1, 0.2, 0.3], tags=("a", "a", "b"), label="quantum")

    def test_reads(self, field):
        assert field.observe(1) == 2.0
        assert field.compute_resonance(2) == pytest.approx(0.3)

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_out_of_range_reads_zero(self, field, index):
        assert field.observe(index) == 0.0
        assert field.compute_resonance(index) == 0.0

    def test_propagate_accumulates_resonance(self, field):
        field.propagate(0, 1.0)

        assert field.compute_resonance(0) == pytest.approx(1.1)

    def test_out_of_range_propagate_is_noop(self, field):
        before = field.resonance_series()
        field.propagate(10, 5.0)
        field.propagate(-1, 5.0)

        assert torch.equal(field.resonance_series(), before)

    def test_fusion_context(self, field):
        ctx = field.fusion_context()

        assert ctx.domain_label == "quantum"
        assert ctx.semantic_tags == ("a", "b")
        assert ctx.domain_entropy == pytest.approx(compute_entropy(field.signal()))
        assert torch.allclose(ctx.resonance_profile, torch.tensor([0.1, 0.2, 0.3], dtype=torch.float64))

    def test_default_label(self):
        assert SignalField([1.0]).domain_label() == "biological"


class TestSyntheticField:
    def test_resonance_formula(self):
        field = SyntheticField(torch.Generator().manual_seed(0))
        res = field.compute_resonance(Position(0.0, 0.0))

        assert res.amplitude == pytest.approx(1.0)
        assert res.frequency == pytest.approx(2.0)

    def test_observation_is_seeded_and_bounded(self):
        a = SyntheticField(torch.Generator().manual_seed(42))
        b = SyntheticField(torch.Generator().manual_seed(42))
        pos = Position(0.0, 0.0)

        obs_a = [a.observe(pos) for _ in range(5)]
        obs_b = [b.observe(pos) for _ in range(5)]

        assert obs_a == obs_b
        assert all(1.0 <= v < 1.1 for v in obs_a)

    def test_propagate_is_noop_and_signal_placeholder(self):
        field = SyntheticField(torch.Generator().manual_seed(0))
        field.propagate(Position(1.0, 1.0), Resonance(5.0, 5.0))

        assert field.signal().tolist() == [0.0, 0.0]
        assert field.domain_label() == "synthetic"


class TestSpectralBridge:
    def test_fields_share_the_capability(self):
        for f in (GridField.uniform(2, 2), SignalField([1.0]), SyntheticField(torch.Generator())):
            assert isinstance(f, ResonanceField)

    def test_fused_spectrum_matches_engine_fuse(self):
        field = SignalField([1.0, 2.0, 3.0, 4.0], [1.0, 1.0, 1.0, 1.0])
        engine = WaveletEngine([Haar(), Custom("identity")], EntropyWeightedFusion())

        fused = fused_spectrum(field, engine)
        expected = engine.fuse(field.signal(), field.fusion_context())

        assert torch.allclose(fused.coefficients, expected.coefficients)

    def test_dominant_basis_through_field(self):
        field = SignalField([1.0, 2.0, 3.0, 4.0])
        engine = WaveletEngine([Custom("identity"), Haar()], EntropyWeightedFusion())

        assert dominant_basis(field, engine) == Haar()

    def test_grid_field_spectrum_uses_first_row(self, grid):
        engine = WaveletEngine([Custom("identity")], EntropyWeightedFusion())

        assert fused_spectrum(grid, engine).coefficients.tolist() == pytest.approx([1.0, 2.0, 3.0])


class TestGraphKernel:
    def test_from_grid_nodes_and_edges(self):
        grid = GridField([[1.0, 2.0], [3.0, 4.0]])
        kernel = GraphKernel.from_grid(grid)

        assert len(kernel.nodes) == 4
        assert len(kernel.edges) == 8
        assert kernel.get_node(3).coherence == 4.0
        assert kernel.get_edge(0, 1) is not None
        assert kernel.get_edge(0, 3) is None

    def test_edge_carries_target_resonance(self):
        grid = GridField([[1.0, 2.0], [3.0, 4.0]])
        kernel = GraphKernel.from_grid(grid)
        edge = kernel.get_edge(0, 1)
        res = grid.compute_resonance(Position(1.0, 0.0))

        assert edge.amplitude == pytest.approx(res.amplitude)
        assert edge.frequency == pytest.approx(res.frequency)

    def test_missing_node_is_none(self):
        assert GraphKernel().get_node(7) is None
