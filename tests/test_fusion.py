"""Unit tests for spectral fusion and the wavelet engine.

Covers:
- Entropy of coefficient magnitudes
- Entropy- and resonance-weighted fusion (length invariants, shape errors)
- Basis scoring and dominant-basis selection
"""

from __future__ import annotations

import math

import pytest
import torch

from resonance_manifold.core.config import SpectralConfig
from resonance_manifold.core.errors import EmptyBasisSetError, SpectralShapeError
from resonance_manifold.spectral import (
    Custom,
    Daubechies,
    EntropyWeightedFusion,
    FusionContext,
    Haar,
    ResonanceWeightedFusion,
    WaveletDecomposition,
    WaveletEngine,
    compute_entropy,
    select_dominant,
)


def _t(values) -> torch.Tensor:
    return torch.tensor(values, dtype=torch.float64)


def _decomp(values, basis=None, level=1) -> WaveletDecomposition:
    return WaveletDecomposition(basis=basis or Haar(), coefficients=_t(values), level=level)


# =============================================================================
# Entropy
# =============================================================================


class TestEntropy:
    def test_uniform_magnitudes_reach_log2_n(self):
        assert compute_entropy(_t([1.0, -1.0, 1.0, -1.0])) == pytest.approx(2.0)

    def test_all_zero_is_zero(self):
        assert compute_entropy(_t([0.0, 0.0, 0.0])) == 0.0

    def test_empty_is_zero(self):
        assert compute_entropy(_t([])) == 0.0

    def test_single_nonzero_is_zero(self):
        assert compute_entropy(_t([0.0, 3.0, 0.0])) == pytest.approx(0.0)

    def test_bounded_by_log2_n(self):
        h = compute_entropy(_t([1.0, 2.0, 3.0]))
        assert 0.0 <= h <= math.log2(3) + 1e-12


# =============================================================================
# Entropy-weighted fusion
# =============================================================================


class TestEntropyWeightedFusion:
    def test_identical_inputs_fuse_to_themselves(self):
        fusion = EntropyWeightedFusion()
        fused = fusion.fuse([_decomp([0.5, 0.5]), _decomp([0.5, 0.5])], FusionContext())

        assert torch.allclose(fused.coefficients, _t([0.5, 0.5]))
        assert fused.basis == Custom("EntropyFused")
        assert len(fused) == 2

    def test_low_entropy_dominates(self):
        fusion = EntropyWeightedFusion()
        compact = _decomp([1.0, 0.0])
        spread = _decomp([1.0, 1.0])
        fused = fusion.fuse([compact, spread], FusionContext())

        assert fused.coefficients[0].item() == pytest.approx(1.0)
        assert fused.coefficients[1].item() < 1e-5

    def test_keeps_first_level(self):
        fused = EntropyWeightedFusion().fuse([_decomp([1.0], level=3), _decomp([2.0], level=5)], FusionContext())
        assert fused.level == 3

    def test_mismatched_lengths_raise(self):
        with pytest.raises(SpectralShapeError):
            EntropyWeightedFusion().fuse([_decomp([1.0, 2.0]), _decomp([1.0])], FusionContext())

    def test_empty_input_raises(self):
        with pytest.raises(EmptyBasisSetError):
            EntropyWeightedFusion().fuse([], FusionContext())

    def test_does_not_mutate_inputs(self):
        a = _decomp([1.0, 2.0])
        b = _decomp([3.0, 4.0])
        EntropyWeightedFusion().fuse([a, b], FusionContext())

        assert torch.equal(a.coefficients, _t([1.0, 2.0]))
        assert torch.equal(b.coefficients, _t([3.0, 4.0]))


# =============================================================================
# Resonance-weighted fusion
# =============================================================================


class TestResonanceWeightedFusion:
    def test_without_profile_is_plain_average(self):
        fused = ResonanceWeightedFusion().fuse([_decomp([1.0, 2.0]), _decomp([3.0, 4.0])], FusionContext())

        assert torch.allclose(fused.coefficients, _t([2.0, 3.0]))
        assert fused.basis == Custom("ResonanceFused")

    def test_short_profile_uses_unit_weights_beyond_its_end(self):
        ctx = FusionContext(resonance_profile=_t([2.0]))
        fused = ResonanceWeightedFusion().fuse([_decomp([1.0, 2.0]), _decomp([3.0, 4.0])], ctx)

        assert torch.allclose(fused.coefficients, _t([2.0, 3.0]))

    def test_zero_weight_index_is_guarded(self):
        ctx = FusionContext(resonance_profile=_t([0.0, 1.0]))
        fused = ResonanceWeightedFusion().fuse([_decomp([1.0, 2.0]), _decomp([3.0, 4.0])], ctx)

        assert torch.isfinite(fused.coefficients).all()
        assert fused.coefficients[0].item() == pytest.approx(0.0)
        assert fused.coefficients[1].item() == pytest.approx(3.0)

    def test_score_is_weighted_magnitude_sum(self):
        ctx = FusionContext(resonance_profile=_t([1.0, 0.5, 2.0]))
        score = ResonanceWeightedFusion().score_basis(Custom("identity"), [1.0, -2.0, 3.0], ctx)

        assert score == pytest.approx(8.0)


class TestFusionContext:
    def test_tensor_carrying_records_compare_by_identity(self):
        ctx = FusionContext(resonance_profile=_t([1.0, 2.0]))
        twin = FusionContext(resonance_profile=_t([1.0, 2.0]))
        d = _decomp([1.0, 2.0, 3.0])

        assert ctx == ctx
        assert ctx != twin
        assert d == d
        assert d != _decomp([1.0, 2.0, 3.0])
        assert len({ctx, twin, d}) == 3

    def test_semantic_tags_dedupe_in_order(self):
        ctx = FusionContext(semantic_tags=("a", "b", "a", "c"))
        assert ctx.semantic_tags == ("a", "b", "c")

    def test_defaults(self):
        ctx = FusionContext()
        assert ctx.domain_entropy == 0.0
        assert ctx.resonance_profile is None
        assert torch.equal(ctx.resonance_weights(3), torch.ones(3, dtype=torch.float64))


# =============================================================================
# Wavelet engine
# =============================================================================


@pytest.fixture
def equal_length_engine():
    return WaveletEngine(
        [Haar(), Custom("identity"), Custom("reverse")],
        EntropyWeightedFusion(),
        SpectralConfig(level=2),
    )


class TestWaveletEngine:
    def test_empty_basis_set_raises(self):
        with pytest.raises(EmptyBasisSetError):
            WaveletEngine([], EntropyWeightedFusion())

    def test_decompose_all_preserves_basis_order(self, equal_length_engine):
        decomps = equal_length_engine.decompose_all([1.0, 1.5, 0.8, 2.0])

        assert [d.basis for d in decomps] == [Haar(), Custom("identity"), Custom("reverse")]
        assert all(d.level == 2 for d in decomps)

    def test_level_override(self, equal_length_engine):
        decomps = equal_length_engine.decompose_all([1.0, 2.0], level=4)
        assert {d.level for d in decomps} == {4}

    def test_fused_length_matches_inputs(self, equal_length_engine):
        signal = [1.0, 1.5, 0.8, 2.0, 1.2, 0.9]
        fused = equal_length_engine.fuse(signal)

        assert len(fused) == len(signal)

    def test_mixed_length_bases_raise(self):
        engine = WaveletEngine([Haar(), Daubechies(2)], EntropyWeightedFusion())

        with pytest.raises(SpectralShapeError):
            engine.fuse([1.0, 2.0, 3.0, 4.0])

    def test_odd_signal_under_haar_raises(self, equal_length_engine):
        with pytest.raises(SpectralShapeError):
            equal_length_engine.fuse([1.0, 2.0, 3.0])

    def test_score_bases_in_basis_order(self, equal_length_engine):
        scores = equal_length_engine.score_bases([1.0, 2.0, 3.0, 4.0])
        assert [b for b, _ in scores] == list(equal_length_engine.basis_set)

    def test_dominant_basis_prefers_compact_decomposition(self):
        engine = WaveletEngine([Custom("identity"), Haar()], EntropyWeightedFusion())
        # Haar compacts the ramp into fewer significant coefficients.
        assert engine.dominant_basis([1.0, 2.0, 3.0, 4.0]) == Haar()

    def test_dominant_basis_ties_go_to_first(self):
        engine = WaveletEngine([Custom("identity"), Custom("reverse")], ResonanceWeightedFusion())
        assert engine.dominant_basis([1.0, 2.0, 3.0]) == Custom("identity")

        swapped = WaveletEngine([Custom("reverse"), Custom("identity")], ResonanceWeightedFusion())
        assert swapped.dominant_basis([1.0, 2.0, 3.0]) == Custom("reverse")


class TestSelectDominant:
    def test_empty_is_none(self):
        assert select_dominant([]) is None

    def test_highest_wins(self):
        assert select_dominant([(Haar(), 1.0), (Custom("x"), 2.0), (Custom("y"), 2.0)]) == Custom("x")
