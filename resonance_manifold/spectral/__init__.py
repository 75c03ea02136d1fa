"""Multi-basis wavelet decomposition, fusion and basis scoring."""

from .basis import (
    Biorthogonal,
    Custom,
    Daubechies,
    Haar,
    HaarCoefficients,
    HaarWavelet,
    WaveletBasis,
    as_signal,
    biorthogonal_transform,
    custom_transform,
    daubechies_transform,
    haar_transform,
    register_transform,
)
from .decomposition import FusionContext, WaveletDecomposition, compute_entropy
from .engine import WaveletEngine, select_dominant
from .fusion import EntropyWeightedFusion, ResonanceWeightedFusion, WaveletFusionStrategy
from .smoothing import WaveletSmoother

__all__ = [
    "Biorthogonal",
    "Custom",
    "Daubechies",
    "Haar",
    "HaarCoefficients",
    "HaarWavelet",
    "WaveletBasis",
    "as_signal",
    "biorthogonal_transform",
    "custom_transform",
    "daubechies_transform",
    "haar_transform",
    "register_transform",
    "FusionContext",
    "WaveletDecomposition",
    "compute_entropy",
    "WaveletEngine",
    "select_dominant",
    "EntropyWeightedFusion",
    "ResonanceWeightedFusion",
    "WaveletFusionStrategy",
    "WaveletSmoother",
]
