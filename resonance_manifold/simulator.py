"""Assembled runs: the semantic control loop and the curvature/spectral pipeline."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Literal, Optional, Sequence

import numpy as np

from .console import console
from .core.config import EngineConfig, make_generator
from .core.errors import SpectralShapeError
from .core.types import Position
from .field.base import dominant_basis, fused_spectrum
from .field.grid import GridField
from .field.signal import SignalField
from .field.synthetic import SyntheticField
from .semantic.belief import GaussianBelief, PrecisionWeightedFusion
from .semantic.coherence import EntropyPulse
from .semantic.control import HeadingIntegrator, ResonanceSynth
from .semantic.engine import SemanticEngine
from .semantic.entangle import Coupling, SemanticDomain, SimpleEntangleMap
from .signal.curvature import CurvatureSignal
from .signal.hotspot import PercentileHotspot
from .signal.path import TrajectoryPath
from .spectral.basis import Custom, Haar, WaveletBasis
from .spectral.engine import WaveletEngine
from .spectral.fusion import EntropyWeightedFusion, ResonanceWeightedFusion
from .spectral.smoothing import WaveletSmoother

FieldKind = Literal["grid", "synthetic"]

DEFAULT_BASES: Sequence[WaveletBasis] = (Haar(), Custom("identity"), Custom("pulse"), Custom("reverse"))


def build_engine(
    config: EngineConfig,
    *,
    field_kind: FieldKind = "grid",
    grid_size: int = 16,
    n_beliefs: int = 2,
) -> SemanticEngine:
    gen = make_generator(config)
    control = config.control

    if field_kind == "grid":
        if grid_size < 1:
            raise ValueError(f"grid_size must be positive, got {grid_size}")
        coords = np.arange(grid_size, dtype=np.float64)
        xx, yy = np.meshgrid(coords, coords)
        # Smooth ridge so gradients are non-zero everywhere but at the crest.
        grid = 0.5 + 0.25 * np.sin(xx / 3.0) * np.cos(yy / 4.0)
        field = GridField(grid, config.resonance)
        start = Position(grid_size / 2.0, grid_size / 2.0)
        if control.bounds is None:
            control = replace(control, bounds=field.bounds())
    elif field_kind == "synthetic":
        field = SyntheticField(gen, config.resonance)
        start = Position(0.0, 0.0)
    else:
        raise ValueError(f"Unknown field kind: {field_kind!r}")

    beliefs = [
        GaussianBelief(0.5 + 0.1 * i, 1.0 + 0.5 * i, generator=gen)
        for i in range(n_beliefs)
    ]

    entanglement = SimpleEntangleMap()
    entanglement.update_coupling(SemanticDomain.BIOLOGICAL, SemanticDomain.QUANTUM, Coupling(0.8, 0.1))
    entanglement.update_coupling(SemanticDomain.LINGUISTIC, SemanticDomain.COGNITIVE, Coupling(0.4, -0.2))

    return SemanticEngine(
        beliefs,
        field,
        entanglement,
        ResonanceSynth(),
        PrecisionWeightedFusion(),
        EntropyPulse(config=config.coherence),
        start,
        integrator=HeadingIntegrator(control),
        config=config,
    )


def run_simulation(
    config: EngineConfig,
    *,
    steps: int = 20,
    field_kind: FieldKind = "grid",
    grid_size: int = 16,
) -> Dict[str, Any]:
    console.header(
        "Semantic engine",
        field=field_kind,
        steps=str(steps),
        seed=str(config.seed),
        threshold=f"{config.coherence.threshold:.2f}",
    )
    engine = build_engine(config, field_kind=field_kind, grid_size=grid_size)

    with console.spinner(f"Running {steps} steps..."):
        records = engine.run(steps)

    result: Dict[str, Any] = {
        "steps": engine.steps,
        "final_position": engine.position.as_tuple(),
        "records": [r.to_dict() for r in records],
        "pulses": getattr(engine.pulse, "triggered", 0),
    }

    if field_kind == "grid":
        wavelets = WaveletEngine(DEFAULT_BASES, EntropyWeightedFusion(config.spectral.eps), config.spectral)
        try:
            spectrum = engine.field_spectrum(wavelets)
            best = engine.field_dominant_basis(wavelets)
        except SpectralShapeError as exc:
            # Haar pairs samples, so an odd grid width has no fused spectrum.
            console.warn("Skipping field spectrum", detail=str(exc))
            result["dominant_basis"] = None
            result["spectrum_length"] = 0
        else:
            result["dominant_basis"] = None if best is None else best.label
            result["spectrum_length"] = len(spectrum)

    console.success(
        "Run complete",
        detail=f"{engine.steps} steps, final position ({engine.position.x:.2f}, {engine.position.y:.2f})",
    )
    return result


def run_curves(
    positions: Optional[Sequence[float]] = None,
    values: Optional[Sequence[float]] = None,
    *,
    percentile: float = 80.0,
    dt: float = 0.01,
    level: int = 1,
) -> Dict[str, Any]:
    """Sparse curvature -> dense signal -> hotspots, path metrics and fused spectrum."""
    positions = [0.0, 0.2, 0.5, 0.7, 1.0] if positions is None else positions
    values = [1.0, 1.5, 0.8, 2.0, 1.2] if values is None else values

    curvature = CurvatureSignal(positions, values)
    dense = curvature.reconstruct()
    hotspots = PercentileHotspot(percentile).detect(dense)
    metrics = TrajectoryPath(dz_dt=0.1).evaluate(dense, dt)
    smoothed = WaveletSmoother(levels=2, threshold=0.1).smooth(dense)

    # The dense signal doubles as a resonance series so both fusion rules apply.
    field = SignalField(dense, resonance=np.abs(dense), tags=("curvature",), curvature=dense, label="biological")
    entropy_engine = WaveletEngine(DEFAULT_BASES, EntropyWeightedFusion())
    resonance_engine = WaveletEngine(DEFAULT_BASES, ResonanceWeightedFusion())

    entropy_fused = fused_spectrum(field, entropy_engine, level)
    resonance_fused = fused_spectrum(field, resonance_engine, level)

    result = {
        "dense": dense,
        "hotspots": hotspots,
        "path_length": metrics.length,
        "manhattan_distance": metrics.manhattan_distance,
        "smoothed": smoothed.numpy(),
        "frequencies": curvature.estimate_frequencies(),
        "entropy_fused": entropy_fused.coefficients.numpy(),
        "resonance_fused": resonance_fused.coefficients.numpy(),
        "dominant_entropy_basis": _label(dominant_basis(field, entropy_engine)),
        "dominant_resonance_basis": _label(dominant_basis(field, resonance_engine)),
    }

    console.info("Hotspot indices", detail=str(hotspots.tolist()))
    console.info(
        "Path",
        detail=f"length {metrics.length:.2f}, manhattan {metrics.manhattan_distance:.2f}",
    )
    console.info(
        "Dominant basis",
        detail=f"entropy: {result['dominant_entropy_basis']}, resonance: {result['dominant_resonance_basis']}",
    )
    return result


def _label(basis: Optional[WaveletBasis]) -> Optional[str]:
    return None if basis is None else basis.label


def summarize(records: List[Dict[str, Any]]) -> Dict[str, float]:
    if not records:
        return {}
    amp = np.array([r["amplitude"] for r in records], dtype=np.float64)
    fused = np.array([r["fused_mean"] for r in records], dtype=np.float64)
    return {
        "mean_amplitude": float(amp.mean()),
        "final_fused_mean": float(fused[-1]),
    }
