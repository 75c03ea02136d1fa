from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional, Tuple

import torch


@dataclass
class SpectralConfig:
    """Constants for wavelet decomposition and fusion.

    Notes:
    - `eps` is numerical safety for the fusion weights (1/(H + eps), max(w, eps)).
    - `level` is the default decomposition level attached to decompositions.
    """

    eps: float = 1e-6
    level: int = 1


@dataclass
class FieldConfig:
    """Resonance field constants."""

    # Fraction of the resonance amplitude deposited into a grid cell on propagation.
    propagation_gain: float = 0.01
    # Upper bound of the uniform jitter added to synthetic field observations.
    observation_noise: float = 0.1


@dataclass
class CoherenceConfig:
    """Entropy-triggered coherence pulse controls.

    A damping/decay of 1.0 leaves state untouched, which makes the pulse a pure
    observability hook.
    """

    threshold: float = 0.5
    # Multiplier applied to belief variance when the pulse fires.
    variance_damping: float = 1.0
    # Multiplier applied to every entanglement strength when the pulse fires.
    coupling_decay: float = 1.0


@dataclass
class ControlConfig:
    """Control-law integration."""

    dt: float = 0.1
    # (xmin, ymin, xmax, ymax); positions are clamped into this box when set.
    bounds: Optional[Tuple[float, float, float, float]] = None


@dataclass
class EngineConfig:
    """Top-level configuration for a semantic engine run."""

    seed: int = 0
    device: str = "cpu"
    dtype: torch.dtype = field(default_factory=lambda: torch.float64)
    verbose: bool = False

    spectral: SpectralConfig = field(default_factory=SpectralConfig)
    resonance: FieldConfig = field(default_factory=FieldConfig)
    coherence: CoherenceConfig = field(default_factory=CoherenceConfig)
    control: ControlConfig = field(default_factory=ControlConfig)

    # Optional diagnostics sinks for per-step records.
    jsonl_path: Optional[Path] = None
    csv_path: Optional[Path] = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "EngineConfig":
        """Build a config from a plain (JSON-decoded) mapping.

        Unknown keys raise `ValueError` so typos in config files do not pass silently.
        """
        nested = {
            "spectral": SpectralConfig,
            "resonance": FieldConfig,
            "coherence": CoherenceConfig,
            "control": ControlConfig,
        }
        known = {f.name for f in fields(cls)}
        unknown = set(raw) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")

        kwargs: dict[str, Any] = {}
        for key, value in raw.items():
            if key in nested:
                sub = nested[key]
                sub_known = {f.name for f in fields(sub)}
                bad = set(value) - sub_known
                if bad:
                    raise ValueError(f"Unknown keys in {key!r}: {sorted(bad)}")
                if key == "control" and value.get("bounds") is not None:
                    value = {**value, "bounds": tuple(float(b) for b in value["bounds"])}
                kwargs[key] = sub(**value)
            elif key == "dtype":
                kwargs[key] = getattr(torch, str(value))
            elif key in ("jsonl_path", "csv_path"):
                kwargs[key] = Path(value) if value is not None else None
            else:
                kwargs[key] = value
        return cls(**kwargs)


def load_config(path: Path) -> EngineConfig:
    """Load an `EngineConfig` from a JSON file."""
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    return EngineConfig.from_dict(raw)


def make_generator(config: EngineConfig) -> torch.Generator:
    """Explicit random source for every stochastic component of a run."""
    gen = torch.Generator(device=config.device)
    gen.manual_seed(int(config.seed))
    return gen
