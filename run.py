#!/usr/bin/env python3
"""Resonance-Manifold Entrypoint

Runs either the semantic control loop or the curvature/spectral pipeline.

Usage:
    python run.py engine                       # 20 steps over a grid field
    python run.py engine --field synthetic     # procedural field
    python run.py engine --steps 100 --jsonl artifacts/steps.jsonl --plot artifacts/steps.png
    python run.py engine --config run.json     # EngineConfig from JSON
    python run.py curves                       # reconstruction, hotspots, path, fusion
"""

from __future__ import annotations

import argparse
from pathlib import Path

from resonance_manifold.console import console
from resonance_manifold.core.config import EngineConfig, load_config
from resonance_manifold.simulator import run_curves, run_simulation, summarize
from resonance_manifold.viz import plot_step_records


def main():
    parser = argparse.ArgumentParser(
        description="Resonance-Manifold",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress console output")
    sub = parser.add_subparsers(dest="command", required=True)

    eng = sub.add_parser("engine", help="Run the semantic engine step loop")
    eng.add_argument("--steps", type=int, default=20, help="Number of engine steps")
    eng.add_argument("--field", choices=("grid", "synthetic"), default="grid", help="Resonance field variant")
    eng.add_argument("--grid", type=int, default=16, help="Grid size (square, >= 2; even sizes get a field spectrum)")
    eng.add_argument("--seed", type=int, default=None, help="Random seed (overrides config)")
    eng.add_argument("--threshold", type=float, default=None, help="Coherence pulse entropy threshold")
    eng.add_argument("--config", type=str, default=None, help="JSON file with EngineConfig fields")
    eng.add_argument("--jsonl", type=str, default=None, help="Append step records to this JSONL file")
    eng.add_argument("--csv", type=str, default=None, help="Append step records to this CSV file")
    eng.add_argument("--plot", type=str, default=None, help="Render the JSONL records to this PNG")
    eng.add_argument("--verbose", "-v", action="store_true", help="Print one line per step")

    cur = sub.add_parser("curves", help="Run the curvature/spectral pipeline")
    cur.add_argument("--percentile", type=float, default=80.0, help="Hotspot percentile")
    cur.add_argument("--dt", type=float, default=0.01, help="Path integration step")

    args = parser.parse_args()
    console.quiet = bool(args.quiet)

    if args.command == "curves":
        run_curves(percentile=args.percentile, dt=args.dt)
        return

    if args.grid < 2:
        parser.error(f"--grid must be at least 2, got {args.grid}")

    config = load_config(Path(args.config)) if args.config else EngineConfig()
    if args.seed is not None:
        config.seed = args.seed
    if args.threshold is not None:
        config.coherence.threshold = args.threshold
    if args.jsonl:
        config.jsonl_path = Path(args.jsonl)
    if args.csv:
        config.csv_path = Path(args.csv)
    config.verbose = config.verbose or args.verbose

    result = run_simulation(config, steps=args.steps, field_kind=args.field, grid_size=args.grid)
    stats = summarize(result["records"])
    if stats:
        console.info("Mean amplitude", detail=f"{stats['mean_amplitude']:.4f}")
        console.info("Final fused mean", detail=f"{stats['final_fused_mean']:.4f}")

    if args.plot:
        if config.jsonl_path is None:
            console.warn("--plot needs --jsonl; skipping plot")
        else:
            out = plot_step_records(config.jsonl_path, Path(args.plot))
            console.success("Plot written", detail=str(out))


if __name__ == "__main__":
    main()
