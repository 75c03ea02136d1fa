from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from .core.diagnostics import load_jsonl  # noqa: E402


def plot_step_records(jsonl_path: Path, out_png: Path) -> Path:
    """Plot an engine's step diagnostics (trajectory + time series) to a PNG."""
    rows = load_jsonl(jsonl_path)
    if not rows:
        return out_png

    steps = [int(r.get("step", i)) for i, r in enumerate(rows)]
    xs = [float(r.get("x", 0.0)) for r in rows]
    ys = [float(r.get("y", 0.0)) for r in rows]
    fused = [float(r.get("fused_mean", 0.0)) for r in rows]
    amp = [float(r.get("amplitude", 0.0)) for r in rows]
    freq = [float(r.get("frequency", 0.0)) for r in rows]

    fig, ax = plt.subplots(1, 2, figsize=(12, 5))

    ax[0].plot(xs, ys, "-o", markersize=2)
    ax[0].set_title("trajectory")
    ax[0].set_xlabel("x")
    ax[0].set_ylabel("y")

    ax[1].plot(steps, fused, label="fused mean")
    ax[1].plot(steps, amp, label="resonance amplitude")
    ax[1].plot(steps, freq, label="resonance frequency")
    ax[1].set_xlabel("step")
    ax[1].legend(loc="upper left")

    out_png = Path(out_png)
    out_png.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(out_png)
    plt.close(fig)
    return out_png
