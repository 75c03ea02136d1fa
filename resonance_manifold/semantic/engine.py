from __future__ import annotations

import copy
from typing import Any, Callable, Iterable, List, Optional, Sequence

from ..console import console
from ..core.config import EngineConfig
from ..core.diagnostics import StepDiagnosticsLogger, StepRecord
from ..core.types import Position
from ..field.base import ResonanceField, dominant_basis, fused_spectrum
from ..spectral.engine import WaveletEngine
from .belief import BeliefFusion, BeliefTensor
from .coherence import CoherencePulse
from .control import ControlIntegrator, HeadingIntegrator, LawSynthesizer

StepSink = Callable[[StepRecord], None]


class SemanticEngine:
    """Per-step loop over beliefs, a resonance field and an entanglement map.

    One `step()`:
    1. observe + update every belief (stored order)
    2. fuse the beliefs into one posterior
    3. resonance at the current position
    4. synthesize a control law from (posterior, resonance, entanglement)
    5. integrate the law into a new position
    6. propagate the resonance into the field at the new position
    7. if the first belief's entropy is above threshold, pulse every belief
    8. advance the step counter and emit a `StepRecord`

    The engine owns all of this state. A step that raises restores every owned
    component to its pre-step snapshot and leaves the counter untouched. The
    shared random source is not rewound. Sinks run after the step is committed;
    a sink that raises is reported through the console and does not fail the step.

    The field must use `Position` positions and a resonance type with
    `amplitude`/`frequency` (GridField, SyntheticField).
    """

    def __init__(
        self,
        beliefs: Sequence[BeliefTensor],
        field: ResonanceField,
        entanglement: Any,
        synthesizer: LawSynthesizer,
        belief_fusion: BeliefFusion,
        pulse: CoherencePulse,
        position: Position,
        *,
        integrator: Optional[ControlIntegrator] = None,
        config: Optional[EngineConfig] = None,
        sinks: Iterable[StepSink] = (),
    ):
        if not beliefs:
            raise ValueError("SemanticEngine needs at least one belief")
        self.cfg = config or EngineConfig()
        self.beliefs: List[BeliefTensor] = list(beliefs)
        self.field = field
        self.entanglement = entanglement
        self.synthesizer = synthesizer
        self.belief_fusion = belief_fusion
        self.pulse = pulse
        self.position = position
        self.integrator: ControlIntegrator = integrator or HeadingIntegrator(self.cfg.control)

        self.steps = 0
        self.history: List[StepRecord] = []
        self._sinks: List[StepSink] = list(sinks)
        if self.cfg.jsonl_path is not None or self.cfg.csv_path is not None:
            self._sinks.append(StepDiagnosticsLogger(csv_path=self.cfg.csv_path, jsonl_path=self.cfg.jsonl_path))

    def add_sink(self, sink: StepSink) -> None:
        self._sinks.append(sink)

    # ========================================
    # Step transition
    # ========================================

    def step(self) -> StepRecord:
        snapshot = self._snapshot()
        try:
            record = self._transition()
        except Exception as exc:
            self._restore(snapshot)
            console.error(f"Step {self.steps} failed; state rolled back", detail=str(exc))
            raise

        self.steps += 1
        self._emit(record)
        return record

    def run(self, steps: int) -> List[StepRecord]:
        return [self.step() for _ in range(int(steps))]

    def _transition(self) -> StepRecord:
        for belief in self.beliefs:
            observation = belief.observe()
            belief.update(observation)

        fused = self.belief_fusion.fuse(self.beliefs)

        resonance = self.field.compute_resonance(self.position)
        law = self.synthesizer.synthesize(fused, resonance, self.entanglement)

        new_position = self.integrator.apply(self.position, law)
        self.field.propagate(new_position, resonance)
        self.position = new_position

        if self.pulse.should_trigger(self.beliefs[0]):
            for belief in self.beliefs:
                self.pulse.trigger(belief, self.entanglement)

        return StepRecord(
            step=self.steps,
            x=float(self.position.x),
            y=float(self.position.y),
            fused_mean=float(fused.mean()),
            amplitude=float(resonance.amplitude),
            frequency=float(resonance.frequency),
        )

    def _emit(self, record: StepRecord) -> None:
        self.history.append(record)
        if self.cfg.verbose:
            console.step(record)
        # The step is committed; a failing sink is reported and the rest still run.
        for sink in self._sinks:
            try:
                sink(record)
            except Exception as exc:
                console.error(f"Step {record.step} sink failed", detail=f"{type(exc).__name__}: {exc}")

    # ========================================
    # Rollback
    # ========================================

    def _snapshot(self) -> tuple:
        return copy.deepcopy(
            (self.beliefs, self.field, self.entanglement, self.integrator, self.pulse, self.position)
        )

    def _restore(self, snapshot: tuple) -> None:
        (
            self.beliefs,
            self.field,
            self.entanglement,
            self.integrator,
            self.pulse,
            self.position,
        ) = snapshot

    # ========================================
    # Spectral view of the owned field
    # ========================================

    def field_spectrum(self, wavelet_engine: WaveletEngine, level: Optional[int] = None):
        return fused_spectrum(self.field, wavelet_engine, level)

    def field_dominant_basis(self, wavelet_engine: WaveletEngine):
        return dominant_basis(self.field, wavelet_engine)
