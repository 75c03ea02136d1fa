"""Entanglement couplings between semantic domains.

Keys are unordered domain pairs: `(a, b)` and `(b, a)` address the same
coupling. Pairs are canonicalized by sorting on the domain's enum value.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterator, Protocol, Tuple, TypeVar, runtime_checkable


class SemanticDomain(Enum):
    BIOLOGICAL = "biological"
    QUANTUM = "quantum"
    LINGUISTIC = "linguistic"
    COGNITIVE = "cognitive"


@dataclass(frozen=True)
class Coupling:
    strength: float = 0.0
    phase_shift: float = 0.0


NEUTRAL_COUPLING = Coupling()

D = TypeVar("D")
C = TypeVar("C")


@runtime_checkable
class EntangleMap(Protocol[D, C]):
    def get_coupling(self, domain_a: D, domain_b: D) -> C: ...

    def update_coupling(self, domain_a: D, domain_b: D, coupling: C) -> None: ...


def canonical_pair(a: SemanticDomain, b: SemanticDomain) -> Tuple[SemanticDomain, SemanticDomain]:
    return (a, b) if a.value <= b.value else (b, a)


class SimpleEntangleMap:
    """Owns every coupling; updates replace, never merge."""

    def __init__(self) -> None:
        self._couplings: Dict[Tuple[SemanticDomain, SemanticDomain], Coupling] = {}

    def get_coupling(self, domain_a: SemanticDomain, domain_b: SemanticDomain) -> Coupling:
        return self._couplings.get(canonical_pair(domain_a, domain_b), NEUTRAL_COUPLING)

    def update_coupling(self, domain_a: SemanticDomain, domain_b: SemanticDomain, coupling: Coupling) -> None:
        self._couplings[canonical_pair(domain_a, domain_b)] = coupling

    def scale_strengths(self, factor: float) -> None:
        """Replace every coupling with one whose strength is scaled by `factor`."""
        for key, coupling in list(self._couplings.items()):
            self._couplings[key] = replace(coupling, strength=coupling.strength * factor)

    def items(self) -> Iterator[Tuple[Tuple[SemanticDomain, SemanticDomain], Coupling]]:
        return iter(list(self._couplings.items()))

    def __len__(self) -> int:
        return len(self._couplings)
