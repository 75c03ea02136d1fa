from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..core.types import Position
from .grid import GridField


@dataclass
class ResonanceNode:
    id: int
    coherence: float
    phase: float


@dataclass
class ResonanceEdge:
    source: int
    target: int
    amplitude: float
    frequency: float


@dataclass
class GraphKernel:
    """Directed resonance graph: coherent nodes joined by resonant edges."""

    nodes: List[ResonanceNode] = field(default_factory=list)
    edges: List[ResonanceEdge] = field(default_factory=list)
    _node_index: Dict[int, int] = field(default_factory=dict, repr=False)
    _edge_index: Dict[Tuple[int, int], int] = field(default_factory=dict, repr=False)

    def add_node(self, node: ResonanceNode) -> None:
        self._node_index.setdefault(node.id, len(self.nodes))
        self.nodes.append(node)

    def add_edge(self, edge: ResonanceEdge) -> None:
        self._edge_index.setdefault((edge.source, edge.target), len(self.edges))
        self.edges.append(edge)

    def get_node(self, id: int) -> Optional[ResonanceNode]:
        i = self._node_index.get(id)
        return None if i is None else self.nodes[i]

    def get_edge(self, source: int, target: int) -> Optional[ResonanceEdge]:
        i = self._edge_index.get((source, target))
        return None if i is None else self.edges[i]

    @classmethod
    def from_grid(cls, grid: GridField) -> "GraphKernel":
        """One node per cell (id = y * width + x), 4-neighbour edges.

        Node phase is the gradient angle at the cell; each edge carries the
        resonance of its target cell.
        """
        kernel = cls()
        w, h = grid.width, grid.height
        for y in range(h):
            for x in range(w):
                pos = Position(float(x), float(y))
                grad = grid.observe(pos)
                kernel.add_node(
                    ResonanceNode(
                        id=y * w + x,
                        coherence=grid.value_at(x, y),
                        phase=math.atan2(grad.direction[1], grad.direction[0]),
                    )
                )
        for y in range(h):
            for x in range(w):
                for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
                    if 0 <= nx < w and 0 <= ny < h:
                        res = grid.compute_resonance(Position(float(nx), float(ny)))
                        kernel.add_edge(
                            ResonanceEdge(
                                source=y * w + x,
                                target=ny * w + nx,
                                amplitude=res.amplitude,
                                frequency=res.frequency,
                            )
                        )
        return kernel
