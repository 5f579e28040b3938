"""
Interference Graph

Undirected graph over temporaries. Two temporaries interfere when one is
defined at an instruction whose live-out set contains the other.
Adjacency is keyed by temp serial so the graph does not hold on to the
instruction list.
"""

from __future__ import annotations

from typing import Iterator

from .errors import PreconditionViolation
from .ir import Temp
from .liveness import LivenessAnalyzer


class InterferenceGraph:
    """Interference graph built from a completed liveness analysis."""

    def __init__(self, liveness: LivenessAnalyzer):
        self._temps: dict[int, Temp] = {}
        self._adj: dict[int, set[int]] = {}

        # Every def and use is a vertex, including isolated and live-in temps
        for t in liveness.all_temps():
            self._add_vertex(t)

        for i in range(len(liveness)):
            out = liveness.live_out(i)
            for d in liveness.defs(i):
                for live in out:
                    if d != live:
                        self._add_edge(d, live)

    def _add_vertex(self, t: Temp) -> None:
        if t.serial not in self._adj:
            self._temps[t.serial] = t
            self._adj[t.serial] = set()

    def _add_edge(self, u: Temp, v: Temp) -> None:
        self._add_vertex(u)
        self._add_vertex(v)
        self._adj[u.serial].add(v.serial)
        self._adj[v.serial].add(u.serial)

    def _lookup(self, t: Temp) -> set[int]:
        adj = self._adj.get(t.serial)
        if adj is None:
            raise PreconditionViolation(f"Temp {t!r} is not in the interference graph")
        return adj

    def __contains__(self, t: Temp) -> bool:
        return t.serial in self._adj

    def __len__(self) -> int:
        return len(self._adj)

    def temps(self) -> list[Temp]:
        """All vertices, sorted by serial."""
        return [self._temps[s] for s in sorted(self._adj)]

    def neighbors(self, t: Temp) -> frozenset[Temp]:
        return frozenset(self._temps[s] for s in self._lookup(t))

    def sorted_neighbors(self, t: Temp) -> list[Temp]:
        return [self._temps[s] for s in sorted(self._lookup(t))]

    def degree(self, t: Temp) -> int:
        return len(self._lookup(t))

    def has_edge(self, u: Temp, v: Temp) -> bool:
        return v.serial in self._lookup(u)

    def edges(self) -> Iterator[tuple[Temp, Temp]]:
        """Each undirected edge once, as (lower serial, higher serial)."""
        for s in sorted(self._adj):
            for n in sorted(self._adj[s]):
                if s < n:
                    yield self._temps[s], self._temps[n]

    @property
    def num_edges(self) -> int:
        return sum(len(adj) for adj in self._adj.values()) // 2
