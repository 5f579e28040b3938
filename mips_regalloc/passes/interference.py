"""
Interference Pass

Builds the interference graph from a completed liveness analysis.
"""

from __future__ import annotations

from ..pass_manager import CompilerPass, PassConfig
from ..interference import InterferenceGraph
from ..liveness import LivenessAnalyzer


class InterferencePass(CompilerPass):

    @property
    def name(self) -> str:
        return "interference"

    @property
    def input_type(self) -> str:
        return "liveness"

    @property
    def output_type(self) -> str:
        return "interference"

    def run(self, liveness: LivenessAnalyzer, config: PassConfig) -> InterferenceGraph:
        self._init_metrics()

        graph = InterferenceGraph(liveness)

        if self._metrics:
            temps = graph.temps()
            self._metrics.custom = {
                "temps": len(temps),
                "edges": graph.num_edges,
                "max_degree": max((graph.degree(t) for t in temps), default=0),
            }

        return graph
