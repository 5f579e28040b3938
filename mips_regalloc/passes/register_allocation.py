"""
Register Allocation Pass

Colors the interference graph onto the physical register pool. Fails with
AllocationFailure when simplify gets stuck; no spill code is generated.
"""

from __future__ import annotations

from ..pass_manager import CompilerPass, PassConfig
from ..allocator import RegisterAllocator
from ..errors import AllocationFailure
from ..interference import InterferenceGraph
from ..ir import Temp


class RegisterAllocationPass(CompilerPass):
    """
    Chaitin simplify/select over the interference graph.

    Options:
        registers (list[str]): ordered physical register pool,
            defaults to $t0..$t9.
    """

    @property
    def name(self) -> str:
        return "register-allocation"

    @property
    def input_type(self) -> str:
        return "interference"

    @property
    def output_type(self) -> str:
        return "allocation"

    def run(self, graph: InterferenceGraph, config: PassConfig) -> dict[Temp, str]:
        self._init_metrics()

        registers = config.options.get("registers")

        try:
            allocator = RegisterAllocator(graph, registers)
        except AllocationFailure as e:
            self._add_metric_message(str(e))
            raise

        if self._metrics:
            self._metrics.custom = {
                "temps": len(graph),
                "k": allocator.k,
                "registers_used": len(allocator.registers_used()),
            }

        return allocator.allocation
