"""
Register Allocator

Chaitin-style graph coloring without coalescing or spilling:

1. Simplify: repeatedly remove the first temp (by serial) whose effective
   degree (neighbors not yet removed) is below K and push it on a stack.
   If no such temp exists the graph is uncolorable under this heuristic
   and AllocationFailure is raised.
2. Select: pop temps and give each the first register in pool order that
   none of its already colored neighbors holds.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from .errors import AllocationFailure, PreconditionViolation
from .interference import InterferenceGraph
from .ir import Temp


DEFAULT_REGISTERS: tuple[str, ...] = tuple(f"$t{i}" for i in range(10))


class TempState(Enum):
    """Progress of a single temp through the allocator."""
    UNSEEN = "unseen"
    WORKLIST = "worklist"
    ON_STACK = "on_stack"
    COLORED = "colored"


class RegisterAllocator:
    """K-coloring of an interference graph onto a physical register pool."""

    def __init__(self, graph: InterferenceGraph,
                 registers: Optional[Sequence[str]] = None):
        if registers is None:
            registers = DEFAULT_REGISTERS
        registers = tuple(registers)
        if not registers:
            raise ValueError("Register pool must contain at least one register")
        if len(set(registers)) != len(registers):
            raise ValueError(f"Register pool contains duplicates: {list(registers)}")

        self.graph = graph
        self.registers = registers
        self.simplify_order: list[Temp] = []

        self._allocation: dict[Temp, str] = {}
        self._stack: list[Temp] = []
        self._removed: set[Temp] = set()
        self._state: dict[Temp, TempState] = {}

        self._allocate()

    @property
    def k(self) -> int:
        return len(self.registers)

    def _effective_degree(self, t: Temp) -> int:
        return sum(1 for n in self.graph.neighbors(t) if n not in self._removed)

    def _simplify(self) -> None:
        worklist = self.graph.temps()
        for t in worklist:
            self._state[t] = TempState.WORKLIST

        while worklist:
            to_remove = None
            for t in worklist:
                if self._effective_degree(t) < self.k:
                    to_remove = t
                    break

            if to_remove is None:
                raise AllocationFailure(worklist, self.k)

            self._stack.append(to_remove)
            self._removed.add(to_remove)
            self._state[to_remove] = TempState.ON_STACK
            worklist.remove(to_remove)

        self.simplify_order = list(self._stack)

    def _select(self) -> dict[Temp, str]:
        colors: dict[Temp, str] = {}
        while self._stack:
            t = self._stack.pop()
            self._removed.discard(t)

            used = {colors[n] for n in self.graph.neighbors(t) if n in colors}
            # t had fewer than K live neighbors when pushed, so a register is free
            reg = next(r for r in self.registers if r not in used)
            colors[t] = reg
            self._state[t] = TempState.COLORED
        return colors

    def _allocate(self) -> None:
        self._simplify()
        colors = self._select()
        # Publish only a complete map, in serial order
        self._allocation = {t: colors[t] for t in sorted(colors)}

    @property
    def allocation(self) -> dict[Temp, str]:
        """Temp -> register name, total over the graph."""
        return dict(self._allocation)

    def register_of(self, t: Temp) -> str:
        reg = self._allocation.get(t)
        if reg is None:
            raise PreconditionViolation(f"Temp {t!r} has no register assignment")
        return reg

    def state_of(self, t: Temp) -> TempState:
        return self._state.get(t, TempState.UNSEEN)

    def registers_used(self) -> list[str]:
        """Registers that received at least one temp, in pool order."""
        used = set(self._allocation.values())
        return [r for r in self.registers if r in used]
