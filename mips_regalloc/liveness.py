"""
Liveness Analysis

Backward may-analysis of live temporaries over a linear instruction list.
Successors are the fallthrough position and any resolved jump target.

    out[n] = union of in[s] for s in succ[n]
    in[n]  = use[n] | (out[n] - def[n])

All sets are computed in the constructor; afterwards the analyzer only
answers read-only queries keyed by instruction position.
"""

from __future__ import annotations

from typing import Sequence

from .errors import MalformedIR, PreconditionViolation
from .ir import COMMAND_TYPES, IrCommand, Label, Temp


class LivenessAnalyzer:
    """Per-instruction use/def/in/out sets for a linear IR listing."""

    def __init__(self, commands: Sequence[IrCommand], strict: bool = True):
        """
        Args:
            commands: The instruction list (borrowed, never mutated)
            strict: Raise MalformedIR on duplicate labels and dangling jump
                targets. When False, the first label wins and dangling targets
                contribute no successor; both are recorded in diagnostics.
        """
        self.commands: tuple[IrCommand, ...] = tuple(commands)
        self.strict = strict
        self.diagnostics: list[str] = []
        self.iterations = 0

        self.label_positions: dict[str, int] = {}
        self._use: list[frozenset[Temp]] = []
        self._def: list[frozenset[Temp]] = []
        self._succ: list[tuple[int, ...]] = []
        self._in: list[frozenset[Temp]] = []
        self._out: list[frozenset[Temp]] = []

        self._build_analysis_data()
        while self.step():
            pass

    def _malformed(self, msg: str) -> None:
        if self.strict:
            raise MalformedIR(msg)
        self.diagnostics.append(msg)

    def _build_analysis_data(self) -> None:
        """Index labels, then compute use/def/succ for every position."""
        for i, cmd in enumerate(self.commands):
            if not isinstance(cmd, COMMAND_TYPES):
                raise MalformedIR(f"Unknown instruction at position {i}: {cmd!r}")
            if isinstance(cmd, Label):
                if cmd.name in self.label_positions:
                    self._malformed(
                        f"Duplicate label '{cmd.name}' at positions "
                        f"{self.label_positions[cmd.name]} and {i}"
                    )
                    continue
                self.label_positions[cmd.name] = i

        n = len(self.commands)
        for i, cmd in enumerate(self.commands):
            succs: list[int] = []
            if cmd.falls_through() and i + 1 < n:
                succs.append(i + 1)

            target = cmd.jump_target()
            if target is not None:
                pos = self.label_positions.get(target)
                if pos is None:
                    self._malformed(f"Unresolved jump target '{target}' at position {i}")
                elif pos not in succs:
                    succs.append(pos)

            self._use.append(cmd.get_uses())
            self._def.append(cmd.get_defs())
            self._succ.append(tuple(succs))
            self._in.append(frozenset())
            self._out.append(frozenset())

    def step(self) -> bool:
        """Run one backward pass of the dataflow equations.

        Returns True if any in/out set changed.
        """
        changed = False
        for i in reversed(range(len(self.commands))):
            new_out: set[Temp] = set()
            for s in self._succ[i]:
                new_out |= self._in[s]
            out = frozenset(new_out)
            live_in = self._use[i] | (out - self._def[i])

            if out != self._out[i] or live_in != self._in[i]:
                changed = True
                self._out[i] = out
                self._in[i] = live_in

        self.iterations += 1
        return changed

    def _check(self, index: int) -> int:
        if not isinstance(index, int) or not 0 <= index < len(self.commands):
            raise PreconditionViolation(
                f"Instruction position {index!r} out of range "
                f"(0..{len(self.commands) - 1})"
            )
        return index

    def __len__(self) -> int:
        return len(self.commands)

    def live_in(self, index: int) -> frozenset[Temp]:
        """Temporaries live on entry to the instruction at index."""
        return self._in[self._check(index)]

    def live_out(self, index: int) -> frozenset[Temp]:
        """Temporaries live on exit from the instruction at index."""
        return self._out[self._check(index)]

    def defs(self, index: int) -> frozenset[Temp]:
        return self._def[self._check(index)]

    def uses(self, index: int) -> frozenset[Temp]:
        return self._use[self._check(index)]

    def successors(self, index: int) -> tuple[int, ...]:
        return self._succ[self._check(index)]

    def live_in_at_label(self, name: str) -> frozenset[Temp]:
        pos = self.label_positions.get(name)
        if pos is None:
            raise PreconditionViolation(f"Unknown label '{name}'")
        return self._in[pos]

    def all_temps(self) -> list[Temp]:
        """Every temporary defined or used anywhere, sorted by serial."""
        temps: set[Temp] = set()
        for i in range(len(self.commands)):
            temps |= self._def[i]
            temps |= self._use[i]
        return sorted(temps)
