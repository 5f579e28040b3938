"""
Liveness Pass

Runs the backward liveness fixpoint over the IR listing.
"""

from __future__ import annotations

from ..pass_manager import CompilerPass, PassConfig
from ..ir import IrCommand
from ..liveness import LivenessAnalyzer


class LivenessPass(CompilerPass):
    """
    Compute in/out live sets for every instruction.

    Options:
        strict (bool, default True): reject duplicate labels and dangling
            jump targets instead of recording them as diagnostics.
    """

    @property
    def name(self) -> str:
        return "liveness"

    @property
    def input_type(self) -> str:
        return "ir"

    @property
    def output_type(self) -> str:
        return "liveness"

    def run(self, commands: list[IrCommand], config: PassConfig) -> LivenessAnalyzer:
        self._init_metrics()

        strict = config.options.get("strict", True)
        if not isinstance(strict, bool):
            raise ValueError(f"Option 'strict' must be a bool, got {strict!r}")
        liveness = LivenessAnalyzer(commands, strict=strict)

        for msg in liveness.diagnostics:
            self._add_metric_message(msg)

        if self._metrics:
            self._metrics.custom = {
                "instructions": len(liveness),
                "temps": len(liveness.all_temps()),
                "iterations": liveness.iterations,
                "labels": len(liveness.label_positions),
            }

        return liveness
