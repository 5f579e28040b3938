"""
Main Allocation Entry Point

Provides the allocate_registers function that runs liveness, interference
and register allocation over an IR listing using the RegAllocPipeline.
"""

import json
import os
from typing import Optional, Sequence

from .ir import IrCommand, Temp
from .pass_manager import RegAllocPipeline, PassConfig
from .passes import LivenessPass, InterferencePass, RegisterAllocationPass


def _override(pipeline: RegAllocPipeline, pass_name: str, key: str, value) -> None:
    cfg = pipeline.config.setdefault(pass_name, PassConfig(name=pass_name))
    cfg.options[key] = value


def allocate_registers(
    commands: list[IrCommand],
    registers: Optional[Sequence[str]] = None,
    strict: Optional[bool] = None,
    print_after_all: bool = False,
    print_metrics: bool = False,
) -> dict[Temp, str]:
    """
    Assign a physical register to every temporary in commands.

    Args:
        commands: The IR instruction list
        registers: Ordered register pool; overrides pass_config.json
        strict: Reject duplicate labels and dangling jumps; overrides pass_config.json
        print_after_all: If True, print results after each pass
        print_metrics: If True, print pass metrics and diagnostics

    Returns:
        Mapping of Temp -> register name, in ascending temp serial order

    Raises:
        MalformedIR: the instruction list is ill-formed
        AllocationFailure: the interference graph cannot be colored
    """
    config_path = os.path.join(os.path.dirname(__file__), "pass_config.json")
    with open(config_path) as f:
        config_data = json.load(f)

    pipeline = RegAllocPipeline(
        print_after_all=print_after_all,
        print_metrics=print_metrics,
    )
    pipeline.set_config(config_data)

    if registers is not None:
        _override(pipeline, "register-allocation", "registers", list(registers))
    if strict is not None:
        _override(pipeline, "liveness", "strict", strict)

    pipeline.add_pass(LivenessPass())            # IR -> liveness
    pipeline.add_pass(InterferencePass())        # liveness -> interference
    pipeline.add_pass(RegisterAllocationPass())  # interference -> allocation

    return pipeline.run(commands)
