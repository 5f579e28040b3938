"""
Register Allocation Core for a MIPS-like Target

Two coupled passes over a linear three-address IR:
- Liveness: backward dataflow fixpoint for per-instruction live sets
- Allocation: Chaitin simplify/select coloring of the interference graph

Pipeline: IR -> liveness -> interference graph -> Temp to register map
"""

# IR types
from .ir import (
    Temp,
    TempFactory,
    BinOpKind,
    IrCommand,
    BinOp,
    ConstInt,
    Load,
    Store,
    PrintInt,
    Return,
    JumpIfZero,
    Jump,
    Label,
    Command,
    COMMAND_TYPES,
    collect_temps,
)

# IR builder
from .ir_builder import IRBuilder

# Errors
from .errors import RegAllocError, MalformedIR, AllocationFailure, PreconditionViolation

# Analyses
from .liveness import LivenessAnalyzer
from .interference import InterferenceGraph
from .allocator import RegisterAllocator, TempState, DEFAULT_REGISTERS

# Pass infrastructure
from .pass_manager import (
    PassConfig,
    PassMetrics,
    CompilerPass,
    RegAllocPipeline,
    count_temps,
)

# Passes
from .passes import LivenessPass, InterferencePass, RegisterAllocationPass

# Main entry point
from .allocate import allocate_registers

# Printing utilities
from .printing import print_ir, print_liveness, print_interference, print_allocation


__all__ = [
    # IR
    'Temp', 'TempFactory', 'BinOpKind', 'IrCommand', 'BinOp', 'ConstInt', 'Load',
    'Store', 'PrintInt', 'Return', 'JumpIfZero', 'Jump', 'Label', 'Command', 'COMMAND_TYPES',
    'collect_temps',
    # Builder
    'IRBuilder',
    # Errors
    'RegAllocError', 'MalformedIR', 'AllocationFailure', 'PreconditionViolation',
    # Analyses
    'LivenessAnalyzer', 'InterferenceGraph', 'RegisterAllocator', 'TempState',
    'DEFAULT_REGISTERS',
    # Pass infrastructure
    'PassConfig', 'PassMetrics', 'CompilerPass', 'RegAllocPipeline',
    'count_temps',
    # Passes
    'LivenessPass', 'InterferencePass', 'RegisterAllocationPass',
    # Entry point
    'allocate_registers',
    # Printing
    'print_ir', 'print_liveness', 'print_interference', 'print_allocation',
]
