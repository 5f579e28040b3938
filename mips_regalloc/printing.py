"""
Printing Utilities

Pretty-printing functions for IR listings, liveness results, interference
graphs and register maps.
"""

from .interference import InterferenceGraph
from .ir import IrCommand, Label, Temp
from .liveness import LivenessAnalyzer


def _fmt_temps(temps) -> str:
    return "{" + ", ".join(repr(t) for t in sorted(temps)) + "}"


def print_ir(commands: list[IrCommand]):
    """Pretty-print an IR listing with instruction positions."""
    print(f"=== IR ({len(commands)} instructions) ===")
    for i, cmd in enumerate(commands):
        indent = "" if isinstance(cmd, Label) else "  "
        print(f"[{i:4d}] {indent}{cmd}")
    print()


def print_liveness(liveness: LivenessAnalyzer):
    """Print in/out sets next to each instruction."""
    print(f"=== Liveness ({len(liveness)} instructions, "
          f"{liveness.iterations} iterations) ===")
    for i, cmd in enumerate(liveness.commands):
        print(f"[{i:4d}] {cmd}")
        print(f"       in:  {_fmt_temps(liveness.live_in(i))}")
        print(f"       out: {_fmt_temps(liveness.live_out(i))}")
    print()


def print_interference(graph: InterferenceGraph):
    """Print one adjacency line per temp."""
    print(f"=== Interference ({len(graph)} temps, {graph.num_edges} edges) ===")
    for t in graph.temps():
        neighbors = " ".join(repr(n) for n in graph.sorted_neighbors(t))
        print(f"{t!r}: {neighbors}".rstrip())
    print()


def print_allocation(allocation: dict[Temp, str]):
    """Print the Temp -> register map in serial order."""
    print(f"=== Allocation ({len(allocation)} temps) ===")
    for t in sorted(allocation):
        print(f"{t!r} -> {allocation[t]}")
    print()
