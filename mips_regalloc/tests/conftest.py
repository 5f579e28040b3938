"""Shared fixtures and helpers for register allocation tests."""

import os
import sys

# Add repo root to path for imports
_this_dir = os.path.dirname(os.path.abspath(__file__))
_repo_root = os.path.dirname(os.path.dirname(_this_dir))
sys.path.insert(0, _repo_root)

import random

from mips_regalloc import (
    IRBuilder,
    IrCommand,
    Temp,
    LivenessAnalyzer,
    InterferenceGraph,
)


# Three-register pool used by the small scenarios
R3 = ("R0", "R1", "R2")


def build_straight_line():
    """a = 1; b = 2; c = a + b; print c; return"""
    b = IRBuilder()
    a = b.const_int(1, "a")
    bb = b.const_int(2, "b")
    c = b.add(a, bb, "c")
    b.print_int(c)
    b.ret()
    return b.build(), {"a": a, "b": bb, "c": c}


def build_countdown_loop():
    """L: n = n - one; beqz n, END; j L; END: return"""
    b = IRBuilder()
    n = b.new_temp("n")
    one = b.new_temp("one")
    b.label("L")
    b.sub(n, one, dst=n)
    b.jump_if_zero(n, "END")
    b.jump("L")
    b.label("END")
    b.ret()
    return b.build(), {"n": n, "one": one}


def build_dead_definition():
    """x = 5; x = 6; print x; return"""
    b = IRBuilder()
    x = b.const_int(5, "x")
    b.const_int(6, dst=x)
    b.print_int(x)
    b.ret()
    return b.build(), {"x": x}


def build_triangle():
    """Three constants that are all live across each other's definitions."""
    b = IRBuilder()
    a = b.const_int(1, "a")
    bb = b.const_int(2, "b")
    c = b.const_int(3, "c")
    b.print_int(a)
    b.print_int(bb)
    b.print_int(c)
    b.ret()
    return b.build(), {"a": a, "b": bb, "c": c}


def build_branch_merge():
    """beqz c, L; a = 1; j M; L: a = 2; M: print a; return"""
    b = IRBuilder()
    c = b.new_temp("c")
    a = b.new_temp("a")
    b.jump_if_zero(c, "L")
    b.const_int(1, dst=a)
    b.jump("M")
    b.label("L")
    b.const_int(2, dst=a)
    b.label("M")
    b.print_int(a)
    b.ret()
    return b.build(), {"c": c, "a": a}


def build_random_program(seed: int, num_temps: int = 6, length: int = 40) -> list[IrCommand]:
    """Random listing over a small temp pool with labels and both jump kinds."""
    rng = random.Random(seed)
    b = IRBuilder()
    temps = [b.new_temp(f"v{i}") for i in range(num_temps)]
    labels = [f"L{i}" for i in range(3)]
    label_slots = sorted(rng.sample(range(length), len(labels)))

    for pos in range(length):
        if pos in label_slots:
            b.label(labels[label_slots.index(pos)])
            continue
        kind = rng.randrange(8)
        if kind == 0:
            b.const_int(rng.randrange(100), dst=rng.choice(temps))
        elif kind == 1:
            b.load(f"g{rng.randrange(3)}", dst=rng.choice(temps))
        elif kind == 2:
            b.store(rng.choice(temps), f"g{rng.randrange(3)}")
        elif kind == 3:
            b.print_int(rng.choice(temps))
        elif kind == 4:
            b.jump_if_zero(rng.choice(temps), rng.choice(labels))
        elif kind == 5 and rng.random() < 0.3:
            b.jump(rng.choice(labels))
        else:
            op = rng.choice([b.add, b.sub, b.mul, b.div, b.eq, b.gt, b.lt])
            op(rng.choice(temps), rng.choice(temps), dst=rng.choice(temps))
    b.ret(rng.choice(temps))
    return b.build()


def assert_fixpoint(liveness: LivenessAnalyzer) -> None:
    """in/out satisfy the dataflow equations at every position."""
    for i in range(len(liveness)):
        expected_out: set[Temp] = set()
        for s in liveness.successors(i):
            expected_out |= liveness.live_in(s)
        assert liveness.live_out(i) == expected_out, f"out[{i}]"
        assert liveness.live_in(i) == liveness.uses(i) | (liveness.live_out(i) - liveness.defs(i)), f"in[{i}]"


def assert_graph_symmetric(graph: InterferenceGraph) -> None:
    for u in graph.temps():
        assert u not in graph.neighbors(u), f"self-loop on {u!r}"
        for v in graph.neighbors(u):
            assert u in graph.neighbors(v), f"{u!r}-{v!r} is one-way"


def assert_graph_sound(liveness: LivenessAnalyzer, graph: InterferenceGraph) -> None:
    for i in range(len(liveness)):
        for d in liveness.defs(i):
            for live in liveness.live_out(i):
                if d != live:
                    assert graph.has_edge(d, live), f"missing edge {d!r}-{live!r} at {i}"


def assert_valid_coloring(graph: InterferenceGraph, allocation: dict, registers) -> None:
    assert set(allocation) == set(graph.temps())
    for t, reg in allocation.items():
        assert reg in registers
    for u, v in graph.edges():
        assert allocation[u] != allocation[v], f"{u!r} and {v!r} share {allocation[u]}"
