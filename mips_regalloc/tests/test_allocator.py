"""
Tests for the Chaitin register allocator

Covers:
- Scenario allocations with a three-register pool
- Uncolorable graphs raising AllocationFailure
- Coloring validity and totality on generated programs
- Determinism
- Per-temp state tracking
- Register pool validation
"""

import pytest

from mips_regalloc.tests.conftest import (
    R3,
    build_straight_line,
    build_countdown_loop,
    build_dead_definition,
    build_triangle,
    build_branch_merge,
    build_random_program,
    assert_valid_coloring,
)
from mips_regalloc import (
    LivenessAnalyzer,
    InterferenceGraph,
    RegisterAllocator,
    TempState,
    DEFAULT_REGISTERS,
    AllocationFailure,
    PreconditionViolation,
    Temp,
)


def allocate(cmds, registers=R3) -> RegisterAllocator:
    return RegisterAllocator(InterferenceGraph(LivenessAnalyzer(cmds)), registers)


class TestScenarios:

    def test_straight_line(self):
        cmds, t = build_straight_line()
        ra = allocate(cmds)
        assert ra.allocation == {t["a"]: "R1", t["b"]: "R0", t["c"]: "R0"}
        assert_valid_coloring(ra.graph, ra.allocation, R3)

    def test_loop_values_get_distinct_registers(self):
        cmds, t = build_countdown_loop()
        ra = allocate(cmds)
        assert ra.register_of(t["n"]) != ra.register_of(t["one"])
        assert ra.allocation == {t["n"]: "R1", t["one"]: "R0"}

    def test_dead_definition(self):
        cmds, t = build_dead_definition()
        ra = allocate(cmds)
        assert ra.allocation == {t["x"]: "R0"}

    def test_triangle_fits_three_registers(self):
        cmds, t = build_triangle()
        ra = allocate(cmds)
        assert sorted(ra.allocation.values()) == ["R0", "R1", "R2"]
        assert ra.registers_used() == ["R0", "R1", "R2"]

    def test_branch_merge_shares_register(self):
        cmds, t = build_branch_merge()
        ra = allocate(cmds)
        assert ra.register_of(t["c"]) == ra.register_of(t["a"]) == "R0"

    def test_empty_program(self):
        ra = allocate([])
        assert ra.allocation == {}
        assert ra.registers_used() == []


class TestAllocationFailure:

    def test_triangle_with_two_registers(self):
        cmds, t = build_triangle()
        with pytest.raises(AllocationFailure) as excinfo:
            allocate(cmds, registers=("R0", "R1"))
        err = excinfo.value
        assert err.k == 2
        assert err.temps == [t["a"], t["b"], t["c"]]
        assert "insufficient registers" in str(err)

    def test_failure_is_runtime_error(self):
        cmds, _ = build_countdown_loop()
        with pytest.raises(RuntimeError):
            allocate(cmds, registers=("R0",))

    def test_single_register_enough_without_interference(self):
        cmds, t = build_branch_merge()
        ra = allocate(cmds, registers=("R0",))
        assert set(ra.allocation.values()) == {"R0"}


class TestProperties:

    @pytest.mark.parametrize("seed", range(20))
    def test_valid_and_total_on_random_programs(self, seed):
        cmds = build_random_program(seed)
        ra = allocate(cmds, registers=DEFAULT_REGISTERS)
        assert_valid_coloring(ra.graph, ra.allocation, DEFAULT_REGISTERS)

    def test_small_pool_valid_or_fails(self):
        for seed in range(20):
            cmds = build_random_program(seed, num_temps=8)
            try:
                ra = allocate(cmds)
            except AllocationFailure as e:
                assert e.temps
                continue
            assert_valid_coloring(ra.graph, ra.allocation, R3)

    def test_deterministic(self):
        for seed in range(10):
            first = allocate(build_random_program(seed), DEFAULT_REGISTERS).allocation
            second = allocate(build_random_program(seed), DEFAULT_REGISTERS).allocation
            assert first == second
            assert list(first.items()) == list(second.items())

    def test_allocation_ordered_by_serial(self):
        ra = allocate(build_random_program(1), DEFAULT_REGISTERS)
        serials = [t.serial for t in ra.allocation]
        assert serials == sorted(serials)

    def test_register_order_respected(self):
        cmds, t = build_triangle()
        pool = ("$s2", "$s0", "$s1")
        ra = allocate(cmds, registers=pool)
        # Last temp popped from the stack takes the first pool register
        assert ra.register_of(ra.simplify_order[-1]) == "$s2"
        assert ra.registers_used() == list(pool)


class TestState:

    def test_all_temps_colored(self):
        cmds, t = build_straight_line()
        ra = allocate(cmds)
        for temp in t.values():
            assert ra.state_of(temp) is TempState.COLORED

    def test_unknown_temp_unseen(self):
        cmds, _ = build_straight_line()
        ra = allocate(cmds)
        assert ra.state_of(Temp(42)) is TempState.UNSEEN
        with pytest.raises(PreconditionViolation):
            ra.register_of(Temp(42))

    def test_simplify_order_by_serial_when_all_low_degree(self):
        cmds, t = build_straight_line()
        ra = allocate(cmds)
        assert ra.simplify_order == [t["a"], t["b"], t["c"]]

    def test_allocation_is_a_copy(self):
        cmds, t = build_straight_line()
        ra = allocate(cmds)
        ra.allocation[t["a"]] = "bogus"
        assert ra.register_of(t["a"]) == "R1"


class TestRegisterPool:

    def test_default_pool(self):
        assert DEFAULT_REGISTERS == ("$t0", "$t1", "$t2", "$t3", "$t4",
                                     "$t5", "$t6", "$t7", "$t8", "$t9")
        cmds, t = build_straight_line()
        ra = RegisterAllocator(InterferenceGraph(LivenessAnalyzer(cmds)))
        assert ra.k == 10
        assert ra.register_of(t["c"]) == "$t0"

    def test_empty_pool_rejected(self):
        cmds, _ = build_straight_line()
        with pytest.raises(ValueError):
            allocate(cmds, registers=())

    def test_duplicate_pool_rejected(self):
        cmds, _ = build_straight_line()
        with pytest.raises(ValueError):
            allocate(cmds, registers=("R0", "R0"))
