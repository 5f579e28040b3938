"""
IR - Three-Address Instructions over Temporaries

The linear intermediate representation consumed by register allocation.
Each instruction names its operand/result temporaries explicitly and
control flow is expressed with labels and jumps over a flat listing.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True, order=True)
class Temp:
    """A symbolic temporary. Identity is the serial number."""
    serial: int
    name: Optional[str] = field(default=None, compare=False)

    def __repr__(self):
        if self.name:
            return f"t{self.serial}:{self.name}"
        return f"t{self.serial}"


@dataclass
class TempFactory:
    """Mint temporaries with unique, increasing serial numbers."""
    next_serial: int = 0

    def new_temp(self, name: Optional[str] = None) -> Temp:
        t = Temp(self.next_serial, name)
        self.next_serial += 1
        return t


class BinOpKind(Enum):
    """Integer binary operators."""
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    EQ = "eq"
    GT = "gt"
    LT = "lt"


_EMPTY: frozenset[Temp] = frozenset()


class IrCommand:
    """Base class for all IR instructions.

    Subclasses override get_defs()/get_uses() and, for control flow,
    jump_target()/falls_through().
    """

    def get_defs(self) -> frozenset[Temp]:
        """Temporaries written by this instruction."""
        return _EMPTY

    def get_uses(self) -> frozenset[Temp]:
        """Temporaries read by this instruction."""
        return _EMPTY

    def jump_target(self) -> Optional[str]:
        """Label this instruction may branch to, if any."""
        return None

    def falls_through(self) -> bool:
        """Whether control can continue to the next instruction."""
        return True


@dataclass(eq=False)
class BinOp(IrCommand):
    """dst = t1 <op> t2"""
    op: BinOpKind
    dst: Temp
    t1: Temp
    t2: Temp

    def get_defs(self) -> frozenset[Temp]:
        return frozenset((self.dst,))

    def get_uses(self) -> frozenset[Temp]:
        return frozenset((self.t1, self.t2))

    def __repr__(self):
        return f"{self.dst} = {self.op.value} {self.t1}, {self.t2}"


@dataclass(eq=False)
class ConstInt(IrCommand):
    """dst = immediate"""
    dst: Temp
    value: int

    def get_defs(self) -> frozenset[Temp]:
        return frozenset((self.dst,))

    def __repr__(self):
        return f"{self.dst} = li {self.value}"


@dataclass(eq=False)
class Load(IrCommand):
    """dst = mem[address]"""
    dst: Temp
    address: str

    def get_defs(self) -> frozenset[Temp]:
        return frozenset((self.dst,))

    def __repr__(self):
        return f"{self.dst} = lw {self.address}"


@dataclass(eq=False)
class Store(IrCommand):
    """mem[address] = src"""
    src: Temp
    address: str

    def get_uses(self) -> frozenset[Temp]:
        return frozenset((self.src,))

    def __repr__(self):
        return f"sw {self.src}, {self.address}"


@dataclass(eq=False)
class PrintInt(IrCommand):
    """Print the integer held in temp."""
    temp: Temp

    def get_uses(self) -> frozenset[Temp]:
        return frozenset((self.temp,))

    def __repr__(self):
        return f"print_int {self.temp}"


@dataclass(eq=False)
class Return(IrCommand):
    """Leave the function, optionally returning a value."""
    value: Optional[Temp] = None

    def get_uses(self) -> frozenset[Temp]:
        if self.value is None:
            return _EMPTY
        return frozenset((self.value,))

    def falls_through(self) -> bool:
        return False

    def __repr__(self):
        if self.value is None:
            return "ret"
        return f"ret {self.value}"


@dataclass(eq=False)
class JumpIfZero(IrCommand):
    """Branch to label when temp == 0, otherwise fall through."""
    temp: Temp
    label: str

    def get_uses(self) -> frozenset[Temp]:
        return frozenset((self.temp,))

    def jump_target(self) -> Optional[str]:
        return self.label

    def __repr__(self):
        return f"beqz {self.temp}, {self.label}"


@dataclass(eq=False)
class Jump(IrCommand):
    """Unconditional branch to label."""
    label: str

    def jump_target(self) -> Optional[str]:
        return self.label

    def falls_through(self) -> bool:
        return False

    def __repr__(self):
        return f"j {self.label}"


@dataclass(eq=False)
class Label(IrCommand):
    """Branch target marker."""
    name: str

    def __repr__(self):
        return f"{self.name}:"


# Type alias for any concrete instruction
Command = Union[BinOp, ConstInt, Load, Store, PrintInt, Return, JumpIfZero, Jump, Label]

# The closed set of instruction variants accepted by the analyses
COMMAND_TYPES = (BinOp, ConstInt, Load, Store, PrintInt, Return, JumpIfZero, Jump, Label)


def collect_temps(commands: list[IrCommand]) -> list[Temp]:
    """Every temporary defined or used in commands, sorted by serial."""
    temps: set[Temp] = set()
    for cmd in commands:
        temps |= cmd.get_defs()
        temps |= cmd.get_uses()
    return sorted(temps)
