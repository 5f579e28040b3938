"""
IR Builder

Provides a builder API for emitting a linear IR instruction list while
minting fresh temporaries.
"""

from typing import Optional

from .ir import (
    Temp, TempFactory, BinOpKind, IrCommand,
    BinOp, ConstInt, Load, Store, PrintInt, Return, JumpIfZero, Jump, Label,
)


class IRBuilder:
    """Builder for constructing a linear IR instruction list."""

    def __init__(self, first_serial: int = 0):
        self._temps = TempFactory(first_serial)
        self._label_counter = 0
        self._label_names: set[str] = set()
        self._commands: list[IrCommand] = []

    def new_temp(self, name: Optional[str] = None) -> Temp:
        """Create a new temporary without emitting anything."""
        return self._temps.new_temp(name)

    def new_label(self, prefix: str = "L") -> str:
        """Create a fresh label name (not yet placed).

        Skips names already handed out or placed with label().
        """
        while True:
            name = f"{prefix}_{self._label_counter}"
            self._label_counter += 1
            if name not in self._label_names:
                self._label_names.add(name)
                return name

    def emit(self, cmd: IrCommand) -> IrCommand:
        """Append an already constructed instruction."""
        self._commands.append(cmd)
        return cmd

    # === Values ===

    def const_int(self, value: int, name: Optional[str] = None,
                  dst: Optional[Temp] = None) -> Temp:
        """Load an immediate into a temp (fresh unless dst is given)."""
        if dst is None:
            dst = self.new_temp(name)
        self.emit(ConstInt(dst, value))
        return dst

    def load(self, address: str, name: Optional[str] = None,
             dst: Optional[Temp] = None) -> Temp:
        if dst is None:
            dst = self.new_temp(name)
        self.emit(Load(dst, address))
        return dst

    def store(self, src: Temp, address: str) -> None:
        self.emit(Store(src, address))

    # === ALU operations ===

    def binop(self, op: BinOpKind, a: Temp, b: Temp, name: Optional[str] = None,
              dst: Optional[Temp] = None) -> Temp:
        """Emit dst = a <op> b.

        Passing dst lets a loop body redefine an existing temp.
        """
        if dst is None:
            dst = self.new_temp(name)
        self.emit(BinOp(op, dst, a, b))
        return dst

    def add(self, a: Temp, b: Temp, name: Optional[str] = None,
            dst: Optional[Temp] = None) -> Temp:
        return self.binop(BinOpKind.ADD, a, b, name, dst)

    def sub(self, a: Temp, b: Temp, name: Optional[str] = None,
            dst: Optional[Temp] = None) -> Temp:
        return self.binop(BinOpKind.SUB, a, b, name, dst)

    def mul(self, a: Temp, b: Temp, name: Optional[str] = None,
            dst: Optional[Temp] = None) -> Temp:
        return self.binop(BinOpKind.MUL, a, b, name, dst)

    def div(self, a: Temp, b: Temp, name: Optional[str] = None,
            dst: Optional[Temp] = None) -> Temp:
        return self.binop(BinOpKind.DIV, a, b, name, dst)

    def eq(self, a: Temp, b: Temp, name: Optional[str] = None,
           dst: Optional[Temp] = None) -> Temp:
        return self.binop(BinOpKind.EQ, a, b, name, dst)

    def gt(self, a: Temp, b: Temp, name: Optional[str] = None,
           dst: Optional[Temp] = None) -> Temp:
        return self.binop(BinOpKind.GT, a, b, name, dst)

    def lt(self, a: Temp, b: Temp, name: Optional[str] = None,
           dst: Optional[Temp] = None) -> Temp:
        return self.binop(BinOpKind.LT, a, b, name, dst)

    # === Side effects and control flow ===

    def print_int(self, t: Temp) -> None:
        self.emit(PrintInt(t))

    def ret(self, value: Optional[Temp] = None) -> None:
        self.emit(Return(value))

    def label(self, name: str) -> None:
        self._label_names.add(name)
        self.emit(Label(name))

    def jump(self, label: str) -> None:
        self.emit(Jump(label))

    def jump_if_zero(self, t: Temp, label: str) -> None:
        self.emit(JumpIfZero(t, label))

    def build(self) -> list[IrCommand]:
        """Return the emitted instruction list."""
        return list(self._commands)
