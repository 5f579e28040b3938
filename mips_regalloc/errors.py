"""
Errors raised by liveness analysis and register allocation.

The core never prints or exits; every failure surfaces as one of these
exceptions and is left to the caller.
"""

from typing import Iterable

from .ir import Temp


class RegAllocError(Exception):
    """Base class for all errors raised by this package."""


class MalformedIR(RegAllocError, ValueError):
    """The instruction list violates a producer invariant."""


class PreconditionViolation(RegAllocError, LookupError):
    """A query named an instruction or temporary the structure does not know."""


class AllocationFailure(RegAllocError, RuntimeError):
    """Simplify found no temporary with effective degree below K."""

    def __init__(self, temps: Iterable[Temp], k: int):
        self.temps = sorted(temps)
        self.k = k
        names = ", ".join(repr(t) for t in self.temps)
        super().__init__(
            f"Register allocation failed: insufficient registers "
            f"(K={k}), cannot simplify {{{names}}}"
        )
