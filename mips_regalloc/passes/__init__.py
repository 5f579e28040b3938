"""
Allocation Passes

- Liveness pass (IR -> per-instruction live sets)
- Interference pass (live sets -> interference graph)
- Register allocation pass (graph -> Temp to register map)
"""

from .liveness import LivenessPass
from .interference import InterferencePass
from .register_allocation import RegisterAllocationPass

__all__ = [
    'LivenessPass',
    'InterferencePass',
    'RegisterAllocationPass',
]
