"""
Core systolic array simulation kernel.

This module contains the building blocks:
- Cell / WireState: Contents of one grid cell
- SystolicArrayState: Immutable grid snapshot with create/advance
- Simulation: Caller-side driver with input feeds, history and probes
"""

from .cell import Cell, WireState
from .simulation import Simulation, scalar_feed
from .systolic_array import (
    SystolicArrayState,
    advance,
    boundary_value,
    create,
    upstream_position,
)

__all__ = [
    "Cell",
    "WireState",
    "SystolicArrayState",
    "create",
    "advance",
    "boundary_value",
    "upstream_position",
    "Simulation",
    "scalar_feed",
]
