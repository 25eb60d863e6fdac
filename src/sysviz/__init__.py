"""
Sysviz - A Python-based systolic array simulator and visualizer.

This package steps descriptor-defined systolic arrays one snapshot at a
time and computes the layout needed to draw them, with terminal and
matplotlib renderers, a set of classic systolic algorithms and an
elementary cellular automaton.
"""

from .config import Descriptor, Direction, InvalidDescriptor, RegisterSpec, WireSpec, normalize
from .core import Simulation, SystolicArrayState, advance, create

__version__ = "0.1.0"
__all__ = [
    "Descriptor",
    "Direction",
    "InvalidDescriptor",
    "RegisterSpec",
    "WireSpec",
    "normalize",
    "SystolicArrayState",
    "Simulation",
    "create",
    "advance",
    "__version__",
]
