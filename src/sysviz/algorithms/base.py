"""
Common definition of a systolic algorithm preset.

An algorithm is nothing more than a descriptor plus the boundary feeds and
the probe that reads its result stream. The engine treats every algorithm
the same way.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..config import Descriptor
from ..core import Simulation, SystolicArrayState
from ..core.systolic_array import TraceHook


@dataclass(frozen=True)
class SystolicAlgorithm:
    """
    Ready-to-run systolic algorithm.

    Attributes:
        key: Short identifier used by the registry and the demos
        label: Human readable name
        transition: Transition rules as shown to the user
        descriptor: Array descriptor
        feeds: Wire name -> per-step boundary vectors
        probe: Reads one output value from each new state
        latency: Steps before the first valid probe output
    """

    key: str
    label: str
    transition: str
    descriptor: Descriptor
    feeds: Mapping[str, tuple] = field(default_factory=dict)
    probe: Callable[[SystolicArrayState], Any] | None = None
    latency: int = 0

    def simulation(self, keep_history: bool = True, trace: TraceHook | None = None) -> Simulation:
        """Create a fresh simulation of this algorithm."""
        return Simulation(
            self.descriptor,
            feeds=self.feeds,
            probe=self.probe,
            keep_history=keep_history,
            trace=trace,
        )
