"""
Simulation - Caller-side driver for a systolic array.

The engine itself is stateless: ``advance`` maps one snapshot to the next.
This module adds what an interactive front end needs around it:

- Input feeds: per-wire queues of boundary vectors, one vector per step
- History: retained snapshots so a run can be rewound
- Probes: a function sampled after every step to build an output stream

Example usage:
    sim = Simulation(descriptor, feeds={"x": scalar_feed([1, 2, 3])})
    sim.run(5)
    print(sim.state.register_grid("a"))
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..config import Descriptor, Number
from .systolic_array import SystolicArrayState, TraceHook, create

logger = logging.getLogger(__name__)

Probe = Callable[[SystolicArrayState], Any]
Feed = Sequence[Sequence[Number]]


def scalar_feed(values: Sequence[Number], lane: int = 0, width: int | None = None) -> tuple:
    """
    Turn a stream of scalars into per-step boundary vectors.

    Each value is placed at ``lane`` of a vector of ``width`` zeros
    (default: just long enough to hold the lane).

    Example:
        >>> scalar_feed([5, 6], lane=1)
        ((0, 5), (0, 6))
    """
    width = lane + 1 if width is None else width
    vectors = []
    for value in values:
        vector = [0] * width
        vector[lane] = value
        vectors.append(tuple(vector))
    return tuple(vectors)


@dataclass
class Simulation:
    """
    Steps a systolic array while feeding its boundary and recording outputs.

    Attributes:
        descriptor: Descriptor to instantiate (validated on construction)
        feeds: Wire name -> per-step boundary vectors
        probe: Optional function sampled after each step into ``outputs``
        keep_history: Retain every snapshot (needed for ``rewind``)
        trace: Optional hook passed to the engine
    """

    descriptor: Descriptor | Mapping[str, Any]
    feeds: Mapping[str, Feed] | None = field(default_factory=dict)
    probe: Probe | None = None
    keep_history: bool = True
    trace: TraceHook | None = None

    state: SystolicArrayState = field(init=False)
    history: list[SystolicArrayState] = field(init=False)
    outputs: list[Any] = field(init=False)

    def __post_init__(self) -> None:
        self.feeds = {
            name: tuple(tuple(vector) for vector in vectors)
            for name, vectors in (self.feeds or {}).items()
        }
        self.reset()

    def reset(self) -> None:
        """Rebuild the step-0 state and rewind all feeds."""
        self.state = create(self.descriptor, trace=self.trace)
        self.descriptor = self.state.descriptor
        self.history = [self.state] if self.keep_history else []
        self.outputs = []

    @property
    def step_count(self) -> int:
        return self.state.step

    def boundary_input(self, step: int | None = None) -> dict[str, tuple[Number, ...]]:
        """Boundary vectors consumed by the advance that produces ``step`` + 1."""
        step = self.state.step if step is None else step
        return {
            name: vectors[step] if step < len(vectors) else ()
            for name, vectors in self.feeds.items()
        }

    def pending(self, wire: str) -> tuple:
        """Vectors of ``wire`` not yet fed into the array."""
        return self.feeds.get(wire, ())[self.state.step :]

    @property
    def drained(self) -> bool:
        """True once every feed has been consumed."""
        return all(self.state.step >= len(vectors) for vectors in self.feeds.values())

    def step(self) -> SystolicArrayState:
        """Advance one step, consuming the next vector of every feed."""
        if self.drained and self.feeds:
            logger.debug("Feeds exhausted at step %d, feeding zeros", self.state.step)
        self.state = self.state.advance(self.boundary_input(), trace=self.trace)
        if self.keep_history:
            self.history.append(self.state)
        if self.probe is not None:
            self.outputs.append(self.probe(self.state))
        return self.state

    def run(self, steps: int) -> SystolicArrayState:
        """Advance ``steps`` times and return the final state."""
        for _ in range(steps):
            self.step()
        return self.state

    def run_until_drained(self, extra_steps: int = 0) -> SystolicArrayState:
        """Advance until all feeds are consumed, then ``extra_steps`` more."""
        while not self.drained:
            self.step()
        return self.run(extra_steps)

    def rewind(self, steps: int = 1) -> SystolicArrayState:
        """
        Go back ``steps`` snapshots (never before step 0).

        Raises:
            RuntimeError: History is not kept
        """
        if not self.keep_history:
            raise RuntimeError("Cannot rewind a simulation that keeps no history")
        steps = min(steps, len(self.history) - 1)
        if steps > 0:
            del self.history[-steps:]
            if self.probe is not None:
                del self.outputs[-steps:]
        self.state = self.history[-1]
        return self.state
