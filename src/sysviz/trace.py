"""
Trace hooks for the systolic array engine.

``create`` and ``advance`` accept an optional ``trace`` callable that is
called with every new snapshot. Two ready-made hooks live here:

- ``log_trace``: writes ``state.describe()`` to the ``sysviz.trace`` logger
- ``StepRecorder``: keeps one event per register/wire value per step and can
  export them as CSV for spreadsheet analysis

Example usage:
    recorder = StepRecorder()
    sim = Simulation(descriptor, feeds=feeds, trace=recorder)
    sim.run(10)
    recorder.to_csv("steps.csv")
"""

import csv
import logging
from dataclasses import dataclass, field
from typing import Any

from .core.systolic_array import SystolicArrayState

logger = logging.getLogger(__name__)

CSV_HEADER = ("step", "row", "column", "kind", "name", "slot", "value")


def log_trace(state: SystolicArrayState) -> None:
    """Log the full snapshot dump at debug level."""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s", state.describe())


def chain(*hooks):
    """Combine several trace hooks into one, called in order."""

    def hook(state: SystolicArrayState) -> None:
        for h in hooks:
            if h is not None:
                h(state)

    return hook


@dataclass
class StepRecorder:
    """
    Records every value of every snapshot it is called with.

    Each event is a dict with the keys of ``CSV_HEADER``. ``kind`` is one of
    ``register``, ``in`` (wire incoming value) or ``out`` (wire delay slot,
    with ``slot`` 0 being the head).
    """

    events: list[dict[str, Any]] = field(default_factory=list)
    steps: list[int] = field(default_factory=list)

    def __call__(self, state: SystolicArrayState) -> None:
        self.steps.append(state.step)
        for row in state.cells:
            for cell in row:
                for name, value in cell.registers.items():
                    self._record(state.step, cell, "register", name, -1, value)
                for name, wire in cell.wires.items():
                    self._record(state.step, cell, "in", name, -1, wire.incoming)
                    for slot, value in enumerate(wire.outgoing):
                        self._record(state.step, cell, "out", name, slot, value)

    def _record(self, step, cell, kind, name, slot, value) -> None:
        self.events.append(
            {
                "step": step,
                "row": cell.row,
                "column": cell.column,
                "kind": kind,
                "name": name,
                "slot": slot,
                "value": value,
            }
        )

    def clear(self) -> None:
        self.events.clear()
        self.steps.clear()

    def truncate(self, step: int) -> None:
        """Forget everything recorded after ``step`` (used after a rewind)."""
        self.events = [e for e in self.events if e["step"] <= step]
        self.steps = [s for s in self.steps if s <= step]

    def values(self, kind: str, name: str, row: int = 0, column: int = 0) -> list[Any]:
        """Time series of one value (slot 0 for wire outputs)."""
        return [
            e["value"]
            for e in self.events
            if e["kind"] == kind
            and e["name"] == name
            and e["row"] == row
            and e["column"] == column
            and e["slot"] in (-1, 0)
        ]

    def to_csv(self, filename: str) -> int:
        """
        Write the recorded events to ``filename``.

        Returns:
            Number of event rows written
        """
        with open(filename, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_HEADER)
            writer.writeheader()
            writer.writerows(self.events)
        return len(self.events)
