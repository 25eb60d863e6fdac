"""
SystolicArrayState - Immutable snapshot of a systolic array.

The array is a row_count x column_count grid of identical cells. Registers
stay inside a cell; wires move one cell per step in their direction through
a delay line:

    boundary --> [P0,0] --> [P0,1] --> [P0,2] -->    (LEFT_RIGHT wire)
                   |          |          |
    boundary --> [P1,0] --> [P1,1] --> [P1,2] -->
                   v          v          v           (TOP_DOWN wire)

Each step runs in two phases so that every cell only sees values from the
previous step:

1. Propagation: every wire's incoming value is the tail of the upstream
   neighbour's delay line, or the boundary input at the grid edge.
2. Update: registers and wire heads are recomputed from the cell's context
   (registers + incoming wire values); delay lines shift by one slot.

Snapshots are never modified. ``advance`` always returns a new state and
keeps no reference to the old one, so callers decide what history to keep.
"""

import json
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import numpy as np

from ..config import Descriptor, Direction, Number, Position, check_delays, normalize
from .cell import Cell, WireState

logger = logging.getLogger(__name__)

BoundaryInput = Mapping[str, Sequence[Number | None]]
TraceHook = Callable[["SystolicArrayState"], None]


def _json_scalar(value: Any) -> Any:
    # numpy scalars coming from init functions
    if hasattr(value, "item"):
        return value.item()
    return str(value)


@dataclass(frozen=True)
class SystolicArrayState:
    """
    One step of a systolic array simulation.

    Attributes:
        descriptor: Normalized descriptor the grid was built from
        step: Number of advances since creation (0 for a new array)
        cells: Grid of cells indexed [row][column]
    """

    descriptor: Descriptor
    step: int
    cells: tuple[tuple[Cell, ...], ...]

    @property
    def rows(self) -> int:
        return self.descriptor.row_count

    @property
    def columns(self) -> int:
        return self.descriptor.column_count

    def cell(self, row: int, column: int = 0) -> Cell:
        """Get the cell at (row, column)."""
        return self.cells[row][column]

    def advance(
        self, boundary_input: BoundaryInput | None = None, *, trace: TraceHook | None = None
    ) -> "SystolicArrayState":
        """Compute the next step (see ``advance``)."""
        return advance(self, boundary_input, trace=trace)

    def register_grid(self, name: str) -> np.ndarray:
        """
        Extract one register from every cell.

        Returns:
            2D numpy array [row, column] of register values
        """
        return np.array([[cell.registers[name] for cell in row] for row in self.cells])

    def incoming_grid(self, name: str) -> np.ndarray:
        """Values each cell received on wire ``name`` this step."""
        return np.array([[cell.wires[name].incoming for cell in row] for row in self.cells])

    def outgoing_grid(self, name: str) -> np.ndarray:
        """
        Delay lines of wire ``name``.

        Returns:
            3D numpy array [row, column, slot]; slot 0 is the newest value
        """
        return np.array([[cell.wires[name].outgoing for cell in row] for row in self.cells])

    def describe(self) -> str:
        """Multi-line dump: the step number then one tab separated line per row."""
        lines = [f"Step {self.step}"]
        for row in self.cells:
            dumps = (json.dumps(cell.as_dict(), default=_json_scalar) for cell in row)
            lines.append("".join("\t" + s for s in dumps))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"SystolicArrayState({self.rows}x{self.columns}, step={self.step})"


def create(
    descriptor: Descriptor | Mapping[str, Any], *, trace: TraceHook | None = None
) -> SystolicArrayState:
    """
    Build the step-0 state of a systolic array.

    Every register gets ``init(position)``; every wire starts with incoming 0
    and a delay line of ``delay`` zeros.

    Args:
        descriptor: Descriptor (raw or normalized)
        trace: Optional hook called with the new state

    Raises:
        InvalidDescriptor: Descriptor fails normalization or a wire has delay < 1
    """
    desc = normalize(descriptor)
    check_delays(desc)

    cells = []
    for row in range(desc.row_count):
        cells_row = []
        for column in range(desc.column_count):
            position = Position(row, column)
            cells_row.append(
                Cell(
                    position,
                    {r.name: r.init(position) for r in desc.registers},
                    {w.name: WireState.empty(w.delay) for w in desc.wires},
                )
            )
        cells.append(tuple(cells_row))

    logger.debug(
        "Created %dx%d systolic array (%d registers, %d wires)",
        desc.row_count,
        desc.column_count,
        len(desc.registers),
        len(desc.wires),
    )
    state = SystolicArrayState(desc, 0, tuple(cells))
    if trace is not None:
        trace(state)
    return state


def upstream_position(
    row: int, column: int, direction: Direction, row_count: int, column_count: int
) -> Position | None:
    """
    Position of the neighbour feeding (row, column) along ``direction``.

    Returns None when the cell sits on the grid's upstream edge.
    """
    dr, dc = direction.upstream_offset
    r, c = row + dr, column + dc
    if 0 <= r < row_count and 0 <= c < column_count:
        return Position(r, c)
    return None


def boundary_value(boundary_input: BoundaryInput | None, name: str, lane: int) -> Number:
    """Boundary value for wire ``name`` at ``lane``; anything missing reads as 0."""
    if not boundary_input:
        return 0
    values = boundary_input.get(name)
    if values is None or lane >= len(values):
        return 0
    value = values[lane]
    return 0 if value is None else value


def advance(
    state: SystolicArrayState,
    boundary_input: BoundaryInput | None = None,
    *,
    trace: TraceHook | None = None,
) -> SystolicArrayState:
    """
    Compute the next step of a systolic array.

    Transitions receive a read-only view of the cell context.

    Args:
        state: Current snapshot (left untouched)
        boundary_input: Wire name -> values fed at the grid edge, one per row
            for horizontal wires and one per column for vertical wires
        trace: Optional hook called with the new state

    Returns:
        New SystolicArrayState with step + 1
    """
    desc = state.descriptor
    rows, cols = desc.row_count, desc.column_count
    wires = [(w, Direction.coerce(w.direction)) for w in desc.wires]

    # Phase 1: propagation (reads only the previous snapshot)
    incoming: list[list[dict[str, Number]]] = []
    for row in range(rows):
        incoming_row = []
        for col in range(cols):
            received = {}
            for w, direction in wires:
                prev = upstream_position(row, col, direction, rows, cols)
                if prev is not None:
                    received[w.name] = state.cells[prev.row][prev.column].wires[w.name].tail
                else:
                    lane = row if direction.horizontal else col
                    received[w.name] = boundary_value(boundary_input, w.name, lane)
            incoming_row.append(received)
        incoming.append(incoming_row)

    # Phase 2: update
    cells = []
    for row in range(rows):
        cells_row = []
        for col in range(cols):
            old = state.cells[row][col]
            position = Position(row, col)
            received = incoming[row][col]
            values = MappingProxyType({**old.registers, **received})

            registers = {r.name: r.transition(values, position) for r in desc.registers}
            wire_states = {
                w.name: old.wires[w.name].shifted(received[w.name], w.transition(values, position))
                for w, _ in wires
            }
            cells_row.append(Cell(position, registers, wire_states))
        cells.append(tuple(cells_row))

    new_state = SystolicArrayState(desc, state.step + 1, tuple(cells))
    if trace is not None:
        trace(new_state)
    return new_state
