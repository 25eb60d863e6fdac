"""
Cell - One processing cell of the systolic grid.

A cell holds one scalar per register and, for every wire, the value that
arrived this step plus the wire's outgoing delay line:

    incoming --> [registers] --> outgoing[0] -> ... -> outgoing[-1] --> neighbour

The downstream neighbour reads ``outgoing[-1]`` (the oldest value), so a value
needs ``delay`` steps to cross from one cell to the next.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from ..config import Number, Position


@dataclass(frozen=True)
class WireState:
    """Incoming value and outgoing delay line of one wire in one cell."""

    incoming: Number = 0
    outgoing: tuple[Number, ...] = (0,)

    @classmethod
    def empty(cls, delay: int) -> "WireState":
        """Wire state at step 0: nothing received, delay line of zeros."""
        return cls(0, (0,) * max(1, delay))

    @property
    def head(self) -> Number:
        """Value most recently produced by the cell."""
        return self.outgoing[0]

    @property
    def tail(self) -> Number:
        """Value the downstream neighbour reads on the next step."""
        return self.outgoing[-1]

    def shifted(self, incoming: Number, value: Number) -> "WireState":
        """Push ``value`` at the head, dropping the oldest slot."""
        return WireState(incoming, (value,) + self.outgoing[:-1])


@dataclass(frozen=True)
class Cell:
    """Immutable contents of the cell at ``position``."""

    position: Position
    registers: Mapping[str, Number]
    wires: Mapping[str, WireState]

    def __post_init__(self) -> None:
        # Freeze the mappings so snapshots cannot be edited in place
        object.__setattr__(self, "registers", MappingProxyType(dict(self.registers)))
        object.__setattr__(self, "wires", MappingProxyType(dict(self.wires)))

    @property
    def row(self) -> int:
        return self.position.row

    @property
    def column(self) -> int:
        return self.position.column

    def values(self) -> dict[str, Number]:
        """Evaluation context: register values and incoming wire values by name."""
        values = dict(self.registers)
        for name, wire in self.wires.items():
            values[name] = wire.incoming
        return values

    def __getitem__(self, name: str) -> Number | WireState:
        if name in self.registers:
            return self.registers[name]
        return self.wires[name]

    def as_dict(self) -> dict:
        """Plain representation used for dumps."""
        result: dict = dict(self.registers)
        for name, wire in self.wires.items():
            result[name] = {"in": wire.incoming, "out": list(wire.outgoing)}
        return result
