"""
Sysviz Descriptor Module

This module defines the descriptor dataclasses for the systolic array
simulator. A descriptor fixes the grid shape, the per-cell registers and the
wires that carry values between neighbouring cells. Every algorithm is just a
descriptor instance fed into the same engine.

Note: Only rectangular grids with the four cardinal directions are modelled.
Every wire carries at least one delay slot; combinational (zero delay) wires
are rejected when the array is created.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, NamedTuple


class InvalidDescriptor(ValueError):
    """Raised when a descriptor cannot describe a valid systolic array."""


class Direction(Enum):
    """
    Direction in which a wire moves its values across the grid.

    The upstream neighbour of a cell is the one a value comes from:
    - LEFT_RIGHT: column - 1
    - RIGHT_LEFT: column + 1
    - TOP_DOWN: row - 1
    - BOTTOM_UP: row + 1
    """

    LEFT_RIGHT = 0
    RIGHT_LEFT = 1
    TOP_DOWN = 2
    BOTTOM_UP = 3

    @property
    def horizontal(self) -> bool:
        """True for wires running along a row."""
        return self in (Direction.LEFT_RIGHT, Direction.RIGHT_LEFT)

    @property
    def vertical(self) -> bool:
        """True for wires running along a column."""
        return not self.horizontal

    @property
    def upstream_offset(self) -> tuple[int, int]:
        """(row, column) offset from a cell to the neighbour feeding it."""
        return UPSTREAM_OFFSETS[self]

    @classmethod
    def coerce(cls, value: Any) -> "Direction":
        """Accept a Direction, its name or its integer value."""
        if isinstance(value, Direction):
            return value
        try:
            if isinstance(value, str):
                return cls[value.strip().upper().replace("-", "_")]
            return cls(value)
        except (KeyError, ValueError) as exc:
            raise InvalidDescriptor(f"Invalid wire direction {value!r}") from exc


UPSTREAM_OFFSETS = {
    Direction.LEFT_RIGHT: (0, -1),
    Direction.RIGHT_LEFT: (0, 1),
    Direction.TOP_DOWN: (-1, 0),
    Direction.BOTTOM_UP: (1, 0),
}


class Position(NamedTuple):
    """Grid position handed to init and transition functions."""

    row: int
    column: int


Number = int | float
InitFunction = Callable[[Position], Number]
TransitionFunction = Callable[[dict[str, Number], Position], Number]


@dataclass(frozen=True)
class RegisterSpec:
    """
    Per-cell persistent value with no propagation delay.

    Example:
        >>> RegisterSpec("a", init=lambda pos: coefficients[pos.column])
    """

    name: str
    init: InitFunction | Number | None = 0
    """Initial value, either a constant or a function of the position."""

    transition: TransitionFunction | Number | None = None
    """New value from the cell's evaluation context (default: unchanged)."""


@dataclass(frozen=True)
class WireSpec:
    """
    Per-cell channel moving one grid cell per step along ``direction``.

    Example:
        >>> WireSpec("p", transition=lambda v, pos: v["p"] * v["x"] + v["a"])
    """

    name: str
    direction: Direction | str | int = Direction.LEFT_RIGHT
    delay: int = 1
    """Length of the delay line between this cell and its downstream neighbour."""

    transition: TransitionFunction | Number | None = None
    """Value pushed into the delay line (default: the incoming value)."""


@dataclass(frozen=True)
class Descriptor:
    """
    Declarative configuration of a systolic array.

    Example:
        >>> desc = Descriptor(column_count=3, registers=(RegisterSpec("a"),))
        >>> normalize(desc).wires
        ()
    """

    row_count: int = 1
    column_count: int = 1
    start_index: int = 0
    """First index used when numbering cells for display."""

    registers: tuple[RegisterSpec, ...] = field(default_factory=tuple)
    wires: tuple[WireSpec, ...] = field(default_factory=tuple)

    @property
    def names(self) -> tuple[str, ...]:
        """Register names followed by wire names."""
        return tuple(r.name for r in self.registers) + tuple(w.name for w in self.wires)

    @property
    def horizontal_wires(self) -> tuple[WireSpec, ...]:
        return tuple(w for w in self.wires if Direction.coerce(w.direction).horizontal)

    @property
    def vertical_wires(self) -> tuple[WireSpec, ...]:
        return tuple(w for w in self.wires if Direction.coerce(w.direction).vertical)

    def wire(self, name: str) -> WireSpec:
        """Look up a wire by name."""
        for w in self.wires:
            if w.name == name:
                return w
        raise KeyError(name)


def _constant(value: Any) -> InitFunction:
    value = 0 if value is None else value
    return lambda *_: value


def _pass_through(name: str) -> TransitionFunction:
    return lambda values, *_: values[name]


def _as_transition(name: str, fx: Any) -> TransitionFunction:
    if callable(fx):
        return fx
    if fx is None:
        return _pass_through(name)
    return _constant(fx)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_name(name: Any, kind: str, index: int) -> str:
    if not isinstance(name, str) or len(name) < 1:
        raise InvalidDescriptor(f'Invalid name "{name}" for {kind} {index}')
    return name


def _coerce_spec(entry: Any, spec_type: type, kind: str, index: int):
    if isinstance(entry, spec_type):
        return entry
    if isinstance(entry, Mapping):
        known = {f.name for f in fields(spec_type)}
        unknown = set(entry) - known
        if unknown:
            raise InvalidDescriptor(f"Unknown {kind} field(s) {sorted(unknown)} for {kind} {index}")
        if "name" not in entry:
            raise InvalidDescriptor(f"Missing name for {kind} {index}")
        return spec_type(**entry)
    raise InvalidDescriptor(f"Invalid {kind} {index}: {entry!r}")


def _coerce_descriptor(raw: Descriptor | Mapping[str, Any]) -> Descriptor:
    if isinstance(raw, Descriptor):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidDescriptor(f"Invalid descriptor {raw!r}")
    known = {f.name for f in fields(Descriptor)}
    unknown = set(raw) - known
    if unknown:
        raise InvalidDescriptor(f"Unknown descriptor field(s) {sorted(unknown)}")
    values = dict(raw)
    values["registers"] = tuple(values.get("registers") or ())
    values["wires"] = tuple(values.get("wires") or ())
    return Descriptor(**values)


def normalize(raw: Descriptor | Mapping[str, Any]) -> Descriptor:
    """
    Validate a descriptor and fill in its defaults.

    Literal ``init``/``transition`` values become constant functions and
    missing transitions become pass-throughs, so the engine always calls the
    same signatures. Wire delays are checked later by ``create``.

    Args:
        raw: Descriptor instance or mapping with the same field names

    Returns:
        New normalized Descriptor (the input is never modified)

    Raises:
        InvalidDescriptor: Non-integer or non-positive grid size, bad start
            index, empty or duplicate names
    """
    desc = _coerce_descriptor(raw)

    if not _is_int(desc.row_count) or desc.row_count < 1:
        raise InvalidDescriptor(f"Invalid rows count {desc.row_count!r}")
    if not _is_int(desc.column_count) or desc.column_count < 1:
        raise InvalidDescriptor(f"Invalid columns count {desc.column_count!r}")
    start_index = 0 if desc.start_index is None else desc.start_index
    if not _is_int(start_index):
        raise InvalidDescriptor(f"Invalid start index {start_index!r}")

    registers = []
    for index, entry in enumerate(desc.registers):
        spec = _coerce_spec(entry, RegisterSpec, "register", index)
        name = _check_name(spec.name, "register", index)
        init = spec.init if callable(spec.init) else _constant(spec.init)
        registers.append(RegisterSpec(name, init, _as_transition(name, spec.transition)))

    wires = []
    for index, entry in enumerate(desc.wires):
        spec = _coerce_spec(entry, WireSpec, "wire", index)
        name = _check_name(spec.name, "wire", index)
        delay = 1 if spec.delay is None else spec.delay
        if not _is_int(delay):
            raise InvalidDescriptor(f'Invalid delay {delay!r} for wire "{name}"')
        direction = spec.direction
        direction = Direction.LEFT_RIGHT if direction is None else Direction.coerce(direction)
        wires.append(
            WireSpec(
                name,
                direction,
                delay,
                _as_transition(name, spec.transition),
            )
        )

    seen: set[str] = set()
    for name in [r.name for r in registers] + [w.name for w in wires]:
        if name in seen:
            raise InvalidDescriptor(f'Duplicate name "{name}"')
        seen.add(name)

    return replace(
        desc, start_index=start_index, registers=tuple(registers), wires=tuple(wires)
    )


def check_delays(desc: Descriptor) -> None:
    """Reject wires without a delay slot (rippling/broadcast wires)."""
    for w in desc.wires:
        if w.delay < 1:
            raise InvalidDescriptor(
                f'Wire "{w.name}" has delay {w.delay}: rippling/broadcast wires are not supported'
            )
