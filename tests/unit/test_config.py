"""
Unit tests for descriptor normalization.

These tests verify:
1. Defaults for grid size, start index, init and transition functions
2. Literal init/transition values become constant functions
3. Direction coercion from names and integers
4. Structural errors raise InvalidDescriptor
5. Normalization is idempotent and never modifies its input
"""

import pytest

from sysviz.config import (
    Descriptor,
    Direction,
    InvalidDescriptor,
    Position,
    RegisterSpec,
    WireSpec,
    check_delays,
    normalize,
)


# =============================================================================
# Direction Tests
# =============================================================================


class TestDirection:
    """Test suite for wire directions."""

    def test_orientation(self):
        """Test horizontal and vertical classification."""
        assert Direction.LEFT_RIGHT.horizontal
        assert Direction.RIGHT_LEFT.horizontal
        assert Direction.TOP_DOWN.vertical
        assert Direction.BOTTOM_UP.vertical

    def test_upstream_offsets(self):
        """Test the neighbour offset each direction reads from."""
        assert Direction.LEFT_RIGHT.upstream_offset == (0, -1)
        assert Direction.RIGHT_LEFT.upstream_offset == (0, 1)
        assert Direction.TOP_DOWN.upstream_offset == (-1, 0)
        assert Direction.BOTTOM_UP.upstream_offset == (1, 0)

    @pytest.mark.parametrize(
        "value, expected",
        [
            (Direction.TOP_DOWN, Direction.TOP_DOWN),
            ("left_right", Direction.LEFT_RIGHT),
            ("Bottom-Up", Direction.BOTTOM_UP),
            (1, Direction.RIGHT_LEFT),
        ],
    )
    def test_coerce(self, value, expected):
        """Test coercion from enum members, names and integers."""
        assert Direction.coerce(value) is expected

    @pytest.mark.parametrize("value", ["diagonal", 7, None])
    def test_coerce_invalid(self, value):
        """Test that unknown directions raise InvalidDescriptor."""
        with pytest.raises(InvalidDescriptor):
            Direction.coerce(value)


# =============================================================================
# Normalize Tests
# =============================================================================


class TestNormalize:
    """Test suite for normalize()."""

    @pytest.fixture
    def raw(self):
        """Mapping descriptor with one register and two wires."""
        return {
            "column_count": 3,
            "registers": [{"name": "a", "init": 5}],
            "wires": [
                {"name": "x"},
                {"name": "y", "direction": "right_left", "transition": 7},
            ],
        }

    def test_defaults(self):
        """Test the defaults of an empty descriptor."""
        desc = normalize({})
        assert desc.row_count == 1
        assert desc.column_count == 1
        assert desc.start_index == 0
        assert desc.registers == ()
        assert desc.wires == ()

    def test_mapping_input(self, raw):
        """Test that a mapping is accepted and coerced."""
        desc = normalize(raw)
        assert isinstance(desc, Descriptor)
        assert desc.column_count == 3
        assert desc.names == ("a", "x", "y")
        assert desc.wire("y").direction is Direction.RIGHT_LEFT

    def test_literal_init_becomes_constant(self, raw):
        """Test that a literal init becomes a constant function."""
        desc = normalize(raw)
        assert desc.registers[0].init(Position(0, 2)) == 5

    def test_none_init_reads_zero(self):
        """Test that a missing init reads 0."""
        desc = normalize(Descriptor(registers=(RegisterSpec("a", init=None),)))
        assert desc.registers[0].init(Position(0, 0)) == 0

    def test_missing_transition_passes_value_through(self, raw):
        """Test that a missing transition returns the value of its own name."""
        desc = normalize(raw)
        values = {"a": 5, "x": 3, "y": 1}
        assert desc.registers[0].transition(values, Position(0, 0)) == 5
        assert desc.wire("x").transition(values, Position(0, 0)) == 3

    def test_literal_transition_becomes_constant(self, raw):
        """Test that a literal transition becomes a constant function."""
        desc = normalize(raw)
        assert desc.wire("y").transition({"y": 1}, Position(0, 0)) == 7

    def test_callables_are_kept(self):
        """Test that callables are kept as they are."""
        def init(pos):
            return pos.column

        desc = normalize(Descriptor(registers=(RegisterSpec("a", init=init),)))
        assert desc.registers[0].init is init

    def test_default_delay(self, raw):
        """Test that wires default to delay 1."""
        desc = normalize(raw)
        assert all(w.delay == 1 for w in desc.wires)

    def test_idempotent(self, raw):
        """Test that normalizing twice changes nothing."""
        once = normalize(raw)
        assert normalize(once) == once

    def test_input_not_modified(self):
        """Test that the input descriptor is left untouched."""
        original = Descriptor(wires=(WireSpec("x", direction="top_down"),))
        normalize(original)
        assert original.wires[0].direction == "top_down"

    @pytest.mark.parametrize(
        "raw, message",
        [
            ({"row_count": 0}, "Invalid rows count"),
            ({"column_count": -1}, "Invalid columns count"),
        ],
    )
    def test_invalid_size(self, raw, message):
        """Test that non-positive grid sizes are rejected."""
        with pytest.raises(InvalidDescriptor, match=message):
            normalize(raw)

    def test_empty_name(self):
        """Test that empty names are rejected."""
        with pytest.raises(InvalidDescriptor, match="Invalid name"):
            normalize({"registers": [{"name": ""}]})

    def test_missing_name(self):
        """Test that entries without a name are rejected."""
        with pytest.raises(InvalidDescriptor, match="Missing name"):
            normalize({"wires": [{"delay": 2}]})

    def test_duplicate_name(self):
        """Test that registers and wires share one namespace."""
        with pytest.raises(InvalidDescriptor, match="Duplicate"):
            normalize({"registers": [{"name": "a"}], "wires": [{"name": "a"}]})

    def test_unknown_field(self):
        """Test that unknown descriptor fields are rejected."""
        with pytest.raises(InvalidDescriptor, match="Unknown"):
            normalize({"rows": 2})

    def test_invalid_direction(self):
        """Test that an unknown wire direction is rejected."""
        with pytest.raises(InvalidDescriptor):
            normalize({"wires": [{"name": "x", "direction": "diagonal"}]})

    def test_invalid_delay_type(self):
        """Test that a non-integer delay is rejected."""
        with pytest.raises(InvalidDescriptor, match="Invalid delay"):
            normalize({"wires": [{"name": "x", "delay": 1.5}]})

    @pytest.mark.parametrize(
        "raw, message",
        [
            ({"row_count": None}, "Invalid rows count"),
            ({"row_count": 2.5}, "Invalid rows count"),
            ({"row_count": True}, "Invalid rows count"),
            ({"column_count": "3"}, "Invalid columns count"),
            ({"start_index": "1"}, "Invalid start index"),
            ({"start_index": 0.5}, "Invalid start index"),
        ],
    )
    def test_invalid_size_type(self, raw, message):
        """Test that non-integer sizes and start indices raise InvalidDescriptor."""
        with pytest.raises(InvalidDescriptor, match=message):
            normalize(raw)

    def test_none_start_index_defaults(self):
        """Test that a start index of None means 0."""
        assert normalize({"start_index": None}).start_index == 0

    def test_none_direction_and_delay_default(self):
        """Test that None direction and delay mean the defaults."""
        desc = normalize({"wires": [{"name": "x", "direction": None, "delay": None}]})
        assert desc.wire("x").direction is Direction.LEFT_RIGHT
        assert desc.wire("x").delay == 1

    def test_zero_delay_passes_normalize(self):
        """Test that zero delays pass normalization but fail the delay check."""
        desc = normalize({"wires": [{"name": "x", "delay": 0}]})
        assert desc.wire("x").delay == 0
        with pytest.raises(InvalidDescriptor, match="not supported"):
            check_delays(desc)

    def test_wire_lookup(self, raw):
        """Test wire lookup and orientation filters."""
        desc = normalize(raw)
        with pytest.raises(KeyError):
            desc.wire("missing")
        assert [w.name for w in desc.horizontal_wires] == ["x", "y"]
        assert desc.vertical_wires == ()
