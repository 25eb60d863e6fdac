"""
Unit tests for the layout geometry.

These tests verify:
1. Cell and drawing sizes with the default constants
2. Cell origins, titles and register label anchors
3. Wire lanes, entry/exit segments, arrows and delay markers
4. Geometry depends only on the descriptor, never on the state
"""

import pytest

from sysviz.algorithms import matrix_vector_descriptor, polynomial_descriptor
from sysviz.config import Descriptor, Direction, RegisterSpec, WireSpec
from sysviz.core import advance, create
from sysviz.layout import (
    COMPACT_LAYOUT,
    DEFAULT_LAYOUT,
    LayoutConfig,
    Point,
    Rect,
    Segment,
    Size,
    cell_origin,
    cell_size,
    cell_title,
    centered_origin,
    layout_cell,
    layout_grid,
    preferred_size,
    register_label,
    summarize_wires,
    wire_geometry,
    wire_lane,
)


@pytest.fixture
def poly():
    """Three cells, one register, two horizontal wires of delay 1."""
    return polynomial_descriptor([1, 2, 3])


@pytest.fixture
def delayed():
    """Two cells joined by one horizontal wire of delay 2."""
    return Descriptor(column_count=2, wires=(WireSpec("x", delay=2),))


@pytest.fixture
def column():
    """Two rows joined by one top-down wire."""
    return Descriptor(row_count=2, wires=(WireSpec("y", direction=Direction.TOP_DOWN),))


# =============================================================================
# Layout Config Tests
# =============================================================================


class TestLayoutConfig:
    """Test suite for LayoutConfig."""

    def test_defaults(self):
        """Test the default layout constants."""
        layout = DEFAULT_LAYOUT
        assert (layout.cell_min_width, layout.cell_min_height) == (80, 100)
        assert (layout.cell_title_height, layout.register_height) == (40, 20)
        assert layout.delay_width == 10
        assert (layout.wires_hgap, layout.wires_vgap) == (50, 50)

    def test_compact_is_smaller(self):
        """Test that the compact preset uses smaller gaps."""
        assert COMPACT_LAYOUT.wires_hgap < DEFAULT_LAYOUT.wires_hgap

    def test_invalid(self):
        """Test that non-positive gaps fail validation."""
        with pytest.raises(AssertionError):
            LayoutConfig(wires_hgap=0)


# =============================================================================
# Size Tests
# =============================================================================


class TestSizes:
    """Test suite for cell_size() and preferred_size()."""

    def test_summary(self, poly):
        """Test the wire counts and maximum delays."""
        summary = summarize_wires(poly)
        assert summary.horizontal_count == 2
        assert summary.vertical_count == 0
        assert summary.max_horizontal_delay == 1

    def test_cell_size(self, poly):
        """Test the cell size of the polynomial array."""
        assert cell_size(poly) == Size(100, 100)

    def test_minimum_cell_size(self):
        """Test that an empty descriptor gets the minimum cell size."""
        assert cell_size(Descriptor()) == Size(80, 100)

    def test_registers_grow_height(self):
        """Test that each register adds one label row."""
        registers = tuple(RegisterSpec(f"r{i}") for i in range(4))
        assert cell_size(Descriptor(registers=registers)).height == 40 + 4 * 20

    def test_vertical_wires_grow_height(self):
        """Test that vertical wires add lanes to the height."""
        wires = tuple(WireSpec(f"w{i}", direction=Direction.BOTTOM_UP) for i in range(3))
        assert cell_size(Descriptor(wires=wires)).height == 150

    def test_preferred_size(self, poly):
        """Test the drawing size of the polynomial array."""
        assert preferred_size(poly) == Size(600, 200)

    def test_preferred_size_with_delay(self, delayed):
        """Test that longer delay lines widen the drawing."""
        assert preferred_size(delayed) == Size(2 * 80 + 3 * 50 + 2 * 50, 200)

    def test_preferred_size_vertical(self, column):
        """Test the drawing size with a vertical wire."""
        assert preferred_size(column) == Size(180, 2 * 100 + 2 * 50 + 2 * 50)

    def test_centered_origin(self, poly):
        """Test centering the drawing on a larger canvas."""
        assert centered_origin(poly, Size(800, 400)) == Point(100, 100)

    def test_independent_of_state(self, poly):
        """Test that advancing the array does not change the geometry."""
        state = create(poly)
        before = (cell_size(state.descriptor), preferred_size(state.descriptor))
        for value in (1, 2, 3):
            state = advance(state, {"x": [value]})
        after = (cell_size(state.descriptor), preferred_size(state.descriptor))
        assert before == after
        assert preferred_size(state.descriptor) == preferred_size(state.descriptor)


# =============================================================================
# Cell Anchors Tests
# =============================================================================


class TestCellAnchors:
    """Test suite for per-cell anchors."""

    def test_cell_origin(self, poly):
        """Test cell origins with and without an offset."""
        assert cell_origin(poly, 0, 0) == Point(50, 50)
        assert cell_origin(poly, 0, 1) == Point(250, 50)
        assert cell_origin(poly, 0, 1, origin=Point(10, 20)) == Point(260, 70)

    @pytest.mark.parametrize(
        "descriptor, position, title",
        [
            (Descriptor(column_count=3), (0, 2), "P2"),
            (Descriptor(row_count=3, start_index=1), (2, 0), "P3"),
            (Descriptor(row_count=2, column_count=2), (1, 0), "P1,0"),
            (Descriptor(row_count=2, column_count=2, start_index=1), (0, 1), "P1,2"),
        ],
    )
    def test_title(self, descriptor, position, title):
        """Test cell titles for linear and two dimensional arrays."""
        assert cell_title(descriptor, *position) == title

    def test_matrix_vector_titles(self):
        """Test that the matrix-vector cells are numbered from 1."""
        desc = matrix_vector_descriptor(2)
        assert [cell_title(desc, r, 0) for r in range(2)] == ["P1", "P2"]

    def test_register_label(self, poly):
        """Test the register label anchor."""
        anchor = register_label(poly, 0, 1, 0)
        assert anchor.point == Point(250 + 50, 50 + 40 + 10)
        assert anchor.font_size == DEFAULT_LAYOUT.register_font_size

    def test_layout_cell(self, poly):
        """Test the full geometry of one cell."""
        geom = layout_cell(poly, 0, 1)
        assert geom.frame == Rect(250, 50, 100, 100)
        assert geom.title == "P1"
        assert geom.title_label.point == Point(300, 70)
        assert len(geom.register_labels) == 1
        assert [w.name for w in geom.wires] == ["p", "x"]

    def test_layout_grid_shape(self):
        """Test that layout_grid returns one geometry per cell."""
        grid = layout_grid(Descriptor(row_count=2, column_count=3))
        assert len(grid) == 2
        assert all(len(row) == 3 for row in grid)
        assert grid[1][2].row == 1 and grid[1][2].column == 2


# =============================================================================
# Wire Geometry Tests
# =============================================================================


class TestWireGeometry:
    """Test suite for wire anchors."""

    def test_lanes(self, poly):
        """Test lane numbers of horizontal and vertical wires."""
        assert wire_lane(poly, "p") == 0
        assert wire_lane(poly, "x") == 1
        desc = matrix_vector_descriptor(2)
        assert wire_lane(desc, "a") == 0
        assert wire_lane(desc, "u") == 0

    def test_upstream_edge(self, poly):
        """Test the entry segment, name label and arrow at the upstream edge."""
        wire = wire_geometry(poly, 0, 0, "p")
        assert wire.entry == Segment(Point(0, 75), Point(50, 75))
        assert wire.exit == Segment(Point(150, 75), Point(200, 75))
        assert wire.name_label is not None
        assert wire.name_label.point == Point(0, 75)
        assert wire.arrow is not None
        assert wire.arrow[0] == Point(25, 75)

    def test_second_lane(self, poly):
        """Test that the second lane sits one gap lower."""
        wire = wire_geometry(poly, 0, 0, "x")
        assert wire.entry.end == Point(50, 125)

    def test_interior_cell(self, poly):
        """Test that interior cells get delay markers but no label or arrow."""
        wire = wire_geometry(poly, 0, 1, "p")
        assert wire.name_label is None
        assert wire.arrow is None
        assert wire.delay_markers == (Rect(395, 65, 10, 20),)
        assert wire.delay_labels == ()

    def test_downstream_edge(self, poly):
        """Test that the last cell gets a one gap exit and no markers."""
        wire = wire_geometry(poly, 0, 2, "p")
        assert wire.exit == Segment(Point(550, 75), Point(600, 75))
        assert wire.delay_markers == ()

    def test_delay_markers(self, delayed):
        """Test marker and label positions for a delay of 2."""
        wire = wire_geometry(delayed, 0, 0, "x")
        assert [m.x + m.width / 2 for m in wire.delay_markers] == [180, 230]
        assert [label.point.x for label in wire.delay_labels] == [205]
        assert wire.exit == Segment(Point(130, 100), Point(230, 100))

    def test_right_left(self):
        """Test a right to left wire."""
        desc = Descriptor(column_count=2, wires=(WireSpec("y", direction=Direction.RIGHT_LEFT),))
        first = wire_geometry(desc, 0, 0, "y")
        last = wire_geometry(desc, 0, 1, "y")
        assert last.arrow is not None and first.arrow is None
        assert first.delay_markers == ()
        assert len(last.delay_markers) == 1
        assert last.entry.start.x > last.entry.end.x

    def test_top_down(self, column):
        """Test a top down wire."""
        top = wire_geometry(column, 0, 0, "y")
        assert top.entry == Segment(Point(90, 0), Point(90, 50))
        assert top.exit == Segment(Point(90, 150), Point(90, 200))
        assert top.arrow is not None
        bottom = wire_geometry(column, 1, 0, "y")
        assert bottom.arrow is None
        assert bottom.delay_markers == ()

    def test_bottom_up(self):
        """Test a bottom up wire."""
        desc = Descriptor(row_count=2, wires=(WireSpec("u", direction=Direction.BOTTOM_UP),))
        bottom = wire_geometry(desc, 1, 0, "u")
        assert bottom.name_label is not None
        assert bottom.entry.start.y > bottom.entry.end.y
        assert len(bottom.delay_markers) == 1
