"""
Layout geometry for drawing a systolic array.

Everything here is a pure function of the descriptor and a cell position,
never of the values a cell currently holds. The drawing size therefore
stays fixed while the simulation advances; a renderer only reads the state
to print values at the anchors computed here.

Grid layout (one horizontal wire, delay 2, three columns):

    hgap        cell_width     (max_delay + 1) * hgap     cell_width      hgap
    <--->   <-------------->   <-------------------->   <-------------->  <--->
    a -->|  |     P0       |---[]-----v-----[]-------|  |     P1       |------>
            |   reg:value  |                            |   reg:value  |

The vertical layout is the same with rows, vertical wires and the vertical
gap. Delay markers ([]) split the gap between two cells into ``delay + 1``
equal segments; the value stored in each delay slot after the first is
printed between markers.
"""

from dataclasses import dataclass
from typing import NamedTuple

from ..config import Descriptor, Direction, WireSpec
from .config import DEFAULT_LAYOUT, LayoutConfig


class Point(NamedTuple):
    x: float
    y: float


class Size(NamedTuple):
    width: float
    height: float


class Rect(NamedTuple):
    x: float
    y: float
    width: float
    height: float


class Segment(NamedTuple):
    start: Point
    end: Point


@dataclass(frozen=True)
class TextAnchor:
    """Where and how a label is placed (alignment relative to ``point``)."""

    point: Point
    align: str = "center"
    """Horizontal alignment: left, center or right."""

    baseline: str = "middle"
    """Vertical alignment: top, middle or bottom."""

    font_size: int = 14


@dataclass(frozen=True)
class WireSummary:
    """Wire counts and largest delays per orientation."""

    horizontal_count: int
    vertical_count: int
    max_horizontal_delay: int
    max_vertical_delay: int


@dataclass(frozen=True)
class WireGeometry:
    """
    Anchors for drawing one wire of one cell.

    Attributes:
        name: Wire name
        direction: Wire direction
        lane: Index among wires of the same orientation
        entry: Line from the upstream gap into the cell
        exit: Line from the cell towards its downstream neighbour
        incoming_label: Where the incoming value is printed
        outgoing_label: Where the head of the delay line is printed
        delay_markers: One marker per delay slot (empty on the downstream edge)
        delay_labels: Anchors for delay slots 1..delay-1, in slot order
        name_label: Wire name, only on the grid's upstream edge
        arrow: Arrow head triangle, only on the grid's upstream edge
    """

    name: str
    direction: Direction
    lane: int
    entry: Segment
    exit: Segment
    incoming_label: TextAnchor
    outgoing_label: TextAnchor
    delay_markers: tuple[Rect, ...] = ()
    delay_labels: tuple[TextAnchor, ...] = ()
    name_label: TextAnchor | None = None
    arrow: tuple[Point, Point, Point] | None = None


@dataclass(frozen=True)
class CellGeometry:
    """Anchors for drawing one cell: frame, title, registers and wires."""

    row: int
    column: int
    frame: Rect
    title: str
    title_label: TextAnchor
    register_labels: tuple[TextAnchor, ...]
    wires: tuple[WireGeometry, ...]


def summarize_wires(descriptor: Descriptor) -> WireSummary:
    """Count wires per orientation and find the largest delay of each."""
    h_count = v_count = h_delay = v_delay = 0
    for w in descriptor.wires:
        if Direction.coerce(w.direction).horizontal:
            h_count += 1
            h_delay = max(h_delay, w.delay)
        else:
            v_count += 1
            v_delay = max(v_delay, w.delay)
    return WireSummary(h_count, v_count, h_delay, v_delay)


def cell_size(descriptor: Descriptor, layout: LayoutConfig = DEFAULT_LAYOUT) -> Size:
    """
    Size of one cell box.

    Wide enough for the minimum width and the horizontal wires, tall enough
    for the title plus one row per register and for the vertical wires.
    """
    summary = summarize_wires(descriptor)
    width = max(layout.cell_min_width, summary.horizontal_count * layout.wires_hgap)
    height = max(
        layout.cell_min_height,
        layout.cell_title_height + len(descriptor.registers) * layout.register_height,
        summary.vertical_count * layout.wires_vgap,
    )
    return Size(width, height)


def preferred_size(descriptor: Descriptor, layout: LayoutConfig = DEFAULT_LAYOUT) -> Size:
    """
    Size of the whole drawing.

    Between adjacent cells there is room for the longest delay line of that
    orientation ((max_delay + 1) gaps); one more gap on each side holds the
    boundary inputs and outputs.
    """
    cell = cell_size(descriptor, layout)
    summary = summarize_wires(descriptor)
    rows, cols = descriptor.row_count, descriptor.column_count
    width = (
        cols * cell.width
        + (summary.max_horizontal_delay + 1) * layout.wires_hgap * (cols - 1)
        + 2 * layout.wires_hgap
    )
    height = (
        rows * cell.height
        + (summary.max_vertical_delay + 1) * layout.wires_vgap * (rows - 1)
        + 2 * layout.wires_vgap
    )
    return Size(width, height)


def centered_origin(
    descriptor: Descriptor, canvas: Size, layout: LayoutConfig = DEFAULT_LAYOUT
) -> Point:
    """Top-left corner that centres the drawing on a canvas."""
    size = preferred_size(descriptor, layout)
    return Point((canvas.width - size.width) / 2, (canvas.height - size.height) / 2)


def cell_origin(
    descriptor: Descriptor,
    row: int,
    column: int,
    layout: LayoutConfig = DEFAULT_LAYOUT,
    origin: Point = Point(0, 0),
) -> Point:
    """Top-left corner of the cell box at (row, column)."""
    cell = cell_size(descriptor, layout)
    summary = summarize_wires(descriptor)
    x = (
        origin.x
        + layout.wires_hgap
        + column * (cell.width + (summary.max_horizontal_delay + 1) * layout.wires_hgap)
    )
    y = (
        origin.y
        + layout.wires_vgap
        + row * (cell.height + (summary.max_vertical_delay + 1) * layout.wires_vgap)
    )
    return Point(x, y)


def cell_title(descriptor: Descriptor, row: int, column: int) -> str:
    """Display label of a cell, numbered from ``start_index``."""
    start = descriptor.start_index
    if descriptor.row_count == 1:
        return f"P{start + column}"
    if descriptor.column_count == 1:
        return f"P{start + row}"
    return f"P{start + row},{start + column}"


def wire_lane(descriptor: Descriptor, name: str) -> int:
    """Index of wire ``name`` among the wires of the same orientation."""
    target = descriptor.wire(name)
    horizontal = Direction.coerce(target.direction).horizontal
    lane = 0
    for w in descriptor.wires:
        if w.name == name:
            return lane
        if Direction.coerce(w.direction).horizontal == horizontal:
            lane += 1
    raise KeyError(name)


def register_label(
    descriptor: Descriptor,
    row: int,
    column: int,
    index: int,
    layout: LayoutConfig = DEFAULT_LAYOUT,
    origin: Point = Point(0, 0),
) -> TextAnchor:
    """Anchor of the ``index``-th register's text row inside the cell."""
    x, y = cell_origin(descriptor, row, column, layout, origin)
    cell = cell_size(descriptor, layout)
    return TextAnchor(
        Point(
            x + cell.width / 2,
            y + layout.cell_title_height + (2 * index + 1) * layout.register_height / 2,
        ),
        font_size=layout.register_font_size,
    )


def _delay_slots(
    wire: WireSpec, gap: float, max_delay: int, start: float, sign: int
) -> tuple[list[float], list[float]]:
    """Marker and label offsets along a wire, measured from the cell edge."""
    segment = (max_delay + 1) * gap / (wire.delay + 1)
    markers = [start + sign * (idx + 1) * segment for idx in range(wire.delay)]
    labels = [start + sign * (2 * idx + 1) * segment / 2 for idx in range(1, wire.delay)]
    return markers, labels


def wire_geometry(
    descriptor: Descriptor,
    row: int,
    column: int,
    name: str,
    layout: LayoutConfig = DEFAULT_LAYOUT,
    origin: Point = Point(0, 0),
) -> WireGeometry:
    """
    Anchors for wire ``name`` in the cell at (row, column).

    Horizontal wires are stacked ``wires_vgap`` apart and centred on the cell
    height; vertical wires are spread ``wires_hgap`` apart and centred on the
    cell width.
    """
    wire = descriptor.wire(name)
    direction = Direction.coerce(wire.direction)
    lane = wire_lane(descriptor, name)
    summary = summarize_wires(descriptor)
    cell = cell_size(descriptor, layout)
    x, y = cell_origin(descriptor, row, column, layout, origin)
    w, h = cell.width, cell.height
    hgap, vgap = layout.wires_hgap, layout.wires_vgap
    dw = layout.delay_width
    last_row = descriptor.row_count - 1
    last_col = descriptor.column_count - 1
    value_font = layout.value_font_size
    name_font = layout.wire_name_font_size
    arrow_len, arrow_w = layout.arrow_length, layout.arrow_width

    wire_x = x + (w - (summary.vertical_count - 1) * hgap) / 2 + lane * hgap
    wire_y = y + (h - (summary.horizontal_count - 1) * vgap) / 2 + lane * vgap

    markers: list[Rect] = []
    labels: list[TextAnchor] = []
    name_label = None
    arrow = None

    if direction == Direction.LEFT_RIGHT:
        exit_gaps = summary.max_horizontal_delay if column < last_col else 1
        entry = Segment(Point(x - hgap, wire_y), Point(x, wire_y))
        exit_ = Segment(Point(x + w, wire_y), Point(x + w + exit_gaps * hgap, wire_y))
        incoming = TextAnchor(Point(x, wire_y), "right", "bottom", value_font)
        outgoing = TextAnchor(Point(x + w, wire_y), "left", "bottom", value_font)
        if column == 0:
            tip = x - hgap / 2
            name_label = TextAnchor(Point(x - hgap, wire_y), "left", "bottom", name_font)
            arrow = (
                Point(tip, wire_y),
                Point(tip - arrow_len, wire_y + arrow_w),
                Point(tip - arrow_len, wire_y),
            )
        if column < last_col:
            xs, label_xs = _delay_slots(wire, hgap, summary.max_horizontal_delay, x + w, 1)
            markers = [Rect(mx - dw / 2, wire_y - dw, dw, 2 * dw) for mx in xs]
            labels = [
                TextAnchor(Point(lx, wire_y), "center", "bottom", value_font) for lx in label_xs
            ]

    elif direction == Direction.RIGHT_LEFT:
        exit_gaps = summary.max_horizontal_delay if column > 0 else 1
        entry = Segment(Point(x + w + hgap, wire_y), Point(x + w, wire_y))
        exit_ = Segment(Point(x, wire_y), Point(x - exit_gaps * hgap, wire_y))
        incoming = TextAnchor(Point(x + w, wire_y), "left", "bottom", value_font)
        outgoing = TextAnchor(Point(x, wire_y), "right", "bottom", value_font)
        if column == last_col:
            tip = x + w + hgap / 2
            name_label = TextAnchor(Point(x + w + hgap, wire_y), "right", "bottom", name_font)
            arrow = (
                Point(tip, wire_y),
                Point(tip + arrow_len, wire_y + arrow_w),
                Point(tip + arrow_len, wire_y),
            )
        if column > 0:
            xs, label_xs = _delay_slots(wire, hgap, summary.max_horizontal_delay, x, -1)
            markers = [Rect(mx - dw / 2, wire_y - dw, dw, 2 * dw) for mx in xs]
            labels = [
                TextAnchor(Point(lx, wire_y), "center", "bottom", value_font) for lx in label_xs
            ]

    elif direction == Direction.TOP_DOWN:
        exit_gaps = summary.max_vertical_delay if row < last_row else 1
        entry = Segment(Point(wire_x, y - vgap), Point(wire_x, y))
        exit_ = Segment(Point(wire_x, y + h), Point(wire_x, y + h + exit_gaps * vgap))
        incoming = TextAnchor(Point(wire_x, y), "left", "bottom", value_font)
        outgoing = TextAnchor(Point(wire_x, y + h), "left", "top", value_font)
        if row == 0:
            tip = y - vgap / 2
            name_label = TextAnchor(Point(wire_x, y - vgap), "left", "top", name_font)
            arrow = (
                Point(wire_x, tip),
                Point(wire_x - arrow_w, tip - arrow_len),
                Point(wire_x, tip - arrow_len),
            )
        if row < last_row:
            ys, label_ys = _delay_slots(wire, vgap, summary.max_vertical_delay, y + h, 1)
            markers = [Rect(wire_x - dw, my - dw / 2, 2 * dw, dw) for my in ys]
            labels = [
                TextAnchor(Point(wire_x, ly), "left", "middle", value_font) for ly in label_ys
            ]

    else:  # BOTTOM_UP
        exit_gaps = summary.max_vertical_delay if row > 0 else 1
        entry = Segment(Point(wire_x, y + h + vgap), Point(wire_x, y + h))
        exit_ = Segment(Point(wire_x, y), Point(wire_x, y - exit_gaps * vgap))
        incoming = TextAnchor(Point(wire_x, y + h), "left", "top", value_font)
        outgoing = TextAnchor(Point(wire_x, y), "left", "bottom", value_font)
        if row == last_row:
            tip = y + h + vgap / 2
            name_label = TextAnchor(Point(wire_x, y + h + vgap), "left", "bottom", name_font)
            arrow = (
                Point(wire_x, tip),
                Point(wire_x - arrow_w, tip + arrow_len),
                Point(wire_x, tip + arrow_len),
            )
        if row > 0:
            ys, label_ys = _delay_slots(wire, vgap, summary.max_vertical_delay, y, -1)
            markers = [Rect(wire_x - dw, my - dw / 2, 2 * dw, dw) for my in ys]
            labels = [
                TextAnchor(Point(wire_x, ly), "left", "middle", value_font) for ly in label_ys
            ]

    return WireGeometry(
        name=name,
        direction=direction,
        lane=lane,
        entry=entry,
        exit=exit_,
        incoming_label=incoming,
        outgoing_label=outgoing,
        delay_markers=tuple(markers),
        delay_labels=tuple(labels),
        name_label=name_label,
        arrow=arrow,
    )


def layout_cell(
    descriptor: Descriptor,
    row: int,
    column: int,
    layout: LayoutConfig = DEFAULT_LAYOUT,
    origin: Point = Point(0, 0),
) -> CellGeometry:
    """All anchors of the cell at (row, column)."""
    x, y = cell_origin(descriptor, row, column, layout, origin)
    cell = cell_size(descriptor, layout)
    return CellGeometry(
        row=row,
        column=column,
        frame=Rect(x, y, cell.width, cell.height),
        title=cell_title(descriptor, row, column),
        title_label=TextAnchor(
            Point(x + cell.width / 2, y + layout.cell_title_height / 2),
            font_size=layout.title_font_size,
        ),
        register_labels=tuple(
            register_label(descriptor, row, column, index, layout, origin)
            for index in range(len(descriptor.registers))
        ),
        wires=tuple(
            wire_geometry(descriptor, row, column, w.name, layout, origin)
            for w in descriptor.wires
        ),
    )


def layout_grid(
    descriptor: Descriptor,
    layout: LayoutConfig = DEFAULT_LAYOUT,
    origin: Point = Point(0, 0),
) -> tuple[tuple[CellGeometry, ...], ...]:
    """Anchors of every cell, indexed [row][column]."""
    return tuple(
        tuple(
            layout_cell(descriptor, row, column, layout, origin)
            for column in range(descriptor.column_count)
        )
        for row in range(descriptor.row_count)
    )
