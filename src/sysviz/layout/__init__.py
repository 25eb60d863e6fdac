"""
Layout geometry for rendering systolic arrays.

Pure, descriptor-derived sizing and anchor positions. A rendering backend
asks this package where cells, wires, delay markers and labels go, and only
reads the current state for the values it prints.
"""

from .config import COMPACT_LAYOUT, DEFAULT_LAYOUT, LayoutConfig
from .geometry import (
    CellGeometry,
    Point,
    Rect,
    Segment,
    Size,
    TextAnchor,
    WireGeometry,
    WireSummary,
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

__all__ = [
    # Configuration
    "LayoutConfig",
    "DEFAULT_LAYOUT",
    "COMPACT_LAYOUT",
    # Geometry types
    "Point",
    "Size",
    "Rect",
    "Segment",
    "TextAnchor",
    "WireSummary",
    "WireGeometry",
    "CellGeometry",
    # Sizing
    "summarize_wires",
    "cell_size",
    "preferred_size",
    "centered_origin",
    # Anchors
    "cell_origin",
    "cell_title",
    "register_label",
    "wire_lane",
    "wire_geometry",
    "layout_cell",
    "layout_grid",
]
