"""
Layout Configuration Module

Drawing dimensions used to place cells, wires and delay markers on a 2D
surface. Units are whatever the rendering surface uses (pixels for a canvas,
data units for matplotlib).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutConfig:
    """
    Dimensions of the systolic array drawing.

    Example:
        >>> layout = LayoutConfig(wires_hgap=40, wires_vgap=40)
        >>> layout.cell_min_width
        80
    """

    # =========================================================================
    # Cell Box
    # =========================================================================
    cell_min_width: float = 80
    """Minimum cell width."""

    cell_min_height: float = 100
    """Minimum cell height."""

    cell_title_height: float = 40
    """Height of the title bar holding the cell label (P0, P1,2, ...)."""

    register_height: float = 20
    """Height of one register text row."""

    # =========================================================================
    # Wires
    # =========================================================================
    delay_width: float = 10
    """Thickness of a delay-line marker."""

    wires_hgap: float = 50
    """Horizontal gap unit: spacing of vertical wires and of delay slots."""

    wires_vgap: float = 50
    """Vertical gap unit: spacing of horizontal wires and of delay slots."""

    arrow_length: float = 15
    """Length of the arrow head drawn on boundary inputs."""

    arrow_width: float = 10
    """Width of the arrow head drawn on boundary inputs."""

    # =========================================================================
    # Text
    # =========================================================================
    title_font_size: int = 20
    register_font_size: int = 16
    wire_name_font_size: int = 16
    value_font_size: int = 14

    def __post_init__(self):
        """Validate layout parameters."""
        assert self.cell_min_width > 0, "cell_min_width must be positive"
        assert self.cell_min_height > 0, "cell_min_height must be positive"
        assert self.cell_title_height >= 0, "cell_title_height must be non-negative"
        assert self.register_height > 0, "register_height must be positive"
        assert self.wires_hgap > 0, "wires_hgap must be positive"
        assert self.wires_vgap > 0, "wires_vgap must be positive"
        assert self.delay_width > 0, "delay_width must be positive"


# Pre-defined layouts
DEFAULT_LAYOUT = LayoutConfig()
"""Default layout."""

COMPACT_LAYOUT = LayoutConfig(
    cell_min_width=60,
    cell_min_height=70,
    cell_title_height=24,
    register_height=16,
    wires_hgap=30,
    wires_vgap=30,
    delay_width=6,
    arrow_length=9,
    arrow_width=6,
    title_font_size=12,
    register_font_size=10,
    wire_name_font_size=10,
    value_font_size=9,
)
"""Smaller layout for wide arrays and GIF export."""
