"""
matplotlib backend.

Paints a snapshot on an ``Axes`` using only the anchors from
``sysviz.layout``: cell frames, titles, register labels, wire lines with
arrow heads and delay markers, and the values carried by each wire. Data
coordinates are canvas pixels with the y axis pointing down.

Example usage:
    sim = algorithm.simulation()
    sim.run(12)
    fig, anim = animate_states(sim.history, fps=2)
    save_gif(anim, "polyeval.gif", fps=2)
"""

import logging
from collections.abc import Sequence
from pathlib import Path

import matplotlib.animation as animation
import matplotlib.patches as patches
import matplotlib.pyplot as plt

from ..automata.eca import ElementaryCA
from ..core.systolic_array import SystolicArrayState
from ..layout import DEFAULT_LAYOUT, LayoutConfig, Point, TextAnchor, layout_grid, preferred_size
from .text import format_value

logger = logging.getLogger(__name__)

# Layout font sizes are canvas pixels; matplotlib wants points
FONT_SCALE = 0.6

VERTICAL_ALIGN = {"top": "top", "middle": "center", "bottom": "bottom"}

CELL_FACE = "#F0F8FF"
CELL_EDGE = "#4169E1"
TITLE_FACE = "#B0C4DE"
WIRE_COLOR = "#333333"
VALUE_COLOR = "#B8860B"
REGISTER_COLOR = "#006400"
MARKER_FACE = "#FFD700"


def _text(ax, anchor: TextAnchor, text: str, **kwargs):
    return ax.text(
        anchor.point.x,
        anchor.point.y,
        text,
        ha=anchor.align,
        va=VERTICAL_ALIGN[anchor.baseline],
        fontsize=anchor.font_size * FONT_SCALE,
        **kwargs,
    )


def draw_state(
    ax,
    state: SystolicArrayState,
    layout: LayoutConfig = DEFAULT_LAYOUT,
    origin: Point = Point(0, 0),
    title: str | None = None,
):
    """
    Draw one snapshot on ``ax``.

    Args:
        ax: matplotlib Axes (cleared by the caller when redrawing)
        state: Snapshot to draw
        layout: Layout constants
        origin: Canvas position of the grid's top-left corner
        title: Optional axes title (default: "Step n")

    Returns:
        The axes
    """
    desc = state.descriptor
    size = preferred_size(desc, layout)

    for geometry_row in layout_grid(desc, layout, origin):
        for geom in geometry_row:
            cell = state.cell(geom.row, geom.column)
            frame = geom.frame
            ax.add_patch(
                patches.Rectangle(
                    (frame.x, frame.y),
                    frame.width,
                    frame.height,
                    facecolor=CELL_FACE,
                    edgecolor=CELL_EDGE,
                    linewidth=1.5,
                )
            )
            ax.add_patch(
                patches.Rectangle(
                    (frame.x, frame.y),
                    frame.width,
                    layout.cell_title_height,
                    facecolor=TITLE_FACE,
                    edgecolor=CELL_EDGE,
                    linewidth=1.5,
                )
            )
            _text(ax, geom.title_label, geom.title, fontweight="bold")

            for anchor, (name, value) in zip(geom.register_labels, cell.registers.items()):
                _text(ax, anchor, f"{name}:{format_value(value)}", color=REGISTER_COLOR)

            for wire in geom.wires:
                ws = cell.wires[wire.name]
                for seg in (wire.entry, wire.exit):
                    ax.plot(
                        [seg.start.x, seg.end.x],
                        [seg.start.y, seg.end.y],
                        color=WIRE_COLOR,
                        linewidth=1,
                    )
                if wire.arrow is not None:
                    ax.add_patch(patches.Polygon(wire.arrow, closed=True, color=WIRE_COLOR))
                if wire.name_label is not None:
                    _text(ax, wire.name_label, wire.name, fontstyle="italic")
                for marker in wire.delay_markers:
                    ax.add_patch(
                        patches.Rectangle(
                            (marker.x, marker.y),
                            marker.width,
                            marker.height,
                            facecolor=MARKER_FACE,
                            edgecolor=WIRE_COLOR,
                            linewidth=0.8,
                        )
                    )
                _text(ax, wire.incoming_label, format_value(ws.incoming), color=VALUE_COLOR)
                _text(ax, wire.outgoing_label, format_value(ws.head), color=VALUE_COLOR)
                for anchor, value in zip(wire.delay_labels, ws.outgoing[1:]):
                    _text(ax, anchor, format_value(value), color=VALUE_COLOR)

    ax.set_xlim(origin.x, origin.x + size.width)
    ax.set_ylim(origin.y + size.height, origin.y)
    ax.set_aspect("equal")
    ax.axis("off")
    ax.set_title(f"Step {state.step}" if title is None else title, fontsize=11)
    return ax


def animate_states(
    states: Sequence[SystolicArrayState],
    layout: LayoutConfig = DEFAULT_LAYOUT,
    fps: int = 2,
    dpi: int = 100,
    title: str | None = None,
) -> tuple:
    """
    Build an animation with one frame per snapshot.

    All snapshots must come from the same descriptor, so the canvas size
    is fixed for the whole animation.

    Returns:
        (fig, anim) tuple for saving or displaying
    """
    if not states:
        raise ValueError("At least one state is required")

    size = preferred_size(states[0].descriptor, layout)
    figsize = (max(size.width / dpi, 2), max(size.height / dpi, 2))
    fig, ax = plt.subplots(figsize=figsize, dpi=dpi)
    if title:
        fig.suptitle(title, fontsize=14, fontweight="bold")

    def animate(frame_idx):
        ax.clear()
        draw_state(ax, states[frame_idx], layout)
        return []

    anim = animation.FuncAnimation(
        fig, animate, frames=len(states), interval=1000 // fps, blit=False
    )
    logger.debug("Animation with %d frames at %d fps", len(states), fps)
    return fig, anim


def save_gif(anim, path: str | Path, fps: int = 2) -> Path:
    """Write ``anim`` as an animated GIF with Pillow."""
    output_path = Path(path)
    writer = animation.PillowWriter(fps=fps)
    anim.save(str(output_path), writer=writer)
    logger.debug("Saved %s", output_path)
    return output_path


def draw_generations(ax, eca: ElementaryCA, cmap: str = "Greys"):
    """Draw the automaton's window as an image, oldest generation on top."""
    ax.imshow(eca.as_array(), cmap=cmap, interpolation="nearest", vmin=0, vmax=1)
    ax.set_title(f"Rule {eca.ruleset}, generation {eca.current}", fontsize=11)
    ax.axis("off")
    return ax
