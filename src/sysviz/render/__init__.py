"""
Rendering backends for systolic array snapshots.

- **text**: ANSI terminal rendering (no extra dependencies)
- **mpl**: matplotlib drawing, frame animation and GIF export

The matplotlib backend is imported explicitly (``from sysviz.render import
mpl``) so terminal front ends never load pyplot.
"""

from .text import Colors, format_generations, format_registers, format_state, format_value

__all__ = [
    "Colors",
    "format_state",
    "format_registers",
    "format_generations",
    "format_value",
]
