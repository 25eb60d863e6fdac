"""
Terminal rendering with ANSI colours.

Formats a systolic array snapshot as a grid of text boxes, one per cell:

    Step 2
      +--------+   +--------+   +--------+
      | P0     |   | P1     |   | P2     |
      | a:1    |   | a:2    |   | a:3    |
      | p 3→4  |   | p 0→0  |   | p 0→0  |
      | x 3→3  |   | x 0→0  |   | x 0→0  |
      +--------+   +--------+   +--------+

Register lines show ``name:value``. Wire lines show the value received this
step and the delay line (head first). Functions return strings; callers
decide where to print them.
"""

from ..automata.eca import ElementaryCA
from ..config import Direction
from ..core.systolic_array import SystolicArrayState
from ..layout.geometry import cell_title

ARROWS = {
    Direction.LEFT_RIGHT: "→",
    Direction.RIGHT_LEFT: "←",
    Direction.TOP_DOWN: "↓",
    Direction.BOTTOM_UP: "↑",
}


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    # Foreground colors
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"

    # Background colors
    BG_GREEN = "\033[42m"
    BG_BLUE = "\033[44m"

    @classmethod
    def disable(cls):
        """Disable all colors."""
        for attr in dir(cls):
            if not attr.startswith("_") and attr != "disable":
                setattr(cls, attr, "")


class _Plain:
    RESET = BOLD = DIM = ""
    RED = GREEN = YELLOW = BLUE = MAGENTA = CYAN = WHITE = ""
    BG_GREEN = BG_BLUE = ""


def _palette(use_color: bool):
    return Colors if use_color else _Plain


def format_value(value, width: int = 0) -> str:
    """Format a value for display (integral floats print without decimals)."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value:>{width}}" if width else str(value)


def _cell_lines(state: SystolicArrayState, row: int, column: int, c) -> list[tuple[str, str]]:
    """(plain text, colour) pairs for one cell box."""
    desc = state.descriptor
    cell = state.cell(row, column)
    lines = [(cell_title(desc, row, column), c.BOLD)]
    for name, value in cell.registers.items():
        lines.append((f"{name}:{format_value(value)}", c.GREEN))
    for wire in desc.wires:
        ws = cell.wires[wire.name]
        arrow = ARROWS[Direction.coerce(wire.direction)]
        slots = ",".join(format_value(v) for v in ws.outgoing)
        color = c.YELLOW if Direction.coerce(wire.direction).horizontal else c.CYAN
        lines.append((f"{wire.name} {format_value(ws.incoming)}{arrow}{slots}", color))
    return lines


def format_state(state: SystolicArrayState, use_color: bool = True) -> str:
    """Render a snapshot as a grid of boxed cells."""
    c = _palette(use_color)
    out = [f"{c.BOLD}Step {state.step}{c.RESET}"]

    boxes = [
        [_cell_lines(state, r, col, c) for col in range(state.columns)]
        for r in range(state.rows)
    ]
    width = max(len(text) for row in boxes for box in row for text, _ in box)
    height = max(len(box) for row in boxes for box in row)
    border = "+" + "-" * (width + 2) + "+"

    for row in boxes:
        out.append("  " + "   ".join(border for _ in row))
        for i in range(height):
            parts = []
            for box in row:
                text, color = box[i] if i < len(box) else ("", "")
                parts.append(f"| {color}{text:<{width}}{c.RESET} |")
            out.append("  " + "   ".join(parts))
        out.append("  " + "   ".join(border for _ in row))
    return "\n".join(out)


def format_registers(state: SystolicArrayState, name: str, use_color: bool = True) -> str:
    """Grid of one register's values, one line per row."""
    c = _palette(use_color)
    grid = state.register_grid(name)
    width = max(len(format_value(v)) for v in grid.flat)
    lines = [f"{c.GREEN}{name}:{c.RESET}"]
    for row in grid:
        lines.append("  [" + " ".join(format_value(v, width) for v in row) + "]")
    return "\n".join(lines)


def format_generations(eca: ElementaryCA, use_color: bool = True, alive: str = "█") -> str:
    """Render the automaton's window, oldest generation at the top."""
    c = _palette(use_color)
    lines = [f"{c.BOLD}Rule {eca.ruleset}  generation {eca.current}{c.RESET}"]
    for generation in eca.generations:
        cells = "".join(alive if v else " " for v in generation)
        lines.append(f"{c.CYAN}{cells}{c.RESET}")
    return "\n".join(lines)
