"""
Sequence helpers for preparing systolic array inputs.

All functions here are pure: they return new tuples and never modify their
arguments.

This module defines:
1. Parsing of comma separated number lists typed by a user
2. Interleaving of empty slots between input values (slow-rate feeds)
3. Skewing of matrix rows so that each row enters the array one step later
"""

import re
from collections.abc import Sequence

from ..config import Number

_NUMBER_RE = re.compile(r"^\s*(\d+)\s*$")


def parse_numbers(text: str | None, strict: bool = False) -> list[int]:
    """
    Parse a comma separated list of non-negative integers.

    Args:
        text: Text such as "1, 2, 3"
        strict: Raise on malformed input instead of returning []

    Returns:
        Parsed integers, or [] when any item is not a number

    Raises:
        ValueError: Malformed item and ``strict`` is set

    Example:
        >>> parse_numbers("1, 2,3")
        [1, 2, 3]
        >>> parse_numbers("1, x")
        []
    """
    if text is None:
        if strict:
            raise ValueError("No numbers given")
        return []
    result = []
    for item in text.split(","):
        match = _NUMBER_RE.match(item)
        if match is None:
            if strict:
                raise ValueError(f"Invalid number {item.strip()!r} in {text!r}")
            return []
        result.append(int(match.group(1)))
    return result


def parse_matrix(text: str, strict: bool = False) -> list[list[int]]:
    """
    Parse a matrix written as rows separated by ';'.

    Example:
        >>> parse_matrix("1,2; 3,4")
        [[1, 2], [3, 4]]
    """
    rows = [parse_numbers(row, strict=strict) for row in text.split(";")]
    if any(not row for row in rows) or len({len(row) for row in rows}) != 1:
        if strict:
            raise ValueError(f"Invalid matrix {text!r}")
        return []
    return rows


def interleave(values: Sequence[Number], fill: Number = 0, gap: int = 1) -> tuple:
    """
    Insert ``gap`` copies of ``fill`` between consecutive values.

    Used to feed a wire at half rate (or slower) so that values moving in
    opposite directions meet in every cell.

    Example:
        >>> interleave([1, 2, 3])
        (1, 0, 2, 0, 3)
    """
    result: list[Number] = []
    for index, value in enumerate(values):
        if index:
            result.extend([fill] * gap)
        result.append(value)
    return tuple(result)


def skew(rows: Sequence[Sequence[Number]], fill: Number = 0, reverse: bool = False) -> tuple:
    """
    Build per-step boundary vectors from a matrix, delaying row i by i steps.

    Step t carries ``rows[i][t - i]`` in lane i (``fill`` outside the row).
    With ``reverse`` the last row goes first and row i is delayed by
    ``len(rows) - 1 - i`` steps instead.

    Example:
        >>> skew([[1, 2], [3, 4]])
        ((1, 0), (2, 3), (0, 4))
    """
    count = len(rows)
    if count == 0:
        return ()
    length = max(len(row) for row in rows)
    vectors = []
    for step in range(length + count - 1):
        vector = []
        for lane, row in enumerate(rows):
            offset = count - 1 - lane if reverse else lane
            index = step - offset
            vector.append(row[index] if 0 <= index < len(row) else fill)
        vectors.append(tuple(vector))
    return tuple(vectors)
