"""
Matrix-vector multiplication on a linear array.

One column of cells, one per matrix row. Cell i accumulates v_i = sum_j
A[i][j] * u_j. The vector ``u`` enters at the bottom and moves up; the
matrix enters from the right, each row skewed so that A[i][j] reaches cell
i in the same step as u_j:

              ^ u
    v0 [P1] <-- a (row 0, delayed n-1 steps)
              ^
    v1 [P2] <-- a (row 1, delayed n-2 steps)
              ^
    v2 [P3] <-- a (row 2, no delay)
              ^
              u0, u1, ...
"""

from collections.abc import Sequence

from ..config import Descriptor, Direction, Number, RegisterSpec, WireSpec
from ..core import SystolicArrayState, scalar_feed
from ..util.sequences import skew
from .base import SystolicAlgorithm

TRANSITION = """
v' = v + a * u
u' = u
"""


def matrix_vector_descriptor(rows: int) -> Descriptor:
    """Descriptor of an ``rows`` x 1 accumulation array."""
    return Descriptor(
        row_count=rows,
        start_index=1,
        registers=(RegisterSpec("v", transition=lambda v, pos: v["v"] + v["a"] * v["u"]),),
        wires=(
            WireSpec("a", direction=Direction.RIGHT_LEFT),
            WireSpec("u", direction=Direction.BOTTOM_UP),
        ),
    )


def matrix_vector(
    matrix: Sequence[Sequence[Number]], vector: Sequence[Number]
) -> SystolicAlgorithm:
    """
    Matrix-vector preset.

    After ``len(vector) + len(matrix) - 1`` steps the ``v`` registers hold
    the product (read with ``state.register_grid("v")[:, 0]``).

    Raises:
        ValueError: Empty matrix or a row length that differs from the vector
    """
    if not matrix:
        raise ValueError("Matrix must have at least one row")
    if any(len(row) != len(vector) for row in matrix):
        raise ValueError(
            f"Matrix rows must have {len(vector)} elements to match the vector length"
        )

    def probe(state: SystolicArrayState) -> tuple[Number, ...]:
        return tuple(state.register_grid("v")[:, 0].tolist())

    return SystolicAlgorithm(
        key="matrixvector1d",
        label="Matrix Vector Multiplication",
        transition=TRANSITION,
        descriptor=matrix_vector_descriptor(len(matrix)),
        feeds={"a": skew(matrix, reverse=True), "u": scalar_feed(vector)},
        probe=probe,
        latency=len(vector) + len(matrix) - 1,
    )
