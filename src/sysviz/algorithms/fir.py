"""
FIR filter with bidirectional data flow.

Samples ``x`` move left to right while partial sums ``y`` move right to
left; cell k holds coefficient a_k:

    x -->  [a0] --> [a1] --> [a2] -->
    y <--  [a0] <-- [a1] <-- [a2] <-- 0

Because the two streams move in opposite directions, samples are fed at
half rate (an empty slot between samples) so that each sample meets every
partial sum exactly once. The filtered output y_n = sum_k a_k * x_(n-k)
leaves cell 0 every other step.
"""

from collections.abc import Sequence

from ..config import Descriptor, Direction, Number, RegisterSpec, WireSpec
from ..core import SystolicArrayState, scalar_feed
from ..util.sequences import interleave
from .base import SystolicAlgorithm

TRANSITION = """
x' = x
y' = y + a * x
"""


def fir_descriptor(coefficients: Sequence[Number]) -> Descriptor:
    """Descriptor of the bidirectional FIR array."""
    coeffs = tuple(coefficients)
    return Descriptor(
        column_count=len(coeffs),
        registers=(RegisterSpec("a", init=lambda pos: coeffs[pos.column]),),
        wires=(
            WireSpec(
                "y",
                direction=Direction.RIGHT_LEFT,
                transition=lambda v, pos: v["y"] + v["a"] * v["x"],
            ),
            WireSpec("x"),
        ),
    )


def fir_reference(coefficients: Sequence[Number], samples: Sequence[Number]) -> list[Number]:
    """Full convolution of ``samples`` with ``coefficients``."""
    length = len(samples) + len(coefficients) - 1
    return [
        sum(
            a * samples[n - k]
            for k, a in enumerate(coefficients)
            if 0 <= n - k < len(samples)
        )
        for n in range(length)
    ]


def fir_bidirectional(
    coefficients: Sequence[Number], samples: Sequence[Number]
) -> SystolicAlgorithm:
    """
    Bidirectional FIR preset.

    The probe reads the ``y`` head of cell 0; valid outputs appear on the
    first step and then every second step.
    """
    if not coefficients:
        raise ValueError("At least one coefficient is required")

    def probe(state: SystolicArrayState) -> Number:
        return state.cell(0, 0).wires["y"].head

    return SystolicAlgorithm(
        key="fir2slow",
        label="FIR Bidirectional (half rate)",
        transition=TRANSITION,
        descriptor=fir_descriptor(coefficients),
        feeds={"x": scalar_feed(interleave(samples))},
        probe=probe,
        latency=1,
    )
