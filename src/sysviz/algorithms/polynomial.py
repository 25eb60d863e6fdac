"""
Polynomial evaluation with Horner's method.

One row of cells, one per coefficient (highest degree first). Each cell
holds its coefficient in register ``a``; the partial result ``p`` and the
point ``x`` travel left to right together:

    x -->  [a=c0] --> [a=c1] --> [a=c2] -->  P(x) = (c0 * x + c1) * x + c2
    p=0 -> p'=p*x+a

Every x fed at column 0 leaves the rightmost cell as P(x) ``column_count``
steps later, and a new x can be fed every step.
"""

from collections.abc import Sequence

from ..config import Descriptor, Number, RegisterSpec, WireSpec
from ..core import SystolicArrayState, scalar_feed
from .base import SystolicAlgorithm

TRANSITION = """
p' = p * x + a
x' = x
"""


def polynomial_descriptor(coefficients: Sequence[Number]) -> Descriptor:
    """Descriptor evaluating the polynomial with ``coefficients``."""
    coeffs = tuple(coefficients)
    return Descriptor(
        column_count=len(coeffs),
        registers=(RegisterSpec("a", init=lambda pos: coeffs[pos.column]),),
        wires=(
            WireSpec("p", transition=lambda v, pos: v["p"] * v["x"] + v["a"]),
            WireSpec("x"),
        ),
    )


def horner(coefficients: Sequence[Number], x: Number) -> Number:
    """Reference evaluation (highest degree coefficient first)."""
    result = 0
    for c in coefficients:
        result = result * x + c
    return result


def polynomial_eval(
    coefficients: Sequence[Number], inputs: Sequence[Number]
) -> SystolicAlgorithm:
    """
    Polynomial evaluation preset.

    Args:
        coefficients: Coefficients, highest degree first
        inputs: Points to evaluate, fed one per step

    Returns:
        Algorithm whose probe reads the rightmost cell's ``p`` output
    """
    if not coefficients:
        raise ValueError("At least one coefficient is required")
    last = len(coefficients) - 1

    def probe(state: SystolicArrayState) -> Number:
        return state.cell(0, last).wires["p"].head

    return SystolicAlgorithm(
        key="polyeval",
        label="Polynomial Eval",
        transition=TRANSITION,
        descriptor=polynomial_descriptor(coefficients),
        feeds={"x": scalar_feed(inputs)},
        probe=probe,
        latency=len(coefficients),
    )
