"""
Prime sieve on a linear array.

Candidates 2, 3, 4, ... move left to right through a row of cells. An empty
cell (p = 0) keeps the first positive value reaching it as its prime and
marks that value as consumed (negated). A cell holding prime p zeroes every
multiple of p passing by; other values pass unchanged. After the stream has
drained, the cells hold the first ``columns`` primes in order.
"""

from collections.abc import Mapping

from ..config import Descriptor, Number, RegisterSpec, WireSpec
from ..core import scalar_feed
from .base import SystolicAlgorithm

TRANSITION = """
if a <= 0 then
  a' = a
else if p == 0 then
  p' = a
  a' = -a
else if a % p == 0 then
  a' = 0
else
  a' = a
"""


def _keep_prime(values: Mapping[str, Number], pos) -> Number:
    a, p = values["a"], values["p"]
    return a if a > 0 and not p else p


def _sieve(values: Mapping[str, Number], pos) -> Number:
    a, p = values["a"], values["p"]
    if a <= 0:
        return a
    if p == 0:
        return -a
    return a if a % p else 0


def primes_descriptor(columns: int = 7) -> Descriptor:
    """Descriptor of a ``columns`` cell sieve."""
    return Descriptor(
        column_count=columns,
        start_index=1,
        registers=(RegisterSpec("p", init=0, transition=_keep_prime),),
        wires=(WireSpec("a", transition=_sieve),),
    )


def primes(limit: int = 25, columns: int = 7) -> SystolicAlgorithm:
    """
    Prime sieve preset feeding the candidates 2 .. limit - 1.

    The probe reads the primes found so far (non-zero ``p`` registers).
    """
    if columns < 1:
        raise ValueError("columns must be positive")

    def probe(state) -> tuple[Number, ...]:
        return tuple(int(p) for p in state.register_grid("p")[0] if p)

    return SystolicAlgorithm(
        key="primes",
        label="Primes",
        transition=TRANSITION,
        descriptor=primes_descriptor(columns),
        feeds={"a": scalar_feed(range(2, limit))},
        probe=probe,
        latency=columns,
    )
