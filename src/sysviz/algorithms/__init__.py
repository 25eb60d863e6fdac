"""
Systolic algorithm presets.

Each preset is a descriptor plus the boundary feeds and output probe needed
to run it:

- **polyeval**: Polynomial evaluation (Horner's method)
- **fir2slow**: FIR filter with counter-flowing samples and partial sums
- **matrixvector1d**: Matrix-vector multiplication on a linear array
- **primes**: Prime sieve

Usage:
    from sysviz.algorithms import ALGORITHMS

    algo = ALGORITHMS["polyeval"]([1, 2, 3], [1, 2, 3, 4, 5])
    sim = algo.simulation()
    sim.run_until_drained(extra_steps=algo.latency)
    print(sim.outputs)
"""

from .base import SystolicAlgorithm
from .fir import fir_bidirectional, fir_descriptor, fir_reference
from .matrix_vector import matrix_vector, matrix_vector_descriptor
from .polynomial import horner, polynomial_descriptor, polynomial_eval
from .primes import primes, primes_descriptor

ALGORITHMS = {
    "polyeval": polynomial_eval,
    "fir2slow": fir_bidirectional,
    "matrixvector1d": matrix_vector,
    "primes": primes,
}
"""Algorithm key -> preset factory."""

__all__ = [
    "SystolicAlgorithm",
    "ALGORITHMS",
    # Presets
    "polynomial_eval",
    "fir_bidirectional",
    "matrix_vector",
    "primes",
    # Descriptors
    "polynomial_descriptor",
    "fir_descriptor",
    "matrix_vector_descriptor",
    "primes_descriptor",
    # References
    "horner",
    "fir_reference",
]
