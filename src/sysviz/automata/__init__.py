"""
Cellular automata.

- **eca**: Elementary (1-D, two-state, radius one) cellular automaton
"""

from .eca import ElementaryCA, initial_generation, next_generation, rule_table

__all__ = [
    "ElementaryCA",
    "initial_generation",
    "next_generation",
    "rule_table",
]
