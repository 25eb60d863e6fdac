"""Utility modules for sysviz."""

from .sequences import interleave, parse_matrix, parse_numbers, skew

__all__ = [
    "parse_numbers",
    "parse_matrix",
    "interleave",
    "skew",
]
