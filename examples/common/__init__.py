"""
Common utilities for sysviz examples.

This module provides the CLI argument groups shared by the demo scripts.
"""

from .cli import (
    add_algorithm_args,
    add_animation_args,
    add_trace_args,
    build_algorithm,
    configure_logging,
    get_effective_delay,
    should_print,
    should_prompt,
)

__all__ = [
    "add_animation_args",
    "add_algorithm_args",
    "add_trace_args",
    "build_algorithm",
    "configure_logging",
    "get_effective_delay",
    "should_print",
    "should_prompt",
]
