"""
Common CLI argument definitions for sysviz demos.

This module provides shared argument groups for the demo scripts, so the
terminal animation, GIF export and cellular automaton demos accept the same
options.

Usage:
    from common.cli import add_animation_args, add_algorithm_args

    parser = argparse.ArgumentParser()
    add_animation_args(parser)  # Adds --delay, --fast, --step, --movie, etc.
    add_algorithm_args(parser)  # Adds --algorithm, --coefficients, --input
    args = parser.parse_args()

    algorithm = build_algorithm(args)
    delay = get_effective_delay(args)  # 0 if --fast, else args.delay
"""

import logging
from argparse import ArgumentParser, Namespace

from sysviz.algorithms import ALGORITHMS, SystolicAlgorithm
from sysviz.util import parse_matrix, parse_numbers

DEFAULT_COEFFICIENTS = "1,2,3"
DEFAULT_INPUTS = "1,2,3,4,5"
DEFAULT_MATRIX = "1,2,3;4,5,6"
DEFAULT_VECTOR = "1,1,2"


def add_animation_args(
    parser: ArgumentParser,
    *,
    default_delay: int = 500,
    default_max_steps: int = 100,
    include_movie: bool = True,
    step_help: str = "Step mode (press Enter to advance, 'b' to go back)",
) -> None:
    """
    Add common animation control arguments to a parser.

    Adds these arguments:
        --delay MS      Delay between frames in milliseconds
        --fast          Fast mode (no animation delay)
        --step          Step mode (press Enter to advance each step)
        --movie         Movie mode: suppress prompts and setup/summary
        --no-color      Disable colored output
        --max-steps N   Maximum steps to run before stopping
        --verbose       Enable debug logging
    """
    group = parser.add_argument_group("Animation Control")

    group.add_argument(
        "--delay",
        type=int,
        default=default_delay,
        metavar="MS",
        help=f"Delay between frames in milliseconds (default: {default_delay})",
    )
    group.add_argument("--fast", action="store_true", help="Fast mode (no animation delay)")
    group.add_argument(
        "--step",
        action="store_true",
        help=step_help,
    )
    if include_movie:
        group.add_argument(
            "--movie",
            action="store_true",
            help="Movie mode: suppress prompts and setup/summary for term2svg capture",
        )
    group.add_argument("--no-color", action="store_true", help="Disable colored output")
    group.add_argument(
        "--max-steps",
        type=int,
        default=default_max_steps,
        metavar="N",
        help=f"Maximum steps to run before stopping (default: {default_max_steps})",
    )
    group.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")


def add_algorithm_args(parser: ArgumentParser, *, default_algorithm: str = "polyeval") -> None:
    """
    Add algorithm selection arguments to a parser.

    Adds these arguments:
        --algorithm KEY         One of the registered algorithms
        --coefficients LIST     Comma separated coefficients (polyeval, fir2slow)
        --input LIST            Comma separated input stream (polyeval, fir2slow)
        --matrix ROWS           Matrix rows separated by ';' (matrixvector1d)
        --vector LIST           Comma separated vector (matrixvector1d)
        --limit N               Feed 2..N-1 into the sieve (primes)
        --columns N             Sieve cells (primes)
    """
    group = parser.add_argument_group("Algorithm")

    group.add_argument(
        "--algorithm",
        choices=sorted(ALGORITHMS),
        default=default_algorithm,
        help=f"Systolic algorithm to run (default: {default_algorithm})",
    )
    group.add_argument(
        "--coefficients",
        default=DEFAULT_COEFFICIENTS,
        metavar="LIST",
        help=f"Comma separated coefficients (default: {DEFAULT_COEFFICIENTS})",
    )
    group.add_argument(
        "--input",
        default=DEFAULT_INPUTS,
        metavar="LIST",
        help=f"Comma separated input values (default: {DEFAULT_INPUTS})",
    )
    group.add_argument(
        "--matrix",
        default=DEFAULT_MATRIX,
        metavar="ROWS",
        help=f"Matrix rows separated by ';' (default: {DEFAULT_MATRIX})",
    )
    group.add_argument(
        "--vector",
        default=DEFAULT_VECTOR,
        metavar="LIST",
        help=f"Comma separated vector (default: {DEFAULT_VECTOR})",
    )
    group.add_argument("--limit", type=int, default=25, help="Sieve limit (default: 25)")
    group.add_argument("--columns", type=int, default=7, help="Sieve cells (default: 7)")


def add_trace_args(parser: ArgumentParser) -> None:
    """
    Add step trace arguments to a parser.

    Adds these arguments:
        --trace FILE    Record every step and write it as CSV
    """
    group = parser.add_argument_group("Step Trace")

    group.add_argument(
        "--trace",
        type=str,
        default=None,
        metavar="FILE",
        help="Record every register and wire value to a CSV file",
    )


def build_algorithm(args: Namespace) -> SystolicAlgorithm:
    """
    Build the algorithm selected on the command line.

    Raises:
        ValueError: A number list does not parse
    """
    key = args.algorithm
    if key == "matrixvector1d":
        return ALGORITHMS[key](
            parse_matrix(args.matrix, strict=True), parse_numbers(args.vector, strict=True)
        )
    if key == "primes":
        return ALGORITHMS[key](limit=args.limit, columns=args.columns)
    return ALGORITHMS[key](
        parse_numbers(args.coefficients, strict=True), parse_numbers(args.input, strict=True)
    )


def configure_logging(args: Namespace) -> None:
    """Send sysviz debug records to stderr when --verbose is given."""
    if getattr(args, "verbose", False):
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s: %(message)s"
        )


def get_effective_delay(args: Namespace) -> int:
    """
    Get the effective animation delay from parsed args.

    Returns 0 if --fast is set, otherwise returns args.delay.
    """
    if getattr(args, "fast", False):
        return 0
    return getattr(args, "delay", 500)


def should_print(args: Namespace) -> bool:
    """
    Check if setup/summary output should be printed.

    Returns False if --movie mode is enabled.
    """
    return not getattr(args, "movie", False)


def should_prompt(args: Namespace) -> bool:
    """
    Check if interactive prompts should be shown.

    Returns False if --movie mode is enabled (prompts break term2svg capture).
    """
    return not getattr(args, "movie", False)
