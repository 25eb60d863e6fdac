#!/usr/bin/env python3
"""
Animated Systolic Algorithm Demo.

This example steps one of the built-in systolic algorithms and redraws the
array in the terminal after every step:

- polyeval:        Polynomial evaluation, p' = p * x + a
- fir2slow:        FIR filter, samples and partial sums flowing in opposite directions
- matrixvector1d:  Matrix-vector product on a linear array
- primes:          Prime sieve

Each cell shows its registers (name:value) and, for every wire, the value
received this step followed by the wire's delay line.

Usage:
    python 01_animated_systolic.py [--algorithm KEY] [--coefficients LIST] [--input LIST]
                                   [--delay MS] [--fast] [--step] [--no-color]

    --algorithm KEY     polyeval, fir2slow, matrixvector1d or primes (default: polyeval)
    --coefficients L    Comma separated coefficients (default: 1,2,3)
    --input L           Comma separated inputs (default: 1,2,3,4,5)
    --delay MS          Delay between frames in milliseconds (default: 500)
    --fast              Fast mode (no animation delay)
    --step              Step mode (Enter advances, 'b' goes back, 'q' quits)
    --no-color          Disable colored output
    --trace FILE        Write every step as CSV
"""

import argparse
import os
import sys
import time

# Add parent directory to path for examples.common import
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from common.cli import (
    add_algorithm_args,
    add_animation_args,
    add_trace_args,
    build_algorithm,
    configure_logging,
    get_effective_delay,
    should_print,
    should_prompt,
)

from sysviz.render.text import Colors, format_state, format_value
from sysviz.trace import StepRecorder


def clear_screen():
    """Clear the terminal screen."""
    os.system("cls" if os.name == "nt" else "clear")


def show_frame(algorithm, sim):
    """Print the header, the array and the outputs so far."""
    c = Colors
    print(f"{c.BOLD}{algorithm.label}{c.RESET}")
    print(f"{c.DIM}{algorithm.transition.strip()}{c.RESET}\n")
    print(format_state(sim.state))

    pending = {name: len(sim.pending(name)) for name in sim.feeds}
    if pending:
        print(f"\n  {c.CYAN}Pending inputs:{c.RESET} {pending}")
    if sim.outputs:
        outputs = sim.outputs[-12:]
        if isinstance(outputs[-1], tuple):
            text = format_value(outputs[-1])
        else:
            text = ", ".join(format_value(v) for v in outputs)
        print(f"  {c.GREEN}Output:{c.RESET} {text}")
    print()


def run_animated(algorithm, sim, delay_ms: int, max_steps: int):
    """Advance until the feeds drain (plus the pipeline latency) or max_steps."""
    fed = max((len(v) for v in sim.feeds.values()), default=0)
    total = min(max_steps, fed + algorithm.latency)
    try:
        while True:
            clear_screen()
            show_frame(algorithm, sim)
            if sim.step_count >= total:
                break
            sim.step()
            time.sleep(delay_ms / 1000.0)
    except KeyboardInterrupt:
        print("\nAnimation interrupted.")


def run_step_by_step(algorithm, sim, max_steps: int, recorder=None):
    """Advance on Enter, rewind on 'b' (dropping rewound trace steps), stop on 'q'."""
    c = Colors
    while sim.step_count < max_steps:
        show_frame(algorithm, sim)
        try:
            response = input(f"Step {sim.step_count}: Enter=next, b=back, q=quit: ")
        except (KeyboardInterrupt, EOFError):
            break
        if response.lower() == "q":
            break
        if response.lower() == "b":
            sim.rewind()
            if recorder is not None:
                recorder.truncate(sim.step_count)
        else:
            sim.step()
    print(f"{c.BOLD}Stopped at step {sim.step_count}{c.RESET}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Animated systolic algorithm demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    add_algorithm_args(parser)
    add_animation_args(parser)
    add_trace_args(parser)
    args = parser.parse_args()

    configure_logging(args)
    if args.no_color:
        Colors.disable()

    try:
        algorithm = build_algorithm(args)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    recorder = StepRecorder() if args.trace else None
    sim = algorithm.simulation(trace=recorder)

    if should_print(args):
        c = Colors
        print(f"{c.BOLD}{'=' * 60}{c.RESET}")
        print(f"{c.BOLD}{algorithm.label}{c.RESET}")
        print(f"{c.BOLD}{'=' * 60}{c.RESET}")
        print(f"  Array: {sim.state.rows}x{sim.state.columns}")
        print(f"  Wires: {', '.join(w.name for w in sim.descriptor.wires)}")
    if should_prompt(args) and not args.step:
        print("\nPress Enter to start animation (Ctrl+C to skip)...")
        try:
            input()
        except KeyboardInterrupt:
            return

    if args.step:
        run_step_by_step(algorithm, sim, args.max_steps, recorder)
    else:
        run_animated(algorithm, sim, get_effective_delay(args), args.max_steps)

    if recorder is not None:
        rows = recorder.to_csv(args.trace)
        print(f"Trace: {rows} events written to {args.trace}")


if __name__ == "__main__":
    main()
