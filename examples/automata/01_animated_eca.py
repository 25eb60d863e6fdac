#!/usr/bin/env python3
"""
Animated Elementary Cellular Automaton.

Scrolls an elementary cellular automaton in the terminal. Generation 1 has
a single live cell in the middle; each new generation applies the Wolfram
rule to every (left, centre, right) neighbourhood, wrapping around at the
ends. Only the last --generations generations stay on screen.

Usage:
    python 01_animated_eca.py [--rule N] [--size N] [--generations N] [--delay MS]

    --rule N          Wolfram rule 0-255 (default: 30)
    --size N          Cells per generation (default: 64)
    --generations N   Generations kept on screen (default: 32)
    --delay MS        Delay between frames in milliseconds (default: 100)
    --fast            Fast mode (no animation delay)
    --max-steps N     Generations to run (default: 100)
    --png FILE        Also save the final window as an image
"""

import argparse
import os
import sys
import time

# Add parent directory to path for examples.common import
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from common.cli import add_animation_args, configure_logging, get_effective_delay

from sysviz.automata import ElementaryCA
from sysviz.render.text import Colors, format_generations


def clear_screen():
    """Clear the terminal screen."""
    os.system("cls" if os.name == "nt" else "clear")


def save_png(eca: ElementaryCA, filename: str):
    """Save the automaton's window with matplotlib."""
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    from sysviz.render.mpl import draw_generations

    fig, ax = plt.subplots(figsize=(8, 8 * eca.generations_count / eca.size + 0.5))
    draw_generations(ax, eca)
    fig.savefig(filename, bbox_inches="tight")
    plt.close(fig)
    print(f"Saved: {filename}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Animated elementary cellular automaton",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    group = parser.add_argument_group("Automaton")
    group.add_argument("--rule", type=int, default=30, help="Wolfram rule 0-255 (default: 30)")
    group.add_argument("--size", type=int, default=64, help="Cells per generation (default: 64)")
    group.add_argument(
        "--generations", type=int, default=32, help="Generations kept on screen (default: 32)"
    )
    group.add_argument("--png", type=str, default=None, help="Save the final window as an image")
    add_animation_args(
        parser,
        default_delay=100,
        include_movie=False,
        step_help="Step mode (press Enter for the next generation)",
    )
    args = parser.parse_args()

    configure_logging(args)
    if args.no_color:
        Colors.disable()

    try:
        eca = ElementaryCA(size=args.size, generations_count=args.generations, ruleset=args.rule)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    delay_ms = get_effective_delay(args)
    try:
        for _ in range(args.max_steps):
            clear_screen()
            print(format_generations(eca))
            if args.step:
                if input("Enter=next, q=quit: ").lower() == "q":
                    break
            else:
                time.sleep(delay_ms / 1000.0)
            eca = eca.step()
    except (KeyboardInterrupt, EOFError):
        print("\nAnimation interrupted.")

    if args.png:
        save_png(eca, args.png)


if __name__ == "__main__":
    main()
