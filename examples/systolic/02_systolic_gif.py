#!/usr/bin/env python3
"""
Systolic Algorithm GIF Generator.

This script runs one of the built-in systolic algorithms and writes every
step as a frame of an animated GIF, drawn with the layout geometry (cells,
wires, delay markers and the values they carry).

Usage:
    python 02_systolic_gif.py [--algorithm KEY] [--output FILE] [--fps N]

    --algorithm KEY   polyeval, fir2slow, matrixvector1d or primes (default: polyeval)
    --output FILE     Output filename (default: <algorithm>.gif)
    --fps N           Frames per second (default: 2)
    --dpi N           Image resolution (default: 100)
    --compact         Use the compact layout
    --show            Show animation in window instead of saving

Requirements:
    pip install matplotlib pillow

Example:
    python 02_systolic_gif.py --algorithm fir2slow --coefficients 1,2,3 --input 1,0,0,1
"""

import argparse
import os
import sys
from pathlib import Path

# Add parent directory to path for examples.common import
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib.pyplot as plt
from common.cli import add_algorithm_args, build_algorithm, configure_logging

from sysviz.layout import COMPACT_LAYOUT, DEFAULT_LAYOUT
from sysviz.render.mpl import animate_states, save_gif


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Generate a systolic algorithm animation GIF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    add_algorithm_args(parser)
    parser.add_argument("--output", type=str, default=None, help="Output filename")
    parser.add_argument("--fps", type=int, default=2, help="Frames per second (default: 2)")
    parser.add_argument("--dpi", type=int, default=100, help="Image resolution (default: 100)")
    parser.add_argument("--max-steps", type=int, default=40, help="Maximum frames (default: 40)")
    parser.add_argument("--compact", action="store_true", help="Use the compact layout")
    parser.add_argument(
        "--show", action="store_true", help="Show animation in window instead of saving"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    configure_logging(args)
    try:
        algorithm = build_algorithm(args)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    sim = algorithm.simulation()
    sim.run_until_drained(extra_steps=algorithm.latency)
    states = sim.history[: args.max_steps + 1]
    print(f"Generated {len(states)} frames for {algorithm.label}")

    layout = COMPACT_LAYOUT if args.compact else DEFAULT_LAYOUT
    fig, anim = animate_states(states, layout=layout, fps=args.fps, dpi=args.dpi)

    if args.show:
        print("Showing animation (close window to exit)...")
        plt.show()
    else:
        output_path = Path(args.output or f"{algorithm.key}.gif")
        print(f"Saving to {output_path}...")
        save_gif(anim, output_path, fps=args.fps)
        print(f"Saved: {output_path} ({output_path.stat().st_size / 1024:.1f} KB)")

    if sim.outputs:
        print(f"Outputs: {sim.outputs}")


if __name__ == "__main__":
    main()
