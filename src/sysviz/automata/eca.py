"""
Elementary cellular automaton.

A 1-D row of binary cells evolving under one of the 256 Wolfram rules. The
neighbourhood (left, centre, right) wraps around the row ends and selects a
bit of the rule number:

    neighbourhood  111 110 101 100 011 010 001 000
    rule 30 bits     0   0   0   1   1   1   1   0

Generation 1 has a single live cell in the middle. Only the most recent
``generations_count`` generations are kept, so the automaton can scroll
forever in a fixed window.
"""

from dataclasses import dataclass, field

import numpy as np


def rule_table(ruleset: int) -> np.ndarray:
    """Lookup table: entry n is the new cell value for neighbourhood n."""
    if not 0 <= ruleset <= 255:
        raise ValueError("ruleset must be between 0 and 255")
    return np.array([(ruleset >> n) & 1 for n in range(8)], dtype=np.uint8)


def initial_generation(size: int) -> np.ndarray:
    """All cells dead except the middle one."""
    generation = np.zeros(size, dtype=np.uint8)
    generation[size // 2] = 1
    return generation


def next_generation(generation: np.ndarray, ruleset: int) -> np.ndarray:
    """Apply the rule once, wrapping around the row ends."""
    left = np.roll(generation, 1)
    right = np.roll(generation, -1)
    neighbourhood = (left << 2) | (generation << 1) | right
    return rule_table(ruleset)[neighbourhood]


@dataclass(frozen=True)
class ElementaryCA:
    """
    Immutable elementary cellular automaton with a bounded history window.

    Attributes:
        size: Cells per generation
        generations_count: Generations kept in the window
        ruleset: Wolfram rule number (0-255)
        current: Number of the newest generation (starts at 1)
        generations: Window of generations, oldest first
    """

    size: int
    generations_count: int
    ruleset: int
    current: int = 1
    generations: tuple[tuple[int, ...], ...] = field(default=())

    def __post_init__(self) -> None:
        """Validate parameters and seed the first generation."""
        if self.size < 1:
            raise ValueError("size must be positive")
        if self.generations_count < 1:
            raise ValueError("generations_count must be positive")
        if not 0 <= self.ruleset <= 255:
            raise ValueError("ruleset must be between 0 and 255")
        if not self.generations:
            seed = tuple(int(v) for v in initial_generation(self.size))
            object.__setattr__(self, "generations", (seed,))

    @property
    def first(self) -> int:
        """Number of the oldest generation in the window."""
        return self.current - len(self.generations) + 1

    @property
    def latest(self) -> tuple[int, ...]:
        return self.generations[-1]

    def step(self) -> "ElementaryCA":
        """Return the automaton one generation later."""
        nxt = next_generation(np.array(self.latest, dtype=np.uint8), self.ruleset)
        window = self.generations
        if len(window) >= self.generations_count:
            window = window[len(window) - self.generations_count + 1 :]
        return ElementaryCA(
            size=self.size,
            generations_count=self.generations_count,
            ruleset=self.ruleset,
            current=self.current + 1,
            generations=window + (tuple(int(v) for v in nxt),),
        )

    def run(self, steps: int) -> "ElementaryCA":
        """Return the automaton ``steps`` generations later."""
        ca = self
        for _ in range(steps):
            ca = ca.step()
        return ca

    def as_array(self) -> np.ndarray:
        """Window as a 2-D uint8 array [generation, cell]."""
        return np.array(self.generations, dtype=np.uint8)
