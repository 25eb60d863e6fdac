"""
Unit tests for the rendering backends.

These tests verify:
1. Terminal rendering of snapshots and automaton windows
2. matplotlib drawing places one frame per cell and prints wire values
3. Animation frames and GIF export
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from sysviz.algorithms import polynomial_eval  # noqa: E402
from sysviz.automata import ElementaryCA  # noqa: E402
from sysviz.render import format_generations, format_registers, format_state  # noqa: E402
from sysviz.render.mpl import animate_states, draw_generations, draw_state, save_gif  # noqa: E402


@pytest.fixture
def sim():
    """Polynomial evaluation advanced two steps."""
    algo = polynomial_eval([1, 2, 3], [4, 5])
    sim = algo.simulation()
    sim.run(2)
    return sim


# =============================================================================
# Text Rendering Tests
# =============================================================================


class TestTextRendering:
    """Test suite for the terminal renderer."""

    def test_plain_state(self, sim):
        """Test the plain text rendering of a snapshot."""
        text = format_state(sim.state, use_color=False)
        lines = text.splitlines()
        assert lines[0] == "Step 2"
        assert "\033[" not in text
        for title in ("P0", "P1", "P2"):
            assert title in text
        assert "a:1" in text and "a:3" in text
        # Cell 0 received x=5 and pushed p = 0 * 5 + 1
        assert "x 5→5" in text
        assert "p 0→1" in text

    def test_boxes_are_aligned(self, sim):
        """Test that all box lines have the same width."""
        lines = format_state(sim.state, use_color=False).splitlines()[1:]
        assert len({len(line) for line in lines}) == 1

    def test_color_state(self, sim):
        """Test that colored output contains ANSI codes."""
        assert "\033[" in format_state(sim.state, use_color=True)

    def test_registers(self, sim):
        """Test the register grid dump."""
        text = format_registers(sim.state, "a", use_color=False)
        assert text.splitlines() == ["a:", "  [1 2 3]"]

    def test_generations(self):
        """Test the automaton window rendering."""
        eca = ElementaryCA(size=5, generations_count=3, ruleset=90).run(1)
        lines = format_generations(eca, use_color=False, alive="#").splitlines()
        assert lines[0] == "Rule 90  generation 2"
        assert lines[1:] == ["  #  ", " # # "]


# =============================================================================
# Matplotlib Rendering Tests
# =============================================================================


class TestMatplotlibRendering:
    """Test suite for the matplotlib backend."""

    def teardown_method(self):
        plt.close("all")

    def test_draw_state(self, sim):
        """Test that every cell title and value is drawn."""
        fig, ax = plt.subplots()
        draw_state(ax, sim.state)
        texts = [t.get_text() for t in ax.texts]
        assert {"P0", "P1", "P2"} <= set(texts)
        assert "a:2" in texts
        assert "p" in texts and "x" in texts
        assert ax.get_title() == "Step 2"
        # y axis points down like a canvas
        bottom, top = ax.get_ylim()
        assert bottom > top

    def test_frames_and_markers(self, sim):
        """Test the number of frames, arrows and delay markers."""
        fig, ax = plt.subplots()
        draw_state(ax, sim.state)
        # Three frames, three title bars, two arrows, two wires x two delay markers
        assert len(ax.patches) == 3 + 3 + 2 + 4

    def test_animation_frames(self, sim):
        """Test that an animation is built on one figure."""
        fig, anim = animate_states(sim.history, fps=4, title="Polynomial")
        assert isinstance(anim, matplotlib.animation.FuncAnimation)
        assert fig.get_suptitle() == "Polynomial"
        assert len(fig.axes) == 1

    def test_animate_requires_states(self):
        """Test that an empty state list is rejected."""
        with pytest.raises(ValueError):
            animate_states([])

    def test_save_gif(self, sim, tmp_path):
        """Test that the GIF is written."""
        fig, anim = animate_states(sim.history[:2], fps=2, dpi=40)
        path = save_gif(anim, tmp_path / "poly.gif", fps=2)
        assert path.exists()
        assert path.stat().st_size > 0

    def test_draw_generations(self):
        """Test that the automaton window is drawn as one image."""
        fig, ax = plt.subplots()
        eca = ElementaryCA(size=11, generations_count=5, ruleset=30).run(4)
        draw_generations(ax, eca)
        assert len(ax.images) == 1
        assert ax.images[0].get_array().shape == (5, 11)
