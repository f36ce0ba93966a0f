"""
Unit tests for plotting.py module.

Tests that the timeline and feasible-region charts build the expected
figure structure and save to disk.
"""

import pytest

# Use non-interactive backend for testing
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from fundmodel.config import configure
from fundmodel.plotting import plot_feasible_region, plot_timeline
from fundmodel.search import FeasibilitySearch
from fundmodel.timeline import run_timeline


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


class TestPlotTimeline:
    """Tests for plot_timeline()."""

    def test_returns_two_panels(self, v1_timeline):
        fig, axes = plot_timeline(v1_timeline)
        assert len(axes) == 2
        assert "5 accelerators" in fig.get_suptitle()

    def test_custom_title(self, v2_timeline):
        fig, _ = plot_timeline(v2_timeline, title="Second version")
        assert fig.get_suptitle() == "Second version"

    def test_infeasible_and_clawback_years(self):
        """Infeasible markers and clawback shading do not break the layout."""
        tl = run_timeline(configure(8, 0))
        fig, axes = plot_timeline(tl)
        labels = [t.get_text() for t in axes[0].get_legend().get_texts()]
        assert "infeasible" in labels

    def test_save(self, tmp_path, v1_timeline):
        path = tmp_path / "timeline.png"
        plot_timeline(v1_timeline, save_path=path)
        assert path.exists()


class TestPlotFeasibleRegion:
    """Tests for plot_feasible_region()."""

    @pytest.fixture
    def result(self):
        return FeasibilitySearch("v1").search(range(0, 4), range(18, 31))

    def test_axes_labels(self, result):
        fig, ax = plot_feasible_region(result)
        assert ax.get_xlabel() == "Accelerators per year"
        assert "v1" in ax.get_title()

    def test_frontier_line(self, result):
        _, ax = plot_feasible_region(result)
        line = ax.get_lines()[0]
        assert list(line.get_xdata()) == [a for a, _ in result.pareto]

    def test_save(self, tmp_path, result):
        path = tmp_path / "region.png"
        plot_feasible_region(result, save_path=path)
        assert path.exists()
