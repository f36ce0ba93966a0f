"""
Plotting utilities for FundModel.

Purpose
-------
Static charts of simulation output for reports and notebooks:

- plot_timeline: spend against available funds per year, with the
  accrual and allocated-unspent balances carried out of each year
- plot_feasible_region: feasible (accel, incub) pairs with the Pareto
  frontier

Both functions return ``(fig, axes)`` and optionally save the figure.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

import numpy as np

from .constants import DEFAULT_FIGSIZE, DEFAULT_FIGSIZE_WIDE
from .utils import millions_formatter

if TYPE_CHECKING:
    from .timeline import Timeline
    from .search import SearchResult

__all__ = ["plot_timeline", "plot_feasible_region"]

SPEND_COLORS = {
    "seed": "#9E9E9E",
    "capital": "#7E57C2",
    "ug_research": "#FF9800",
    "accelerator": "#2196F3",
    "incubator": "#4CAF50",
    "startup": "#00BCD4",
    "central": "#795548",
}


def plot_timeline(
    timeline: Timeline,
    *,
    figsize=DEFAULT_FIGSIZE,
    title: Optional[str] = None,
    save_path: Optional[Union[str, Path]] = None,
):
    """
    Plot one timeline in two panels.

    - Top: stacked spend per category against available funds (A + B);
      infeasible years are marked with a red cross.
    - Bottom: accrual out (A') and allocated-unspent out (X'); clawback
      years are shaded.

    Parameters
    ----------
    timeline : Timeline
        Simulation output.
    figsize : tuple, default (12, 7)
    title : str, optional
        Figure title. Defaults to the version and cohort counts.
    save_path : str or Path, optional
        Save the figure when given.

    Returns
    -------
    (matplotlib.figure.Figure, numpy.ndarray of Axes)
    """
    import matplotlib.pyplot as plt
    from matplotlib.ticker import FuncFormatter

    df = timeline.to_frame()
    years = np.asarray(df.index, dtype=int)

    fig, axes = plt.subplots(2, 1, figsize=figsize, sharex=True)

    # Panel 1: spend vs available
    bottom = np.zeros(len(years))
    for name, color in SPEND_COLORS.items():
        values = df[f"spend_{name}"].to_numpy(dtype=float)
        if not np.any(values):
            continue
        axes[0].bar(years, values, bottom=bottom.copy(), color=color, label=name.replace("_", " "))
        bottom += values
    axes[0].plot(years, df["available"], color="black", linewidth=2.0, marker="o",
                 label="available (A+B)")
    bad = ~df["feasible"].to_numpy(dtype=bool)
    if bad.any():
        axes[0].scatter(years[bad], df["total_spend"].to_numpy()[bad], color="red",
                        marker="x", s=120, zorder=5, label="infeasible")
    axes[0].set_ylabel("Millions", fontsize=11)
    axes[0].set_title("Spend vs Available", fontsize=12, fontweight='bold')
    axes[0].legend(loc='upper left', fontsize=9, ncol=2)
    axes[0].grid(True, alpha=0.3, axis='y')
    axes[0].yaxis.set_major_formatter(FuncFormatter(millions_formatter))

    # Panel 2: balances carried out
    axes[1].plot(years, df["accrual_out"], marker="o", linewidth=2.0, label="A' (accrued out)")
    axes[1].plot(years, df["allocated_out"], marker="s", linewidth=2.0,
                 label="X' (allocated unspent out)")
    axes[1].axhline(0.0, color="black", linewidth=1.0)
    for year in timeline.clawback_years:
        axes[1].axvspan(year - 0.5, year + 0.5, color="gold", alpha=0.3)
    axes[1].set_xlabel("Year", fontsize=11)
    axes[1].set_ylabel("Millions", fontsize=11)
    axes[1].set_title("Balances Carried Forward", fontsize=12, fontweight='bold')
    axes[1].legend(loc='best', fontsize=9)
    axes[1].grid(True, alpha=0.3)
    axes[1].set_xticks(years)
    axes[1].yaxis.set_major_formatter(FuncFormatter(millions_formatter))

    p = timeline.params
    fig.suptitle(
        title or f"Funding Model {timeline.model.version}: "
                 f"{p.accel_count} accelerators + {p.incub_count} incubators / yr",
        fontsize=14, fontweight='bold',
    )
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, bbox_inches='tight', dpi=150)

    return fig, axes


def plot_feasible_region(
    result: SearchResult,
    *,
    figsize=DEFAULT_FIGSIZE_WIDE,
    title: Optional[str] = None,
    save_path: Optional[Union[str, Path]] = None,
):
    """
    Scatter the searched grid: feasible pairs, infeasible pairs and the
    Pareto frontier.

    Returns
    -------
    (matplotlib.figure.Figure, matplotlib.axes.Axes)
    """
    import matplotlib.pyplot as plt

    a_lo, a_hi = result.accel_bounds
    b_lo, b_hi = result.incub_bounds
    grid_a, grid_b = np.meshgrid(np.arange(a_lo, a_hi + 1), np.arange(b_lo, b_hi + 1))
    grid_a, grid_b = grid_a.ravel(), grid_b.ravel()
    ok = np.array([result.is_feasible(int(a), int(b)) for a, b in zip(grid_a, grid_b)],
                  dtype=bool)

    fig, ax = plt.subplots(figsize=figsize)
    ax.scatter(grid_a[~ok], grid_b[~ok], color="#E0E0E0", s=20, label="infeasible")
    ax.scatter(grid_a[ok], grid_b[ok], color="#81C784", s=30, label="feasible")
    if result.pareto:
        pa, pb = zip(*result.pareto)
        ax.plot(pa, pb, color="#1B5E20", marker="o", linewidth=2.0, label="Pareto frontier")
        for a, b in result.pareto:
            ax.annotate(f"{b}", (a, b), textcoords="offset points", xytext=(0, 8),
                        ha="center", fontsize=9)

    ax.set_xlabel("Accelerators per year", fontsize=11)
    ax.set_ylabel("Incubators per year", fontsize=11)
    ax.set_title(title or f"Feasible Cohort Counts ({result.version})",
                 fontsize=12, fontweight='bold')
    ax.legend(loc='upper right', fontsize=10)
    ax.grid(True, alpha=0.3)
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, bbox_inches='tight', dpi=150)

    return fig, ax
