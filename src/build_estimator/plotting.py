"""
Build Estimator Plotting Module
===============================

Visualization of build estimates:

- Flight time and all-up mass against battery capacity (from
  sweep_battery_capacity)
- Metric comparison across builds (from compare_builds)
- Mass distribution of a single build

Usage:
-----
    from src.build_estimator import sweep_battery_capacity
    from src.build_estimator.plotting import BuildPlotter

    plotter = BuildPlotter()
    fig = plotter.plot_capacity_sweep(sweep_battery_capacity(selection))
    plt.show()
"""

from typing import Optional, Tuple

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from .calculations.mass import MassBreakdown


class BuildPlotter:
    """
    Build estimate visualization class.

    Every method accepts an optional existing Axes and returns the Figure
    it drew on.
    """

    # -------------------------------------------------------------------------
    # Default Plot Styling
    # -------------------------------------------------------------------------

    DEFAULT_FIGURE_SIZE = (10, 6)
    DEFAULT_PIE_SIZE = (8, 8)

    DEFAULT_GRID = True
    DEFAULT_LEGEND_LOC = "best"
    DEFAULT_FLIGHT_TIME_COLOR = "tab:blue"
    DEFAULT_MASS_COLOR = "tab:orange"

    def plot_capacity_sweep(
        self,
        sweep: pd.DataFrame,
        figsize: Optional[Tuple[int, int]] = None,
        ax: Optional[Axes] = None
    ) -> Figure:
        """
        Plot flight time (left axis) and all-up mass (right axis) against
        battery capacity.

        Parameters:
        ----------
        sweep : pd.DataFrame
            Output of sweep_battery_capacity

        figsize : tuple, optional
            Figure size when a new figure is created

        ax : matplotlib.axes.Axes, optional
            Existing axes to plot on. If None, creates new figure.

        Returns:
        -------
        matplotlib.figure.Figure
            The matplotlib figure object.

        Raises:
        ------
        ValueError
            If the sweep table is empty
        """
        if sweep.empty:
            raise ValueError("Capacity sweep is empty")

        if ax is None:
            fig, ax = plt.subplots(figsize=figsize or self.DEFAULT_FIGURE_SIZE)
        else:
            fig = ax.get_figure()

        ax.plot(
            sweep["capacity_mah"],
            sweep["flight_time_min"],
            marker="o",
            color=self.DEFAULT_FLIGHT_TIME_COLOR,
            label="Flight time",
        )
        ax.set_xlabel("Battery capacity [mAh]")
        ax.set_ylabel("Flight time [min]", color=self.DEFAULT_FLIGHT_TIME_COLOR)
        ax.grid(self.DEFAULT_GRID)

        mass_ax = ax.twinx()
        mass_ax.plot(
            sweep["capacity_mah"],
            sweep["total_mass_g"],
            linestyle="--",
            color=self.DEFAULT_MASS_COLOR,
            label="All-up mass",
        )
        mass_ax.set_ylabel("All-up mass [g]", color=self.DEFAULT_MASS_COLOR)

        lines = ax.get_lines() + mass_ax.get_lines()
        ax.legend(lines, [line.get_label() for line in lines], loc=self.DEFAULT_LEGEND_LOC)
        ax.set_title("Flight Time vs Battery Capacity")
        return fig

    def plot_build_comparison(
        self,
        comparison: pd.DataFrame,
        metric: str = "flight_time_min",
        figsize: Optional[Tuple[int, int]] = None,
        ax: Optional[Axes] = None
    ) -> Figure:
        """
        Bar chart of one metric across builds (output of compare_builds).

        Raises:
        ------
        KeyError
            If ``metric`` is not a column of the table
        ValueError
            If the table has no valid builds
        """
        if metric not in comparison.columns:
            raise KeyError(f"Unknown metric '{metric}'. Available: {list(comparison.columns)}")
        valid = comparison[comparison["valid"]]
        if valid.empty:
            raise ValueError("No valid builds to plot")

        if ax is None:
            fig, ax = plt.subplots(figsize=figsize or self.DEFAULT_FIGURE_SIZE)
        else:
            fig = ax.get_figure()

        ax.bar(valid["build"], valid[metric], color=self.DEFAULT_FLIGHT_TIME_COLOR)
        ax.set_xlabel("Build")
        ax.set_ylabel(metric)
        ax.set_title(f"Build Comparison - {metric}")
        ax.grid(self.DEFAULT_GRID, axis="y")
        ax.tick_params(axis="x", rotation=30)
        return fig

    def plot_mass_distribution(
        self,
        breakdown: MassBreakdown,
        figsize: Optional[Tuple[int, int]] = None,
        ax: Optional[Axes] = None
    ) -> Figure:
        """Pie chart of mass per category; empty categories are omitted."""
        if breakdown.total <= 0:
            raise ValueError("Build has no mass to plot")

        parts = {
            "Motors": breakdown.motors,
            "Frame": breakdown.frame,
            "Stack": breakdown.stack,
            "Camera": breakdown.camera,
            "Propellers": breakdown.propellers,
            "Battery": breakdown.battery,
            "Auxiliary": breakdown.auxiliary,
        }
        parts = {name: value for name, value in parts.items() if value > 0}

        if ax is None:
            fig, ax = plt.subplots(figsize=figsize or self.DEFAULT_PIE_SIZE)
        else:
            fig = ax.get_figure()

        ax.pie(list(parts.values()), labels=list(parts.keys()), autopct="%1.1f%%", startangle=90)
        ax.set_title(f"Mass Distribution ({breakdown.total:.0f} g)")
        ax.axis("equal")
        return fig
