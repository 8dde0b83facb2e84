"""
Build Sweeps and Comparisons
============================

Tabular analysis on top of the estimator:

- sweep_battery_capacity: one build, a range of pack capacities (battery
  mass scaled with capacity)
- capacity_for_flight_time: smallest pack that reaches a target flight time
- compare_builds: several named builds estimated in parallel

The sweep and comparison return pandas DataFrames with one row per estimate.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from scipy import optimize

from .config import DEFAULT_CONFIG, ModelConfig
from .estimator import estimate
from .models.component import CatalogComponent, ComponentSelection, ComponentSlot
from .models.report import PerformanceReport
from .parsing import parse_mass_g, parse_spec_value

# Default sweep range (mAh)
DEFAULT_CAPACITY_MIN = 450.0
DEFAULT_CAPACITY_MAX = 3000.0
DEFAULT_CAPACITY_POINTS = 11

# Root-finding tolerance for capacity_for_flight_time (mAh)
CAPACITY_TOLERANCE_MAH = 1.0

REPORT_COLUMNS = [
    "total_mass_g",
    "thrust_to_weight",
    "max_thrust_g",
    "average_current_a",
    "power_draw_w",
    "flight_time_min",
    "hover_time_min",
    "hover_throttle_percent",
    "top_speed_kmh",
    "total_price",
    "all_compatible",
]


def _report_row(report: PerformanceReport) -> Dict:
    return {
        "total_mass_g": report.total_mass_g,
        "thrust_to_weight": report.thrust_to_weight_ratio,
        "max_thrust_g": report.max_thrust_g,
        "average_current_a": report.average_current_a,
        "power_draw_w": report.power_draw_w,
        "flight_time_min": report.estimated_flight_time_min,
        "hover_time_min": report.hovering.hover_time_min,
        "hover_throttle_percent": report.hovering.throttle_percent,
        "top_speed_kmh": report.estimated_top_speed_kmh,
        "total_price": report.total_price,
        "all_compatible": report.compatibility.all_compatible,
    }


def _battery_mass_per_mah(selection: ComponentSelection) -> float:
    battery = selection.battery
    if battery is None:
        raise ValueError("Build has no battery to sweep")
    base_capacity = parse_spec_value(battery.get("capacity"), 0.0)
    if base_capacity <= 0:
        raise ValueError(f"Battery '{battery.name}' has no capacity")
    return parse_mass_g(battery.get("weight")) / base_capacity


def _with_capacity(selection: ComponentSelection, capacity: float, mass_per_mah: float) -> ComponentSelection:
    """Copy of the build with the battery resized (price dropped, mass scaled)."""
    battery = selection.battery
    fields = dict(battery.fields)
    fields["capacity"] = f"{capacity:.0f}mAh"
    fields["weight"] = f"{mass_per_mah * capacity:.1f}g"
    fields.pop("price", None)
    variant = CatalogComponent(name=f"{battery.name} ({capacity:.0f}mAh)", fields=fields)
    return selection.with_component(ComponentSlot.BATTERY, variant)


def default_capacities() -> np.ndarray:
    """Evenly spaced capacities from 450 to 3000 mAh."""
    return np.linspace(DEFAULT_CAPACITY_MIN, DEFAULT_CAPACITY_MAX, DEFAULT_CAPACITY_POINTS)


def sweep_battery_capacity(
    selection: ComponentSelection,
    capacities: Optional[Sequence[float]] = None,
    config: Optional[ModelConfig] = None
) -> pd.DataFrame:
    """
    Estimate a build across a range of battery capacities.

    The selected battery's mass per mAh is held constant, so larger packs
    are proportionally heavier.

    Parameters:
    ----------
    selection : ComponentSelection
        Build with a battery that declares capacity and weight

    capacities : sequence of float, optional
        Capacities to test (mAh). Defaults to default_capacities().

    config : ModelConfig, optional
        Model configuration

    Returns:
    -------
    pd.DataFrame
        One row per capacity: capacity_mah, battery_mass_g and the report
        columns

    Raises:
    ------
    ValueError
        If no capacities are given, or the build has no battery with a
        usable capacity
    """
    if config is None:
        config = DEFAULT_CONFIG
    if capacities is None:
        capacities = default_capacities()

    capacities = [float(c) for c in capacities if c > 0]
    if not capacities:
        raise ValueError("No battery capacities to sweep")

    mass_per_mah = _battery_mass_per_mah(selection)

    rows = []
    for capacity in capacities:
        battery_mass = mass_per_mah * capacity
        report = estimate(_with_capacity(selection, capacity, mass_per_mah), config)
        row = {"capacity_mah": capacity, "battery_mass_g": round(battery_mass, 1)}
        row.update(_report_row(report))
        rows.append(row)

    return pd.DataFrame(rows, columns=["capacity_mah", "battery_mass_g"] + REPORT_COLUMNS)


def capacity_for_flight_time(
    selection: ComponentSelection,
    target_minutes: float,
    config: Optional[ModelConfig] = None,
    min_capacity: float = DEFAULT_CAPACITY_MIN,
    max_capacity: float = DEFAULT_CAPACITY_MAX
) -> Optional[float]:
    """
    Battery capacity at which the build reaches a target flight time.

    Battery mass scales with capacity as in sweep_battery_capacity, so the
    extra weight of a larger pack is accounted for.

    Parameters:
    ----------
    selection : ComponentSelection
        Build with a battery that declares capacity and weight

    target_minutes : float
        Desired mixed-flight time (minutes)

    min_capacity, max_capacity : float
        Search bracket (mAh)

    Returns:
    -------
    float or None
        Capacity (mAh), ``min_capacity`` when the smallest pack already
        reaches the target, None when even ``max_capacity`` falls short

    Notes:
    -----
    - Uses Brent's method on flight_time(capacity) - target
    - Flight time is banded, so the result is accurate to the nearest band
      edge rather than to the tolerance
    """
    if config is None:
        config = DEFAULT_CONFIG
    if target_minutes <= 0:
        raise ValueError("Target flight time must be positive")

    mass_per_mah = _battery_mass_per_mah(selection)

    def flight_time_residual(capacity: float) -> float:
        report = estimate(_with_capacity(selection, capacity, mass_per_mah), config)
        return report.estimated_flight_time_min - target_minutes

    if flight_time_residual(min_capacity) >= 0:
        return min_capacity
    if flight_time_residual(max_capacity) < 0:
        return None

    result = optimize.root_scalar(
        flight_time_residual,
        bracket=(min_capacity, max_capacity),
        method="brentq",
        xtol=CAPACITY_TOLERANCE_MAH,
    )
    return round(result.root)


def compare_builds(
    builds: Dict[str, ComponentSelection],
    config: Optional[ModelConfig] = None,
    max_workers: int = 4
) -> pd.DataFrame:
    """
    Estimate several builds in parallel.

    Parameters:
    ----------
    builds : dict
        Build name -> selection

    config : ModelConfig, optional
        Model configuration shared by every build

    max_workers : int
        Thread pool size (capped at the number of builds)

    Returns:
    -------
    pd.DataFrame
        One row per build, sorted by build name, with ``valid`` and
        ``error_message`` columns for builds that failed

    Raises:
    ------
    ValueError
        If no builds are given
    """
    if not builds:
        raise ValueError("No builds to compare")
    if config is None:
        config = DEFAULT_CONFIG

    num_workers = max(1, min(max_workers, len(builds)))
    rows: List[Dict] = []

    with ThreadPoolExecutor(max_workers=num_workers) as executor:
        future_to_name = {
            executor.submit(estimate, selection, config): name
            for name, selection in builds.items()
        }

        for future in as_completed(future_to_name):
            name = future_to_name[future]
            try:
                report = future.result()
            except Exception as e:
                rows.append({"build": name, "valid": False, "error_message": str(e)})
                continue
            row = {"build": name, "valid": True, "error_message": ""}
            row.update(_report_row(report))
            rows.append(row)

    frame = pd.DataFrame(rows, columns=["build", "valid", "error_message"] + REPORT_COLUMNS)
    return frame.sort_values("build").reset_index(drop=True)


def best_build(comparison: pd.DataFrame, metric: str = "flight_time_min", highest: bool = True) -> str:
    """
    Name of the best valid build in a compare_builds table.

    Raises:
    ------
    ValueError
        If the table has no valid builds
    KeyError
        If ``metric`` is not a column
    """
    if metric not in comparison.columns:
        raise KeyError(f"Unknown metric '{metric}'. Available: {list(comparison.columns)}")
    valid = comparison[comparison["valid"]]
    if valid.empty:
        raise ValueError("No valid builds to rank")
    index = valid[metric].idxmax() if highest else valid[metric].idxmin()
    return str(valid.loc[index, "build"])
