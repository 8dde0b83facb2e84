#!/usr/bin/env python3
"""
Build Performance Estimator Launcher
====================================

Prints the performance report for one of the sample builds.

Usage:
------
    python run_build_estimator.py
    python run_build_estimator.py "7-inch long range"
    python run_build_estimator.py "3-inch cinewhoop" --trace

Requirements:
-------------
- Python 3.9+
- numpy
- pandas
- matplotlib
- scipy
"""

import sys
from pathlib import Path

# Ensure the src directory is in the path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from src.build_estimator import (
    build_selection,
    detailed_breakdown,
    estimate,
    list_builds,
    trace_estimate,
)

DEFAULT_BUILD = "5-inch freestyle"


def print_report(name: str, show_trace: bool = False):
    selection = build_selection(name)
    report = estimate(selection)
    breakdown = detailed_breakdown(selection)

    print(f"Build: {name}")
    for slot, component in selection.filled_slots():
        print(f"  {slot.value:<10} {component.name}")
    for weight in selection.auxiliary_weights:
        print(f"  {'extra':<10} {weight.name} ({weight.weight})")
    print()

    print(f"All-up mass:        {report.total_mass_g:.1f} g")
    print(f"Max thrust:         {report.max_thrust_g} g ({report.max_thrust_kg:.2f} kg)")
    print(f"Thrust-to-weight:   {report.thrust_to_weight_ratio:.2f}")
    print(f"Average current:    {report.average_current_a:.1f} A ({report.power_draw_w:.0f} W)")
    print(f"Flight time:        {report.estimated_flight_time_min:.1f} min")
    print(f"Top speed:          {report.estimated_top_speed_kmh} km/h")
    print(
        f"Hover:              {report.hovering.throttle_percent:.0f}% throttle, "
        f"{report.hovering.current_draw_a:.1f} A, {report.hovering.hover_time_min:.1f} min"
    )
    print(f"Motor:              {report.motors.kv:.0f}KV @ {report.motors.voltage:.1f}V "
          f"= {report.motors.estimated_rpm} RPM, prop {report.motors.prop_size}")
    print(f"Estimated price:    {report.total_price:.2f}")
    print(f"All compatible:     {report.compatibility.all_compatible}")

    if report.warnings:
        print()
        print("Warnings:")
        for warning in report.warnings:
            print(f"  - {warning}")

    print()
    print("Notes:")
    for group in ("thrust", "power", "flight_time", "weight"):
        for note in breakdown["advisories"][group]:
            print(f"  - {note}")

    if show_trace:
        print()
        print(trace_estimate(selection, build=name).get_report())


if __name__ == "__main__":
    args = [arg for arg in sys.argv[1:] if arg != "--trace"]
    build_name = args[0] if args else DEFAULT_BUILD

    print("=" * 60)
    print("Multirotor Build Performance Estimator")
    print("=" * 60)
    print()

    if build_name not in list_builds():
        print(f"Unknown build '{build_name}'. Available builds:")
        for name in list_builds():
            print(f"  {name}")
        sys.exit(1)

    print_report(build_name, show_trace="--trace" in sys.argv)
