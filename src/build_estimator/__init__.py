"""
Build Estimator Module
======================

Performance estimator for multirotor builds assembled from catalog parts.
Given a motor, frame, flight-control stack, camera, propeller, battery and
any extra weights, it estimates all-up mass, thrust-to-weight ratio, power
draw, flight time, top speed and hover behaviour, checks that the parts fit
together, and prices the build.

Features:
---------
- Free-text catalog field parsing ("2750KV", "5x4.3x3", "0.6kg", "4S")
- Blended physics / manufacturer thrust model
- Flight-mix power model with motor, propeller and ESC efficiencies
- Flight time with capacity derating and capacity-tier ceilings
- Top speed from pitch speed and drag balance
- Compatibility flags and price estimates
- Step-by-step calculation trace
- Battery-capacity sweeps, capacity solving and build comparisons

Usage:
------
    from src.build_estimator import estimate, build_selection

    selection = build_selection("5-inch freestyle")
    report = estimate(selection)

    print(report.total_mass_g, report.thrust_to_weight_ratio)
    print(report.estimated_flight_time_min)

    # Different conditions
    from src.build_estimator import config_from_overrides
    high_field = config_from_overrides({"environment": {"altitude_m": 2000}})
    report = estimate(selection, high_field)
"""

from .config import DEFAULT_CONFIG, ModelConfig, config_from_overrides
from .models import (
    AuxiliaryWeight,
    BatteryMetrics,
    BuildSpecs,
    CatalogComponent,
    CompatibilityReport,
    ComponentSelection,
    ComponentSlot,
    HoverMetrics,
    MotorMetrics,
    PerformanceReport,
    PriceBreakdown,
    ingest_selection,
)
from .parsing import parse_spec_value
from .estimator import BuildEstimate, detailed_breakdown, estimate, run_pipeline
from .data import build_selection, get_component, list_builds, list_components
from .debugger import CalculationDebugger, debug_step, get_debugger, set_debugger
from .debug_trace import trace_estimate
from .sweep import capacity_for_flight_time, compare_builds, sweep_battery_capacity

__all__ = [
    # Entry points
    "estimate",
    "detailed_breakdown",
    "run_pipeline",
    "BuildEstimate",
    # Models
    "AuxiliaryWeight",
    "CatalogComponent",
    "ComponentSelection",
    "ComponentSlot",
    "BuildSpecs",
    "ingest_selection",
    "PerformanceReport",
    "HoverMetrics",
    "MotorMetrics",
    "BatteryMetrics",
    "PriceBreakdown",
    "CompatibilityReport",
    # Config
    "ModelConfig",
    "DEFAULT_CONFIG",
    "config_from_overrides",
    # Parsing
    "parse_spec_value",
    # Sample catalog
    "build_selection",
    "get_component",
    "list_builds",
    "list_components",
    # Debugger
    "CalculationDebugger",
    "get_debugger",
    "set_debugger",
    "debug_step",
    "trace_estimate",
    # Analysis
    "sweep_battery_capacity",
    "capacity_for_flight_time",
    "compare_builds",
]
