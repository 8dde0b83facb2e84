"""
Performance Estimator
=====================

Entry points that run the full estimation pipeline for one build:

    selection → ingestion → mass → thrust → power → flight time
              → top speed → hover → compatibility → pricing → report

``estimate`` returns the immutable PerformanceReport. ``detailed_breakdown``
returns every intermediate estimate together with the advisories, for
analysis and display.
"""

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from .calculations.advisories import (
    esc_utilisation,
    flight_time_advisories,
    power_advisories,
    thrust_advisories,
    validate_weight,
)
from .calculations.compatibility import check_compatibility
from .calculations.flight_time import FlightTimeEstimate, battery_utilisation, estimate_flight_time
from .calculations.hover import estimate_hover
from .calculations.mass import MassBreakdown, aggregate_mass
from .calculations.power import PowerEstimate, estimate_power
from .calculations.pricing import estimate_prices
from .calculations.thrust import ThrustEstimate, estimate_thrust
from .calculations.top_speed import estimate_top_speed
from .config import DEFAULT_CONFIG, ModelConfig
from .debugger import debug_section
from .models.component import ComponentSelection
from .models.report import (
    BatteryMetrics,
    CompatibilityReport,
    HoverMetrics,
    MotorMetrics,
    PerformanceReport,
    PriceBreakdown,
)
from .models.specs import BuildSpecs, ingest_selection


@dataclass(frozen=True)
class BuildEstimate:
    """Every stage result for one build."""
    specs: BuildSpecs
    mass: MassBreakdown
    thrust: ThrustEstimate
    power: PowerEstimate
    flight_time: FlightTimeEstimate
    top_speed_kmh: int
    hover: HoverMetrics
    compatibility: CompatibilityReport
    prices: PriceBreakdown


def run_pipeline(selection: ComponentSelection, config: Optional[ModelConfig] = None) -> BuildEstimate:
    """
    Run every estimation stage in order.

    Parameters:
    ----------
    selection : ComponentSelection
        Candidate build; any slot may be empty

    config : ModelConfig, optional
        Model configuration (DEFAULT_CONFIG when omitted)

    Returns:
    -------
    BuildEstimate
        Stage results
    """
    if config is None:
        config = DEFAULT_CONFIG

    specs = ingest_selection(selection)

    debug_section("Mass")
    mass = aggregate_mass(specs, config)
    total_mass = mass.total

    debug_section("Thrust")
    thrust = estimate_thrust(specs, total_mass, config)

    debug_section("Power")
    power = estimate_power(specs, total_mass, thrust.total_g, config)

    debug_section("Flight Time")
    flight_time = estimate_flight_time(specs, total_mass, power.average_current_a, config)

    debug_section("Top Speed")
    top_speed = estimate_top_speed(specs, thrust.total_g, thrust.thrust_to_weight, config)

    debug_section("Hover")
    hover = estimate_hover(specs, total_mass, thrust.total_g, config)

    debug_section("Compatibility & Pricing")
    compatibility = check_compatibility(selection)
    prices = estimate_prices(specs, config)

    return BuildEstimate(
        specs=specs,
        mass=mass,
        thrust=thrust,
        power=power,
        flight_time=flight_time,
        top_speed_kmh=top_speed,
        hover=hover,
        compatibility=compatibility,
        prices=prices,
    )


def _motor_metrics(selection: ComponentSelection, specs: BuildSpecs, config: ModelConfig) -> MotorMetrics:
    kv = specs.motor.kv if specs.motor is not None and specs.motor.kv else 0.0
    voltage = specs.pack_voltage(config)
    prop_size = "N/A"
    if selection.propeller is not None:
        prop_size = str(selection.propeller.get("size", "N/A"))
    return MotorMetrics(
        kv=kv,
        voltage=round(voltage, 1),
        estimated_rpm=int(round(kv * voltage)),
        prop_size=prop_size,
    )


def _battery_metrics(specs: BuildSpecs, config: ModelConfig) -> BatteryMetrics:
    if specs.battery is None:
        return BatteryMetrics()
    capacity = specs.battery.capacity_mah or 0.0
    cells = specs.cell_count(config)
    return BatteryMetrics(
        voltage=round(specs.pack_voltage(config), 1),
        capacity_mah=capacity,
        cells=cells,
        max_discharge_a=round(capacity * specs.c_rating(config) / 1000.0, 1),
    )


def collect_warnings(result: BuildEstimate, config: ModelConfig = DEFAULT_CONFIG) -> List[str]:
    """Problems with a build that a user should see next to the numbers."""
    warnings = []
    compat = result.compatibility
    if not compat.prop_motor_match:
        warnings.append("Propeller is not recommended for this motor size")
    if not compat.voltage_match:
        warnings.append("Battery cell count is not supported by the motor or stack")
    if not compat.mounting_match:
        warnings.append("Stack mounting pattern does not fit the frame")
    if not compat.frame_prop_match:
        warnings.append("Propeller size does not fit the frame")

    if result.power.is_fallback:
        warnings.append(
            f"Power estimate uses the default {config.power.fallback_current_a:.0f}A current "
            "(motor or ESC rating unknown)"
        )
    if result.thrust.total_g > 0 and result.thrust.total_g < result.mass.total:
        warnings.append("Maximum thrust is below the build weight")

    frame = result.specs.frame
    is_valid, _, notes = validate_weight(result.mass.total, frame.wheelbase_mm if frame else None)
    if not is_valid:
        warnings.extend(notes)
    return warnings


def estimate(
    selection: ComponentSelection,
    config: Optional[ModelConfig] = None,
    verbose: bool = False
) -> PerformanceReport:
    """
    Estimate the performance of a build.

    Never raises for missing components or malformed catalog text: absent
    parts contribute nothing, unparsable values fall back to documented
    defaults.

    Parameters:
    ----------
    selection : ComponentSelection
        Candidate build

    config : ModelConfig, optional
        Model configuration (DEFAULT_CONFIG when omitted)

    verbose : bool
        Print warnings as they are found

    Returns:
    -------
    PerformanceReport
        Immutable report; identical inputs give identical reports
    """
    if config is None:
        config = DEFAULT_CONFIG

    result = run_pipeline(selection, config)
    warnings = collect_warnings(result, config)
    if verbose:
        for warning in warnings:
            print(f"Warning: {warning}")

    return PerformanceReport(
        total_mass_g=round(result.mass.total, 1),
        thrust_to_weight_ratio=result.thrust.thrust_to_weight,
        max_thrust_kg=result.thrust.total_kg,
        max_thrust_g=result.thrust.total_g,
        estimated_top_speed_kmh=result.top_speed_kmh,
        estimated_flight_time_min=result.flight_time.flight_time_min,
        average_current_a=result.power.average_current_a,
        power_draw_w=result.power.power_w,
        hovering=result.hover,
        motors=_motor_metrics(selection, result.specs, config),
        battery=_battery_metrics(result.specs, config),
        total_price=result.prices.total,
        price_breakdown=result.prices,
        compatibility=result.compatibility,
        warnings=tuple(warnings),
    )


def detailed_breakdown(selection: ComponentSelection, config: Optional[ModelConfig] = None) -> Dict:
    """
    Every intermediate estimate for a build, plus advisories.

    Returns:
    -------
    dict
        Keys: mass, mass_distribution, thrust, power, flight_time,
        top_speed_kmh, hover, compatibility, prices, utilisation,
        weight_class, advisories, warnings
    """
    if config is None:
        config = DEFAULT_CONFIG

    result = run_pipeline(selection, config)
    specs = result.specs

    # Advisories see the unclamped ratio so underpowered builds are reported
    raw_ratio = result.thrust.total_g / result.mass.total if result.mass.total > 0 else 0.0
    is_optimal, thrust_notes = thrust_advisories(raw_ratio, config)
    is_valid_weight, category, weight_notes = validate_weight(
        result.mass.total, specs.frame.wheelbase_mm if specs.frame else None
    )
    capacity = specs.battery.capacity_mah if specs.battery else None
    c_rating = specs.battery.c_rating if specs.battery else None

    utilisation = {
        "esc_percent": round(esc_utilisation(result.power.average_current_a, result.power.esc_rating_a), 1),
        "battery_percent": round(
            battery_utilisation(result.power.average_current_a, capacity or 0.0, specs.c_rating(config)), 1
        ),
    }

    return {
        "mass": asdict(result.mass),
        "total_mass_g": round(result.mass.total, 1),
        "mass_distribution": result.mass.distribution(),
        "thrust": asdict(result.thrust),
        "power": asdict(result.power),
        "flight_time": asdict(result.flight_time),
        "top_speed_kmh": result.top_speed_kmh,
        "hover": asdict(result.hover),
        "compatibility": asdict(result.compatibility),
        "prices": asdict(result.prices),
        "total_price": result.prices.total,
        "utilisation": utilisation,
        "weight_class": {"category": category, "is_valid": is_valid_weight},
        "advisories": {
            "thrust_is_optimal": is_optimal,
            "thrust": thrust_notes,
            "power": power_advisories(result.power.average_current_a, result.power.esc_rating_a),
            "flight_time": flight_time_advisories(
                result.flight_time.flight_time_min,
                capacity,
                c_rating,
                specs.motor.kv if specs.motor else None,
                specs.frame.wheelbase_mm if specs.frame else None,
            ),
            "weight": weight_notes,
        },
        "warnings": collect_warnings(result, config),
    }
