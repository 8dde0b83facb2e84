"""
Hover Metrics
=============

Throttle position, battery current and endurance while hovering.

Hover current uses momentum theory with the motor efficiency looked up
from the hover RPM fraction (√(hover thrust / max thrust)), then frame,
propeller-loading and stator corrections.
"""

import math

from ..config import DEFAULT_CONFIG, GRAVITY, INCH_TO_M, MOTOR_COUNT, ModelConfig
from ..debugger import debug_step
from ..models.report import HoverMetrics
from ..models.specs import BuildSpecs


def calculate_hover_throttle(
    total_mass_g: float,
    total_thrust_g: float,
    kv: float,
    diameter_in: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> float:
    """
    Throttle needed to hover (%).

    Throttle ≈ √(weight / max thrust) × 100, adjusted for KV, prop size and
    thrust-to-weight, clamped to 25-75 %. Returns 100 when the build cannot
    lift itself and 0 when there is no thrust estimate.
    """
    if total_thrust_g <= 0:
        return 0.0
    hover = config.hover
    hover_fraction = total_mass_g / total_thrust_g
    if hover_fraction > 1.0:
        return 100.0

    throttle = math.sqrt(hover_fraction) * 100.0
    throttle *= hover.throttle_kv_factor.lookup(kv)
    throttle *= hover.throttle_prop_factor.lookup(diameter_in)
    twr = total_thrust_g / total_mass_g if total_mass_g > 0 else 0.0
    throttle *= hover.throttle_twr_factor.lookup(twr)

    low, high = hover.throttle_clamp
    return round(min(high, max(low, throttle)), 1)


def calculate_hover_current(
    specs: BuildSpecs,
    total_mass_g: float,
    total_thrust_g: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> float:
    """
    Total battery current at hover (A).

    Parameters:
    ----------
    specs : BuildSpecs
        Typed build specification

    total_mass_g : float
        All-up mass (g)

    total_thrust_g : float
        Total maximum thrust (g)

    Returns:
    -------
    float
        Hover current (A); 0 for a massless or thrustless build
    """
    if total_mass_g <= 0 or total_thrust_g <= 0:
        return 0.0

    hover = config.hover
    voltage = specs.pack_voltage(config)
    diameter = specs.prop_diameter_in(config)
    disk_area = math.pi * (diameter * INCH_TO_M / 2.0) ** 2
    thrust_n = total_mass_g / 1000.0 * GRAVITY
    induced_velocity = math.sqrt(thrust_n / (2.0 * config.environment.air_density() * disk_area))
    per_motor_power = thrust_n * induced_velocity / config.propeller.figure_of_merit / MOTOR_COUNT

    rpm_fraction = math.sqrt(min(total_mass_g / total_thrust_g, 1.0))
    motor_efficiency = hover.rpm_efficiency.lookup(rpm_fraction)

    per_motor_current = per_motor_power / motor_efficiency / voltage
    current = per_motor_current * MOTOR_COUNT / config.system.wiring_efficiency

    correction = (
        hover.frame_correction.lookup(specs.wheelbase_mm(config))
        * hover.prop_loading_correction.lookup(total_mass_g / diameter ** 2)
        * hover.stator_correction.lookup(specs.stator_mm(config))
    )
    current *= correction

    debug_step(
        category="Hover",
        description="Hover current",
        formula="I = P_hover / η_motor / V × 4 / η_wiring × f_corr",
        variables={
            "P_hover_per_motor": per_motor_power,
            "rpm_fraction": rpm_fraction,
            "η_motor": motor_efficiency,
            "f_corr": correction,
        },
        result=current,
        result_name="hover_current",
        result_unit="A",
    )
    return current


def calculate_hover_time(
    specs: BuildSpecs,
    hover_current_a: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> float:
    """Hover-only endurance (minutes), capped by capacity tier."""
    if specs.battery is None or not specs.battery.capacity_mah or hover_current_a <= 0:
        return 0.0

    hover = config.hover
    capacity = specs.battery.capacity_mah
    c_rating = specs.c_rating(config)

    efficiency = hover.high_c_battery_efficiency if c_rating >= hover.high_c_threshold else hover.battery_efficiency
    if capacity >= hover.large_pack_threshold_mah:
        efficiency += hover.large_pack_bonus

    per_cell = hover_current_a / specs.cell_count(config)
    sag = hover.sag_factor.lookup(per_cell)

    usable = capacity * hover.usable_fraction * efficiency * sag
    minutes = usable / 1000.0 / hover_current_a * 60.0
    return round(min(minutes, hover.time_cap.lookup(capacity)), 1)


def estimate_hover(
    specs: BuildSpecs,
    total_mass_g: float,
    total_thrust_g: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> HoverMetrics:
    """
    Hover throttle, current and time for a build.

    Returns:
    -------
    HoverMetrics
        All zeros when there is no thrust estimate
    """
    throttle = calculate_hover_throttle(
        total_mass_g,
        total_thrust_g,
        specs.kv(config),
        specs.prop_diameter_in(config),
        config,
    )
    current = calculate_hover_current(specs, total_mass_g, total_thrust_g, config)
    return HoverMetrics(
        throttle_percent=throttle,
        current_draw_a=round(current, 1),
        hover_time_min=calculate_hover_time(specs, current, config),
    )
