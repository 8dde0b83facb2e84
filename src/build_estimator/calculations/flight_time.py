"""
Flight-Time Estimation
======================

Mixed-flight endurance from pack capacity and average current.

    t = C_eff / 1000 / I × 60 × f_style

C_eff is the nominal capacity multiplied by derating factors (usable
fraction, discharge rate, temperature, altitude, wind, age, chemistry,
C-rating quality, internal resistance, voltage sag) and a system
efficiency term (prop pitch ratio, disk loading, frame size, stator size).

The result is limited by a capacity-tier ceiling that is only ever reduced
for aggressive builds, and floored at 0.5 minutes.
"""

from dataclasses import dataclass, replace
from typing import Optional

from ..config import DEFAULT_CONFIG, ModelConfig
from ..debugger import debug_step
from ..models.specs import BatterySpec, BuildSpecs
from .power import calculate_disk_loading


@dataclass(frozen=True)
class FlightTimeEstimate:
    """
    Attributes:
    ----------
    flight_time_min : float
        Final estimate (minutes); 0 without a battery capacity

    uncapped_min : float
        Estimate before the ceiling is applied

    ceiling_min : float
        Ceiling for this capacity tier and build style

    effective_capacity_mah : float
        Capacity after derating

    discharge_c_rate : float
        Average current / capacity
    """
    flight_time_min: float = 0.0
    uncapped_min: float = 0.0
    ceiling_min: float = 0.0
    effective_capacity_mah: float = 0.0
    discharge_c_rate: float = 0.0


def calculate_voltage_sag_factor(
    current_a: float,
    cell_count: int,
    c_rating: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> float:
    """
    Capacity lost to voltage sag.

    Banded on current per cell, then an IR term:
        R_cell = 0.01 + 0.02 / C
        ΔV = I_cell × R_cell
        f = max(0.9, 1 - ΔV / 3.7 × 0.1)
    """
    ft = config.flight_time
    per_cell = current_a / cell_count if cell_count > 0 else current_a
    factor = ft.sag_per_cell_factor.lookup(per_cell)

    resistance = ft.base_cell_resistance + (ft.resistance_per_inverse_c / c_rating if c_rating > 0 else 0.0)
    drop = per_cell * resistance
    nominal = config.battery.nominal_cell_voltage
    factor *= max(ft.min_additional_sag, 1.0 - drop / nominal * ft.sag_scale)
    return factor


def calculate_system_efficiency(
    specs: BuildSpecs,
    total_mass_g: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> float:
    """System efficiency term: pitch ratio × disk loading × frame × stator."""
    ft = config.flight_time
    diameter = specs.prop_diameter_in(config)
    pitch_ratio = specs.prop_pitch_in(config) / diameter if diameter > 0 else 0.0
    return (
        ft.pitch_ratio_factor.lookup(pitch_ratio)
        * ft.disk_loading_factor.lookup(calculate_disk_loading(total_mass_g, diameter))
        * ft.frame_factor.lookup(specs.wheelbase_mm(config))
        * ft.stator_factor.lookup(specs.stator_mm(config))
    )


def calculate_flight_time_ceiling(
    capacity_mah: float,
    kv: float,
    wheelbase_mm: float,
    power_to_weight: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> float:
    """
    Upper bound on flight time (minutes).

    Tier by capacity, reduced for racing/freestyle builds and very high
    power-to-weight. Never above the tier value.
    """
    ft = config.flight_time
    tier = ft.ceiling.lookup(capacity_mah)
    reduction = (
        ft.ceiling_style_factor.lookup(kv, wheelbase_mm)
        * ft.ceiling_power_to_weight_factor.lookup(power_to_weight)
    )
    return tier * min(1.0, reduction)


def estimate_flight_time(
    specs: BuildSpecs,
    total_mass_g: float,
    average_current_a: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> FlightTimeEstimate:
    """
    Estimate mixed-flight endurance.

    Parameters:
    ----------
    specs : BuildSpecs
        Typed build specification

    total_mass_g : float
        All-up mass (g)

    average_current_a : float
        Average battery current from the power estimator (A); values <= 0
        fall back to the configured current

    config : ModelConfig
        Model configuration

    Returns:
    -------
    FlightTimeEstimate
        Zero when there is no battery or no capacity
    """
    if specs.battery is None or not specs.battery.capacity_mah:
        return FlightTimeEstimate()

    ft = config.flight_time
    env = config.environment
    battery = config.battery

    capacity = specs.battery.capacity_mah
    current = average_current_a if average_current_a > 0 else config.power.fallback_current_a
    cells = specs.cell_count(config)
    c_rating = specs.c_rating(config)
    voltage = specs.pack_voltage(config)
    kv = specs.kv(config)
    wheelbase = specs.wheelbase_mm(config)

    c_rate = current / (capacity / 1000.0)
    derating = (
        battery.usable_fraction
        * ft.discharge_rate_factor.lookup(c_rate)
        * battery.temperature.factor(env.temperature_c)
        * ft.altitude_factor.lookup(env.altitude_m)
        * ft.wind_factor.lookup(env.wind_speed_kmh)
        * battery.age_factor
        * ft.chemistry_factor.lookup(capacity)
        * ft.c_rating_factor.lookup(c_rating)
        * ft.internal_resistance_factor.lookup(c_rating)
        * calculate_voltage_sag_factor(current, cells, c_rating, config)
    )
    system_efficiency = calculate_system_efficiency(specs, total_mass_g, config)
    effective_capacity = capacity * derating * system_efficiency

    mass_kg = total_mass_g / 1000.0
    power_to_weight = current * voltage / mass_kg if mass_kg > 0 else 0.0
    style = ft.style_factor.lookup(kv, wheelbase) * ft.power_to_weight_factor.lookup(power_to_weight)

    base_minutes = effective_capacity / 1000.0 / current * 60.0
    uncapped = base_minutes * style

    ceiling = calculate_flight_time_ceiling(capacity, kv, wheelbase, power_to_weight, config)
    flight_time = max(ft.min_flight_time_min, round(min(uncapped, ceiling), 1))

    debug_step(
        category="Flight Time",
        description="Mixed-flight endurance",
        formula="t = min(C_eff/1000/I × 60 × f_style, ceiling)",
        variables={
            "C": capacity,
            "C_eff": effective_capacity,
            "I": current,
            "C_rate": c_rate,
            "f_system": system_efficiency,
            "f_style": style,
            "ceiling": ceiling,
        },
        result=flight_time,
        result_name="flight_time",
        result_unit="min",
    )

    return FlightTimeEstimate(
        flight_time_min=flight_time,
        uncapped_min=uncapped,
        ceiling_min=ceiling,
        effective_capacity_mah=effective_capacity,
        discharge_c_rate=c_rate,
    )


def flight_time_with_capacity(
    specs: BuildSpecs,
    capacity_mah: float,
    total_mass_g: float,
    average_current_a: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> float:
    """
    Flight time the same build would reach with a different pack capacity
    (same cells, C-rating and mass).
    """
    if capacity_mah <= 0:
        return 0.0
    battery = specs.battery
    if battery is None:
        battery = BatterySpec(
            capacity_mah=capacity_mah,
            cell_count=None,
            c_rating=None,
            mass_g=0.0,
        )
    swapped = replace(specs, battery=replace(battery, capacity_mah=capacity_mah))
    return estimate_flight_time(swapped, total_mass_g, average_current_a, config).flight_time_min


def recommend_battery_capacity(
    target_minutes: float,
    average_current_a: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> Optional[int]:
    """
    Smallest common pack capacity that covers a target flight time.

    Uses the usable fraction as the only derating; returns None when even
    the largest common capacity is too small.

    Parameters:
    ----------
    target_minutes : float
        Desired flight time (minutes)

    average_current_a : float
        Average current draw (A)

    Returns:
    -------
    int or None
        Capacity (mAh)
    """
    if target_minutes <= 0 or average_current_a <= 0:
        return None
    required = target_minutes / 60.0 * average_current_a * 1000.0 / config.battery.usable_fraction
    for capacity in config.flight_time.common_capacities:
        if capacity >= required:
            return capacity
    return None


def battery_utilisation(
    average_current_a: float,
    capacity_mah: float,
    c_rating: float
) -> float:
    """Average current as a share of the pack's rated continuous discharge (%)."""
    max_discharge = capacity_mah * c_rating / 1000.0
    if max_discharge <= 0:
        return 0.0
    return average_current_a / max_discharge * 100.0
