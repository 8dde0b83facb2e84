"""
Electrical Power Estimation
===========================

Average battery current over a representative flight mix.

Model:
------
1. Hover power from momentum theory (thrust = weight):
       v_i = √(T / (2ρA)),  P_ideal = T × v_i,  P_hover = P_ideal / FoM / 4
2. Phase powers: hover × {1.0, 1.4, 1.8, 2.2^1.5}, weighted by time share.
3. Electrical chain: mechanical power / η_prop / η_motor / V, then ESC and
   wiring losses.
4. Empirical multipliers: flying style (KV × frame size), power-to-weight,
   altitude and temperature.
5. Per-motor current capped at 85 % of the ESC rating, ×4, then frame
   aerodynamics and thrust-to-weight factors, then clamped to a realistic
   band.
"""

import math
from dataclasses import dataclass

from ..config import DEFAULT_CONFIG, GRAVITY, INCH_TO_M, MOTOR_COUNT, ModelConfig
from ..debugger import debug_step
from ..models.specs import BuildSpecs


@dataclass(frozen=True)
class PowerEstimate:
    """
    Attributes:
    ----------
    average_current_a : float
        Mixed-flight average battery current (A)

    hover_current_a, sport_current_a : float
        Battery current in the hover and sport phases (A)

    power_w : float
        Average electrical power (W)

    efficiency : float
        Overall powertrain efficiency (0-1)

    esc_rating_a : float
        ESC continuous rating used for caps (A), 0 when unknown

    is_fallback : bool
        True when motor or ESC data was missing and the fallback current was used
    """
    average_current_a: float
    hover_current_a: float
    sport_current_a: float
    power_w: float
    efficiency: float
    motor_efficiency: float = 0.0
    prop_efficiency: float = 0.0
    esc_efficiency: float = 0.0
    esc_rating_a: float = 0.0
    is_fallback: bool = False


def calculate_hover_power(
    total_mass_g: float,
    diameter_in: float,
    air_density: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> float:
    """
    Mechanical hover power per motor (W).

    Parameters:
    ----------
    total_mass_g : float
        All-up mass (g)

    diameter_in : float
        Propeller diameter (inches)

    air_density : float
        Air density (kg/m³)

    Returns:
    -------
    float
        P_ideal / FoM / 4 (W)
    """
    if total_mass_g <= 0 or diameter_in <= 0 or air_density <= 0:
        return 0.0
    disk_area = math.pi * (diameter_in * INCH_TO_M / 2.0) ** 2
    thrust_n = total_mass_g / 1000.0 * GRAVITY
    induced_velocity = math.sqrt(thrust_n / (2.0 * air_density * disk_area))
    ideal_power = thrust_n * induced_velocity
    return ideal_power / config.propeller.figure_of_merit / MOTOR_COUNT


def calculate_motor_efficiency(
    stator_mm: float,
    kv: float,
    voltage: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> float:
    """Electrical-to-mechanical motor efficiency, capped at 0.95."""
    motor = config.motor
    efficiency = motor.stator_efficiency.lookup(stator_mm)
    optimal_kv = motor.power_optimal_kv_base + (voltage - motor.reference_voltage) * motor.power_optimal_kv_slope
    deviation = abs(kv - optimal_kv) / optimal_kv if optimal_kv > 0 else 0.0
    efficiency *= motor.power_kv_deviation.lookup(deviation)
    return min(motor.max_efficiency, efficiency)


def calculate_disk_loading(total_mass_g: float, diameter_in: float) -> float:
    """Hover thrust per unit swept area over all rotors (N/m²)."""
    disk_area = math.pi * (diameter_in * INCH_TO_M / 2.0) ** 2 * MOTOR_COUNT
    if disk_area <= 0:
        return 0.0
    return total_mass_g / 1000.0 * GRAVITY / disk_area


def calculate_drive_prop_efficiency(
    total_mass_g: float,
    diameter_in: float,
    pitch_in: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> float:
    """Propeller efficiency in cruise: disk-loading band × pitch/diameter design factor."""
    power = config.power
    efficiency = power.disk_loading_efficiency.lookup(calculate_disk_loading(total_mass_g, diameter_in))
    pitch_ratio = pitch_in / diameter_in if diameter_in > 0 else 0.0
    return efficiency * power.prop_design_factor.lookup(pitch_ratio)


def calculate_environment_factor(config: ModelConfig = DEFAULT_CONFIG) -> float:
    env = config.environment
    power = config.power
    return (
        power.altitude_factor.lookup(env.altitude_m)
        * power.hot_factor.lookup(env.temperature_c)
        * power.cold_factor.lookup(env.temperature_c)
    )


def _fallback_estimate(voltage: float, config: ModelConfig) -> PowerEstimate:
    current = config.power.fallback_current_a
    return PowerEstimate(
        average_current_a=current,
        hover_current_a=current,
        sport_current_a=current,
        power_w=round(current * voltage, 1),
        efficiency=0.0,
        is_fallback=True,
    )


def estimate_power(
    specs: BuildSpecs,
    total_mass_g: float,
    total_thrust_g: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> PowerEstimate:
    """
    Estimate battery current and electrical power.

    Parameters:
    ----------
    specs : BuildSpecs
        Typed build specification

    total_mass_g : float
        All-up mass (g)

    total_thrust_g : float
        Total maximum thrust (g)

    config : ModelConfig
        Model configuration

    Returns:
    -------
    PowerEstimate
        Falls back to the configured current when the motor, stack or ESC
        rating is unknown
    """
    voltage = specs.pack_voltage(config)
    esc_rating = specs.stack.esc_current_a if specs.stack is not None else None
    if specs.motor is None or not esc_rating:
        return _fallback_estimate(voltage, config)

    kv = specs.kv(config)
    stator = specs.stator_mm(config)
    diameter = specs.prop_diameter_in(config)
    pitch = specs.prop_pitch_in(config)
    wheelbase = specs.wheelbase_mm(config)
    air_density = config.environment.air_density()
    mix = config.flight_mix
    power = config.power

    hover_power = calculate_hover_power(total_mass_g, diameter, air_density, config)
    sport_power = hover_power * mix.sport_multiplier
    average_power = (
        hover_power * mix.hover_multiplier * mix.hover_fraction
        + hover_power * mix.cruise_multiplier * mix.cruise_fraction
        + sport_power * mix.sport_fraction
        + hover_power * mix.aggressive_multiplier * mix.aggressive_fraction
    )

    debug_step(
        category="Power",
        description="Mechanical power per motor",
        formula="P_avg = Σ share_i × P_hover × k_i",
        variables={"P_hover": hover_power, "P_sport": sport_power},
        result=average_power,
        result_name="mechanical_power",
        result_unit="W",
    )

    motor_efficiency = calculate_motor_efficiency(stator, kv, voltage, config)
    prop_efficiency = calculate_drive_prop_efficiency(total_mass_g, diameter, pitch, config)
    esc_efficiency = config.system.esc_efficiency.lookup(esc_rating)
    wiring = config.system.wiring_efficiency

    average_electrical = average_power / prop_efficiency / motor_efficiency
    mass_kg = total_mass_g / 1000.0
    power_to_weight = average_electrical * MOTOR_COUNT / mass_kg if mass_kg > 0 else 0.0

    style_factor = (
        power.style_factor.lookup(kv, wheelbase)
        * power.power_to_weight_factor.lookup(power_to_weight)
    )
    environment_factor = calculate_environment_factor(config)
    raw_twr = total_thrust_g / total_mass_g if total_mass_g > 0 else 0.0
    build_factor = power.aero_factor.lookup(wheelbase) * power.twr_factor.lookup(raw_twr)

    min_current = max(power.min_current_a, total_mass_g * power.min_current_per_gram)
    max_current = min(power.max_current_a, esc_rating * MOTOR_COUNT * power.max_esc_utilisation)

    def _battery_current(mechanical_power: float) -> float:
        electrical = mechanical_power / prop_efficiency / motor_efficiency
        per_motor = electrical / voltage / (esc_efficiency * wiring)
        per_motor *= style_factor * environment_factor
        per_motor = min(per_motor, esc_rating * power.esc_headroom)
        total = per_motor * MOTOR_COUNT * build_factor
        return round(min(max_current, max(min_current, total)), 1)

    average_current = _battery_current(average_power)
    hover_current = _battery_current(hover_power)
    sport_current = _battery_current(sport_power)
    efficiency = motor_efficiency * esc_efficiency * power.reference_prop_efficiency * wiring

    debug_step(
        category="Power",
        description="Average battery current",
        formula="I = P_avg / η_prop / η_motor / V / (η_esc × η_wiring) × f_style × f_env × 4 × f_build",
        variables={
            "η_motor": motor_efficiency,
            "η_prop": prop_efficiency,
            "η_esc": esc_efficiency,
            "f_style": style_factor,
            "f_env": environment_factor,
            "f_build": build_factor,
            "band": f"{min_current:.1f}-{max_current:.1f}A",
        },
        result=average_current,
        result_name="average_current",
        result_unit="A",
    )

    return PowerEstimate(
        average_current_a=average_current,
        hover_current_a=hover_current,
        sport_current_a=sport_current,
        power_w=round(average_current * voltage, 1),
        efficiency=efficiency,
        motor_efficiency=motor_efficiency,
        prop_efficiency=prop_efficiency,
        esc_efficiency=esc_efficiency,
        esc_rating_a=esc_rating,
    )
