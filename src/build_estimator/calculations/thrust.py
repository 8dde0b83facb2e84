"""
Thrust Estimation
=================

Maximum static thrust of a motor/propeller pair, and the build's
thrust-to-weight ratio.

Model:
------
1. Loaded RPM = KV × V × η_load, where η_load comes from the stator size and
   how far the KV sits from the optimum for the pack voltage.
2. Propeller efficiency from pitch/diameter ratio, tip Mach number, blade
   Reynolds number and material.
3. Momentum estimate: T = ½ ρ A (k·v_tip)² η_prop
   Blade-element estimate: momentum × blade-angle factor
   Computed thrust is the mean of the two.
4. Blend with the manufacturer figure: 60/40 when the computed value is
   within 0.7-1.3× of declared, otherwise trust the declared value with a
   penalty (below) or a small bonus (above).
5. Apply environment, condition, tolerance and motor/prop matching factors.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..config import (
    AIR_DYNAMIC_VISCOSITY,
    DEFAULT_CONFIG,
    INCH_TO_M,
    MOTOR_COUNT,
    SPEED_OF_SOUND,
    ModelConfig,
)
from ..debugger import debug_step
from ..models.specs import BuildSpecs
from ..parsing import contains_keyword


@dataclass(frozen=True)
class ThrustEstimate:
    """
    Thrust estimate for the whole build.

    Attributes:
    ----------
    per_motor_g : float
        Final thrust of one motor (g)

    total_g : int
        Thrust of all motors, rounded (g)

    thrust_to_weight : float
        Clamped, rounded thrust-to-weight ratio

    computed_per_motor_g : float
        Physics-only estimate before blending (g)

    declared_per_motor_g : float or None
        Manufacturer figure (g)

    blend_mode : str
        "blended", "declared_low", "declared_high", "computed_only" or "none"
    """
    per_motor_g: float = 0.0
    total_g: int = 0
    thrust_to_weight: float = 1.0
    computed_per_motor_g: float = 0.0
    declared_per_motor_g: Optional[float] = None
    blend_mode: str = "none"

    @property
    def total_kg(self) -> float:
        return round(self.total_g / 1000.0, 2)


def calculate_load_efficiency(
    stator_mm: float,
    kv: float,
    voltage: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> float:
    """
    Fraction of no-load RPM reached under full propeller load.

    Parameters:
    ----------
    stator_mm : float
        Stator diameter (mm)

    kv : float
        Motor KV (RPM/V)

    voltage : float
        Pack voltage (V)

    Returns:
    -------
    float
        Load efficiency (0-1)
    """
    motor = config.motor
    efficiency = motor.stator_efficiency.lookup(stator_mm)

    optimal_kv = motor.thrust_optimal_kv_base + (voltage - motor.reference_voltage) * motor.thrust_optimal_kv_slope
    deviation = abs(kv - optimal_kv) / optimal_kv if optimal_kv > 0 else 0.0
    return efficiency * motor.thrust_kv_deviation.lookup(deviation)


def calculate_material_factor(material: str, config: ModelConfig = DEFAULT_CONFIG) -> float:
    for keyword, factor in config.propeller.material_factors:
        if contains_keyword(material, keyword):
            return factor
    return 1.0


def calculate_propeller_efficiency(
    diameter_in: float,
    pitch_in: float,
    tip_speed_ms: float,
    material: str,
    air_density: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> float:
    """
    Propeller efficiency at full throttle.

    η = η_base(P/D) × f_mach(v_tip/a) × f_Re(Re) × f_material

    Re = ρ × v_tip × c / μ, with chord c = 0.08 × D
    """
    prop = config.propeller
    advance_ratio = pitch_in / diameter_in if diameter_in > 0 else 0.0
    efficiency = prop.advance_ratio_efficiency.lookup(advance_ratio)

    tip_mach = tip_speed_ms / SPEED_OF_SOUND
    efficiency *= prop.tip_mach_factor.lookup(tip_mach)

    chord_m = diameter_in * INCH_TO_M * prop.chord_ratio
    reynolds = air_density * tip_speed_ms * chord_m / AIR_DYNAMIC_VISCOSITY
    efficiency *= prop.reynolds_factor.lookup(reynolds)

    efficiency *= calculate_material_factor(material, config)

    debug_step(
        category="Thrust",
        description="Propeller efficiency",
        formula="η = η(P/D) × f(Mach) × f(Re) × f(material)",
        variables={
            "P/D": advance_ratio,
            "tip_mach": tip_mach,
            "reynolds": reynolds,
            "material": material or "unknown",
        },
        result=efficiency,
        result_name="prop_efficiency",
    )
    return efficiency


def calculate_matching_factor(
    kv: float,
    voltage: float,
    stator_mm: float,
    diameter_in: float,
    pitch_in: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> float:
    """
    How well the propeller suits the motor, as a thrust multiplier.

    A crude motor power index (KV × V × stator / 10000) sets an optimal
    diameter √(8 × index) and pitch 0.85 × that diameter. Relative mismatch
    maps onto [0.85, 1.15].
    """
    thrust = config.thrust
    power_index = kv * voltage * stator_mm / 10000.0
    optimal_diameter = math.sqrt(max(power_index, 0.0) * thrust.optimal_diameter_coefficient)
    optimal_pitch = optimal_diameter * thrust.optimal_pitch_ratio

    def _match(actual, optimal):
        larger = max(actual, optimal)
        if larger <= 0:
            return 0.0
        return 1.0 - abs(actual - optimal) / larger

    diameter_match = _match(diameter_in, optimal_diameter)
    pitch_match = _match(pitch_in, optimal_pitch)
    overall = (
        thrust.diameter_match_weight * diameter_match
        + (1.0 - thrust.diameter_match_weight) * pitch_match
    )

    low, high = thrust.matching_clamp
    return min(high, max(low, thrust.matching_base + overall * thrust.matching_span))


def calculate_computed_thrust(
    kv: float,
    voltage: float,
    stator_mm: float,
    diameter_in: float,
    pitch_in: float,
    material: str,
    air_density: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> float:
    """
    Physics-only static thrust of one motor (g), before blending.

    Returns:
    -------
    float
        Mean of the momentum and blade-element estimates (g)
    """
    prop = config.propeller
    load_efficiency = calculate_load_efficiency(stator_mm, kv, voltage, config)
    loaded_rpm = kv * voltage * load_efficiency

    diameter_m = diameter_in * INCH_TO_M
    disk_area = math.pi * (diameter_m / 2.0) ** 2
    tip_speed = loaded_rpm / 60.0 * math.pi * diameter_m

    debug_step(
        category="Thrust",
        description="Loaded RPM and tip speed",
        formula="rpm = KV × V × η_load;  v_tip = rpm/60 × π × D",
        variables={"KV": kv, "V": voltage, "η_load": load_efficiency, "D_m": diameter_m},
        result=tip_speed,
        result_name="tip_speed",
        result_unit="m/s",
    )

    prop_efficiency = calculate_propeller_efficiency(
        diameter_in, pitch_in, tip_speed, material, air_density, config
    )

    induced = tip_speed * prop.induced_velocity_ratio
    momentum_g = 0.5 * air_density * disk_area * induced ** 2 * prop_efficiency * 1000.0

    blade_angle = math.degrees(math.atan(pitch_in / (math.pi * diameter_in))) if diameter_in > 0 else 0.0
    angle_factor = 1.0 - abs(blade_angle - prop.optimal_blade_angle_deg) / prop.blade_angle_window_deg
    blade_element_g = momentum_g * max(prop.min_blade_element_factor, angle_factor)

    computed = (momentum_g + blade_element_g) / 2.0

    debug_step(
        category="Thrust",
        description="Computed static thrust per motor",
        formula="T = (T_momentum + T_blade) / 2",
        variables={"T_momentum": momentum_g, "T_blade": blade_element_g, "blade_angle": blade_angle},
        result=computed,
        result_name="computed_thrust",
        result_unit="g",
    )
    return computed


def blend_thrust(computed_g: float, declared_g: Optional[float], config: ModelConfig = DEFAULT_CONFIG):
    """
    Combine computed and declared thrust.

    Returns:
    -------
    Tuple[float, str]
        (blended thrust in g, blend mode)
    """
    thrust = config.thrust
    if not declared_g:
        return computed_g, "computed_only"

    ratio = computed_g / declared_g
    low, high = thrust.blend_window
    if ratio < low:
        return declared_g * thrust.below_window_factor, "declared_low"
    if ratio > high:
        return declared_g * thrust.above_window_factor, "declared_high"
    weight = thrust.computed_weight
    return weight * computed_g + (1.0 - weight) * declared_g, "blended"


def thrust_to_weight_ratio(
    thrust_g: float,
    mass_g: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> float:
    """
    Thrust-to-weight ratio, rounded to 0.01 and clamped to the configured
    range. Zero mass or zero thrust gives the lower bound.
    """
    low, high = config.thrust.twr_clamp
    if mass_g <= 0 or thrust_g <= 0:
        return low
    return min(high, max(low, round(thrust_g / mass_g, 2)))


def estimate_thrust(
    specs: BuildSpecs,
    total_mass_g: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> ThrustEstimate:
    """
    Estimate maximum thrust and thrust-to-weight ratio.

    Parameters:
    ----------
    specs : BuildSpecs
        Typed build specification

    total_mass_g : float
        All-up mass from the mass aggregator (g)

    config : ModelConfig
        Model configuration

    Returns:
    -------
    ThrustEstimate
        Zero thrust (and the minimum ratio) when the motor or propeller is
        missing
    """
    if specs.motor is None or specs.propeller is None:
        return ThrustEstimate(thrust_to_weight=thrust_to_weight_ratio(0.0, total_mass_g, config))

    kv = specs.kv(config)
    voltage = specs.pack_voltage(config)
    stator = specs.stator_mm(config)
    diameter = specs.prop_diameter_in(config)
    pitch = specs.prop_pitch_in(config)
    air_density = config.environment.air_density()

    computed = calculate_computed_thrust(
        kv, voltage, stator, diameter, pitch, specs.propeller.material, air_density, config
    )
    declared = specs.motor.declared_thrust_g
    blended, mode = blend_thrust(computed, declared, config)

    environment_factor = config.environment.density_ratio() * config.environment.humidity_factor()
    matching = calculate_matching_factor(kv, voltage, stator, diameter, pitch, config)
    per_motor = (
        blended * environment_factor
        * config.system.condition_factor
        * config.system.tolerance_factor
        * matching
    )
    if not math.isfinite(per_motor):
        per_motor = 0.0
    total = int(round(per_motor * MOTOR_COUNT))

    debug_step(
        category="Thrust",
        description="Final thrust per motor",
        formula="T = T_blend × f_env × f_condition × f_tolerance × f_match",
        variables={
            "T_blend": blended,
            "mode": mode,
            "f_env": environment_factor,
            "f_match": matching,
        },
        result=per_motor,
        result_name="thrust_per_motor",
        result_unit="g",
    )

    return ThrustEstimate(
        per_motor_g=per_motor,
        total_g=total,
        thrust_to_weight=thrust_to_weight_ratio(total, total_mass_g, config),
        computed_per_motor_g=computed,
        declared_per_motor_g=declared,
        blend_mode=mode,
    )
