"""
Top-Speed Estimation
====================

Level-flight top speed as the lower of two limits:

- Pitch speed: loaded RPM × pitch, scaled by a propeller efficiency that
  falls as airspeed rises.
- Drag balance: the forward share of maximum thrust equals body drag,
      F = ½ ρ V² Cd A   →   V = √(2F / (ρ Cd A))
  with frontal area ≈ wheelbase² and Cd growing with frame size.

The result is corrected for thrust-to-weight, frame size and pitch ratio,
converted to km/h and capped by a frame-size ceiling.
"""

import math

from ..config import DEFAULT_CONFIG, GRAVITY, INCH_TO_M, MS_TO_KMH, ModelConfig
from ..debugger import debug_step
from ..models.specs import BuildSpecs


def calculate_pitch_speed(kv: float, voltage: float, pitch_in: float, config: ModelConfig = DEFAULT_CONFIG) -> float:
    """Theoretical pitch speed at loaded RPM (m/s)."""
    loaded_rpm = kv * voltage * config.top_speed.load_efficiency
    return loaded_rpm / 60.0 * pitch_in * INCH_TO_M


def calculate_drag_limited_speed(
    total_thrust_g: float,
    wheelbase_mm: float,
    air_density: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> float:
    """
    Speed at which forward thrust equals drag (m/s).

    Parameters:
    ----------
    total_thrust_g : float
        Total maximum thrust (g)

    wheelbase_mm : float
        Motor-to-motor diagonal (mm)

    air_density : float
        Air density (kg/m³)

    Returns:
    -------
    float
        Drag-limited speed (m/s); 0 when thrust or frame size is zero
    """
    ts = config.top_speed
    wheelbase_m = wheelbase_mm / 1000.0
    frontal_area = wheelbase_m ** 2
    drag_coefficient = ts.base_drag_coefficient + wheelbase_m * ts.drag_coefficient_per_m
    forward_thrust = total_thrust_g / 1000.0 * GRAVITY * ts.forward_thrust_fraction

    denominator = air_density * drag_coefficient * frontal_area
    if forward_thrust <= 0 or denominator <= 0:
        return 0.0
    return math.sqrt(2.0 * forward_thrust / denominator)


def estimate_top_speed(
    specs: BuildSpecs,
    total_thrust_g: float,
    thrust_to_weight: float,
    config: ModelConfig = DEFAULT_CONFIG
) -> int:
    """
    Estimate level-flight top speed.

    Parameters:
    ----------
    specs : BuildSpecs
        Typed build specification

    total_thrust_g : float
        Total maximum thrust (g)

    thrust_to_weight : float
        Thrust-to-weight ratio (clamped value from the thrust estimator)

    config : ModelConfig
        Model configuration

    Returns:
    -------
    int
        Top speed (km/h); 0 when motor, propeller or frame is missing
    """
    if specs.motor is None or specs.propeller is None or specs.frame is None:
        return 0

    ts = config.top_speed
    kv = specs.kv(config)
    voltage = specs.pack_voltage(config)
    diameter = specs.prop_diameter_in(config)
    pitch = specs.prop_pitch_in(config)
    wheelbase = specs.wheelbase_mm(config)

    pitch_speed = calculate_pitch_speed(kv, voltage, pitch, config)
    drag_speed = calculate_drag_limited_speed(
        total_thrust_g, wheelbase, config.environment.air_density(), config
    )

    prop_efficiency = max(
        ts.min_prop_efficiency,
        ts.max_prop_efficiency - drag_speed / ts.prop_efficiency_speed_scale * ts.prop_efficiency_slope,
    )
    speed_ms = min(pitch_speed * prop_efficiency, drag_speed)

    pitch_ratio = pitch / diameter if diameter > 0 else 0.0
    correction = (
        ts.twr_factor.lookup(thrust_to_weight)
        * ts.frame_factor.lookup(wheelbase)
        * ts.pitch_ratio_factor.lookup(pitch_ratio)
    )
    speed_kmh = speed_ms * MS_TO_KMH * correction
    ceiling = ts.ceiling.lookup(wheelbase)
    top_speed = int(round(min(speed_kmh, ceiling)))

    debug_step(
        category="Top Speed",
        description="Level-flight top speed",
        formula="V = min(V_pitch × η(V), √(2F/(ρ Cd A))) × 3.6 × f_corr, capped",
        variables={
            "V_pitch": pitch_speed,
            "V_drag": drag_speed,
            "η_prop": prop_efficiency,
            "f_corr": correction,
            "ceiling": ceiling,
        },
        result=top_speed,
        result_name="top_speed",
        result_unit="km/h",
    )
    return top_speed
