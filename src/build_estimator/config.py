"""
Build Estimator Configuration
=============================

Physical constants, empirical band tables and the nested model
configuration consumed by every estimator.

The configuration is a tree of frozen dataclasses. ``DEFAULT_CONFIG`` is a
module-level immutable instance; callers derive variants with
``dataclasses.replace`` or ``config_from_overrides``.

Units used throughout:
- Mass: g
- Thrust: g (reported in kg as well)
- Length: mm for frames and stators, inches for propellers
- Current: A
- Power: W
- Speed: m/s internally, km/h in reports
- Time: minutes

Usage:
------
    from src.build_estimator.config import DEFAULT_CONFIG, config_from_overrides

    hot_day = config_from_overrides({"environment": {"temperature_c": 38}})
    rho = hot_day.environment.air_density()
"""

import math
from dataclasses import dataclass, field, fields, is_dataclass, replace
from typing import Any, Mapping, Optional, Tuple

from .tables import ANY_WHEELBASE, RangeTable, StepTable, StyleTable


# =============================================================================
# Physical Constants
# =============================================================================

# Standard air density at sea level (kg/m³), ISA 15°C / 101325 Pa
AIR_DENSITY_SEA_LEVEL = 1.225

# Gravitational acceleration (m/s²)
GRAVITY = 9.81

# ISA temperature lapse rate (K/m)
ISA_TEMPERATURE_LAPSE = -0.0065

# ISA sea level temperature (K)
ISA_TEMPERATURE_SEA_LEVEL = 288.15

# ISA sea level pressure (Pa)
ISA_PRESSURE_SEA_LEVEL = 101325.0

# Gas constant for dry air (J/(kg·K))
GAS_CONSTANT_AIR = 287.05

# Speed of sound used for tip Mach numbers (m/s)
SPEED_OF_SOUND = 343.0

# Dynamic viscosity of air at ~20°C (Pa·s)
AIR_DYNAMIC_VISCOSITY = 1.81e-5

# Unit conversions
INCH_TO_M = 0.0254
MS_TO_KMH = 3.6

# Motors (and propellers) on a quadcopter
MOTOR_COUNT = 4


# =============================================================================
# Motor Band Tables
# =============================================================================

# Stator diameter (mm) -> motor efficiency under load
STATOR_EFFICIENCY = StepTable(
    rows=((28, 0.90), (25, 0.88), (22, 0.85), (20, 0.82)),
    default=0.78,
    comparison="ge",
)

# Relative KV deviation from optimum -> thrust-side efficiency multiplier
THRUST_KV_DEVIATION = StepTable(
    rows=((0.4, 0.92), (0.3, 0.96), (0.1, 1.0)),
    default=1.03,
    comparison="gt",
)

# Relative KV deviation from optimum -> electrical efficiency multiplier
POWER_KV_DEVIATION = StepTable(
    rows=((0.4, 0.88), (0.3, 0.92), (0.2, 0.96), (0.1, 1.0)),
    default=1.02,
    comparison="gt",
)


# =============================================================================
# Propeller Band Tables
# =============================================================================

# Pitch/diameter ratio -> base propeller efficiency (narrowest window first)
ADVANCE_RATIO_EFFICIENCY = RangeTable(
    rows=((0.6, 0.9, 0.85), (0.5, 1.0, 0.82), (0.4, 1.1, 0.80), (0.3, 1.3, 0.75)),
    default=0.70,
)

# Blade tip Mach number -> compressibility factor
TIP_MACH_FACTOR = StepTable(
    rows=((0.8, 0.85), (0.6, 0.92), (0.3, 1.0)),
    default=0.95,
    comparison="gt",
)

# Blade Reynolds number -> viscous factor
REYNOLDS_FACTOR = StepTable(
    rows=((200000, 1.02), (50000, 1.0)),
    default=0.90,
    comparison="gt",
)

# Propeller material keyword -> efficiency factor (first keyword found wins)
PROP_MATERIAL_FACTORS = (
    ("carbon", 1.05),
    ("glass", 1.02),
    ("plastic", 0.98),
)


# =============================================================================
# System Band Tables
# =============================================================================

# ESC continuous current rating (A) -> ESC efficiency
ESC_EFFICIENCY = StepTable(
    rows=((60, 0.96), (40, 0.95), (25, 0.93)),
    default=0.90,
    comparison="ge",
)


# =============================================================================
# Power Band Tables
# =============================================================================

# Disk loading (N/m²) -> propeller efficiency
POWER_DISK_LOADING_EFFICIENCY = StepTable(
    rows=((60, 0.85), (90, 0.82), (120, 0.80), (160, 0.77)),
    default=0.73,
    comparison="lt",
)

# Pitch/diameter ratio -> propeller design factor
POWER_PROP_DESIGN_FACTOR = RangeTable(
    rows=((0.85, 1.15, 1.08), (0.75, 1.25, 1.04), (0.6, 1.4, 1.0)),
    default=0.92,
)

# KV / wheelbase -> current multiplier for the implied flying style
POWER_STYLE_FACTOR = StyleTable(
    rows=(
        (2600, 200, 1.12),            # racing
        (2400, 220, 1.08),            # sport racing
        (2200, 250, 1.05),            # freestyle
        (2000, 280, 1.02),            # sport freestyle
        (1600, ANY_WHEELBASE, 0.95),  # cinematic
        (1200, ANY_WHEELBASE, 0.90),  # long range
    ),
    default=0.85,
)

# Electrical power-to-weight (W/kg) -> current multiplier
POWER_TO_WEIGHT_CURRENT_FACTOR = StepTable(
    rows=((200, 1.05), (150, 1.02), (80, 1.0)),
    default=0.95,
    comparison="gt",
)

# Altitude (m) -> current multiplier
POWER_ALTITUDE_FACTOR = StepTable(
    rows=((2000, 1.08), (1000, 1.04)),
    default=1.0,
    comparison="gt",
)

# Temperature (°C) -> current multiplier, hot and cold sides
POWER_HOT_FACTOR = StepTable(rows=((35, 1.03),), default=1.0, comparison="gt")
POWER_COLD_FACTOR = StepTable(rows=((5, 1.05),), default=1.0, comparison="lt")

# Wheelbase (mm) -> aerodynamic current factor
POWER_AERO_FACTOR = StepTable(
    rows=((120, 0.88), (150, 0.92), (180, 0.96), (220, 1.0), (280, 1.04)),
    default=1.08,
    comparison="le",
)

# Thrust-to-weight ratio -> current factor
POWER_TWR_FACTOR = StepTable(
    rows=((1.5, 0.85), (2.0, 0.92), (3.0, 1.0), (4.0, 1.04)),
    default=1.08,
    comparison="le",
)


# =============================================================================
# Flight-Time Band Tables
# =============================================================================

# Discharge C-rate -> usable-capacity derating
DISCHARGE_RATE_FACTOR = StepTable(
    rows=((40, 0.70), (30, 0.75), (20, 0.80), (15, 0.83), (10, 0.87), (5, 0.90)),
    default=0.93,
    comparison="gt",
)

FLIGHT_ALTITUDE_FACTOR = StepTable(
    rows=((3000, 0.85), (2000, 0.92), (1000, 0.96)),
    default=1.0,
    comparison="gt",
)

# Wind speed (km/h) -> endurance derating
WIND_FACTOR = StepTable(
    rows=((30, 0.75), (20, 0.85), (10, 0.95)),
    default=1.0,
    comparison="gt",
)

# Pack capacity (mAh) -> chemistry / energy density factor
CHEMISTRY_FACTOR = StepTable(
    rows=((2200, 1.08), (1800, 1.05), (1500, 1.03), (1300, 1.02), (1000, 1.0), (650, 0.97)),
    default=0.94,
    comparison="ge",
)

# C-rating -> pack quality factor
C_RATING_FACTOR = StepTable(
    rows=((150, 1.05), (100, 1.03), (70, 1.01), (50, 1.0), (30, 0.98)),
    default=0.95,
    comparison="ge",
)

# C-rating -> internal resistance factor
INTERNAL_RESISTANCE_FACTOR = StepTable(
    rows=((150, 1.03), (100, 1.02), (70, 1.01), (50, 1.0), (30, 0.98)),
    default=0.95,
    comparison="ge",
)

# Current per cell (A) -> voltage sag factor
SAG_PER_CELL_FACTOR = StepTable(
    rows=((12, 0.82), (10, 0.86), (8, 0.88), (6, 0.92), (4, 0.95), (2, 0.98)),
    default=0.99,
    comparison="gt",
)

FLIGHT_PITCH_RATIO_FACTOR = RangeTable(
    rows=((0.85, 1.15, 1.12), (0.75, 1.25, 1.08), (0.65, 1.35, 1.02), (0.55, 1.45, 0.95)),
    default=0.88,
)

# Disk loading (N/m²) -> system efficiency
FLIGHT_DISK_LOADING_FACTOR = StepTable(
    rows=((60, 1.05), (160, 1.0)),
    default=0.95,
    comparison="lt",
)

FLIGHT_FRAME_FACTOR = StepTable(
    rows=((120, 1.08), (150, 1.06), (180, 1.03), (220, 1.01), (280, 0.98)),
    default=0.94,
    comparison="le",
)

FLIGHT_STATOR_FACTOR = StepTable(
    rows=((28, 1.04), (25, 1.02), (19, 1.0)),
    default=0.96,
    comparison="ge",
)

FLIGHT_STYLE_FACTOR = StyleTable(
    rows=(
        (2600, 200, 0.82),
        (2400, 220, 0.85),
        (2200, 250, 0.88),
        (2000, 280, 0.90),
        (1800, ANY_WHEELBASE, 0.95),
        (1400, ANY_WHEELBASE, 1.02),
    ),
    default=1.05,
)

# Electrical power-to-weight (W/kg) -> endurance multiplier
FLIGHT_POWER_TO_WEIGHT_FACTOR = StepTable(
    rows=((200, 0.95), (150, 0.98), (80, 1.0)),
    default=1.03,
    comparison="gt",
)

# Capacity (mAh) -> flight-time ceiling (minutes)
FLIGHT_TIME_CEILING = StepTable(
    rows=(
        (2500, 55.0), (2200, 50.0), (1800, 45.0), (1500, 40.0), (1300, 38.0),
        (1100, 32.0), (850, 25.0), (650, 20.0), (500, 15.0),
    ),
    default=10.0,
    comparison="ge",
)

# Build style -> ceiling reduction (never above 1.0)
CEILING_STYLE_FACTOR = StyleTable(
    rows=(
        (2600, 200, 0.75),
        (2400, 220, 0.82),
        (2200, 250, 0.88),
        (2000, ANY_WHEELBASE, 0.92),
    ),
    default=1.0,
)

CEILING_POWER_TO_WEIGHT_FACTOR = StepTable(
    rows=((180, 0.90),),
    default=1.0,
    comparison="gt",
)


# =============================================================================
# Top-Speed Band Tables
# =============================================================================

TOP_SPEED_TWR_FACTOR = StepTable(
    rows=((3.5, 1.1), (2.5, 1.05), (2.0, 1.0)),
    default=0.9,
    comparison="ge",
)

TOP_SPEED_FRAME_FACTOR = StepTable(
    rows=((150, 1.15), (180, 1.1), (220, 1.05), (280, 1.0)),
    default=0.9,
    comparison="le",
)

TOP_SPEED_PITCH_RATIO_FACTOR = RangeTable(
    rows=((0.8, 1.2, 1.1), (0.6, 1.4, 1.0)),
    default=0.85,
)

# Wheelbase (mm) -> top-speed ceiling (km/h)
TOP_SPEED_CEILING = StepTable(
    rows=((100, 120.0), (150, 150.0), (180, 180.0), (220, 200.0), (280, 210.0)),
    default=220.0,
    comparison="le",
)


# =============================================================================
# Hover Band Tables
# =============================================================================

# sqrt(hover thrust fraction) -> motor efficiency at hover RPM
HOVER_RPM_EFFICIENCY = StepTable(
    rows=((0.5, 0.75), (0.7, 0.85), (0.8, 0.88), (0.9, 0.85)),
    default=0.80,
    comparison="lt",
)

HOVER_FRAME_CORRECTION = RangeTable(
    rows=((0.0, 150.0, 0.90), (150.0, 300.0, 1.0)),
    default=1.10,
)

# Mass per square inch of propeller diameter (g/in²) -> current correction
HOVER_PROP_LOADING_CORRECTION = StepTable(
    rows=((30, 1.05), (15, 1.0)),
    default=0.95,
    comparison="gt",
)

HOVER_STATOR_CORRECTION = StepTable(
    rows=((25, 0.95), (21, 1.0)),
    default=1.05,
    comparison="ge",
)

HOVER_SAG_FACTOR = StepTable(
    rows=((4, 0.95), (2, 0.98)),
    default=0.99,
    comparison="gt",
)

# Capacity (mAh) -> hover time cap (minutes)
HOVER_TIME_CAP = StepTable(
    rows=((2000, 45.0), (1500, 35.0), (1000, 25.0)),
    default=15.0,
    comparison="ge",
)

HOVER_THROTTLE_KV_FACTOR = StepTable(
    rows=((2600, 1.4), (2400, 1.3), (2200, 1.2), (2000, 1.15), (1800, 1.1)),
    default=1.05,
    comparison="ge",
)

HOVER_THROTTLE_PROP_FACTOR = StepTable(
    rows=((6.0, 0.95), (4.5, 1.0)),
    default=1.08,
    comparison="ge",
)

HOVER_THROTTLE_TWR_FACTOR = StepTable(
    rows=((3.0, 0.92), (2.5, 0.96), (1.8, 1.0), (1.5, 1.08)),
    default=1.15,
    comparison="gt",
)


# =============================================================================
# Configuration Sections
# =============================================================================

@dataclass(frozen=True)
class TemperatureBands:
    """
    Battery efficiency by ambient temperature.

    Bands: freezing < 0°C, cold < 10°C, cool < 20°C, optimal <= 25°C,
    warm <= 35°C, hot <= 45°C, extreme above.
    """
    freezing: float = 0.70
    cold: float = 0.85
    cool: float = 0.95
    optimal: float = 1.0
    warm: float = 0.98
    hot: float = 0.92
    extreme: float = 0.85

    def factor(self, temperature_c: float) -> float:
        """Return the battery efficiency factor for a temperature."""
        if temperature_c < 0:
            return self.freezing
        if temperature_c < 10:
            return self.cold
        if temperature_c < 20:
            return self.cool
        if temperature_c <= 25:
            return self.optimal
        if temperature_c <= 35:
            return self.warm
        if temperature_c <= 45:
            return self.hot
        return self.extreme


@dataclass(frozen=True)
class EnvironmentConfig:
    """
    Ambient flight conditions.

    Attributes:
    ----------
    altitude_m : float
        Field altitude above sea level (m)

    temperature_c : float
        Ambient temperature (°C)

    humidity_percent : float
        Relative humidity (%)

    wind_speed_kmh : float
        Mean wind speed (km/h)

    air_density_sea_level : float
        Reference sea-level density (kg/m³); scales the ISA result
    """
    altitude_m: float = 0.0
    temperature_c: float = 20.0
    humidity_percent: float = 60.0
    wind_speed_kmh: float = 5.0
    air_density_sea_level: float = AIR_DENSITY_SEA_LEVEL
    humidity_density_coefficient: float = 0.01

    def air_density(self) -> float:
        """
        Air density at the configured altitude and temperature.

        ISA troposphere model with the actual (not standard) temperature:
            T_isa = T0 + L × h
            p = p0 × (T_isa/T0)^(g/(R×-L))
            ρ = p / (R × T)

        Returns:
        -------
        float
            Air density (kg/m³)
        """
        t_isa = ISA_TEMPERATURE_SEA_LEVEL + ISA_TEMPERATURE_LAPSE * self.altitude_m
        t_actual = self.temperature_c + 273.15

        exponent = GRAVITY / (GAS_CONSTANT_AIR * (-ISA_TEMPERATURE_LAPSE))
        pressure = ISA_PRESSURE_SEA_LEVEL * (t_isa / ISA_TEMPERATURE_SEA_LEVEL) ** exponent

        density = pressure / (GAS_CONSTANT_AIR * t_actual)
        return density * (self.air_density_sea_level / AIR_DENSITY_SEA_LEVEL)

    def density_ratio(self) -> float:
        """Air density relative to the ISA sea-level standard."""
        return self.air_density() / AIR_DENSITY_SEA_LEVEL

    def humidity_factor(self) -> float:
        """Small thrust loss from humid (less dense) air."""
        return 1.0 - (self.humidity_percent / 100.0) * self.humidity_density_coefficient


@dataclass(frozen=True)
class BatteryConfig:
    nominal_cell_voltage: float = 3.7
    default_cell_count: int = 4
    default_capacity_mah: float = 1300.0
    default_c_rating: float = 50.0
    usable_fraction: float = 0.85
    age_factor: float = 0.92
    temperature: TemperatureBands = field(default_factory=TemperatureBands)


@dataclass(frozen=True)
class MotorConfig:
    default_kv: float = 2000.0
    default_stator_mm: float = 22.0
    stator_efficiency: StepTable = STATOR_EFFICIENCY
    # Optimal KV lines: base + (V - reference) × slope
    reference_voltage: float = 14.8
    thrust_optimal_kv_base: float = 1600.0
    thrust_optimal_kv_slope: float = 150.0
    thrust_kv_deviation: StepTable = THRUST_KV_DEVIATION
    power_optimal_kv_base: float = 1400.0
    power_optimal_kv_slope: float = 180.0
    power_kv_deviation: StepTable = POWER_KV_DEVIATION
    max_efficiency: float = 0.95


@dataclass(frozen=True)
class PropellerConfig:
    default_diameter_in: float = 5.0
    default_pitch_in: float = 4.5
    figure_of_merit: float = 0.75
    # Fraction of tip speed used as effective induced velocity / chord
    induced_velocity_ratio: float = 0.08
    chord_ratio: float = 0.08
    advance_ratio_efficiency: RangeTable = ADVANCE_RATIO_EFFICIENCY
    tip_mach_factor: StepTable = TIP_MACH_FACTOR
    reynolds_factor: StepTable = REYNOLDS_FACTOR
    material_factors: Tuple[Tuple[str, float], ...] = PROP_MATERIAL_FACTORS
    optimal_blade_angle_deg: float = 15.0
    blade_angle_window_deg: float = 30.0
    min_blade_element_factor: float = 0.7


@dataclass(frozen=True)
class SystemConfig:
    esc_efficiency: StepTable = ESC_EFFICIENCY
    wiring_efficiency: float = 0.92
    condition_factor: float = 0.95
    tolerance_factor: float = 0.98


@dataclass(frozen=True)
class ThrustConfig:
    # Blend window on computed/declared ratio
    blend_window: Tuple[float, float] = (0.7, 1.3)
    computed_weight: float = 0.6
    below_window_factor: float = 0.85
    above_window_factor: float = 1.10
    # Motor/propeller matching
    optimal_diameter_coefficient: float = 8.0
    optimal_pitch_ratio: float = 0.85
    matching_base: float = 0.9
    matching_span: float = 0.2
    matching_clamp: Tuple[float, float] = (0.85, 1.15)
    diameter_match_weight: float = 0.6
    # Thrust-to-weight reporting range
    twr_clamp: Tuple[float, float] = (1.0, 15.0)
    optimal_twr_range: Tuple[float, float] = (2.0, 6.0)


@dataclass(frozen=True)
class FlightMixConfig:
    """
    Share of flight time and power multiplier for each flight phase.

    Phase power is hover power times the multiplier.
    """
    hover_fraction: float = 0.30
    cruise_fraction: float = 0.45
    sport_fraction: float = 0.20
    aggressive_fraction: float = 0.05
    hover_multiplier: float = 1.0
    cruise_multiplier: float = 1.4
    sport_multiplier: float = 1.8
    aggressive_multiplier: float = 2.2 ** 1.5

    def total_fraction(self) -> float:
        return (
            self.hover_fraction + self.cruise_fraction
            + self.sport_fraction + self.aggressive_fraction
        )


@dataclass(frozen=True)
class PowerConfig:
    fallback_current_a: float = 25.0
    disk_loading_efficiency: StepTable = POWER_DISK_LOADING_EFFICIENCY
    prop_design_factor: RangeTable = POWER_PROP_DESIGN_FACTOR
    style_factor: StyleTable = POWER_STYLE_FACTOR
    power_to_weight_factor: StepTable = POWER_TO_WEIGHT_CURRENT_FACTOR
    altitude_factor: StepTable = POWER_ALTITUDE_FACTOR
    hot_factor: StepTable = POWER_HOT_FACTOR
    cold_factor: StepTable = POWER_COLD_FACTOR
    aero_factor: StepTable = POWER_AERO_FACTOR
    twr_factor: StepTable = POWER_TWR_FACTOR
    esc_headroom: float = 0.85
    # Realistic band for total current
    min_current_a: float = 8.0
    min_current_per_gram: float = 0.02
    max_current_a: float = 85.0
    max_esc_utilisation: float = 0.75
    # Propeller efficiency quoted in the overall efficiency figure
    reference_prop_efficiency: float = 0.80


@dataclass(frozen=True)
class FlightTimeConfig:
    discharge_rate_factor: StepTable = DISCHARGE_RATE_FACTOR
    altitude_factor: StepTable = FLIGHT_ALTITUDE_FACTOR
    wind_factor: StepTable = WIND_FACTOR
    chemistry_factor: StepTable = CHEMISTRY_FACTOR
    c_rating_factor: StepTable = C_RATING_FACTOR
    internal_resistance_factor: StepTable = INTERNAL_RESISTANCE_FACTOR
    sag_per_cell_factor: StepTable = SAG_PER_CELL_FACTOR
    # Cell resistance model: R = base + per_inverse_c / C  (Ω)
    base_cell_resistance: float = 0.01
    resistance_per_inverse_c: float = 0.02
    sag_scale: float = 0.1
    min_additional_sag: float = 0.9
    pitch_ratio_factor: RangeTable = FLIGHT_PITCH_RATIO_FACTOR
    disk_loading_factor: StepTable = FLIGHT_DISK_LOADING_FACTOR
    frame_factor: StepTable = FLIGHT_FRAME_FACTOR
    stator_factor: StepTable = FLIGHT_STATOR_FACTOR
    style_factor: StyleTable = FLIGHT_STYLE_FACTOR
    power_to_weight_factor: StepTable = FLIGHT_POWER_TO_WEIGHT_FACTOR
    ceiling: StepTable = FLIGHT_TIME_CEILING
    ceiling_style_factor: StyleTable = CEILING_STYLE_FACTOR
    ceiling_power_to_weight_factor: StepTable = CEILING_POWER_TO_WEIGHT_FACTOR
    min_flight_time_min: float = 0.5
    # Common pack sizes for capacity recommendations (mAh)
    common_capacities: Tuple[int, ...] = (
        650, 850, 1050, 1300, 1500, 1800, 2200, 2600, 3300, 4200, 5200,
    )


@dataclass(frozen=True)
class TopSpeedConfig:
    load_efficiency: float = 0.75
    forward_thrust_fraction: float = 0.3
    base_drag_coefficient: float = 0.8
    drag_coefficient_per_m: float = 0.2
    max_prop_efficiency: float = 0.8
    prop_efficiency_slope: float = 0.3
    prop_efficiency_speed_scale: float = 50.0
    min_prop_efficiency: float = 0.3
    twr_factor: StepTable = TOP_SPEED_TWR_FACTOR
    frame_factor: StepTable = TOP_SPEED_FRAME_FACTOR
    pitch_ratio_factor: RangeTable = TOP_SPEED_PITCH_RATIO_FACTOR
    ceiling: StepTable = TOP_SPEED_CEILING


@dataclass(frozen=True)
class HoverConfig:
    rpm_efficiency: StepTable = HOVER_RPM_EFFICIENCY
    frame_correction: RangeTable = HOVER_FRAME_CORRECTION
    prop_loading_correction: StepTable = HOVER_PROP_LOADING_CORRECTION
    stator_correction: StepTable = HOVER_STATOR_CORRECTION
    battery_efficiency: float = 0.92
    high_c_battery_efficiency: float = 0.94
    high_c_threshold: float = 70.0
    large_pack_bonus: float = 0.02
    large_pack_threshold_mah: float = 1500.0
    usable_fraction: float = 0.90
    sag_factor: StepTable = HOVER_SAG_FACTOR
    time_cap: StepTable = HOVER_TIME_CAP
    throttle_kv_factor: StepTable = HOVER_THROTTLE_KV_FACTOR
    throttle_prop_factor: StepTable = HOVER_THROTTLE_PROP_FACTOR
    throttle_twr_factor: StepTable = HOVER_THROTTLE_TWR_FACTOR
    throttle_clamp: Tuple[float, float] = (25.0, 75.0)


@dataclass(frozen=True)
class FrameConfig:
    # Wheelbase assumed when no frame is selected (mm)
    default_wheelbase_mm: float = 220.0


@dataclass(frozen=True)
class MassConfig:
    # Stack type keyword -> mass (g) when no weight is declared
    stack_type_masses: Tuple[Tuple[str, float], ...] = (("mini", 15.0), ("aio", 20.0))
    default_stack_mass_g: float = 30.0


@dataclass(frozen=True)
class PricingConfig:
    motor_stator_coefficient: float = 2.0
    motor_kv_coefficient: float = 0.01
    motor_scale: float = 0.8
    # Stator diameter assumed when pricing a motor without one
    default_stator_mm: float = 20.0
    frame_price_per_mm: float = 0.2
    frame_material_multipliers: Tuple[Tuple[str, float], ...] = (
        ("carbon", 1.5), ("titanium", 2.0),
    )
    stack_price_per_amp: float = 2.0
    default_esc_current_a: float = 30.0
    stack_processor_multipliers: Tuple[Tuple[str, float], ...] = (
        ("f7", 1.5), ("f4", 1.2),
    )
    camera_default_price: float = 25.0
    # Checked in order, the last matching keyword sets the price
    camera_resolution_prices: Tuple[Tuple[str, float], ...] = (
        ("4k", 45.0), ("1080p", 30.0), ("720p", 20.0),
    )
    prop_price_per_inch: float = 0.8
    prop_carbon_multiplier: float = 2.0
    battery_price_per_100mah_per_cell: float = 0.5
    auxiliary_default_price: float = 5.0


# =============================================================================
# Model Configuration
# =============================================================================

@dataclass(frozen=True)
class ModelConfig:
    """
    Complete estimator configuration.

    Attributes:
    ----------
    environment : EnvironmentConfig
        Altitude, temperature, humidity and wind

    battery, motor, propeller, system : ...
        Component-level constants and band tables

    thrust, flight_mix, power, flight_time, top_speed, hover : ...
        Estimator-specific constants and band tables

    frame, mass, pricing : ...
        Default wheelbase and mass/price heuristics for undeclared values
    """
    environment: EnvironmentConfig = field(default_factory=EnvironmentConfig)
    battery: BatteryConfig = field(default_factory=BatteryConfig)
    motor: MotorConfig = field(default_factory=MotorConfig)
    propeller: PropellerConfig = field(default_factory=PropellerConfig)
    system: SystemConfig = field(default_factory=SystemConfig)
    thrust: ThrustConfig = field(default_factory=ThrustConfig)
    flight_mix: FlightMixConfig = field(default_factory=FlightMixConfig)
    power: PowerConfig = field(default_factory=PowerConfig)
    flight_time: FlightTimeConfig = field(default_factory=FlightTimeConfig)
    top_speed: TopSpeedConfig = field(default_factory=TopSpeedConfig)
    hover: HoverConfig = field(default_factory=HoverConfig)
    frame: FrameConfig = field(default_factory=FrameConfig)
    mass: MassConfig = field(default_factory=MassConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)

    def validate(self) -> tuple[bool, str]:
        """Validate configuration values."""
        errors = []

        env = self.environment
        if env.altitude_m < -500 or env.altitude_m > 11000:
            errors.append("Altitude should be between -500 and 11000 m")
        if env.temperature_c < -40 or env.temperature_c > 60:
            errors.append("Temperature should be -40 to 60°C")
        if env.humidity_percent < 0 or env.humidity_percent > 100:
            errors.append("Humidity should be 0-100%")
        if env.wind_speed_kmh < 0:
            errors.append("Wind speed cannot be negative")
        if env.air_density_sea_level <= 0:
            errors.append("Air density must be positive")

        if self.battery.nominal_cell_voltage <= 0:
            errors.append("Nominal cell voltage must be positive")
        if self.battery.default_cell_count < 1:
            errors.append("Default cell count must be at least 1")
        for name in ("usable_fraction", "age_factor"):
            value = getattr(self.battery, name)
            if not 0 < value <= 1:
                errors.append(f"Battery {name} should be in (0, 1]")

        if not 0 < self.propeller.figure_of_merit <= 1:
            errors.append("Figure of merit should be in (0, 1]")
        if not 0 < self.system.wiring_efficiency <= 1:
            errors.append("Wiring efficiency should be in (0, 1]")

        if abs(self.flight_mix.total_fraction() - 1.0) > 1e-6:
            errors.append("Flight phase fractions must sum to 1")

        low, high = self.thrust.twr_clamp
        if low <= 0 or low > high:
            errors.append("Thrust-to-weight clamp must be positive and ordered")
        low, high = self.thrust.blend_window
        if low <= 0 or low > high:
            errors.append("Thrust blend window must be positive and ordered")

        if self.power.min_current_a > self.power.max_current_a:
            errors.append("Minimum current exceeds maximum current")

        for section in fields(self):
            section_value = getattr(self, section.name)
            for table_field in fields(section_value):
                table = getattr(section_value, table_field.name)
                if hasattr(table, "lookup") and hasattr(table, "validate"):
                    ok, message = table.validate()
                    if not ok:
                        errors.append(f"{section.name}.{table_field.name}: {message}")

        if errors:
            return False, "; ".join(errors)
        return True, ""


DEFAULT_CONFIG = ModelConfig()


def _coerce(current: Any, value: Any) -> Any:
    """Convert JSON-style lists into the tuple shapes the config uses."""
    if isinstance(current, tuple) and isinstance(value, list):
        return tuple(tuple(item) if isinstance(item, list) else item for item in value)
    return value


def config_from_overrides(
    overrides: Mapping[str, Any],
    base: Optional[Any] = None
) -> Any:
    """
    Build a new configuration from nested overrides.

    Parameters:
    ----------
    overrides : Mapping[str, Any]
        Nested mapping mirroring the configuration tree, e.g.
        ``{"environment": {"altitude_m": 1500}}``

    base : dataclass, optional
        Configuration (or section) to start from. Defaults to DEFAULT_CONFIG.

    Returns:
    -------
    dataclass
        New frozen configuration; ``base`` is not modified

    Raises:
    ------
    KeyError
        If an override names a field that does not exist
    """
    if base is None:
        base = DEFAULT_CONFIG

    known = {f.name for f in fields(base)}
    changes = {}
    for key, value in overrides.items():
        if key not in known:
            raise KeyError(
                f"Unknown setting '{key}' for {type(base).__name__}. "
                f"Known settings: {sorted(known)}"
            )
        current = getattr(base, key)
        if is_dataclass(current) and isinstance(value, Mapping):
            changes[key] = config_from_overrides(value, current)
        else:
            changes[key] = _coerce(current, value)
    return replace(base, **changes)
