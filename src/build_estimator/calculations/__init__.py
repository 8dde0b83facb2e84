"""
Build Estimator Calculations Module
===================================

Pure estimation functions. Each stage takes the typed build specification
(and the results of earlier stages) plus a ModelConfig, and never raises
for missing components.
"""

from .mass import MassBreakdown, aggregate_mass, estimate_stack_mass

from .thrust import (
    ThrustEstimate,
    blend_thrust,
    calculate_computed_thrust,
    calculate_load_efficiency,
    calculate_matching_factor,
    calculate_propeller_efficiency,
    estimate_thrust,
    thrust_to_weight_ratio,
)

from .power import (
    PowerEstimate,
    calculate_disk_loading,
    calculate_hover_power,
    calculate_motor_efficiency,
    estimate_power,
)

from .flight_time import (
    FlightTimeEstimate,
    battery_utilisation,
    calculate_flight_time_ceiling,
    estimate_flight_time,
    flight_time_with_capacity,
    recommend_battery_capacity,
)

from .top_speed import calculate_drag_limited_speed, calculate_pitch_speed, estimate_top_speed

from .hover import (
    calculate_hover_current,
    calculate_hover_throttle,
    calculate_hover_time,
    estimate_hover,
)

from .compatibility import check_compatibility

from .pricing import estimate_prices

from .advisories import (
    WEIGHT_CLASSES,
    classify_frame,
    esc_utilisation,
    flight_time_advisories,
    power_advisories,
    thrust_advisories,
    validate_weight,
)

__all__ = [
    # Mass
    "MassBreakdown",
    "aggregate_mass",
    "estimate_stack_mass",
    # Thrust
    "ThrustEstimate",
    "blend_thrust",
    "calculate_computed_thrust",
    "calculate_load_efficiency",
    "calculate_matching_factor",
    "calculate_propeller_efficiency",
    "estimate_thrust",
    "thrust_to_weight_ratio",
    # Power
    "PowerEstimate",
    "calculate_disk_loading",
    "calculate_hover_power",
    "calculate_motor_efficiency",
    "estimate_power",
    # Flight time
    "FlightTimeEstimate",
    "battery_utilisation",
    "calculate_flight_time_ceiling",
    "estimate_flight_time",
    "flight_time_with_capacity",
    "recommend_battery_capacity",
    # Top speed
    "calculate_drag_limited_speed",
    "calculate_pitch_speed",
    "estimate_top_speed",
    # Hover
    "calculate_hover_current",
    "calculate_hover_throttle",
    "calculate_hover_time",
    "estimate_hover",
    # Compatibility / pricing
    "check_compatibility",
    "estimate_prices",
    # Advisories
    "WEIGHT_CLASSES",
    "classify_frame",
    "esc_utilisation",
    "flight_time_advisories",
    "power_advisories",
    "thrust_advisories",
    "validate_weight",
]
