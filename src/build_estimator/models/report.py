"""
Performance Report Model
========================

Immutable result records returned by the estimators and the facade.
``to_dict()`` yields plain, JSON-serialisable values.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, Tuple


@dataclass(frozen=True)
class HoverMetrics:
    """
    Hover-specific estimates.

    Attributes:
    ----------
    throttle_percent : float
        Throttle needed to hover (%); 100 when thrust cannot lift the build,
        0 when no thrust estimate exists

    current_draw_a : float
        Total battery current at hover (A)

    hover_time_min : float
        Endurance when hovering only (minutes)
    """
    throttle_percent: float = 0.0
    current_draw_a: float = 0.0
    hover_time_min: float = 0.0


@dataclass(frozen=True)
class MotorMetrics:
    kv: float = 0.0
    voltage: float = 0.0
    estimated_rpm: int = 0
    prop_size: str = "N/A"


@dataclass(frozen=True)
class BatteryMetrics:
    voltage: float = 0.0
    capacity_mah: float = 0.0
    cells: int = 0
    max_discharge_a: float = 0.0


@dataclass(frozen=True)
class PriceBreakdown:
    """Per-category price (motor and propeller already ×4)."""
    motor: float = 0.0
    frame: float = 0.0
    stack: float = 0.0
    camera: float = 0.0
    propeller: float = 0.0
    battery: float = 0.0
    auxiliary: float = 0.0

    @property
    def total(self) -> float:
        return round(
            self.motor + self.frame + self.stack + self.camera
            + self.propeller + self.battery + self.auxiliary,
            2,
        )


@dataclass(frozen=True)
class CompatibilityReport:
    """Pairwise substring checks; True whenever a side is absent."""
    prop_motor_match: bool = True
    voltage_match: bool = True
    mounting_match: bool = True
    frame_prop_match: bool = True

    @property
    def all_compatible(self) -> bool:
        return (
            self.prop_motor_match and self.voltage_match
            and self.mounting_match and self.frame_prop_match
        )


@dataclass(frozen=True)
class PerformanceReport:
    """
    Complete performance estimate for one build.

    Attributes:
    ----------
    total_mass_g : float
        All-up mass (g)

    thrust_to_weight_ratio : float
        Clamped to [1.0, 15.0]

    max_thrust_kg, max_thrust_g : float, int
        Total maximum thrust of all motors

    estimated_top_speed_kmh : int
        Level-flight top speed (km/h)

    estimated_flight_time_min : float
        Mixed-flight endurance (minutes)

    average_current_a : float
        Average battery current over the flight mix (A)

    power_draw_w : float
        Average electrical power (W)

    hovering, motors, battery : ...
        Sub-reports

    total_price : float
        Sum of price_breakdown (currency units, rounded to cents)

    price_breakdown : PriceBreakdown
        Per-category prices

    compatibility : CompatibilityReport
        Component compatibility flags
    """
    total_mass_g: float
    thrust_to_weight_ratio: float
    max_thrust_kg: float
    max_thrust_g: int
    estimated_top_speed_kmh: int
    estimated_flight_time_min: float
    average_current_a: float
    power_draw_w: float
    hovering: HoverMetrics = field(default_factory=HoverMetrics)
    motors: MotorMetrics = field(default_factory=MotorMetrics)
    battery: BatteryMetrics = field(default_factory=BatteryMetrics)
    total_price: float = 0.0
    price_breakdown: PriceBreakdown = field(default_factory=PriceBreakdown)
    compatibility: CompatibilityReport = field(default_factory=CompatibilityReport)
    warnings: Tuple[str, ...] = ()

    def to_dict(self) -> Dict:
        """Return the report as nested plain dictionaries."""
        data = asdict(self)
        data["warnings"] = list(self.warnings)
        data["compatibility"]["all_compatible"] = self.compatibility.all_compatible
        return data
