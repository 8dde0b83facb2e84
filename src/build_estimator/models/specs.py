"""
Typed Component Specifications
==============================

The single ingestion boundary between free-text catalog fields and the
estimators. ``ingest_selection`` parses every field once into numeric
records; estimators never look at raw text except for the substring
compatibility checks.

Missing or unparsable values become either None (when an estimator must
know the value is absent) or the documented default from the
configuration.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..parsing import (
    parse_cell_count,
    parse_mass_g,
    parse_prop_dimensions,
    parse_spec_value,
    parse_stator_size,
    parse_thrust_g,
)
from ..config import ModelConfig
from .component import AuxiliaryWeight, CatalogComponent, ComponentSelection


@dataclass(frozen=True)
class MotorSpec:
    """
    Parsed motor specification.

    Attributes:
    ----------
    kv : float or None
        Velocity constant (RPM/V); None when not declared

    stator_diameter_mm : float or None
        Stator diameter (first two digits of "2207")

    stator_height_mm : float or None
        Stator height (last two digits of "2207")

    mass_g : float
        Mass of one motor (g)

    declared_thrust_g : float or None
        Manufacturer maximum thrust per motor (g)
    """
    kv: Optional[float]
    stator_diameter_mm: Optional[float]
    stator_height_mm: Optional[float]
    mass_g: float
    declared_thrust_g: Optional[float]
    price: Optional[float] = None


@dataclass(frozen=True)
class PropellerSpec:
    diameter_in: Optional[float]
    pitch_in: Optional[float]
    blades: Optional[int]
    material: str
    mass_g: float
    price: Optional[float] = None

    @property
    def pitch_ratio(self) -> Optional[float]:
        """Pitch / diameter (None when either is unknown)."""
        if not self.diameter_in or self.pitch_in is None:
            return None
        return self.pitch_in / self.diameter_in


@dataclass(frozen=True)
class BatterySpec:
    capacity_mah: Optional[float]
    cell_count: Optional[int]
    c_rating: Optional[float]
    mass_g: float
    price: Optional[float] = None


@dataclass(frozen=True)
class FrameSpec:
    wheelbase_mm: Optional[float]
    material: str
    mass_g: float
    price: Optional[float] = None


@dataclass(frozen=True)
class StackSpec:
    stack_type: str
    declared_mass_g: Optional[float]
    esc_current_a: Optional[float]
    processor: str
    price: Optional[float] = None


@dataclass(frozen=True)
class CameraSpec:
    resolution: str
    mass_g: float
    price: Optional[float] = None


@dataclass(frozen=True)
class AuxiliarySpec:
    name: str
    mass_g: float
    price: Optional[float] = None


@dataclass(frozen=True)
class BuildSpecs:
    """
    Typed view of a ComponentSelection.

    Each slot is None when the component is absent. The resolver methods
    (``kv``, ``pack_voltage``, ``wheelbase_mm``, ...) fall back to the
    configuration defaults.
    """
    motor: Optional[MotorSpec] = None
    frame: Optional[FrameSpec] = None
    stack: Optional[StackSpec] = None
    camera: Optional[CameraSpec] = None
    propeller: Optional[PropellerSpec] = None
    battery: Optional[BatterySpec] = None
    auxiliary: Tuple[AuxiliarySpec, ...] = field(default_factory=tuple)

    def cell_count(self, config: ModelConfig) -> int:
        if self.battery is not None and self.battery.cell_count:
            return self.battery.cell_count
        return config.battery.default_cell_count

    def pack_voltage(self, config: ModelConfig) -> float:
        """Nominal pack voltage (V); 4S when the battery is absent or unreadable."""
        return self.cell_count(config) * config.battery.nominal_cell_voltage

    def kv(self, config: ModelConfig) -> float:
        if self.motor is not None and self.motor.kv:
            return self.motor.kv
        return config.motor.default_kv

    def stator_mm(self, config: ModelConfig) -> float:
        if self.motor is not None and self.motor.stator_diameter_mm:
            return self.motor.stator_diameter_mm
        return config.motor.default_stator_mm

    def prop_diameter_in(self, config: ModelConfig) -> float:
        if self.propeller is not None and self.propeller.diameter_in:
            return self.propeller.diameter_in
        return config.propeller.default_diameter_in

    def prop_pitch_in(self, config: ModelConfig) -> float:
        if self.propeller is not None and self.propeller.pitch_in:
            return self.propeller.pitch_in
        return config.propeller.default_pitch_in

    def wheelbase_mm(self, config: ModelConfig) -> float:
        if self.frame is not None and self.frame.wheelbase_mm:
            return self.frame.wheelbase_mm
        return config.frame.default_wheelbase_mm

    def capacity_mah(self, config: ModelConfig) -> float:
        if self.battery is not None and self.battery.capacity_mah:
            return self.battery.capacity_mah
        return config.battery.default_capacity_mah

    def c_rating(self, config: ModelConfig) -> float:
        if self.battery is not None and self.battery.c_rating:
            return self.battery.c_rating
        return config.battery.default_c_rating


def _price(component: CatalogComponent) -> Optional[float]:
    return parse_spec_value(component.get("price"), None)


def ingest_motor(component: CatalogComponent) -> MotorSpec:
    diameter, height = parse_stator_size(component.get("statorSize"))
    return MotorSpec(
        kv=parse_spec_value(component.get("kv"), None),
        stator_diameter_mm=diameter,
        stator_height_mm=height,
        mass_g=parse_mass_g(component.get("weight")),
        declared_thrust_g=parse_thrust_g(component.get("maxThrust")),
        price=_price(component),
    )


def ingest_propeller(component: CatalogComponent) -> PropellerSpec:
    diameter, pitch, blades = parse_prop_dimensions(component.get("size"))
    declared_pitch = parse_spec_value(component.get("pitch"), None)
    declared_blades = parse_spec_value(component.get("blades"), None)
    return PropellerSpec(
        diameter_in=diameter,
        pitch_in=declared_pitch if declared_pitch else pitch,
        blades=int(declared_blades) if declared_blades else blades,
        material=str(component.get("material", "")),
        mass_g=parse_mass_g(component.get("weight")),
        price=_price(component),
    )


def ingest_battery(component: CatalogComponent) -> BatterySpec:
    return BatterySpec(
        capacity_mah=parse_spec_value(component.get("capacity"), None),
        cell_count=parse_cell_count(component.get("voltage")),
        c_rating=parse_spec_value(component.get("cRating"), None),
        mass_g=parse_mass_g(component.get("weight")),
        price=_price(component),
    )


def ingest_frame(component: CatalogComponent) -> FrameSpec:
    return FrameSpec(
        wheelbase_mm=parse_spec_value(component.get("wheelbase"), None),
        material=str(component.get("material", "")),
        mass_g=parse_mass_g(component.get("weight")),
        price=_price(component),
    )


def ingest_stack(component: CatalogComponent) -> StackSpec:
    return StackSpec(
        stack_type=str(component.get("type", "")),
        declared_mass_g=parse_mass_g(component.get("weight"), None),
        esc_current_a=parse_spec_value(component.get("escCurrentRating"), None),
        processor=str(component.get("fcProcessor", "")),
        price=_price(component),
    )


def ingest_camera(component: CatalogComponent) -> CameraSpec:
    return CameraSpec(
        resolution=str(component.get("resolution", "")),
        mass_g=parse_mass_g(component.get("weight")),
        price=_price(component),
    )


def ingest_auxiliary(weight: AuxiliaryWeight) -> AuxiliarySpec:
    return AuxiliarySpec(
        name=weight.name,
        mass_g=parse_mass_g(weight.weight),
        price=parse_spec_value(weight.price, None),
    )


def ingest_selection(selection: ComponentSelection) -> BuildSpecs:
    """
    Parse every component of a selection into typed records.

    Parameters:
    ----------
    selection : ComponentSelection
        Raw catalog selection

    Returns:
    -------
    BuildSpecs
        Typed specification bundle; absent slots stay None
    """
    def _ingest(component, parser):
        return parser(component) if component is not None else None

    return BuildSpecs(
        motor=_ingest(selection.motor, ingest_motor),
        frame=_ingest(selection.frame, ingest_frame),
        stack=_ingest(selection.stack, ingest_stack),
        camera=_ingest(selection.camera, ingest_camera),
        propeller=_ingest(selection.propeller, ingest_propeller),
        battery=_ingest(selection.battery, ingest_battery),
        auxiliary=tuple(ingest_auxiliary(w) for w in selection.auxiliary_weights),
    )
