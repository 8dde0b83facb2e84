"""
Catalog Component Model
=======================

Components as they come out of the parts catalog: a name and a mapping of
specification-field name to free text. A ComponentSelection holds at most
one component per slot plus any number of auxiliary weights.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple, Union

FieldValue = Union[str, int, float]


class ComponentSlot(Enum):
    """Build slots a catalog component can fill."""
    MOTOR = "motor"
    FRAME = "frame"
    STACK = "stack"
    CAMERA = "camera"
    PROPELLER = "propeller"
    BATTERY = "battery"


@dataclass(frozen=True)
class CatalogComponent:
    """
    A catalog part with free-text specification fields.

    Attributes:
    ----------
    name : str
        Display name (e.g., "T-Motor F60 Pro V 2750KV")

    fields : Mapping[str, str | int | float]
        Specification fields keyed by catalog field name
        (e.g., {"weight": "33.5g", "kv": "2750KV"})
    """
    name: str
    fields: Mapping[str, FieldValue] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __hash__(self):
        return hash((self.name, tuple(sorted(self.fields.items(), key=lambda kv: kv[0]))))

    def __eq__(self, other):
        if not isinstance(other, CatalogComponent):
            return NotImplemented
        return self.name == other.name and dict(self.fields) == dict(other.fields)

    def get(self, key: str, default: Optional[FieldValue] = None) -> Optional[FieldValue]:
        """Return a field value, or ``default`` when the field is absent or blank."""
        value = self.fields.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            return default
        return value


@dataclass(frozen=True)
class AuxiliaryWeight:
    """User-declared extra mass (GPS, action camera mount, ...)."""
    name: str
    weight: FieldValue
    price: Optional[FieldValue] = None


@dataclass(frozen=True)
class ComponentSelection:
    """
    One candidate build.

    Any slot may be None; an absent slot contributes nothing and is never an
    error.
    """
    motor: Optional[CatalogComponent] = None
    frame: Optional[CatalogComponent] = None
    stack: Optional[CatalogComponent] = None
    camera: Optional[CatalogComponent] = None
    propeller: Optional[CatalogComponent] = None
    battery: Optional[CatalogComponent] = None
    auxiliary_weights: Tuple[AuxiliaryWeight, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "auxiliary_weights", tuple(self.auxiliary_weights))

    def get(self, slot: ComponentSlot) -> Optional[CatalogComponent]:
        """Return the component in ``slot`` (or None)."""
        return getattr(self, slot.value)

    def with_component(
        self,
        slot: ComponentSlot,
        component: Optional[CatalogComponent]
    ) -> "ComponentSelection":
        """Return a copy with ``slot`` replaced."""
        values = {s.value: self.get(s) for s in ComponentSlot}
        values[slot.value] = component
        return ComponentSelection(auxiliary_weights=self.auxiliary_weights, **values)

    def with_auxiliary(self, *weights: AuxiliaryWeight) -> "ComponentSelection":
        """Return a copy with additional auxiliary weights."""
        values = {s.value: self.get(s) for s in ComponentSlot}
        return ComponentSelection(
            auxiliary_weights=self.auxiliary_weights + tuple(weights),
            **values
        )

    def filled_slots(self) -> Iterator[Tuple[ComponentSlot, CatalogComponent]]:
        """Iterate over (slot, component) for every selected component."""
        for slot in ComponentSlot:
            component = self.get(slot)
            if component is not None:
                yield slot, component
