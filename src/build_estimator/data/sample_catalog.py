"""
Sample Component Catalog
========================

A small catalog of common FPV parts, written the way catalog listings
write them (free-text fields with units), plus a few reference builds.

Used by the launcher, the examples in the docs and the tests. The real
parts catalog lives outside this package.
"""

from typing import Dict, List, Tuple

from ..models.component import AuxiliaryWeight, CatalogComponent, ComponentSelection, ComponentSlot


def _component(name: str, **fields) -> CatalogComponent:
    return CatalogComponent(name=name, fields=fields)


# =============================================================================
# Motors
# =============================================================================

SAMPLE_MOTORS: Dict[str, CatalogComponent] = {
    "Freestyle 2207 2750KV": _component(
        "Freestyle 2207 2750KV",
        kv="2750KV",
        statorSize="2207",
        weight="33g",
        maxThrust="0.6kg",
        voltageCompatibility="3S, 4S, 5S, 6S",
        price="$21.99",
    ),
    "Race 2306 2450KV": _component(
        "Race 2306 2450KV",
        kv="2450KV",
        statorSize="2306",
        weight="32.5g",
        maxThrust="1450g",
        voltageCompatibility="4S, 5S, 6S",
        price="$24.99",
    ),
    "Cine 1404 3800KV": _component(
        "Cine 1404 3800KV",
        kv="3800KV",
        statorSize="1404",
        weight="9.5g",
        maxThrust="380g",
        voltageCompatibility="3S, 4S",
    ),
    "Long Range 2806.5 1300KV": _component(
        "Long Range 2806.5 1300KV",
        kv="1300KV",
        statorSize="2806",
        weight="51g",
        maxThrust="2.1kg",
        voltageCompatibility="4S, 5S, 6S",
        price="$32.00",
    ),
}


# =============================================================================
# Propellers
# =============================================================================

SAMPLE_PROPELLERS: Dict[str, CatalogComponent] = {
    "5x4.3x3 Tri-Blade": _component(
        "5x4.3x3 Tri-Blade",
        size="5x4.3x3",
        material="Polycarbonate",
        weight="4.3g",
        recommendedMotorSize="2205, 2207, 2306",
        price="$0.90",
    ),
    "51433 Tri-Blade": _component(
        "51433 Tri-Blade",
        size="51433",
        material="Polycarbonate",
        weight="4.6g",
        recommendedMotorSize="2207, 2306",
    ),
    "3x3x3 Ducted": _component(
        "3x3x3 Ducted",
        size="3x3x3",
        material="Polycarbonate",
        weight="2.1g",
        recommendedMotorSize="1303, 1404",
    ),
    "7x4x3 Long Range": _component(
        "7x4x3 Long Range",
        size="7x4x3",
        material="Glass fiber nylon",
        weight="7.5g",
        recommendedMotorSize="2806, 2807",
    ),
}


# =============================================================================
# Batteries
# =============================================================================

SAMPLE_BATTERIES: Dict[str, CatalogComponent] = {
    "4S 1300mAh 95C": _component(
        "4S 1300mAh 95C",
        capacity="1300mAh",
        voltage="4S",
        cRating="95C",
        weight="190g",
        price="$27.50",
    ),
    "4S 450mAh 75C": _component(
        "4S 450mAh 75C",
        capacity="450mAh",
        voltage="4S",
        cRating="75C",
        weight="58g",
    ),
    "4S 650mAh 75C": _component(
        "4S 650mAh 75C",
        capacity="650mAh",
        voltage="4S",
        cRating="75C",
        weight="78g",
    ),
    "6S 1100mAh 120C": _component(
        "6S 1100mAh 120C",
        capacity="1100mAh",
        voltage="6S",
        cRating="120C",
        weight="205g",
    ),
    "6S 3000mAh 15C Li-ion": _component(
        "6S 3000mAh 15C Li-ion",
        capacity="3000mAh",
        voltage="6S1P",
        cRating="15C",
        weight="290g",
    ),
}


# =============================================================================
# Frames
# =============================================================================

SAMPLE_FRAMES: Dict[str, CatalogComponent] = {
    "220mm Freestyle": _component(
        "220mm Freestyle",
        wheelbase="220mm",
        material="Carbon fiber",
        weight="145g",
        stackMounting="30.5x30.5, 20x20",
        propellerSizeCompatibility="5x4.3x3, 51433, 5.1 inch",
        price="$49.00",
    ),
    "135mm Cinewhoop": _component(
        "135mm Cinewhoop",
        wheelbase="135mm",
        material="Carbon fiber",
        weight="68g",
        stackMounting="20x20",
        propellerSizeCompatibility="3x3x3, 3 inch",
    ),
    "295mm Long Range": _component(
        "295mm Long Range",
        wheelbase="295mm",
        material="Carbon fiber",
        weight="185g",
        stackMounting="30.5x30.5",
        propellerSizeCompatibility="7x4x3, 7 inch",
    ),
}


# =============================================================================
# Stacks (flight controller + ESC)
# =============================================================================

SAMPLE_STACKS: Dict[str, CatalogComponent] = {
    "F7 45A Stack": _component(
        "F7 45A Stack",
        type="Stack",
        escCurrentRating="45A",
        fcProcessor="STM32F722",
        mountingSize="30.5x30.5",
        voltageInput="3S, 4S, 5S, 6S",
    ),
    "F4 25A Mini Stack": _component(
        "F4 25A Mini Stack",
        type="Mini Stack",
        escCurrentRating="25A",
        fcProcessor="STM32F405",
        mountingSize="20x20",
        voltageInput="2S, 3S, 4S",
    ),
    "F4 55A Stack": _component(
        "F4 55A Stack",
        type="Stack",
        weight="22g",
        escCurrentRating="55A",
        fcProcessor="STM32F405",
        mountingSize="30.5x30.5",
        voltageInput="3S, 4S, 5S, 6S",
        price="$89.99",
    ),
}


# =============================================================================
# Cameras
# =============================================================================

SAMPLE_CAMERAS: Dict[str, CatalogComponent] = {
    "Analog Micro 1200TVL": _component(
        "Analog Micro 1200TVL",
        resolution="1200TVL",
        weight="10g",
    ),
    "Digital 1080p": _component(
        "Digital 1080p",
        resolution="1080p",
        weight="28g",
    ),
}


_CATALOG: Dict[ComponentSlot, Dict[str, CatalogComponent]] = {
    ComponentSlot.MOTOR: SAMPLE_MOTORS,
    ComponentSlot.PROPELLER: SAMPLE_PROPELLERS,
    ComponentSlot.BATTERY: SAMPLE_BATTERIES,
    ComponentSlot.FRAME: SAMPLE_FRAMES,
    ComponentSlot.STACK: SAMPLE_STACKS,
    ComponentSlot.CAMERA: SAMPLE_CAMERAS,
}


def get_component(slot: ComponentSlot, name: str) -> CatalogComponent:
    """
    Get a sample component by slot and name.

    Raises:
    ------
    KeyError
        If no component of that name exists for the slot
    """
    components = _CATALOG[slot]
    if name not in components:
        raise KeyError(
            f"Unknown {slot.value} '{name}'. Available: {sorted(components.keys())}"
        )
    return components[name]


def list_components(slot: ComponentSlot) -> List[str]:
    """Sorted component names for a slot."""
    return sorted(_CATALOG[slot].keys())


# =============================================================================
# Reference Builds
# =============================================================================

# Build name -> (slot -> component name, auxiliary weights)
SAMPLE_BUILDS: Dict[str, Tuple[Dict[ComponentSlot, str], Tuple[AuxiliaryWeight, ...]]] = {
    "5-inch freestyle": (
        {
            ComponentSlot.MOTOR: "Freestyle 2207 2750KV",
            ComponentSlot.PROPELLER: "5x4.3x3 Tri-Blade",
            ComponentSlot.BATTERY: "4S 1300mAh 95C",
            ComponentSlot.FRAME: "220mm Freestyle",
            ComponentSlot.STACK: "F7 45A Stack",
            ComponentSlot.CAMERA: "Analog Micro 1200TVL",
        },
        (),
    ),
    "5-inch with action camera": (
        {
            ComponentSlot.MOTOR: "Freestyle 2207 2750KV",
            ComponentSlot.PROPELLER: "5x4.3x3 Tri-Blade",
            ComponentSlot.BATTERY: "4S 1300mAh 95C",
            ComponentSlot.FRAME: "220mm Freestyle",
            ComponentSlot.STACK: "F7 45A Stack",
            ComponentSlot.CAMERA: "Analog Micro 1200TVL",
        },
        (AuxiliaryWeight("Action camera", "100g", "$199"),),
    ),
    "3-inch cinewhoop": (
        {
            ComponentSlot.MOTOR: "Cine 1404 3800KV",
            ComponentSlot.PROPELLER: "3x3x3 Ducted",
            ComponentSlot.BATTERY: "4S 650mAh 75C",
            ComponentSlot.FRAME: "135mm Cinewhoop",
            ComponentSlot.STACK: "F4 25A Mini Stack",
            ComponentSlot.CAMERA: "Digital 1080p",
        },
        (),
    ),
    "7-inch long range": (
        {
            ComponentSlot.MOTOR: "Long Range 2806.5 1300KV",
            ComponentSlot.PROPELLER: "7x4x3 Long Range",
            ComponentSlot.BATTERY: "6S 3000mAh 15C Li-ion",
            ComponentSlot.FRAME: "295mm Long Range",
            ComponentSlot.STACK: "F4 55A Stack",
            ComponentSlot.CAMERA: "Digital 1080p",
        },
        (AuxiliaryWeight("GPS module", "12g"),),
    ),
}


def list_builds() -> List[str]:
    return sorted(SAMPLE_BUILDS.keys())


def build_selection(name: str) -> ComponentSelection:
    """
    Assemble a reference build from the sample catalog.

    Raises:
    ------
    KeyError
        If the build name is unknown
    """
    if name not in SAMPLE_BUILDS:
        raise KeyError(f"Unknown build '{name}'. Available: {list_builds()}")
    slots, auxiliary = SAMPLE_BUILDS[name]
    components = {
        slot.value: get_component(slot, component_name)
        for slot, component_name in slots.items()
    }
    return ComponentSelection(auxiliary_weights=auxiliary, **components)
