"""
Component Compatibility
=======================

Plain substring checks between catalog fields. Each check reports True when
either component (or the field being compared) is missing: absence is never
reported as an incompatibility.

Checks:
-------
- prop_motor_match: propeller ``recommendedMotorSize`` contains the motor
  ``statorSize``
- voltage_match: "{cells}S" appears in the motor ``voltageCompatibility``
  and the stack ``voltageInput``
- mounting_match: frame ``stackMounting`` contains the stack ``mountingSize``
- frame_prop_match: frame ``propellerSizeCompatibility`` contains the
  propeller ``size`` without its " inch" suffix
"""

from typing import Optional

from ..debugger import debug_step
from ..models.component import CatalogComponent, ComponentSelection
from ..models.report import CompatibilityReport
from ..parsing import parse_cell_count


def _field_text(component: Optional[CatalogComponent], key: str) -> Optional[str]:
    if component is None:
        return None
    value = component.get(key)
    return None if value is None else str(value)


def _contains(haystack: Optional[str], needle: Optional[str]) -> bool:
    if haystack is None or needle is None:
        return True
    return needle in haystack


def check_prop_motor(selection: ComponentSelection) -> bool:
    return _contains(
        _field_text(selection.propeller, "recommendedMotorSize"),
        _field_text(selection.motor, "statorSize"),
    )


def check_voltage(selection: ComponentSelection) -> bool:
    """Both the motor and the stack must list the battery's cell count."""
    if selection.battery is None or (selection.motor is None and selection.stack is None):
        return True

    cells = parse_cell_count(selection.battery.get("voltage"))
    if cells is None:
        return True
    required = f"{cells}S"

    motor_ok = _contains(_field_text(selection.motor, "voltageCompatibility"), required)
    stack_ok = _contains(_field_text(selection.stack, "voltageInput"), required)
    return motor_ok and stack_ok


def check_mounting(selection: ComponentSelection) -> bool:
    return _contains(
        _field_text(selection.frame, "stackMounting"),
        _field_text(selection.stack, "mountingSize"),
    )


def check_frame_prop(selection: ComponentSelection) -> bool:
    size = _field_text(selection.propeller, "size")
    if size is not None:
        size = size.replace(" inch", "")
    return _contains(_field_text(selection.frame, "propellerSizeCompatibility"), size)


def check_compatibility(selection: ComponentSelection) -> CompatibilityReport:
    """
    Run every pairwise compatibility check.

    Parameters:
    ----------
    selection : ComponentSelection
        Raw catalog selection (text fields are compared as-is)

    Returns:
    -------
    CompatibilityReport
        Four flags; all True for an empty selection
    """
    report = CompatibilityReport(
        prop_motor_match=check_prop_motor(selection),
        voltage_match=check_voltage(selection),
        mounting_match=check_mounting(selection),
        frame_prop_match=check_frame_prop(selection),
    )
    debug_step(
        category="Compatibility",
        description="Component compatibility",
        formula="substring checks",
        variables={
            "prop_motor": report.prop_motor_match,
            "voltage": report.voltage_match,
            "mounting": report.mounting_match,
            "frame_prop": report.frame_prop_match,
        },
        result=report.all_compatible,
        result_name="all_compatible",
    )
    return report
