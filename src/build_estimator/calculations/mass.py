"""
Mass Aggregation
================

All-up mass of a build:
- Motors and propellers count four times (quadcopter)
- Frame, stack, camera and battery count once
- Auxiliary weights are summed

Stack mass uses the declared weight when present, otherwise a lookup on the
stack type ("mini" stacks are lighter, "AIO" boards combine FC and ESC).
"""

from dataclasses import dataclass
from typing import Dict, Optional

from ..config import DEFAULT_CONFIG, MOTOR_COUNT, ModelConfig
from ..debugger import debug_step
from ..models.specs import BuildSpecs, StackSpec
from ..parsing import contains_keyword


@dataclass(frozen=True)
class MassBreakdown:
    """
    Mass per category (g). ``motors`` and ``propellers`` are totals for all
    four units.
    """
    motors: float = 0.0
    frame: float = 0.0
    stack: float = 0.0
    camera: float = 0.0
    propellers: float = 0.0
    battery: float = 0.0
    auxiliary: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.motors + self.frame + self.stack + self.camera
            + self.propellers + self.battery + self.auxiliary
        )

    def distribution(self) -> Dict[str, float]:
        """Share of total mass per category (%), rounded to 0.1."""
        total = self.total
        parts = {
            "motors": self.motors,
            "frame": self.frame,
            "stack": self.stack,
            "camera": self.camera,
            "propellers": self.propellers,
            "battery": self.battery,
            "auxiliary": self.auxiliary,
        }
        if total <= 0:
            return {name: 0.0 for name in parts}
        return {name: round(value / total * 100.0, 1) for name, value in parts.items()}


def estimate_stack_mass(stack: Optional[StackSpec], config: ModelConfig = DEFAULT_CONFIG) -> float:
    """
    Mass of the flight-control stack (g).

    Parameters:
    ----------
    stack : StackSpec or None
        Parsed stack; None contributes 0

    config : ModelConfig
        Supplies the type-keyword masses

    Returns:
    -------
    float
        Declared mass, or the type-based estimate
    """
    if stack is None:
        return 0.0
    if stack.declared_mass_g is not None:
        return stack.declared_mass_g

    for keyword, mass in config.mass.stack_type_masses:
        if contains_keyword(stack.stack_type, keyword):
            return mass
    return config.mass.default_stack_mass_g


def aggregate_mass(specs: BuildSpecs, config: ModelConfig = DEFAULT_CONFIG) -> MassBreakdown:
    """
    Sum the mass of every selected component.

    Parameters:
    ----------
    specs : BuildSpecs
        Typed build specification

    config : ModelConfig
        Model configuration

    Returns:
    -------
    MassBreakdown
        Per-category and total mass (g); never negative
    """
    breakdown = MassBreakdown(
        motors=specs.motor.mass_g * MOTOR_COUNT if specs.motor else 0.0,
        frame=specs.frame.mass_g if specs.frame else 0.0,
        stack=estimate_stack_mass(specs.stack, config),
        camera=specs.camera.mass_g if specs.camera else 0.0,
        propellers=specs.propeller.mass_g * MOTOR_COUNT if specs.propeller else 0.0,
        battery=specs.battery.mass_g if specs.battery else 0.0,
        auxiliary=sum(aux.mass_g for aux in specs.auxiliary),
    )

    debug_step(
        category="Mass",
        description="All-up mass",
        formula="m = 4×m_motor + 4×m_prop + m_frame + m_stack + m_camera + m_battery + Σm_aux",
        variables={
            "motors": breakdown.motors,
            "propellers": breakdown.propellers,
            "frame": breakdown.frame,
            "stack": breakdown.stack,
            "camera": breakdown.camera,
            "battery": breakdown.battery,
            "auxiliary": breakdown.auxiliary,
        },
        result=breakdown.total,
        result_name="total_mass",
        result_unit="g",
    )
    return breakdown
