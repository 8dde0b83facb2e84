"""
Price Estimation
================

Declared catalog prices are used as-is; missing prices are estimated from
simple heuristics on the parsed specifications. Fields the heuristics need
but the part does not declare take the configured defaults. Motor and
propeller prices count four times.
"""

from ..config import DEFAULT_CONFIG, MOTOR_COUNT, ModelConfig
from ..debugger import debug_step
from ..models.report import PriceBreakdown
from ..models.specs import (
    BatterySpec,
    BuildSpecs,
    CameraSpec,
    FrameSpec,
    MotorSpec,
    PropellerSpec,
    StackSpec,
)
from ..parsing import contains_keyword


def _keyword_multiplier(text: str, multipliers) -> float:
    """Product of the multipliers of every keyword found in the text."""
    product = 1.0
    for keyword, multiplier in multipliers:
        if contains_keyword(text, keyword):
            product *= multiplier
    return product


def estimate_motor_price(motor: MotorSpec, config: ModelConfig = DEFAULT_CONFIG) -> float:
    """Unit price: (stator × 2 + KV × 0.01) × 0.8."""
    if motor.price is not None:
        return motor.price
    pricing = config.pricing
    stator = motor.stator_diameter_mm or pricing.default_stator_mm
    kv = motor.kv or config.motor.default_kv
    return float(round(
        (stator * pricing.motor_stator_coefficient + kv * pricing.motor_kv_coefficient)
        * pricing.motor_scale
    ))


def estimate_frame_price(frame: FrameSpec, config: ModelConfig = DEFAULT_CONFIG) -> float:
    if frame.price is not None:
        return frame.price
    pricing = config.pricing
    base = (frame.wheelbase_mm or config.frame.default_wheelbase_mm) * pricing.frame_price_per_mm
    return float(round(base * _keyword_multiplier(frame.material, pricing.frame_material_multipliers)))


def estimate_stack_price(stack: StackSpec, config: ModelConfig = DEFAULT_CONFIG) -> float:
    if stack.price is not None:
        return stack.price
    pricing = config.pricing
    base = (stack.esc_current_a or pricing.default_esc_current_a) * pricing.stack_price_per_amp
    return float(round(base * _keyword_multiplier(stack.processor, pricing.stack_processor_multipliers)))


def estimate_camera_price(camera: CameraSpec, config: ModelConfig = DEFAULT_CONFIG) -> float:
    """Flat default, overridden by resolution keywords (last match wins)."""
    if camera.price is not None:
        return camera.price
    pricing = config.pricing
    price = pricing.camera_default_price
    for keyword, keyword_price in pricing.camera_resolution_prices:
        if contains_keyword(camera.resolution, keyword):
            price = keyword_price
    return price


def estimate_propeller_price(propeller: PropellerSpec, config: ModelConfig = DEFAULT_CONFIG) -> float:
    """Unit price (set of one): diameter × 0.8, doubled for carbon."""
    if propeller.price is not None:
        return propeller.price
    pricing = config.pricing
    price = (propeller.diameter_in or config.propeller.default_diameter_in) * pricing.prop_price_per_inch
    if contains_keyword(propeller.material, "carbon"):
        price *= pricing.prop_carbon_multiplier
    return round(price, 2)


def estimate_battery_price(battery: BatterySpec, config: ModelConfig = DEFAULT_CONFIG) -> float:
    if battery.price is not None:
        return battery.price
    cells = battery.cell_count or config.battery.default_cell_count
    capacity = battery.capacity_mah or config.battery.default_capacity_mah
    return float(round(capacity / 100.0 * cells * config.pricing.battery_price_per_100mah_per_cell))


def _or_zero(spec, estimator, config) -> float:
    return estimator(spec, config) if spec is not None else 0.0


def estimate_prices(specs: BuildSpecs, config: ModelConfig = DEFAULT_CONFIG) -> PriceBreakdown:
    """
    Price every selected component.

    Parameters:
    ----------
    specs : BuildSpecs
        Typed build specification

    config : ModelConfig
        Pricing heuristics

    Returns:
    -------
    PriceBreakdown
        Per-category prices; ``total`` is rounded to cents
    """
    auxiliary = sum(
        (aux.price if aux.price is not None else config.pricing.auxiliary_default_price
         for aux in specs.auxiliary),
        0.0,
    )
    breakdown = PriceBreakdown(
        motor=_or_zero(specs.motor, estimate_motor_price, config) * MOTOR_COUNT,
        frame=_or_zero(specs.frame, estimate_frame_price, config),
        stack=_or_zero(specs.stack, estimate_stack_price, config),
        camera=_or_zero(specs.camera, estimate_camera_price, config),
        propeller=round(_or_zero(specs.propeller, estimate_propeller_price, config) * MOTOR_COUNT, 2),
        battery=_or_zero(specs.battery, estimate_battery_price, config),
        auxiliary=auxiliary,
    )
    debug_step(
        category="Pricing",
        description="Build price",
        formula="Σ price (motors and props × 4)",
        variables={
            "motor": breakdown.motor,
            "frame": breakdown.frame,
            "stack": breakdown.stack,
            "camera": breakdown.camera,
            "propeller": breakdown.propeller,
            "battery": breakdown.battery,
            "auxiliary": breakdown.auxiliary,
        },
        result=breakdown.total,
        result_name="total_price",
    )
    return breakdown
