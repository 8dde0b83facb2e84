"""
Debug Trace Functions
=====================

Run a full build estimate with every calculation step recorded.
"""

from typing import Optional

from .config import DEFAULT_CONFIG, ModelConfig
from .debugger import CalculationDebugger, debugging
from .estimator import estimate
from .models.component import ComponentSelection
from .models.specs import ingest_selection


def trace_estimate(
    selection: ComponentSelection,
    config: Optional[ModelConfig] = None,
    **metadata
) -> CalculationDebugger:
    """
    Trace all build estimation steps.

    Parameters:
    ----------
    selection : ComponentSelection
        The build to analyze

    config : ModelConfig, optional
        Model configuration (DEFAULT_CONFIG when omitted)

    **metadata
        Extra labels shown in the report header

    Returns:
    -------
    CalculationDebugger
        Debugger with all calculation steps recorded; the final report
        values are recorded in the "RESULTS" section
    """
    if config is None:
        config = DEFAULT_CONFIG

    components = {slot.value: component.name for slot, component in selection.filled_slots()}
    debugger = CalculationDebugger(**components, **metadata)

    # ==========================================================================
    # SECTION 1: INPUT PARAMETERS
    # ==========================================================================
    debugger.start_section("INPUT PARAMETERS")
    specs = ingest_selection(selection)

    debugger.add_input("cells", specs.cell_count(config), "S", "Battery cell count")
    debugger.add_input("V_pack", specs.pack_voltage(config), "V", "Nominal pack voltage")
    debugger.add_input("KV", specs.kv(config), "RPM/V", "Motor velocity constant")
    debugger.add_input("stator", specs.stator_mm(config), "mm", "Stator diameter")
    debugger.add_input("D_prop", specs.prop_diameter_in(config), "in", "Propeller diameter")
    debugger.add_input("P_prop", specs.prop_pitch_in(config), "in", "Propeller pitch")
    debugger.add_input("wheelbase", specs.wheelbase_mm(config), "mm", "Frame wheelbase")
    debugger.add_input("ρ", config.environment.air_density(), "kg/m³", "Air density at altitude")

    # ==========================================================================
    # SECTION 2: ESTIMATION PIPELINE
    # ==========================================================================
    with debugging(debugger):
        report = estimate(selection, config)

    # ==========================================================================
    # SECTION 3: RESULTS
    # ==========================================================================
    debugger.start_section("RESULTS")
    debugger.add_input("total_mass", report.total_mass_g, "g")
    debugger.add_input("TWR", report.thrust_to_weight_ratio)
    debugger.add_input("max_thrust", report.max_thrust_g, "g")
    debugger.add_input("avg_current", report.average_current_a, "A")
    debugger.add_input("flight_time", report.estimated_flight_time_min, "min")
    debugger.add_input("top_speed", report.estimated_top_speed_kmh, "km/h")
    debugger.add_input("total_price", report.total_price)

    debugger.finish()
    return debugger
