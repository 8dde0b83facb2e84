"""
Build Estimator Integration Tests
=================================

Runs the complete estimate on reference builds and checks the report
against hand calculations and physical expectations.

Reference build (5-inch freestyle):
- 4 × 33g motors, 4 × 4.3g props, 145g frame, 30g stack, 10g camera,
  190g battery -> 524.2g all-up
- Declared 600g thrust per motor, physics estimate far above it -> declared
  value × 1.1, derated for conditions and motor/prop matching
- Priced 328.06 (declared prices, F7 45A stack estimated at 135)
"""

import json
import math
import sys
from pathlib import Path
import unittest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.build_estimator import (
    AuxiliaryWeight,
    CalculationDebugger,
    CatalogComponent,
    ComponentSelection,
    ComponentSlot,
    DEFAULT_CONFIG,
    PerformanceReport,
    build_selection,
    config_from_overrides,
    detailed_breakdown,
    estimate,
    get_component,
    get_debugger,
    list_builds,
    trace_estimate,
)


class TestReferenceBuild(unittest.TestCase):
    """Test the 5-inch freestyle reference build."""

    @classmethod
    def setUpClass(cls):
        cls.selection = build_selection("5-inch freestyle")
        cls.report = estimate(cls.selection)

    def test_mass(self):
        self.assertAlmostEqual(self.report.total_mass_g, 524.2)

    def test_thrust_to_weight(self):
        self.assertGreater(self.report.thrust_to_weight_ratio, 2.0)
        self.assertLess(self.report.thrust_to_weight_ratio, 5.0)
        self.assertAlmostEqual(self.report.max_thrust_kg, round(self.report.max_thrust_g / 1000.0, 2))

    def test_flight_time(self):
        self.assertGreater(self.report.estimated_flight_time_min, 0.5)
        # 1300mAh tier (38 min) reduced for a high-KV 220mm build
        self.assertLess(self.report.estimated_flight_time_min, 38.0 * 0.82)

    def test_power(self):
        self.assertGreater(self.report.average_current_a, 0.0)
        self.assertAlmostEqual(self.report.power_draw_w, round(self.report.average_current_a * 14.8, 1))

    def test_top_speed_within_frame_ceiling(self):
        self.assertGreater(self.report.estimated_top_speed_kmh, 0)
        self.assertLessEqual(self.report.estimated_top_speed_kmh, 200)

    def test_hover(self):
        self.assertGreaterEqual(self.report.hovering.throttle_percent, 25.0)
        self.assertLessEqual(self.report.hovering.throttle_percent, 75.0)
        self.assertGreater(self.report.hovering.hover_time_min, 0.0)

    def test_price(self):
        self.assertAlmostEqual(self.report.total_price, 328.06, places=2)
        self.assertAlmostEqual(self.report.price_breakdown.motor, 87.96, places=2)
        self.assertEqual(self.report.price_breakdown.stack, 135.0)
        self.assertEqual(self.report.total_price, self.report.price_breakdown.total)

    def test_compatible(self):
        self.assertTrue(self.report.compatibility.all_compatible)
        self.assertEqual(self.report.warnings, ())

    def test_sub_reports(self):
        self.assertEqual(self.report.motors.kv, 2750.0)
        self.assertEqual(self.report.motors.voltage, 14.8)
        self.assertEqual(self.report.motors.estimated_rpm, 40700)
        self.assertEqual(self.report.battery.cells, 4)
        self.assertEqual(self.report.battery.capacity_mah, 1300.0)
        self.assertEqual(self.report.battery.max_discharge_a, 123.5)

    def test_deterministic(self):
        self.assertEqual(estimate(self.selection), self.report)

    def test_report_serialises(self):
        data = self.report.to_dict()
        self.assertTrue(data["compatibility"]["all_compatible"])
        self.assertEqual(data["warnings"], [])
        json.dumps(data)


class TestPartialBuilds(unittest.TestCase):
    """Test builds with missing or extra components."""

    def setUp(self):
        self.full = build_selection("5-inch freestyle")

    def test_no_propeller(self):
        selection = self.full.with_component(ComponentSlot.PROPELLER, None)
        report = estimate(selection)
        self.assertEqual(report.max_thrust_g, 0)
        self.assertEqual(report.thrust_to_weight_ratio, 1.0)
        self.assertEqual(report.estimated_top_speed_kmh, 0)
        self.assertAlmostEqual(report.total_mass_g, 507.0)
        self.assertEqual(report.price_breakdown.propeller, 0.0)
        self.assertEqual(report.motors.prop_size, "N/A")
        self.assertEqual(report.hovering.throttle_percent, 0.0)

    def test_auxiliary_weight(self):
        base = estimate(self.full)
        heavier = estimate(self.full.with_auxiliary(AuxiliaryWeight("Action camera", "100g", "$199")))
        self.assertAlmostEqual(heavier.total_mass_g, base.total_mass_g + 100.0)
        self.assertLess(heavier.thrust_to_weight_ratio, base.thrust_to_weight_ratio)
        self.assertGreater(heavier.average_current_a, base.average_current_a)
        self.assertLess(heavier.estimated_flight_time_min, base.estimated_flight_time_min)
        self.assertAlmostEqual(heavier.total_price, base.total_price + 199.0, places=2)

    def test_mass_grows_with_each_weight(self):
        masses = []
        selection = self.full
        for grams in ("5g", "20g", "50g"):
            selection = selection.with_auxiliary(AuxiliaryWeight("Ballast", grams))
            masses.append(estimate(selection).total_mass_g)
        self.assertEqual(masses, sorted(masses))
        self.assertAlmostEqual(masses[-1] - masses[0], 70.0)

    def test_small_battery_ceiling(self):
        small = get_component(ComponentSlot.BATTERY, "4S 450mAh 75C")
        report = estimate(self.full.with_component(ComponentSlot.BATTERY, small))
        self.assertLessEqual(report.estimated_flight_time_min, 10.0)
        self.assertGreater(report.estimated_flight_time_min, 0.0)

    def test_empty_selection(self):
        report = estimate(ComponentSelection())
        self.assertEqual(report.total_mass_g, 0.0)
        self.assertEqual(report.max_thrust_g, 0)
        self.assertEqual(report.thrust_to_weight_ratio, 1.0)
        self.assertEqual(report.estimated_flight_time_min, 0.0)
        self.assertEqual(report.estimated_top_speed_kmh, 0)
        self.assertEqual(report.total_price, 0.0)
        self.assertTrue(report.compatibility.all_compatible)
        self.assertEqual(report.average_current_a, 25.0)
        self.assertAlmostEqual(report.power_draw_w, 370.0)
        self.assertEqual(report.hovering.throttle_percent, 0.0)
        self.assertEqual(report.hovering.current_draw_a, 0.0)
        self.assertEqual(report.hovering.hover_time_min, 0.0)
        self.assertTrue(any("default 25A" in warning for warning in report.warnings))

    def test_incompatible_battery_warns(self):
        motor = CatalogComponent("4S motor", {"kv": "2400KV", "voltageCompatibility": "3S, 4S"})
        battery = CatalogComponent("6S pack", {"voltage": "6S", "capacity": "1100mAh"})
        report = estimate(ComponentSelection(motor=motor, battery=battery))
        self.assertFalse(report.compatibility.voltage_match)
        self.assertIn("Battery cell count is not supported by the motor or stack", report.warnings)


class TestExtremeInputs(unittest.TestCase):
    """Test that absurd catalog values degrade instead of raising."""

    def setUp(self):
        self.full = build_selection("5-inch freestyle")

    def test_enormous_kv_without_declared_thrust(self):
        motor = CatalogComponent("Runaway", {"kv": "1" + "0" * 200 + "KV", "statorSize": "2207"})
        report = estimate(self.full.with_component(ComponentSlot.MOTOR, motor))
        self.assertGreaterEqual(report.thrust_to_weight_ratio, 1.0)
        self.assertLessEqual(report.thrust_to_weight_ratio, 15.0)
        self.assertTrue(math.isfinite(report.max_thrust_g))
        self.assertTrue(math.isfinite(report.estimated_flight_time_min))

    def test_enormous_integer_fields(self):
        motor = CatalogComponent("Runaway", {"kv": 10 ** 400, "statorSize": 10 ** 400})
        report = estimate(self.full.with_component(ComponentSlot.MOTOR, motor))
        self.assertTrue(math.isfinite(report.max_thrust_g))

    def test_negative_weight_is_ignored(self):
        selection = ComponentSelection(
            frame=CatalogComponent("Frame", {"weight": -200}),
            camera=CatalogComponent("Camera", {"weight": "10g"}),
        )
        self.assertEqual(estimate(selection).total_mass_g, 10.0)

    def test_nan_weight_is_ignored(self):
        selection = ComponentSelection(
            frame=CatalogComponent("Frame", {"weight": float("nan")}),
            camera=CatalogComponent("Camera", {"weight": "10g"}),
        )
        self.assertEqual(estimate(selection).total_mass_g, 10.0)

    def test_unreadable_stack_weight_uses_type_estimate(self):
        stack = CatalogComponent("Stack", {"type": "Mini Stack", "weight": "N/A"})
        report = estimate(ComponentSelection(stack=stack))
        self.assertEqual(report.total_mass_g, 15.0)


class TestSampleBuilds(unittest.TestCase):
    """Test every reference build stays inside the reported ranges."""

    def test_ranges(self):
        for name in list_builds():
            with self.subTest(build=name):
                report = estimate(build_selection(name))
                self.assertIsInstance(report, PerformanceReport)
                self.assertGreater(report.total_mass_g, 0.0)
                self.assertGreaterEqual(report.thrust_to_weight_ratio, 1.0)
                self.assertLessEqual(report.thrust_to_weight_ratio, 15.0)
                self.assertGreaterEqual(report.estimated_flight_time_min, 0.5)
                self.assertGreaterEqual(report.estimated_top_speed_kmh, 0)
                self.assertGreater(report.total_price, 0.0)


class TestConfiguration(unittest.TestCase):
    """Test model configuration and environment effects."""

    def test_default_is_valid(self):
        self.assertEqual(DEFAULT_CONFIG.validate(), (True, ""))

    def test_overrides_do_not_modify_default(self):
        config = config_from_overrides({"environment": {"altitude_m": 1500}})
        self.assertEqual(config.environment.altitude_m, 1500)
        self.assertEqual(DEFAULT_CONFIG.environment.altitude_m, 0.0)
        self.assertEqual(config.battery, DEFAULT_CONFIG.battery)

    def test_unknown_override(self):
        with self.assertRaises(KeyError):
            config_from_overrides({"weather": {}})
        with self.assertRaises(KeyError):
            config_from_overrides({"environment": {"pressure": 1000}})

    def test_invalid_values(self):
        ok, message = config_from_overrides({"environment": {"humidity_percent": 150}}).validate()
        self.assertFalse(ok)
        self.assertIn("Humidity", message)

        ok, _ = config_from_overrides({"flight_mix": {"hover_fraction": 0.5}}).validate()
        self.assertFalse(ok)

    def test_list_overrides_become_tuples(self):
        config = config_from_overrides({"thrust": {"twr_clamp": [1.0, 10.0]}})
        self.assertEqual(config.thrust.twr_clamp, (1.0, 10.0))

    def test_air_density(self):
        self.assertAlmostEqual(DEFAULT_CONFIG.environment.air_density(), 1.204, places=2)
        high = config_from_overrides({"environment": {"altitude_m": 2000}})
        self.assertLess(high.environment.air_density(), DEFAULT_CONFIG.environment.air_density())

    def test_altitude_lowers_thrust(self):
        selection = build_selection("5-inch freestyle")
        high = config_from_overrides({"environment": {"altitude_m": 2000}})
        self.assertLess(estimate(selection, high).max_thrust_g, estimate(selection).max_thrust_g)


class TestTraceAndBreakdown(unittest.TestCase):
    """Test the estimation trace and the detailed breakdown."""

    def setUp(self):
        self.selection = build_selection("5-inch freestyle")

    def test_trace_records_every_stage(self):
        debugger = trace_estimate(self.selection, build="5-inch freestyle")
        self.assertGreater(debugger.get_step_count(), 10)
        for category in ("Mass", "Thrust", "Power", "Flight Time", "Top Speed", "Hover", "Pricing"):
            self.assertTrue(debugger.find_steps_by_category(category), category)
        self.assertEqual(len(debugger.find_steps_by_category("Input")), 15)

    def test_trace_matches_report(self):
        report = estimate(self.selection)
        debugger = trace_estimate(self.selection)
        results = debugger.results()
        self.assertEqual(results["total_mass"], report.total_mass_g)
        self.assertEqual(results["flight_time"], report.estimated_flight_time_min)
        self.assertEqual(debugger.find_step_by_result("TWR").result, report.thrust_to_weight_ratio)

    def test_trace_report_text(self):
        text = trace_estimate(self.selection, build="freestyle").get_report()
        self.assertIn("ESTIMATION TRACE", text)
        self.assertIn(">>> INPUT PARAMETERS", text)
        self.assertIn(">>> RESULTS", text)
        self.assertIn("build: freestyle", text)

    def test_sections_follow_steps(self):
        debugger = CalculationDebugger(build="bench")
        debugger.add_input("a", 1.0)
        debugger.start_section("STAGE")
        debugger.add_step("Thrust", "Double it", 2.0, "b", formula="b = 2a", variables={"a": 1.0})
        debugger.finish()
        self.assertIsNone(debugger.steps[0].section)
        self.assertEqual(debugger.steps[1].section, "STAGE")
        text = debugger.get_report()
        self.assertIn("build: bench", text)
        self.assertEqual(text.count(">>> "), 1)
        self.assertIn("Formula: b = 2a", text)
        self.assertIn("Elapsed Time:", text)

    def test_debugger_removed_after_trace(self):
        trace_estimate(self.selection)
        self.assertIsNone(get_debugger())

    def test_breakdown(self):
        breakdown = detailed_breakdown(self.selection)
        for key in (
            "mass", "total_mass_g", "mass_distribution", "thrust", "power", "flight_time",
            "top_speed_kmh", "hover", "compatibility", "prices", "total_price",
            "utilisation", "weight_class", "advisories", "warnings",
        ):
            self.assertIn(key, breakdown)
        self.assertEqual(breakdown["weight_class"], {"category": "5-inch", "is_valid": True})
        self.assertTrue(breakdown["advisories"]["thrust_is_optimal"])
        self.assertAlmostEqual(sum(breakdown["mass_distribution"].values()), 100.0, delta=0.5)
        self.assertEqual(breakdown["total_price"], estimate(self.selection).total_price)

    def test_underpowered_build_is_flagged(self):
        selection = self.selection.with_auxiliary(AuxiliaryWeight("Ballast", "20kg"))
        report = estimate(selection)
        self.assertEqual(report.thrust_to_weight_ratio, 1.0)
        advisories = detailed_breakdown(selection)["advisories"]
        self.assertFalse(advisories["thrust_is_optimal"])
        self.assertIn("below 1.0", advisories["thrust"][0])


def run_validation():
    """Run validation tests and print summary."""
    print("=" * 60)
    print("Build Estimator Validation")
    print("=" * 60)
    print()

    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    suite.addTests(loader.loadTestsFromTestCase(TestReferenceBuild))
    suite.addTests(loader.loadTestsFromTestCase(TestPartialBuilds))
    suite.addTests(loader.loadTestsFromTestCase(TestExtremeInputs))
    suite.addTests(loader.loadTestsFromTestCase(TestSampleBuilds))
    suite.addTests(loader.loadTestsFromTestCase(TestConfiguration))
    suite.addTests(loader.loadTestsFromTestCase(TestTraceAndBreakdown))

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    print()
    print("=" * 60)
    if result.wasSuccessful():
        print("All validation tests PASSED")
    else:
        print(f"FAILED: {len(result.failures)} failures, {len(result.errors)} errors")
    print("=" * 60)

    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_validation()
    sys.exit(0 if success else 1)
