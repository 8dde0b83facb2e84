"""
Estimator Stage Tests
=====================

Validates each estimation stage on its own: mass, thrust, power, flight
time, top speed, hover, compatibility, pricing and advisories.

Test Methodology:
- Hand-computed values for simple inputs
- Boundary behaviour of the band tables (missing parts, clamps, ceilings)
- Physical direction checks (heavier -> more current, thinner air -> less
  thrust)
"""

import sys
from pathlib import Path
import unittest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.build_estimator import (
    CatalogComponent,
    ComponentSelection,
    build_selection,
    config_from_overrides,
    ingest_selection,
)
from src.build_estimator.calculations import (
    MassBreakdown,
    aggregate_mass,
    battery_utilisation,
    blend_thrust,
    calculate_disk_loading,
    calculate_drag_limited_speed,
    calculate_flight_time_ceiling,
    calculate_hover_power,
    calculate_hover_throttle,
    calculate_matching_factor,
    check_compatibility,
    classify_frame,
    esc_utilisation,
    estimate_flight_time,
    estimate_hover,
    estimate_power,
    estimate_prices,
    estimate_stack_mass,
    estimate_thrust,
    estimate_top_speed,
    flight_time_advisories,
    flight_time_with_capacity,
    power_advisories,
    recommend_battery_capacity,
    thrust_advisories,
    thrust_to_weight_ratio,
    validate_weight,
)
from src.build_estimator.calculations.pricing import (
    estimate_camera_price,
    estimate_frame_price,
    estimate_motor_price,
    estimate_propeller_price,
    estimate_stack_price,
)
from src.build_estimator.models.specs import (
    BatterySpec,
    BuildSpecs,
    CameraSpec,
    FrameSpec,
    MotorSpec,
    PropellerSpec,
    StackSpec,
)


def _freestyle_specs() -> BuildSpecs:
    return ingest_selection(build_selection("5-inch freestyle"))


class TestMassAggregation(unittest.TestCase):
    """Test all-up mass."""

    def test_freestyle_mass(self):
        mass = aggregate_mass(_freestyle_specs())
        # 4×33 + 145 + 30 + 10 + 4×4.3 + 190
        self.assertAlmostEqual(mass.motors, 132.0)
        self.assertAlmostEqual(mass.propellers, 17.2)
        self.assertAlmostEqual(mass.stack, 30.0)
        self.assertAlmostEqual(mass.total, 524.2)

    def test_stack_mass_by_type(self):
        self.assertEqual(estimate_stack_mass(None), 0.0)
        self.assertEqual(estimate_stack_mass(StackSpec("Stack", 22.0, 45.0, "")), 22.0)
        self.assertEqual(estimate_stack_mass(StackSpec("Mini Stack", None, 25.0, "")), 15.0)
        self.assertEqual(estimate_stack_mass(StackSpec("AIO Board", None, 20.0, "")), 20.0)
        self.assertEqual(estimate_stack_mass(StackSpec("Stack", None, 45.0, "")), 30.0)

    def test_empty_build(self):
        self.assertEqual(aggregate_mass(BuildSpecs()).total, 0.0)

    def test_distribution(self):
        breakdown = MassBreakdown(motors=100.0, battery=300.0)
        distribution = breakdown.distribution()
        self.assertEqual(distribution["motors"], 25.0)
        self.assertEqual(distribution["battery"], 75.0)
        self.assertEqual(distribution["frame"], 0.0)
        self.assertEqual(MassBreakdown().distribution()["motors"], 0.0)


class TestThrustEstimation(unittest.TestCase):
    """Test thrust blending and thrust-to-weight."""

    def test_ratio_clamped(self):
        self.assertEqual(thrust_to_weight_ratio(0, 500), 1.0)
        self.assertEqual(thrust_to_weight_ratio(1000, 0), 1.0)
        self.assertEqual(thrust_to_weight_ratio(100000, 10), 15.0)
        self.assertEqual(thrust_to_weight_ratio(1000, 500), 2.0)
        self.assertEqual(thrust_to_weight_ratio(300, 500), 1.0)

    def test_blend_modes(self):
        self.assertEqual(blend_thrust(1000.0, None), (1000.0, "computed_only"))
        value, mode = blend_thrust(1000.0, 1000.0)
        self.assertAlmostEqual(value, 1000.0)
        self.assertEqual(mode, "blended")

        value, mode = blend_thrust(500.0, 1000.0)
        self.assertAlmostEqual(value, 850.0)
        self.assertEqual(mode, "declared_low")

        value, mode = blend_thrust(2000.0, 1000.0)
        self.assertAlmostEqual(value, 1100.0)
        self.assertEqual(mode, "declared_high")

    def test_blend_weighting(self):
        # 0.6 × 1100 + 0.4 × 1000
        value, _ = blend_thrust(1100.0, 1000.0)
        self.assertAlmostEqual(value, 1060.0)

    def test_matching_factor_clamped(self):
        factor = calculate_matching_factor(2750, 14.8, 22, 5.0, 4.3)
        self.assertGreaterEqual(factor, 0.85)
        self.assertLessEqual(factor, 1.15)

    def test_freestyle_thrust(self):
        specs = _freestyle_specs()
        thrust = estimate_thrust(specs, 524.2)
        # Physics estimate well above the declared 600g -> declared × 1.1
        self.assertEqual(thrust.blend_mode, "declared_high")
        self.assertGreater(thrust.computed_per_motor_g, 1000)
        self.assertGreater(thrust.per_motor_g, 500)
        self.assertLess(thrust.per_motor_g, 660)
        self.assertEqual(thrust.total_g, int(round(thrust.per_motor_g * 4)))

    def test_missing_propeller(self):
        specs = BuildSpecs(motor=_freestyle_specs().motor)
        thrust = estimate_thrust(specs, 400.0)
        self.assertEqual(thrust.total_g, 0)
        self.assertEqual(thrust.thrust_to_weight, 1.0)

    def test_thin_air_reduces_thrust(self):
        specs = _freestyle_specs()
        high = config_from_overrides({"environment": {"altitude_m": 2500}})
        self.assertLess(estimate_thrust(specs, 524.2, high).total_g, estimate_thrust(specs, 524.2).total_g)


class TestPowerEstimation(unittest.TestCase):
    """Test current and power estimates."""

    def test_hover_power_momentum_theory(self):
        # T = 4.905 N, A = π × 0.0635², v_i = √(T / 2ρA), P = T v_i / 0.75 / 4
        power = calculate_hover_power(500.0, 5.0, 1.225)
        self.assertGreater(power, 20.0)
        self.assertLess(power, 30.0)
        self.assertEqual(calculate_hover_power(0.0, 5.0, 1.225), 0.0)

    def test_disk_loading(self):
        self.assertEqual(calculate_disk_loading(500.0, 0.0), 0.0)
        self.assertGreater(calculate_disk_loading(600.0, 5.0), calculate_disk_loading(500.0, 5.0))

    def test_fallback_without_esc(self):
        specs = BuildSpecs(motor=_freestyle_specs().motor)
        power = estimate_power(specs, 500.0, 2000.0)
        self.assertTrue(power.is_fallback)
        self.assertEqual(power.average_current_a, 25.0)
        self.assertAlmostEqual(power.power_w, 370.0)

    def test_current_within_band(self):
        power = estimate_power(_freestyle_specs(), 524.2, 2251)
        self.assertFalse(power.is_fallback)
        self.assertGreaterEqual(power.average_current_a, max(8.0, 524.2 * 0.02))
        self.assertLessEqual(power.average_current_a, 85.0)
        self.assertLessEqual(power.hover_current_a, power.sport_current_a)
        self.assertAlmostEqual(power.power_w, round(power.average_current_a * 14.8, 1))

    def test_heavier_build_draws_more(self):
        specs = _freestyle_specs()
        light = estimate_power(specs, 524.2, 2251)
        heavy = estimate_power(specs, 624.2, 2251)
        self.assertGreater(heavy.average_current_a, light.average_current_a)


class TestFlightTimeEstimation(unittest.TestCase):
    """Test endurance and its ceiling."""

    def test_no_battery(self):
        specs = BuildSpecs(motor=_freestyle_specs().motor)
        self.assertEqual(estimate_flight_time(specs, 400.0, 20.0).flight_time_min, 0.0)

    def test_ceiling_tiers(self):
        self.assertEqual(calculate_flight_time_ceiling(450, 1500, 300, 50), 10.0)
        self.assertEqual(calculate_flight_time_ceiling(1300, 1500, 300, 50), 38.0)
        self.assertEqual(calculate_flight_time_ceiling(5000, 1500, 300, 50), 55.0)
        # Racing style and high power-to-weight only reduce
        self.assertAlmostEqual(calculate_flight_time_ceiling(1300, 2750, 220, 250), 38.0 * 0.82 * 0.90)

    def test_small_pack_ceiling_with_tiny_current(self):
        specs = BuildSpecs(battery=BatterySpec(450.0, 4, 75.0, 58.0))
        estimate = estimate_flight_time(specs, 200.0, 0.5)
        self.assertLessEqual(estimate.flight_time_min, 10.0)
        self.assertLessEqual(estimate.ceiling_min, 10.0)

    def test_floor(self):
        specs = BuildSpecs(battery=BatterySpec(100.0, 4, 50.0, 20.0))
        self.assertEqual(estimate_flight_time(specs, 500.0, 85.0).flight_time_min, 0.5)

    def test_freestyle_flight_time(self):
        specs = _freestyle_specs()
        estimate = estimate_flight_time(specs, 524.2, 19.0)
        self.assertGreater(estimate.flight_time_min, 1.0)
        self.assertLessEqual(estimate.flight_time_min, estimate.ceiling_min)
        self.assertAlmostEqual(estimate.discharge_c_rate, 19.0 / 1.3)

    def test_larger_capacity_flies_longer(self):
        specs = _freestyle_specs()
        self.assertGreater(
            flight_time_with_capacity(specs, 2200, 524.2, 19.0),
            flight_time_with_capacity(specs, 1300, 524.2, 19.0),
        )
        self.assertEqual(flight_time_with_capacity(specs, 0, 524.2, 19.0), 0.0)

    def test_recommend_capacity(self):
        # 5 min at 15A / 0.85 usable = 1471 mAh -> next common size
        self.assertEqual(recommend_battery_capacity(5, 15), 1500)
        self.assertIsNone(recommend_battery_capacity(60, 50))
        self.assertIsNone(recommend_battery_capacity(0, 15))

    def test_battery_utilisation(self):
        self.assertAlmostEqual(battery_utilisation(26.0, 1300, 50), 40.0)
        self.assertEqual(battery_utilisation(26.0, 0, 50), 0.0)


class TestTopSpeedAndHover(unittest.TestCase):
    """Test top speed and hover metrics."""

    def test_missing_frame(self):
        specs = _freestyle_specs()
        no_frame = BuildSpecs(motor=specs.motor, propeller=specs.propeller, battery=specs.battery)
        self.assertEqual(estimate_top_speed(no_frame, 2251, 4.3), 0)

    def test_drag_speed_zero_without_thrust(self):
        self.assertEqual(calculate_drag_limited_speed(0.0, 220.0, 1.2), 0.0)
        self.assertGreater(calculate_drag_limited_speed(2000.0, 220.0, 1.2), 0.0)

    def test_top_speed_capped_by_frame(self):
        speed = estimate_top_speed(_freestyle_specs(), 2251, 4.3)
        self.assertGreater(speed, 0)
        self.assertLessEqual(speed, 200)

    def test_hover_throttle_limits(self):
        self.assertEqual(calculate_hover_throttle(500.0, 0.0, 2750, 5.0), 0.0)
        self.assertEqual(calculate_hover_throttle(600.0, 500.0, 2750, 5.0), 100.0)
        throttle = calculate_hover_throttle(524.2, 2251.0, 2750, 5.0)
        self.assertGreaterEqual(throttle, 25.0)
        self.assertLessEqual(throttle, 75.0)

    def test_hover_metrics(self):
        hover = estimate_hover(_freestyle_specs(), 524.2, 2251)
        self.assertGreater(hover.current_draw_a, 0.0)
        self.assertGreater(hover.hover_time_min, 0.0)
        self.assertLessEqual(hover.hover_time_min, 25.0)

    def test_no_thrust_no_hover(self):
        hover = estimate_hover(_freestyle_specs(), 524.2, 0)
        self.assertEqual(hover.throttle_percent, 0.0)
        self.assertEqual(hover.current_draw_a, 0.0)
        self.assertEqual(hover.hover_time_min, 0.0)


class TestCompatibility(unittest.TestCase):
    """Test substring compatibility checks."""

    def setUp(self):
        self.motor = CatalogComponent("M", {"statorSize": "2207", "voltageCompatibility": "4S, 5S, 6S"})
        self.prop = CatalogComponent("P", {"size": "5 inch", "recommendedMotorSize": "2207, 2306"})
        self.frame = CatalogComponent("F", {"stackMounting": "30.5x30.5", "propellerSizeCompatibility": "5, 5.1"})
        self.stack = CatalogComponent("S", {"mountingSize": "30.5x30.5", "voltageInput": "3S, 4S, 5S, 6S"})
        self.battery = CatalogComponent("B", {"voltage": "4S"})

    def test_empty_selection_is_compatible(self):
        self.assertTrue(check_compatibility(ComponentSelection()).all_compatible)

    def test_matching_build(self):
        selection = ComponentSelection(
            motor=self.motor, propeller=self.prop, frame=self.frame, stack=self.stack, battery=self.battery
        )
        self.assertTrue(check_compatibility(selection).all_compatible)

    def test_voltage_mismatch(self):
        selection = ComponentSelection(
            motor=self.motor, stack=self.stack, battery=CatalogComponent("B", {"voltage": "3S"})
        )
        report = check_compatibility(selection)
        self.assertFalse(report.voltage_match)
        self.assertFalse(report.all_compatible)

    def test_mounting_mismatch(self):
        stack = CatalogComponent("S", {"mountingSize": "20x20"})
        report = check_compatibility(ComponentSelection(frame=self.frame, stack=stack))
        self.assertFalse(report.mounting_match)
        self.assertTrue(report.prop_motor_match)

    def test_prop_motor_mismatch(self):
        motor = CatalogComponent("M", {"statorSize": "1404"})
        report = check_compatibility(ComponentSelection(motor=motor, propeller=self.prop))
        self.assertFalse(report.prop_motor_match)

    def test_missing_field_is_compatible(self):
        report = check_compatibility(ComponentSelection(motor=CatalogComponent("M", {}), propeller=self.prop))
        self.assertTrue(report.prop_motor_match)


class TestPricing(unittest.TestCase):
    """Test price heuristics."""

    def test_estimated_prices(self):
        self.assertEqual(estimate_motor_price(MotorSpec(2750.0, 22.0, 7.0, 33.0, None)), 57.0)
        self.assertEqual(estimate_frame_price(FrameSpec(220.0, "Carbon fiber", 120.0)), 66.0)
        self.assertEqual(estimate_stack_price(StackSpec("Stack", None, 45.0, "STM32F405")), 108.0)
        self.assertEqual(estimate_camera_price(CameraSpec("1080p", 10.0)), 30.0)
        self.assertEqual(estimate_camera_price(CameraSpec("1200TVL", 10.0)), 25.0)
        self.assertAlmostEqual(estimate_propeller_price(PropellerSpec(5.0, 4.3, 3, "Carbon", 4.0)), 8.0)

    def test_missing_fields_use_defaults(self):
        specs = BuildSpecs(
            motor=MotorSpec(None, None, None, 30.0, None),
            frame=FrameSpec(None, "Carbon fiber", 120.0),
            stack=StackSpec("Stack", None, None, "STM32F722"),
            propeller=PropellerSpec(None, None, None, "Plastic", 4.0),
            battery=BatterySpec(None, 4, None, 190.0),
        )
        prices = estimate_prices(specs)
        self.assertEqual(prices.motor, 192.0)
        self.assertEqual(prices.frame, 66.0)
        self.assertEqual(prices.stack, 90.0)
        self.assertEqual(prices.camera, 0.0)
        self.assertAlmostEqual(prices.propeller, 16.0)
        self.assertEqual(prices.battery, 26.0)

    def test_every_matching_keyword_applies(self):
        self.assertEqual(estimate_frame_price(FrameSpec(220.0, "Carbon/Titanium", 120.0)), 132.0)
        self.assertEqual(estimate_stack_price(StackSpec("Stack", None, 30.0, "F4/F7 dual")), 108.0)

    def test_declared_price_wins(self):
        self.assertEqual(estimate_motor_price(MotorSpec(2750.0, 22.0, 7.0, 33.0, None, price=19.5)), 19.5)

    def test_breakdown(self):
        specs = BuildSpecs(
            motor=MotorSpec(2750.0, 22.0, 7.0, 33.0, None, price=20.0),
            propeller=PropellerSpec(5.0, 4.3, 3, "", 4.3, price=1.0),
            battery=BatterySpec(1300.0, 4, 95.0, 190.0),
        )
        prices = estimate_prices(specs)
        self.assertEqual(prices.motor, 80.0)
        self.assertEqual(prices.propeller, 4.0)
        self.assertEqual(prices.battery, 26.0)
        self.assertEqual(prices.frame, 0.0)
        self.assertEqual(prices.total, 110.0)

    def test_empty_build_costs_nothing(self):
        self.assertEqual(estimate_prices(BuildSpecs()).total, 0.0)
        self.assertIsInstance(estimate_prices(BuildSpecs()).auxiliary, float)


class TestAdvisories(unittest.TestCase):
    """Test advisory bands."""

    def test_thrust_bands(self):
        optimal, notes = thrust_advisories(0.8)
        self.assertFalse(optimal)
        self.assertEqual(len(notes), 2)
        self.assertTrue(thrust_advisories(3.0)[0])
        self.assertTrue(thrust_advisories(5.5)[0])
        self.assertFalse(thrust_advisories(7.0)[0])

    def test_weight_classes(self):
        self.assertIsNone(classify_frame(None))
        self.assertEqual(classify_frame(220).name, "5-inch")
        self.assertEqual(classify_frame(135).name, "3-inch")
        self.assertEqual(validate_weight(500, 220), (True, "5-inch", []))
        is_valid, category, notes = validate_weight(900, 220)
        self.assertFalse(is_valid)
        self.assertEqual(len(notes), 1)
        self.assertEqual(validate_weight(900, None)[1], "Unknown")

    def test_power_notes(self):
        self.assertAlmostEqual(esc_utilisation(18.0, 45.0), 10.0)
        notes = power_advisories(18.0, 45.0)
        self.assertEqual(len(notes), 2)
        self.assertEqual(power_advisories(0.0, 0.0), [])

    def test_flight_time_notes(self):
        self.assertEqual(flight_time_advisories(0.0, 1300, 95), [])
        notes = flight_time_advisories(3.0, 450, 20, kv=2750, wheelbase_mm=220)
        self.assertEqual(len(notes), 4)


def run_validation():
    """Run validation tests and print summary."""
    print("=" * 60)
    print("Estimator Stage Validation")
    print("=" * 60)
    print()

    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    suite.addTests(loader.loadTestsFromTestCase(TestMassAggregation))
    suite.addTests(loader.loadTestsFromTestCase(TestThrustEstimation))
    suite.addTests(loader.loadTestsFromTestCase(TestPowerEstimation))
    suite.addTests(loader.loadTestsFromTestCase(TestFlightTimeEstimation))
    suite.addTests(loader.loadTestsFromTestCase(TestTopSpeedAndHover))
    suite.addTests(loader.loadTestsFromTestCase(TestCompatibility))
    suite.addTests(loader.loadTestsFromTestCase(TestPricing))
    suite.addTests(loader.loadTestsFromTestCase(TestAdvisories))

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
