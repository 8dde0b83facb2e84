"""
Analysis Tool Tests
===================

Validates the sample catalog, battery-capacity sweeps and solving, parallel build
comparison and the plotting helpers.
"""

import sys
from pathlib import Path
import unittest

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.build_estimator import (
    ComponentSelection,
    ComponentSlot,
    build_selection,
    capacity_for_flight_time,
    compare_builds,
    estimate,
    get_component,
    list_builds,
    list_components,
    run_pipeline,
    sweep_battery_capacity,
)
from src.build_estimator.plotting import BuildPlotter
from src.build_estimator.sweep import best_build, default_capacities


class TestSampleCatalog(unittest.TestCase):
    """Test sample component lookup."""

    def test_lists(self):
        self.assertIn("5-inch freestyle", list_builds())
        self.assertEqual(list_builds(), sorted(list_builds()))
        self.assertIn("Freestyle 2207 2750KV", list_components(ComponentSlot.MOTOR))

    def test_unknown_names(self):
        with self.assertRaises(KeyError):
            get_component(ComponentSlot.MOTOR, "Imaginary 9999")
        with self.assertRaises(KeyError):
            build_selection("12-inch hauler")

    def test_every_build_fills_all_slots(self):
        for name in list_builds():
            with self.subTest(build=name):
                selection = build_selection(name)
                self.assertEqual(len(list(selection.filled_slots())), len(ComponentSlot))


class TestCapacitySweep(unittest.TestCase):
    """Test battery capacity sweeps."""

    def setUp(self):
        self.selection = build_selection("5-inch freestyle")

    def test_default_range(self):
        capacities = default_capacities()
        self.assertEqual(len(capacities), 11)
        self.assertEqual(capacities[0], 450.0)
        self.assertEqual(capacities[-1], 3000.0)

    def test_rows(self):
        sweep = sweep_battery_capacity(self.selection, [650, 1300, 2200])
        self.assertEqual(list(sweep["capacity_mah"]), [650.0, 1300.0, 2200.0])
        self.assertIn("flight_time_min", sweep.columns)
        self.assertTrue(sweep["total_mass_g"].is_monotonic_increasing)

    def test_matching_capacity_reproduces_build(self):
        sweep = sweep_battery_capacity(self.selection, [1300])
        report = estimate(self.selection)
        row = sweep.iloc[0]
        self.assertEqual(row["battery_mass_g"], 190.0)
        self.assertAlmostEqual(row["total_mass_g"], report.total_mass_g)
        self.assertEqual(row["flight_time_min"], report.estimated_flight_time_min)

    def test_invalid_input(self):
        with self.assertRaises(ValueError):
            sweep_battery_capacity(self.selection, [])
        with self.assertRaises(ValueError):
            sweep_battery_capacity(self.selection.with_component(ComponentSlot.BATTERY, None))


class TestCapacitySolver(unittest.TestCase):
    """Test solving for the capacity that reaches a target flight time."""

    def setUp(self):
        self.selection = build_selection("5-inch freestyle")

    def test_reachable_target(self):
        capacity = capacity_for_flight_time(self.selection, 2.0)
        self.assertIsNotNone(capacity)
        self.assertGreater(capacity, 450)
        self.assertLess(capacity, 3000)
        sweep = sweep_battery_capacity(self.selection, [capacity])
        self.assertAlmostEqual(sweep.loc[0, "flight_time_min"], 2.0, delta=0.5)

    def test_already_met_by_smallest_pack(self):
        self.assertEqual(capacity_for_flight_time(self.selection, 0.5), 450.0)

    def test_unreachable_target(self):
        self.assertIsNone(capacity_for_flight_time(self.selection, 60.0))

    def test_invalid_target(self):
        with self.assertRaises(ValueError):
            capacity_for_flight_time(self.selection, 0)


class TestBuildComparison(unittest.TestCase):
    """Test parallel build comparison."""

    @classmethod
    def setUpClass(cls):
        cls.builds = {name: build_selection(name) for name in list_builds()}
        cls.comparison = compare_builds(cls.builds)

    def test_one_row_per_build(self):
        self.assertEqual(list(self.comparison["build"]), sorted(self.builds))
        self.assertTrue(self.comparison["valid"].all())

    def test_matches_single_estimate(self):
        row = self.comparison[self.comparison["build"] == "5-inch freestyle"].iloc[0]
        report = estimate(self.builds["5-inch freestyle"])
        self.assertEqual(row["flight_time_min"], report.estimated_flight_time_min)
        self.assertEqual(row["max_thrust_g"], report.max_thrust_g)

    def test_best_build(self):
        lightest = best_build(self.comparison, "total_mass_g", highest=False)
        self.assertEqual(lightest, "3-inch cinewhoop")
        self.assertIn(best_build(self.comparison), self.builds)
        with self.assertRaises(KeyError):
            best_build(self.comparison, "range_km")

    def test_empty(self):
        with self.assertRaises(ValueError):
            compare_builds({})

    def test_empty_selection_is_valid(self):
        comparison = compare_builds({"nothing": ComponentSelection()})
        self.assertTrue(comparison.loc[0, "valid"])
        self.assertEqual(comparison.loc[0, "total_mass_g"], 0.0)


class TestPlotting(unittest.TestCase):
    """Test that plots render without a display."""

    def setUp(self):
        self.plotter = BuildPlotter()
        self.selection = build_selection("5-inch freestyle")

    def tearDown(self):
        plt.close("all")

    def test_capacity_sweep(self):
        sweep = sweep_battery_capacity(self.selection, [450, 1300, 2200])
        self.assertIsInstance(self.plotter.plot_capacity_sweep(sweep), Figure)

    def test_comparison(self):
        comparison = compare_builds({name: build_selection(name) for name in list_builds()})
        fig = self.plotter.plot_build_comparison(comparison, "top_speed_kmh")
        self.assertIsInstance(fig, Figure)
        with self.assertRaises(KeyError):
            self.plotter.plot_build_comparison(comparison, "range_km")

    def test_mass_distribution(self):
        fig, ax = plt.subplots()
        drawn = self.plotter.plot_mass_distribution(run_pipeline(self.selection).mass, ax=ax)
        self.assertIs(drawn, fig)

    def test_empty_mass(self):
        with self.assertRaises(ValueError):
            self.plotter.plot_mass_distribution(run_pipeline(ComponentSelection()).mass)


def run_validation():
    """Run validation tests and print summary."""
    print("=" * 60)
    print("Analysis Tool Validation")
    print("=" * 60)
    print()

    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    suite.addTests(loader.loadTestsFromTestCase(TestSampleCatalog))
    suite.addTests(loader.loadTestsFromTestCase(TestCapacitySweep))
    suite.addTests(loader.loadTestsFromTestCase(TestCapacitySolver))
    suite.addTests(loader.loadTestsFromTestCase(TestBuildComparison))
    suite.addTests(loader.loadTestsFromTestCase(TestPlotting))

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
