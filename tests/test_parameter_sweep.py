"""
Unit tests for sweep planning.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
from simulation.context import ConstraintBounds, RunConfiguration
from simulation.parameter_sweep import ParameterSweep, ParameterPoint, sweep_values


class TestSweepValues:
    """Tests for the break-before-increment value generator."""

    def test_exact_multiple(self):
        """Test the upper bound is included when reached exactly."""
        assert list(sweep_values(0, 100, 50)) == [0, 50, 100]

    def test_not_a_multiple(self):
        """Test the sweep stops before stepping past the upper bound."""
        assert list(sweep_values(0, 10, 7)) == [0, 7]

    def test_single_value(self):
        """Test equal bounds visit one value."""
        assert list(sweep_values(0, 0, 5)) == [0]

    def test_start_above_stop(self):
        """Test an inverted range visits nothing."""
        assert list(sweep_values(5, 0, 1)) == []

    def test_negative_range(self):
        """Test ranges below zero."""
        assert list(sweep_values(-90, 90, 60)) == [-90, -30, 30, 90]

    def test_accumulated_float_stays_in_range(self):
        """Test an inexact step keeps every value within the bounds."""
        values = list(sweep_values(0.0, 1.0, 0.1))
        assert len(values) == 11
        assert max(values) <= 1.0


class TestCountSweepValues:
    """Tests for the value counter in config.py."""

    @pytest.mark.parametrize("start,stop,step", [
        (0.0, 1.0, 0.1),
        (0.0, 1000.0, 50.0),
        (0, 10, 7),
        (5, 0, 1),
        (0.0, 0.3, 0.1),
        (-90, 90, 60),
    ])
    def test_matches_sweep(self, start, stop, step):
        """Test the counter agrees with the values the sweep visits."""
        assert config.count_sweep_values(start, stop, step) == len(list(sweep_values(start, stop, step)))

    def test_inexact_step(self):
        """Test 0..1 in steps of 0.1 counts eleven values."""
        assert config.count_sweep_values(0.0, 1.0, 0.1) == 11

    def test_non_positive_step(self):
        """Test a zero step is rejected."""
        with pytest.raises(ValueError):
            config.count_sweep_values(0, 1, 0)

    def test_default_temperature_points(self):
        """Test the default temperature count matches the planned temperatures."""
        assert config.calculate_temperature_points() == len(ParameterSweep(RunConfiguration()).temperatures())


class TestParameterSweep:
    """Tests for ParameterSweep."""

    def make_sweep(self, **overrides):
        params = dict(
            Tmin=0.0, Tmax=100.0, delta_temperature=50.0,
            equilibration_time=5, partial_time=3, loop_time=10,
            num_materials=2,
            constraints={
                0: ConstraintBounds(theta_min=0, theta_max=10, theta_delta=7,
                                    phi_min=0, phi_max=90, phi_delta=45)
            }
        )
        params.update(overrides)
        return ParameterSweep(RunConfiguration(**params))

    def test_angle_pairs(self):
        """Test angle pairs per material, theta outermost."""
        sweep = self.make_sweep()
        assert sweep.angle_pairs(0) == [(0, 0), (0, 45), (0, 90), (7, 0), (7, 45), (7, 90)]
        assert sweep.angle_pairs(1) == [(0.0, 0.0)]

    def test_temperatures(self):
        """Test planned temperatures include Tmax."""
        assert self.make_sweep().temperatures() == [0.0, 50.0, 100.0]

    def test_totals(self):
        """Test reinitialisation and point totals over all materials."""
        sweep = self.make_sweep()
        assert sweep.total_reinitializations == 7
        assert sweep.total_points == 21
        assert len(sweep.get_all_points()) == 21

    def test_point_order(self):
        """Test points are ordered material, theta, phi, temperature."""
        points = self.make_sweep().get_all_points()
        assert points[0] == ParameterPoint(0, 0, 0, 0.0)
        assert points[1] == ParameterPoint(0, 0, 0, 50.0)
        assert points[3] == ParameterPoint(0, 0, 45, 0.0)
        assert points[-1] == ParameterPoint(1, 0.0, 0.0, 100.0)

    def test_sampling_calls(self):
        """Test sampling calls round up to cover the whole window."""
        sweep = self.make_sweep()
        assert sweep.sampling_calls_per_point == 4
        assert sweep.steps_per_point == 5 + 4 * 3
        assert sweep.total_integration_steps == 21 * 17

    def test_zero_loop_time(self):
        """Test no sampling calls are planned without a sampling window."""
        sweep = self.make_sweep(loop_time=0)
        assert sweep.sampling_calls_per_point == 0
        assert sweep.steps_per_point == 5

    def test_zero_loop_time_with_zero_partial(self):
        """Test a zero partial step is harmless when nothing is sampled."""
        sweep = self.make_sweep(loop_time=0, partial_time=0)
        assert sweep.sampling_calls_per_point == 0
        assert sweep.total_integration_steps == 21 * 5

    def test_no_materials(self):
        """Test a run with no materials plans no points."""
        sweep = self.make_sweep(num_materials=0, constraints={})
        assert sweep.total_points == 0
        assert sweep.get_all_points() == []
        assert sweep.describe()['thetas'] == {}

    def test_describe(self):
        """Test the summary dictionary."""
        summary = self.make_sweep().describe()
        assert summary['thetas'][0] == [0, 7]
        assert summary['phis'][1] == [0.0]
        assert summary['total_points'] == 21


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
