"""
Parameter Sweep Planning

This module enumerates the sweep points a hybrid CMC run will visit,
without running the engine, and estimates the integration cost.
"""

import math
import os
import sys
from typing import Dict, Iterator, List, Tuple
from dataclasses import dataclass

# Add parent to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from simulation.context import RunConfiguration


def sweep_values(start: float, stop: float, step: float) -> Iterator[float]:
    """
    Yield start, start+step, ... while the value stays <= stop.

    The next value is produced by repeated addition, and the sweep ends
    before an increment that would pass stop.
    """
    value = start
    while value <= stop:
        yield value
        if value + step > stop:
            break
        value += step


@dataclass(frozen=True)
class ParameterPoint:
    """A single point in the parameter space."""
    material: int
    theta: float
    phi: float
    temperature: float

    @property
    def key(self) -> Tuple[int, float, float, float]:
        return (self.material, self.theta, self.phi, self.temperature)


class ParameterSweep:
    """
    Parameter space of a hybrid CMC run.

    For each material: theta x phi constraint pairs, and for each pair the
    temperatures Tmin..Tmax.
    """

    def __init__(self, config: RunConfiguration):
        """
        Initialize parameter sweep.

        Args:
            config: Run configuration
        """
        self.config = config

    def thetas(self, mat: int) -> List[float]:
        bounds = self.config.bounds_for(mat)
        return list(sweep_values(bounds.theta_min, bounds.theta_max, bounds.theta_delta))

    def phis(self, mat: int) -> List[float]:
        bounds = self.config.bounds_for(mat)
        return list(sweep_values(bounds.phi_min, bounds.phi_max, bounds.phi_delta))

    def angle_pairs(self, mat: int) -> List[Tuple[float, float]]:
        """Constraint (theta, phi) pairs of a material in sweep order."""
        return [(theta, phi) for theta in self.thetas(mat) for phi in self.phis(mat)]

    def temperatures(self) -> List[float]:
        return list(sweep_values(
            self.config.Tmin, self.config.Tmax, self.config.delta_temperature
        ))

    def get_all_points(self) -> List[ParameterPoint]:
        """Get all parameter points in the order they are emitted."""
        temperatures = self.temperatures()
        points = []
        for mat in range(self.config.num_materials):
            for theta, phi in self.angle_pairs(mat):
                for temperature in temperatures:
                    points.append(ParameterPoint(mat, theta, phi, temperature))
        return points

    @property
    def total_reinitializations(self) -> int:
        """Number of constraint reinitializations (one per angle pair)."""
        return sum(len(self.angle_pairs(mat)) for mat in range(self.config.num_materials))

    @property
    def total_points(self) -> int:
        """Number of output emissions."""
        return self.total_reinitializations * len(self.temperatures())

    @property
    def sampling_calls_per_point(self) -> int:
        """
        Statistics updates per temperature.

        ceil(loop_time / partial_time), assuming each advance moves time
        by exactly partial_time.
        """
        if self.config.loop_time <= 0:
            return 0
        return math.ceil(self.config.loop_time / self.config.partial_time)

    @property
    def steps_per_point(self) -> int:
        """Integrator steps spent at one temperature."""
        return (self.config.equilibration_time +
                self.sampling_calls_per_point * self.config.partial_time)

    @property
    def total_integration_steps(self) -> int:
        return self.total_points * self.steps_per_point

    def describe(self) -> Dict:
        """Summary of the sweep for display."""
        return {
            'num_materials': self.config.num_materials,
            'thetas': {mat: self.thetas(mat) for mat in range(self.config.num_materials)},
            'phis': {mat: self.phis(mat) for mat in range(self.config.num_materials)},
            'temperatures': self.temperatures(),
            'reinitializations': self.total_reinitializations,
            'total_points': self.total_points,
            'sampling_calls_per_point': self.sampling_calls_per_point,
            'steps_per_point': self.steps_per_point,
            'total_integration_steps': self.total_integration_steps
        }


if __name__ == "__main__":
    print("=" * 60)
    print("PARAMETER SWEEP CONFIGURATION")
    print("=" * 60)

    sweep = ParameterSweep(RunConfiguration())
    summary = sweep.describe()

    print(f"\nParameter Space:")
    for mat in range(summary['num_materials']):
        print(f"  Material {mat} thetas: {summary['thetas'][mat]}")
        print(f"  Material {mat} phis: {summary['phis'][mat]}")
    print(f"  Temperatures: {summary['temperatures']}")
    print(f"  Total points: {summary['total_points']}")
    print(f"  Total integration steps: {summary['total_integration_steps']}")
