"""
Sweep Context and Run Configuration

This module defines the data shared between the sweep controller and
the physics engine: the read-only run configuration, the per-material
constraint state and the sweep cursor (temperature and simulated time).
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Optional
import math
import os
import sys

import numpy as np

# Add parent to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import (
    TEMPERATURE_MIN, TEMPERATURE_MAX, DELTA_TEMPERATURE,
    EQUILIBRATION_TIME, LOOP_TIME, PARTIAL_TIME, NUM_MATERIALS,
    CONSTRAINT_THETA_MIN, CONSTRAINT_THETA_MAX, CONSTRAINT_THETA_DELTA,
    CONSTRAINT_PHI_MIN, CONSTRAINT_PHI_MAX, CONSTRAINT_PHI_DELTA,
    DEFAULT_INTEGRATOR
)
from core.errors import ConfigurationError


class IntegratorKind(IntEnum):
    """Integrator modes of the physics engine."""
    LLG_HEUN = 0
    MONTE_CARLO = 1
    LLG_MIDPOINT = 2
    CONSTRAINED_MONTE_CARLO = 3
    HYBRID_CONSTRAINED_MONTE_CARLO = 4

    @property
    def label(self) -> str:
        return self.name.replace('_', ' ').title()


@dataclass(frozen=True)
class ConstraintBounds:
    """Range swept by the constraint angles of one material (degrees)."""
    theta_min: float = CONSTRAINT_THETA_MIN
    theta_max: float = CONSTRAINT_THETA_MAX
    theta_delta: float = CONSTRAINT_THETA_DELTA
    phi_min: float = CONSTRAINT_PHI_MIN
    phi_max: float = CONSTRAINT_PHI_MAX
    phi_delta: float = CONSTRAINT_PHI_DELTA

    def __post_init__(self):
        # A non-positive step never crosses the upper bound
        if self.theta_delta <= 0:
            raise ConfigurationError(f"theta_delta must be positive, got {self.theta_delta}")
        if self.phi_delta <= 0:
            raise ConfigurationError(f"phi_delta must be positive, got {self.phi_delta}")


@dataclass(frozen=True)
class RunConfiguration:
    """
    Read-only configuration for a hybrid CMC sweep.

    Attributes:
        Tmin: First temperature of every temperature loop
        Tmax: Largest temperature allowed in a temperature loop
        delta_temperature: Temperature increment
        equilibration_time: Steps integrated before statistics are reset
        partial_time: Steps integrated between statistics updates
        loop_time: Length of the sampling window in steps
        integrator_kind: Integrator mode the engine was set up with
        num_materials: Number of materials in the system
        constraints: Configured angle bounds by material index
    """
    Tmin: float = TEMPERATURE_MIN
    Tmax: float = TEMPERATURE_MAX
    delta_temperature: float = DELTA_TEMPERATURE
    equilibration_time: int = EQUILIBRATION_TIME
    partial_time: int = PARTIAL_TIME
    loop_time: int = LOOP_TIME
    integrator_kind: int = DEFAULT_INTEGRATOR
    num_materials: int = NUM_MATERIALS
    constraints: Dict[int, ConstraintBounds] = field(default_factory=dict)

    def __post_init__(self):
        if self.num_materials < 0:
            raise ConfigurationError(f"num_materials must not be negative, got {self.num_materials}")
        if self.delta_temperature <= 0:
            raise ConfigurationError(
                f"delta_temperature must be positive, got {self.delta_temperature}"
            )
        if self.equilibration_time < 0:
            raise ConfigurationError(
                f"equilibration_time must not be negative, got {self.equilibration_time}"
            )
        # With no sampling window the partial step is never taken.
        if self.loop_time > 0 and self.partial_time <= 0:
            raise ConfigurationError(
                f"partial_time must be positive when loop_time is, got {self.partial_time}"
            )
        unknown = [mat for mat in self.constraints if not 0 <= mat < self.num_materials]
        if unknown:
            raise ConfigurationError(
                f"constraints given for unknown materials {sorted(unknown)} "
                f"(num_materials={self.num_materials})"
            )

    def bounds_for(self, mat: int) -> ConstraintBounds:
        """Configured bounds of a material, or the defaults."""
        return self.constraints.get(mat) or ConstraintBounds()


@dataclass
class MaterialConstraint:
    """Current constraint angles of one material and their sweep range."""
    theta: float = 0.0
    theta_min: float = CONSTRAINT_THETA_MIN
    theta_max: float = CONSTRAINT_THETA_MAX
    theta_delta: float = CONSTRAINT_THETA_DELTA
    phi: float = 0.0
    phi_min: float = CONSTRAINT_PHI_MIN
    phi_max: float = CONSTRAINT_PHI_MAX
    phi_delta: float = CONSTRAINT_PHI_DELTA

    @classmethod
    def from_bounds(cls, bounds: ConstraintBounds) -> 'MaterialConstraint':
        return cls(
            theta=bounds.theta_min,
            theta_min=bounds.theta_min,
            theta_max=bounds.theta_max,
            theta_delta=bounds.theta_delta,
            phi=bounds.phi_min,
            phi_min=bounds.phi_min,
            phi_max=bounds.phi_max,
            phi_delta=bounds.phi_delta
        )

    @property
    def direction(self) -> np.ndarray:
        """Unit vector of the constraint direction."""
        theta = math.radians(self.theta)
        phi = math.radians(self.phi)
        return np.array([
            math.sin(theta) * math.cos(phi),
            math.sin(theta) * math.sin(phi),
            math.cos(theta)
        ])


@dataclass
class SweepContext:
    """
    State shared by reference between the controller and the engine.

    The controller writes temperature, material and the constraint
    angles; the integrator is the only writer of time; the statistics
    accumulator publishes its estimates in observables.
    """
    temperature: float = 0.0
    time: int = 0
    material: int = 0
    materials: Dict[int, MaterialConstraint] = field(default_factory=dict)
    observables: Dict[str, float] = field(default_factory=dict)

    def resize_materials(self, config: RunConfiguration):
        """Size the material mapping to num_materials, seeding each entry from its bounds."""
        self.materials.clear()
        for mat in range(config.num_materials):
            self.materials[mat] = MaterialConstraint.from_bounds(config.bounds_for(mat))

    def constraint(self, mat: Optional[int] = None) -> MaterialConstraint:
        """Constraint state of a material (current material by default)."""
        return self.materials[self.material if mat is None else mat]

    def snapshot(self) -> Dict:
        """Flat copy of the current sweep point."""
        constraint = self.constraint()
        # Point fields win over observables of the same name.
        return {
            **self.observables,
            'material': self.material,
            'theta': constraint.theta,
            'phi': constraint.phi,
            'temperature': self.temperature,
            'time': self.time
        }
