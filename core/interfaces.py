"""
Engine Contracts

The sweep controller drives the physics engine only through these
three collaborators. Every call receives the shared SweepContext.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from simulation.context import SweepContext


class Integrator(ABC):
    """Advances the spin system in hybrid constrained Monte Carlo mode."""

    @abstractmethod
    def reinitialize_for_constraint(self, context: 'SweepContext'):
        """
        Align the spins along the current constraint direction.

        Must be callable repeatedly without carrying over state from
        the previous constraint direction.
        """

    @abstractmethod
    def advance(self, context: 'SweepContext', steps: int):
        """
        Integrate the system by exactly `steps` time steps.

        Advances context.time by `steps`; time never decreases.
        """


class StatisticsAccumulator(ABC):
    """Running magnetisation estimate."""

    @abstractmethod
    def reset(self, context: 'SweepContext'):
        """Clear the running estimate."""

    @abstractmethod
    def update(self, context: 'SweepContext'):
        """Fold the current system state into the running estimate."""


class OutputSink(ABC):
    """Persists one snapshot per sweep point."""

    @abstractmethod
    def emit(self, context: 'SweepContext'):
        """Write the current temperature, angles and statistics."""
