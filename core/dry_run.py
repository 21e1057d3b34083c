"""
Dry-Run Engine

Collaborators that perform no physics. The integrator only moves the
simulated time cursor, so a sweep can be checked for its visited points,
call counts and timing before a real engine is attached.
"""

from typing import List, Tuple, TYPE_CHECKING

from core.interfaces import Integrator, StatisticsAccumulator, OutputSink

if TYPE_CHECKING:
    from simulation.context import RunConfiguration, SweepContext


class DryRunIntegrator(Integrator):
    """
    Advances time without touching any spins.

    Attributes:
        reinitializations: Number of constraint reinitializations
        advance_calls: Number of advance() calls
        directions: Constraint directions seen at each reinitialization
    """

    def __init__(self):
        self.reinitializations = 0
        self.advance_calls = 0
        self.directions: List[Tuple[float, float, float]] = []

    def reinitialize_for_constraint(self, context: 'SweepContext'):
        self.reinitializations += 1
        self.directions.append(tuple(float(c) for c in context.constraint().direction))

    def advance(self, context: 'SweepContext', steps: int):
        if steps < 0:
            raise ValueError(f"cannot integrate a negative number of steps ({steps})")
        self.advance_calls += 1
        context.time += steps


class SampleCounter(StatisticsAccumulator):
    """Counts statistics updates and publishes the count as 'samples'."""

    def __init__(self):
        self.samples = 0
        self.resets = 0

    def reset(self, context: 'SweepContext'):
        self.samples = 0
        self.resets += 1
        context.observables['samples'] = 0

    def update(self, context: 'SweepContext'):
        self.samples += 1
        context.observables['samples'] = self.samples


class NullOutput(OutputSink):
    """Discards every emission."""

    def emit(self, context: 'SweepContext'):
        pass


def build_engine(config: 'RunConfiguration') -> Tuple[Integrator, StatisticsAccumulator, OutputSink]:
    """Engine factory used by the sweep runner."""
    return DryRunIntegrator(), SampleCounter(), NullOutput()
