"""
Shared fakes for the engine collaborators.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.interfaces import Integrator, StatisticsAccumulator, OutputSink


class CallLog:
    """Ordered record of every collaborator call."""

    def __init__(self):
        self.calls = []

    def names(self):
        return [c[0] for c in self.calls]

    def count(self, name):
        return sum(1 for c in self.calls if c[0] == name)


class FakeIntegrator(Integrator):
    def __init__(self, log: CallLog):
        self.log = log

    def reinitialize_for_constraint(self, context):
        c = context.constraint()
        self.log.calls.append(('reinit', context.material, c.theta, c.phi))

    def advance(self, context, steps):
        self.log.calls.append(('advance', steps, context.time))
        context.time += steps


class FakeStatistics(StatisticsAccumulator):
    def __init__(self, log: CallLog):
        self.log = log
        self.updates = 0

    def reset(self, context):
        self.updates = 0
        context.observables['mean_magnetisation'] = 0.0
        self.log.calls.append(('reset', context.temperature))

    def update(self, context):
        self.updates += 1
        context.observables['mean_magnetisation'] = 1.0 / (1.0 + context.temperature)
        self.log.calls.append(('update', context.time))


class FakeOutput(OutputSink):
    def __init__(self, log: CallLog):
        self.log = log
        self.points = []

    def emit(self, context):
        snapshot = context.snapshot()
        self.points.append(snapshot)
        self.log.calls.append(('emit', snapshot['material'], snapshot['theta'],
                               snapshot['phi'], snapshot['temperature']))


@pytest.fixture
def call_log():
    return CallLog()


@pytest.fixture
def engine(call_log):
    return FakeIntegrator(call_log), FakeStatistics(call_log), FakeOutput(call_log)
