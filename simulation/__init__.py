"""
Simulation package - Sweep controller and runners.

Contains:
- Sweep context and run configuration
- Hybrid CMC sweep controller
- Parameter sweep planning
- Sweep runner
"""

from .context import (
    IntegratorKind, ConstraintBounds, RunConfiguration,
    MaterialConstraint, SweepContext
)
from .controller import HybridCMCController
from .parameter_sweep import ParameterSweep, ParameterPoint, sweep_values
from .runner import SweepRunner, EngineParts, load_engine

__all__ = [
    'IntegratorKind',
    'ConstraintBounds',
    'RunConfiguration',
    'MaterialConstraint',
    'SweepContext',
    'HybridCMCController',
    'ParameterSweep',
    'ParameterPoint',
    'sweep_values',
    'SweepRunner',
    'EngineParts',
    'load_engine'
]
