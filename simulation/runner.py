"""
Sweep Runner

This module wires an engine into the hybrid CMC controller, records
every emitted point, shows progress and saves the results.
"""

import importlib
import os
import sys
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

# Add parent to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import DEFAULT_ENGINE, RESULTS_CSV
from core.interfaces import Integrator, StatisticsAccumulator, OutputSink
from core.recorder import SweepRecorder, ProgressSink
from core.utils.logger import SimulationLogger, LogLevel
from simulation.context import RunConfiguration, SweepContext
from simulation.controller import HybridCMCController
from simulation.parameter_sweep import ParameterSweep


@dataclass
class EngineParts:
    """The three engine collaborators driven by the controller."""
    integrator: Integrator
    statistics: StatisticsAccumulator
    output: OutputSink


def load_engine(spec: str, config: RunConfiguration) -> EngineParts:
    """
    Build an engine from a "module:factory" path.

    The factory is called with the run configuration and returns
    (integrator, statistics, output).

    Args:
        spec: Import path, e.g. "core.dry_run:build_engine"
        config: Run configuration passed to the factory

    Returns:
        Engine parts
    """
    module_name, sep, attr = spec.partition(':')
    if not sep or not module_name or not attr:
        raise ValueError(f"engine must be given as 'module:factory', got {spec!r}")

    module = importlib.import_module(module_name)
    factory: Callable = getattr(module, attr)
    integrator, statistics, output = factory(config)
    return EngineParts(integrator, statistics, output)


class SweepRunner:
    """
    Runs one hybrid CMC sweep with recording and progress reporting.

    Attributes:
        config: Run configuration
        engine: Engine collaborators
        recorder: Sink keeping a copy of each emitted point
        sweep: Planned parameter space
    """

    def __init__(
        self,
        config: RunConfiguration,
        engine: Optional[EngineParts] = None,
        output_file: Optional[str] = RESULTS_CSV,
        show_progress: bool = True,
        log_level: int = LogLevel.WARNING
    ):
        """
        Initialize sweep runner.

        Args:
            config: Run configuration
            engine: Engine parts (dry-run engine if None)
            output_file: CSV path for the recorded points (None to skip saving)
            show_progress: Show a tqdm progress bar
            log_level: Log level for the controller
        """
        self.config = config
        self.engine = engine or load_engine(DEFAULT_ENGINE, config)
        self.output_file = output_file
        self.show_progress = show_progress
        self.logger = SimulationLogger(name="HybridCMC", level=log_level)

        self.sweep = ParameterSweep(config)
        self.recorder = SweepRecorder(downstream=self.engine.output)
        self.context = SweepContext()

        self.start_time = 0.0
        self.elapsed = 0.0

    def run(self) -> Dict:
        """
        Run the sweep.

        Returns:
            Dictionary with run summary
        """
        self.recorder.clear()

        progress = ProgressSink(
            self.recorder,
            total=self.sweep.total_points,
            disable=not self.show_progress
        )
        controller = HybridCMCController(
            self.config,
            self.engine.integrator,
            self.engine.statistics,
            progress,
            context=self.context,
            logger=self.logger
        )

        self.start_time = time.time()
        try:
            controller.run()
        finally:
            progress.close()
            self.elapsed = time.time() - self.start_time

        saved = None
        if self.output_file:
            saved = self.recorder.save_results(self.output_file)

        return {
            'points': len(self.recorder),
            'expected_points': self.sweep.total_points,
            'final_time': self.context.time,
            'real_time': self.elapsed,
            'output_file': saved
        }
