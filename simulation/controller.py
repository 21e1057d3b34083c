"""
Hybrid Constrained Monte Carlo Sweep Controller

Performs a temperature loop for every constraint direction of every
material to calculate the temperature dependence of the magnetisation
and anisotropy. Spins are realigned along the constraint direction
for each new angle pair and equilibrated at every temperature before
statistics are collected.
"""

from typing import Optional
import os
import sys

# Add parent to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from simulation.context import (
    IntegratorKind, RunConfiguration, SweepContext, MaterialConstraint
)
from core.errors import ConfigurationMismatch
from core.interfaces import Integrator, StatisticsAccumulator, OutputSink
from core.utils.logger import SimulationLogger, LogLevel


class HybridCMCController:
    """
    Sweep controller for the hybrid constrained Monte Carlo program.

    Loops, outermost first, over material, theta, phi and temperature.
    It owns no physics; it only moves the sweep cursor and calls the
    integrator, statistics accumulator and output sink in order.
    """

    REQUIRED_INTEGRATOR = IntegratorKind.HYBRID_CONSTRAINED_MONTE_CARLO

    def __init__(
        self,
        config: RunConfiguration,
        integrator: Integrator,
        statistics: StatisticsAccumulator,
        output: OutputSink,
        context: Optional[SweepContext] = None,
        logger: Optional[SimulationLogger] = None,
        log_level: int = LogLevel.WARNING
    ):
        """
        Initialize controller.

        Args:
            config: Run configuration (read-only)
            integrator: Engine integrator
            statistics: Magnetisation statistics accumulator
            output: Output sink called once per sweep point
            context: Shared sweep context (a fresh one if None)
            logger: Logger (a new one at log_level if None)
            log_level: Level for the logger created here
        """
        self.config = config
        self.integrator = integrator
        self.statistics = statistics
        self.output = output
        self.context = context if context is not None else SweepContext()
        self.logger = logger or SimulationLogger(name="HybridCMC", level=log_level)

        self.points_emitted = 0

    def _check_integrator(self):
        """Exit if the engine is not running hybrid constrained Monte Carlo."""
        if self.config.integrator_kind != self.REQUIRED_INTEGRATOR:
            message = (
                "Error! cmc-anisotropy program requires Hybrid Constrained "
                "Monte Carlo as the integrator. Exiting."
            )
            self.logger.critical(message, "CONFIG")
            raise ConfigurationMismatch(message)

    def _sample(self) -> int:
        """Integrate over the sampling window, updating statistics after each part."""
        ctx = self.context
        start_time = ctx.time
        samples = 0
        while ctx.time < start_time + self.config.loop_time:
            self.integrator.advance(ctx, self.config.partial_time)
            self.statistics.update(ctx)
            samples += 1
        return samples

    def _temperature_loop(self):
        """Equilibrate, sample and emit at each temperature from Tmin to Tmax."""
        ctx = self.context
        ctx.temperature = self.config.Tmin

        while ctx.temperature <= self.config.Tmax:
            # Equilibrate system
            self.integrator.advance(ctx, self.config.equilibration_time)

            self.statistics.reset(ctx)
            samples = self._sample()

            self.output.emit(ctx)
            self.points_emitted += 1

            self.logger.set_sim_time(ctx.time)
            self.logger.temperature_point(ctx.temperature, samples)

            ctx.temperature += self.config.delta_temperature

    def _phi_sweep(self, mat: int, constraint: MaterialConstraint):
        constraint.phi = constraint.phi_min

        while constraint.phi <= constraint.phi_max:
            self.logger.angle_pair(mat, constraint.theta, constraint.phi)

            # Spins must follow the new constraint direction
            self.integrator.reinitialize_for_constraint(self.context)
            self._temperature_loop()

            if constraint.phi + constraint.phi_delta > constraint.phi_max:
                break
            constraint.phi += constraint.phi_delta

    def _theta_sweep(self, mat: int, constraint: MaterialConstraint):
        constraint.theta = constraint.theta_min

        while constraint.theta <= constraint.theta_max:
            self._phi_sweep(mat, constraint)

            if constraint.theta + constraint.theta_delta > constraint.theta_max:
                break
            constraint.theta += constraint.theta_delta

    def run(self):
        """Run the sweep over all materials."""
        self.logger.debug("program::hybrid_cmc has been called", "SWEEP")

        self._check_integrator()

        ctx = self.context
        ctx.resize_materials(self.config)
        self.points_emitted = 0

        for mat in range(self.config.num_materials):
            self.logger.material_start(mat, self.config.num_materials)
            ctx.material = mat
            self._theta_sweep(mat, ctx.materials[mat])

        self.logger.sweep_end(self.points_emitted)
