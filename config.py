"""
Configuration file for the Hybrid Constrained Monte Carlo sweep.
Contains the default run parameters used when no run configuration file is given.
"""

import os

# =============================================================================
# INTEGRATOR
# =============================================================================

# Integrator codes understood by the physics engine
INTEGRATOR_LLG_HEUN = 0
INTEGRATOR_MONTE_CARLO = 1
INTEGRATOR_LLG_MIDPOINT = 2
INTEGRATOR_CONSTRAINED_MONTE_CARLO = 3
INTEGRATOR_HYBRID_CONSTRAINED_MONTE_CARLO = 4

DEFAULT_INTEGRATOR = INTEGRATOR_HYBRID_CONSTRAINED_MONTE_CARLO

# =============================================================================
# TEMPERATURE SWEEP (Kelvin)
# =============================================================================

TEMPERATURE_MIN = 0.0
TEMPERATURE_MAX = 1000.0
DELTA_TEMPERATURE = 50.0

# =============================================================================
# SIMULATION TIMES (integrator time steps)
# =============================================================================

EQUILIBRATION_TIME = 1000   # discarded warm-up per temperature
LOOP_TIME = 10000           # sampling window, relative to its start
PARTIAL_TIME = 100          # steps between statistics updates

# =============================================================================
# CONSTRAINT ANGLES (degrees)
# =============================================================================

# Bounds given to materials with no configured constraint
CONSTRAINT_THETA_MIN = 0.0
CONSTRAINT_THETA_MAX = 0.0
CONSTRAINT_THETA_DELTA = 5.0

CONSTRAINT_PHI_MIN = 0.0
CONSTRAINT_PHI_MAX = 0.0
CONSTRAINT_PHI_DELTA = 5.0

NUM_MATERIALS = 1

# =============================================================================
# PROCESS
# =============================================================================

# Exit status when the run configuration does not match the program
EXIT_CONFIGURATION_MISMATCH = 2

# Logging verbosity levels
LOG_LEVEL_DEBUG = 0
LOG_LEVEL_INFO = 1
LOG_LEVEL_WARNING = 2
LOG_LEVEL_ERROR = 3

DEFAULT_LOG_LEVEL = LOG_LEVEL_INFO

# =============================================================================
# OUTPUT PATHS
# =============================================================================

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(BASE_DIR, "data")
OUTPUT_DIR = os.path.join(DATA_DIR, "output")
PLOTS_DIR = os.path.join(OUTPUT_DIR, "plots")

# Results CSV filename
RESULTS_CSV = os.path.join(OUTPUT_DIR, "results.csv")

# Default engine factory for --run
DEFAULT_ENGINE = "core.dry_run:build_engine"


# =============================================================================
# DERIVED PARAMETERS
# =============================================================================

def count_sweep_values(start, stop, step):
    """
    Number of values visited from start up to stop (inclusive) in steps of step.

    Counts by repeated addition, the way the sweep loops advance, so an
    inexact step such as 0.1 gives the same count as the sweep itself.
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    count = 0
    value = start
    while value <= stop:
        count += 1
        value += step
    return count


def calculate_temperature_points():
    """Number of temperatures visited per constraint angle pair."""
    return count_sweep_values(TEMPERATURE_MIN, TEMPERATURE_MAX, DELTA_TEMPERATURE)


def calculate_steps_per_point():
    """
    Integrator steps spent at one temperature.
    steps = equilibration + ceil(loop / partial) * partial
    """
    if LOOP_TIME <= 0:
        return EQUILIBRATION_TIME
    samples = -(-LOOP_TIME // PARTIAL_TIME)
    return EQUILIBRATION_TIME + samples * PARTIAL_TIME


# Print configuration summary
if __name__ == "__main__":
    print("=" * 60)
    print("HYBRID CMC SWEEP - CONFIGURATION")
    print("=" * 60)
    print(f"\nTemperature:")
    print(f"  Tmin: {TEMPERATURE_MIN} K")
    print(f"  Tmax: {TEMPERATURE_MAX} K")
    print(f"  Delta: {DELTA_TEMPERATURE} K")
    print(f"  Points: {calculate_temperature_points()}")

    print(f"\nTimes (steps):")
    print(f"  Equilibration: {EQUILIBRATION_TIME}")
    print(f"  Loop: {LOOP_TIME}")
    print(f"  Partial: {PARTIAL_TIME}")
    print(f"  Steps per temperature: {calculate_steps_per_point()}")

    print(f"\nDefault constraint:")
    print(f"  Theta: {CONSTRAINT_THETA_MIN}..{CONSTRAINT_THETA_MAX} step {CONSTRAINT_THETA_DELTA} deg")
    print(f"  Phi: {CONSTRAINT_PHI_MIN}..{CONSTRAINT_PHI_MAX} step {CONSTRAINT_PHI_DELTA} deg")
