"""
Run Configuration Loader

Reads a hybrid CMC run configuration from YAML. Missing keys fall back
to the defaults in config.py.

Example:

    integrator: hybrid-constrained-monte-carlo
    temperature: {min: 0, max: 600, delta: 25}
    time: {equilibration: 2000, loop: 20000, partial: 100}
    materials:
      - theta: {min: 0, max: 90, delta: 15}
        phi: {min: 0, max: 0, delta: 5}
      - theta: {min: 0, max: 0, delta: 5}
"""

from typing import Any, Dict, Union
import os
import sys

import yaml

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import (
    TEMPERATURE_MIN, TEMPERATURE_MAX, DELTA_TEMPERATURE,
    EQUILIBRATION_TIME, LOOP_TIME, PARTIAL_TIME, DEFAULT_INTEGRATOR,
    CONSTRAINT_THETA_MIN, CONSTRAINT_THETA_MAX, CONSTRAINT_THETA_DELTA,
    CONSTRAINT_PHI_MIN, CONSTRAINT_PHI_MAX, CONSTRAINT_PHI_DELTA
)
from core.errors import ConfigurationError
from simulation.context import ConstraintBounds, IntegratorKind, RunConfiguration


def parse_integrator(value: Union[int, str]) -> IntegratorKind:
    """Integrator from its code (4) or name ('hybrid-constrained-monte-carlo')."""
    if isinstance(value, bool):
        raise ConfigurationError(f"invalid integrator: {value!r}")
    if isinstance(value, int):
        try:
            return IntegratorKind(value)
        except ValueError:
            raise ConfigurationError(f"unknown integrator code: {value}") from None
    name = str(value).strip().upper().replace('-', '_').replace(' ', '_')
    try:
        return IntegratorKind[name]
    except KeyError:
        raise ConfigurationError(f"unknown integrator: {value!r}") from None


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{key}' must be a mapping")
    return section


def _number(section: Dict[str, Any], key: str, default, cast=float):
    value = section.get(key, default)
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"'{key}' must be a number, got {value!r}") from None


def _parse_bounds(entry: Dict[str, Any]) -> ConstraintBounds:
    if not isinstance(entry, dict):
        raise ConfigurationError(f"material entry must be a mapping, got {entry!r}")
    theta = _section(entry, 'theta')
    phi = _section(entry, 'phi')
    return ConstraintBounds(
        theta_min=_number(theta, 'min', CONSTRAINT_THETA_MIN),
        theta_max=_number(theta, 'max', CONSTRAINT_THETA_MAX),
        theta_delta=_number(theta, 'delta', CONSTRAINT_THETA_DELTA),
        phi_min=_number(phi, 'min', CONSTRAINT_PHI_MIN),
        phi_max=_number(phi, 'max', CONSTRAINT_PHI_MAX),
        phi_delta=_number(phi, 'delta', CONSTRAINT_PHI_DELTA)
    )


def run_configuration_from_dict(data: Dict[str, Any]) -> RunConfiguration:
    """
    Build a RunConfiguration from a plain dictionary.

    Args:
        data: Parsed configuration (see module docstring)

    Returns:
        Validated run configuration
    """
    if not isinstance(data, dict):
        raise ConfigurationError("run configuration must be a mapping")

    temperature = _section(data, 'temperature')
    times = _section(data, 'time')

    materials = data.get('materials') or []
    if not isinstance(materials, list):
        raise ConfigurationError("'materials' must be a list")
    constraints = {mat: _parse_bounds(entry or {}) for mat, entry in enumerate(materials)}

    num_materials = _number(data, 'num_materials', max(len(materials), 1), int)

    return RunConfiguration(
        Tmin=_number(temperature, 'min', TEMPERATURE_MIN),
        Tmax=_number(temperature, 'max', TEMPERATURE_MAX),
        delta_temperature=_number(temperature, 'delta', DELTA_TEMPERATURE),
        equilibration_time=_number(times, 'equilibration', EQUILIBRATION_TIME, int),
        partial_time=_number(times, 'partial', PARTIAL_TIME, int),
        loop_time=_number(times, 'loop', LOOP_TIME, int),
        integrator_kind=parse_integrator(data.get('integrator', DEFAULT_INTEGRATOR)),
        num_materials=num_materials,
        constraints=constraints
    )


def load_run_configuration(path: str) -> RunConfiguration:
    """Load a RunConfiguration from a YAML file."""
    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}
    return run_configuration_from_dict(data)
