"""
Error types for the hybrid CMC sweep.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import EXIT_CONFIGURATION_MISMATCH


class ConfigurationError(ValueError):
    """A run configuration value makes the sweep ill-defined."""


class ConfigurationMismatch(SystemExit):
    """
    The engine is set up for a different integrator than the program needs.

    Raising it terminates the process with EXIT_CONFIGURATION_MISMATCH
    unless something catches it on purpose.
    """

    def __init__(self, message: str, code: int = EXIT_CONFIGURATION_MISMATCH):
        super().__init__(code)
        self.message = message

    def __str__(self) -> str:
        return self.message
