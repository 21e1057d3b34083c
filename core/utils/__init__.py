"""
Utilities package - Helper functions and classes.

Contains:
- Logging utilities
"""

from .logger import SimulationLogger, LogLevel, get_logger, set_logger

__all__ = [
    'SimulationLogger',
    'LogLevel',
    'get_logger',
    'set_logger'
]
