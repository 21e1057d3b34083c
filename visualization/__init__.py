"""
Visualization package - Plotting tools.

Contains:
- Observable heatmaps over (theta, temperature)
"""

from .heatmap import ObservableHeatmap

__all__ = [
    'ObservableHeatmap'
]
