"""
Sweep Recording

Output sinks that keep a copy of every emitted sweep point, so the
results of a run can be saved, aggregated and plotted.
"""

import csv
import os
import statistics
from typing import Dict, List, Optional, TYPE_CHECKING

import pandas as pd
from tqdm import tqdm

from core.interfaces import OutputSink

if TYPE_CHECKING:
    from simulation.context import SweepContext


# Columns written first, in this order
POINT_FIELDS = ['material', 'theta', 'phi', 'temperature', 'time']


class SweepRecorder(OutputSink):
    """
    Records one row per emission.

    Each row holds the sweep point (material, theta, phi, temperature,
    time) and the observables published by the statistics accumulator.
    An optional downstream sink receives every emission after it is
    recorded.
    """

    def __init__(self, downstream: Optional[OutputSink] = None):
        self.downstream = downstream
        self.rows: List[Dict] = []

    def emit(self, context: 'SweepContext'):
        self.rows.append(context.snapshot())
        if self.downstream is not None:
            self.downstream.emit(context)

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def fieldnames(self) -> List[str]:
        """Point columns followed by every observable seen, in first-seen order."""
        names = list(POINT_FIELDS)
        for row in self.rows:
            for key in row:
                if key not in names:
                    names.append(key)
        return names

    def save_results(self, filepath: str) -> Optional[str]:
        """
        Save rows to a CSV file.

        Args:
            filepath: Output file path

        Returns:
            The path written, or None when there is nothing to save
        """
        if not self.rows:
            return None

        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(filepath, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=self.fieldnames)
            writer.writeheader()
            writer.writerows(self.rows)

        return filepath

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows, columns=self.fieldnames)

    def get_aggregated_results(self, observable: str) -> Dict:
        """
        Mean of an observable over phi for each (material, theta, temperature).

        Args:
            observable: Observable name

        Returns:
            Dictionary keyed by (material, theta, temperature)
        """
        grouped = {}
        for row in self.rows:
            value = row.get(observable)
            if not isinstance(value, (int, float)):
                continue
            key = (row['material'], row['theta'], row['temperature'])
            grouped.setdefault(key, []).append(value)

        aggregated = {}
        for key, values in grouped.items():
            aggregated[key] = {
                'mean': statistics.mean(values),
                'std': statistics.stdev(values) if len(values) > 1 else 0,
                'n': len(values)
            }
        return aggregated

    def clear(self):
        self.rows.clear()


class ProgressSink(OutputSink):
    """Forwards emissions to another sink and ticks a progress bar."""

    def __init__(self, inner: OutputSink, total: int, desc: str = "Sweep points",
                 disable: bool = False):
        self.inner = inner
        self.bar = tqdm(total=total, desc=desc, unit="pt", disable=disable)

    def emit(self, context: 'SweepContext'):
        self.inner.emit(context)
        constraint = context.constraint()
        self.bar.set_postfix(
            mat=context.material,
            theta=f"{constraint.theta:g}",
            phi=f"{constraint.phi:g}",
            T=f"{context.temperature:g}",
            refresh=False
        )
        self.bar.update(1)

    def close(self):
        self.bar.close()
