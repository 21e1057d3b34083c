"""
Observable Heatmap Visualization

This module generates 2D heatmaps of a recorded observable as a
function of constraint angle theta and temperature.
"""

import os
import sys
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns

# Add parent to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import PLOTS_DIR


class ObservableHeatmap:
    """
    Generates heatmaps of observable(theta, T) for one material.

    Values at the same (theta, T) but different phi are averaged.
    """

    def __init__(
        self,
        results: Optional[List[Dict]] = None,
        csv_file: Optional[str] = None
    ):
        """
        Initialize heatmap generator.

        Args:
            results: List of recorded rows
            csv_file: Path to CSV file written by the sweep recorder
        """
        if results:
            self.data = pd.DataFrame(results)
        elif csv_file:
            self.data = pd.read_csv(csv_file)
        else:
            self.data = pd.DataFrame()

    @property
    def observables(self) -> List[str]:
        """Recorded columns other than the sweep point."""
        point = {'material', 'theta', 'phi', 'temperature', 'time'}
        return [c for c in self.data.columns if c not in point]

    def create_matrix(self, observable: str, material: int = 0) -> pd.DataFrame:
        """
        Pivot one material's rows into a temperature x theta grid.

        Args:
            observable: Column to plot
            material: Material index

        Returns:
            DataFrame indexed by temperature with one column per theta
        """
        if observable not in self.data.columns:
            raise ValueError(f"No observable '{observable}' in results")

        rows = self.data[self.data['material'] == material]
        if rows.empty:
            raise ValueError(f"No results for material {material}")

        return rows.pivot_table(
            index='temperature', columns='theta', values=observable, aggfunc='mean'
        )

    def plot(
        self,
        observable: str,
        material: int = 0,
        output_file: Optional[str] = None,
        title: Optional[str] = None,
        figsize: Tuple[int, int] = (12, 8),
        cmap: str = "viridis",
        show_values: bool = False
    ) -> str:
        """
        Generate and save heatmap.

        Args:
            observable: Column to plot
            material: Material index
            output_file: Output file path (auto-generated if None)
            title: Plot title
            figsize: Figure size (width, height)
            cmap: Colormap name
            show_values: Show values in cells

        Returns:
            Path to saved figure
        """
        if self.data.empty:
            raise ValueError("No results to plot")

        matrix = self.create_matrix(observable, material)

        # Highest temperature at the top
        matrix = matrix.sort_index(ascending=False)

        fig, ax = plt.subplots(figsize=figsize)
        sns.heatmap(
            matrix,
            annot=show_values,
            fmt='.3g',
            cmap=cmap,
            xticklabels=[f"{t:g}" for t in matrix.columns],
            yticklabels=[f"{t:g}" for t in matrix.index],
            ax=ax,
            cbar_kws={'label': observable}
        )

        ax.set_xlabel('Constraint theta (deg)', fontsize=12)
        ax.set_ylabel('Temperature (K)', fontsize=12)
        ax.set_title(title or f"{observable} vs theta and temperature (material {material})",
                     fontsize=14, fontweight='bold')

        plt.tight_layout()

        if output_file is None:
            os.makedirs(PLOTS_DIR, exist_ok=True)
            output_file = os.path.join(PLOTS_DIR, f'{observable}_material{material}_heatmap.png')
        else:
            directory = os.path.dirname(output_file)
            if directory:
                os.makedirs(directory, exist_ok=True)

        plt.savefig(output_file, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return output_file

    def temperature_profile(self, observable: str, material: int = 0) -> Dict[float, np.ndarray]:
        """Observable against temperature, one array per theta."""
        matrix = self.create_matrix(observable, material)
        return {theta: matrix[theta].to_numpy() for theta in matrix.columns}
