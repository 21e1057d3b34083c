"""
Unit tests for the simulation logger and the observable heatmap.
"""

import io

import matplotlib
matplotlib.use("Agg")

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.utils.logger import SimulationLogger, LogLevel, get_logger, set_logger
from visualization.heatmap import ObservableHeatmap


def capture_logger(level=LogLevel.DEBUG, **kwargs):
    stream = io.StringIO()
    logger = SimulationLogger(name="Test", level=level, stream=stream,
                              use_colors=False, **kwargs)
    return logger, stream


class TestSimulationLogger:
    """Tests for SimulationLogger."""

    def test_level_filter(self):
        """Test messages below the level are dropped."""
        logger, stream = capture_logger(level=LogLevel.WARNING)
        logger.info("hidden")
        logger.warning("shown")

        out = stream.getvalue()
        assert "hidden" not in out
        assert "shown" in out
        assert logger.get_summary()['total_messages'] == 1

    def test_category_and_name(self):
        """Test logger name and category prefixes."""
        logger, stream = capture_logger()
        logger.info("hello", "SWEEP")
        assert "[Test] [SWEEP] hello" in stream.getvalue()

    def test_sim_time_stamp(self):
        """Test the simulated time stamp."""
        logger, stream = capture_logger()
        logger.set_sim_time(1234)
        logger.debug("tick")
        assert "[t=      1234]" in stream.getvalue()

    def test_sweep_messages(self):
        """Test the sweep convenience messages."""
        logger, stream = capture_logger()
        logger.material_start(0, 2)
        logger.angle_pair(0, 45.0, 90.0)
        logger.temperature_point(300.0, 4)
        logger.sweep_end(12)

        out = stream.getvalue()
        assert "Hybrid CMC loop for material 0" in out
        assert "theta=45 phi=90" in out
        assert "T=300 K done, 4 samples" in out
        assert "12 points emitted" in out

    def test_log_file(self, tmp_path):
        """Test the log file holds plain text."""
        path = tmp_path / "logs" / "sweep.log"
        logger = SimulationLogger(name="File", level=LogLevel.DEBUG, log_file=str(path),
                                  stream=io.StringIO())
        logger.error("written")
        logger.close()

        content = path.read_text()
        assert "written" in content
        assert "\033[" not in content

    def test_global_logger(self):
        """Test the global logger can be replaced."""
        logger, _ = capture_logger()
        set_logger(logger)
        assert get_logger() is logger


ROWS = [
    {'material': 0, 'theta': 0.0, 'phi': 0.0, 'temperature': 0.0, 'time': 10, 'm': 1.0},
    {'material': 0, 'theta': 0.0, 'phi': 90.0, 'temperature': 0.0, 'time': 20, 'm': 0.8},
    {'material': 0, 'theta': 45.0, 'phi': 0.0, 'temperature': 0.0, 'time': 30, 'm': 0.9},
    {'material': 0, 'theta': 0.0, 'phi': 0.0, 'temperature': 100.0, 'time': 40, 'm': 0.5},
    {'material': 0, 'theta': 45.0, 'phi': 0.0, 'temperature': 100.0, 'time': 50, 'm': 0.4},
    {'material': 1, 'theta': 0.0, 'phi': 0.0, 'temperature': 0.0, 'time': 60, 'm': 0.1},
]


class TestObservableHeatmap:
    """Tests for ObservableHeatmap."""

    def test_observables(self):
        """Test observables are the non-point columns."""
        assert ObservableHeatmap(results=ROWS).observables == ['m']

    def test_matrix_averages_phi(self):
        """Test the matrix averages over phi."""
        matrix = ObservableHeatmap(results=ROWS).create_matrix('m', material=0)

        assert list(matrix.index) == [0.0, 100.0]
        assert list(matrix.columns) == [0.0, 45.0]
        assert matrix.loc[0.0, 0.0] == pytest.approx(0.9)
        assert matrix.loc[100.0, 45.0] == pytest.approx(0.4)

    def test_unknown_observable(self):
        """Test an unknown observable is rejected."""
        with pytest.raises(ValueError):
            ObservableHeatmap(results=ROWS).create_matrix('chi')

    def test_unknown_material(self):
        """Test an unknown material is rejected."""
        with pytest.raises(ValueError):
            ObservableHeatmap(results=ROWS).create_matrix('m', material=7)

    def test_plot_from_csv(self, tmp_path):
        """Test plotting from a CSV file writes a PNG."""
        import pandas as pd

        csv_file = tmp_path / "results.csv"
        pd.DataFrame(ROWS).to_csv(csv_file, index=False)

        output = ObservableHeatmap(csv_file=str(csv_file)).plot(
            'm', output_file=str(tmp_path / "plots" / "m.png")
        )

        assert os.path.exists(output)

    def test_plot_empty(self):
        """Test plotting without data is rejected."""
        with pytest.raises(ValueError):
            ObservableHeatmap().plot('m')

    def test_temperature_profile(self):
        """Test the temperature profile per theta."""
        profile = ObservableHeatmap(results=ROWS).temperature_profile('m')
        assert list(profile[45.0]) == pytest.approx([0.9, 0.4])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
