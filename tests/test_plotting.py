"""Smoke tests for the plotting helpers."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from passfilter import lowpass  # noqa: E402
from passfilter.plotting import plot_filtering, plot_spectrogram  # noqa: E402


class TestPlotFiltering:
    """Tests for the before/after figure."""

    def test_vector(self):
        """Test the two panels for a normalized design."""
        x = np.random.default_rng(0).standard_normal(1000)
        y, design = lowpass(x, 0.3)
        fig = plot_filtering(x, y, design)
        try:
            assert len(fig.axes) == 2
            assert fig.axes[0].get_xlabel() == "Samples"
        finally:
            plt.close(fig)

    def test_dataframe_in_hertz(self):
        """Test that time series are drawn against seconds."""
        index = np.arange(1000) / 1000.0
        rng = np.random.default_rng(1)
        frame = pd.DataFrame({"a": rng.standard_normal(1000), "b": rng.standard_normal(1000)}, index=index)
        y, design = lowpass(frame, 100.0)
        fig = plot_filtering(frame, y, design, title="frame")
        try:
            assert fig.axes[0].get_xlabel() == "Time (s)"
            assert fig.axes[1].get_xlabel() == "Frequency (Hz)"
        finally:
            plt.close(fig)


class TestPlotSpectrogram:
    """Tests for the spectrogram figure."""

    def test_spectrogram(self):
        """Test the spectrogram and its colour bar."""
        x = np.random.default_rng(2).standard_normal(8000)
        fig = plot_spectrogram(x, 8000.0, title="noise")
        try:
            assert len(fig.axes) == 2
            assert fig.axes[0].get_title() == "noise"
        finally:
            plt.close(fig)
