"""Tests for the public lowpass / highpass entry points."""

from __future__ import annotations

import numpy as np
import numpy.testing
import pandas as pd
import pytest

from passfilter import (
    DiagnosticCode,
    FilterDesignError,
    FilterOrderError,
    FilterSpecificationError,
    UnsupportedInputError,
    highpass,
    lowpass,
)
from passfilter.analyzer import band_energy_ratio_db


@pytest.fixture
def noise() -> np.ndarray:
    return np.random.default_rng(0).standard_normal(1000)


class TestLowpass:
    """End-to-end lowpass filtering."""

    def test_white_noise(self, noise):
        """Test the default design on 1000 samples of white noise."""
        y, design = lowpass(noise, 0.3)

        assert design.is_fir
        assert design.order == 70
        assert design.diagnostic is None
        assert design.filter.dtype == np.float64
        assert y.dtype == np.float64
        assert y.shape == noise.shape

        # Steady-state part only: the first and last order / 2 samples
        # see a partial filter.
        steady = y[design.order:-design.order]
        assert band_energy_ratio_db(steady, (0.0, 0.25), (0.45, 1.0)) >= 60.0

    def test_short_signal_is_allpass(self):
        """Test that three samples come back unchanged."""
        x = np.random.default_rng(1).standard_normal(3)
        y, design = lowpass(x, 0.3)

        numpy.testing.assert_array_equal(y, x)
        assert design.diagnostic.code is DiagnosticCode.SIGNAL_TOO_SHORT
        assert design.order == 0

    def test_ten_samples(self):
        """Test a signal too short for the FIR design."""
        x = np.random.default_rng(1).standard_normal(10)
        y, design = lowpass(x, 0.3)

        assert y.shape == (10,)
        assert not design.is_fir
        assert design.diagnostic.code is DiagnosticCode.SIGNAL_LENGTH_FOR_IIR

    def test_passband_at_nyquist(self, noise):
        """Test that a passband edge at Nyquist passes everything."""
        y, design = lowpass(noise, 500.0, fs=1000.0)

        numpy.testing.assert_array_equal(y, noise)
        assert design.diagnostic.code is DiagnosticCode.FORCED_ALLPASS

    def test_hertz(self, noise):
        """Test that a sample rate in hertz scales the edges."""
        _, normalized = lowpass(noise, 0.3)
        _, hertz = lowpass(noise, 150.0, fs=1000.0)

        assert hertz.order == normalized.order
        assert hertz.stopband_frequency == pytest.approx(202.5)
        assert not hertz.spec.is_normalized_frequency

    def test_matrix(self, noise):
        """Test that the columns of a matrix are filtered independently."""
        x = np.column_stack([noise, noise[::-1], 2.0 * noise])
        y, _ = lowpass(x, 0.3)

        assert y.shape == (1000, 3)
        numpy.testing.assert_allclose(y[:, 1], lowpass(noise[::-1], 0.3)[0])
        numpy.testing.assert_allclose(y[:, 2], 2.0 * y[:, 0])

    def test_row_vector(self, noise):
        """Test that a 1xN array is treated as a vector."""
        y, design = lowpass(noise[np.newaxis, :], 0.3)

        assert y.shape == (1, 1000)
        assert design.spec.signal_length == 1000
        assert design.is_fir

    def test_float32(self, noise):
        """Test that single-precision data gives single-precision output."""
        y, design = lowpass(noise.astype(np.float32), 0.3)
        assert y.dtype == np.float32
        assert design.filter.dtype == np.float32

    def test_integer_input(self):
        """Test that integer data is filtered in double precision."""
        y, _ = lowpass(np.arange(100), 0.3)
        assert y.dtype == np.float64

    def test_forced_iir(self, noise):
        """Test that the IIR family can be forced on a long signal."""
        y, design = lowpass(noise, 0.3, impulse_response="iir")
        assert not design.is_fir
        assert y.shape == noise.shape

    def test_forced_fir_too_short(self):
        """Test that a forced FIR fails when the signal is too short."""
        x = np.random.default_rng(2).standard_normal(100)
        with pytest.raises(FilterOrderError):
            lowpass(x, 0.3, impulse_response="fir")

    def test_steepness_changes_order(self, noise):
        """Test that a steeper filter needs a higher order."""
        _, gentle = lowpass(noise, 0.3, steepness=0.5)
        _, sharp = lowpass(noise, 0.3, steepness=0.9)
        assert sharp.order > gentle.order


class TestHighpass:
    """End-to-end highpass filtering."""

    def test_white_noise(self, noise):
        """Test the default design on white noise."""
        y, design = highpass(noise, 0.3)

        assert design.is_fir
        assert design.stopband_normalized == pytest.approx(0.255)
        assert y.shape == noise.shape
        steady = y[design.order:-design.order]
        # Skip the DC bin, which Welch detrending empties
        assert band_energy_ratio_db(steady, (0.35, 1.0), (0.02, 0.2)) >= 50.0

    def test_passband_at_nyquist_is_allstop(self, noise):
        """Test that a passband edge above Nyquist removes everything."""
        y, design = highpass(noise, 600.0, fs=1000.0)

        numpy.testing.assert_array_equal(y, np.zeros_like(noise))
        assert design.diagnostic.code is DiagnosticCode.FORCED_ALLSTOP

    def test_allstop_before_short_signal(self):
        """Test that the all-stop check comes before the length check."""
        y, design = highpass(np.ones(2), 1.0)

        numpy.testing.assert_array_equal(y, np.zeros(2))
        assert design.diagnostic.code is DiagnosticCode.FORCED_ALLSTOP

    def test_short_signal_is_allpass(self):
        """Test that three samples come back unchanged."""
        x = np.array([1.0, -2.0, 3.0])
        y, design = highpass(x, 0.3)

        numpy.testing.assert_array_equal(y, x)
        assert design.diagnostic.code is DiagnosticCode.SIGNAL_TOO_SHORT

    @pytest.mark.parametrize("length", [4, 5])
    def test_order_floor_cannot_be_applied(self, length):
        """Test that the order-2 floor is too long for 4 or 5 samples."""
        with pytest.raises(FilterDesignError):
            highpass(np.ones(length), 0.3)

    def test_order_floor_lowpass(self):
        """Test that the lowpass counterpart of the same signal succeeds."""
        y, design = lowpass(np.ones(4), 0.3)
        assert design.order == 1
        assert y.shape == (4,)


class TestTimeSeries:
    """Tests for pandas input."""

    def test_series_timedelta_index(self, noise):
        """Test that the sample rate comes from a timedelta index."""
        index = pd.timedelta_range(start="0s", periods=1000, freq="1ms")
        series = pd.Series(noise, index=index, name="x")
        y, design = lowpass(series, 150.0)

        assert isinstance(y, pd.Series)
        assert y.name == "x"
        pd.testing.assert_index_equal(y.index, series.index)
        assert design.spec.sample_rate == pytest.approx(1000.0)
        numpy.testing.assert_allclose(y.to_numpy(), lowpass(noise, 150.0, fs=1000.0)[0])

    def test_dataframe_datetime_index(self, noise):
        """Test a DataFrame indexed by timestamps."""
        index = pd.date_range("2024-01-01", periods=1000, freq="10ms")
        frame = pd.DataFrame({"left": noise, "right": -noise}, index=index)
        y, design = highpass(frame, 20.0)

        assert isinstance(y, pd.DataFrame)
        assert list(y.columns) == ["left", "right"]
        pd.testing.assert_index_equal(y.index, frame.index)
        assert design.spec.sample_rate == pytest.approx(100.0)
        numpy.testing.assert_allclose(y["right"].to_numpy(), -y["left"].to_numpy())

    def test_numeric_index_in_seconds(self, noise):
        """Test a numeric index holding seconds."""
        frame = pd.DataFrame({"a": noise}, index=np.arange(1000) / 500.0)
        _, design = lowpass(frame, 50.0)
        assert design.spec.sample_rate == pytest.approx(500.0)

    def test_fs_not_allowed(self, noise):
        """Test that a time series cannot be given a sample rate."""
        with pytest.raises(FilterSpecificationError):
            lowpass(pd.Series(noise), 0.3, fs=2.0)

    def test_irregular_index(self, noise):
        """Test that non-uniform sampling is rejected."""
        times = np.cumsum(np.random.default_rng(3).uniform(0.5, 1.5, 1000))
        with pytest.raises(FilterSpecificationError):
            lowpass(pd.Series(noise, index=times), 0.1)

    def test_decreasing_index(self, noise):
        """Test that decreasing sample times are rejected."""
        with pytest.raises(FilterSpecificationError):
            lowpass(pd.Series(noise, index=-np.arange(1000.0)), 0.1)

    def test_string_index(self):
        """Test that an index without sample times is rejected."""
        series = pd.Series(np.ones(10), index=[f"s{i}" for i in range(10)])
        with pytest.raises(UnsupportedInputError):
            lowpass(series, 0.1)

    def test_duplicate_column_labels(self, noise):
        """Test that columns sharing a label are filtered by position."""
        index = np.arange(1000) / 100.0
        frame = pd.DataFrame(np.column_stack([noise, -noise]), index=index, columns=["a", "a"])
        y, _ = lowpass(frame, 10.0)

        assert list(y.columns) == ["a", "a"]
        numpy.testing.assert_allclose(y.iloc[:, 0].to_numpy(), lowpass(noise, 10.0, fs=100.0)[0])
        numpy.testing.assert_allclose(y.iloc[:, 1].to_numpy(), -y.iloc[:, 0].to_numpy())

    def test_mixed_column_dtypes(self, noise):
        """Test that integer columns are filtered in double precision."""
        frame = pd.DataFrame(
            {"f": noise.astype(np.float32), "i": np.arange(1000)},
            index=np.arange(1000) / 100.0,
        )
        y, design = lowpass(frame, 10.0)

        assert y["f"].dtype == np.float32
        assert y["i"].dtype == np.float64
        assert not design.spec.is_single_precision

    def test_single_row(self):
        """Test that one row does not define a sample rate."""
        with pytest.raises(FilterSpecificationError):
            lowpass(pd.Series([1.0]), 0.1)


class TestValidation:
    """Tests for rejected arguments."""

    @pytest.mark.parametrize("steepness", [0.4, 1.0, 1.2, float("nan")])
    def test_steepness_range(self, noise, steepness):
        """Test that steepness must lie in [0.5, 1)."""
        with pytest.raises(FilterSpecificationError):
            lowpass(noise, 0.3, steepness=steepness)

    @pytest.mark.parametrize("passband", [0.0, -0.3, float("inf"), "high"])
    def test_passband(self, noise, passband):
        """Test that the passband edge must be a positive number."""
        with pytest.raises(FilterSpecificationError):
            lowpass(noise, passband)

    @pytest.mark.parametrize("fs", [0.0, -1000.0])
    def test_sample_rate(self, noise, fs):
        """Test that the sample rate must be positive."""
        with pytest.raises(FilterSpecificationError):
            lowpass(noise, 100.0, fs=fs)

    def test_attenuation(self, noise):
        """Test that the stopband attenuation must be positive."""
        with pytest.raises(FilterSpecificationError):
            highpass(noise, 0.3, stopband_attenuation=0.0)

    def test_impulse_response(self, noise):
        """Test that unknown filter families are rejected."""
        with pytest.raises(FilterSpecificationError):
            lowpass(noise, 0.3, impulse_response="butter")

    def test_impulse_response_case(self, noise):
        """Test that the filter family is case insensitive."""
        _, design = lowpass(noise, 0.3, impulse_response="IIR")
        assert not design.is_fir

    def test_complex(self, noise):
        """Test that complex data is rejected."""
        with pytest.raises(UnsupportedInputError):
            lowpass(noise + 1j * noise, 0.3)

    def test_three_dimensions(self):
        """Test that 3-D data is rejected."""
        with pytest.raises(UnsupportedInputError):
            lowpass(np.zeros((10, 2, 2)), 0.3)

    def test_error_types(self, noise):
        """Test that validation errors are also ValueError / TypeError."""
        with pytest.raises(ValueError):
            lowpass(noise, 0.3, steepness=2.0)
        with pytest.raises(TypeError):
            lowpass(np.array(["a", "b"]), 0.3)
