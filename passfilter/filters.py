"""
Zero-phase lowpass and highpass filtering: public entry points.

Usage
-----
>>> y, design = lowpass(x, 0.3)                   # normalized, 1.0 = Nyquist
>>> y, design = highpass(x, 150.0, fs=1000.0)     # hertz
>>> yt, design = lowpass(frame, 50.0)             # DataFrame, fs from its index
>>> design.diagnostic                             # None unless degraded

Each call validates its inputs, designs a filter for *this* signal
(the achievable order depends on its length), and applies it without
phase distortion.  The returned data has the same type, shape and
dtype as the input.
"""

from __future__ import annotations

import logging

from .config import (
    DEFAULT_IMPULSE_RESPONSE,
    DEFAULT_STEEPNESS,
    DEFAULT_STOPBAND_ATTENUATION_DB,
)
from .designer import FilterDesign, design_filter
from .dsp.zerophase import filter_zero_phase
from .spec import Direction
from .validation import build_spec, prepare_data

logger = logging.getLogger(__name__)


def lowpass(
    x,
    passband: float,
    fs: float | None = None,
    *,
    steepness: float = DEFAULT_STEEPNESS,
    stopband_attenuation: float = DEFAULT_STOPBAND_ATTENUATION_DB,
    impulse_response: str = DEFAULT_IMPULSE_RESPONSE,
):
    """Filter *x* with a zero-phase lowpass filter.

    Parameters
    ----------
    x : array-like, pandas.Series or pandas.DataFrame
        ``(N,)`` vector, ``(N, C)`` matrix (columns filtered
        independently) or a uniformly sampled time series.
    passband : float
        Passband edge.  Normalized to the Nyquist frequency when *fs* is
        not given, in hertz otherwise.  Time series always use hertz.
    fs : float, optional
        Sample rate in hertz.  Must be omitted for time series.
    steepness : float
        Transition band steepness in ``[0.5, 1)``.  The transition band
        spans ``1 - steepness`` of the band between the passband edge
        and Nyquist.  Default 0.85.
    stopband_attenuation : float
        Stopband attenuation in dB.  Default 60.
    impulse_response : {"auto", "fir", "iir"}
        ``"fir"`` forces a minimum-order FIR filter (the signal must be
        more than twice as long as its order), ``"iir"`` forces an
        elliptic IIR filter, ``"auto"`` uses FIR when the signal is long
        enough and IIR otherwise.

    Returns
    -------
    y : same type as *x*
        Filtered data.
    design : FilterDesign
        The filter used and how it was chosen.
    """
    return _run(
        x, Direction.LOWPASS, passband, fs,
        steepness, stopband_attenuation, impulse_response,
    )


def highpass(
    x,
    passband: float,
    fs: float | None = None,
    *,
    steepness: float = DEFAULT_STEEPNESS,
    stopband_attenuation: float = DEFAULT_STOPBAND_ATTENUATION_DB,
    impulse_response: str = DEFAULT_IMPULSE_RESPONSE,
):
    """Filter *x* with a zero-phase highpass filter.

    Same parameters as :func:`lowpass`; the transition band spans
    ``1 - steepness`` of the band between 0 and the passband edge.
    A passband edge at or above Nyquist yields an all-stop filter.
    """
    return _run(
        x, Direction.HIGHPASS, passband, fs,
        steepness, stopband_attenuation, impulse_response,
    )


def _run(
    x,
    direction: Direction,
    passband: float,
    fs: float | None,
    steepness: float,
    stopband_attenuation: float,
    impulse_response: str,
) -> tuple[object, FilterDesign]:
    data = prepare_data(x)
    spec = build_spec(
        data, direction, passband, fs,
        steepness=steepness,
        stopband_attenuation=stopband_attenuation,
        impulse_response=impulse_response,
    )
    design = design_filter(spec)
    logger.debug(
        "%s: %s order %d for %d samples",
        direction.value, "FIR" if design.is_fir else "IIR",
        design.order, spec.signal_length,
    )
    y = filter_zero_phase(design.filter, data)
    return y, design
