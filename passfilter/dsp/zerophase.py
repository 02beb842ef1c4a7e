"""
Zero-phase application of a synthesized filter.

FIR filters designed here are linear phase with a constant group delay
of ``order / 2`` samples.  The delay is compensated by appending that
many zeros, filtering causally, and dropping the first ``order / 2``
output samples, so the output lines up with the input sample for
sample and keeps its length.

IIR filters have no constant delay.  They are run forward and then
backward over the data (``sosfiltfilt``), which squares the magnitude
response and cancels the phase.  The edge padding of that procedure
takes ``3 * order`` samples, so the data must be longer than that.

Data layouts
------------
  • ``(N,)``     vector
  • ``(1, N)``   row vector, filtered along the row
  • ``(N, C)``   matrix, each column filtered independently
  • ``pandas.Series`` / ``pandas.DataFrame``, each column filtered
    independently; index and labels are preserved.

The output always has the input's shape and dtype.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd
from scipy.signal import lfilter, sosfiltfilt

from ..config import IIR_LENGTH_FACTOR
from ..exceptions import FilterDesignError, UnsupportedInputError
from .synthesis import DigitalFilter
from .utils import as_columns, is_row_vector

logger = logging.getLogger(__name__)


def filter_zero_phase(digital_filter: DigitalFilter, x):
    """Filter *x* with *digital_filter* without net phase shift.

    Parameters
    ----------
    digital_filter : DigitalFilter
    x : np.ndarray, pandas.Series or pandas.DataFrame

    Returns
    -------
    Same type, shape and dtype as *x*.

    Raises
    ------
    FilterDesignError
        The data is too short for the IIR edge padding.
    """
    if isinstance(x, pd.DataFrame):
        out = x.copy()
        for i in range(x.shape[1]):
            out.isetitem(i, _filter_array(digital_filter, x.iloc[:, i].to_numpy()))
        return out
    if isinstance(x, pd.Series):
        y = _filter_array(digital_filter, x.to_numpy())
        return pd.Series(y, index=x.index, name=x.name)
    if isinstance(x, np.ndarray):
        return _filter_array(digital_filter, x)
    raise UnsupportedInputError(f"Cannot filter data of type {type(x).__name__}")


# ---------------------------------------------------------------------------
def _filter_array(digital_filter: DigitalFilter, x: np.ndarray) -> np.ndarray:
    """Filter an array along its time axis, preserving shape and dtype."""
    if x.ndim not in (1, 2):
        raise UnsupportedInputError(f"Unsupported data shape: {x.shape}")

    data = as_columns(x)
    if data.shape[0] == 0:
        return x.copy()

    if digital_filter.is_fir:
        out = _apply_fir(digital_filter, data)
    else:
        out = _apply_iir(digital_filter, data)

    out = np.asarray(out).astype(x.dtype, copy=False)
    if is_row_vector(x):
        out = out.T
    return out


def _apply_fir(digital_filter: DigitalFilter, data: np.ndarray) -> np.ndarray:
    """Causal FIR filtering with the group delay advanced away."""
    b = digital_filter.numerator
    a = np.ones(1, dtype=b.dtype)
    delay = int(digital_filter.group_delay)

    if delay == 0:
        return lfilter(b, a, data, axis=0)

    # Zero tail so the delayed output still covers the last input samples
    tail = np.zeros((delay,) + data.shape[1:], dtype=data.dtype)
    padded = np.concatenate([data, tail], axis=0)
    out = lfilter(b, a, padded, axis=0)
    return out[delay:]


def _apply_iir(digital_filter: DigitalFilter, data: np.ndarray) -> np.ndarray:
    """Forward-backward IIR filtering with odd-extension edge padding."""
    n = data.shape[0]
    padlen = IIR_LENGTH_FACTOR * digital_filter.order
    if n <= padlen:
        raise FilterDesignError(
            f"Data length {n} is too short for zero-phase filtering with an "
            f"IIR filter of order {digital_filter.order}; more than {padlen} "
            "samples are required."
        )
    logger.debug("sosfiltfilt: %d samples, padlen %d", n, padlen)
    # sosfilt needs a writable copy of the read-only sections
    sos = np.array(digital_filter.sos)
    return sosfiltfilt(sos, data, axis=0, padtype="odd", padlen=padlen)
