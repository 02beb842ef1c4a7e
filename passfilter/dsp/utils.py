"""
DSP utility functions: decibel conversions and column helpers.
"""

from __future__ import annotations

import numpy as np


# ---------------------------------------------------------------------------
# Gain conversions
# ---------------------------------------------------------------------------

def db_to_linear(db: float) -> float:
    """Convert decibels to linear amplitude."""
    return 10.0 ** (db / 20.0)


def linear_to_db(amp: float) -> float:
    """Convert linear amplitude to decibels."""
    if amp <= 0:
        return -np.inf
    return 20.0 * np.log10(amp)


def ripple_db_to_linear(ripple_db: float) -> float:
    """Convert peak-to-peak passband ripple in dB to a linear deviation.

    A ripple of *ripple_db* means the passband gain swings between
    ``1 - d`` and ``1 + d`` with ``(1 + d) / (1 - d) = 10 ** (ripple_db / 20)``.
    """
    g = db_to_linear(ripple_db)
    return (g - 1.0) / (g + 1.0)


def attenuation_db_to_linear(attenuation_db: float) -> float:
    """Convert a (positive) stopband attenuation in dB to a linear deviation."""
    return db_to_linear(-abs(attenuation_db))


def linear_to_attenuation_db(deviation: float) -> float:
    """Inverse of :func:`attenuation_db_to_linear`."""
    return -linear_to_db(deviation)


# ---------------------------------------------------------------------------
# Shape helpers
# ---------------------------------------------------------------------------

def is_row_vector(x: np.ndarray) -> bool:
    """True for a 2-D array holding a single row of samples, e.g. ``(1, N)``."""
    return x.ndim == 2 and x.shape[0] == 1 and x.shape[1] > 1


def as_columns(x: np.ndarray) -> np.ndarray:
    """View *x* with time along axis 0.

    A 1×N row is treated as a single vector, so it is transposed to N×1.
    Vectors ``(N,)`` and matrices ``(N, C)`` are returned unchanged.
    """
    if is_row_vector(x):
        return x.T
    return x


def signal_length(x: np.ndarray) -> int:
    """Number of samples per channel of *x*."""
    return int(as_columns(x).shape[0])
