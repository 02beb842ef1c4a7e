"""
Minimum-order estimates for the FIR and IIR filter families.

FIR
---
Kaiser's empirical formula: the number of taps grows with the
attenuation ``A = -20 log10(min(dp, ds))`` and inversely with the
transition width.  It is an estimate, not a bound, so the resulting
order can be off by one in either direction.

IIR
---
Elliptic (Cauer) lowpass prototype.  Digital band edges are pre-warped
to the analog prototype with ``tan(pi f / 2)`` for a lowpass and
``cot(pi f / 2)`` for a highpass, which maps the highpass problem onto
a lowpass prototype.  The order then follows from the selectivity
factor ``k`` and discrimination factor ``k1``::

    N >= K(k) K'(k1) / (K'(k) K(k1)),    K'(x) = K(sqrt(1 - x^2))

with ``K`` the complete elliptic integral of the first kind.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from scipy.signal import kaiserord
from scipy.special import ellipk, ellipkm1

from ..spec import Direction

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# FIR
# ---------------------------------------------------------------------------

def kaiser_min_order(
    passband_hz: float,
    stopband_hz: float,
    passband_ripple: float,
    stopband_deviation: float,
    sample_rate: float,
) -> tuple[int, float]:
    """Estimate the minimum even FIR order of a Kaiser-window design.

    Parameters
    ----------
    passband_hz, stopband_hz : float
        Band edges, in the same units as *sample_rate*.  Their order
        does not matter (lowpass and highpass alike).
    passband_ripple, stopband_deviation : float
        Linear deviations.  The stricter of the two sets the attenuation.
    sample_rate : float
        Full sample rate (2.0 for normalized frequencies).

    Returns
    -------
    order : int
        Even filter order (``numtaps - 1``), at least 0.
    beta : float
        Kaiser window shape parameter for the synthesis step.
    """
    deviation = min(passband_ripple, stopband_deviation)
    attenuation_db = -20.0 * np.log10(deviation)
    width = abs(stopband_hz - passband_hz) / (sample_rate / 2.0)

    numtaps, beta = kaiserord(attenuation_db, width)
    order = max(int(numtaps) - 1, 0)
    if order % 2:
        order += 1  # Even order -> odd length, Type I (valid for highpass)

    logger.debug(
        "Kaiser estimate: A=%.2f dB, width=%.5f -> order %d, beta %.3f",
        attenuation_db, width, order, beta,
    )
    return order, float(beta)


# ---------------------------------------------------------------------------
# IIR
# ---------------------------------------------------------------------------

def prewarp(normalized_freq: float, direction: Direction) -> float:
    """Map a normalized digital frequency onto the analog lowpass prototype."""
    theta = math.pi * normalized_freq / 2.0
    if direction is Direction.HIGHPASS:
        return 1.0 / math.tan(theta)
    return math.tan(theta)


def ellip_prototype_order(
    analog_passband: float,
    analog_stopband: float,
    passband_ripple_db: float,
    stopband_attenuation_db: float,
) -> int:
    """Minimum order of an analog elliptic lowpass prototype.

    *analog_passband* must be below *analog_stopband*.
    """
    k = analog_passband / analog_stopband
    k1_sq = (10.0 ** (0.1 * passband_ripple_db) - 1.0) / (
        10.0 ** (0.1 * abs(stopband_attenuation_db)) - 1.0
    )
    m = k * k

    # ellipkm1(p) == ellipk(1 - p) without the cancellation near m -> 1
    ratio = (ellipk(m) * ellipkm1(k1_sq)) / (ellipkm1(m) * ellipk(k1_sq))
    return max(int(math.ceil(ratio)), 1)


def ellip_min_order(
    passband_normalized: float,
    stopband_normalized: float,
    passband_ripple_db: float,
    stopband_attenuation_db: float,
    direction: Direction,
) -> int:
    """Minimum elliptic IIR order for normalized band edges.

    Parameters
    ----------
    passband_normalized, stopband_normalized : float
        Band edges in (0, 1), 1 = Nyquist.
    passband_ripple_db, stopband_attenuation_db : float
        Ripple and attenuation in dB.
    direction : Direction
        Chooses the pre-warping function.

    Returns
    -------
    int
        Order >= 1.
    """
    wp = prewarp(passband_normalized, direction)
    ws = prewarp(stopband_normalized, direction)
    order = ellip_prototype_order(
        wp, ws, passband_ripple_db, stopband_attenuation_db
    )
    logger.debug(
        "Elliptic estimate (%s): Wp=%.5f, Ws=%.5f -> order %d",
        direction.value, wp, ws, order,
    )
    return order
