"""
Frequency-response analysis of a finished design.

Measures what the synthesized filter actually achieves, as opposed to
what was requested:

  • Passband ripple   → peak-to-peak gain variation over the passband
  • Stopband attenuation → worst-case rejection beyond the stopband edge
  • Gain at the passband edge

Filters are analysed in double precision on their single-pass
response.  IIR designs are applied forward and backward, which squares
the magnitude, so on data their attenuation is twice the figure in dB.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.signal import welch

from .config import RESPONSE_POINTS
from .designer import FilterDesign
from .dsp.utils import linear_to_attenuation_db, linear_to_db
from .spec import Direction


@dataclass
class ResponseAnalysis:
    """Measured response figures, all in dB."""
    passband_ripple_db: float | None
    stopband_attenuation_db: float | None   # None when there is no stopband
    passband_edge_gain_db: float | None
    description: str                        # human-readable summary


def analyse(design: FilterDesign, num_points: int = RESPONSE_POINTS) -> ResponseAnalysis:
    """Measure the response of *design*.

    Parameters
    ----------
    design : FilterDesign
    num_points : int
        Size of the frequency grid on ``[0, Nyquist)``.
    """
    if design.is_trivial:
        gain = float(design.filter.numerator[0])
        kind = "allpass" if gain != 0.0 else "allstop"
        return ResponseAnalysis(
            passband_ripple_db=0.0 if gain != 0.0 else None,
            stopband_attenuation_db=None,
            passband_edge_gain_db=linear_to_db(abs(gain)),
            description=f"{kind} (order 0)",
        )

    w, h = design.filter.frequency_response(num_points)
    mag = np.abs(h)

    wp = design.spec.passband_normalized
    ws = design.stopband_normalized
    if design.spec.direction is Direction.HIGHPASS:
        pass_mask = w >= wp
        stop_mask = w <= ws
    else:
        pass_mask = w <= wp
        stop_mask = w >= ws

    ripple = None
    if np.any(pass_mask):
        ripple = float(linear_to_db(mag[pass_mask].max()) - linear_to_db(mag[pass_mask].min()))

    attenuation = None
    if np.any(stop_mask):
        attenuation = float(linear_to_attenuation_db(max(mag[stop_mask].max(), 1e-15)))

    edge_gain = float(linear_to_db(np.interp(wp, w, mag)))

    family = "FIR" if design.is_fir else "IIR"
    description = f"{design.spec.direction.value} {family}, order {design.order}"
    if design.filter.kaiser_beta is not None:
        description += f", Kaiser beta {design.filter.kaiser_beta:.2f}"
    if attenuation is not None:
        description += f", {attenuation:.1f} dB stopband"
    if design.diagnostic is not None:
        description += f" [{design.diagnostic.code.value}]"

    return ResponseAnalysis(
        passband_ripple_db=ripple,
        stopband_attenuation_db=attenuation,
        passband_edge_gain_db=edge_gain,
        description=description,
    )


def band_energy_ratio_db(
    x: np.ndarray,
    low_band: tuple[float, float],
    high_band: tuple[float, float],
    nperseg: int = 256,
) -> float:
    """Mean power in *low_band* over mean power in *high_band*, in dB.

    Bands are normalized frequency ranges (1 = Nyquist).  Power is
    estimated with Welch's method on a 1-D signal.
    """
    f, pxx = welch(x, fs=2.0, nperseg=min(nperseg, len(x)))
    low = pxx[(f >= low_band[0]) & (f <= low_band[1])].mean()
    high = pxx[(f >= high_band[0]) & (f <= high_band[1])].mean()
    return float(10.0 * np.log10(low / max(high, 1e-300)))
