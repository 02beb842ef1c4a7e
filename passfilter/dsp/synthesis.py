"""
Coefficient synthesis with scipy.signal.

Turns a :class:`SynthesisParameters` request into an immutable
:class:`DigitalFilter`:

  • ``kaiserwin``: minimum even-order Kaiser-window FIR (``firwin``),
    cutoff halfway through the transition band.
  • ``ellip``:     elliptic IIR as second-order sections (``ellip``),
    passband edge matched exactly.

Trivial all-pass / all-stop filters are single-tap FIR filters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

import numpy as np
from scipy.signal import ellip, firwin, freqz, sosfreqz

from ..config import FIR_LENGTH_FACTOR, NORMALIZED_SAMPLE_RATE
from ..exceptions import FilterDesignError, FilterOrderError
from ..spec import Direction
from .order import ellip_min_order, kaiser_min_order
from .utils import attenuation_db_to_linear, ripple_db_to_linear

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SynthesisParameters:
    """Everything a synthesis routine needs to build the filter."""
    response: str                          # lowpassfir / highpassfir / lowpassiir / highpassiir
    design_method: str                     # "kaiserwin" or "ellip"
    passband_frequency: float
    passband_ripple_db: float
    stopband_attenuation_db: float
    stopband_frequency: float | None = None   # None: fixed-order design
    filter_order: int | None = None           # None: minimum-order design
    min_order: str | None = None              # "even" for FIR designs
    sample_rate: float | None = None          # None: normalized frequencies

    @property
    def is_fir(self) -> bool:
        return self.response.endswith("fir")

    @property
    def btype(self) -> str:
        return "lowpass" if self.response.startswith("lowpass") else "highpass"

    @property
    def fs(self) -> float:
        return self.sample_rate if self.sample_rate is not None else NORMALIZED_SAMPLE_RATE


@dataclass(frozen=True)
class DigitalFilter:
    """Synthesized filter: FIR taps or IIR second-order sections.

    Coefficient arrays are read-only; :meth:`astype` returns a new
    filter instead of converting in place.
    """
    order: int
    numerator: np.ndarray | None = None    # FIR taps, length order + 1
    sos: np.ndarray | None = None          # IIR sections, shape (n, 6)
    sample_rate: float | None = None
    kaiser_beta: float | None = None        # Window shape of Kaiser FIR designs

    def __post_init__(self) -> None:
        if (self.numerator is None) == (self.sos is None):
            raise FilterDesignError("DigitalFilter needs exactly one of numerator / sos")
        for name in ("numerator", "sos"):
            arr = getattr(self, name)
            if arr is not None:
                arr = np.array(arr, copy=True)
                arr.setflags(write=False)
                object.__setattr__(self, name, arr)

    # ------------------------------------------------------------------
    @property
    def is_fir(self) -> bool:
        return self.numerator is not None

    @property
    def coefficients(self) -> np.ndarray:
        return self.numerator if self.is_fir else self.sos

    @property
    def dtype(self) -> np.dtype:
        return self.coefficients.dtype

    @property
    def group_delay(self) -> float:
        """Constant group delay of a linear-phase FIR, in samples."""
        if not self.is_fir:
            raise FilterDesignError("IIR filters have no constant group delay")
        return self.order / 2.0

    def astype(self, dtype) -> "DigitalFilter":
        """Return a copy with coefficients cast to *dtype*."""
        if self.is_fir:
            return replace(self, numerator=self.numerator.astype(dtype))
        return replace(self, sos=self.sos.astype(dtype))

    def frequency_response(self, num_points: int = 8192) -> tuple[np.ndarray, np.ndarray]:
        """Complex response on ``[0, Nyquist)``, frequencies normalized to 1."""
        if self.is_fir:
            w, h = freqz(self.numerator.astype(np.float64), worN=num_points)
        else:
            w, h = sosfreqz(self.sos.astype(np.float64), worN=num_points)
        return w / np.pi, h


# ---------------------------------------------------------------------------
# Trivial filters
# ---------------------------------------------------------------------------

def allpass_filter(sample_rate: float | None = None) -> DigitalFilter:
    """Identity filter: a single unit tap."""
    return DigitalFilter(order=0, numerator=np.array([1.0]), sample_rate=sample_rate)


def allstop_filter(sample_rate: float | None = None) -> DigitalFilter:
    """Zero-gain filter: a single zero tap."""
    return DigitalFilter(order=0, numerator=np.array([0.0]), sample_rate=sample_rate)


# ---------------------------------------------------------------------------
# Synthesis
# ---------------------------------------------------------------------------

def synthesize(
    params: SynthesisParameters,
    signal_length: int | None = None,
) -> DigitalFilter:
    """Design the filter described by *params*.

    Parameters
    ----------
    params : SynthesisParameters
    signal_length : int, optional
        When given, a minimum-order FIR design is rejected if the
        signal is not more than ``FIR_LENGTH_FACTOR`` times its order.

    Raises
    ------
    FilterOrderError
        FIR order too large for *signal_length*.
    FilterDesignError
        Unknown design method or scipy failure.
    """
    if params.design_method == "kaiserwin":
        return _synthesize_kaiser(params, signal_length)
    if params.design_method == "ellip":
        return _synthesize_ellip(params)
    raise FilterDesignError(f"Unsupported design method: {params.design_method!r}")


def _synthesize_kaiser(
    params: SynthesisParameters, signal_length: int | None
) -> DigitalFilter:
    if params.stopband_frequency is None:
        raise FilterDesignError("Kaiser-window FIR design needs a stopband frequency")

    order, beta = kaiser_min_order(
        params.passband_frequency,
        params.stopband_frequency,
        ripple_db_to_linear(params.passband_ripple_db),
        attenuation_db_to_linear(params.stopband_attenuation_db),
        params.fs,
    )
    if signal_length is not None and signal_length <= FIR_LENGTH_FACTOR * order:
        raise FilterOrderError(
            f"FIR filter of order {order} needs a signal longer than "
            f"{FIR_LENGTH_FACTOR * order} samples (got {signal_length}). "
            "Use impulse_response='iir' or 'auto'."
        )

    cutoff = (params.passband_frequency + params.stopband_frequency) / 2.0
    try:
        taps = firwin(
            order + 1, cutoff, window=("kaiser", beta),
            pass_zero=params.btype, fs=params.fs,
        )
    except ValueError as e:
        raise FilterDesignError(f"FIR synthesis failed: {e}") from e

    logger.debug("Synthesized %s, %d taps", params.response, len(taps))
    return DigitalFilter(
        order=order,
        numerator=np.asarray(taps, dtype=np.float64),
        sample_rate=params.sample_rate,
        kaiser_beta=beta,
    )


def _synthesize_ellip(params: SynthesisParameters) -> DigitalFilter:
    nyquist = params.fs / 2.0
    wp = params.passband_frequency / nyquist

    order = params.filter_order
    if order is None:
        if params.stopband_frequency is None:
            raise FilterDesignError(
                "Elliptic design needs either a filter order or a stopband frequency"
            )
        direction = Direction.LOWPASS if params.btype == "lowpass" else Direction.HIGHPASS
        order = ellip_min_order(
            wp,
            params.stopband_frequency / nyquist,
            params.passband_ripple_db,
            params.stopband_attenuation_db,
            direction,
        )

    try:
        sos = ellip(
            order,
            params.passband_ripple_db,
            params.stopband_attenuation_db,
            wp,
            btype=params.btype,
            output="sos",
        )
    except ValueError as e:
        raise FilterDesignError(f"IIR synthesis failed: {e}") from e

    logger.debug(
        "Synthesized %s, order %d (%d sections)",
        params.response, order, len(sos),
    )
    return DigitalFilter(
        order=order,
        sos=np.asarray(sos, dtype=np.float64),
        sample_rate=params.sample_rate,
    )
