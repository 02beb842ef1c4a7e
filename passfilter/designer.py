"""
Lowpass / highpass design engine: the decision pipeline.

Takes a :class:`FilterSpec` and decides, in order:

1. **Degenerate requests**: a signal of ``MIN_SIGNAL_LENGTH`` samples or
   fewer, or a passband edge at/above Nyquist, short-circuits to a
   trivial all-pass or all-stop filter.  The precedence of the two
   checks differs between lowpass and highpass:

   | Direction | passband >= Nyquist | signal too short |
   |-----------|---------------------|------------------|
   | lowpass   | all-pass            | all-pass (reported first) |
   | highpass  | all-stop (checked first) | all-pass    |

2. **Stopband edge**: the transition band takes ``1 - steepness`` of
   the band beyond the passband edge (above it for a lowpass, below it
   for a highpass).

3. **Filter family**: a minimum-order Kaiser FIR when the signal is
   more than twice its order (``auto``), or as forced by the caller.

4. **IIR order**: minimum elliptic order, clamped to what zero-phase
   filtering of the signal supports.  The clamp floor is 1 for a
   lowpass but 2 for a highpass.

Every degradation is reported through :class:`Diagnostic` on the
returned :class:`FilterDesign` instead of a warning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

import numpy as np

from .config import (
    EDGE_PASSBAND_AT_NYQUIST,
    EDGE_SHORT_SIGNAL,
    FIR_LENGTH_FACTOR,
    HIGHPASS_EDGE_CHECK_ORDER,
    HIGHPASS_IIR_MIN_CLAMPED_ORDER,
    IIR_LENGTH_FACTOR,
    LOWPASS_EDGE_CHECK_ORDER,
    LOWPASS_IIR_MIN_CLAMPED_ORDER,
    MIN_SIGNAL_LENGTH,
)
from .dsp.order import ellip_min_order, kaiser_min_order
from .dsp.synthesis import (
    DigitalFilter,
    SynthesisParameters,
    allpass_filter,
    allstop_filter,
    synthesize,
)
from .spec import Direction, FilterSpec, ImpulseResponse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result records
# ---------------------------------------------------------------------------
class DiagnosticCode(Enum):
    """Why a design was degraded."""
    SIGNAL_TOO_SHORT = "signal_too_short"
    FORCED_ALLPASS = "forced_allpass"
    FORCED_ALLSTOP = "forced_allstop"
    SIGNAL_LENGTH_FOR_IIR = "signal_length_for_iir"


@dataclass(frozen=True)
class Diagnostic:
    """Advisory, non-fatal note attached to a design."""
    code: DiagnosticCode
    message: str


@dataclass(frozen=True)
class FilterDesign:
    """Outcome of :func:`design_filter`."""
    spec: FilterSpec
    filter: DigitalFilter
    is_fir: bool = True
    order: int = 0
    stopband_normalized: float | None = None
    parameters: SynthesisParameters | None = None
    diagnostic: Diagnostic | None = None

    @property
    def stopband_frequency(self) -> float | None:
        """Stopband edge in the caller's units."""
        if self.stopband_normalized is None:
            return None
        return self.spec.frequency.to_hz(self.stopband_normalized)

    @property
    def is_trivial(self) -> bool:
        return self.parameters is None


# ---------------------------------------------------------------------------
# Transition band
# ---------------------------------------------------------------------------
def stopband_edge(
    passband_normalized: float,
    transition_fraction: float,
    direction: Direction,
) -> float:
    """Normalized stopband edge for a passband edge in (0, 1)."""
    if direction is Direction.HIGHPASS:
        return passband_normalized - transition_fraction * passband_normalized
    return passband_normalized + transition_fraction * (1.0 - passband_normalized)


# ---------------------------------------------------------------------------
# Degenerate requests
# ---------------------------------------------------------------------------
def classify_edge_case(spec: FilterSpec) -> FilterDesign | None:
    """Return a trivial design for a degenerate request, else None."""
    too_short = spec.signal_length <= MIN_SIGNAL_LENGTH
    at_nyquist = spec.passband_normalized >= 1.0

    if spec.direction is Direction.HIGHPASS:
        check_order = HIGHPASS_EDGE_CHECK_ORDER
    else:
        check_order = LOWPASS_EDGE_CHECK_ORDER

    for check in check_order:
        if check == EDGE_SHORT_SIGNAL and too_short:
            return _trivial_design(
                spec, allpass_filter(_caller_rate(spec)),
                DiagnosticCode.SIGNAL_TOO_SHORT,
                f"Signal length is less than or equal to {MIN_SIGNAL_LENGTH} "
                "samples (signal too short). Designed an allpass filter.",
            )
        if check == EDGE_PASSBAND_AT_NYQUIST and at_nyquist:
            if spec.direction is Direction.HIGHPASS:
                return _trivial_design(
                    spec, allstop_filter(_caller_rate(spec)),
                    DiagnosticCode.FORCED_ALLSTOP,
                    "Passband frequency is greater than or equal to the Nyquist "
                    "frequency. Designed an allstop filter.",
                )
            return _trivial_design(
                spec, allpass_filter(_caller_rate(spec)),
                DiagnosticCode.FORCED_ALLPASS,
                "Passband frequency is greater than or equal to the Nyquist "
                "frequency. Designed an allpass filter.",
            )
    return None


def _trivial_design(
    spec: FilterSpec,
    digital_filter: DigitalFilter,
    code: DiagnosticCode,
    message: str,
) -> FilterDesign:
    logger.info("%s: %s", spec.direction.value, message)
    return FilterDesign(
        spec=spec,
        filter=digital_filter,
        is_fir=True,
        order=0,
        diagnostic=Diagnostic(code, message),
    )


# ---------------------------------------------------------------------------
# Family selection and order reconciliation
# ---------------------------------------------------------------------------
def select_impulse_response(
    fir_order: int,
    signal_length: int,
    mode: ImpulseResponse,
) -> ImpulseResponse:
    """Pick FIR or IIR.

    Forced modes are returned unchanged; a forced FIR that the signal
    cannot support fails later, at synthesis.
    """
    if mode is ImpulseResponse.AUTO:
        if signal_length > FIR_LENGTH_FACTOR * fir_order:
            return ImpulseResponse.FIR
        return ImpulseResponse.IIR
    return mode


def clamp_iir_order(order: int, signal_length: int, direction: Direction) -> int:
    """Largest order the signal supports, if *order* is too high.

    Returns *order* unchanged when ``signal_length > 3 * order``.
    """
    if signal_length > IIR_LENGTH_FACTOR * order:
        return order

    if direction is Direction.HIGHPASS:
        floor = HIGHPASS_IIR_MIN_CLAMPED_ORDER
    else:
        floor = LOWPASS_IIR_MIN_CLAMPED_ORDER

    clamped = max(floor, signal_length // IIR_LENGTH_FACTOR)
    if clamped > 1 and IIR_LENGTH_FACTOR * clamped == signal_length:
        clamped -= 1
    return clamped


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------
def design_filter(spec: FilterSpec) -> FilterDesign:
    """Design the filter for *spec*.

    Parameters
    ----------
    spec : FilterSpec
        Validated request.

    Returns
    -------
    FilterDesign
        Synthesized design, narrowed to single precision when the
        input data was single precision.

    Raises
    ------
    FilterOrderError
        ``impulse_response="fir"`` with a signal too short for the
        estimated FIR order.
    FilterDesignError
        Synthesis failed.
    """
    trivial = classify_edge_case(spec)
    if trivial is not None:
        return _narrow(trivial)

    direction = spec.direction
    prefix = direction.value
    wp = spec.passband_normalized
    ws = stopband_edge(wp, spec.transition_fraction, direction)
    fs = spec.sample_rate
    rate = _caller_rate(spec)
    wpass = spec.passband_frequency
    wstop = spec.frequency.to_hz(ws)
    apass = spec.passband_ripple_db
    astop = spec.stopband_attenuation_db

    fir_order, _ = kaiser_min_order(
        wpass, wstop,
        spec.passband_ripple_linear, spec.stopband_attenuation_linear,
        fs,
    )
    family = select_impulse_response(fir_order, spec.signal_length, spec.impulse_response)
    logger.debug(
        "%s: wp=%.5f ws=%.5f, FIR order %d, %d samples -> %s",
        prefix, wp, ws, fir_order, spec.signal_length, family.value,
    )

    diagnostic = None
    if family is ImpulseResponse.IIR:
        min_order = ellip_min_order(wp, ws, apass, astop, direction)
        if spec.signal_length <= IIR_LENGTH_FACTOR * min_order:
            order = clamp_iir_order(min_order, spec.signal_length, direction)
            params = SynthesisParameters(
                response=f"{prefix}iir", design_method="ellip",
                passband_frequency=wpass,
                passband_ripple_db=apass, stopband_attenuation_db=astop,
                filter_order=order, sample_rate=rate,
            )
            message = (
                f"Signal length {spec.signal_length} is too short for an IIR "
                f"filter of order {min_order}. Using order {order}; the "
                "stopband specification may not be met."
            )
            diagnostic = Diagnostic(DiagnosticCode.SIGNAL_LENGTH_FOR_IIR, message)
            logger.info("%s: %s", prefix, message)
        else:
            params = SynthesisParameters(
                response=f"{prefix}iir", design_method="ellip",
                passband_frequency=wpass, stopband_frequency=wstop,
                passband_ripple_db=apass, stopband_attenuation_db=astop,
                sample_rate=rate,
            )
    else:
        order = fir_order
        params = SynthesisParameters(
            response=f"{prefix}fir", design_method="kaiserwin",
            passband_frequency=wpass, stopband_frequency=wstop,
            passband_ripple_db=apass, stopband_attenuation_db=astop,
            min_order="even", sample_rate=rate,
        )

    digital_filter = synthesize(params, signal_length=spec.signal_length)

    return _narrow(FilterDesign(
        spec=spec,
        filter=digital_filter,
        is_fir=family is ImpulseResponse.FIR,
        order=digital_filter.order,
        stopband_normalized=ws,
        parameters=params,
        diagnostic=diagnostic,
    ))


def _caller_rate(spec: FilterSpec) -> float | None:
    """Sample rate to report back, None for normalized requests."""
    return None if spec.is_normalized_frequency else spec.sample_rate


def _narrow(design: FilterDesign) -> FilterDesign:
    if not design.spec.is_single_precision:
        return design
    return replace(design, filter=design.filter.astype(np.float32))
