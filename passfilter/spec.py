"""
Filter request records.

A :class:`FilterSpec` is built once per call from validated inputs and
is read-only afterwards.  It carries the caller's units (hertz or
normalized) together with the normalized values the design engine
works with.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .config import (
    DEFAULT_STEEPNESS,
    DEFAULT_STOPBAND_ATTENUATION_DB,
    NORMALIZED_SAMPLE_RATE,
    PASSBAND_RIPPLE_DB,
)
from .dsp.utils import attenuation_db_to_linear, ripple_db_to_linear


class Direction(Enum):
    """Which side of the passband edge is kept."""
    LOWPASS = "lowpass"
    HIGHPASS = "highpass"


class ImpulseResponse(Enum):
    """Requested filter family."""
    AUTO = "auto"
    FIR = "fir"
    IIR = "iir"


@dataclass(frozen=True)
class FrequencySpec:
    """Hertz / normalized frequency bookkeeping.

    Normalized frequencies are in units of pi rad/sample, so 1.0 is the
    Nyquist frequency.  When the caller gave no sample rate the
    "hertz" values are the normalized ones and ``sample_rate`` is 2.
    """
    sample_rate: float = NORMALIZED_SAMPLE_RATE
    is_normalized: bool = True

    @property
    def nyquist(self) -> float:
        return self.sample_rate / 2.0

    def to_normalized(self, freq: float) -> float:
        return freq / self.nyquist

    def to_hz(self, normalized: float) -> float:
        return normalized * self.nyquist


@dataclass(frozen=True)
class FilterSpec:
    """Immutable description of one lowpass / highpass request."""
    direction: Direction
    passband_frequency: float
    signal_length: int
    frequency: FrequencySpec = FrequencySpec()
    steepness: float = DEFAULT_STEEPNESS
    stopband_attenuation_db: float = DEFAULT_STOPBAND_ATTENUATION_DB
    impulse_response: ImpulseResponse = ImpulseResponse.AUTO
    passband_ripple_db: float = PASSBAND_RIPPLE_DB
    is_single_precision: bool = False

    # ------------------------------------------------------------------
    @property
    def sample_rate(self) -> float:
        return self.frequency.sample_rate

    @property
    def nyquist(self) -> float:
        return self.frequency.nyquist

    @property
    def is_normalized_frequency(self) -> bool:
        return self.frequency.is_normalized

    @property
    def passband_normalized(self) -> float:
        return self.frequency.to_normalized(self.passband_frequency)

    @property
    def transition_fraction(self) -> float:
        """Fraction of the band beyond the passband edge used for transition.

        Decreases towards 0 as steepness approaches 1.
        """
        return 1.0 - self.steepness

    @property
    def passband_ripple_linear(self) -> float:
        return ripple_db_to_linear(self.passband_ripple_db)

    @property
    def stopband_attenuation_linear(self) -> float:
        return attenuation_db_to_linear(self.stopband_attenuation_db)
