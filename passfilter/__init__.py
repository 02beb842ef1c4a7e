"""
passfilter — Zero-phase lowpass and highpass filtering.

Designs a minimum-order Kaiser FIR or elliptic IIR filter sized to the
signal being filtered, and applies it without phase distortion.
"""

from .designer import Diagnostic, DiagnosticCode, FilterDesign, design_filter
from .exceptions import (
    FilterDesignError,
    FilterError,
    FilterOrderError,
    FilterSpecificationError,
    UnsupportedInputError,
)
from .filters import highpass, lowpass

__version__ = "1.0.0"
