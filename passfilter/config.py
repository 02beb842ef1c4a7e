"""
Configuration constants and presets for the zero-phase pass filters.

Frequencies are either in hertz (when a sample rate is known) or
normalized so that 1.0 is the Nyquist frequency (pi rad/sample).

The policy constants below encode the branch ordering and order floors
of the design engine.  Lowpass and highpass are mirrored but not
symmetric: they differ in edge-case precedence and in the IIR order floor.
"""

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Design defaults
# ---------------------------------------------------------------------------
DEFAULT_STEEPNESS = 0.85               # Transition band = 15 % of the remaining band
MIN_STEEPNESS = 0.5                    # Inclusive
MAX_STEEPNESS = 1.0                    # Exclusive
DEFAULT_STOPBAND_ATTENUATION_DB = 60.0
PASSBAND_RIPPLE_DB = 0.1               # Fixed, not user-selectable
DEFAULT_IMPULSE_RESPONSE = "auto"

# Sample rate used when frequencies are normalized: fs / 2 == 1.0
NORMALIZED_SAMPLE_RATE = 2.0

# ---------------------------------------------------------------------------
# Edge-case policy
# ---------------------------------------------------------------------------
MIN_SIGNAL_LENGTH = 3                  # Signals this short (or shorter) get an all-pass

# Precedence of the degenerate-request checks.  Lowpass folds both
# conditions into one all-pass branch (short signal reported first);
# highpass reports all-stop for a passband at/above Nyquist before it
# ever looks at the signal length.
EDGE_SHORT_SIGNAL = "short_signal"
EDGE_PASSBAND_AT_NYQUIST = "passband_at_nyquist"
LOWPASS_EDGE_CHECK_ORDER = (EDGE_SHORT_SIGNAL, EDGE_PASSBAND_AT_NYQUIST)
HIGHPASS_EDGE_CHECK_ORDER = (EDGE_PASSBAND_AT_NYQUIST, EDGE_SHORT_SIGNAL)

# ---------------------------------------------------------------------------
# Order / length policy
# ---------------------------------------------------------------------------
FIR_LENGTH_FACTOR = 2                  # FIR needs signal_length > 2 * order
IIR_LENGTH_FACTOR = 3                  # filtfilt edge padding is 3 * order samples

# Floor of the clamped IIR order when the signal is too short for the
# minimum elliptic order.
LOWPASS_IIR_MIN_CLAMPED_ORDER = 1
HIGHPASS_IIR_MIN_CLAMPED_ORDER = 2

# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------
RESPONSE_POINTS = 8192                 # Frequency grid for response analysis

# ---------------------------------------------------------------------------
# Audio I/O (CLI)
# ---------------------------------------------------------------------------
SUBTYPE_WAV = "PCM_24"                 # soundfile subtype string


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------
@dataclass
class FilterPreset:
    """User-facing design knobs bundled under a name."""
    steepness: float = DEFAULT_STEEPNESS
    stopband_attenuation_db: float = DEFAULT_STOPBAND_ATTENUATION_DB
    impulse_response: str = DEFAULT_IMPULSE_RESPONSE


PRESET_GENTLE = FilterPreset(
    steepness=0.5,
    stopband_attenuation_db=40.0,
)

PRESET_DEFAULT = FilterPreset()   # defaults

PRESET_SHARP = FilterPreset(
    steepness=0.95,
    stopband_attenuation_db=80.0,
)

PRESETS = {
    "gentle": PRESET_GENTLE,
    "default": PRESET_DEFAULT,
    "sharp": PRESET_SHARP,
}
