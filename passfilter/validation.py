"""
Input validation: raw call arguments -> :class:`FilterSpec`.

Accepted data
-------------
  • array-like of real numbers, 1-D or 2-D.  ``float32`` data keeps
    single precision; every other real dtype is filtered as ``float64``.
  • ``pandas.Series`` / ``pandas.DataFrame`` sampled uniformly in time.
    The index holds the sample times: seconds (numeric), a
    ``TimedeltaIndex`` or a ``DatetimeIndex``.  The sample rate comes
    from the index, so none may be passed explicitly.
"""

from __future__ import annotations

import math

import numpy as np
import pandas as pd

from .config import (
    DEFAULT_IMPULSE_RESPONSE,
    DEFAULT_STEEPNESS,
    DEFAULT_STOPBAND_ATTENUATION_DB,
    MAX_STEEPNESS,
    MIN_STEEPNESS,
    NORMALIZED_SAMPLE_RATE,
)
from .dsp.utils import signal_length
from .exceptions import FilterSpecificationError, UnsupportedInputError
from .spec import Direction, FilterSpec, FrequencySpec, ImpulseResponse

# Relative tolerance on the spread of sample intervals of a time series
UNIFORM_SAMPLING_RTOL = 1e-6


def prepare_data(x):
    """Coerce *x* to an ndarray or pandas object the applicator accepts.

    Returns the prepared data; pandas objects are returned with their
    numeric columns cast to float64 unless they are float32.
    """
    if isinstance(x, (pd.Series, pd.DataFrame)):
        if isinstance(x, pd.Series):
            _check_real_dtype(x.dtype, f"series {x.name!r}")
            return x if x.dtype == np.float32 else x.astype(np.float64)

        # Columns by position: labels need not be unique
        out = x.copy()
        for i, (label, dtype) in enumerate(x.dtypes.items()):
            _check_real_dtype(dtype, f"column {label!r}")
            if dtype != np.float32:
                out.isetitem(i, x.iloc[:, i].astype(np.float64))
        return out

    arr = np.asarray(x)
    _check_real_dtype(arr.dtype, "input data")
    if arr.ndim not in (1, 2):
        raise UnsupportedInputError(
            f"Input must be a vector or a matrix, got {arr.ndim} dimension(s)"
        )
    if arr.dtype != np.float32:
        arr = arr.astype(np.float64)
    return arr


def build_spec(
    x,
    direction: Direction | str,
    passband: float,
    fs: float | None = None,
    steepness: float = DEFAULT_STEEPNESS,
    stopband_attenuation: float = DEFAULT_STOPBAND_ATTENUATION_DB,
    impulse_response: ImpulseResponse | str = DEFAULT_IMPULSE_RESPONSE,
) -> FilterSpec:
    """Validate a call and build the immutable request.

    *x* must already have gone through :func:`prepare_data`.

    Raises
    ------
    FilterSpecificationError
        Out-of-range frequency, steepness or attenuation, unknown
        impulse response, irregular time series.
    UnsupportedInputError
        Unsupported data type or shape.
    """
    direction = _coerce_enum(Direction, direction, "direction")
    mode = _coerce_enum(ImpulseResponse, impulse_response, "impulse_response")

    if isinstance(x, (pd.Series, pd.DataFrame)):
        if fs is not None:
            raise FilterSpecificationError(
                "The sample rate of a time series is taken from its index; "
                "do not pass fs"
            )
        frequency = FrequencySpec(sample_rate=sample_rate_from_index(x.index), is_normalized=False)
        n = len(x.index)
        single = _all_single(x)
    else:
        if fs is None:
            frequency = FrequencySpec(sample_rate=NORMALIZED_SAMPLE_RATE, is_normalized=True)
        else:
            frequency = FrequencySpec(sample_rate=_positive_scalar(fs, "fs"), is_normalized=False)
        n = signal_length(x)
        single = x.dtype == np.float32

    passband = _positive_scalar(passband, "passband frequency")
    steepness = _finite_scalar(steepness, "steepness")
    if not MIN_STEEPNESS <= steepness < MAX_STEEPNESS:
        raise FilterSpecificationError(
            f"steepness must be in [{MIN_STEEPNESS}, {MAX_STEEPNESS}), got {steepness}"
        )
    attenuation = _positive_scalar(stopband_attenuation, "stopband attenuation")

    return FilterSpec(
        direction=direction,
        passband_frequency=passband,
        signal_length=n,
        frequency=frequency,
        steepness=steepness,
        stopband_attenuation_db=attenuation,
        impulse_response=mode,
        is_single_precision=single,
    )


def sample_rate_from_index(index: pd.Index) -> float:
    """Sample rate of a uniformly sampled time index, in hertz."""
    if len(index) < 2:
        raise FilterSpecificationError("A time series needs at least two samples to define a sample rate")

    if isinstance(index, pd.TimedeltaIndex):
        times = np.asarray(index.total_seconds(), dtype=np.float64)
    elif isinstance(index, pd.DatetimeIndex):
        times = np.asarray((index - index[0]).total_seconds(), dtype=np.float64)
    elif pd.api.types.is_numeric_dtype(index.dtype):
        times = np.asarray(index, dtype=np.float64)
    else:
        raise UnsupportedInputError(
            "Time series index must hold sample times: numeric seconds, "
            f"timedeltas or datetimes (got {type(index).__name__})"
        )
    if not np.all(np.isfinite(times)):
        raise FilterSpecificationError("Sample times must be finite")

    steps = np.diff(times)
    if np.any(steps <= 0):
        raise FilterSpecificationError("Sample times must be strictly increasing")
    step = float(np.mean(steps))
    if not np.allclose(steps, step, rtol=UNIFORM_SAMPLING_RTOL, atol=0.0):
        raise FilterSpecificationError("Sample times must be uniformly spaced")
    return 1.0 / step


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _check_real_dtype(dtype, what: str) -> None:
    if np.issubdtype(dtype, np.complexfloating) or not (
        np.issubdtype(dtype, np.number) or np.issubdtype(dtype, np.bool_)
    ):
        raise UnsupportedInputError(f"{what} must be real numeric data, got {dtype}")


def _all_single(x) -> bool:
    if isinstance(x, pd.Series):
        return x.dtype == np.float32
    return len(x.columns) > 0 and all(dtype == np.float32 for dtype in x.dtypes)


def _coerce_enum(enum_cls, value, name: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        choices = ", ".join(repr(m.value) for m in enum_cls)
        raise FilterSpecificationError(f"{name} must be one of {choices}, got {value!r}") from None


def _finite_scalar(value, name: str) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise FilterSpecificationError(f"{name} must be a real scalar, got {value!r}") from None
    if not math.isfinite(value):
        raise FilterSpecificationError(f"{name} must be finite, got {value}")
    return value


def _positive_scalar(value, name: str) -> float:
    value = _finite_scalar(value, name)
    if value <= 0:
        raise FilterSpecificationError(f"{name} must be positive, got {value}")
    return value
