"""
Before/after plots of a filtering run.

Two panels: the original and filtered signals in time, and their power
spectra (Welch) with the filter's passband and stopband edges marked.
:func:`plot_spectrogram` draws a single signal's spectrogram.

matplotlib is imported on first use so that the filtering code does
not pay for it.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
from scipy.signal import spectrogram, welch

from .designer import FilterDesign
from .dsp.utils import as_columns


def plot_filtering(x, y, design: FilterDesign, title: str | None = None):
    """Plot original and filtered data in time and frequency.

    Only the first column of matrix / DataFrame inputs is shown.

    Returns
    -------
    matplotlib.figure.Figure
    """
    import matplotlib.pyplot as plt

    spec = design.spec
    fs = spec.sample_rate
    unit = "normalized" if spec.is_normalized_frequency else "Hz"

    x0 = _first_column(x)
    y0 = _first_column(y)
    if spec.is_normalized_frequency:
        t = np.arange(len(x0))
        t_label = "Samples"
    else:
        t = np.arange(len(x0)) / fs
        t_label = "Time (s)"

    fig, (ax_t, ax_f) = plt.subplots(2, 1, figsize=(9, 7))

    ax_t.plot(t, x0, label="Original", linewidth=0.8)
    ax_t.plot(t, y0, label="Filtered", linewidth=0.8)
    ax_t.set_xlabel(t_label)
    ax_t.legend(loc="upper right")

    if len(x0) > 1:
        nperseg = min(1024, len(x0))
        f, pxx = welch(x0, fs=fs, nperseg=nperseg)
        _, pyy = welch(y0, fs=fs, nperseg=nperseg)
        ax_f.plot(f, 10 * np.log10(pxx + 1e-300), label="Original", linewidth=0.8)
        ax_f.plot(f, 10 * np.log10(pyy + 1e-300), label="Filtered", linewidth=0.8)

    ax_f.axvline(spec.passband_frequency, color="k", linestyle="--", linewidth=0.8)
    if design.stopband_frequency is not None:
        ax_f.axvline(design.stopband_frequency, color="k", linestyle=":", linewidth=0.8)
    ax_f.set_xlabel(f"Frequency ({unit})")
    ax_f.set_ylabel("Power (dB)")
    ax_f.legend(loc="upper right")

    family = "FIR" if design.is_fir else "IIR"
    fig.suptitle(title or f"{spec.direction.value} ({family}, order {design.order})")
    fig.tight_layout()
    return fig


def plot_spectrogram(data: np.ndarray, fs: float, title: str = ""):
    """Spectrogram of a 1-D signal: Hamming window 512, 50 % overlap, 1024-point FFT."""
    import matplotlib.pyplot as plt

    nperseg = min(512, len(data))
    f, t, sxx = spectrogram(
        data, fs=fs, window="hamming", nperseg=nperseg,
        noverlap=nperseg // 2, nfft=max(1024, nperseg),
    )
    fig, ax = plt.subplots(figsize=(9, 4))
    mesh = ax.pcolormesh(t, f, 10 * np.log10(sxx + 1e-300), shading="auto",
                         cmap="jet", vmin=-100, vmax=-20)
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Frequency (Hz)")
    ax.set_title(title)
    fig.colorbar(mesh, ax=ax, label="dB")
    fig.tight_layout()
    return fig


def _first_column(x) -> np.ndarray:
    if isinstance(x, pd.DataFrame):
        return x.iloc[:, 0].to_numpy()
    if isinstance(x, pd.Series):
        return x.to_numpy()
    arr = as_columns(np.asarray(x))
    return arr if arr.ndim == 1 else arr[:, 0]
