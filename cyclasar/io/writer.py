"""TSV output of the amplitude spectrum or the filtered series."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TextIO, Tuple

import numpy as np

from cyclasar import config
from cyclasar.dsp.trend import TrendModel, restore_trend


@dataclass
class ColumnLabels:
    """Units shown in the fixed column titles."""

    freq_unit: str = config.FREQ_UNIT
    time_unit: str = config.TIME_UNIT
    value_unit: str = config.VALUE_UNIT

    @property
    def spectrum_header(self) -> str:
        return f"freq/{self.freq_unit}\tAt/{self.value_unit}"

    @property
    def filter_header(self) -> str:
        return f"t/{self.time_unit}\tAt/{self.value_unit}"


def amplitude_spectrum(spectrum: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """One-sided amplitude spectrum normalised by half the sample count.

    Returns ``(freq, amplitude)`` for bins ``0..n//2`` with ``freq = i/n``.
    """
    n = spectrum.size
    half = n >> 1
    freq = np.arange(half + 1, dtype=np.float64) / n
    amplitude = np.abs(spectrum[: half + 1]) / half
    return freq, amplitude


def reconstruct_series(signal: np.ndarray, trend: Optional[TrendModel]) -> np.ndarray:
    """Real part of an unnormalised inverse transform, scaled by 1/n, trend restored."""
    values = np.real(signal) / signal.size
    return restore_trend(values, trend)


def _write_columns(out: TextIO, header: str, first: np.ndarray, second: np.ndarray) -> None:
    np.savetxt(
        out,
        np.column_stack((first, second)),
        fmt=config.OUTPUT_FORMAT,
        delimiter="\t",
        header=header,
        comments="",
    )


def write_spectrum(out: TextIO, spectrum: np.ndarray, labels: Optional[ColumnLabels] = None) -> int:
    """Write the amplitude spectrum; returns the number of rows."""
    labels = labels or ColumnLabels()
    freq, amplitude = amplitude_spectrum(spectrum)
    _write_columns(out, labels.spectrum_header, freq, amplitude)
    return int(freq.size)


def write_filtered(
    out: TextIO,
    time: np.ndarray,
    signal: np.ndarray,
    trend: Optional[TrendModel],
    labels: Optional[ColumnLabels] = None,
) -> int:
    """Write the reconstructed series against the original time column."""
    labels = labels or ColumnLabels()
    values = reconstruct_series(signal, trend)
    _write_columns(out, labels.filter_header, time, values)
    return int(values.size)
