from io import StringIO

import numpy as np

from cyclasar.dsp.trend import TrendModel
from cyclasar.io.writer import ColumnLabels, amplitude_spectrum, reconstruct_series, write_filtered, write_spectrum


def test_amplitude_spectrum_of_constant_series() -> None:
    n, c = 16, 3.0
    spectrum = np.fft.fft(np.full(n, c))
    freq, amplitude = amplitude_spectrum(spectrum)
    assert freq.size == n // 2 + 1
    np.testing.assert_allclose(freq, np.arange(n // 2 + 1) / n)
    # normalised by n//2, so the mean shows up doubled in bin 0
    np.testing.assert_allclose(amplitude[0], n * c / (n // 2))
    np.testing.assert_allclose(amplitude[1:], 0.0, atol=1e-12)


def test_amplitude_spectrum_odd_length() -> None:
    n = 9
    i = np.arange(n)
    spectrum = np.fft.fft(np.cos(2.0 * np.pi * 2.0 * i / n))
    freq, amplitude = amplitude_spectrum(spectrum)
    assert freq.size == 5
    np.testing.assert_allclose(amplitude[2], 4.5 / 4)


def test_write_spectrum_format() -> None:
    out = StringIO()
    rows = write_spectrum(out, np.fft.fft(np.full(8, 1.0)))
    lines = out.getvalue().splitlines()
    assert rows == 5
    assert lines[0] == "freq/1/d\tAt/µhsp"
    assert lines[1] == "0.000000000\t2.000000000"
    assert lines[2].startswith("0.125000000\t")
    assert len(lines) == 6


def test_write_filtered_restores_trend() -> None:
    n = 4
    time = np.array([2000.0, 2000.25, 2000.5, 2000.75])
    signal = np.array([4.0, 8.0, 0.0, -4.0], dtype=np.complex128)
    trend = TrendModel(intercept=10.0, slope=0.5)
    out = StringIO()
    write_filtered(out, time, signal, trend)
    lines = out.getvalue().splitlines()
    assert lines[0] == "t/a\tAt/µhsp"
    assert lines[1:] == [
        "2000.000000000\t11.000000000",
        "2000.250000000\t12.500000000",
        "2000.500000000\t11.000000000",
        "2000.750000000\t10.500000000",
    ]
    assert len(lines) == n + 1


def test_reconstruct_series_without_trend_only_normalises() -> None:
    signal = np.array([3.0 + 1.0j, 6.0 - 2.0j, 9.0])
    np.testing.assert_allclose(reconstruct_series(signal, None), [1.0, 2.0, 3.0])


def test_custom_column_labels() -> None:
    labels = ColumnLabels(freq_unit="1/a", time_unit="d", value_unit="nT")
    assert labels.spectrum_header == "freq/1/a\tAt/nT"
    assert labels.filter_header == "t/d\tAt/nT"
