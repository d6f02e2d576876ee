"""
cyclasar — spectral analysis and band filtering of equally spaced time series.

The package reads a two-column TSV series (time, value), removes a linear
drift when one is detected, and either writes the one-sided amplitude
spectrum or passes the series through a frequency-domain band gate and
writes the reconstructed series.

Usage:
    cyclasar spectrum sar-1880-2021.tsv spectral-sar-1880-2021.tsv
    cyclasar filter 0 0.001 10 sar-1880-2021.tsv filtered-sar-1880-2021.tsv
"""
from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
