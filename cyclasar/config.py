"""
Configuration constants and environment parsing for cyclasar.

All CYCLASAR_* environment variables that tune the pipeline are parsed here
and exported as module-level constants. The CLI imports its defaults from
this module rather than reading os.environ directly; command-line flags
take precedence. Logging variables are read by cyclasar.util.logging.
"""
from __future__ import annotations

import os
from typing import Optional


def _int_env(name: str, default: int) -> int:
    """Parse an integer from environment, returning default on missing/invalid."""
    val = os.getenv(name)
    if not val:
        return default
    try:
        return int(float(val))
    except ValueError:
        return default


def _optional_int_env(name: str) -> Optional[int]:
    val = os.getenv(name)
    if not val:
        return None
    try:
        return int(float(val))
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------
DEFAULT_POINT_COUNT: int = _int_env("CYCLASAR_DEFAULT_POINTS", 65536)
"""Number of points read when the input declares no ``# Point count``."""

POINT_COUNT_MARKER: str = "# Point count: "
"""Comment prefix that declares the number of data lines."""


# ---------------------------------------------------------------------------
# Fourier transform
# ---------------------------------------------------------------------------
FFT_BACKEND: str = os.getenv("CYCLASAR_FFT_BACKEND", "scipy").strip().lower() or "scipy"
"""Name of the transform backend (``scipy`` or ``numpy``)."""

FFT_WORKERS: Optional[int] = _optional_int_env("CYCLASAR_FFT_WORKERS")
"""Worker count handed to scipy.fft; None keeps scipy's default."""


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------
FREQ_UNIT: str = "1/d"
TIME_UNIT: str = "a"
VALUE_UNIT: str = "µhsp"
"""Default units written into the fixed TSV column titles."""

OUTPUT_FORMAT: str = "%.9f"
