"""Frequency-domain band gate: band-pass, band-reject and soft cut edges."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

import numpy as np
from scipy.special import expit

from cyclasar.util.logging import get_logger

logger = get_logger(__name__)

ArrayOrFloat = Union[float, np.ndarray]

MAX_BLUR_PERCENT = 100.0


@dataclass
class GateParameters:
    """User-facing filter settings.

    ``low_cut > high_cut`` requests the complementary (notch) filter. ``kt``
    is the blur of the cut edges in percent of the passed band.
    """

    low_cut: float = 0.0
    high_cut: float = math.inf
    kt: float = 0.0

    def validate(self) -> None:
        if math.isnan(self.low_cut) or self.low_cut < 0:
            raise ValueError(f"low cut must be >= 0, got {self.low_cut}")
        if math.isnan(self.high_cut) or self.high_cut < 0:
            raise ValueError(f"high cut must be >= 0, got {self.high_cut}")
        if math.isnan(self.kt) or not 0 <= self.kt <= MAX_BLUR_PERCENT:
            raise ValueError(f"kT must be within 0..{MAX_BLUR_PERCENT:g}, got {self.kt}")


def fold_frequency(i: int, n: int) -> float:
    """Frequency of bin ``i`` of ``n``, with the upper half folded onto the positive axis."""
    if i <= (n + 1) // 2:
        return i / (n - 1)
    return (n - i) / (n - 1)


def fold_frequencies(n: int) -> np.ndarray:
    """Vectorised fold_frequency over all bins ``0..n-1``."""
    idx = np.arange(n, dtype=np.float64)
    folded = np.where(idx <= (n + 1) // 2, idx, n - idx)
    return folded / (n - 1)


def gate_value(f: ArrayOrFloat, low_cut: float, high_cut: float, kt: float, invert: bool = False) -> ArrayOrFloat:
    """Gate multiplier at frequency ``f``.

    ``kt`` is the absolute blur width. A width in ``(0, 100]`` gives logistic
    edges; anything else (0, NaN, or wider than 100) gives a hard box that
    is 1 on ``[low_cut, high_cut]``. Equal cuts close the gate entirely,
    even when inverted.
    """
    freqs = np.asarray(f, dtype=np.float64)
    if low_cut == high_cut:
        gate = np.zeros_like(freqs)
    else:
        if 0 < kt <= MAX_BLUR_PERCENT:
            gate = expit((high_cut - freqs) / kt)
            if low_cut != 0:
                gate = gate * expit((freqs - low_cut) / kt)
        else:
            inside = (low_cut <= freqs) & ((freqs <= high_cut) | math.isinf(high_cut))
            gate = inside.astype(np.float64)
        if invert:
            gate = 1.0 - gate
    if gate.ndim == 0:
        return float(gate)
    return gate


@dataclass(frozen=True)
class BandGate:
    """Resolved gate: ordered cuts, absolute blur width and the notch flag."""

    low_cut: float
    high_cut: float
    kt: float
    invert: bool = False

    @classmethod
    def from_parameters(cls, params: GateParameters) -> "BandGate":
        low, high = float(params.low_cut), float(params.high_cut)
        invert = low > high
        if invert:
            low, high = high, low
        # percent of the passed band; 0 * inf gives NaN, which selects the hard box
        kt = float(params.kt) * (high - low) / 100
        return cls(low_cut=low, high_cut=high, kt=kt, invert=invert)

    @property
    def smooth(self) -> bool:
        return self.low_cut != self.high_cut and 0 < self.kt <= MAX_BLUR_PERCENT

    def value(self, f: ArrayOrFloat) -> ArrayOrFloat:
        return gate_value(f, self.low_cut, self.high_cut, self.kt, self.invert)

    def response(self, n: int) -> np.ndarray:
        """Gate multiplier for every bin of an ``n``-point spectrum."""
        return np.asarray(self.value(fold_frequencies(n)), dtype=np.float64)

    def apply(self, spectrum: np.ndarray) -> np.ndarray:
        """Scale real and imaginary parts of every bin in place."""
        response = self.response(spectrum.size)
        spectrum *= response
        logger.debug(
            "Applied %s gate low=%g high=%g kt=%g invert=%s, mean gain %.6f",
            "logistic" if self.smooth else "hard",
            self.low_cut,
            self.high_cut,
            self.kt,
            self.invert,
            float(np.mean(response)),
        )
        return spectrum
