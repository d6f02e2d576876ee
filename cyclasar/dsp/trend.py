"""Linear drift detection and removal ahead of the Fourier transform."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from cyclasar.util.logging import get_logger

logger = get_logger(__name__)

EDGE_SAMPLES = 10


@dataclass
class TrendModel:
    """Straight line ``intercept + slope * i`` over the sample index."""

    intercept: float
    slope: float

    def evaluate(self, n: int) -> np.ndarray:
        return self.intercept + self.slope * np.arange(n, dtype=np.float64)


def detect_drift(values: np.ndarray) -> bool:
    """Heuristic drift test comparing the end-to-end jump with the edge means.

    Drift is reported when ``|v[-1] - v[0]|`` exceeds the distance of either
    endpoint from the mean of its ten neighbouring samples.
    """
    values = np.asarray(values, dtype=np.float64)
    head = float(np.mean(values[:EDGE_SAMPLES]))
    tail = float(np.mean(values[-EDGE_SAMPLES:]))
    first = float(values[0])
    last = float(values[-1])
    jump = abs(last - first)
    return jump > abs(head - first) or jump > abs(tail - last)


def remove_trend(values: np.ndarray) -> Optional[TrendModel]:
    """Subtract the endpoint line from ``values`` in place when drift is detected.

    The slope divides by ``n`` rather than ``n - 1``, so the last sample does
    not land exactly on zero. Returns the removed model, or None when the
    series was left untouched.
    """
    if not detect_drift(values):
        logger.debug("No drift detected", extra={"trend": False})
        return None
    n = values.size
    first = float(values[0])
    model = TrendModel(intercept=first, slope=(float(values[-1]) - first) / n)
    values -= model.evaluate(n)
    logger.info(
        "Removed linear trend intercept=%.9g slope=%.9g",
        model.intercept,
        model.slope,
        extra={"trend": True},
    )
    return model


def restore_trend(values: np.ndarray, model: Optional[TrendModel]) -> np.ndarray:
    """Add ``model`` back onto ``values`` in place; a None model is the identity."""
    if model is not None:
        values += model.evaluate(values.size)
    return values
