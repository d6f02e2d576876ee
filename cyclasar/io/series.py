"""Series loading from the two-column TSV produced by the converters."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, TextIO, Tuple

import numpy as np

from cyclasar import config
from cyclasar.errors import InvalidPointCountError, SeriesFormatError
from cyclasar.util.logging import get_logger

logger = get_logger(__name__)

_C_SPACE = "[ \t\n\v\f\r]*"
_HEX_BODY = r"0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?\d+)?"
_FLOAT_PREFIX = re.compile(
    _C_SPACE
    + r"([+-]?(?:(?P<hex>"
    + _HEX_BODY
    + r")|(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(_C_SPACE + r"([+-]?\d+)")


@dataclass
class Series:
    """Aligned time and value samples of one input file."""

    time: np.ndarray
    value: np.ndarray

    @property
    def n(self) -> int:
        return int(self.value.size)


def scan_float(text: str, pos: int = 0) -> Tuple[float, int]:
    """Read the longest numeric prefix of ``text[pos:]``.

    Returns the value and the position just past it. When no number starts
    at ``pos`` the result is ``(0.0, pos)``: the field silently reads as
    zero and the scan position does not move.
    """
    match = _FLOAT_PREFIX.match(text, pos)
    if match is None:
        return 0.0, pos
    if match.group("hex"):
        return float.fromhex(match.group(1)), match.end()
    return float(match.group(1)), match.end()


def parse_point_count(line: str) -> Optional[int]:
    """Return the count declared by a ``# Point count: <n>`` comment, if any."""
    idx = line.find(config.POINT_COUNT_MARKER)
    if idx < 0:
        return None
    match = _INT_PREFIX.match(line, idx + len(config.POINT_COUNT_MARKER))
    if match is None:
        return 0
    return int(match.group(1))


def read_series(stream: TextIO, default_count: Optional[int] = None) -> Series:
    """Read a declared-length series of (time, value) rows from ``stream``.

    Leading ``#`` lines are comments and may declare the point count. The
    first non-comment line holds the column titles and is skipped. Exactly
    ``n`` rows follow; fields that are not numbers read as 0.0.

    Raises:
        InvalidPointCountError: the point count is 2 or less.
        SeriesFormatError: the stream ended before ``n`` rows were read.
    """
    count = config.DEFAULT_POINT_COUNT if default_count is None else int(default_count)
    declared = False

    line = stream.readline()
    while line.startswith("#"):
        parsed = parse_point_count(line)
        if parsed is not None:
            count = parsed
            declared = True
        line = stream.readline()

    if count <= 2:
        raise InvalidPointCountError(count)
    if not declared:
        logger.debug("No point count declared, reading %d points", count)

    time = np.zeros(count, dtype=np.float64)
    value = np.zeros(count, dtype=np.float64)
    for i in range(count):
        line = stream.readline()
        if not line:
            raise SeriesFormatError(count, i)
        time[i], pos = scan_float(line)
        value[i], _ = scan_float(line, pos)

    logger.info("Loaded %d points", count, extra={"points": count})
    return Series(time=time, value=value)
