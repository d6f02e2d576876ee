"""Exception types raised by the analysis pipeline."""

from __future__ import annotations


class CyclasarError(Exception):
    """Base class for failures that abort a run."""


class InvalidPointCountError(CyclasarError):
    """The declared point count is too small to analyse."""

    def __init__(self, count: int):
        super().__init__(f"Invalid number of Points: {count}")
        self.count = count


class SeriesFormatError(CyclasarError):
    """The input ended before the declared number of points was read."""

    def __init__(self, expected: int, received: int):
        super().__init__(f"input ended after {received} of {expected} declared points")
        self.expected = expected
        self.received = received
