"""Open input/output paths, treating a single dash as stdin/stdout."""

from __future__ import annotations

import io
import sys
from contextlib import contextmanager
from typing import Iterator, TextIO

STDIO_PATH = "-"
INPUT_ENCODING = "utf-8"


@contextmanager
def open_input(path: str) -> Iterator[TextIO]:
    """Text stream over ``path``; undecodable bytes become U+FFFD on every path."""
    if path == STDIO_PATH:
        buffer = getattr(sys.stdin, "buffer", None)
        if buffer is None:
            # already a decoded text stream
            yield sys.stdin
            return
        wrapper = io.TextIOWrapper(buffer, encoding=INPUT_ENCODING, errors="replace")
        try:
            yield wrapper
        finally:
            # detach so closing the wrapper never closes the process's stdin
            wrapper.detach()
        return
    with open(path, "r", encoding=INPUT_ENCODING, errors="replace") as fh:
        yield fh


@contextmanager
def open_output(path: str) -> Iterator[TextIO]:
    if path == STDIO_PATH:
        try:
            yield sys.stdout
        finally:
            sys.stdout.flush()
        return
    with open(path, "w", encoding="utf-8", newline="\n") as fh:
        yield fh
