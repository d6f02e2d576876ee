"""Forward/inverse DFT over a pair of aligned complex buffers."""

from __future__ import annotations

from typing import Callable, Optional, Protocol, Tuple

import numpy as np
import scipy.fft as sp_fft

from cyclasar import config
from cyclasar.util.logging import get_logger

logger = get_logger(__name__)

BUFFER_ALIGNMENT = 32


class FourierBackend(Protocol):
    """Unnormalised complex DFT writing into a caller-owned buffer."""

    name: str

    def forward(self, src: np.ndarray, out: np.ndarray) -> None: ...

    def inverse(self, src: np.ndarray, out: np.ndarray) -> None: ...


class ScipyBackend:
    """scipy.fft (pocketfft) with an optional worker count."""

    name = "scipy"

    def __init__(self, workers: Optional[int] = None):
        self.workers = workers

    def forward(self, src: np.ndarray, out: np.ndarray) -> None:
        out[:] = sp_fft.fft(src, workers=self.workers)

    def inverse(self, src: np.ndarray, out: np.ndarray) -> None:
        # norm="forward" leaves the backward transform unscaled
        out[:] = sp_fft.ifft(src, norm="forward", workers=self.workers)


class NumpyBackend:
    """numpy.fft, for environments that prefer to avoid the scipy worker pool."""

    name = "numpy"

    def forward(self, src: np.ndarray, out: np.ndarray) -> None:
        out[:] = np.fft.fft(src)

    def inverse(self, src: np.ndarray, out: np.ndarray) -> None:
        out[:] = np.fft.ifft(src, norm="forward")


def get_backend(name: Optional[str] = None, *, workers: Optional[int] = None) -> FourierBackend:
    """Resolve a backend by name; defaults to CYCLASAR_FFT_BACKEND."""
    key = (name or config.FFT_BACKEND).strip().lower()
    if key == "scipy":
        return ScipyBackend(workers=workers if workers is not None else config.FFT_WORKERS)
    if key == "numpy":
        return NumpyBackend()
    raise ValueError(f"Unknown FFT backend '{name}' (expected 'scipy' or 'numpy')")


def aligned_empty(n: int, dtype=np.complex128, alignment: int = BUFFER_ALIGNMENT) -> np.ndarray:
    """Allocate an uninitialised 1D array whose data pointer is ``alignment``-aligned."""
    dtype = np.dtype(dtype)
    nbytes = int(n) * dtype.itemsize
    raw = np.empty(nbytes + alignment, dtype=np.uint8)
    offset = (-raw.ctypes.data) % alignment
    return raw[offset : offset + nbytes].view(dtype)


class SpectralEngine:
    """Own the signal/target buffer pair and run transforms between them.

    A transform reads ``current`` and writes ``target``; the roles then swap,
    so the result is always found in ``current`` and the previous domain's
    data survives in ``target`` until the next transform overwrites it.
    """

    def __init__(self, n: int, backend: Optional[FourierBackend] = None):
        if n <= 2:
            raise ValueError(f"transform length must exceed 2, got {n}")
        self.n = int(n)
        self.backend = backend if backend is not None else get_backend()
        self._current: Optional[np.ndarray] = aligned_empty(self.n)
        self._target: Optional[np.ndarray] = aligned_empty(self.n)
        if self.n & (self.n - 1):
            logger.debug("Transform length %d is not a power of two", self.n)

    def __enter__(self) -> "SpectralEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._current is None

    @property
    def current(self) -> np.ndarray:
        return self._buffers()[0]

    def _buffers(self) -> Tuple[np.ndarray, np.ndarray]:
        if self._current is None or self._target is None:
            raise RuntimeError("SpectralEngine is closed")
        return self._current, self._target

    def load(self, values: np.ndarray) -> np.ndarray:
        """Copy real ``values`` into the current buffer with zero imaginary part."""
        values = np.asarray(values, dtype=np.float64)
        if values.shape != (self.n,):
            raise ValueError(f"expected {self.n} samples, got shape {values.shape}")
        current, _ = self._buffers()
        current[:] = values
        return current

    def _transform(self, fn: Callable[[np.ndarray, np.ndarray], None]) -> np.ndarray:
        src, dst = self._buffers()
        fn(src, dst)
        self._current, self._target = dst, src
        return dst

    def forward(self) -> np.ndarray:
        """Unnormalised forward DFT; returns the spectrum buffer."""
        return self._transform(self.backend.forward)

    def inverse(self) -> np.ndarray:
        """Unnormalised inverse DFT; the caller divides by ``n``."""
        return self._transform(self.backend.inverse)

    def close(self) -> None:
        self._current = None
        self._target = None
