import numpy as np
import pytest

from cyclasar.dsp.fft import BUFFER_ALIGNMENT, NumpyBackend, ScipyBackend, SpectralEngine, aligned_empty, get_backend


def _signal(n: int) -> np.ndarray:
    rng = np.random.default_rng(n)
    return rng.normal(0.0, 1.0, n)


@pytest.mark.parametrize("n", [3, 7, 64, 1000])
def test_aligned_empty_returns_aligned_complex_buffer(n: int) -> None:
    buf = aligned_empty(n)
    assert buf.shape == (n,)
    assert buf.dtype == np.complex128
    assert buf.ctypes.data % BUFFER_ALIGNMENT == 0


def test_get_backend_by_name() -> None:
    assert isinstance(get_backend("scipy"), ScipyBackend)
    assert isinstance(get_backend("NumPy"), NumpyBackend)
    with pytest.raises(ValueError):
        get_backend("fftw")


@pytest.mark.parametrize("backend", [ScipyBackend(), NumpyBackend()])
def test_forward_matches_reference_dft(backend) -> None:
    x = _signal(128)
    with SpectralEngine(x.size, backend) as engine:
        engine.load(x)
        spectrum = engine.forward()
        np.testing.assert_allclose(spectrum, np.fft.fft(x), atol=1e-9)


@pytest.mark.parametrize("backend", [ScipyBackend(), NumpyBackend()])
@pytest.mark.parametrize("n", [64, 100])
def test_inverse_is_unnormalised(backend, n: int) -> None:
    x = _signal(n)
    with SpectralEngine(n, backend) as engine:
        engine.load(x)
        engine.forward()
        restored = engine.inverse()
        np.testing.assert_allclose(restored.real / n, x, atol=1e-12)
        np.testing.assert_allclose(restored.imag / n, 0.0, atol=1e-12)


def test_transforms_alternate_between_buffers() -> None:
    x = _signal(32)
    with SpectralEngine(x.size) as engine:
        loaded = engine.load(x)
        spectrum = engine.forward()
        assert spectrum is not loaded
        assert engine.current is spectrum
        # the time-domain input is untouched by the forward transform
        np.testing.assert_array_equal(loaded.real, x)
        np.testing.assert_array_equal(loaded.imag, 0.0)
        restored = engine.inverse()
        assert restored is loaded


def test_load_rejects_wrong_length() -> None:
    with SpectralEngine(16) as engine:
        with pytest.raises(ValueError):
            engine.load(np.zeros(15))


def test_engine_rejects_tiny_lengths() -> None:
    with pytest.raises(ValueError):
        SpectralEngine(2)


def test_close_releases_buffers() -> None:
    engine = SpectralEngine(16)
    with engine:
        engine.load(np.ones(16))
    assert engine.closed
    with pytest.raises(RuntimeError):
        engine.forward()
    engine.close()
