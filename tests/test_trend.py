import numpy as np

from cyclasar.dsp.trend import TrendModel, detect_drift, remove_trend, restore_trend


def test_strong_linear_ramp_triggers_detrending() -> None:
    values = np.linspace(0.0, 1000.0, 1000)
    assert detect_drift(values)


def test_small_sine_does_not_trigger_detrending() -> None:
    i = np.arange(1000)
    values = 0.01 * np.sin(2.0 * np.pi * 5.0 * i / 1000.0)
    assert not detect_drift(values)
    original = values.copy()
    assert remove_trend(values) is None
    np.testing.assert_array_equal(values, original)


def test_constant_series_is_left_alone() -> None:
    values = np.full(64, 3.25)
    assert remove_trend(values) is None
    np.testing.assert_array_equal(values, 3.25)


def test_short_ramp_is_detrended_with_n_divisor() -> None:
    values = np.arange(8, dtype=np.float64)
    model = remove_trend(values)
    assert model == TrendModel(intercept=0.0, slope=7.0 / 8.0)
    np.testing.assert_allclose(values, np.arange(8) / 8.0)


def test_restore_trend_inverts_removal() -> None:
    rng = np.random.default_rng(7)
    original = 5.0 + 0.3 * np.arange(256) + rng.normal(0.0, 0.1, 256)
    values = original.copy()
    model = remove_trend(values)
    assert model is not None
    restore_trend(values, model)
    np.testing.assert_allclose(values, original, atol=1e-12)


def test_restore_trend_without_model_is_identity() -> None:
    values = np.array([1.0, 2.0, 3.0])
    assert restore_trend(values, None) is values
    np.testing.assert_array_equal(values, [1.0, 2.0, 3.0])
