import pytest

from density import DENSITY_DEFAULT, StaticDensity, clamp_scale, density_of, device_scale


def test_missing_source_falls_back_to_default():
    assert density_of(None) == DENSITY_DEFAULT
    assert density_of(StaticDensity(None)) == DENSITY_DEFAULT
    assert density_of(StaticDensity(0)) == DENSITY_DEFAULT


def test_failing_source_falls_back_to_default():
    class _Broken:
        def current_density(self):
            raise OSError("no display")

    assert density_of(_Broken()) == DENSITY_DEFAULT


def test_scale_is_display_over_source_density():
    assert device_scale(240, StaticDensity(480)) == pytest.approx(0.5)
    assert device_scale(480, StaticDensity(240)) == pytest.approx(2.0)
    assert device_scale(None, None) == pytest.approx(1.0)


def test_scale_is_clamped():
    assert device_scale(240, StaticDensity(1)) == pytest.approx(5.0)
    assert device_scale(1, StaticDensity(10_000)) == pytest.approx(0.1)
    assert clamp_scale(float("nan")) == pytest.approx(0.1)
    assert clamp_scale(float("inf")) == pytest.approx(5.0)
