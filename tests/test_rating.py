import dataclasses
import pytest
import numpy as np
from glicko2_period import (
    Rating,
    GLICKO2_SCALE,
    scale_rating,
    unscale_rating,
    scale_deviation,
    unscale_deviation,
)


def test_defaults():
    rating = Rating()
    assert rating.as_tuple() == (1500.0, 350.0, 0.06)
    assert rating.scaled_rating == 0.0
    assert rating.scaled_deviation == pytest.approx(350.0 / 173.7178)


def test_scale_constant():
    assert GLICKO2_SCALE == pytest.approx(400.0 / np.log(10.0), abs=1e-4)


@pytest.mark.parametrize('value', [-3000.0, 0.0, 1.0, 1234.5678, 1500.0, 2871.25, 1e6])
def test_scale_round_trip(value):
    assert unscale_rating(scale_rating(value)) == pytest.approx(value, rel=1e-12, abs=1e-9)
    assert unscale_deviation(scale_deviation(abs(value))) == pytest.approx(abs(value), rel=1e-12, abs=1e-9)


def test_update_returns_consistent_copy():
    rating = Rating(1500.0, 200.0, 0.06)
    updated = rating.update(1600.0, 150.0, 0.05)
    assert rating.as_tuple() == (1500.0, 200.0, 0.06)
    assert updated.as_tuple() == (1600.0, 150.0, 0.05)
    assert updated.scaled_rating == pytest.approx(100.0 / 173.7178)
    assert updated.scaled_deviation == pytest.approx(150.0 / 173.7178)


def test_immutable():
    rating = Rating()
    with pytest.raises(dataclasses.FrozenInstanceError):
        rating.rating = 1600.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        rating.scaled_rating = 1.0


def test_scaled_fields_not_settable_at_construction():
    with pytest.raises(TypeError):
        Rating(1500.0, 350.0, 0.06, scaled_rating=1.0)


def test_from_scaled():
    rating = Rating.from_scaled(-0.2069, 0.8722, 0.05999)
    assert rating.rating == pytest.approx(1464.06, abs=0.01)
    assert rating.deviation == pytest.approx(151.52, abs=0.01)
    assert rating.volatility == 0.05999
    assert rating.scaled_rating == pytest.approx(-0.2069)


def test_no_validation_at_construction():
    rating = Rating(1500.0, -10.0, 0.0)
    assert rating.deviation == -10.0
    assert rating.volatility == 0.0


def test_equality_ignores_cache():
    assert Rating(1400.0, 30.0, 0.06) == Rating(1400.0, 30.0, 0.06)
    assert Rating(1400.0, 30.0, 0.06) != Rating(1400.0, 31.0, 0.06)
    assert 'scaled_rating' not in repr(Rating())


def test_interval():
    low, high = Rating(1500.0, 100.0, 0.06).interval()
    assert low == pytest.approx(1304.0)
    assert high == pytest.approx(1696.0)
    assert Rating(1500.0, 100.0, 0.06).interval(z=1.0) == (1400.0, 1600.0)
