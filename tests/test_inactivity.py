import pytest
from glicko2_period import Glicko2, Rating, InvalidArgumentError, DomainError


def test_decay_only_changes_deviation():
    rating = Rating(1650.0, 120.0, 0.06)
    decayed = Glicko2().apply_inactivity_decay(rating)
    assert decayed.rating == rating.rating
    assert decayed.volatility == rating.volatility
    phi = 120.0 / 173.7178
    assert decayed.deviation == pytest.approx(173.7178 * (phi**2.0 + 0.06**2.0) ** 0.5)
    assert decayed.deviation > rating.deviation


def test_decay_multiple_periods():
    model = Glicko2()
    rating = Rating(1650.0, 120.0, 0.06)
    twice = model.apply_inactivity_decay(model.apply_inactivity_decay(rating))
    assert model.apply_inactivity_decay(rating, periods=2).deviation == pytest.approx(twice.deviation)
    unchanged = model.apply_inactivity_decay(rating, periods=0)
    assert unchanged.deviation == pytest.approx(rating.deviation)
    assert unchanged.rating == rating.rating


def test_decay_cap():
    model = Glicko2(max_deviation=350.0)
    assert model.apply_inactivity_decay(Rating(1500.0, 349.9, 0.06)).deviation == 350.0
    # a deviation already above the ceiling is left alone rather than lowered
    assert model.apply_inactivity_decay(Rating(1500.0, 400.0, 0.06)).deviation == 400.0


@pytest.mark.parametrize('periods', [-1, 1.5, '2', True])
def test_decay_invalid_periods(periods):
    with pytest.raises(InvalidArgumentError):
        Glicko2().apply_inactivity_decay(Rating(), periods=periods)


def test_decay_domain_error():
    with pytest.raises(DomainError):
        Glicko2().apply_inactivity_decay(Rating(1500.0, 200.0, 0.0))


def test_new_rating_uses_config():
    model = Glicko2(initial_rating=1200.0, initial_deviation=300.0, initial_volatility=0.05)
    assert model.new_rating() == Rating(1200.0, 300.0, 0.05)
    assert Glicko2().new_rating() == Rating()
    assert 'tau=0.5' in repr(Glicko2())


def test_predict():
    model = Glicko2()
    strong = Rating(1700.0, 50.0, 0.06)
    weak = Rating(1400.0, 50.0, 0.06)
    assert model.predict(strong, strong) == pytest.approx(0.5)
    assert model.predict(strong, weak) > 0.5
    assert model.predict(strong, weak) + model.predict(weak, strong) == pytest.approx(1.0)


def test_predict_uncertainty_pulls_towards_even():
    model = Glicko2()
    certain = model.predict(Rating(1700.0, 30.0, 0.06), Rating(1400.0, 30.0, 0.06))
    uncertain = model.predict(Rating(1700.0, 300.0, 0.06), Rating(1400.0, 300.0, 0.06))
    assert 0.5 < uncertain < certain


def test_predict_extreme_gap():
    model = Glicko2()
    weak = Rating(1500.0, 30.0, 0.06)
    strong = Rating(200000.0, 30.0, 0.06)
    assert model.predict(weak, strong) == pytest.approx(0.0, abs=1e-12)
    assert model.predict(strong, weak) == pytest.approx(1.0)
    assert Glicko2.expected_score(weak, strong) == pytest.approx(0.0, abs=1e-12)
