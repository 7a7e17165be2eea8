"""
Rating values

A rating is kept on the familiar Glicko scale (centered at 1500) together with the
Glicko 2 scale (centered at 0) that the update formulas work on. Both are computed
together when the value is built, so they can never disagree.
"""
from dataclasses import dataclass, field
from typing import Tuple
from glicko2_period.utils.constants import (
    GLICKO2_SCALE,
    DEFAULT_RATING,
    DEFAULT_DEVIATION,
    DEFAULT_VOLATILITY,
)


def scale_rating(rating: float) -> float:
    """glicko scale -> glicko 2 scale"""
    return (rating - DEFAULT_RATING) / GLICKO2_SCALE


def unscale_rating(mu: float) -> float:
    """glicko 2 scale -> glicko scale"""
    return (mu * GLICKO2_SCALE) + DEFAULT_RATING


def scale_deviation(deviation: float) -> float:
    return deviation / GLICKO2_SCALE


def unscale_deviation(phi: float) -> float:
    return phi * GLICKO2_SCALE


@dataclass(frozen=True)
class Rating:
    """
    One competitor's belief state at a point in time.

    Attributes:
        rating (float): skill estimate on the glicko scale
        deviation (float): one standard deviation of uncertainty in the rating
        volatility (float): expected fluctuation of the rating over time
        scaled_rating (float): mu, the rating on the glicko 2 scale
        scaled_deviation (float): phi, the deviation on the glicko 2 scale

    No validation happens here, the rating systems check their inputs before using them.
    """

    rating: float = DEFAULT_RATING
    deviation: float = DEFAULT_DEVIATION
    volatility: float = DEFAULT_VOLATILITY
    scaled_rating: float = field(init=False, repr=False, compare=False)
    scaled_deviation: float = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # frozen, so the cache has to go through object.__setattr__
        object.__setattr__(self, 'scaled_rating', scale_rating(self.rating))
        object.__setattr__(self, 'scaled_deviation', scale_deviation(self.deviation))

    @classmethod
    def from_scaled(cls, mu: float, phi: float, sigma: float) -> 'Rating':
        """build a rating from glicko 2 scale values"""
        return cls(rating=unscale_rating(mu), deviation=unscale_deviation(phi), volatility=sigma)

    def update(self, rating: float, deviation: float, volatility: float) -> 'Rating':
        """return a new rating with all three values (and the scaled cache) replaced at once"""
        return type(self)(rating=rating, deviation=deviation, volatility=volatility)

    def as_tuple(self) -> Tuple[float, float, float]:
        return self.rating, self.deviation, self.volatility

    def interval(self, z: float = 1.96) -> Tuple[float, float]:
        """confidence interval of the rating, 95% by default"""
        return self.rating - (z * self.deviation), self.rating + (z * self.deviation)
