"""Glicko 2 rating updates for a single competitor and rating period"""
from glicko2_period.core.rating import Rating, scale_rating, unscale_rating, scale_deviation, unscale_deviation
from glicko2_period.core.base import PeriodRatingSystem
from glicko2_period.core.exceptions import Glicko2Error, InvalidArgumentError, DomainError, ConvergenceError
from glicko2_period.models.glicko2 import Glicko2, Glicko2Config, PeriodEstimate
from glicko2_period.utils.constants import (
    GLICKO2_SCALE,
    DEFAULT_RATING,
    DEFAULT_DEVIATION,
    DEFAULT_VOLATILITY,
    DEFAULT_TAU,
    CONVERGENCE_TOLERANCE,
)

__version__ = '0.1.0'
