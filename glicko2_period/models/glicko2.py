"""
Glicko 2
paper: http://www.glicko.net/research/dpcmsv.pdf
example: http://www.glicko.net/glicko/glicko2.pdf

"""
import math
import numbers
import logging
from dataclasses import dataclass, asdict
from typing import NamedTuple, Optional, Sequence
import numpy as np
from glicko2_period.core.base import PeriodRatingSystem
from glicko2_period.core.rating import Rating, unscale_rating, unscale_deviation
from glicko2_period.core.exceptions import InvalidArgumentError, DomainError, ConvergenceError
from glicko2_period.utils.math_utils import sigmoid, sigmoid_scalar, g_scalar, g_vector
from glicko2_period.utils.constants import (
    DEFAULT_RATING,
    DEFAULT_DEVIATION,
    DEFAULT_VOLATILITY,
    DEFAULT_TAU,
    CONVERGENCE_TOLERANCE,
    MAX_ITERATIONS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Glicko2Config:
    """Configuration for the Glicko 2 rating system."""

    initial_rating: float = DEFAULT_RATING
    initial_deviation: float = DEFAULT_DEVIATION
    initial_volatility: float = DEFAULT_VOLATILITY
    tau: float = DEFAULT_TAU  # system constant (typically 0.3 to 1.2)
    epsilon: float = CONVERGENCE_TOLERANCE  # convergence tolerance of the volatility root finder
    max_iterations: int = MAX_ITERATIONS  # cap for each of the two root finder loops
    max_deviation: Optional[float] = None  # ceiling for the deviation of inactive competitors

    def __post_init__(self):
        if not (math.isfinite(self.tau) and self.tau > 0.0):
            raise InvalidArgumentError(f'tau must be positive, got {self.tau}')
        if not (math.isfinite(self.epsilon) and self.epsilon > 0.0):
            raise InvalidArgumentError(f'epsilon must be positive, got {self.epsilon}')
        if self.max_iterations < 1:
            raise InvalidArgumentError(f'max_iterations must be at least 1, got {self.max_iterations}')
        if self.max_deviation is not None and not self.max_deviation > 0.0:
            raise InvalidArgumentError(f'max_deviation must be positive, got {self.max_deviation}')


class PeriodEstimate(NamedTuple):
    """intermediate quantities of one rating period, all on the glicko 2 scale"""

    v: float
    delta: float
    sigma_prime: float
    phi_star: float
    phi_prime: float
    mu_prime: float


class Glicko2(PeriodRatingSystem):
    """
    Implements the Glicko 2 rating system, designed by Mark Glickman.

    Every update covers one competitor and all of the games they played in a rating period.
    Ratings are immutable values, the posterior is returned and the inputs are left untouched.

    Parameters:
        initial_rating: rating for new competitors (default: 1500)
        initial_deviation: rating deviation for new competitors (default: 350)
        initial_volatility: volatility for new competitors (default: 0.06)
        tau: system constant constraining the change in volatility (default: 0.5)
        epsilon: convergence tolerance of the volatility root finder (default: 1e-6)
        max_iterations: cap on the iterations of each root finder loop (default: 1000)
        max_deviation: optional ceiling applied by apply_inactivity_decay
        config: a ready Glicko2Config, takes the place of all of the above

    Example:
        >>> glicko2 = Glicko2(tau=0.5)
        >>> player = Rating(1500.0, 200.0, 0.06)
        >>> opponents = [Rating(1400.0, 30.0, 0.06), Rating(1550.0, 100.0, 0.06), Rating(1700.0, 300.0, 0.06)]
        >>> posterior = glicko2.update_rating(player, opponents, [1.0, 0.0, 0.0])
        >>> round(posterior.rating, 2), round(posterior.deviation, 2)
        (1464.05, 151.52)
    """

    rating_dim = 3

    def __init__(
        self,
        initial_rating: float = DEFAULT_RATING,
        initial_deviation: float = DEFAULT_DEVIATION,
        initial_volatility: float = DEFAULT_VOLATILITY,
        tau: float = DEFAULT_TAU,
        epsilon: float = CONVERGENCE_TOLERANCE,
        max_iterations: int = MAX_ITERATIONS,
        max_deviation: Optional[float] = None,
        config: Optional[Glicko2Config] = None,
    ):
        if config is None:
            config = Glicko2Config(
                initial_rating=initial_rating,
                initial_deviation=initial_deviation,
                initial_volatility=initial_volatility,
                tau=tau,
                epsilon=epsilon,
                max_iterations=max_iterations,
                max_deviation=max_deviation,
            )
        self.config = config
        self.tau = config.tau
        self.tau2 = config.tau**2.0
        self.epsilon = config.epsilon
        self.max_iterations = config.max_iterations

    def __repr__(self):
        params = ', '.join(f'{key}={value!r}' for key, value in asdict(self.config).items())
        return f'{type(self).__name__}({params})'

    def new_rating(self) -> Rating:
        return Rating(
            rating=self.config.initial_rating,
            deviation=self.config.initial_deviation,
            volatility=self.config.initial_volatility,
        )

    @staticmethod
    def g(phi):
        """weight of an opponent with glicko 2 scale deviation phi"""
        return g_scalar(phi)

    @staticmethod
    def expected_score(subject: Rating, opponent: Rating) -> float:
        """probability that subject beats opponent, as used in the update"""
        mu_diff = subject.scaled_rating - opponent.scaled_rating
        return sigmoid_scalar(g_scalar(opponent.scaled_deviation) * mu_diff)

    def predict(self, rating_1: Rating, rating_2: Rating) -> float:
        """win probability accounting for the uncertainty of both competitors"""
        mu_diff = rating_1.scaled_rating - rating_2.scaled_rating
        combined_phi = math.sqrt(rating_1.scaled_deviation**2.0 + rating_2.scaled_deviation**2.0)
        return sigmoid_scalar(g_scalar(combined_phi) * mu_diff)

    @staticmethod
    def _check_rating(rating: Rating, name: str):
        if not isinstance(rating, Rating):
            raise InvalidArgumentError(f'{name} must be a Rating, got {type(rating).__name__}')
        if not math.isfinite(rating.rating):
            raise DomainError(f'{name} has a non-finite rating: {rating.rating}')
        if not (math.isfinite(rating.deviation) and rating.deviation > 0.0):
            raise DomainError(f'{name} must have a positive deviation, got {rating.deviation}')
        if not (math.isfinite(rating.volatility) and rating.volatility > 0.0):
            raise DomainError(f'{name} must have a positive volatility, got {rating.volatility}')

    def _check_period(self, subject, opponents, scores):
        """validate everything up front so that an update either completes or raises before doing anything"""
        if subject is None:
            raise InvalidArgumentError('subject is required')
        if opponents is None or scores is None:
            raise InvalidArgumentError('opponents and scores are required')
        try:
            opponents = list(opponents)
            scores = list(scores)
        except TypeError as e:
            raise InvalidArgumentError('opponents and scores must be sequences') from e
        if len(opponents) == 0:
            raise InvalidArgumentError('at least one game is required, use apply_inactivity_decay for idle periods')
        if len(opponents) != len(scores):
            raise InvalidArgumentError(f'got {len(opponents)} opponents but {len(scores)} scores')
        self._check_rating(subject, 'subject')
        for idx, opponent in enumerate(opponents):
            if opponent is None:
                raise InvalidArgumentError(f'opponent {idx} is None')
            self._check_rating(opponent, f'opponent {idx}')
        for idx, score in enumerate(scores):
            if isinstance(score, bool) or not isinstance(score, numbers.Real):
                raise InvalidArgumentError(f'score {idx} must be a real number, got {score!r}')
        scores = np.asarray(scores, dtype=np.float64)
        if not np.all(np.isfinite(scores)) or np.any((scores < 0.0) | (scores > 1.0)):
            raise InvalidArgumentError(f'scores must lie in [0, 1], got {scores.tolist()}')
        return opponents, scores

    def f(self, x, delta2, phi2, v, a):
        ex = math.exp(x)
        phi2_v_ex = phi2 + v + ex
        num_1 = ex * (delta2 - phi2_v_ex)
        denom_1 = 2 * ((phi2_v_ex) ** 2.0)
        term_2 = (x - a) / self.tau2
        return (num_1 / denom_1) - term_2

    def _fail_to_converge(self, stage, phi, delta, v, sigma):
        logger.error(
            'volatility %s did not converge within %d iterations (phi=%r, delta=%r, v=%r, sigma=%r)',
            stage,
            self.max_iterations,
            phi,
            delta,
            v,
            sigma,
        )
        raise ConvergenceError(f'volatility {stage} did not converge within {self.max_iterations} iterations')

    def get_sigma_prime(self, phi, delta, v, sigma):
        """step 5: solve for the new volatility with the Illinois variant of regula falsi"""
        delta2 = delta**2.0
        phi2 = phi**2.0
        A = a = math.log(sigma**2.0)
        if delta2 > (phi2 + v):
            B = math.log(delta2 - phi2 - v)
            logger.debug('volatility bracket from the improvement: [%r, %r]', A, B)
        else:
            k = 1
            while self.f(a - k * self.tau, delta2=delta2, phi2=phi2, v=v, a=a) < 0:
                k += 1
                if k > self.max_iterations:
                    self._fail_to_converge('bracket search', phi, delta, v, sigma)
            B = a - k * self.tau
            logger.debug('volatility bracket after %d downward steps: [%r, %r]', k, A, B)

        f_A = self.f(A, delta2, phi2, v, a)
        f_B = self.f(B, delta2, phi2, v, a)
        num_iterations = 0
        while math.fabs(A - B) > self.epsilon:
            num_iterations += 1
            if num_iterations > self.max_iterations:
                self._fail_to_converge('refinement', phi, delta, v, sigma)
            f_diff = f_B - f_A
            if f_diff == 0 or not math.isfinite(f_diff):
                raise DomainError(f'volatility root finder cannot interpolate (f(A)={f_A}, f(B)={f_B})')
            C = A + ((A - B) * f_A) / f_diff
            f_C = self.f(C, delta2, phi2, v, a)
            if not (math.isfinite(C) and math.isfinite(f_C)):
                raise DomainError(f'volatility root finder left the real line (C={C}, f(C)={f_C})')
            if (f_C * f_B) <= 0:
                A = B
                f_A = f_B
            else:
                # Illinois step, halve the stale endpoint so it gets replaced eventually
                f_A = f_A / 2.0
            B = C
            f_B = f_C
        logger.debug('volatility converged after %d iterations', num_iterations)
        sigma_prime = math.exp(A / 2.0)
        return sigma_prime

    def estimate(self, subject: Rating, opponents: Sequence[Rating], scores: Sequence[float]) -> PeriodEstimate:
        """run steps 3 through 8 of the algorithm and return every intermediate value"""
        opponents, scores = self._check_period(subject, opponents, scores)
        mu = subject.scaled_rating
        phi = subject.scaled_deviation
        opp_mus = np.array([opponent.scaled_rating for opponent in opponents], dtype=np.float64)
        opp_phis = np.array([opponent.scaled_deviation for opponent in opponents], dtype=np.float64)

        gs = g_vector(opp_phis)
        probs = sigmoid(gs * (mu - opp_mus))
        v = 1.0 / np.sum(np.square(gs) * probs * (1.0 - probs))
        # this is kinda like a gradient
        grad = np.sum(gs * (scores - probs))
        delta = v * grad
        if not (math.isfinite(v) and math.isfinite(delta)):
            raise DomainError(f'estimated variance or improvement is not finite (v={v}, delta={delta})')

        sigma_prime = self.get_sigma_prime(phi=phi, delta=delta, v=v, sigma=subject.volatility)
        phi_star = math.sqrt(phi**2.0 + sigma_prime**2.0)
        phi_prime = 1.0 / math.sqrt((1.0 / phi_star**2.0) + (1.0 / v))
        mu_prime = mu + (phi_prime**2.0) * grad
        return PeriodEstimate(
            v=float(v),
            delta=float(delta),
            sigma_prime=sigma_prime,
            phi_star=phi_star,
            phi_prime=phi_prime,
            mu_prime=float(mu_prime),
        )

    def update_rating(self, subject: Rating, opponents: Sequence[Rating], scores: Sequence[float]) -> Rating:
        """apply one update based on all of the results of the rating period"""
        estimate = self.estimate(subject, opponents, scores)
        return subject.update(
            rating=unscale_rating(estimate.mu_prime),
            deviation=unscale_deviation(estimate.phi_prime),
            volatility=estimate.sigma_prime,
        )

    def apply_inactivity_decay(self, rating: Rating, periods: int = 1) -> Rating:
        """only step 6 applies to a competitor without games, the deviation grows and nothing else changes"""
        self._check_rating(rating, 'rating')
        if isinstance(periods, bool) or not isinstance(periods, (int, np.integer)) or periods < 0:
            raise InvalidArgumentError(f'periods must be a non-negative integer, got {periods!r}')
        phi = rating.scaled_deviation
        phi_star = math.sqrt(phi**2.0 + (periods * rating.volatility**2.0))
        deviation = unscale_deviation(phi_star)
        if self.config.max_deviation is not None:
            deviation = min(deviation, max(self.config.max_deviation, rating.deviation))
        return rating.update(rating=rating.rating, deviation=deviation, volatility=rating.volatility)
