"""base class for period based rating systems"""
from abc import ABC, abstractmethod
from typing import Sequence
from glicko2_period.core.rating import Rating


class PeriodRatingSystem(ABC):
    """
    Base class for rating systems which update one competitor at a time from all of the
    games that competitor played during a rating period. It defines the structure that
    such systems share; the ratings themselves are owned by the caller and passed in.

    Attributes:
        rating_dim (int): Dimension of competitor ratings. 2 for Glicko style systems
                          (rating and deviation), 3 when the volatility is tracked as well.
    """

    rating_dim: int

    @abstractmethod
    def new_rating(self) -> Rating:
        """
        Returns the rating given to a competitor who has not played yet.
        """
        raise NotImplementedError

    @abstractmethod
    def update_rating(self, subject: Rating, opponents: Sequence[Rating], scores: Sequence[float]) -> Rating:
        """
        Computes a competitor's rating after a rating period.

        Parameters:
            subject (Rating): the competitor's rating going into the period
            opponents (Sequence[Rating]): the pre-period ratings of the opponents, one per game
            scores (Sequence[float]): the subject's score in each game, win (1), loss (0), or draw (0.5).

        Returns:
            Rating: the posterior rating. The subject is never modified.
        """
        raise NotImplementedError

    @abstractmethod
    def apply_inactivity_decay(self, rating: Rating, periods: int = 1) -> Rating:
        """
        Returns the rating of a competitor who did not play for the given number of rating periods.
        """
        raise NotImplementedError

    @abstractmethod
    def predict(self, rating_1: Rating, rating_2: Rating) -> float:
        """
        Returns the probability that the competitor rated rating_1 beats the one rated rating_2.
        """
        raise NotImplementedError

