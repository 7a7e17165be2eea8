"""exceptions raised by the rating systems"""


class Glicko2Error(Exception):
    """Base class for every error raised by glicko2_period."""


class InvalidArgumentError(Glicko2Error, ValueError):
    """
    Raised when the arguments of a rating update are malformed: a missing subject,
    empty or mismatched opponent and score lists, or scores outside [0, 1].
    """


class DomainError(Glicko2Error, ValueError):
    """
    Raised when a rating falls outside the domain the formulas are defined on,
    e.g. a non-positive deviation or volatility, or when the root finder produces
    non-finite values.
    """


class ConvergenceError(Glicko2Error, RuntimeError):
    """Raised when the volatility root finder exceeds its iteration cap."""
