"""math utility functions for rating systems"""
import math
import numpy as np
from scipy.special import expit
from glicko2_period.utils.constants import THREE_OVER_PI_SQUARED


def sigmoid(x):
    """a little faster than implementing it in numpy for d < 100000"""
    return expit(x)


def sigmoid_scalar(x):
    """no need to use numpy on scalars, branch on the sign so math.exp never overflows"""
    if x >= 0.0:
        return 1.0 / (1.0 + math.exp(-x))
    ex = math.exp(x)
    return ex / (1.0 + ex)


def g_scalar(phi):
    """this is DIFFERENT from g in regular Glicko, phi is on the glicko 2 scale"""
    return 1.0 / math.sqrt(1.0 + (THREE_OVER_PI_SQUARED * (phi**2.0)))


def g_vector(phi):
    """vector version"""
    return 1.0 / np.sqrt(1.0 + (THREE_OVER_PI_SQUARED * np.square(phi)))
