"""
Models Module
=============

This module contains the rating systems which update a competitor from the games they played in a rating period.

Included Rating Systems:
- Glicko 2: Mark Glickman's extension of Glicko which adds a volatility to every competitor, describing how
  erratic their results are expected to be. The new volatility is found with an iterative root finder.

Each rating system is implemented as a class which validates its inputs, computes the posterior of one competitor,
and returns it as a new Rating without touching the ratings it was given.

"""
from glicko2_period.models.glicko2 import Glicko2, Glicko2Config, PeriodEstimate
