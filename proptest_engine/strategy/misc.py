"""
Small strategies built from the union combinator.
"""

from typing import Any

from ..core.probability import Probability
from .just import Just
from .union import Union, weighted_pair


def booleans(probability_of_true: Any = 0.5) -> Union[bool]:
    """
    Return a strategy for booleans; True shrinks to False.

    Raises:
        InvalidProbabilityError: If the probability lies outside [0.0, 1.0]
    """
    if not isinstance(probability_of_true, Probability):
        probability_of_true = Probability(probability_of_true)
    return weighted_pair(probability_of_true, Just(False), Just(True))
