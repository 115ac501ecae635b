"""
Probability values used to bias weighted choices.

A Probability is an immutable float in the closed interval [0.0, 1.0].
Construction outside that interval is a programming mistake and fails
immediately; values are never clamped.
"""

from dataclasses import dataclass
from typing import Any, Callable, Tuple, TypeVar, Union

from .errors import InvalidProbabilityError

X = TypeVar("X")


@dataclass(frozen=True)
class Probability:
    """
    A probability in the range [0.0, 1.0] with a default of 0.5.

    Fields:
        value: The underlying float

    Raises:
        InvalidProbabilityError: If value lies outside [0.0, 1.0]
    """
    value: float = 0.5

    def __post_init__(self) -> None:
        v = self.value
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise InvalidProbabilityError(f"probability must be a number, got {v!r}")
        # NaN fails both comparisons
        if not (0.0 <= v <= 1.0):
            raise InvalidProbabilityError(f"probability {v!r} outside [0.0, 1.0]")
        object.__setattr__(self, "value", float(v))

    def __float__(self) -> float:
        return self.value

    def with_(self, other: X) -> Tuple["Probability", X]:
        """
        Pair this probability with another configuration value.

        Useful where a strategy takes a (Probability, X) parameter pair.
        """
        return (self, other)

    def lift(self, default_factory: Callable[[], X]) -> Tuple["Probability", X]:
        """
        Pair this probability with a default-constructed value.

        Example:
            prob(0.3).lift(list) -> (Probability(0.3), [])
        """
        return self.with_(default_factory())


def prob(value: Union[Probability, float, Any]) -> Probability:
    """
    Create a Probability from a float (or pass a Probability through).

    Raises:
        InvalidProbabilityError: If the value lies outside [0.0, 1.0]
    """
    if isinstance(value, Probability):
        return value
    return Probability(value)
