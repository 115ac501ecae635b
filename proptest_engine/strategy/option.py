"""
Strategies for optional values.

An optional strategy is a weighted union of a leaf that always yields None
and the delegate strategy. Present values shrink to None first, and
otherwise shrink through the delegate while staying present.

Note that a delegate producing None itself cannot be told apart from the
absent branch.
"""

from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

from ..core.probability import Probability
from .base import Strategy, ValueTree
from .union import Union, UnionValueTree, weighted_pair

if TYPE_CHECKING:
    from ..runner.runner import Runner

T = TypeVar("T")


class NoneStrategy(Strategy[Optional[T]], ValueTree[Optional[T]], Generic[T]):
    """Strategy that always produces None; carries no data."""

    __slots__ = ()

    def new_tree(self, runner: "Runner") -> "NoneStrategy[T]":
        return self

    def current(self) -> Optional[T]:
        return None

    def simplify(self) -> bool:
        return False

    def complicate(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NoneStrategy"


class OptionStrategy(Strategy[Optional[T]]):
    """
    Strategy generating optional values wrapping values from a delegate.

    Constructed by of() and weighted().
    """

    def __init__(self, delegate: Strategy[T], probability_of_some: Probability) -> None:
        self.delegate = delegate
        self.probability_of_some = probability_of_some
        self._union: Union[Optional[T]] = weighted_pair(
            probability_of_some, NoneStrategy(), delegate
        )

    def new_tree(self, runner: "Runner") -> "OptionValueTree[T]":
        return OptionValueTree(self._union.new_tree(runner))

    def __repr__(self) -> str:
        return f"OptionStrategy({self.delegate!r}, p={self.probability_of_some.value})"


class OptionValueTree(ValueTree[Optional[T]]):
    """Value tree corresponding to OptionStrategy."""

    def __init__(self, inner: UnionValueTree[Optional[T]]) -> None:
        self.inner = inner

    def current(self) -> Optional[T]:
        return self.inner.current()

    def simplify(self) -> bool:
        return self.inner.simplify()

    def complicate(self) -> bool:
        return self.inner.complicate()


def of(delegate: Strategy[T]) -> OptionStrategy[T]:
    """
    Return a strategy producing optional values from delegate.

    Present and None are each chosen with 50% probability.
    """
    return weighted(Probability(), delegate)


def weighted(probability_of_some: Any, delegate: Strategy[T]) -> OptionStrategy[T]:
    """
    Return a strategy producing optional values from delegate.

    A present value is chosen with probability_of_some, intended to lie
    strictly between 0.0 and 1.0. Exactly 0.0 always yields None and exactly
    1.0 always yields a present value.

    Raises:
        InvalidProbabilityError: If the probability lies outside [0.0, 1.0]
    """
    if not isinstance(probability_of_some, Probability):
        probability_of_some = Probability(probability_of_some)
    return OptionStrategy(delegate, probability_of_some)
