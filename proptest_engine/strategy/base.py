"""
Strategy / ValueTree protocol.

A Strategy describes how to generate values of some type. Asking it for a
value produces a ValueTree: a mutable cursor holding exactly one current
value that can move to simpler values (simplify) and step back one move
(complicate).

Contract for every ValueTree:
- current() is side-effect free and repeatable
- simplify() returns False iff nothing changed (local minimum)
- complicate() restores the value held before the most recent successful
  simplify(), at most once; with no such simplify it returns False
- a tree admits only finitely many successful simplify() calls

Combinators wrap other strategies (composition), they do not subclass them.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

if TYPE_CHECKING:
    from ..runner.runner import Runner

T = TypeVar("T")
U = TypeVar("U")


class ValueTree(ABC, Generic[T]):
    """
    Stateful cursor over one generated value.

    Owned by a single driver; never advanced concurrently.
    """

    __slots__ = ()

    @abstractmethod
    def current(self) -> T:
        """Return the value under test."""
        ...

    @abstractmethod
    def simplify(self) -> bool:
        """
        Move to a strictly simpler value.

        Returns:
            True if the current value changed
        """
        ...

    @abstractmethod
    def complicate(self) -> bool:
        """
        Undo the most recent simplify() step.

        Returns:
            True if the current value changed
        """
        ...


class Strategy(ABC, Generic[T]):
    """
    Immutable descriptor for generating values of type T.

    Strategies hold no mutable state and may be shared freely.
    """

    __slots__ = ()

    @abstractmethod
    def new_tree(self, runner: "Runner") -> ValueTree[T]:
        """
        Generate a new value tree using the runner's random source.

        Raises:
            StrategyError: If no value could be produced
        """
        ...

    def map(self, fn: Callable[[T], U]) -> "Map[T, U]":
        """Return a strategy producing fn(value) for each generated value."""
        return Map(self, fn)

    def filter(self, whence: str, predicate: Callable[[T], bool]) -> "Filter[T]":
        """
        Return a strategy producing only values satisfying predicate.

        Args:
            whence: Description of the filter, reported on reject exhaustion
            predicate: Acceptance test for generated values
        """
        return Filter(self, whence, predicate)


class Map(Strategy[U], Generic[T, U]):
    """Strategy applying a function to every value of a source strategy."""

    def __init__(self, source: Strategy[T], fn: Callable[[T], U]) -> None:
        self.source = source
        self.fn = fn

    def new_tree(self, runner: "Runner") -> "MapValueTree[T, U]":
        return MapValueTree(self.source.new_tree(runner), self.fn)

    def __repr__(self) -> str:
        return f"Map({self.source!r}, {getattr(self.fn, '__name__', self.fn)!r})"


class MapValueTree(ValueTree[U], Generic[T, U]):
    """Value tree shrinking the source and mapping on read."""

    def __init__(self, source: ValueTree[T], fn: Callable[[T], U]) -> None:
        self.source = source
        self.fn = fn

    def current(self) -> U:
        return self.fn(self.source.current())

    def simplify(self) -> bool:
        return self.source.simplify()

    def complicate(self) -> bool:
        return self.source.complicate()


class Filter(Strategy[T]):
    """
    Strategy discarding source values that fail a predicate.

    Each discarded value counts against the runner's local reject budget.
    """

    def __init__(self, source: Strategy[T], whence: str, predicate: Callable[[T], bool]) -> None:
        self.source = source
        self.whence = whence
        self.predicate = predicate

    def new_tree(self, runner: "Runner") -> "FilterValueTree[T]":
        while True:
            tree = self.source.new_tree(runner)
            if self.predicate(tree.current()):
                return FilterValueTree(tree, self.predicate)
            runner.note_local_reject(self.whence)

    def __repr__(self) -> str:
        return f"Filter({self.source!r}, {self.whence!r})"


class FilterValueTree(ValueTree[T]):
    """
    Value tree that only ever rests on acceptable values.

    A source simplification landing on an unacceptable value is undone and
    the next simplification is tried instead.
    """

    def __init__(self, source: ValueTree[T], predicate: Callable[[T], bool]) -> None:
        self.source = source
        self.predicate = predicate

    def current(self) -> T:
        return self.source.current()

    def simplify(self) -> bool:
        while self.source.simplify():
            if self.predicate(self.source.current()):
                return True
            self.source.complicate()
        return False

    def complicate(self) -> bool:
        return self.source.complicate()
