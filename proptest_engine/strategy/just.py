"""
Constant strategy.
"""

from typing import TYPE_CHECKING, Generic, TypeVar

from .base import Strategy, ValueTree

if TYPE_CHECKING:
    from ..runner.runner import Runner

T = TypeVar("T")


class Just(Strategy[T], ValueTree[T], Generic[T]):
    """
    Strategy that always produces the same value.

    It is its own value tree and never shrinks.
    """

    def __init__(self, value: T) -> None:
        self.value = value

    def new_tree(self, runner: "Runner") -> "Just[T]":
        return self

    def current(self) -> T:
        return self.value

    def simplify(self) -> bool:
        return False

    def complicate(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"Just({self.value!r})"
