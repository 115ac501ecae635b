"""
Integer range strategy with binary-search shrinking.

Values shrink toward the member of the range closest to zero. The search
keeps an interval [lo, hi] of distances from that origin: hi is the last
distance known to be interesting, lo the smallest distance not yet ruled
out. simplify() tries the midpoint; complicate() rules the midpoint out and
returns to hi.
"""

from typing import TYPE_CHECKING, Optional

from ..core.errors import ConfigurationError
from .base import Strategy, ValueTree

if TYPE_CHECKING:
    from ..runner.runner import Runner


class IntRange(Strategy[int]):
    """
    Uniformly distributed integers in the half-open range [start, stop).

    Raises:
        ConfigurationError: If the range is empty
    """

    def __init__(self, start: int, stop: int) -> None:
        if stop <= start:
            raise ConfigurationError(f"empty integer range [{start}, {stop})")
        self.start = start
        self.stop = stop

    @property
    def origin(self) -> int:
        """Member of the range closest to zero."""
        return min(max(0, self.start), self.stop - 1)

    def new_tree(self, runner: "Runner") -> "BinarySearch":
        return BinarySearch(runner.rng.randrange(self.start, self.stop), self.origin)

    def __repr__(self) -> str:
        return f"IntRange({self.start}, {self.stop})"


class BinarySearch(ValueTree[int]):
    """Shrinks an integer toward origin by bisecting its distance."""

    def __init__(self, value: int, origin: int = 0) -> None:
        self.origin = origin
        self.sign = 1 if value >= origin else -1
        self.lo = 0
        self.curr = abs(value - origin)
        self.hi = self.curr
        self._prev: Optional[int] = None

    def current(self) -> int:
        return self.origin + self.sign * self.curr

    def simplify(self) -> bool:
        self._prev = None
        self.hi = self.curr
        if self.lo >= self.hi:
            return False
        self._prev = self.curr
        self.curr = self.lo + (self.hi - self.lo) // 2
        return True

    def complicate(self) -> bool:
        if self._prev is None:
            return False
        self.lo = self.curr + 1
        self.curr = self._prev
        self._prev = None
        return True


def integers(start: int, stop: int) -> IntRange:
    """Return a strategy for integers in [start, stop)."""
    return IntRange(start, stop)
