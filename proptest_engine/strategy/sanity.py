"""
Protocol checks for strategy authors.

check_strategy_sanity() generates trees from a strategy and walks each one
to a local minimum, randomly treating simplifications as uninteresting, and
asserts the ValueTree contract along the way.
"""

import operator
from typing import Any, Callable, Optional

from ..runner.config import Config
from ..runner.runner import Runner
from .base import Strategy


def check_strategy_sanity(
    strategy: Strategy[Any],
    runner: Optional[Runner] = None,
    cases: int = 64,
    max_steps: int = 4096,
    eq: Callable[[Any, Any], bool] = operator.eq,
) -> None:
    """
    Assert that strategy's value trees obey the simplify/complicate contract.

    Checks, for every generated tree:
    - complicate() before any simplify() is a no-op returning False
    - a simplify() returning False leaves current() unchanged
    - complicate() right after simplify() restores the previous value, and
      a second complicate() does nothing
    - simplify() succeeds at most max_steps times

    Raises:
        AssertionError: On the first violation
    """
    runner = runner or Runner(Config(cases=cases))

    for _ in range(cases):
        tree = strategy.new_tree(runner)
        start = tree.current()
        assert not tree.complicate(), "complicate() without simplify() reported a change"
        assert eq(tree.current(), start), "complicate() without simplify() changed the value"

        steps = 0
        while True:
            before = tree.current()
            if not tree.simplify():
                assert eq(tree.current(), before), "failed simplify() changed the value"
                break

            steps += 1
            assert steps <= max_steps, f"simplify() did not terminate after {max_steps} steps"

            if runner.rng.random() < 0.5:
                assert tree.complicate(), "complicate() after simplify() reported no change"
                assert eq(tree.current(), before), (
                    f"complicate() did not restore {before!r}, got {tree.current()!r}"
                )
                assert not tree.complicate(), "second complicate() reported a change"
