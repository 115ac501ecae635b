"""
Weighted union of strategies.

Generation draws one alternative with probability weight_i / sum(weights)
and delegates to it. Shrinking prefers moving to an earlier alternative
over shrinking inside the current one: alternatives are ordered from
simplest to most complex, so index order is the union's notion of size.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple, TypeVar

from ..core.errors import ConfigurationError, StrategyError
from ..core.probability import Probability, prob
from .base import Strategy, ValueTree

if TYPE_CHECKING:
    from ..runner.runner import Runner

T = TypeVar("T")

logger = logging.getLogger(__name__)

WEIGHT_SCALE = 0xFFFFFFFF


def float_to_weight(probability: Any) -> Tuple[int, int]:
    """
    Convert a probability into (weight_true, weight_false) on a fixed scale.

    Interior probabilities are clamped to [1, WEIGHT_SCALE - 1] so that the
    rarer side stays reachable. Exactly 0.0 and 1.0 give a zero weight on
    one side; callers drop zero-weight alternatives.
    """
    p = prob(probability).value
    if p == 0.0:
        return 0, WEIGHT_SCALE
    if p == 1.0:
        return WEIGHT_SCALE, 0
    pos = min(WEIGHT_SCALE - 1, max(1, int(p * WEIGHT_SCALE)))
    return pos, WEIGHT_SCALE - pos


class Union(Strategy[T]):
    """
    Strategy choosing among alternatives by relative weight.

    Args:
        alternatives: (weight, strategy) pairs, simplest first

    Raises:
        ConfigurationError: If there are no alternatives or a weight is not
            a positive integer
    """

    def __init__(self, alternatives: Sequence[Tuple[int, Strategy[T]]]) -> None:
        alts = list(alternatives)
        if not alts:
            raise ConfigurationError("union requires at least one alternative")
        for weight, _ in alts:
            if isinstance(weight, bool) or not isinstance(weight, int) or weight <= 0:
                raise ConfigurationError(f"union weight must be a positive integer, got {weight!r}")
        self.alternatives: List[Tuple[int, Strategy[T]]] = alts
        self.total_weight = sum(w for w, _ in alts)

    def pick(self, runner: "Runner") -> int:
        """Draw an alternative index according to the weights."""
        r = runner.rng.randrange(0, self.total_weight)
        for idx, (weight, _) in enumerate(self.alternatives):
            if r < weight:
                return idx
            r -= weight
        return len(self.alternatives) - 1

    def new_tree(self, runner: "Runner") -> "UnionValueTree[T]":
        pick = self.pick(runner)
        tree = self.alternatives[pick][1].new_tree(runner)
        # Earlier alternatives are only generated if shrinking reaches them
        lazy_runner = runner.partial_clone() if pick > 0 else None
        return UnionValueTree(self, pick, tree, lazy_runner)

    def __repr__(self) -> str:
        return f"Union({self.alternatives!r})"


class UnionValueTree(ValueTree[T]):
    """
    Value tree of a weighted union.

    State:
        pick: Index of the alternative currently producing values
        min_pick: Lowest index still worth trying
        prev_pick: Index to return to if the last simplify switched
            alternatives, else None
    """

    def __init__(self, union: Union[T], pick: int, tree: ValueTree[T],
                 runner: Optional["Runner"]) -> None:
        self._union = union
        self._runner = runner
        self._trees: Dict[int, Optional[ValueTree[T]]] = {pick: tree}
        self.pick = pick
        self.min_pick = 0
        self.prev_pick: Optional[int] = None

    def _tree_for(self, idx: int) -> Optional[ValueTree[T]]:
        if idx not in self._trees:
            try:
                self._trees[idx] = self._union.alternatives[idx][1].new_tree(self._runner)
            except StrategyError as ex:
                logger.debug("union alternative %d unavailable: %s", idx, ex)
                self._trees[idx] = None
        return self._trees[idx]

    def current(self) -> T:
        return self._trees[self.pick].current()

    def simplify(self) -> bool:
        self.prev_pick = None
        for idx in range(self.pick - 1, self.min_pick - 1, -1):
            if self._tree_for(idx) is not None:
                self.prev_pick = self.pick
                self.pick = idx
                return True
        self.min_pick = self.pick
        return self._trees[self.pick].simplify()

    def complicate(self) -> bool:
        if self.prev_pick is not None:
            # The earlier alternative was not interesting; never revisit it
            self.pick = self.prev_pick
            self.min_pick = self.prev_pick
            self.prev_pick = None
            return True
        return self._trees[self.pick].complicate()


def weighted_pair(probability: Probability, if_false: Strategy[T],
                  if_true: Strategy[T]) -> Union[T]:
    """
    Union of two strategies where if_true is chosen with the given probability.

    if_false is the simpler alternative. A zero weight drops its side.
    """
    weight_true, weight_false = float_to_weight(probability)
    alternatives = []
    if weight_false:
        alternatives.append((weight_false, if_false))
    if weight_true:
        alternatives.append((weight_true, if_true))
    return Union(alternatives)
