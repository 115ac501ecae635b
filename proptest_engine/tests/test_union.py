"""
Tests for the weighted union combinator.
"""

import pytest

from proptest_engine.core.errors import ConfigurationError
from proptest_engine.runner import Config, Runner
from proptest_engine.strategy import (
    WEIGHT_SCALE,
    Just,
    Union,
    booleans,
    float_to_weight,
    integers,
)
from proptest_engine.strategy.sanity import check_strategy_sanity


def _runner():
    return Runner(Config(), seed=(5, 6, 7, 8))


def test_union_requires_alternatives():
    with pytest.raises(ConfigurationError):
        Union([])


@pytest.mark.parametrize("weight", [0, -1, 1.5, True])
def test_union_rejects_bad_weights(weight):
    with pytest.raises(ConfigurationError):
        Union([(1, Just("a")), (weight, Just("b"))])


def test_single_alternative_always_chosen():
    runner = _runner()
    strat = Union([(7, Just("only"))])
    assert all(strat.new_tree(runner).current() == "only" for _ in range(50))


def test_pick_follows_weights():
    runner = _runner()
    strat = Union([(1, Just("a")), (3, Just("b"))])
    count_b = sum(strat.new_tree(runner).current() == "b" for _ in range(1000))
    assert 700 < count_b < 800


def test_shrinks_to_earlier_alternative_first():
    """A later alternative moves to an earlier one before shrinking inside."""
    strat = Union([(1, Just("a")), (1, Just("b")), (1000000, integers(500, 1000))])
    runner = _runner()
    tree = strat.new_tree(runner)
    while not isinstance(tree.current(), int):
        tree = strat.new_tree(runner)

    before = tree.current()
    assert tree.simplify()
    assert tree.current() == "b"
    assert tree.simplify()
    assert tree.current() == "a"

    # Back off: 'a' was uninteresting, return to 'b' and stay there
    assert tree.complicate()
    assert tree.current() == "b"
    assert not tree.simplify()
    assert tree.current() == "b"
    assert before >= 500


def test_rejected_switch_falls_back_to_inner_shrinking():
    strat = Union([(1, Just(None)), (WEIGHT_SCALE, integers(0, 1000))])
    runner = _runner()
    tree = strat.new_tree(runner)
    while tree.current() is None or tree.current() < 10:
        tree = strat.new_tree(runner)

    start = tree.current()
    assert tree.simplify()
    assert tree.current() is None
    assert tree.complicate()
    assert tree.current() == start

    # None is never retried; shrinking continues inside the integer tree
    while tree.simplify():
        assert tree.current() is not None
        assert tree.current() < start
    assert tree.current() == 0


def test_float_to_weight_scale():
    pos, neg = float_to_weight(0.5)
    assert pos + neg == WEIGHT_SCALE
    assert abs(pos - neg) <= 1


def test_float_to_weight_keeps_rare_side_reachable():
    assert float_to_weight(1e-15)[0] == 1
    assert float_to_weight(1 - 1e-15)[1] == 1


def test_float_to_weight_degenerate_bounds():
    assert float_to_weight(0.0) == (0, WEIGHT_SCALE)
    assert float_to_weight(1.0) == (WEIGHT_SCALE, 0)


def test_booleans_shrink_to_false():
    runner = _runner()
    strat = booleans()
    tree = strat.new_tree(runner)
    while tree.current() is not True:
        tree = strat.new_tree(runner)
    assert tree.simplify()
    assert tree.current() is False


def test_booleans_degenerate():
    runner = _runner()
    assert all(booleans(1.0).new_tree(runner).current() for _ in range(100))
    assert not any(booleans(0.0).new_tree(runner).current() for _ in range(100))


@pytest.mark.parametrize("strategy", [
    Union([(1, Just(0)), (2, Just(1)), (3, Just(2))]),
    Union([(1, integers(0, 10)), (1, integers(100, 200)), (1, integers(-50, 0))]),
    booleans(0.3),
])
def test_union_sanity(strategy):
    check_strategy_sanity(strategy, _runner())
