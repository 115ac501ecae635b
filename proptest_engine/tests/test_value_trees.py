"""
Tests for the simplify/complicate contract of leaf and wrapper trees.
"""

import pytest

from proptest_engine.core.errors import ConfigurationError, TooManyLocalRejects
from proptest_engine.runner import Config, Runner
from proptest_engine.strategy import BinarySearch, Just, integers
from proptest_engine.strategy.sanity import check_strategy_sanity


def _runner(**kwargs):
    return Runner(Config(**kwargs), seed=(11, 22, 33, 44))


def test_just_never_shrinks():
    tree = Just(42).new_tree(_runner())
    assert tree.current() == 42
    assert not tree.simplify()
    assert not tree.complicate()
    assert tree.current() == 42


def test_complicate_without_simplify_is_noop():
    tree = BinarySearch(100)
    assert not tree.complicate()
    assert tree.current() == 100


def test_binary_search_reaches_smallest_failing_value():
    """Driving the tree with a monotone predicate finds its boundary."""
    tree = BinarySearch(1000)
    while True:
        if tree.current() >= 37:
            if not tree.simplify():
                break
        else:
            tree.complicate()
            if not tree.simplify():
                break
    assert tree.current() == 37


def test_binary_search_complicate_restores_previous():
    tree = BinarySearch(64)
    assert tree.simplify()
    assert tree.current() == 32
    assert tree.complicate()
    assert tree.current() == 64
    assert not tree.complicate()


def test_binary_search_simplify_is_monotone():
    tree = BinarySearch(-500, origin=0)
    prev = abs(tree.current())
    while tree.simplify():
        assert abs(tree.current()) < prev
        prev = abs(tree.current())
    assert tree.current() == 0


def test_range_shrinks_toward_value_closest_to_zero():
    assert integers(5, 10).origin == 5
    assert integers(-10, -3).origin == -4
    assert integers(-10, 10).origin == 0

    tree = integers(-10, -3).new_tree(_runner())
    while tree.simplify():
        pass
    assert tree.current() == -4


def test_range_values_stay_in_bounds():
    runner = _runner()
    strat = integers(-20, 20)
    for _ in range(500):
        assert -20 <= strat.new_tree(runner).current() < 20


def test_empty_range_is_configuration_error():
    with pytest.raises(ConfigurationError):
        integers(5, 5)


def test_map_applies_function():
    tree = integers(0, 100).map(lambda n: n * 2).new_tree(_runner())
    assert tree.current() % 2 == 0
    while tree.simplify():
        assert tree.current() % 2 == 0
    assert tree.current() == 0


def test_filter_only_yields_acceptable_values():
    strat = integers(0, 1000).filter("odd", lambda n: n % 2 == 1)
    runner = _runner()
    for _ in range(100):
        tree = strat.new_tree(runner)
        assert tree.current() % 2 == 1
        while tree.simplify():
            assert tree.current() % 2 == 1


def test_filter_exhausts_local_rejects():
    strat = integers(0, 10).filter("never", lambda n: False)
    with pytest.raises(TooManyLocalRejects) as exc:
        strat.new_tree(_runner(max_local_rejects=50))
    assert exc.value.whence == "never"


@pytest.mark.parametrize("strategy", [
    Just("x"),
    integers(0, 1000),
    integers(-1000, 1000),
    integers(0, 1000).map(str),
    integers(0, 1000).filter("not multiple of 3", lambda n: n % 3 != 0),
])
def test_strategy_sanity(strategy):
    check_strategy_sanity(strategy, _runner())
