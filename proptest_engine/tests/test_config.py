"""
Tests for runner configuration.
"""

import pytest

from proptest_engine.runner import Config


def test_defaults():
    cfg = Config()
    assert cfg.cases == 256
    assert cfg.max_shrink_iters == 1024
    assert cfg.fork is False


def test_from_env_overrides():
    cfg = Config.from_env({"PROPTEST_CASES": "10", "PROPTEST_FORK": "yes"})
    assert cfg.cases == 10
    assert cfg.fork is True
    assert cfg.max_global_rejects == Config().max_global_rejects


@pytest.mark.parametrize("value", ["", "abc", "-5", "1.5"])
def test_from_env_ignores_invalid_integers(value):
    assert Config.from_env({"PROPTEST_CASES": value}).cases == 256


def test_from_env_uses_base():
    base = Config(cases=3, max_shrink_iters=4)
    cfg = Config.from_env({"PROPTEST_MAX_SHRINK_ITERS": "9"}, base=base)
    assert cfg.cases == 3
    assert cfg.max_shrink_iters == 9


def test_env_round_trip():
    cfg = Config(cases=12, max_shrink_iters=34, max_local_rejects=56,
                 max_global_rejects=78, max_worker_restarts=9, fork=True)
    assert Config.from_env(cfg.to_env()) == cfg
    assert Config.from_env(Config().to_env()) == Config()


def test_config_is_immutable():
    with pytest.raises(AttributeError):
        Config().cases = 1


def test_from_env_keeps_zero():
    assert Config.from_env({"PROPTEST_MAX_SHRINK_ITERS": "0"}).max_shrink_iters == 0


def test_env_round_trip_with_zero_budgets():
    cfg = Config(cases=0, max_shrink_iters=0, max_worker_restarts=0)
    assert Config.from_env(cfg.to_env()) == cfg
