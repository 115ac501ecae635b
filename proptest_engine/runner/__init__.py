"""
Test runner.

This module provides:
- Config: runner limits, loadable from the environment
- Runner: case loop and shrink driver with replay support
- PropertyTest / load_entry: importable property test entry points
- run_forked / run_entry: fork mode supervisor
"""

from .config import Config
from .runner import Runner, RunResult, RunStatus
from .entry import PropertyTest, property_test, load_entry
from .fork import run_forked, run_entry, supervise, prepare_replay_file

__all__ = [
    "Config",
    "Runner",
    "RunResult",
    "RunStatus",
    "PropertyTest",
    "property_test",
    "load_entry",
    "run_forked",
    "run_entry",
    "supervise",
    "prepare_replay_file",
]
