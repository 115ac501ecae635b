"""
Replay log for crash-resilient forked runs.

The replay file lets a supervising process recover the exact sequence of
pass/fail/reject outcomes a worker process produced, even if the worker
was killed mid-run.
"""

from .model import Replay, ReplayState, ReplayFileStatus
from .file import (
    TERMINATOR,
    FAILED_IN_OTHER_PROCESS,
    REJECTED_IN_OTHER_PROCESS,
    open_file,
    append,
    terminate,
    write_full,
    parse,
    load,
    rewrite,
)

__all__ = [
    "Replay",
    "ReplayState",
    "ReplayFileStatus",
    "TERMINATOR",
    "FAILED_IN_OTHER_PROCESS",
    "REJECTED_IN_OTHER_PROCESS",
    "open_file",
    "append",
    "terminate",
    "write_full",
    "parse",
    "load",
    "rewrite",
]
