"""
Runner configuration.

Environment Variables:
    PROPTEST_CASES: Passing cases required for success (default: 256)
    PROPTEST_MAX_SHRINK_ITERS: Test executions allowed while shrinking (default: 1024)
    PROPTEST_MAX_LOCAL_REJECTS: Values filters may discard per run (default: 65536)
    PROPTEST_MAX_GLOBAL_REJECTS: Rejected cases before aborting (default: 1024)
    PROPTEST_MAX_WORKER_RESTARTS: Crashed workers tolerated in fork mode (default: 256)
    PROPTEST_FORK: Run test cases in a worker process (1/true/yes)

Unparsable or negative integers fall back to the default. Zero is kept, so
that a configuration survives the round trip through to_env().
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Dict, Mapping, Optional

_ENV_NAMES = {
    "cases": "PROPTEST_CASES",
    "max_shrink_iters": "PROPTEST_MAX_SHRINK_ITERS",
    "max_local_rejects": "PROPTEST_MAX_LOCAL_REJECTS",
    "max_global_rejects": "PROPTEST_MAX_GLOBAL_REJECTS",
    "max_worker_restarts": "PROPTEST_MAX_WORKER_RESTARTS",
    "fork": "PROPTEST_FORK",
}


def _env_int(env: Mapping[str, str], key: str) -> Optional[int]:
    val = env.get(key)
    if not val:
        return None
    try:
        parsed = int(val)
    except ValueError:
        return None
    return parsed if parsed >= 0 else None


def _env_bool(env: Mapping[str, str], key: str) -> Optional[bool]:
    val = env.get(key)
    if val is None:
        return None
    return val.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Config:
    """
    Immutable runner configuration.

    Fork-mode workers receive the supervisor's configuration through the
    environment (to_env), since both must make identical decisions.
    """
    cases: int = 256
    max_shrink_iters: int = 1024
    max_local_rejects: int = 65536
    max_global_rejects: int = 1024
    max_worker_restarts: int = 256
    fork: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None,
                 base: Optional["Config"] = None) -> "Config":
        """
        Build a configuration from environment variables.

        Args:
            env: Mapping to read (default: os.environ)
            base: Configuration supplying values for unset variables
        """
        env = os.environ if env is None else env
        cfg = base or cls()
        overrides = {}
        for f in fields(cls):
            key = _ENV_NAMES[f.name]
            val = _env_bool(env, key) if f.name == "fork" else _env_int(env, key)
            if val is not None:
                overrides[f.name] = val
        return replace(cfg, **overrides)

    def to_env(self) -> Dict[str, str]:
        """Render this configuration as environment variables."""
        out = {}
        for f in fields(self):
            val = getattr(self, f.name)
            if isinstance(val, bool):
                val = "1" if val else "0"
            out[_ENV_NAMES[f.name]] = str(val)
        return out
