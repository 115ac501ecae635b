"""
Fork mode: run test cases in a worker process.

The supervisor never executes the test body. It writes the initial replay
snapshot, launches `python -m proptest_engine.runner.worker ENTRY`, and
reads the replay file once the worker exits:

- TERMINATED: the run finished; the supervisor replays the log locally to
  rebuild the final result (the minimal failing value included).
- IN_PROGRESS: the worker died mid-case. The in-flight case is recorded as
  a failure and a new worker is launched; it replays the known steps and
  continues appending where its predecessor stopped.
- CORRUPT: the file cannot be trusted; raise.

At most one worker is alive at a time, so the file needs no locking.
"""

import os
import subprocess
import sys
import tempfile
from typing import Dict, List, Optional, Sequence

from ..core.errors import ReplayCorruptError, WorkerError
from ..core.outcome import Outcome
from ..core.rng import new_seed, validate_seed
from ..logging_config import get_logger
from ..replay import file as replay_file
from ..replay.model import Replay, ReplayFileStatus
from .config import Config
from .entry import load_entry
from .runner import Runner, RunResult

REPLAY_FILE_ENV = "PROPTEST_REPLAY_FILE"
WORKER_MODULE = "proptest_engine.runner.worker"

CRASHED_IN_OTHER_PROCESS = "worker process crashed"


def worker_command(entry: str) -> List[str]:
    """Command line launching a worker for entry."""
    return [sys.executable, "-m", WORKER_MODULE, entry]


def worker_env(replay_path: str, config: Config) -> Dict[str, str]:
    """Environment for a worker: replay path, config, and this import path."""
    env = os.environ.copy()
    env.update(config.to_env())
    env[REPLAY_FILE_ENV] = replay_path
    env["PYTHONUNBUFFERED"] = "1"
    search_path = [p or os.getcwd() for p in sys.path]
    env["PYTHONPATH"] = os.pathsep.join(search_path)
    return env


def prepare_replay_file(path: str, seed: Optional[Sequence[int]] = None) -> ReplayFileStatus:
    """
    Make path hold a usable replay.

    An existing IN_PROGRESS or TERMINATED file is kept as is, so that an
    interrupted supervisor can resume or reproduce. A missing, empty or
    corrupt file is discarded and replaced by a fresh snapshot.
    """
    with replay_file.open_file(path) as f:
        status = replay_file.parse(f)
        if not status.is_corrupt:
            return status
        f.truncate(0)
        replay = Replay(validate_seed(seed) if seed is not None else new_seed())
        replay_file.write_full(replay, f)
        return ReplayFileStatus.in_progress(replay)


def supervise(entry: str, replay_path: str, config: Config,
              seed: Optional[Sequence[int]] = None) -> Replay:
    """
    Launch workers until the replay at replay_path is terminated.

    Returns:
        The terminated replay

    Raises:
        ReplayCorruptError: If the file becomes unparsable
        WorkerError: If workers crash more than config.max_worker_restarts times
    """
    status = prepare_replay_file(replay_path, seed)
    logger = get_logger(__name__, trace_id=replay_path)
    restarts = 0

    while not status.is_terminated:
        if status.is_corrupt:
            raise ReplayCorruptError(f"replay file is corrupt: {replay_path}")

        known = len(status.replay.steps)
        logger.debug("Launching worker at step %d", known)
        proc = subprocess.run(worker_command(entry), env=worker_env(replay_path, config))
        status = replay_file.load(replay_path)

        if status.is_in_progress:
            restarts += 1
            logger.warning(
                "Worker exited with code %s at step %d without finishing",
                proc.returncode,
                len(status.replay.steps),
            )
            if restarts > config.max_worker_restarts:
                raise WorkerError(f"worker crashed {restarts} times; giving up")
            with replay_file.open_file(replay_path) as f:
                replay_file.append(f, Outcome.failed(CRASHED_IN_OTHER_PROCESS))
            status = replay_file.load(replay_path)

    return status.replay


def run_forked(entry: str, config: Optional[Config] = None,
               replay_path: Optional[str] = None,
               seed: Optional[Sequence[int]] = None) -> RunResult:
    """
    Run the property test named by entry in worker processes.

    Args:
        entry: "module:attribute" naming a PropertyTest
        config: Runner configuration, shared with the workers
        replay_path: Replay file to use (a temporary file if omitted)
        seed: Seed for a fresh run; ignored when resuming an existing file

    Returns:
        RunResult rebuilt from the worker's replay
    """
    prop = load_entry(entry)
    config = config or Config.from_env()

    tmpdir: Optional[tempfile.TemporaryDirectory] = None
    if replay_path is None:
        tmpdir = tempfile.TemporaryDirectory(prefix="proptest-")
        replay_path = os.path.join(tmpdir.name, "replay")

    try:
        replay = supervise(entry, replay_path, config, seed)
    finally:
        if tmpdir is not None:
            tmpdir.cleanup()

    runner = Runner.from_replay(replay, config)
    result = runner.run(prop.strategy, prop.test)
    if runner.executed:
        get_logger(__name__, trace_id=replay_path).warning(
            "Replay ended early; %d cases executed in the supervisor", runner.executed
        )
    return result


def run_entry(entry: str, config: Optional[Config] = None,
              seed: Optional[Sequence[int]] = None) -> RunResult:
    """Run entry in-process, or in worker processes when config.fork is set."""
    config = config or Config.from_env()
    if config.fork:
        return run_forked(entry, config, seed=seed)
    prop = load_entry(entry)
    return Runner(config, seed=seed).run(prop.strategy, prop.test)
