"""
Runner: generate cases, execute the test body, shrink failures.

Every outcome goes through run_one(). Outcomes already recorded in a replay
are taken from it in order instead of executing the test, and newly
executed outcomes are appended to the persist file before the runner moves
on. Since generation and shrinking depend only on the seed and the outcome
sequence, a runner fed the same replay walks the same path.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, BinaryIO, Callable, Deque, Optional, Sequence, Tuple

from ..core.errors import ConfigurationError, StrategyError, TooManyLocalRejects
from ..core.outcome import CaseFailed, CaseRejected, Outcome
from ..core.rng import Seed, SeededRng, new_seed, validate_seed
from ..logging_config import get_logger, seed_trace_id
from ..replay import file as replay_file
from ..replay.model import Replay
from .config import Config

if TYPE_CHECKING:
    from ..strategy.base import Strategy, ValueTree

TestFn = Callable[[Any], Any]


class RunStatus(Enum):
    """Final status of a run."""
    PASSED = "passed"
    FAILED = "failed"
    ABORTED = "aborted"


@dataclass(frozen=True)
class RunResult:
    """
    Result of a run.

    Fields:
        status: PASSED, FAILED or ABORTED
        seed: Seed the run started from
        cases: Number of passing cases
        rejects: Number of rejected cases
        reason: Failure or abort reason
        minimal: Smallest failing value found (FAILED only)
        shrink_iters: Test executions spent shrinking
    """
    status: RunStatus
    seed: Seed
    cases: int = 0
    rejects: int = 0
    reason: Optional[str] = None
    minimal: Any = None
    shrink_iters: int = 0

    @property
    def passed(self) -> bool:
        return self.status is RunStatus.PASSED

    @property
    def failed(self) -> bool:
        return self.status is RunStatus.FAILED

    def summary(self) -> str:
        """Return a one-line summary."""
        if self.status is RunStatus.FAILED:
            return f"failed after {self.cases} passing cases: {self.reason}; minimal input: {self.minimal!r}"
        if self.status is RunStatus.ABORTED:
            return f"aborted: {self.reason}"
        return f"passed {self.cases} cases ({self.rejects} rejected)"


class Runner:
    """
    Drives one property test.

    Usage:
        runner = Runner(Config(cases=100))
        result = runner.run(integers(0, 1000), test_fn)
    """

    def __init__(self,
                 config: Optional[Config] = None,
                 seed: Optional[Sequence[int]] = None,
                 replay: Optional[Replay] = None,
                 persist: Optional[BinaryIO] = None) -> None:
        """
        Initialize the runner.

        Args:
            config: Runner configuration (default: Config())
            seed: RNG seed; a fresh one is drawn if omitted
            replay: Previously recorded outcomes to assume, in order
            persist: Replay file handle to append executed outcomes to

        Raises:
            ConfigurationError: If seed is invalid or disagrees with replay
        """
        self.config = config or Config()
        if replay is not None:
            if seed is not None and validate_seed(seed) != replay.seed:
                raise ConfigurationError("seed does not match replay seed")
            seed = replay.seed
        self.seed: Seed = validate_seed(seed) if seed is not None else new_seed()
        self.rng = SeededRng(self.seed)
        self.history = Replay(self.seed)
        self.local_rejects = 0
        self.global_rejects = 0
        self.executed = 0
        self.replayed = 0
        self._pending: Deque[Outcome] = deque(replay.steps if replay is not None else ())
        self._persist = persist
        self.logger = get_logger(__name__, trace_id=seed_trace_id(self.seed))

    @classmethod
    def from_replay(cls, replay: Replay, config: Optional[Config] = None,
                    persist: Optional[BinaryIO] = None) -> "Runner":
        """Create a runner that reproduces replay before executing anything."""
        return cls(config, replay=replay, persist=persist)

    def partial_clone(self) -> "Runner":
        """
        Return a runner with the same config and a forked RNG.

        The clone has no replay and does not persist; it only serves
        generation.
        """
        return Runner(self.config, seed=self.rng.fork().seed)

    @property
    def pending_steps(self) -> int:
        """Replay steps not yet consumed."""
        return len(self._pending)

    def note_local_reject(self, whence: str) -> None:
        """
        Record a value discarded by a strategy filter.

        Raises:
            TooManyLocalRejects: If the local reject budget is exhausted
        """
        self.local_rejects += 1
        if self.local_rejects > self.config.max_local_rejects:
            raise TooManyLocalRejects(whence)

    def _execute(self, value: Any, test: TestFn) -> Outcome:
        try:
            test(value)
        except CaseRejected as ex:
            return Outcome.rejected(ex.reason)
        except CaseFailed as ex:
            return Outcome.failed(ex.reason)
        except Exception as ex:
            reason = f"{type(ex).__name__}: {ex}" if str(ex) else type(ex).__name__
            return Outcome.failed(reason)
        return Outcome.passed()

    def run_one(self, value: Any, test: TestFn) -> Outcome:
        """
        Determine the outcome of one test case.

        Takes the next replay step if any remain, otherwise executes test
        and persists the outcome.

        Raises:
            ReplayStoreError: If the outcome cannot be persisted
        """
        if self._pending:
            outcome = self._pending.popleft()
            self.replayed += 1
        else:
            outcome = self._execute(value, test)
            self.executed += 1
            if self._persist is not None:
                replay_file.append(self._persist, outcome)
        self.history.steps.append(outcome)
        return outcome

    def run(self, strategy: "Strategy[Any]", test: TestFn) -> RunResult:
        """
        Run test against values from strategy until config.cases pass.

        Stops at the first failure and shrinks it.

        Returns:
            RunResult describing the run
        """
        passes = 0
        while passes < self.config.cases:
            try:
                tree = strategy.new_tree(self)
            except StrategyError as ex:
                self.logger.warning("Strategy could not produce a value: %s", ex)
                return RunResult(RunStatus.ABORTED, self.seed, passes, self.global_rejects, str(ex))

            outcome = self.run_one(tree.current(), test)
            if outcome.is_pass:
                passes += 1
            elif outcome.is_reject:
                self.global_rejects += 1
                if self.global_rejects > self.config.max_global_rejects:
                    reason = f"too many global rejects (last: {outcome.reason})"
                    self.logger.warning("Aborting run: %s", reason)
                    return RunResult(RunStatus.ABORTED, self.seed, passes, self.global_rejects, reason)
            else:
                self.logger.info("Test failed after %d passing cases: %s", passes, outcome.reason)
                reason, minimal, iters = self.shrink(tree, test, outcome.reason)
                self.logger.info("Shrunk to %r in %d iterations", minimal, iters)
                return RunResult(
                    RunStatus.FAILED,
                    self.seed,
                    passes,
                    self.global_rejects,
                    reason,
                    minimal,
                    iters,
                )

        return RunResult(RunStatus.PASSED, self.seed, passes, self.global_rejects)

    def shrink(self, tree: "ValueTree[Any]", test: TestFn,
               reason: Optional[str]) -> Tuple[Optional[str], Any, int]:
        """
        Search for a simpler failing value starting from tree.

        Simplifies while the test keeps failing; when a simplification
        passes or is rejected, complicates once back to the last failing
        value and continues simplifying from there.

        Returns:
            (reason, minimal value, iterations) of the last failure seen
        """
        minimal = tree.current()
        iters = 0
        if not tree.simplify():
            return reason, minimal, iters

        while iters < self.config.max_shrink_iters:
            iters += 1
            value = tree.current()
            outcome = self.run_one(value, test)
            if outcome.is_fail:
                reason = outcome.reason
                minimal = value
                self.logger.debug("Shrink step %d still fails: %r", iters, value)
            else:
                self.logger.debug("Shrink step %d no longer fails: %r", iters, value)
                tree.complicate()
            if not tree.simplify():
                break

        return reason, minimal, iters
