"""
Replay model.

A Replay records the seed a runner started from and the outcome of every
test case it ran, in order. Because generation and shrinking are fully
determined by the seed and the outcomes, a Replay is enough for another
process to reach exactly the same state without executing the test body.

Steps are append-only during a live run; the seed never changes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from ..core.outcome import Outcome
from ..core.rng import Seed, validate_seed


@dataclass
class Replay:
    """
    Seed plus ordered outcome log of a runner invocation.

    Fields:
        seed: Four 32-bit words the runner's RNG started from
        steps: Outcome of each test case, in execution order

    Raises:
        ConfigurationError: If seed is not four 32-bit words
    """
    seed: Seed
    steps: List[Outcome] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.seed = validate_seed(self.seed)
        self.steps = list(self.steps)

    def merge(self, other: "Replay") -> None:
        """
        If other has more steps than self, append the extra steps to self.

        Never truncates or reorders; a no-op when other is not longer.
        """
        if len(other.steps) > len(self.steps):
            self.steps.extend(other.steps[len(self.steps):])

    def glyphs(self) -> str:
        """Outcome log in file encoding (one character per step)."""
        return "".join(step.glyph for step in self.steps)

    def counts(self) -> dict:
        """Number of steps of each kind, keyed by kind name."""
        out = {"pass": 0, "fail": 0, "reject": 0}
        for step in self.steps:
            out[step.kind.name.lower()] += 1
        return out

    def same_steps(self, other: Sequence[Outcome]) -> bool:
        """Compare step kinds; reasons are not preserved across processes."""
        return len(self.steps) == len(other) and all(
            a.same_kind(b) for a, b in zip(self.steps, other)
        )


class ReplayState(Enum):
    """State of a persisted replay file."""
    IN_PROGRESS = "in_progress"
    TERMINATED = "terminated"
    CORRUPT = "corrupt"


@dataclass(frozen=True)
class ReplayFileStatus:
    """
    Result of parsing a replay file.

    Fields:
        state: IN_PROGRESS, TERMINATED or CORRUPT
        replay: Parsed replay (None when CORRUPT)
    """
    state: ReplayState
    replay: Optional[Replay] = None

    @classmethod
    def in_progress(cls, replay: Replay) -> "ReplayFileStatus":
        return cls(ReplayState.IN_PROGRESS, replay)

    @classmethod
    def terminated(cls, replay: Replay) -> "ReplayFileStatus":
        return cls(ReplayState.TERMINATED, replay)

    @classmethod
    def corrupt(cls) -> "ReplayFileStatus":
        return cls(ReplayState.CORRUPT)

    @property
    def is_in_progress(self) -> bool:
        return self.state is ReplayState.IN_PROGRESS

    @property
    def is_terminated(self) -> bool:
        return self.state is ReplayState.TERMINATED

    @property
    def is_corrupt(self) -> bool:
        return self.state is ReplayState.CORRUPT
