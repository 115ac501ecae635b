"""
Test case outcomes.

An outcome is the verdict of running a test body against one generated
value. The same three-way vocabulary is used live and in replay files.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OutcomeKind(Enum):
    """Kind of test case outcome; the value is the replay glyph."""
    PASS = "+"
    FAIL = "-"
    REJECT = "!"


@dataclass(frozen=True)
class Outcome:
    """
    Immutable test case outcome.

    Fields:
        kind: PASS, FAIL or REJECT
        reason: Failure or rejection reason (None for PASS)
    """
    kind: OutcomeKind
    reason: Optional[str] = None

    @classmethod
    def passed(cls) -> "Outcome":
        return cls(OutcomeKind.PASS)

    @classmethod
    def failed(cls, reason: str) -> "Outcome":
        return cls(OutcomeKind.FAIL, reason)

    @classmethod
    def rejected(cls, reason: str) -> "Outcome":
        return cls(OutcomeKind.REJECT, reason)

    @property
    def glyph(self) -> str:
        return self.kind.value

    @property
    def is_pass(self) -> bool:
        return self.kind is OutcomeKind.PASS

    @property
    def is_fail(self) -> bool:
        return self.kind is OutcomeKind.FAIL

    @property
    def is_reject(self) -> bool:
        return self.kind is OutcomeKind.REJECT

    def same_kind(self, other: "Outcome") -> bool:
        """Compare kinds only; reasons do not survive a process boundary."""
        return self.kind is other.kind


class CaseError(Exception):
    """Base for exceptions a test body raises to signal its verdict."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class CaseFailed(CaseError):
    """The property does not hold for the current input."""
    pass


class CaseRejected(CaseError):
    """The current input does not satisfy a precondition of the test."""
    pass


def assume(condition: bool, reason: str = "assumption failed") -> None:
    """
    Reject the current input unless condition holds.

    Raises:
        CaseRejected: If condition is false
    """
    if not condition:
        raise CaseRejected(reason)
