"""
Core primitives shared by strategies, replay and the runner.

This module provides:
- Probability: validated bias for weighted choices
- Outcome: pass / fail / reject verdicts of a test case
- SeededRng: deterministic random source from a four-word seed
- Errors: configuration, strategy and replay storage failures
"""

from .errors import (
    ConfigurationError,
    InvalidProbabilityError,
    StrategyError,
    TooManyLocalRejects,
    ReplayStoreError,
    ReplayCorruptError,
    WorkerError,
)
from .probability import Probability, prob
from .outcome import Outcome, OutcomeKind, CaseError, CaseFailed, CaseRejected, assume
from .rng import Seed, SeededRng, new_seed, validate_seed

__all__ = [
    "ConfigurationError",
    "InvalidProbabilityError",
    "StrategyError",
    "TooManyLocalRejects",
    "ReplayStoreError",
    "ReplayCorruptError",
    "WorkerError",
    "Probability",
    "prob",
    "Outcome",
    "OutcomeKind",
    "CaseError",
    "CaseFailed",
    "CaseRejected",
    "assume",
    "Seed",
    "SeededRng",
    "new_seed",
    "validate_seed",
]
