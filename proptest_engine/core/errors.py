"""
Exception types for the property testing engine.
"""


class ConfigurationError(ValueError):
    """Raised when a strategy or runner is configured with invalid values."""
    pass


class InvalidProbabilityError(ConfigurationError):
    """Raised when a probability lies outside [0.0, 1.0]."""
    pass


class StrategyError(Exception):
    """Raised when a strategy cannot produce a value tree."""
    pass


class TooManyLocalRejects(StrategyError):
    """Raised when a filtered strategy exhausts the local reject budget."""

    def __init__(self, whence: str) -> None:
        super().__init__(f"too many local rejects: {whence}")
        self.whence = whence


class ReplayStoreError(Exception):
    """Raised when the replay file cannot be opened, read or written."""
    pass


class ReplayCorruptError(Exception):
    """Raised when a replay file owned by a supervisor cannot be parsed."""
    pass


class WorkerError(Exception):
    """Raised when fork-mode workers keep crashing past the restart budget."""
    pass
