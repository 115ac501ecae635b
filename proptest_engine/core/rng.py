"""
Seeded random source for value generation.

A seed is four unsigned 32-bit words. The same seed always produces the
same sequence of draws, in this process or any other, which is what lets a
supervising process reproduce a worker's run from its replay file.
"""

import random
from typing import Sequence, Tuple

from .errors import ConfigurationError

Seed = Tuple[int, int, int, int]

WORD_MAX = 0xFFFFFFFF

_entropy = random.SystemRandom()


def validate_seed(words: Sequence[int]) -> Seed:
    """
    Check that words form a valid seed and return it as a tuple.

    Raises:
        ConfigurationError: If there are not exactly four words in [0, 2**32)
    """
    seed = tuple(words)
    if len(seed) != 4:
        raise ConfigurationError(f"seed must have 4 words, got {len(seed)}")
    for w in seed:
        if isinstance(w, bool) or not isinstance(w, int) or not (0 <= w <= WORD_MAX):
            raise ConfigurationError(f"seed word out of range: {w!r}")
    return seed  # type: ignore[return-value]


def new_seed() -> Seed:
    """Draw a fresh seed from the OS entropy source."""
    return tuple(_entropy.getrandbits(32) for _ in range(4))  # type: ignore[return-value]


class SeededRng:
    """
    Deterministic random source built from a four-word seed.

    Usage:
        rng = SeededRng((1, 2, 3, 4))
        rng.randrange(0, 10)
    """

    def __init__(self, seed: Sequence[int]) -> None:
        self.seed = validate_seed(seed)
        packed = 0
        for w in self.seed:
            packed = (packed << 32) | w
        self._random = random.Random(packed)

    def randrange(self, start: int, stop: int) -> int:
        """Uniform integer in [start, stop)."""
        return self._random.randrange(start, stop)

    def random(self) -> float:
        """Uniform float in [0.0, 1.0)."""
        return self._random.random()

    def gen_seed(self) -> Seed:
        """Draw four words suitable for seeding another generator."""
        return tuple(self._random.getrandbits(32) for _ in range(4))  # type: ignore[return-value]

    def fork(self) -> "SeededRng":
        """
        Derive an independent generator.

        Advances this generator by exactly one seed draw.
        """
        return SeededRng(self.gen_seed())
