"""
Seeded random number generation.

All randomness in map generation flows through RandomNumberGenerator so that
the same seed always yields the same map. Python's random and NumPy's random
must not be used by the generation pipeline.
"""

import math
import uuid
from typing import Optional, Sequence, TypeVar

from ..core.alea_prng import AleaPRNG

T = TypeVar("T")


def new_seed() -> str:
    """Draw a fresh seed string for unseeded generation."""
    return uuid.uuid4().hex[:12]


class RandomNumberGenerator:
    """
    Deterministic random source keyed by a string seed.

    When no seed is given a fresh one is drawn and kept on ``seed`` so the
    resulting stream can be replayed later.
    """

    def __init__(self, seed: Optional[str] = None):
        self.seed = seed if seed is not None else new_seed()
        self._prng = AleaPRNG(self.seed)

    @property
    def draws(self) -> int:
        return self._prng.draws

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        """
        Return a float in [min(low, high), max(low, high)).

        Args:
            low: One end of the range
            high: Other end of the range

        Returns:
            Uniformly distributed float
        """
        lower = min(low, high)
        upper = max(low, high)
        return self._prng.random() * (upper - lower) + lower

    def integer(self, low: int, high: int) -> int:
        """
        Return an integer in the inclusive range [low, high].

        The range is widened by half a unit on each side before rounding so
        the endpoints are as likely as any interior value.
        """
        lower = min(low, high)
        upper = max(low, high)
        return int(math.floor(self.uniform(lower - 0.5, upper + 0.5) + 0.5))

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self.integer(0, len(seq) - 1)]

    def fork(self, suffix: str) -> "RandomNumberGenerator":
        """Derive an independent generator for a single purpose."""
        return RandomNumberGenerator(f"{self.seed}-{suffix}")
