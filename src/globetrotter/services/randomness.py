"""Shared source of uniform randomness."""

import random
import threading
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TypeVar

T = TypeVar("T")


@dataclass
class SharedRandom:
    """Lock-guarded random generator shared by option and clue selection."""

    rng: random.Random
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @classmethod
    def create(cls, seed: int | None = None) -> "SharedRandom":
        """Create a generator, deterministic when a seed is given."""
        return cls(rng=random.Random(seed))

    def choice(self, items: Sequence[T]) -> T:
        """Return one item drawn uniformly from a non-empty sequence."""
        with self._lock:
            return self.rng.choice(items)

    def shuffled(self, items: Sequence[T]) -> list[T]:
        """Return a uniformly permuted copy of the items."""
        result = list(items)
        with self._lock:
            self.rng.shuffle(result)
        return result
