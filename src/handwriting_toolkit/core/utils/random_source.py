"""
Module: core.utils.random_source

Purpose:
    Pluggable sources of uniform random numbers in [0, 1). Every stochastic
    step (glyph jitter, paper grain, line wobble, correction injection) draws
    from a RandomSource injected by the caller, so the same code path gives
    "hot" randomness in production and reproducible output in tests.

Key Classes:
    - RandomSource: Protocol with next() -> float
    - HotRandom: Unseeded, differs on every run (default)
    - SeededRandom: Reproducible stream from a seed
    - PooledRandom: Cycles through a pre-generated pool of values
    - ConstantRandom: Always returns the same value

Key Functions:
    - symmetric(): Draw from [-half_range, half_range)
    - spawn_source(): Derive an independent source for a page
    - numpy_generator(): Seed a numpy Generator from a source

Dependencies:
    - numpy: Bulk noise generation

Used By:
    - writer.paper, writer.layout, writer.exam
    - builder.controller, builder.ink
"""

from __future__ import annotations

import random
from typing import Optional, Protocol, Union, runtime_checkable

import numpy as np

Seed = Union[int, str]

DEFAULT_POOL_SIZE = 8000


@runtime_checkable
class RandomSource(Protocol):
    """Source of uniform floats in [0, 1)."""

    def next(self) -> float:
        ...


class HotRandom:
    """Unseeded random source; re-rendering the same input differs every time."""

    def __init__(self) -> None:
        self._rng = random.Random()

    def next(self) -> float:
        return self._rng.random()

    def spawn(self, index: int) -> HotRandom:
        return HotRandom()


class SeededRandom:
    """
    Reproducible random source.

    Example:
        >>> a, b = SeededRandom(7), SeededRandom(7)
        >>> a.next() == b.next()
        True
    """

    def __init__(self, seed: Seed = 42) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def next(self) -> float:
        return self._rng.random()

    def spawn(self, index: int) -> SeededRandom:
        """Derive an independent, reproducible stream for a child (e.g. a page)."""
        return SeededRandom(f"{self.seed}:{index}")


class PooledRandom:
    """
    Cycles through a fixed pool of pre-generated values.

    After reset() the same sequence is replayed, which keeps messiness
    stable across re-renders of the same content.
    """

    def __init__(self, size: int = DEFAULT_POOL_SIZE, seed: Optional[Seed] = None) -> None:
        if size <= 0:
            raise ValueError(f"size must be positive: {size}")
        self.seed = seed
        rng = random.Random(seed)
        self._pool = [rng.random() for _ in range(size)]
        self._index = 0

    def next(self) -> float:
        if self._index >= len(self._pool):
            self._index = 0
        value = self._pool[self._index]
        self._index += 1
        return value

    def reset(self) -> None:
        """Replay the pool from the start."""
        self._index = 0

    def spawn(self, index: int) -> PooledRandom:
        seed = None if self.seed is None else f"{self.seed}:{index}"
        return PooledRandom(len(self._pool), seed)


class ConstantRandom:
    """
    Always returns the same value.

    With the default 0.5 every symmetric draw is exactly zero, which turns
    all jitter off while keeping the code path identical.
    """

    def __init__(self, value: float = 0.5) -> None:
        if not 0.0 <= value < 1.0:
            raise ValueError(f"value must be within [0, 1): {value}")
        self.value = value

    def next(self) -> float:
        return self.value

    def spawn(self, index: int) -> ConstantRandom:
        return ConstantRandom(self.value)


def symmetric(source: RandomSource, half_range: float) -> float:
    """Draw uniformly from [-half_range, half_range)."""
    return (source.next() - 0.5) * 2.0 * half_range


def spawn_source(source: RandomSource, index: int) -> RandomSource:
    """
    Derive an independent source for child work such as one page.

    Sources without a spawn() method are shared as-is.
    """
    spawn = getattr(source, "spawn", None)
    if spawn is None:
        return source
    return spawn(index)


def numpy_generator(source: RandomSource) -> np.random.Generator:
    """Create a numpy Generator seeded from the source (one draw)."""
    return np.random.default_rng(int(source.next() * 2**32))
