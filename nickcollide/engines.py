#!/usr/bin/env python3
"""
Random Engines
==============
Pseudo-random engines of two output widths, seeded from OS entropy.

- 32 bit: Mersenne Twister (MT19937) via ``random.Random``
- 64 bit: PCG64 via ``numpy.random.Generator``

Both expose the small interface the sampler needs: ``randint(a, b)`` with
inclusive bounds and in-place ``shuffle(list)``.

``NicknameSource`` wraps an engine policy for the collision experiments:
either one engine reused for every draw, or a freshly seeded engine for each
nickname.
"""

import random
import secrets
from enum import Enum
from typing import Callable, Optional

import numpy as np

from .config import SampleNicknameOptions
from .corpus import WordCorpus
from .sampler import sample_nickname


class EngineWidth(Enum):
    """Output word size of the pseudo-random engine."""
    BITS_32 = 32
    BITS_64 = 64


class EngineLifecycle(Enum):
    """Whether an engine outlives a single nickname draw."""
    REUSE = "reuse"
    RECREATE = "recreate"


_RAW_RANGE = 1 << 64


def entropy_seed(bits: int) -> int:
    """Seed material straight from the OS entropy pool."""
    return secrets.randbits(bits)


# =============================================================================
# Engines
# =============================================================================

class Mt19937Engine(random.Random):
    """
    32-bit Mersenne Twister.

    Seeded with a single 32-bit value, so there are at most 2**32 distinct
    streams regardless of the generator's much larger state.
    """

    width = EngineWidth.BITS_32

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = entropy_seed(32)
        self.initial_seed = seed
        super().__init__(seed)


class Pcg64Engine:
    """
    64-bit PCG engine backed by numpy, seeded with a 64-bit value.

    Raw 64-bit outputs are pulled from the bit generator in blocks and
    reduced to a range by rejection, which keeps per-draw cost close to the
    32-bit engine instead of paying for one numpy call per character.
    """

    width = EngineWidth.BITS_64
    block_size = 4096

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = entropy_seed(64)
        self.initial_seed = seed
        self._gen = np.random.Generator(np.random.PCG64(seed))
        self._raw = []

    def _next_raw(self) -> int:
        if not self._raw:
            block = self._gen.bit_generator.random_raw(self.block_size).tolist()
            block.reverse()
            self._raw = block
        return self._raw.pop()

    def randint(self, a: int, b: int) -> int:
        """Return random integer N such that a <= N <= b."""
        span = b - a + 1
        if span <= 0:
            raise ValueError(f"empty range for randint({a}, {b})")
        # largest multiple of span below 2**64; anything above it is redrawn
        limit = _RAW_RANGE - _RAW_RANGE % span
        raw = self._next_raw()
        while raw >= limit:
            raw = self._next_raw()
        return a + raw % span

    def shuffle(self, seq: list) -> None:
        """Shuffle list in place."""
        self._gen.shuffle(seq)


ENGINE_TYPES = {
    EngineWidth.BITS_32: Mt19937Engine,
    EngineWidth.BITS_64: Pcg64Engine,
}


def create_engine(width: EngineWidth, seed: Optional[int] = None):
    """Create an engine of the given width; ``seed=None`` draws fresh entropy."""
    try:
        engine_type = ENGINE_TYPES[width]
    except KeyError:
        raise ValueError(f"Unknown engine width: {width}") from None
    return engine_type(seed)


# =============================================================================
# Nickname Source
# =============================================================================

class NicknameSource:
    """
    Produces nicknames under one engine width and lifecycle.

    With ``REUSE`` one engine is created up front and advanced by every
    draw. With ``RECREATE`` each ``next_nickname()`` call builds a new
    engine; passing ``seed`` then makes every draw identical, which is only
    useful in tests.

    Usage:
        source = NicknameSource(corpus, opts, EngineWidth.BITS_64, EngineLifecycle.REUSE)
        name = source.next_nickname()
    """

    def __init__(self,
                 corpus: WordCorpus,
                 options: SampleNicknameOptions,
                 width: EngineWidth,
                 lifecycle: EngineLifecycle,
                 seed: Optional[int] = None,
                 engine_factory: Callable = create_engine):
        self.corpus = corpus
        self.options = options
        self.width = width
        self.lifecycle = lifecycle
        self.seed = seed
        self._engine_factory = engine_factory
        self.engines_created = 0
        self._engine = None
        if lifecycle is EngineLifecycle.REUSE:
            self._engine = self._new_engine()

    def _new_engine(self):
        self.engines_created += 1
        return self._engine_factory(self.width, self.seed)

    def next_nickname(self) -> str:
        if self.lifecycle is EngineLifecycle.RECREATE:
            engine = self._new_engine()
        else:
            engine = self._engine
        return sample_nickname(engine, self.corpus, self.options)


__all__ = [
    'EngineWidth',
    'EngineLifecycle',
    'entropy_seed',
    'Mt19937Engine',
    'Pcg64Engine',
    'create_engine',
    'NicknameSource',
]
