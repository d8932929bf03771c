#!/usr/bin/env python3
"""
Nickname Sampler
================
Random characters, corpus words, word mangling and full nicknames.

Every function takes the random engine as its first argument. An engine is
anything with ``randint(a, b)`` (inclusive bounds) and ``shuffle(list)``;
see ``nickcollide.engines``. Given the same engine state the functions are
deterministic.

A nickname is built from pieces:
- word pieces: a corpus word, mangled, first letter capitalized
- one random tail piece when the remaining budget is shorter than a word

Usage:
    rng = Mt19937Engine(seed=7)
    nickname = sample_nickname(rng, corpus, SampleNicknameOptions())
"""

import logging
import math
import string
from typing import List

from .config import SampleNicknameOptions
from .corpus import WordCorpus
from .errors import NoEligibleWordsError

logger = logging.getLogger(__name__)

# Digits first, then upper, then lower: index 0..61
ASCII_ALNUM = string.digits + string.ascii_uppercase + string.ascii_lowercase
ASCII_LOWER = string.ascii_lowercase


# =============================================================================
# Characters
# =============================================================================

def sample_ascii_alnum(rng) -> str:
    """Uniform draw over the 62 symbols 0-9, A-Z, a-z."""
    return ASCII_ALNUM[rng.randint(0, len(ASCII_ALNUM) - 1)]


def sample_ascii_lower(rng) -> str:
    """Uniform draw over a-z."""
    return ASCII_LOWER[rng.randint(0, len(ASCII_LOWER) - 1)]


# =============================================================================
# Words
# =============================================================================

def sample_word(rng, corpus: WordCorpus, min_len: int, max_len: int) -> str:
    """
    Pick one word uniformly among all words with length in [min_len, max_len].

    Every eligible word has the same weight, so a well-populated length
    bucket is picked proportionally more often than a sparse one.

    Raises:
        NoEligibleWordsError: If no word falls in the range
    """
    num_candidates = corpus.words_in_range(min_len, max_len)
    if num_candidates == 0:
        msg = f"there are no words to sample (length {min_len}..{max_len})"
        logger.critical(msg)
        raise NoEligibleWordsError(msg)

    idx = rng.randint(0, num_candidates - 1)
    length = max(min_len, 0)
    while idx >= len(corpus.bucket(length)):
        idx -= len(corpus.bucket(length))
        length += 1
    return corpus.bucket(length)[idx]


def mangling_magnitude(length: int, mangling_factor: float) -> int:
    """How many characters ``mangle`` replaces in a word of ``length``."""
    # round half away from zero, never more than the word has
    return min(length, int(math.floor(length / mangling_factor + 0.5)))


def mangle(rng, word: str, mangling_factor: float) -> str:
    """
    Replace roughly ``len(word) / mangling_factor`` characters.

    Positions are drawn without replacement. Position 0 always becomes a
    lowercase letter so the piece can still be capitalized; other positions
    take any alphanumeric folded to lowercase.
    """
    chars = list(word)
    indices = list(range(len(chars)))
    for _ in range(mangling_magnitude(len(chars), mangling_factor)):
        pick = rng.randint(0, len(indices) - 1)
        indices[pick], indices[-1] = indices[-1], indices[pick]
        pos = indices.pop()
        if pos == 0:
            chars[pos] = sample_ascii_lower(rng)
        else:
            chars[pos] = sample_ascii_alnum(rng).lower()
    return ''.join(chars)


def sample_and_mangle_word(rng, corpus: WordCorpus, min_len: int, max_len: int,
                           mangling_factor: float) -> str:
    return mangle(rng, sample_word(rng, corpus, min_len, max_len), mangling_factor)


# =============================================================================
# Nicknames
# =============================================================================

def _random_piece(rng, length: int) -> str:
    chars = [sample_ascii_lower(rng)]
    chars.extend(sample_ascii_alnum(rng) for _ in range(length - 1))
    return ''.join(chars)


def sample_pieces(rng, corpus: WordCorpus, opt: SampleNicknameOptions) -> List[str]:
    """Pieces of one nickname in generation order (before shuffling)."""
    pieces = []
    budget = rng.randint(opt.min_len, opt.max_len)
    while budget > 0:
        if budget < opt.min_word_len:
            pieces.append(_random_piece(rng, budget))
            budget = 0
        else:
            piece = sample_and_mangle_word(
                rng, corpus, opt.min_word_len, min(opt.max_word_len, budget), opt.mangling_factor
            )
            budget -= len(piece)
            pieces.append(piece[0].upper() + piece[1:])
    return pieces


def sample_nickname(rng, corpus: WordCorpus, opt: SampleNicknameOptions) -> str:
    """Generate one nickname with length in [opt.min_len, opt.max_len]."""
    pieces = sample_pieces(rng, corpus, opt)
    rng.shuffle(pieces)
    return ''.join(pieces)


__all__ = [
    'ASCII_ALNUM',
    'ASCII_LOWER',
    'sample_ascii_alnum',
    'sample_ascii_lower',
    'sample_word',
    'mangling_magnitude',
    'mangle',
    'sample_and_mangle_word',
    'sample_pieces',
    'sample_nickname',
]
