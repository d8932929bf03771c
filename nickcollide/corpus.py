#!/usr/bin/env python3
"""
Word Corpus
===========
Length-bucketed word storage used as nickname-building material.

The word list format is one delimited entry per line, e.g. ``"mangrove"``.
Exactly one leading and one trailing delimiter character are stripped and
the word lands in the bucket matching its length (0..MAX_WORD_LEN).

Usage:
    from nickcollide.corpus import load_path

    corpus = load_path("words.txt")
    corpus.bucket_sizes()   # (0, 0, 0, 812, 2301, ...)
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence, Tuple, Union

from .errors import CorpusLoadError
from .settings import get_setting, resolve_path

logger = logging.getLogger(__name__)

MAX_WORD_LEN = 12
DEFAULT_WORDLIST = "data/wordlist.txt"


# =============================================================================
# Word Sources
# =============================================================================

class FileWordSource:
    """Reads lines from a text file on disk."""

    def __init__(self, path: Union[str, Path], encoding: str = 'utf-8'):
        self.path = Path(path)
        self.encoding = encoding

    def lines(self) -> Iterator[str]:
        try:
            with open(self.path, 'r', encoding=self.encoding) as f:
                yield from f
        except OSError as e:
            raise CorpusLoadError(f"failed to open word list file: {self.path}") from e
        except UnicodeDecodeError as e:
            raise CorpusLoadError(f"word list file is not valid {self.encoding}: {self.path} ({e.reason})") from e

    def __repr__(self) -> str:
        return f"FileWordSource({str(self.path)!r})"


class TextWordSource:
    """Serves lines from an in-memory string or iterable of strings."""

    def __init__(self, text: Union[str, Iterable[str]]):
        if isinstance(text, str):
            self._lines = text.splitlines(keepends=True)
        else:
            self._lines = list(text)

    def lines(self) -> Iterator[str]:
        return iter(self._lines)


def default_wordlist_path() -> Path:
    """Packaged word list, or ``corpus.wordlist_path`` from app.yaml."""
    return resolve_path(get_setting("corpus.wordlist_path", DEFAULT_WORDLIST))


# =============================================================================
# Corpus
# =============================================================================

@dataclass(frozen=True)
class WordCorpus:
    """
    Immutable words grouped by length.

    ``buckets[n]`` holds every word of length ``n``. Safe to share across
    threads since nothing mutates it after construction.
    """
    buckets: Tuple[Tuple[str, ...], ...]

    def __post_init__(self):
        if len(self.buckets) != MAX_WORD_LEN + 1:
            raise ValueError(f"expected {MAX_WORD_LEN + 1} buckets, got {len(self.buckets)}")
        for length, bucket in enumerate(self.buckets):
            for word in bucket:
                if len(word) != length:
                    raise ValueError(f"word {word!r} does not belong in bucket {length}")

    @classmethod
    def from_words(cls, words: Iterable[str]) -> 'WordCorpus':
        """Bucket plain (undelimited) words, dropping over-long ones."""
        buckets = [[] for _ in range(MAX_WORD_LEN + 1)]
        for word in words:
            if len(word) <= MAX_WORD_LEN:
                buckets[len(word)].append(word)
        return cls(tuple(tuple(b) for b in buckets))

    def bucket(self, length: int) -> Sequence[str]:
        if 0 <= length <= MAX_WORD_LEN:
            return self.buckets[length]
        return ()

    def bucket_sizes(self) -> Tuple[int, ...]:
        return tuple(len(b) for b in self.buckets)

    @property
    def total_words(self) -> int:
        return sum(self.bucket_sizes())

    def words_in_range(self, min_len: int, max_len: int) -> int:
        """Number of words whose length lies in [min_len, max_len]."""
        lo = max(min_len, 0)
        hi = min(max_len, MAX_WORD_LEN)
        return sum(len(self.buckets[n]) for n in range(lo, hi + 1))


def _strip_entry(line: str) -> Optional[str]:
    """Remove the line terminator and one delimiter from each end."""
    entry = line.rstrip('\r\n')
    if len(entry) < 2:
        return None
    return entry[1:-1]


def load(source) -> WordCorpus:
    """
    Build a corpus from any object exposing ``lines()``.

    Entries shorter than two characters, or longer than MAX_WORD_LEN once
    stripped, are skipped.

    Raises:
        CorpusLoadError: If the source cannot be read
    """
    buckets = [[] for _ in range(MAX_WORD_LEN + 1)]
    skipped = 0
    for line in source.lines():
        word = _strip_entry(line)
        if word is None or len(word) > MAX_WORD_LEN:
            skipped += 1
            continue
        buckets[len(word)].append(word)

    corpus = WordCorpus(tuple(tuple(b) for b in buckets))
    logger.debug(f"Loaded {corpus.total_words} words ({skipped} entries skipped)")
    return corpus


def load_path(path: Union[str, Path, None] = None) -> WordCorpus:
    """Load a word list file, defaulting to the packaged list."""
    if path is None:
        path = default_wordlist_path()
    return load(FileWordSource(path))


__all__ = [
    'MAX_WORD_LEN',
    'FileWordSource',
    'TextWordSource',
    'WordCorpus',
    'default_wordlist_path',
    'load',
    'load_path',
]
