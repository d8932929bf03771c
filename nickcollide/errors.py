#!/usr/bin/env python3
"""Exceptions raised by nickcollide. All of them are terminal for a run."""


class NickCollideError(Exception):
    """Base class for simulator errors."""


class CorpusLoadError(NickCollideError, OSError):
    """The word source could not be opened or read."""


class NoEligibleWordsError(NickCollideError, ValueError):
    """No corpus word has a length inside the requested range."""


class ExperimentCancelled(NickCollideError):
    """A worker was told to stop before its experiment finished."""


__all__ = [
    'NickCollideError',
    'CorpusLoadError',
    'NoEligibleWordsError',
    'ExperimentCancelled',
]
