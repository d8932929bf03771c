#!/usr/bin/env python3
"""
nickcollide - Nickname Collision Simulator
==========================================

Estimates how often a randomly generated, word-based nickname collides
with an existing population of nicknames.

Quick Start
-----------
    from nickcollide import ExperimentConfig, load_path, run_all

    corpus = load_path()
    config = ExperimentConfig(population_size=100_000, num_tries=500_000)
    for result in run_all(corpus, config):
        print(result.label, result.collision_percentage)

Modules
-------
    nickcollide.corpus     - Length-bucketed word corpus and word sources
    nickcollide.sampler    - Characters, words, mangling and nicknames
    nickcollide.engines    - 32/64-bit random engines and nickname sources
    nickcollide.experiment - Population and trial phases
    nickcollide.driver     - Concurrent execution of all variants
    nickcollide.report     - Logging, Rich table and JSON output
    nickcollide.config     - Option objects backed by configs/app.yaml

CLI Usage
---------
    python -m nickcollide
    python -m nickcollide words.txt --population 100000 --trials 500000
"""

__version__ = "0.1.0"

from .errors import NickCollideError, CorpusLoadError, NoEligibleWordsError, ExperimentCancelled
from .config import SampleNicknameOptions, ExperimentConfig
from .corpus import (
    MAX_WORD_LEN,
    WordCorpus,
    FileWordSource,
    TextWordSource,
    load,
    load_path,
)
from .sampler import (
    sample_ascii_alnum,
    sample_ascii_lower,
    sample_word,
    mangle,
    sample_nickname,
)
from .engines import (
    EngineWidth,
    EngineLifecycle,
    Mt19937Engine,
    Pcg64Engine,
    create_engine,
    NicknameSource,
)
from .experiment import (
    ExperimentVariant,
    ExperimentResult,
    STANDARD_VARIANTS,
    run_experiment,
)
from .driver import run_all

__all__ = [
    '__version__',
    # Errors
    'NickCollideError',
    'CorpusLoadError',
    'NoEligibleWordsError',
    'ExperimentCancelled',
    # Config
    'SampleNicknameOptions',
    'ExperimentConfig',
    # Corpus
    'MAX_WORD_LEN',
    'WordCorpus',
    'FileWordSource',
    'TextWordSource',
    'load',
    'load_path',
    # Sampling
    'sample_ascii_alnum',
    'sample_ascii_lower',
    'sample_word',
    'mangle',
    'sample_nickname',
    # Engines
    'EngineWidth',
    'EngineLifecycle',
    'Mt19937Engine',
    'Pcg64Engine',
    'create_engine',
    'NicknameSource',
    # Experiments
    'ExperimentVariant',
    'ExperimentResult',
    'STANDARD_VARIANTS',
    'run_experiment',
    'run_all',
]
