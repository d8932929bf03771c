#!/usr/bin/env python3
"""
Experiment Driver
=================
Runs the collision experiments side by side, one worker per variant.

Workers share nothing but the read-only corpus. The driver blocks until
every worker has finished and returns results in variant order. The first
worker exception, or a KeyboardInterrupt in the caller, stops the remaining
thread workers and is re-raised without waiting for them.

Usage:
    from nickcollide.driver import run_all

    results = run_all(corpus, ExperimentConfig.from_settings())
    for result in results:
        print(result.label, result.collision_percentage)
"""

import logging
import threading
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import List, Optional, Sequence

from .config import ExperimentConfig
from .corpus import WordCorpus
from .experiment import STANDARD_VARIANTS, ExperimentResult, ExperimentVariant, run_experiment
from .settings import get_setting

logger = logging.getLogger(__name__)

EXECUTORS = {
    'thread': ThreadPoolExecutor,
    'process': ProcessPoolExecutor,
}


def resolve_executor(executor: Optional[str] = None) -> str:
    if executor is None:
        executor = get_setting("driver.executor")
    if executor is None:
        raise ValueError("driver.executor must be set in app.yaml")
    if executor not in EXECUTORS:
        raise ValueError(f"Unknown executor '{executor}'. Available: {', '.join(sorted(EXECUTORS))}")
    return executor


def run_all(corpus: WordCorpus,
            config: ExperimentConfig,
            variants: Sequence[ExperimentVariant] = STANDARD_VARIANTS,
            executor: Optional[str] = None) -> List[ExperimentResult]:
    """
    Run every variant concurrently and wait for all of them.

    Args:
        corpus: Shared word corpus (never mutated)
        config: Experiment sizes and nickname options
        variants: Variants to run, one worker each
        executor: 'thread' or 'process'; defaults to driver.executor

    Returns:
        One ExperimentResult per variant, in the order given
    """
    if not variants:
        return []
    executor = resolve_executor(executor)
    pool_type = EXECUTORS[executor]

    logger.info(
        f"Starting {len(variants)} experiments on {executor} workers "
        f"(population={config.population_size:,}, tries={config.num_tries:,})"
    )

    # Events cannot cross process boundaries; process workers get SIGINT themselves
    stop = threading.Event() if executor == 'thread' else None
    pool = pool_type(max_workers=len(variants))
    try:
        futures = [
            pool.submit(run_experiment, corpus, variant, config, stop)
            for variant in variants
        ]
        # .result() blocks in submission order; errors propagate to the caller
        results = [future.result() for future in futures]
    except BaseException:
        if stop is not None:
            stop.set()
        pool.shutdown(wait=False, cancel_futures=True)
        raise
    pool.shutdown()
    return results


__all__ = [
    'EXECUTORS',
    'resolve_executor',
    'run_all',
]
