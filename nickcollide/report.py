#!/usr/bin/env python3
"""
Reporting
=========
Log lines, a Rich summary table and a JSON document for experiment results.
"""

import json
import logging
from typing import Iterable, List

from rich.table import Table
from rich import box

from .corpus import WordCorpus
from .experiment import ExperimentResult

logger = logging.getLogger(__name__)


def describe_corpus(corpus: WordCorpus) -> str:
    """One-line bucket summary, e.g. ``ENV: WORD DB { [0]=0, [1]=0, [2]=4, ... }``."""
    sizes = ', '.join(f"[{length}]={size}" for length, size in enumerate(corpus.bucket_sizes()))
    return f"ENV: WORD DB {{ {sizes} }}"


def log_corpus(corpus: WordCorpus) -> None:
    logger.info(describe_corpus(corpus), extra={'bucket_sizes': corpus.bucket_sizes()})


def log_result(result: ExperimentResult) -> None:
    logger.info(
        f"[{result.label}] collision probability = {result.collision_percentage}% "
        f"({result.collision_count}/{result.total_trials})",
        extra={
            'label': result.label,
            'total_trials': result.total_trials,
            'collision_count': result.collision_count,
            'collision_percentage': result.collision_percentage,
        },
    )


def results_table(results: Iterable[ExperimentResult]) -> Table:
    table = Table(title="Nickname collisions", box=box.SIMPLE_HEAVY)
    table.add_column("Variant", style="bold", no_wrap=True)
    table.add_column("Population", justify="right")
    table.add_column("Trials", justify="right")
    table.add_column("Collisions", justify="right")
    table.add_column("Probability", justify="right", style="cyan")
    table.add_column("Time", justify="right", style="dim")

    for result in results:
        table.add_row(
            result.label,
            f"{result.population_size:,}",
            f"{result.total_trials:,}",
            f"{result.collision_count:,}",
            f"{result.collision_percentage:.6f}%",
            f"{result.elapsed_seconds:.1f}s",
        )
    return table


def results_to_json(corpus: WordCorpus, results: List[ExperimentResult]) -> str:
    return json.dumps({
        'corpus': {
            'bucket_sizes': list(corpus.bucket_sizes()),
            'total_words': corpus.total_words,
        },
        'experiments': [r.to_dict() for r in results],
    }, indent=2)


__all__ = [
    'describe_corpus',
    'log_corpus',
    'log_result',
    'results_table',
    'results_to_json',
]
