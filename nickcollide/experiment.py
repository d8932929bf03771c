#!/usr/bin/env python3
"""
Collision Experiment
====================
Monte-Carlo estimate of how often a fresh nickname hits an existing one.

One algorithm covers all four variants; they differ only in the
``NicknameSource`` (engine width and lifecycle) handed to it:

1. Population: draw until the set holds ``population_size`` distinct names.
2. Trials: draw ``num_tries`` more names and count set hits without inserting.

The population phase never terminates if the nickname space holds fewer
than ``population_size`` distinct names.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional, Set

from .config import ExperimentConfig
from .corpus import WordCorpus
from .engines import EngineLifecycle, EngineWidth, NicknameSource
from .errors import ExperimentCancelled

logger = logging.getLogger(__name__)


# =============================================================================
# Variants & Results
# =============================================================================

@dataclass(frozen=True)
class ExperimentVariant:
    """Engine width plus lifecycle, with the label used in reports."""
    label: str
    width: EngineWidth
    lifecycle: EngineLifecycle

    def source(self, corpus: WordCorpus, config: ExperimentConfig) -> NicknameSource:
        return NicknameSource(corpus, config.nickname, self.width, self.lifecycle)


REUSE_32 = ExperimentVariant("REUSE/32BIT", EngineWidth.BITS_32, EngineLifecycle.REUSE)
REUSE_64 = ExperimentVariant("REUSE/64BIT", EngineWidth.BITS_64, EngineLifecycle.REUSE)
RECREATE_32 = ExperimentVariant("RECREATE/32BIT", EngineWidth.BITS_32, EngineLifecycle.RECREATE)
RECREATE_64 = ExperimentVariant("RECREATE/64BIT", EngineWidth.BITS_64, EngineLifecycle.RECREATE)

STANDARD_VARIANTS = (REUSE_32, REUSE_64, RECREATE_32, RECREATE_64)
VARIANTS_BY_LABEL = {v.label: v for v in STANDARD_VARIANTS}


@dataclass(frozen=True)
class ExperimentResult:
    """Outcome of one experiment worker."""
    label: str
    total_trials: int
    collision_count: int
    population_size: int = 0
    elapsed_seconds: float = 0.0

    @property
    def collision_percentage(self) -> float:
        if not self.total_trials:
            return 0.0
        return 100.0 * self.collision_count / self.total_trials

    def to_dict(self) -> dict:
        return {
            'label': self.label,
            'total_trials': self.total_trials,
            'collision_count': self.collision_count,
            'collision_percentage': self.collision_percentage,
            'population_size': self.population_size,
            'elapsed_seconds': self.elapsed_seconds,
        }


# =============================================================================
# Phases
# =============================================================================

def _progress(label: str, phase: str, done: int, total: int, interval: int):
    if interval and done % interval == 0:
        logger.debug(f"[{label}] {phase}: {done:,}/{total:,}")


def _check_stop(stop: Optional[threading.Event], label: str, phase: str):
    if stop is not None and stop.is_set():
        raise ExperimentCancelled(f"[{label}] cancelled during {phase}")


def populate(source: NicknameSource, population_size: int,
             label: str = "", progress_interval: int = 0,
             stop: Optional[threading.Event] = None) -> Set[str]:
    """
    Draw nicknames until ``population_size`` distinct ones are held.

    Raises:
        ExperimentCancelled: If ``stop`` is set before the set is full
    """
    nicknames = set()
    while len(nicknames) < population_size:
        _check_stop(stop, label, "population")
        nickname = source.next_nickname()
        if nickname in nicknames:
            continue
        nicknames.add(nickname)
        _progress(label, "population", len(nicknames), population_size, progress_interval)
    return nicknames


def count_collisions(source: NicknameSource, nicknames: Set[str], num_tries: int,
                     label: str = "", progress_interval: int = 0,
                     stop: Optional[threading.Event] = None) -> int:
    """Draw ``num_tries`` nicknames and count how many are already in ``nicknames``."""
    collisions = 0
    for i in range(1, num_tries + 1):
        _check_stop(stop, label, "trials")
        if source.next_nickname() in nicknames:
            collisions += 1
        _progress(label, "trials", i, num_tries, progress_interval)
    return collisions


def run_experiment(corpus: WordCorpus,
                   variant: ExperimentVariant,
                   config: ExperimentConfig,
                   stop: Optional[threading.Event] = None) -> ExperimentResult:
    """
    Run both phases for one variant and report the collision count.

    ``stop`` is polled once per draw; setting it makes the worker raise
    ExperimentCancelled instead of finishing.
    """
    started = time.perf_counter()
    source = variant.source(corpus, config)

    nicknames = populate(source, config.population_size, variant.label,
                         config.progress_interval, stop)
    logger.info(f"[{variant.label}] populated {len(nicknames):,} nicknames")

    collisions = count_collisions(
        source, nicknames, config.num_tries, variant.label, config.progress_interval, stop
    )

    return ExperimentResult(
        label=variant.label,
        total_trials=config.num_tries,
        collision_count=collisions,
        population_size=len(nicknames),
        elapsed_seconds=time.perf_counter() - started,
    )


__all__ = [
    'ExperimentVariant',
    'ExperimentResult',
    'REUSE_32',
    'REUSE_64',
    'RECREATE_32',
    'RECREATE_64',
    'STANDARD_VARIANTS',
    'VARIANTS_BY_LABEL',
    'populate',
    'count_collisions',
    'run_experiment',
]
