#!/usr/bin/env python3
"""
Configuration
=============
Immutable option objects for nickname sampling and collision experiments.

Unspecified values are filled from ``configs/app.yaml``:

    opts = SampleNicknameOptions.from_settings()
    cfg = ExperimentConfig.from_settings(num_tries=1000)
"""

from dataclasses import dataclass, field, fields
from typing import Optional

from .corpus import MAX_WORD_LEN
from .settings import get_setting


def _require(section: str, values: dict) -> dict:
    missing = [name for name, value in values.items() if value is None]
    if missing:
        keys = ', '.join(f"{section}.{name}" for name in missing)
        raise ValueError(f"{keys} must be set in app.yaml")
    return values


# =============================================================================
# Nickname Options
# =============================================================================

@dataclass(frozen=True)
class SampleNicknameOptions:
    """Bounds for total nickname length and per-piece word length."""
    min_len: int = 8
    max_len: int = 8
    min_word_len: int = 3
    max_word_len: int = 8
    mangling_factor: float = 2.7

    def __post_init__(self):
        if not 1 <= self.min_len <= self.max_len:
            raise ValueError(
                f"nickname length bounds must satisfy 1 <= min_len <= max_len "
                f"(got {self.min_len}, {self.max_len})"
            )
        if not 1 <= self.min_word_len <= self.max_word_len <= MAX_WORD_LEN:
            raise ValueError(
                f"word length bounds must satisfy 1 <= min_word_len <= max_word_len <= {MAX_WORD_LEN} "
                f"(got {self.min_word_len}, {self.max_word_len})"
            )
        if self.mangling_factor <= 0:
            raise ValueError(f"mangling_factor must be positive (got {self.mangling_factor})")

    @classmethod
    def from_settings(cls, **overrides) -> 'SampleNicknameOptions':
        cfg = get_setting("nickname", {}) or {}
        values = {f.name: cfg.get(f.name) for f in fields(cls)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**_require("nickname", values))


# =============================================================================
# Experiment Configuration
# =============================================================================

@dataclass(frozen=True)
class ExperimentConfig:
    """Sizes for one collision experiment. Passed explicitly to every worker."""
    population_size: int = 10_000_000
    num_tries: int = 50_000_000
    progress_interval: int = 1_000_000
    nickname: SampleNicknameOptions = field(default_factory=SampleNicknameOptions)

    def __post_init__(self):
        if self.population_size < 0:
            raise ValueError(f"population_size must be >= 0 (got {self.population_size})")
        if self.num_tries < 0:
            raise ValueError(f"num_tries must be >= 0 (got {self.num_tries})")
        if self.progress_interval < 0:
            raise ValueError(f"progress_interval must be >= 0 (got {self.progress_interval})")

    @classmethod
    def from_settings(cls,
                      population_size: Optional[int] = None,
                      num_tries: Optional[int] = None,
                      progress_interval: Optional[int] = None,
                      nickname: Optional[SampleNicknameOptions] = None) -> 'ExperimentConfig':
        """Build a config from app.yaml, letting explicit arguments win."""
        cfg = get_setting("experiment", {}) or {}
        if population_size is None:
            population_size = cfg.get("population_size")
        if num_tries is None:
            num_tries = cfg.get("num_tries")
        if progress_interval is None:
            progress_interval = cfg.get("progress_interval")
        values = _require("experiment", {
            "population_size": population_size,
            "num_tries": num_tries,
            "progress_interval": progress_interval,
        })
        return cls(
            nickname=nickname or SampleNicknameOptions.from_settings(),
            **{k: int(v) for k, v in values.items()},
        )


__all__ = [
    'SampleNicknameOptions',
    'ExperimentConfig',
]
