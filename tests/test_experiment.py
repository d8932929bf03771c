"""
Tests for Collision Experiments
===============================
Population and trial phases, results and the four variants.
"""

import pytest
import sys
import threading
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nickcollide.config import ExperimentConfig, SampleNicknameOptions
from nickcollide.corpus import WordCorpus, load_path
from nickcollide.engines import EngineLifecycle, EngineWidth, NicknameSource
from nickcollide.errors import ExperimentCancelled, NoEligibleWordsError
from nickcollide.experiment import (
    RECREATE_32,
    REUSE_32,
    REUSE_64,
    STANDARD_VARIANTS,
    VARIANTS_BY_LABEL,
    ExperimentResult,
    count_collisions,
    populate,
    run_experiment,
)


@pytest.fixture(scope="module")
def corpus():
    return load_path()


class StubSource:
    """Replays a fixed list of nicknames."""

    def __init__(self, names):
        self._names = iter(names)
        self.draws = 0

    def next_nickname(self):
        self.draws += 1
        return next(self._names)


class TestVariants:
    """Tests for the standard variant set."""

    def test_four_variants(self):
        """Test all width/lifecycle combinations are present once."""
        combos = {(v.width, v.lifecycle) for v in STANDARD_VARIANTS}
        assert len(STANDARD_VARIANTS) == 4
        assert combos == {(w, l) for w in EngineWidth for l in EngineLifecycle}

    def test_report_order(self):
        """Test labels come out in report order."""
        assert [v.label for v in STANDARD_VARIANTS] == [
            "REUSE/32BIT", "REUSE/64BIT", "RECREATE/32BIT", "RECREATE/64BIT",
        ]

    def test_lookup_by_label(self):
        """Test variants can be looked up by label."""
        assert VARIANTS_BY_LABEL["RECREATE/32BIT"] is RECREATE_32

    def test_variant_source(self, corpus):
        """Test a variant builds a matching nickname source."""
        source = REUSE_64.source(corpus, ExperimentConfig(population_size=0, num_tries=0))
        assert isinstance(source, NicknameSource)
        assert source.width is EngineWidth.BITS_64
        assert source.lifecycle is EngineLifecycle.REUSE


class TestExperimentResult:
    """Tests for ExperimentResult."""

    def test_percentage(self):
        """Test collision percentage is 100 * hits / trials."""
        result = ExperimentResult("X", total_trials=200, collision_count=3)
        assert result.collision_percentage == pytest.approx(1.5)

    def test_zero_trials(self):
        """Test zero trials give a zero percentage instead of dividing by zero."""
        assert ExperimentResult("X", total_trials=0, collision_count=0).collision_percentage == 0.0

    def test_to_dict(self):
        """Test the dict form carries every reported field."""
        data = ExperimentResult("X", 10, 1, population_size=5).to_dict()
        assert data["label"] == "X"
        assert data["total_trials"] == 10
        assert data["collision_count"] == 1
        assert data["collision_percentage"] == pytest.approx(10.0)
        assert data["population_size"] == 5

    def test_frozen(self):
        """Test results are immutable."""
        result = ExperimentResult("X", 10, 1)
        with pytest.raises(AttributeError):
            result.collision_count = 2


class TestPhases:
    """Tests for populate and count_collisions."""

    def test_populate_counts_distinct_only(self):
        """Test duplicates do not count toward the population target."""
        source = StubSource(["a", "a", "b", "a", "c", "d"])
        names = populate(source, 3)
        assert names == {"a", "b", "c"}
        assert source.draws == 5

    def test_populate_zero(self):
        """Test a zero target draws nothing."""
        source = StubSource([])
        assert populate(source, 0) == set()
        assert source.draws == 0

    def test_count_collisions(self):
        """Test hits are counted without inserting new names."""
        names = {"a", "b"}
        source = StubSource(["a", "x", "x", "b", "a"])
        assert count_collisions(source, names, 5) == 3
        assert names == {"a", "b"}
        assert source.draws == 5

    def test_count_collisions_empty_set(self):
        """Test nothing collides with an empty population."""
        source = StubSource(["a"] * 10)
        assert count_collisions(source, set(), 10) == 0

    def test_populate_stops_when_told(self):
        """Test a set stop event cancels the population phase before any draw."""
        stop = threading.Event()
        stop.set()
        source = StubSource(["a", "b"])
        with pytest.raises(ExperimentCancelled, match="population"):
            populate(source, 2, label="REUSE/32BIT", stop=stop)
        assert source.draws == 0

    def test_count_collisions_stops_midway(self):
        """Test setting the stop event between draws ends the trials phase."""
        stop = threading.Event()

        class StoppingSource(StubSource):
            def next_nickname(self):
                if self.draws == 2:
                    stop.set()
                return super().next_nickname()

        source = StoppingSource(["a"] * 10)
        with pytest.raises(ExperimentCancelled, match="trials"):
            count_collisions(source, {"a"}, 10, stop=stop)
        assert source.draws == 3


class TestRunExperiment:
    """End-to-end runs of a single variant."""

    def test_empty_population_never_collides(self, corpus):
        """Test population 0 with 1000 trials reports no collisions."""
        config = ExperimentConfig(population_size=0, num_tries=1000)
        result = run_experiment(corpus, REUSE_32, config)
        assert result.total_trials == 1000
        assert result.collision_count == 0
        assert result.collision_percentage == 0.0
        assert result.population_size == 0
        assert result.label == "REUSE/32BIT"

    @pytest.mark.parametrize("variant", STANDARD_VARIANTS, ids=lambda v: v.label)
    def test_small_run(self, corpus, variant):
        """Test each variant completes a small run with a sane percentage."""
        config = ExperimentConfig(population_size=500, num_tries=500)
        result = run_experiment(corpus, variant, config)
        assert result.population_size == 500
        assert result.total_trials == 500
        assert 0 <= result.collision_count <= 500
        assert 0.0 <= result.collision_percentage <= 100.0

    def test_single_nickname_space_always_collides(self):
        """Test a one-nickname space collides on every trial."""
        corpus = WordCorpus.from_words(["mangrove"])
        config = ExperimentConfig(
            population_size=1,
            num_tries=50,
            nickname=SampleNicknameOptions(mangling_factor=100.0),
        )
        result = run_experiment(corpus, REUSE_64, config)
        assert result.collision_count == 50
        assert result.collision_percentage == pytest.approx(100.0)

    def test_no_eligible_words_aborts(self):
        """Test an empty sampling range aborts the experiment."""
        config = ExperimentConfig(population_size=10, num_tries=10)
        with pytest.raises(NoEligibleWordsError):
            run_experiment(WordCorpus.from_words([]), REUSE_32, config)

    def test_progress_logging(self, corpus, caplog):
        """Test progress lines appear at DEBUG every progress_interval draws."""
        config = ExperimentConfig(population_size=20, num_tries=20, progress_interval=10)
        with caplog.at_level("DEBUG", logger="nickcollide.experiment"):
            run_experiment(corpus, REUSE_32, config)
        progress = [r.getMessage() for r in caplog.records if r.levelname == "DEBUG"]
        assert "[REUSE/32BIT] population: 10/20" in progress
        assert "[REUSE/32BIT] trials: 20/20" in progress
