import math

import numpy as np
import pytest

from dnadist.metrics.bootstrap import (
    bootstrap_distances,
    bootstrap_replicates,
    confidence_interval,
    model_bootstrap,
)
from dnadist.metrics.distance import estimate_jc
from dnadist.models.mutation_matrix import Mutation, MutationMatrix


@pytest.fixture
def observed(make_matrix):
    return make_matrix(AtoA=50, AtoG=10, CtoC=30, GtoG=10, seq_len=130)


def test_replicate_keeps_total_and_seq_len(observed, rng):
    for rep in bootstrap_replicates(observed, 200, rng):
        assert rep.total() == observed.total()
        assert rep.seq_len == observed.seq_len

def test_empty_categories_stay_empty(observed, rng):
    for rep in bootstrap_replicates(observed, 200, rng):
        assert rep.counts[Mutation.AtoC] == 0
        assert rep.counts[Mutation.TtoT] == 0

def test_seeded_draws_are_reproducible(observed):
    a = model_bootstrap(observed, np.random.default_rng(5))
    b = model_bootstrap(observed, np.random.default_rng(5))
    assert a == b

def test_draws_vary(observed, rng):
    draws = {tuple(rep.counts) for rep in bootstrap_replicates(observed, 50, rng)}
    assert len(draws) > 1

def test_mean_follows_empirical_proportions(observed, rng):
    reps = np.array([rep.counts for rep in bootstrap_replicates(observed, 2000, rng)])
    mean = reps.mean(axis=0)
    # multinomial mean is n * p = the observed counts
    assert mean == pytest.approx(np.asarray(observed.counts, dtype=float), abs=1.0)
    # variance of a category is n * p * (1 - p)
    assert reps[:, Mutation.AtoA].var() == pytest.approx(100 * 0.5 * 0.5, rel=0.2)

def test_empty_matrix_is_rejected(rng):
    with pytest.raises(ValueError):
        model_bootstrap(MutationMatrix(seq_len=10), rng)


# ---------- Distances & intervals ----------

def test_bootstrap_distances(observed, rng):
    d = bootstrap_distances(observed, "jc", 100, rng)
    assert d.shape == (100,)
    assert np.all(d >= 0.0)
    lo, hi = confidence_interval(d)
    assert lo <= estimate_jc(observed) <= hi

def test_interval_ignores_nan():
    lo, hi = confidence_interval([math.nan, 0.1, 0.2, 0.3, math.nan], level=0.5)
    assert lo == pytest.approx(0.15)
    assert hi == pytest.approx(0.25)

def test_interval_of_all_nan():
    lo, hi = confidence_interval([math.nan, math.nan])
    assert math.isnan(lo) and math.isnan(hi)

def test_interval_level_validation():
    with pytest.raises(ValueError):
        confidence_interval([0.1], level=1.0)
