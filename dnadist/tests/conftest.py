import numpy as np
import pytest

from dnadist.models.mutation_matrix import Mutation, MutationMatrix

# Factory for matrices given by category name, e.g.
#
#   def test_something(make_matrix):
#       mm = make_matrix(AtoA=90, AtoG=10, seq_len=120)
#
@pytest.fixture
def make_matrix():
    def _make(seq_len=None, **by_name):
        mm = MutationMatrix()
        for name, n in by_name.items():
            mm.counts[Mutation[name]] += n
        mm.seq_len = mm.total() if seq_len is None else seq_len
        return mm
    return _make

@pytest.fixture
def rng():
    return np.random.default_rng(20160111)
