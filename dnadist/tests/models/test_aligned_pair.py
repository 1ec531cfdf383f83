import math

import pytest

from dnadist import AlignedPair, AlignedPairCollection, Mutation, model_average


def _pair(s, q, **kw):
    return AlignedPair(subject_id="s", query_id="q", aligned_subject=s, aligned_query=q, **kw)


# ---------- Validation ----------

def test_unequal_rows_raise():
    with pytest.raises(ValueError):
        _pair("ACGT", "ACG")

def test_coordinate_validation():
    ok = _pair("ACGT", "ACGT", subject_start=10, subject_end=13, query_start=1, query_end=4)
    assert len(ok) == 4
    with pytest.raises(ValueError):
        _pair("AC", "AC", subject_start=0, subject_end=1)
    with pytest.raises(ValueError):
        _pair("AC", "AC", query_start=5, query_end=4)
    with pytest.raises(ValueError):
        _pair("AC", "AC", query_start=5)


# ---------- Counting ----------

def test_matrix_normalizes_rows():
    # lowercase counts like uppercase; N and R are skipped
    mm = _pair("acgtN-", "ACGAAR").mutation_matrix()
    assert mm.counts[Mutation.AtoA] == 1
    assert mm.counts[Mutation.AtoT] == 1
    assert mm.total() == 4
    assert mm.seq_len == 6
    assert mm.coverage() == pytest.approx(4 / 6)

def test_distance_dispatch():
    p = _pair("AAAT", "AAAA")
    assert p.distance("raw") == pytest.approx(0.25)
    assert p.distance("jc") == pytest.approx(-0.75 * math.log(1 - 4 / 3 * 0.25))
    assert math.isnan(_pair("AAA", "AAA").distance("raw"))


# ---------- Collections ----------

def test_collection_merges_segments():
    a = _pair("AAAT--", "AAAA--")
    b = _pair("CCGG", "CCGA")
    coll = AlignedPairCollection()
    coll.append(a)
    coll.extend([b])
    mm = coll.mutation_matrix()
    assert len(coll) == 2
    assert mm == model_average(a.mutation_matrix(), b.mutation_matrix())
    assert mm.seq_len == 10
    assert coll.distance("raw") == pytest.approx(2 / 8)

def test_empty_collection():
    mm = AlignedPairCollection().mutation_matrix()
    assert mm.total() == 0 and mm.seq_len == 0
