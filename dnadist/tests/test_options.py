import pytest

from dnadist.metrics.distance import DistanceModel
from dnadist.options import DistanceOptions


def test_defaults():
    opts = DistanceOptions()
    assert opts.model is DistanceModel.JC
    assert opts.bootstrap == 0
    assert opts.seed is None

def test_model_string_is_parsed():
    assert DistanceOptions(model="KIMURA").model is DistanceModel.KIMURA

@pytest.mark.parametrize("kwargs", [
    {"model": "tn93"},
    {"bootstrap": -1},
    {"level": 0.0},
    {"level": 1.5},
    {"low_coverage": 1.1},
])
def test_invalid_options_raise(kwargs):
    with pytest.raises(ValueError):
        DistanceOptions(**kwargs)

def test_seeded_rng_is_reproducible():
    a = DistanceOptions(seed=11).make_rng().integers(0, 1 << 30, size=5)
    b = DistanceOptions(seed=11).make_rng().integers(0, 1 << 30, size=5)
    assert list(a) == list(b)
