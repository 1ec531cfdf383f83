# dnadist/metrics/bootstrap.py
"""
Bootstrap replicates of a mutation matrix.

The classical bootstrap (Felsenstein) resamples all columns of a multiple
alignment. For a pairwise alignment this reduces to a multinomial draw over
the ten mutation categories, with the observed proportions as probabilities
and the number of counted positions as the number of trials (Klötzl &
Haubold, 2016). The matrix itself is resampled; sequence positions are not.

The random generator is always passed in by the caller, so replicates are
reproducible with a seeded `numpy.random.Generator`.
"""
from __future__ import annotations

import logging
from typing import Iterator, Optional, Sequence, Tuple, Union

import numpy as np

from ..models.mutation_matrix import MutationMatrix, model_total
from .distance import DistanceModel, estimate

logger = logging.getLogger(__name__)

__all__ = [
    "model_bootstrap",
    "bootstrap_replicates",
    "bootstrap_distances",
    "confidence_interval",
]


def _require_rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def model_bootstrap(mm: MutationMatrix, rng: Optional[np.random.Generator] = None) -> MutationMatrix:
    """
    Draw one bootstrapped matrix. The result has the same seq_len and the
    same total as `mm`. Raises ValueError when `mm` has no counted positions,
    since the category probabilities are undefined then.
    """
    nucl = model_total(mm)
    if nucl == 0:
        raise ValueError("cannot bootstrap a mutation matrix without counted positions")

    rng = _require_rng(rng)
    p = np.asarray(mm.counts, dtype=float) / nucl
    n = rng.multinomial(nucl, p)

    return MutationMatrix(counts=[int(x) for x in n], seq_len=mm.seq_len)


def bootstrap_replicates(
    mm: MutationMatrix,
    replicates: int,
    rng: Optional[np.random.Generator] = None,
) -> Iterator[MutationMatrix]:
    """Yield `replicates` independent bootstrap matrices drawn from one generator."""
    if replicates < 0:
        raise ValueError("replicates must be ≥ 0")
    rng = _require_rng(rng)
    logger.debug("drawing %d bootstrap replicates (n=%d)", replicates, model_total(mm))
    for _ in range(replicates):
        yield model_bootstrap(mm, rng)


def bootstrap_distances(
    mm: MutationMatrix,
    model: Union[str, DistanceModel],
    replicates: int,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """Distances of `replicates` bootstrap matrices under `model` (may contain NaN)."""
    model = DistanceModel.parse(model)
    return np.fromiter(
        (estimate(rep, model) for rep in bootstrap_replicates(mm, replicates, rng)),
        dtype=float,
        count=replicates,
    )


def confidence_interval(values: Sequence[float], level: float = 0.95) -> Tuple[float, float]:
    """
    Percentile interval of bootstrap distances, ignoring NaN replicates.
    Returns (nan, nan) when every replicate was NaN.
    """
    if not 0.0 < level < 1.0:
        raise ValueError("level must be in (0, 1)")
    arr = np.asarray(values, dtype=float)
    arr = arr[~np.isnan(arr)]
    if arr.size == 0:
        return (float("nan"), float("nan"))
    tail = (1.0 - level) / 2.0 * 100.0
    lo, hi = np.percentile(arr, [tail, 100.0 - tail])
    return (float(lo), float(hi))
