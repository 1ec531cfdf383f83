# dnadist/metrics/distance.py
from __future__ import annotations

import math
from enum import Enum
from typing import Union

from ..models.mutation_matrix import (
    SUBSTITUTIONS,
    TRANSITIONS,
    TRANSVERSIONS,
    MutationMatrix,
    model_sum,
    model_total,
)

__all__ = [
    "DistanceModel",
    "estimate_raw",
    "estimate_jc",
    "estimate_kimura",
    "estimate",
]


class DistanceModel(Enum):
    RAW = "raw"
    JC = "jc"
    KIMURA = "kimura"

    @property
    def exact_identities(self) -> bool:
        """
        Whether the model needs true per-nucleotide identity counts. RAW, JC
        and Kimura only look at how many positions matched, so anchors may be
        counted with the uniform split.
        """
        return False

    @classmethod
    def parse(cls, value: Union[str, DistanceModel]) -> DistanceModel:
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for m in cls:
            if m.value == key:
                return m
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown distance model {value!r}; expected one of: {choices}")


def _neg_log(scale: float, arg: float) -> float:
    """
    scale * ln(arg) with IEEE semantics instead of math.log's exceptions:
    ln(0) = -inf, ln(<0) = NaN. Non-positive results are clamped to 0.0.
    """
    if math.isnan(arg) or arg < 0.0:
        return math.nan
    if arg == 0.0:
        dist = scale * -math.inf
    else:
        dist = scale * math.log(arg)
    # fix negative zero
    return dist if dist > 0.0 else 0.0


def estimate_raw(mm: MutationMatrix) -> float:
    """Uncorrected substitution rate; NaN on three or fewer counted positions."""
    nucl = model_total(mm)
    snps = model_sum(mm, *SUBSTITUTIONS)

    # Insignificant results.
    if nucl <= 3:
        return math.nan

    return snps / nucl


def estimate_jc(mm: MutationMatrix) -> float:
    """Jukes-Cantor corrected distance."""
    dist = estimate_raw(mm)
    if math.isnan(dist):
        return math.nan
    return _neg_log(-0.75, 1.0 - (4.0 / 3.0) * dist)


def estimate_kimura(mm: MutationMatrix) -> float:
    """Kimura two-parameter (K80) distance; NaN when nothing was counted."""
    nucl = model_total(mm)
    if nucl == 0:
        return math.nan

    p = model_sum(mm, *TRANSITIONS) / nucl
    q = model_sum(mm, *TRANSVERSIONS) / nucl

    tmp = 1.0 - 2.0 * p - q
    return _neg_log(-0.25, (1.0 - 2.0 * q) * tmp * tmp)


_ESTIMATORS = {
    DistanceModel.RAW: estimate_raw,
    DistanceModel.JC: estimate_jc,
    DistanceModel.KIMURA: estimate_kimura,
}


def estimate(mm: MutationMatrix, model: Union[str, DistanceModel] = DistanceModel.JC) -> float:
    return _ESTIMATORS[DistanceModel.parse(model)](mm)
