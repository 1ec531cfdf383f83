# dnadist/models/mutation_matrix.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List

logger = logging.getLogger(__name__)


class Mutation(IntEnum):
    """
    Symmetric mutation categories. XtoY is defined once for the unordered
    pair {X, Y}; the numbering matches the classifier's packed offsets.
    """
    AtoA = 0
    AtoC = 1
    AtoG = 2
    AtoT = 3
    CtoC = 4
    CtoG = 5
    CtoT = 6
    GtoG = 7
    GtoT = 8
    TtoT = 9
    GtoC = 5  # alias of CtoG


MUTCOUNTS = 10

IDENTITIES = (Mutation.AtoA, Mutation.CtoC, Mutation.GtoG, Mutation.TtoT)
SUBSTITUTIONS = (
    Mutation.AtoC, Mutation.AtoG, Mutation.AtoT,
    Mutation.CtoG, Mutation.CtoT, Mutation.GtoT,
)
TRANSITIONS = (Mutation.AtoG, Mutation.CtoT)
TRANSVERSIONS = (Mutation.AtoC, Mutation.AtoT, Mutation.GtoC, Mutation.GtoT)


def _zero_counts() -> List[int]:
    return [0] * MUTCOUNTS


@dataclass(slots=True)
class MutationMatrix:
    """
    Mutation counts of a pairwise alignment.

    Conventions:
      - `counts[i]` is the number of aligned positions in category `Mutation(i)`.
      - `seq_len` is the nominal length of the region, including positions
        that were skipped (gaps, masked or ambiguous characters). It is only
        ever set by the caller; counting never changes it.
    """

    counts: List[int] = field(default_factory=_zero_counts)
    seq_len: int = 0

    def __post_init__(self) -> None:
        self.counts = [int(c) for c in self.counts]
        if len(self.counts) != MUTCOUNTS:
            raise ValueError(f"counts must hold exactly {MUTCOUNTS} entries, got {len(self.counts)}.")
        if any(c < 0 for c in self.counts):
            raise ValueError("counts must be ≥ 0.")
        if self.seq_len < 0:
            raise ValueError("seq_len must be ≥ 0.")
        if sum(self.counts) > self.seq_len:
            raise ValueError(f"counted positions ({sum(self.counts)}) exceed seq_len ({self.seq_len}).")

    # ---------- Queries ----------

    def total(self) -> int:
        return model_total(self)

    def sum(self, *mutations: Mutation) -> int:
        return model_sum(self, *mutations)

    def coverage(self) -> float:
        return model_coverage(self)

    # ---------- Combination ----------

    def average(self, other: MutationMatrix) -> MutationMatrix:
        return model_average(self, other)

    def __add__(self, other: MutationMatrix) -> MutationMatrix:
        if not isinstance(other, MutationMatrix):
            return NotImplemented
        return model_average(self, other)

    # ---------- Helpers ----------

    def copy(self) -> MutationMatrix:
        return MutationMatrix(counts=list(self.counts), seq_len=self.seq_len)

    def as_dict(self) -> Dict[str, int]:
        """Category name → count, in category order (aliases omitted)."""
        return {m.name: self.counts[m] for m in Mutation}


def model_sum(mm: MutationMatrix, *mutations: Mutation) -> int:
    """Sum the counts of the given categories."""
    return sum(mm.counts[m] for m in mutations)


def model_total(mm: MutationMatrix) -> int:
    """Number of positions where both rows held a valid nucleotide."""
    return sum(mm.counts)


def model_coverage(mm: MutationMatrix) -> float:
    """Fraction of `seq_len` that was actually counted (NaN for an empty region)."""
    if mm.seq_len == 0:
        return math.nan
    return model_total(mm) / mm.seq_len


def model_average(mm: MutationMatrix, nn: MutationMatrix) -> MutationMatrix:
    """
    Merge two matrices into one global statistic: counts and seq_len are
    summed entrywise. Neither input is modified.
    """
    ret = MutationMatrix(
        counts=[a + b for a, b in zip(mm.counts, nn.counts)],
        seq_len=mm.seq_len + nn.seq_len,
    )
    logger.debug("merged matrices: total=%d seq_len=%d", model_total(ret), ret.seq_len)
    return ret
