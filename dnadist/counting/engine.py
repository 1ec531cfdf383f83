# dnadist/counting/engine.py
from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

from ..models.mutation_matrix import MUTCOUNTS, Mutation, MutationMatrix
from .nucleotide import classify, nucl2bit

if TYPE_CHECKING:
    from ..metrics.distance import DistanceModel

__all__ = [
    "model_count",
    "model_count_equal",
    "count_alignment",
    "count_anchor",
]

Buffer = Union[str, bytes, bytearray, memoryview]

_FIRST_VALID = ord("A")

# Identity category per 2-bit code.
_DIAGONAL = (Mutation.AtoA, Mutation.CtoC, Mutation.GtoG, Mutation.TtoT)


def _as_bytes(buf: Buffer) -> bytes:
    if isinstance(buf, str):
        # Non-ASCII characters become '?', which is below 'A' and thus skipped.
        return buf.encode("ascii", "replace")
    return bytes(buf)


def _resolve_length(length: Optional[int], *bufs: bytes) -> int:
    avail = min(len(b) for b in bufs)
    if length is None:
        return avail
    if length < 0 or length > avail:
        raise ValueError(f"length {length} outside buffer bounds (0..{avail})")
    return length


def model_count(mm: MutationMatrix, subject: Buffer, query: Buffer, length: Optional[int] = None) -> None:
    """
    Count the substitutions between two aligned rows and add them to `mm`.

    Positions where either character is below 'A' (gaps, masked or ambiguous
    positions) are skipped. The tally is kept locally and merged into `mm`
    once at the end; `mm.seq_len` is left to the caller.
    """
    s_buf = _as_bytes(subject)
    q_buf = _as_bytes(query)
    if length is None and len(s_buf) != len(q_buf):
        raise ValueError("aligned rows must be the same length")
    n = _resolve_length(length, s_buf, q_buf)

    local_counts = [0] * MUTCOUNTS
    for s, q in zip(s_buf[:n], q_buf[:n]):
        if s < _FIRST_VALID or q < _FIRST_VALID:
            continue

        local_counts[classify(nucl2bit(s), nucl2bit(q))] += 1

    for i in range(MUTCOUNTS):
        mm.counts[i] += local_counts[i]


def model_count_equal(mm: MutationMatrix, subject: Buffer, length: Optional[int] = None, *, exact: bool = False) -> None:
    """
    Add an anchor (a stretch known to be identical in subject and query).

    With `exact=False` the nucleotides are assumed to be uniformly
    distributed: `length` is split evenly over the four identity categories
    and the remainder goes to TtoT, so the total is exact. This is sufficient
    for estimators that only care how many positions matched.

    With `exact=True` every character is decoded and counted in its own
    identity category; placeholders are skipped.
    """
    s_buf = _as_bytes(subject)
    n = _resolve_length(length, s_buf)

    if not exact:
        fourth = n // 4
        mm.counts[Mutation.AtoA] += fourth
        mm.counts[Mutation.CtoC] += fourth
        mm.counts[Mutation.GtoG] += fourth
        mm.counts[Mutation.TtoT] += fourth + (n & 3)
        return

    local_counts = [0] * 4
    for s in s_buf[:n]:
        if s < _FIRST_VALID:
            continue
        local_counts[nucl2bit(s)] += 1

    for code, mut in enumerate(_DIAGONAL):
        mm.counts[mut] += local_counts[code]


def count_alignment(subject: Buffer, query: Buffer) -> MutationMatrix:
    """Fresh matrix for one aligned pair; seq_len is the alignment length."""
    mm = MutationMatrix(seq_len=len(subject))
    model_count(mm, subject, query)
    return mm


def count_anchor(mm: MutationMatrix, subject: Buffer, model: DistanceModel, length: Optional[int] = None) -> None:
    """Add an anchor, letting the distance model decide whether identities must be exact."""
    model_count_equal(mm, subject, length, exact=model.exact_identities)
