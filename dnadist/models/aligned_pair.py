from __future__ import annotations
from dataclasses import dataclass, asdict, field
from typing import TYPE_CHECKING, Optional, Any, Union

from .mutation_matrix import MutationMatrix

if TYPE_CHECKING:
    from ..metrics.distance import DistanceModel


@dataclass(slots=True)
class AlignedPair:
    """
    One aligned segment between a subject and a query sequence.

    Conventions:
      - Both rows have the same length; every column is one aligned position.
      - Gaps are '-'. Any character below 'A' is a placeholder that the
        counting engine skips; rows are normalized before counting, so
        ambiguity codes (N, R, Y, ...) are skipped as well.
      - Coordinates, when given, are 1-based, fully-closed [start, end].
      - `seq_len` of the resulting matrix is the number of alignment columns.
    """

    subject_id: str
    query_id: str
    aligned_subject: str
    aligned_query: str

    # Optional coordinates (1-based, fully-closed)
    subject_start: Optional[int] = None
    subject_end: Optional[int] = None
    query_start: Optional[int] = None
    query_end: Optional[int] = None

    # Free-form metadata
    meta: dict[str, Any] = field(default_factory=dict)

    # ---------- Validation ----------

    def __post_init__(self) -> None:
        if len(self.aligned_subject) != len(self.aligned_query):
            raise ValueError(
                f"aligned rows differ in length: {len(self.aligned_subject)} != {len(self.aligned_query)}"
            )
        for start, end, what in (
            (self.subject_start, self.subject_end, "subject"),
            (self.query_start, self.query_end, "query"),
        ):
            if start is None and end is None:
                continue
            if start is None or end is None:
                raise ValueError(f"{what}_start and {what}_end must be given together.")
            if start < 1:
                raise ValueError("Coordinates are 1-based; starts must be ≥ 1.")
            if end < start:
                raise ValueError(f"{what}_end must be ≥ {what}_start (fully-closed).")

    # ---------- Helpers ----------

    def __len__(self) -> int:
        return len(self.aligned_subject)

    # ---------- Public API ----------

    def mutation_matrix(self) -> MutationMatrix:
        from ..counting.engine import count_alignment
        from ..counting.nucleotide import normalize
        return count_alignment(normalize(self.aligned_subject), normalize(self.aligned_query))

    def distance(self, model: Union[str, DistanceModel] = "jc") -> float:
        from ..metrics.distance import estimate
        return estimate(self.mutation_matrix(), model)

    def coverage(self) -> float:
        return self.mutation_matrix().coverage()

    def __repr__(self) -> str:
        import json
        return json.dumps(asdict(self), indent=4)
