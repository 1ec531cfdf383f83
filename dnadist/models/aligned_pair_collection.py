# dnadist/models/aligned_pair_collection.py
from __future__ import annotations
from dataclasses import dataclass, field
from functools import reduce
from typing import TYPE_CHECKING, Iterable, List, Union

from .aligned_pair import AlignedPair
from .mutation_matrix import MutationMatrix, model_average

if TYPE_CHECKING:
    from ..metrics.distance import DistanceModel

@dataclass(slots=True)
class AlignedPairCollection:
    """
    Several aligned segments between the same two sequences (e.g. local
    alignment windows). Their matrices are merged into one global statistic.
    """
    items: List[AlignedPair] = field(default_factory=list)

    def extend(self, it: Iterable[AlignedPair]) -> None:
        self.items.extend(it)

    def append(self, aln: AlignedPair) -> None:
        self.items.append(aln)

    def __len__(self) -> int:
        return len(self.items)

    def mutation_matrix(self) -> MutationMatrix:
        return reduce(model_average, (aln.mutation_matrix() for aln in self.items), MutationMatrix())

    def distance(self, model: Union[str, DistanceModel] = "jc") -> float:
        from ..metrics.distance import estimate
        return estimate(self.mutation_matrix(), model)
