# dnadist/__init__.py
from .models.mutation_matrix import (
    Mutation,
    MutationMatrix,
    model_average,
    model_coverage,
    model_sum,
    model_total,
)
from .models.aligned_pair import AlignedPair
from .models.aligned_pair_collection import AlignedPairCollection

# Convenience re-exports for direct functional use
from .counting.engine import model_count, model_count_equal, count_alignment
from .metrics.distance import DistanceModel, estimate, estimate_raw, estimate_jc, estimate_kimura
from .metrics.bootstrap import model_bootstrap
