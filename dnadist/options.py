# dnadist/options.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from .metrics.distance import DistanceModel

@dataclass(slots=True)
class DistanceOptions:
    # Estimator
    model: Union[DistanceModel, str] = DistanceModel.JC

    # Bootstrap
    bootstrap: int = 0                 # number of replicates; 0 disables
    seed: Optional[int] = None         # None → fresh entropy
    level: float = 0.95                # confidence level of the interval

    # Warn about pairs whose counted fraction of columns falls below this
    low_coverage: float = 0.2

    def __post_init__(self) -> None:
        self.model = DistanceModel.parse(self.model)
        if self.bootstrap < 0:
            raise ValueError("bootstrap must be ≥ 0")
        if not 0.0 < self.level < 1.0:
            raise ValueError("level must be in (0, 1)")
        if not 0.0 <= self.low_coverage <= 1.0:
            raise ValueError("low_coverage must be in [0, 1]")

    def make_rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)
