from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class ProjectionConfig:
    top_terms: int = 50  # columns kept, by summed weight across topics
    n_components: int = 2
    min_std: float = 1e-12  # columns at or below this std are dropped
