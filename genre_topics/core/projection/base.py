from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np


@dataclass(frozen=True, eq=False)
class Projection:
    coordinates: np.ndarray  # (K, n_components)
    explained_variance_ratio: np.ndarray  # (n_components,)
    components: np.ndarray  # (n_components, len(terms)) loadings
    terms: Tuple[str, ...]  # columns that entered the PCA
    warnings: Tuple[str, ...] = ()


class DimensionalityReducer(ABC):
    @abstractmethod
    def project(self, topic_term: np.ndarray, terms: Sequence[str]) -> Projection: ...
