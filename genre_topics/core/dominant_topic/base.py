from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np


@dataclass(frozen=True, eq=False)
class GenreTopicProfile:
    genre: str
    dominant_topic: int
    weight: float
    weights: np.ndarray  # (K,), sums to 1


class DominantTopicResolver(ABC):
    @abstractmethod
    def resolve(
        self, doc_topic: np.ndarray, row_genres: Sequence[str], granularity: str
    ) -> List[GenreTopicProfile]: ...
