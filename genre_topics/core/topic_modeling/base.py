from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from genre_topics.core.term_matrix.base import TermMatrix, Vocabulary


@dataclass(frozen=True, eq=False)
class TopicModelResult:
    """
    Fitted distributions.

    ``topic_term`` is (K, V) and ``doc_topic`` is (D, K); every row of both
    sums to 1 and every cell is strictly positive.
    """

    topic_term: np.ndarray
    doc_topic: np.ndarray
    row_ids: Tuple[str, ...]
    row_genres: Tuple[str, ...]
    vocabulary: Vocabulary
    granularity: str
    backend: str
    n_iter: int
    converged: bool
    bound: float  # evidence lower bound (nan when the backend has none)
    perplexity: float
    warnings: Tuple[str, ...] = ()

    @property
    def num_topics(self) -> int:
        return self.topic_term.shape[0]


class TopicModelEngine(ABC):
    @abstractmethod
    def fit(self, matrix: TermMatrix) -> TopicModelResult: ...


class TopicEstimator(ABC):
    @abstractmethod
    def estimate_k(self, matrix: TermMatrix, min_k: int, max_k: int) -> int: ...
