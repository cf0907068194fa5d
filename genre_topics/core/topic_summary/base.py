from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

TermWeight = Tuple[str, float]


@dataclass(frozen=True)
class TopicSummary:
    """topic id -> (term, weight) pairs, heaviest first."""

    topics: Mapping[int, Tuple[TermWeight, ...]]

    def keywords(self, topic_id: int) -> List[str]:
        return [t for t, _ in self.topics[topic_id]]


class TopicSummarizer(ABC):
    @abstractmethod
    def summarize(
        self, topic_term: np.ndarray, terms: Sequence[str]
    ) -> TopicSummary: ...


class TopicLabeler(ABC):
    """
    Given a summary (and optionally an explicit map), produce
    {topic_id -> label}.
    """

    @abstractmethod
    def label(
        self,
        summary: TopicSummary,
        *,
        explicit_map: Optional[Dict[int, str]] = None,
    ) -> Dict[int, str]: ...
