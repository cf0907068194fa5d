from __future__ import annotations
from abc import ABC, abstractmethod
from typing import FrozenSet, List, Tuple


class StopwordRemover(ABC):
    """Port: filters function words out of a plot's tokens before counting."""

    @property
    @abstractmethod
    def stopwords(self) -> FrozenSet[str]: ...

    @abstractmethod
    def remove(self, tokens: List[str]) -> Tuple[List[str], List[str]]:
        """
        Split ``tokens`` into (terms kept for the term matrix, stopwords
        dropped), both in input order.
        """
        ...
