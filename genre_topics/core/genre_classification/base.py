from __future__ import annotations
from abc import ABC, abstractmethod


class GenreClassifier(ABC):
    """Port: assign exactly one genre label to a raw text."""

    @abstractmethod
    def classify(self, text: str) -> str: ...
