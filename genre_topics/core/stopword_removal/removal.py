from __future__ import annotations
from typing import FrozenSet, List, Set, Tuple

from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from genre_topics.core.stopword_removal.base import StopwordRemover
from genre_topics.core.stopword_removal.config import StopwordConfig


class DefaultStopwordRemover(StopwordRemover):
    """Adapter: scikit-learn's English list, adjusted by config."""

    def __init__(self, config: StopwordConfig | None = None):
        self.cfg = config or StopwordConfig()
        self._stopset = self._build_stopset()

    @property
    def stopwords(self) -> FrozenSet[str]:
        return frozenset(self._stopset)

    def _build_stopset(self) -> Set[str]:
        base: Set[str] = set(ENGLISH_STOP_WORDS)
        base |= set(self.cfg.custom_stopwords)
        base -= set(self.cfg.exclude_stopwords)

        if self.cfg.preserve_negations:
            for w in ("no", "not", "never"):
                base.discard(w)

        if self.cfg.lowercase:
            base = {w.lower() for w in base}
        return base

    def is_stopword(self, token: str) -> bool:
        return (token.lower() if self.cfg.lowercase else token) in self._stopset

    def remove(self, tokens: List[str]) -> Tuple[List[str], List[str]]:
        flags = [self.is_stopword(t) for t in tokens]
        terms = [t for t, stop in zip(tokens, flags) if not stop]
        dropped = [t for t, stop in zip(tokens, flags) if stop]
        return terms, dropped
