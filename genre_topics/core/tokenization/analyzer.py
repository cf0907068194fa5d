from __future__ import annotations
from typing import List

from genre_topics.core.stopword_removal.base import StopwordRemover
from genre_topics.core.tokenization.base import Tokenizer


class TextAnalyzer:
    """Raw text -> normalized terms (tokenize, then drop stopwords)."""

    def __init__(self, tokenizer: Tokenizer, remover: StopwordRemover):
        self.tokenizer = tokenizer
        self.remover = remover

    def terms(self, text: str) -> List[str]:
        cleaned, _removed = self.remover.remove(self.tokenizer.tokenize(text))
        return cleaned
