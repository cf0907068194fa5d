from __future__ import annotations
from typing import List

from nltk.tokenize import RegexpTokenizer

from genre_topics.core.tokenization.base import Tokenizer
from genre_topics.core.tokenization.config import TokenizationConfig


class DefaultTokenizer(Tokenizer):
    """Adapter: NLTK regexp tokenizer with case folding & length filters."""

    def __init__(self, config: TokenizationConfig | None = None):
        self.cfg = config or TokenizationConfig()
        self._tokenizer = RegexpTokenizer(self.cfg.pattern)

    def tokenize(self, text: str) -> List[str]:
        if not isinstance(text, str):
            return []
        s = text.lower() if self.cfg.lowercase else text
        out: List[str] = []
        for t in self._tokenizer.tokenize(s):
            if self.cfg.remove_numbers_only and t.isdigit():
                continue
            if len(t) < self.cfg.min_token_len:
                continue
            out.append(t)
        return out
