from __future__ import annotations
import re
from typing import Callable, List, Tuple

from genre_topics.core.genre_classification.base import GenreClassifier
from genre_topics.core.genre_classification.config import (
    GenreRule,
    GenreRulesConfig,
)

Predicate = Callable[[str], bool]


def _compile_rule(rule: GenreRule, allow_plural: bool) -> Predicate:
    if not rule.keywords:
        return lambda text: False
    alternation = "|".join(
        r"\s+".join(re.escape(part) for part in k.lower().split())
        for k in rule.keywords
    )
    suffix = r"(?:s|es)?" if allow_plural else ""
    pattern = re.compile(rf"\b(?:{alternation}){suffix}\b", re.IGNORECASE)
    return lambda text: pattern.search(text) is not None


class KeywordGenreClassifier(GenreClassifier):
    """
    Adapter: ordered (predicate, label) rules with first-match-wins dispatch.

    Priority is the position in ``cfg.rules``; a text matching several rules
    always gets the label of the earliest one. Texts matching nothing, empty
    strings and ``None`` get ``cfg.default_label``.
    """

    def __init__(self, config: GenreRulesConfig | None = None):
        self.cfg = config or GenreRulesConfig()
        self._rules: List[Tuple[Predicate, str]] = [
            (_compile_rule(r, self.cfg.allow_plural), r.label) for r in self.cfg.rules
        ]

    @property
    def labels(self) -> List[str]:
        """Closed label set in priority order, default last."""
        out = [label for _, label in self._rules]
        if self.cfg.default_label not in out:
            out.append(self.cfg.default_label)
        return out

    def classify(self, text: str) -> str:
        if not isinstance(text, str) or not text.strip():
            return self.cfg.default_label
        for predicate, label in self._rules:
            if predicate(text):
                return label
        return self.cfg.default_label
