from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class TopicSummaryConfig:
    topn_words: int = 10  # words per topic


@dataclass(frozen=True)
class TopicLabelConfig:
    num_keywords: int = 2  # for default heuristic
    separator: str = " & "
