from __future__ import annotations
from types import MappingProxyType
from typing import Sequence

import numpy as np

from genre_topics.core.topic_summary.base import TopicSummarizer, TopicSummary
from genre_topics.core.topic_summary.config import TopicSummaryConfig
from genre_topics.messages import pipeline_messages as msg
from genre_topics.utils.exceptions import InvalidConfigError


class RankedTopicSummarizer(TopicSummarizer):
    """Top-N terms per topic by weight; equal weights ordered by term."""

    def __init__(self, config: TopicSummaryConfig | None = None):
        self.cfg = config or TopicSummaryConfig()
        if self.cfg.topn_words < 1:
            raise InvalidConfigError(
                "topic_summary", msg.INVALID_TOP_N.format(value=self.cfg.topn_words)
            )

    def summarize(self, topic_term: np.ndarray, terms: Sequence[str]) -> TopicSummary:
        n = min(self.cfg.topn_words, len(terms))
        topics = {}
        for k, row in enumerate(topic_term):
            order = sorted(range(len(terms)), key=lambda j: (-row[j], terms[j]))[:n]
            topics[k] = tuple((terms[j], float(row[j])) for j in order)
        return TopicSummary(topics=MappingProxyType(topics))
