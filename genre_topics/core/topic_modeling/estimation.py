from __future__ import annotations
import logging
from dataclasses import replace
from typing import Callable, Dict

from genre_topics.core.term_matrix.base import TermMatrix
from genre_topics.core.topic_modeling.base import TopicEstimator, TopicModelEngine
from genre_topics.core.topic_modeling.config import TopicModelConfig
from genre_topics.messages import pipeline_messages as msg
from genre_topics.utils.exceptions import InvalidConfigError

logger = logging.getLogger(__name__)

EngineFactory = Callable[[TopicModelConfig], TopicModelEngine]


class PerplexityTopicEstimator(TopicEstimator):
    """Pick K in [min_k, max_k] with the lowest perplexity (ties -> smaller K)."""

    def __init__(self, cfg: TopicModelConfig, engine_factory: EngineFactory):
        self.cfg = cfg
        self.engine_factory = engine_factory
        self.scores: Dict[int, float] = {}

    def estimate_k(self, matrix: TermMatrix, min_k: int, max_k: int) -> int:
        if min_k < 1 or max_k < min_k:
            raise InvalidConfigError(
                "topic_modeling",
                msg.INVALID_ESTIMATION_RANGE.format(min_k=min_k, max_k=max_k),
            )
        best_k, best_score = min_k, float("inf")
        scores: Dict[int, float] = {}
        for k in range(min_k, max_k + 1):
            engine = self.engine_factory(replace(self.cfg, num_topics=k))
            score = engine.fit(matrix).perplexity
            scores[k] = score
            logger.info("K=%d perplexity=%.4f", k, score)
            if score < best_score:
                best_score, best_k = score, k
        self.scores = scores
        return best_k
