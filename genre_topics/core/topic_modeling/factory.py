from __future__ import annotations

from genre_topics.core.topic_modeling.base import TopicModelEngine
from genre_topics.core.topic_modeling.config import TopicModelConfig
from genre_topics.core.topic_modeling.sklearn_lda import SklearnLDAEngine
from genre_topics.core.topic_modeling.variational import VariationalLDAEngine
from genre_topics.messages import pipeline_messages as msg
from genre_topics.utils.exceptions import InvalidConfigError


def build_engine(cfg: TopicModelConfig) -> TopicModelEngine:
    if cfg.backend == "variational":
        return VariationalLDAEngine(cfg)
    if cfg.backend == "sklearn":
        return SklearnLDAEngine(cfg)
    raise InvalidConfigError(
        "topic_modeling", msg.UNKNOWN_BACKEND.format(backend=cfg.backend)
    )
