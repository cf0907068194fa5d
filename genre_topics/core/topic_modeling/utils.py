from __future__ import annotations
import logging
from typing import List

import numpy as np

from genre_topics.core.term_matrix.base import TermMatrix
from genre_topics.core.topic_modeling.config import TopicModelConfig
from genre_topics.messages import pipeline_messages as msg
from genre_topics.utils.exceptions import (
    EmptyMatrixError,
    EmptyVocabularyError,
    InvalidConfigError,
)

logger = logging.getLogger(__name__)

STAGE = "topic_modeling"


def validate_inputs(matrix: TermMatrix, cfg: TopicModelConfig) -> List[str]:
    """
    Raise on unusable input; return warnings for usable-but-suspicious input.
    """
    if not isinstance(cfg.num_topics, (int, np.integer)) or cfg.num_topics < 1:
        raise InvalidConfigError(
            STAGE, msg.INVALID_NUM_TOPICS.format(value=cfg.num_topics)
        )
    for name, value in (
        ("doc_topic_prior", cfg.doc_topic_prior),
        ("topic_word_prior", cfg.topic_word_prior),
    ):
        if value is not None and value <= 0:
            raise InvalidConfigError(STAGE, f"{name} must be > 0, got {value}.")
    if cfg.max_iter < 1:
        raise InvalidConfigError(STAGE, f"max_iter must be >= 1, got {cfg.max_iter}.")

    n_rows, n_terms = matrix.shape
    if n_terms == 0:
        raise EmptyVocabularyError(STAGE, msg.EMPTY_VOCABULARY)
    if n_rows == 0:
        raise EmptyMatrixError(STAGE, msg.EMPTY_MATRIX)
    row_totals = np.asarray(matrix.counts.sum(axis=1)).ravel()
    if np.any(row_totals <= 0):
        raise EmptyMatrixError(
            STAGE, "Term matrix has zero-count rows; drop them before modeling."
        )

    warnings: List[str] = []
    if cfg.num_topics >= n_rows:
        warning = msg.TOPICS_EXCEED_ROWS.format(k=cfg.num_topics, d=n_rows)
        logger.warning(warning)
        warnings.append(warning)
    return warnings


def normalize_rows(a: np.ndarray) -> np.ndarray:
    out = a / a.sum(axis=1, keepdims=True)
    out.setflags(write=False)
    return out


def perplexity_from_bound(bound: float, total_count: float) -> float:
    return float(np.exp(-bound / total_count))
