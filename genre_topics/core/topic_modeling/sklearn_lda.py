from __future__ import annotations
import logging

import numpy as np
from sklearn.decomposition import LatentDirichletAllocation

from genre_topics.core.term_matrix.base import TermMatrix
from genre_topics.core.topic_modeling.base import TopicModelEngine, TopicModelResult
from genre_topics.core.topic_modeling.config import TopicModelConfig
from genre_topics.core.topic_modeling.utils import normalize_rows, validate_inputs
from genre_topics.messages import pipeline_messages as msg

logger = logging.getLogger(__name__)


class SklearnLDAEngine(TopicModelEngine):
    """
    Adapter: scikit-learn's batch variational LDA behind the same port.

    sklearn checks convergence on the change in perplexity, so ``tol`` is
    passed as ``perp_tol`` and is not directly comparable to the
    relative-bound tolerance of the built-in engine.
    """

    backend = "sklearn"

    def __init__(self, cfg: TopicModelConfig):
        self.cfg = cfg

    def fit(self, matrix: TermMatrix) -> TopicModelResult:
        warnings = validate_inputs(matrix, self.cfg)
        X = matrix.counts.astype(np.float64)

        lda = LatentDirichletAllocation(
            n_components=self.cfg.num_topics,
            doc_topic_prior=self.cfg.alpha,
            topic_word_prior=self.cfg.eta,
            learning_method="batch",
            max_iter=self.cfg.max_iter,
            max_doc_update_iter=self.cfg.e_step_max_iter,
            mean_change_tol=self.cfg.e_step_tol,
            evaluate_every=1,
            perp_tol=self.cfg.tol,
            random_state=self.cfg.random_state,
        )
        doc_topic = lda.fit_transform(X)  # shape: (n_rows, n_topics)
        converged = lda.n_iter_ < self.cfg.max_iter
        if not converged:
            warning = msg.NOT_CONVERGED.format(
                max_iter=self.cfg.max_iter, delta=float("nan"), tol=self.cfg.tol
            )
            logger.warning(warning)
            warnings.append(warning)

        logger.info(
            "sklearn LDA: K=%d, %d rows, %d iterations",
            self.cfg.num_topics,
            X.shape[0],
            lda.n_iter_,
        )
        return TopicModelResult(
            topic_term=normalize_rows(lda.components_),
            doc_topic=normalize_rows(doc_topic),
            row_ids=matrix.row_ids,
            row_genres=matrix.row_genres,
            vocabulary=matrix.vocabulary,
            granularity=matrix.granularity,
            backend=self.backend,
            n_iter=int(lda.n_iter_),
            converged=converged,
            bound=float("nan"),
            perplexity=float(lda.perplexity(X)),
            warnings=tuple(warnings),
        )
