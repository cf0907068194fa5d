from __future__ import annotations
import logging
from typing import List, Sequence

import numpy as np

from genre_topics.core.projection.base import DimensionalityReducer, Projection
from genre_topics.core.projection.config import ProjectionConfig
from genre_topics.messages import pipeline_messages as msg
from genre_topics.utils.exceptions import InvalidConfigError

logger = logging.getLogger(__name__)

STAGE = "projection"


def select_top_terms(
    topic_term: np.ndarray, terms: Sequence[str], top_terms: int
) -> List[int]:
    """Column indices of the heaviest terms summed over topics (ties by term)."""
    totals = topic_term.sum(axis=0)
    order = sorted(range(len(terms)), key=lambda j: (-totals[j], terms[j]))
    return order[:top_terms]


def _flip_signs(eigvecs: np.ndarray) -> np.ndarray:
    # largest-magnitude loading of every axis is positive
    rows = np.argmax(np.abs(eigvecs), axis=0)
    signs = np.sign(eigvecs[rows, np.arange(eigvecs.shape[1])])
    signs[signs == 0] = 1.0
    return eigvecs * signs


class StandardizedPCAReducer(DimensionalityReducer):
    """
    PCA of topics over their heaviest terms.

    Columns are z-scored (population std) after dropping zero-variance
    ones; axes are eigenvectors of the covariance of the z-scores.
    """

    def __init__(self, config: ProjectionConfig | None = None):
        self.cfg = config or ProjectionConfig()
        if self.cfg.top_terms < 1 or self.cfg.n_components < 1:
            raise InvalidConfigError(
                STAGE, "top_terms and n_components must be positive."
            )

    def _degenerate(
        self, n_topics: int, kept_terms: Sequence[str], warnings: List[str]
    ) -> Projection:
        warning = msg.NO_VARIANCE
        logger.warning(warning)
        warnings.append(warning)
        n = self.cfg.n_components
        return Projection(
            coordinates=np.zeros((n_topics, n)),
            explained_variance_ratio=np.zeros(n),
            components=np.zeros((n, len(kept_terms))),
            terms=tuple(kept_terms),
            warnings=tuple(warnings),
        )

    def project(self, topic_term: np.ndarray, terms: Sequence[str]) -> Projection:
        n_topics = topic_term.shape[0]
        cols = select_top_terms(topic_term, terms, self.cfg.top_terms)
        sub = np.asarray(topic_term[:, cols], dtype=np.float64)

        warnings: List[str] = []
        std = sub.std(axis=0)
        keep = std > self.cfg.min_std
        if not keep.all():
            warning = msg.ZERO_VARIANCE_DROPPED.format(count=int((~keep).sum()))
            logger.warning(warning)
            warnings.append(warning)
        kept_terms = [terms[j] for j, k in zip(cols, keep) if k]

        if n_topics < 2 or not keep.any():
            return self._degenerate(n_topics, kept_terms, warnings)

        z = (sub[:, keep] - sub[:, keep].mean(axis=0)) / std[keep]
        cov = np.atleast_2d(np.cov(z, rowvar=False))
        eigvals, eigvecs = np.linalg.eigh(cov)
        order = np.argsort(eigvals)[::-1]
        eigvals = np.clip(eigvals[order], 0.0, None)
        eigvecs = _flip_signs(eigvecs[:, order])

        total = eigvals.sum()
        if total <= 0:
            return self._degenerate(n_topics, kept_terms, warnings)

        n = self.cfg.n_components
        m = min(n, len(eigvals))
        coords = np.zeros((n_topics, n))
        coords[:, :m] = z @ eigvecs[:, :m]
        ratio = np.zeros(n)
        ratio[:m] = eigvals[:m] / total
        components = np.zeros((n, len(kept_terms)))
        components[:m] = eigvecs[:, :m].T

        for a in (coords, ratio, components):
            a.setflags(write=False)
        logger.info(
            "PCA on %d topics x %d terms: explained variance %s",
            n_topics,
            len(kept_terms),
            np.round(ratio, 4).tolist(),
        )
        return Projection(
            coordinates=coords,
            explained_variance_ratio=ratio,
            components=components,
            terms=tuple(kept_terms),
            warnings=tuple(warnings),
        )
