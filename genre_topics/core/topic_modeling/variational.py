from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
from scipy import sparse
from scipy.special import digamma, gammaln, logsumexp

from genre_topics.core.term_matrix.base import TermMatrix
from genre_topics.core.topic_modeling.base import TopicModelEngine, TopicModelResult
from genre_topics.core.topic_modeling.config import TopicModelConfig
from genre_topics.core.topic_modeling.utils import (
    normalize_rows,
    perplexity_from_bound,
    validate_inputs,
)
from genre_topics.messages import pipeline_messages as msg
from genre_topics.utils.parallel import map_chunks

logger = logging.getLogger(__name__)

EPS = np.finfo(np.float64).eps


@dataclass(frozen=True, eq=False)
class VariationalState:
    lam: np.ndarray  # (K, V) Dirichlet parameters of the topics
    gamma: np.ndarray  # (D, K) Dirichlet parameters of the row mixtures


def dirichlet_expectation(a: np.ndarray) -> np.ndarray:
    """E[log x] for x ~ Dir(a), row-wise for 2-d input."""
    if a.ndim == 1:
        return digamma(a) - digamma(np.sum(a))
    return digamma(a) - digamma(np.sum(a, axis=1))[:, np.newaxis]


def _row(X: sparse.csr_matrix, d: int) -> Tuple[np.ndarray, np.ndarray]:
    start, stop = X.indptr[d], X.indptr[d + 1]
    return X.indices[start:stop], X.data[start:stop].astype(np.float64)


def _e_step_rows(
    rows: Sequence[int],
    X: sparse.csr_matrix,
    exp_elog_beta: np.ndarray,
    gamma0: np.ndarray,
    alpha: float,
    max_iter: int,
    tol: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """Per-row mixture updates for a chunk of rows; returns (gamma, sstats)."""
    n_topics = exp_elog_beta.shape[0]
    gamma = np.empty((len(rows), n_topics))
    sstats = np.zeros_like(exp_elog_beta)
    for i, d in enumerate(rows):
        ids, cts = _row(X, d)
        gamma_d = gamma0[d].copy()
        exp_elog_theta_d = np.exp(dirichlet_expectation(gamma_d))
        exp_elog_beta_d = exp_elog_beta[:, ids]
        phinorm = exp_elog_theta_d @ exp_elog_beta_d + EPS

        for _ in range(max_iter):
            last_gamma = gamma_d
            gamma_d = alpha + exp_elog_theta_d * ((cts / phinorm) @ exp_elog_beta_d.T)
            exp_elog_theta_d = np.exp(dirichlet_expectation(gamma_d))
            phinorm = exp_elog_theta_d @ exp_elog_beta_d + EPS
            if np.mean(np.abs(gamma_d - last_gamma)) < tol:
                break

        gamma[i] = gamma_d
        sstats[:, ids] += np.outer(exp_elog_theta_d, cts / phinorm)
    return gamma, sstats


def e_step(
    state: VariationalState,
    X: sparse.csr_matrix,
    cfg: TopicModelConfig,
    exp_elog_beta: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    rows = list(range(X.shape[0]))
    parts = map_chunks(
        lambda chunk: _e_step_rows(
            chunk,
            X,
            exp_elog_beta,
            state.gamma,
            cfg.alpha,
            cfg.e_step_max_iter,
            cfg.e_step_tol,
        ),
        rows,
        cfg.chunk_size,
        cfg.n_jobs,
    )
    # fixed-order merge
    gamma = np.vstack([g for g, _ in parts])
    sstats = np.zeros_like(exp_elog_beta)
    for _, s in parts:
        sstats += s
    return gamma, sstats


def approx_bound(
    X: sparse.csr_matrix, state: VariationalState, alpha: float, eta: float
) -> float:
    """Evidence lower bound of the corpus under the variational posterior."""
    gamma, lam = state.gamma, state.lam
    n_topics, n_terms = lam.shape
    elog_theta = dirichlet_expectation(gamma)
    elog_beta = dirichlet_expectation(lam)

    score = 0.0
    for d in range(X.shape[0]):
        ids, cts = _row(X, d)
        norm_phi = logsumexp(elog_theta[d][:, np.newaxis] + elog_beta[:, ids], axis=0)
        score += float(np.dot(cts, norm_phi))

    # E[log p(theta | alpha) - log q(theta | gamma)]
    score += np.sum((alpha - gamma) * elog_theta)
    score += np.sum(gammaln(gamma) - gammaln(alpha))
    score += np.sum(gammaln(alpha * n_topics) - gammaln(np.sum(gamma, axis=1)))

    # E[log p(beta | eta) - log q(beta | lambda)]
    score += np.sum((eta - lam) * elog_beta)
    score += np.sum(gammaln(lam) - gammaln(eta))
    score += np.sum(gammaln(eta * n_terms) - gammaln(np.sum(lam, axis=1)))
    return float(score)


def initial_state(
    X: sparse.csr_matrix, cfg: TopicModelConfig, rng: np.random.Generator
) -> VariationalState:
    """
    Gamma(100, 1/100) noise around 1; with ``init="documents"`` topic k also
    gets the counts of one distinct, seed-chosen row.
    """
    n_rows, n_terms = X.shape
    k = cfg.num_topics
    lam = rng.gamma(100.0, 0.01, (k, n_terms))
    if cfg.init == "documents":
        seeds = rng.permutation(n_rows)[: min(k, n_rows)]
        for topic, d in enumerate(seeds):
            lam[topic] += X[d].toarray().ravel()
    gamma = rng.gamma(100.0, 0.01, (n_rows, k))
    return VariationalState(lam=lam, gamma=gamma)


def variational_step(
    state: VariationalState, X: sparse.csr_matrix, cfg: TopicModelConfig
) -> Tuple[VariationalState, float]:
    """
    One EM iteration: E-step on every row, then M-step on the topics.

    Pure: returns the next state and its evidence lower bound without
    touching ``state``.
    """
    exp_elog_beta = np.exp(dirichlet_expectation(state.lam))
    gamma, sstats = e_step(state, X, cfg, exp_elog_beta)
    lam = cfg.eta + sstats * exp_elog_beta
    next_state = VariationalState(lam=lam, gamma=gamma)
    return next_state, approx_bound(X, next_state, cfg.alpha, cfg.eta)


class VariationalLDAEngine(TopicModelEngine):
    """Adapter: batch mean-field variational Bayes for LDA."""

    backend = "variational"

    def __init__(self, cfg: TopicModelConfig):
        self.cfg = cfg

    def fit(self, matrix: TermMatrix) -> TopicModelResult:
        warnings = validate_inputs(matrix, self.cfg)
        X = matrix.counts.tocsr()
        rng = np.random.default_rng(self.cfg.random_state)

        state = initial_state(X, self.cfg, rng)
        best_state, best_bound = state, -np.inf
        prev_bound = None
        delta = np.inf
        converged = False
        n_iter = 0
        for n_iter in range(1, self.cfg.max_iter + 1):
            state, bound = variational_step(state, X, self.cfg)
            if bound >= best_bound:
                best_state, best_bound = state, bound
            if prev_bound is not None:
                delta = abs(bound - prev_bound) / max(abs(prev_bound), EPS)
                logger.debug("iter %d: bound=%.6f delta=%.3e", n_iter, bound, delta)
                if delta < self.cfg.tol:
                    converged = True
                    break
            prev_bound = bound

        if not converged:
            warning = msg.NOT_CONVERGED.format(
                max_iter=self.cfg.max_iter, delta=delta, tol=self.cfg.tol
            )
            logger.warning(warning)
            warnings.append(warning)

        total = float(X.sum())
        logger.info(
            "Variational LDA: K=%d, %d rows, %d iterations, converged=%s",
            self.cfg.num_topics,
            X.shape[0],
            n_iter,
            converged,
        )
        return TopicModelResult(
            topic_term=normalize_rows(best_state.lam),
            doc_topic=normalize_rows(best_state.gamma),
            row_ids=matrix.row_ids,
            row_genres=matrix.row_genres,
            vocabulary=matrix.vocabulary,
            granularity=matrix.granularity,
            backend=self.backend,
            n_iter=n_iter,
            converged=converged,
            bound=best_bound,
            perplexity=perplexity_from_bound(best_bound, total),
            warnings=tuple(warnings),
        )
