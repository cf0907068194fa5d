from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class TopicModelConfig:
    backend: Literal["variational", "sklearn"] = "variational"
    num_topics: int = 10
    random_state: int = 42
    max_iter: int = 100  # EM iterations
    tol: float = 1e-4  # relative change of the evidence lower bound
    doc_topic_prior: Optional[float] = None  # alpha; None = 1 / num_topics
    topic_word_prior: Optional[float] = None  # eta; None = 1 / num_topics
    # per-row E-step inner loop
    e_step_max_iter: int = 100
    e_step_tol: float = 1e-3
    init: Literal["documents", "random"] = "documents"
    # rows per E-step chunk; fixed so results don't depend on n_jobs
    chunk_size: int = 256
    n_jobs: int = 1

    @property
    def alpha(self) -> float:
        return self.doc_topic_prior or 1.0 / self.num_topics

    @property
    def eta(self) -> float:
        return self.topic_word_prior or 1.0 / self.num_topics


@dataclass(frozen=True)
class TopicEstimationConfig:
    method: Literal["perplexity"] = "perplexity"
    min_k: int = 2
    max_k: int = 10
