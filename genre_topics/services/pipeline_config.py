from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping

from genre_topics.core.config import Settings
from genre_topics.core.genre_classification.config import GenreRule, GenreRulesConfig
from genre_topics.core.projection.config import ProjectionConfig
from genre_topics.core.stopword_removal.config import StopwordConfig
from genre_topics.core.term_matrix.config import TermMatrixConfig
from genre_topics.core.tokenization.config import TokenizationConfig
from genre_topics.core.topic_modeling.config import (
    TopicEstimationConfig,
    TopicModelConfig,
)
from genre_topics.core.topic_summary.config import TopicLabelConfig, TopicSummaryConfig
from genre_topics.utils.exceptions import InvalidConfigError


@dataclass(frozen=True)
class PipelineConfig:
    genres: GenreRulesConfig = field(default_factory=GenreRulesConfig)
    tokenization: TokenizationConfig = field(default_factory=TokenizationConfig)
    stopwords: StopwordConfig = field(default_factory=StopwordConfig)
    term_matrix: TermMatrixConfig = field(default_factory=TermMatrixConfig)
    topic_model: TopicModelConfig = field(default_factory=TopicModelConfig)
    estimation: TopicEstimationConfig = field(default_factory=TopicEstimationConfig)
    summary: TopicSummaryConfig = field(default_factory=TopicSummaryConfig)
    labels: TopicLabelConfig = field(default_factory=TopicLabelConfig)
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
    estimate_k: bool = False  # pick K by perplexity instead of num_topics
    genre_top_words: int = 100  # word-cloud terms per genre

    @classmethod
    def from_settings(cls, s: Settings) -> "PipelineConfig":
        return cls(
            term_matrix=TermMatrixConfig(granularity=s.GRANULARITY, n_jobs=s.N_JOBS),
            topic_model=TopicModelConfig(
                backend=s.TOPIC_BACKEND,
                num_topics=s.NUM_TOPICS or TopicModelConfig.num_topics,
                random_state=s.RANDOM_STATE,
                max_iter=s.MAX_ITER,
                tol=s.TOL,
                n_jobs=s.N_JOBS,
            ),
            summary=TopicSummaryConfig(topn_words=s.TOP_N_WORDS),
            projection=ProjectionConfig(top_terms=s.PCA_TOP_TERMS),
            estimate_k=s.NUM_TOPICS is None,
        )

    def with_overrides(self, overrides: Mapping[str, Any]) -> "PipelineConfig":
        """
        Apply a nested mapping (e.g. parsed YAML) of section -> {field: value}.
        Top-level scalars (``estimate_k``, ``genre_top_words``) are set directly.
        """
        sections = {f.name for f in fields(self)}
        changes: Dict[str, Any] = {}
        for name, value in (overrides or {}).items():
            if name not in sections:
                raise InvalidConfigError("config", f"Unknown config section '{name}'.")
            current = getattr(self, name)
            if not isinstance(value, Mapping):
                changes[name] = value
                continue
            changes[name] = _replace_section(name, current, value)
        return replace(self, **changes)


def _replace_section(name: str, current: Any, values: Mapping[str, Any]) -> Any:
    known = {f.name for f in fields(current)}
    unknown = set(values) - known
    if unknown:
        raise InvalidConfigError(
            "config", f"Unknown field(s) in '{name}': {', '.join(sorted(unknown))}."
        )
    coerced = dict(values)
    if isinstance(current, GenreRulesConfig) and "rules" in coerced:
        coerced["rules"] = tuple(
            GenreRule(label=r["label"], keywords=tuple(r["keywords"]))
            for r in coerced["rules"]
        )
    if isinstance(current, StopwordConfig):
        for key in ("custom_stopwords", "exclude_stopwords"):
            if key in coerced:
                coerced[key] = frozenset(coerced[key] or [])
    return replace(current, **coerced)
