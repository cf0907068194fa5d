from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from genre_topics.core.dominant_topic.base import (
    DominantTopicResolver,
    GenreTopicProfile,
)
from genre_topics.core.dominant_topic.resolver import ArgmaxTopicResolver
from genre_topics.core.genre_classification.base import GenreClassifier
from genre_topics.core.genre_classification.classifier import KeywordGenreClassifier
from genre_topics.core.projection.base import DimensionalityReducer, Projection
from genre_topics.core.projection.pca import StandardizedPCAReducer
from genre_topics.core.stopword_removal.removal import DefaultStopwordRemover
from genre_topics.core.term_matrix.base import Document, TermMatrix, TermMatrixBuilder
from genre_topics.core.term_matrix.builder import (
    SparseTermMatrixBuilder,
    drop_empty_rows,
)
from genre_topics.core.term_matrix.profiles import genre_counts, genre_top_terms
from genre_topics.core.tokenization.analyzer import TextAnalyzer
from genre_topics.core.tokenization.tokenizer import DefaultTokenizer
from genre_topics.core.topic_modeling.base import TopicModelResult
from genre_topics.core.topic_modeling.estimation import (
    EngineFactory,
    PerplexityTopicEstimator,
)
from genre_topics.core.topic_modeling.factory import build_engine
from genre_topics.core.topic_summary.base import (
    TopicLabeler,
    TopicSummarizer,
    TopicSummary,
)
from genre_topics.core.topic_summary.labelers import DefaultHeuristicLabeler
from genre_topics.core.topic_summary.summarizer import RankedTopicSummarizer
from genre_topics.messages import pipeline_messages as msg
from genre_topics.services.pipeline_config import PipelineConfig
from genre_topics.services.tables import (
    genre_topics_table,
    topic_coordinates_table,
    topic_labels_table,
    topic_terms_table,
)
from genre_topics.utils.exceptions import EmptyCorpusError

logger = logging.getLogger(__name__)

Record = Tuple[str, str]  # (identifier, text)


@dataclass(frozen=True, eq=False)
class PipelineResult:
    documents: Tuple[Document, ...]
    matrix: TermMatrix
    model: TopicModelResult
    summary: TopicSummary
    labels: Dict[int, str]
    profiles: Tuple[GenreTopicProfile, ...]
    projection: Projection
    # tabular outputs for the rendering layer
    genre_counts: pd.DataFrame
    genre_top_terms: pd.DataFrame
    topic_terms: pd.DataFrame
    topic_labels: pd.DataFrame
    genre_topics: pd.DataFrame
    topic_coordinates: pd.DataFrame
    warnings: Tuple[str, ...]


class GenreTopicService:
    """
    Orchestrates classification -> terms -> term matrix -> topic model, then
    fans out to topic summaries, per-genre dominant topics and the PCA view.
    """

    def __init__(
        self,
        cfg: PipelineConfig,
        classifier: GenreClassifier,
        analyzer: TextAnalyzer,
        matrix_builder: TermMatrixBuilder,
        summarizer: TopicSummarizer,
        labeler: TopicLabeler,
        resolver: DominantTopicResolver,
        reducer: DimensionalityReducer,
        engine_factory: EngineFactory = build_engine,
    ):
        self.cfg = cfg
        self.classifier = classifier
        self.analyzer = analyzer
        self.matrix_builder = matrix_builder
        self.summarizer = summarizer
        self.labeler = labeler
        self.resolver = resolver
        self.reducer = reducer
        self.engine_factory = engine_factory

    @classmethod
    def from_config(cls, cfg: PipelineConfig | None = None) -> "GenreTopicService":
        cfg = cfg or PipelineConfig()
        return cls(
            cfg=cfg,
            classifier=KeywordGenreClassifier(cfg.genres),
            analyzer=TextAnalyzer(
                DefaultTokenizer(cfg.tokenization),
                DefaultStopwordRemover(cfg.stopwords),
            ),
            matrix_builder=SparseTermMatrixBuilder(cfg.term_matrix),
            summarizer=RankedTopicSummarizer(cfg.summary),
            labeler=DefaultHeuristicLabeler(cfg.labels),
            resolver=ArgmaxTopicResolver(),
            reducer=StandardizedPCAReducer(cfg.projection),
        )

    def classify(self, records: Iterable[Record]) -> List[Document]:
        docs = [
            Document(
                doc_id=str(doc_id), text=text, genre=self.classifier.classify(text)
            )
            for doc_id, text in records
        ]
        if not docs:
            raise EmptyCorpusError("classification", msg.EMPTY_CORPUS)
        logger.info("Classified %d documents", len(docs))
        return docs

    def build_matrix(self, documents: List[Document]) -> TermMatrix:
        term_lists = [self.analyzer.terms(d.text) for d in documents]
        # no-op when the builder already dropped its empty rows
        return drop_empty_rows(self.matrix_builder.build(documents, term_lists))

    def fit_topics(self, matrix: TermMatrix) -> TopicModelResult:
        model_cfg = self.cfg.topic_model
        if self.cfg.estimate_k:
            est = self.cfg.estimation
            estimator = PerplexityTopicEstimator(model_cfg, self.engine_factory)
            k = estimator.estimate_k(matrix, est.min_k, est.max_k)
            logger.info("Estimated number of topics: %d", k)
            model_cfg = replace(model_cfg, num_topics=k)
        return self.engine_factory(model_cfg).fit(matrix)

    def run(
        self,
        records: Iterable[Record],
        *,
        label_map: Optional[Dict[int, str]] = None,
    ) -> PipelineResult:
        documents = self.classify(records)
        matrix = self.build_matrix(documents)
        model = self.fit_topics(matrix)

        terms = model.vocabulary.terms
        summary = self.summarizer.summarize(model.topic_term, terms)
        labels = self.labeler.label(summary, explicit_map=label_map)
        profiles = tuple(
            self.resolver.resolve(model.doc_topic, model.row_genres, model.granularity)
        )
        projection = self.reducer.project(model.topic_term, terms)

        warnings = matrix.warnings + model.warnings + projection.warnings
        logger.info(msg.PIPELINE_COMPLETED)
        return PipelineResult(
            documents=tuple(documents),
            matrix=matrix,
            model=model,
            summary=summary,
            labels=labels,
            profiles=profiles,
            projection=projection,
            genre_counts=genre_counts(documents),
            genre_top_terms=genre_top_terms(matrix, self.cfg.genre_top_words),
            topic_terms=topic_terms_table(summary),
            topic_labels=topic_labels_table(summary, labels),
            genre_topics=genre_topics_table(list(profiles), model.num_topics),
            topic_coordinates=topic_coordinates_table(projection),
            warnings=warnings,
        )
