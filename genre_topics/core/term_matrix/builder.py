from __future__ import annotations
import logging
from collections import Counter, defaultdict
from dataclasses import replace
from typing import Dict, List, Sequence, Tuple, Union

import numpy as np
from scipy import sparse

from genre_topics.core.term_matrix.base import (
    Document,
    TermMatrix,
    TermMatrixBuilder,
    Vocabulary,
    VocabularyBuilder,
)
from genre_topics.core.term_matrix.config import TermMatrixConfig
from genre_topics.messages import pipeline_messages as msg
from genre_topics.utils.exceptions import (
    EmptyCorpusError,
    EmptyMatrixError,
    EmptyVocabularyError,
)
from genre_topics.utils.parallel import even_chunk_size, map_chunks

logger = logging.getLogger(__name__)

STAGE = "term_matrix"

RowKey = Union[str, int]
RowCounts = Dict[RowKey, Counter]


class CountVocabularyBuilder(VocabularyBuilder):
    """
    Terms sorted lexically, optionally capped to the ``max_features`` most
    frequent (ties broken by term).
    """

    def __init__(self, config: TermMatrixConfig | None = None):
        self.cfg = config or TermMatrixConfig()

    def build_from_totals(self, totals: Counter) -> Vocabulary:
        kept = [
            (t, c) for t, c in totals.items() if c >= max(1, self.cfg.min_term_count)
        ]
        if self.cfg.max_features is not None:
            kept.sort(key=lambda tc: (-tc[1], tc[0]))
            kept = kept[: self.cfg.max_features]
        terms = tuple(sorted(t for t, _ in kept))
        if not terms:
            raise EmptyVocabularyError(STAGE, msg.EMPTY_VOCABULARY)
        return Vocabulary(terms)

    def build(self, term_lists: Sequence[List[str]]) -> Vocabulary:
        totals: Counter = Counter()
        for terms in term_lists:
            totals.update(terms)
        return self.build_from_totals(totals)


def drop_empty_rows(matrix: TermMatrix) -> TermMatrix:
    """Remove rows whose total count is zero; record them as warnings."""
    totals = np.asarray(matrix.counts.sum(axis=1)).ravel()
    keep = np.flatnonzero(totals > 0)
    if len(keep) == matrix.n_rows:
        return matrix

    dropped = tuple(matrix.row_ids[i] for i in np.flatnonzero(totals == 0))
    warning = msg.EMPTY_ROWS_DROPPED.format(
        count=len(dropped), rows=", ".join(dropped)
    )
    logger.warning(warning)
    if len(keep) == 0:
        raise EmptyMatrixError(STAGE, msg.EMPTY_MATRIX)

    counts = matrix.counts[keep].tocsr()
    return replace(
        matrix,
        counts=counts,
        row_ids=tuple(matrix.row_ids[i] for i in keep),
        row_genres=tuple(matrix.row_genres[i] for i in keep),
        dropped_rows=matrix.dropped_rows + dropped,
        warnings=matrix.warnings + (warning,),
    )


class SparseTermMatrixBuilder(TermMatrixBuilder):
    """Adapter: counts terms per row key into a ``scipy.sparse.csr_matrix``."""

    def __init__(
        self,
        config: TermMatrixConfig | None = None,
        vocabulary_builder: CountVocabularyBuilder | None = None,
    ):
        self.cfg = config or TermMatrixConfig()
        self.vocabulary_builder = vocabulary_builder or CountVocabularyBuilder(
            self.cfg
        )

    def _row_key(self, position: int, doc: Document) -> RowKey:
        # document rows are keyed by position; ids need not be unique
        return doc.genre if self.cfg.granularity == "genre" else position

    def _count_partition(
        self, triples: Sequence[Tuple[int, Document, List[str]]]
    ) -> RowCounts:
        out: RowCounts = defaultdict(Counter)
        for position, doc, terms in triples:
            out[self._row_key(position, doc)].update(terms)
        return out

    def _row_layout(
        self, documents: Sequence[Document]
    ) -> Tuple[List[RowKey], List[str], List[str]]:
        """Row keys in matrix order, with their row labels and genres."""
        if self.cfg.granularity == "genre":
            genres = sorted({doc.genre for doc in documents})
            return list(genres), list(genres), list(genres)
        keys = list(range(len(documents)))
        return (
            keys,
            [doc.doc_id for doc in documents],
            [doc.genre for doc in documents],
        )

    def build(
        self, documents: Sequence[Document], term_lists: Sequence[List[str]]
    ) -> TermMatrix:
        if not documents:
            raise EmptyCorpusError(STAGE, msg.EMPTY_CORPUS)

        triples = [
            (i, doc, terms) for i, (doc, terms) in enumerate(zip(documents, term_lists))
        ]
        partials = map_chunks(
            self._count_partition,
            triples,
            even_chunk_size(len(triples), self.cfg.n_jobs),
            self.cfg.n_jobs,
        )

        # merge in partition order
        row_counts: RowCounts = defaultdict(Counter)
        totals: Counter = Counter()
        for part in partials:
            for key, counter in part.items():
                row_counts[key].update(counter)
                totals.update(counter)

        vocabulary = self.vocabulary_builder.build_from_totals(totals)
        row_keys, row_ids, row_genres = self._row_layout(documents)

        rows: List[int] = []
        cols: List[int] = []
        data: List[int] = []
        for r, key in enumerate(row_keys):
            for term, c in row_counts.get(key, Counter()).items():
                j = vocabulary.index.get(term)
                if j is None:
                    continue
                rows.append(r)
                cols.append(j)
                data.append(c)

        counts = sparse.csr_matrix(
            (np.asarray(data, dtype=np.int64), (rows, cols)),
            shape=(len(row_keys), len(vocabulary)),
            dtype=np.int64,
        )
        counts.sort_indices()

        matrix = TermMatrix(
            counts=counts,
            row_ids=tuple(row_ids),
            row_genres=tuple(row_genres),
            vocabulary=vocabulary,
            granularity=self.cfg.granularity,
        )
        matrix = drop_empty_rows(matrix)
        logger.info(
            "Built %s-level term matrix: %d rows x %d terms (%d non-zero)",
            matrix.granularity,
            matrix.shape[0],
            matrix.shape[1],
            matrix.counts.nnz,
        )
        return matrix
