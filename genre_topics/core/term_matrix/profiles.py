from __future__ import annotations
from collections import Counter
from typing import Sequence

import numpy as np
import pandas as pd

from genre_topics.core.term_matrix.base import Document, TermMatrix


def genre_counts(documents: Sequence[Document]) -> pd.DataFrame:
    """Number of documents per genre, most frequent first."""
    counter = Counter(d.genre for d in documents)
    rows = sorted(counter.items(), key=lambda gc: (-gc[1], gc[0]))
    return pd.DataFrame(rows, columns=["genre", "count"])


def genre_top_terms(matrix: TermMatrix, top_n: int = 100) -> pd.DataFrame:
    """
    Most frequent terms per genre (word-cloud input).

    Rows of a document-level matrix are summed per genre first.
    """
    genres = sorted(set(matrix.row_genres))
    terms = matrix.vocabulary.terms
    records = []
    for genre in genres:
        idx = [i for i, g in enumerate(matrix.row_genres) if g == genre]
        totals = np.asarray(matrix.counts[idx].sum(axis=0)).ravel()
        nz = np.flatnonzero(totals)
        ranked = sorted(nz, key=lambda j: (-totals[j], terms[j]))[:top_n]
        for rank, j in enumerate(ranked, start=1):
            records.append(
                {
                    "genre": genre,
                    "rank": rank,
                    "term": terms[j],
                    "count": int(totals[j]),
                }
            )
    return pd.DataFrame(records, columns=["genre", "rank", "term", "count"])
