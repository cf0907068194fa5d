import numpy as np
import pytest
from scipy import sparse

from genre_topics.core.term_matrix.base import TermMatrix, Vocabulary


@pytest.fixture
def make_matrix():
    """Build a genre-level TermMatrix from a dense count table."""

    def _make(dense, rows, terms, granularity="genre", genres=None):
        counts = sparse.csr_matrix(np.asarray(dense, dtype=np.int64))
        return TermMatrix(
            counts=counts,
            row_ids=tuple(rows),
            row_genres=tuple(genres or rows),
            vocabulary=Vocabulary(tuple(terms)),
            granularity=granularity,
        )

    return _make


@pytest.fixture
def exclusive_term_records():
    # each genre only ever uses one term
    return [
        ("m1", "robot robot robot"),
        ("m2", "robot robot"),
        ("m3", "love love love"),
        ("m4", "love love"),
        ("m5", "battle battle battle"),
        ("m6", "battle battle battle battle"),
    ]
