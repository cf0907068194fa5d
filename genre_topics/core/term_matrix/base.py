from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Sequence, Tuple

from scipy import sparse


@dataclass(frozen=True)
class Document:
    doc_id: str
    text: str
    genre: str


@dataclass(frozen=True)
class Vocabulary:
    terms: Tuple[str, ...]
    index: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(
            self,
            "index",
            MappingProxyType({t: i for i, t in enumerate(self.terms)}),
        )

    def __len__(self) -> int:
        return len(self.terms)

    def __contains__(self, term: object) -> bool:
        return term in self.index


@dataclass(frozen=True, eq=False)
class TermMatrix:
    """
    Sparse (row, term) -> count table.

    With ``granularity == "genre"`` every row is the summed counts of all
    documents of one genre and ``row_ids == row_genres``. With
    ``"document"`` every row is one input document, in input order; ``row_ids``
    are the document ids and may repeat.
    """

    counts: sparse.csr_matrix  # shape (D, V), int64
    row_ids: Tuple[str, ...]
    row_genres: Tuple[str, ...]
    vocabulary: Vocabulary
    granularity: str = "genre"
    dropped_rows: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()

    @property
    def shape(self) -> Tuple[int, int]:
        return self.counts.shape

    @property
    def n_rows(self) -> int:
        return self.counts.shape[0]


class VocabularyBuilder(ABC):
    @abstractmethod
    def build(self, term_lists: Sequence[List[str]]) -> Vocabulary: ...


class TermMatrixBuilder(ABC):
    @abstractmethod
    def build(
        self, documents: Sequence[Document], term_lists: Sequence[List[str]]
    ) -> TermMatrix:
        """
        ``term_lists[i]`` are the normalized terms of ``documents[i]``.
        """
        ...
