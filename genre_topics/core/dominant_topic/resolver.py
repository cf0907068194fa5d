from __future__ import annotations
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from genre_topics.core.dominant_topic.base import (
    DominantTopicResolver,
    GenreTopicProfile,
)
from genre_topics.utils.exceptions import PipelineError

STAGE = "dominant_topic"


def genre_rows_identity(
    doc_topic: np.ndarray, row_genres: Sequence[str]
) -> Dict[str, np.ndarray]:
    """
    Genre-level rows: the per-genre mean of a single row is the row itself.
    """
    if len(set(row_genres)) != len(row_genres):
        raise PipelineError(
            STAGE, "DUPLICATE_GENRE_ROWS", "Genre-level rows must be unique per genre."
        )
    return {g: doc_topic[i] for i, g in enumerate(row_genres)}


def genre_rows_mean(
    doc_topic: np.ndarray, row_genres: Sequence[str]
) -> Dict[str, np.ndarray]:
    """Document-level rows: mean topic weights over each genre's documents."""
    df = pd.DataFrame(doc_topic)
    df["genre"] = list(row_genres)
    means = df.groupby("genre", sort=True).mean()
    return {g: means.loc[g].to_numpy(dtype=np.float64) for g in means.index}


class ArgmaxTopicResolver(DominantTopicResolver):
    """Dominant topic = highest weight; ties go to the smallest topic id."""

    def resolve(
        self, doc_topic: np.ndarray, row_genres: Sequence[str], granularity: str
    ) -> List[GenreTopicProfile]:
        if granularity == "genre":
            by_genre = genre_rows_identity(doc_topic, row_genres)
        else:
            by_genre = genre_rows_mean(doc_topic, row_genres)

        out: List[GenreTopicProfile] = []
        for genre in sorted(by_genre):
            weights = np.array(by_genre[genre], dtype=np.float64)
            weights.setflags(write=False)
            k = int(np.argmax(weights))  # first maximum
            out.append(
                GenreTopicProfile(
                    genre=genre,
                    dominant_topic=k,
                    weight=float(weights[k]),
                    weights=weights,
                )
            )
        return out
