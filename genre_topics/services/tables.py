from __future__ import annotations
from typing import Dict, List

import pandas as pd

from genre_topics.core.dominant_topic.base import GenreTopicProfile
from genre_topics.core.projection.base import Projection
from genre_topics.core.topic_summary.base import TopicSummary


def topic_terms_table(summary: TopicSummary) -> pd.DataFrame:
    records = [
        {"topic_id": tid, "rank": rank, "term": term, "weight": weight}
        for tid in sorted(summary.topics)
        for rank, (term, weight) in enumerate(summary.topics[tid], start=1)
    ]
    return pd.DataFrame(records, columns=["topic_id", "rank", "term", "weight"])


def topic_labels_table(summary: TopicSummary, labels: Dict[int, str]) -> pd.DataFrame:
    records = [
        {
            "topic_id": tid,
            "label": labels.get(tid, f"Topic {tid}"),
            "keywords": ", ".join(summary.keywords(tid)),
        }
        for tid in sorted(summary.topics)
    ]
    return pd.DataFrame(records, columns=["topic_id", "label", "keywords"])


def genre_topics_table(
    profiles: List[GenreTopicProfile], num_topics: int
) -> pd.DataFrame:
    topic_cols = [f"topic_{k}" for k in range(num_topics)]
    records = []
    for p in profiles:
        row = {"genre": p.genre, "dominant_topic": p.dominant_topic, "weight": p.weight}
        row.update({c: float(w) for c, w in zip(topic_cols, p.weights)})
        records.append(row)
    return pd.DataFrame(
        records, columns=["genre", "dominant_topic", "weight", *topic_cols]
    )


def topic_coordinates_table(projection: Projection) -> pd.DataFrame:
    n = projection.coordinates.shape[1]
    df = pd.DataFrame(
        projection.coordinates, columns=[f"pc{i + 1}" for i in range(n)]
    )
    df.insert(0, "topic_id", range(len(df)))
    return df
