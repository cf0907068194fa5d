from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd

from genre_topics.messages import pipeline_messages as msg
from genre_topics.utils.exceptions import MissingColumnError


def records_from_frame(
    df: pd.DataFrame, text_column: str = "Plot", id_column: Optional[str] = None
) -> List[Tuple[str, str]]:
    """(identifier, text) pairs; missing text becomes an empty string."""
    for col in filter(None, (text_column, id_column)):
        if col not in df.columns:
            raise MissingColumnError(
                "ingestion", msg.TEXT_COLUMN_MISSING.format(column=col)
            )
    texts = df[text_column].fillna("").astype(str)
    ids = df[id_column].astype(str) if id_column else df.index.astype(str)
    return list(zip(ids, texts))


def load_records(
    path: str | Path, text_column: str = "Plot", id_column: Optional[str] = None
) -> List[Tuple[str, str]]:
    df = pd.read_csv(path)
    return records_from_frame(df, text_column=text_column, id_column=id_column)
