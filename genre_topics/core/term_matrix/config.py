from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class TermMatrixConfig:
    # "genre": one synthetic document per genre (summed counts)
    # "document": one row per input document
    granularity: Literal["genre", "document"] = "genre"
    max_features: Optional[int] = None  # cap on vocabulary size, by total count
    min_term_count: int = 1  # corpus-wide count a term needs to be kept
    n_jobs: int = 1
