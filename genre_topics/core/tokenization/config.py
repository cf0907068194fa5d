from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class TokenizationConfig:
    # tokens are maximal alphanumeric runs; everything else is a boundary
    pattern: str = r"[^\W_]+"
    lowercase: bool = True
    min_token_len: int = 1  # drop tokens shorter than this
    remove_numbers_only: bool = False  # drop tokens that are purely digits
