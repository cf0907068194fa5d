from __future__ import annotations
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def chunks(items: Sequence[T], chunk_size: int) -> List[Sequence[T]]:
    """Contiguous slices of ``items``, each at most ``chunk_size`` long."""
    size = max(1, chunk_size)
    return [items[i : i + size] for i in range(0, len(items), size)]


def map_chunks(
    fn: Callable[[Sequence[T]], R],
    items: Sequence[T],
    chunk_size: int,
    n_jobs: int = 1,
) -> List[R]:
    """
    Apply ``fn`` to fixed-size contiguous chunks of ``items``.

    Chunk boundaries depend only on ``chunk_size`` and results come back in
    chunk order, so a fixed-order merge gives the same numbers for any
    ``n_jobs``.
    """
    parts = chunks(items, chunk_size)
    if n_jobs <= 1 or len(parts) <= 1:
        return [fn(p) for p in parts]
    with ThreadPoolExecutor(max_workers=min(n_jobs, len(parts))) as pool:
        return list(pool.map(fn, parts))


def even_chunk_size(n_items: int, n_jobs: int) -> int:
    return max(1, math.ceil(n_items / max(1, n_jobs)))
