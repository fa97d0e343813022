"""
suggest the next guess for the solver.

proxy for expected information gain: a word that splits the remaining
candidates into many distinct similarity values narrows the search
the most once its real similarity is revealed.
"""

from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from .config import Config, DEFAULT_CONFIG
from .embeddings import EmbeddingStore


class Suggestion(NamedTuple):
    word: str
    distinct: int  # distinct similarity buckets (0 for the bootstrap word)


def block_rows(n: int, max_cells: int) -> int:
    """rows of an (n, n) matrix that fit in max_cells (at least one)."""
    return max(1, max_cells // n)


def distinct_similarity_counts(
    vectors: NDArray[np.float32],
    ids: NDArray[np.int64],
    precision: int = 4,
    max_cells: int = 4_000_000,
) -> NDArray[np.int64]:
    """
    count distinct bucketed similarities for each candidate.

    args:
        vectors: full embedding matrix, shape (V, D)
        ids: candidate ids, shape (n,)
        precision: similarities are rounded to this many decimals
        max_cells: cells of the (n, n) similarity matrix held at once.
            each cell costs ~20 bytes (float32 product, float64 scaled
            copy, int64 buckets); at least one full row is always held

    returns:
        counts[i] = number of distinct round(sim(ids[i], ids[j]), precision)
        over all j, including i itself
    """
    n = len(ids)
    counts = np.zeros(n, dtype=np.int64)
    if n == 0:
        return counts

    cand = vectors[ids]
    scale = 10.0 ** precision
    rows = block_rows(n, max_cells)

    for start in range(0, n, rows):
        block = cand[start:start + rows] @ cand.T  # (b, n)
        buckets = np.rint(block.astype(np.float64) * scale).astype(np.int64)
        buckets.sort(axis=1)
        # distinct values in a sorted row = 1 + number of steps
        counts[start:start + len(buckets)] = 1 + np.count_nonzero(
            np.diff(buckets, axis=1), axis=1
        )

    return counts


def find_best(
    store: EmbeddingStore,
    ids: NDArray[np.int64],
    has_constraints: bool,
    config: Config = DEFAULT_CONFIG,
) -> Suggestion | None:
    """
    pick the candidate that best discriminates the remaining candidates.

    with no constraints yet, returns the configured bootstrap word instead
    of scanning the whole vocabulary. ties go to the first candidate in
    vocab order. returns None when no candidates remain.
    """
    if not has_constraints and config.bootstrap_word in store:
        return Suggestion(config.bootstrap_word, 0)

    if len(ids) == 0:
        return None

    counts = distinct_similarity_counts(
        store.vectors,
        ids,
        precision=config.advisor_precision,
        max_cells=config.advisor_block_cells,
    )
    best = int(np.argmax(counts))  # first max wins
    return Suggestion(store.words[int(ids[best])], int(counts[best]))
