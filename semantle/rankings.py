"""
rank vocabulary words by similarity to a reference vector.

this is used twice: once per game to build the authoritative rank
table against the secret, and on demand by the solver's neighbor query.
"""

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .embeddings import EmbeddingStore
from .errors import MalformedInput
from .similarity import similarities


@dataclass
class RankTable:
    """results from compute_rankings."""

    # raw similarity of every vocab word to the reference
    scores: NDArray[np.float32]

    # vocab ids sorted by descending score (stable: ties keep vocab order)
    order: NDArray[np.int64]

    # rank[i] = 0-based position of word i in `order` (0 = closest)
    rank: NDArray[np.int64]

    def __len__(self) -> int:
        return len(self.order)

    def percent(self, word_id: int, decimals: int | None = 2) -> float:
        pct = float(self.scores[word_id]) * 100.0
        return round(pct, decimals) if decimals is not None else pct

    def id_at(self, rank_index: int) -> int:
        return int(self.order[rank_index])


class Neighbor(NamedTuple):
    word: str
    score: float  # percentage similarity
    rank: int  # 1 = most similar of the others


def compute_rankings(
    vectors: NDArray[np.float32],
    reference: ArrayLike,
) -> RankTable:
    """
    score every row against `reference` and rank them.

    args:
        vectors: normalized embeddings, shape (V, D)
        reference: normalized vector, shape (D,)

    returns:
        RankTable with scores, sort order and rank index per row.
        tied scores get consecutive rank indices, never a shared one.
    """
    V = vectors.shape[0]

    # cosine similarities (dot product since vectors are normalized)
    scores = similarities(vectors, reference)

    # stable sort on the negated scores gives descending order while
    # keeping equal scores in vocab order
    order = np.argsort(-scores, kind="stable").astype(np.int64)

    rank = np.empty(V, dtype=np.int64)
    rank[order] = np.arange(V, dtype=np.int64)

    return RankTable(scores=scores, order=order, rank=rank)


def pin_to_top(table: RankTable, word_id: int) -> RankTable:
    """
    move one id to rank 0, shifting everything above it down by one.

    needed because self-similarity isn't always the top score: vectors
    that are not exactly unit length, or duplicated vectors.
    """
    order = np.concatenate(
        ([word_id], table.order[table.order != word_id])
    ).astype(np.int64)
    rank = np.empty(len(order), dtype=np.int64)
    rank[order] = np.arange(len(order), dtype=np.int64)
    return RankTable(scores=table.scores, order=order, rank=rank)


def rank_table_for_word(store: EmbeddingStore, word: str) -> RankTable:
    """rank the whole vocabulary against one of its words (which gets rank 0)."""
    word_id = store.id_of(word)
    return pin_to_top(compute_rankings(store.vectors, store.vectors[word_id]), word_id)


def nearest_words(
    store: EmbeddingStore,
    word: str,
    n: int | None = None,
    ascending: bool = False,
    pool: NDArray[np.int64] | None = None,
    decimals: int | None = 2,
) -> list[Neighbor]:
    """
    list the words closest to `word`, excluding `word` itself.

    args:
        store: vocabulary
        word: query word (must be in vocab)
        n: how many to return (None = all)
        ascending: if True, return the n least similar, least similar first
        pool: restrict the ranking to these vocab ids (e.g. current candidates)
        decimals: rounding for the returned percentage scores

    returns:
        list of Neighbor(word, score, rank) with rank counted from 1
        among the ranked words in descending order
    """
    if n is not None and n < 0:
        raise MalformedInput(detail=f"count must be non-negative, got {n}")

    query_id = store.id_of(word)
    ids = store.all_ids() if pool is None else np.asarray(pool, dtype=np.int64)
    ids = ids[ids != query_id]

    table = compute_rankings(store.vectors[ids], store.vectors[query_id])
    total = len(table)

    if ascending:
        positions = range(total - 1, -1, -1)
    else:
        positions = range(total)
    if n is not None:
        positions = positions[:n]

    neighbors: list[Neighbor] = []
    for pos in positions:
        local = table.id_at(pos)
        neighbors.append(
            Neighbor(
                word=store.words[int(ids[local])],
                score=table.percent(local, decimals),
                rank=pos + 1,
            )
        )
    return neighbors
