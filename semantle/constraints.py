"""
constraint log and candidate filter.

a constraint says "similarity(word, secret) * 100 is about `value`".
a vocab word stays a candidate while it is consistent with every
constraint in the log, within a small tolerance that absorbs the 2-dp
rounding of the displayed scores.
"""

from dataclasses import dataclass
from typing import Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .embeddings import EmbeddingStore
from .errors import DuplicateConstraint, UnknownConstraint
from .similarity import similarities, similarity

DEFAULT_TOLERANCE = 0.005


@dataclass(frozen=True)
class Constraint:
    word: str
    value: float


class ConstraintLog:
    """ordered (word, value) observations, at most one per word."""

    def __init__(self, constraints: list[Constraint] | None = None):
        self._entries: list[Constraint] = []
        for c in constraints or []:
            self.add(c.word, c.value)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Constraint]:
        return iter(list(self._entries))

    def __contains__(self, word: object) -> bool:
        return any(c.word == word for c in self._entries)

    def __repr__(self) -> str:
        return repr([(c.word, c.value) for c in self._entries])

    def _index(self, word: str) -> int:
        for i, c in enumerate(self._entries):
            if c.word == word:
                return i
        raise UnknownConstraint(word)

    def get(self, word: str) -> Constraint:
        return self._entries[self._index(word)]

    def words(self) -> list[str]:
        return [c.word for c in self._entries]

    def add(self, word: str, value: float) -> Constraint:
        if word in self:
            raise DuplicateConstraint(word)
        constraint = Constraint(word, float(value))
        self._entries.append(constraint)
        return constraint

    def edit(self, word: str, value: float) -> Constraint:
        """replace the value in place, keeping insertion order."""
        i = self._index(word)
        constraint = Constraint(word, float(value))
        self._entries[i] = constraint
        return constraint

    def remove(self, word: str) -> Constraint:
        return self._entries.pop(self._index(word))


def _window(target: float, tolerance: float) -> tuple[np.float32, np.float32]:
    # float32 bounds so the scalar and vectorized checks agree bit for bit
    return np.float32(target - tolerance), np.float32(target + tolerance)


def is_consistent(
    a: ArrayLike,
    b: ArrayLike,
    target: float,
    tolerance: float = DEFAULT_TOLERANCE,
) -> bool:
    """True if similarity(a, b) * 100 lies in [target - tol, target + tol)."""
    lo, hi = _window(target, tolerance)
    pct = np.float32(similarity(a, b)) * np.float32(100.0)
    return bool(lo <= pct < hi)


def narrow(
    vectors: NDArray[np.float32],
    ids: NDArray[np.int64],
    reference: ArrayLike,
    target: float,
    tolerance: float = DEFAULT_TOLERANCE,
) -> NDArray[np.int64]:
    """
    keep the ids whose vector is consistent with one constraint.

    args:
        vectors: full embedding matrix, shape (V, D)
        ids: current candidate ids (sorted)
        reference: vector of the constrained word
        target: declared percentage similarity
        tolerance: half-width of the window on the percentage scale

    returns:
        subset of `ids`, order preserved
    """
    pct = similarities(vectors[ids], reference) * np.float32(100.0)
    lo, hi = _window(target, tolerance)
    keep = (pct >= lo) & (pct < hi)
    return ids[keep]


def filter_candidates(
    store: EmbeddingStore,
    log: ConstraintLog,
    tolerance: float = DEFAULT_TOLERANCE,
    ids: NDArray[np.int64] | None = None,
) -> NDArray[np.int64]:
    """
    recompute the candidate set from scratch (or from `ids` if given).

    every constraint in the log is applied in order, so the result is
    the set of words consistent with all of them.
    """
    current = store.all_ids() if ids is None else np.asarray(ids, dtype=np.int64)
    for c in log:
        if len(current) == 0:
            break
        current = narrow(store.vectors, current, store.vector(c.word), c.value, tolerance)
    return current
