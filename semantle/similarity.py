"""
similarity between embedding vectors.

vectors are L2-normalized upstream, so a plain dot product is the
cosine similarity, in [-1, 1]. the game talks in percentages
(x100), usually rounded to 2 decimals for display.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray


def similarity(a: ArrayLike, b: ArrayLike) -> float:
    """dot product of two equal-length vectors (no normalization)."""
    a = np.asarray(a, dtype=np.float32)
    b = np.asarray(b, dtype=np.float32)
    if a.shape != b.shape:
        raise ValueError(f"vector length mismatch: {a.shape} vs {b.shape}")
    return float(np.dot(a, b))


def percent_similarity(a: ArrayLike, b: ArrayLike, decimals: int | None = None) -> float:
    """similarity on the -100..100 scale, optionally rounded."""
    pct = similarity(a, b) * 100.0
    if decimals is not None:
        pct = round(pct, decimals)
    return pct


def similarities(matrix: NDArray[np.float32], reference: ArrayLike) -> NDArray[np.float32]:
    """
    dot every row of `matrix` against `reference`.

    returns shape (rows,) array of raw similarities.
    """
    reference = np.asarray(reference, dtype=np.float32)
    if matrix.shape[-1] != reference.shape[0]:
        raise ValueError(
            f"vector length mismatch: {matrix.shape[-1]} vs {reference.shape[0]}"
        )
    return matrix @ reference
