import sys
from pathlib import Path

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from semantle.embeddings import EmbeddingStore


@pytest.fixture
def tiny_store() -> EmbeddingStore:
    """cat / dog / car in 2-D, already (roughly) normalized."""
    return EmbeddingStore.from_mapping({
        "cat": [1.0, 0.0],
        "dog": [0.9, 0.1],
        "car": [0.0, 1.0],
    })


@pytest.fixture
def random_store() -> EmbeddingStore:
    """200 random unit vectors in 8-D, words w000..w199."""
    rng = np.random.default_rng(1234)
    vectors = rng.normal(size=(200, 8)).astype(np.float32)
    vectors /= np.linalg.norm(vectors, axis=1, keepdims=True)
    words = [f"w{i:03d}" for i in range(200)]
    return EmbeddingStore(words, vectors)


@pytest.fixture
def grid_store() -> EmbeddingStore:
    """200 random 8-D vectors with entries in {-0.5, -0.25, 0, 0.25, 0.5}.

    every dot product is exact in float32 and lands on a 2-dp value on
    the percentage scale, so declared values never sit on a window edge.
    """
    rng = np.random.default_rng(4321)
    vectors = (rng.integers(-2, 3, size=(200, 8)) / 4).astype(np.float32)
    words = [f"g{i:03d}" for i in range(200)]
    return EmbeddingStore(words, vectors)


def declared(store: EmbeddingStore, word: str, secret: str) -> float:
    """the similarity a game would show for `word` against `secret`."""
    pct = float(store.vector(word) @ store.vector(secret)) * 100.0
    return round(pct, 2)
