"""
embeddings loader — handles normalized GloVe vectors.

the heavy lifting (parsing raw .txt) happens once in preprocess_glove().
at startup we just load the preprocessed .npy + vocab into an
EmbeddingStore, which stays read-only for the rest of the process.
"""

import json
from pathlib import Path
from typing import Iterator, Mapping, Sequence

import numpy as np
from numpy.typing import NDArray

from .config import Config, DEFAULT_CONFIG
from .errors import UnknownWord


class EmbeddingStore:
    """
    immutable vocabulary: word → fixed-length vector.

    rows of `vectors` line up with `words`; row i is the embedding
    of words[i]. vectors are assumed L2-normalized by the source, so a
    plain dot product approximates cosine similarity.
    """

    def __init__(self, words: Sequence[str], vectors: NDArray[np.float32]):
        vectors = np.asarray(vectors, dtype=np.float32)
        if vectors.ndim != 2:
            raise ValueError(f"vectors must be 2-D, got shape {vectors.shape}")
        if len(words) != vectors.shape[0]:
            raise ValueError(
                f"vocab/vector mismatch: {len(words)} words, {vectors.shape[0]} rows"
            )

        self.words: list[str] = list(words)
        self.word_to_id = build_word_to_id(self.words)
        if len(self.word_to_id) != len(self.words):
            raise ValueError("vocabulary contains duplicate words")

        # own a private copy so nobody can mutate the table under us
        self.vectors = np.array(vectors, dtype=np.float32, copy=True)
        self.vectors.setflags(write=False)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[float]]) -> "EmbeddingStore":
        """build a store from an in-memory {word: vector} dict (keeps dict order)."""
        words = list(mapping)
        return cls(words, np.array([mapping[w] for w in words], dtype=np.float32))

    def __len__(self) -> int:
        return len(self.words)

    def __contains__(self, word: object) -> bool:
        return word in self.word_to_id

    def __iter__(self) -> Iterator[str]:
        return iter(self.words)

    @property
    def dim(self) -> int:
        return int(self.vectors.shape[1])

    def id_of(self, word: str) -> int:
        try:
            return self.word_to_id[word]
        except KeyError:
            raise UnknownWord(word) from None

    def vector(self, word: str) -> NDArray[np.float32]:
        return self.vectors[self.id_of(word)]

    def all_ids(self) -> NDArray[np.int64]:
        return np.arange(len(self.words), dtype=np.int64)


def load_vocab(config: Config = DEFAULT_CONFIG) -> list[str]:
    """
    load vocabulary list from words.json.

    returns list where index i → word string.
    """
    with open(config.vocab_path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_embeddings(
    config: Config = DEFAULT_CONFIG,
    mmap: bool = True
) -> NDArray[np.float32]:
    """
    load normalized embeddings from .npy file.

    args:
        config: engine config with paths
        mmap: if True, memory-map the file (faster for large vocab)

    returns:
        array of shape (V, embed_dim) with L2-normalized rows
    """
    mode = "r" if mmap else None
    return np.load(config.embeddings_path, mmap_mode=mode)


def load_store(config: Config = DEFAULT_CONFIG, verbose: bool = False) -> EmbeddingStore:
    """
    load words.json + embeddings_normed.npy into an EmbeddingStore.

    raises FileNotFoundError if either file is missing and ValueError
    if they don't agree with each other.
    """
    if verbose:
        print("loading vocab...")
    vocab = load_vocab(config)
    if verbose:
        print(f"  vocab size: {len(vocab):,}")
        print("loading embeddings...")
    embeddings = load_embeddings(config, mmap=False)
    if verbose:
        print(f"  shape: {embeddings.shape}")
    return EmbeddingStore(vocab, embeddings)


def build_word_to_id(vocab: list[str]) -> dict[str, int]:
    """
    create reverse lookup: word → vocab index.
    """
    return {word: i for i, word in enumerate(vocab)}


def keep_word(word: str, min_length: int = 3) -> bool:
    """vocab gate for preprocessing: long enough, ascii letters only."""
    return len(word) >= min_length and word.isalpha() and word.isascii()


def preprocess_glove(
    glove_path: Path,
    output_vocab_path: Path,
    output_embeddings_path: Path,
    expected_dim: int = 100,
    min_word_length: int = 3,
    filter_vocab: bool = True,
    max_words: int | None = None,
) -> int:
    """
    one-time preprocessing: raw GloVe .txt → words.json + embeddings_normed.npy

    args:
        glove_path: path to a GloVe text file (word then floats, space separated)
        output_vocab_path: where to write words.json
        output_embeddings_path: where to write embeddings_normed.npy
        expected_dim: embedding dimension to validate
        min_word_length: minimum word length (default 3)
        filter_vocab: if True, drop short / non-alpha tokens
        max_words: stop after this many kept words (GloVe is frequency sorted)

    returns:
        vocab size V
    """
    words: list[str] = []
    vectors: list[list[float]] = []
    seen: set[str] = set()

    print(f"reading {glove_path}...")
    with open(glove_path, "r", encoding="utf-8") as f:
        for line_num, line in enumerate(f, 1):
            parts = line.rstrip().split(" ")

            # first part is the word, rest are floats
            word = parts[0].lower()

            if len(parts) != expected_dim + 1:
                print(f"  skipping line {line_num}: expected {expected_dim + 1} parts, got {len(parts)}")
                continue

            if filter_vocab and not keep_word(word, min_word_length):
                continue

            # lower-casing can fold two tokens together; first one wins
            if word in seen:
                continue

            try:
                vec = [float(x) for x in parts[1:]]
            except ValueError as e:
                print(f"  skipping line {line_num}: {e}")
                continue

            words.append(word)
            vectors.append(vec)
            seen.add(word)

            if line_num % 100_000 == 0:
                print(f"  processed {line_num:,} lines...")

            if max_words is not None and len(words) >= max_words:
                break

    V = len(words)
    if V == 0:
        raise ValueError(f"no usable vectors found in {glove_path}")
    print(f"final vocab size: {V:,}")

    embeddings = np.array(vectors, dtype=np.float32)
    assert embeddings.shape == (V, expected_dim), f"shape mismatch: {embeddings.shape}"

    # normalize rows (L2 norm) so dot product == cosine similarity
    print("normalizing vectors...")
    embeddings_normed = normalize_rows(embeddings)

    print(f"saving vocab to {output_vocab_path}...")
    output_vocab_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_vocab_path, "w", encoding="utf-8") as f:
        json.dump(words, f)

    print(f"saving embeddings to {output_embeddings_path}...")
    output_embeddings_path.parent.mkdir(parents=True, exist_ok=True)
    np.save(output_embeddings_path, embeddings_normed)

    print(f"done! vocab size: {V:,}")
    return V


def normalize_rows(embeddings: NDArray[np.float32]) -> NDArray[np.float32]:
    norms = np.linalg.norm(embeddings, axis=1, keepdims=True)
    # avoid division by zero for all-zero rows
    norms = np.maximum(norms, 1e-8)
    return (embeddings / norms).astype(np.float32)
