import json

import numpy as np
import pytest

from semantle.config import Config
from semantle.embeddings import EmbeddingStore, load_store, normalize_rows, preprocess_glove
from semantle.errors import UnknownWord


def test_store_lookup(tiny_store):
    assert len(tiny_store) == 3
    assert tiny_store.dim == 2
    assert "dog" in tiny_store
    assert "xyz" not in tiny_store
    assert list(tiny_store) == ["cat", "dog", "car"]
    assert tiny_store.id_of("car") == 2
    assert tiny_store.vector("dog").tolist() == pytest.approx([0.9, 0.1])


def test_store_unknown_word(tiny_store):
    with pytest.raises(UnknownWord):
        tiny_store.vector("xyz")


def test_store_is_read_only(tiny_store):
    with pytest.raises(ValueError):
        tiny_store.vectors[0, 0] = 5.0


def test_store_copies_its_input():
    vectors = np.eye(2, dtype=np.float32)
    store = EmbeddingStore(["a", "b"], vectors)
    vectors[0, 0] = 9.0
    assert store.vector("a").tolist() == [1.0, 0.0]


def test_store_rejects_bad_shapes():
    with pytest.raises(ValueError):
        EmbeddingStore(["a", "a"], np.eye(2, dtype=np.float32))
    with pytest.raises(ValueError):
        EmbeddingStore(["a"], np.eye(2, dtype=np.float32))
    with pytest.raises(ValueError):
        EmbeddingStore(["a"], np.ones(3, dtype=np.float32))


def test_normalize_rows_handles_zero_rows():
    out = normalize_rows(np.array([[3.0, 4.0], [0.0, 0.0]], dtype=np.float32))
    assert out[0].tolist() == pytest.approx([0.6, 0.8])
    assert out[1].tolist() == [0.0, 0.0]


def test_preprocess_then_load(tmp_path):
    glove = tmp_path / "glove.txt"
    glove.write_text(
        "Cat 1 0 0\n"
        "dog 0 2 0\n"
        "a 1 1 1\n"       # too short
        "bad 1 2\n"       # wrong dimension
        "x2y 1 1 1\n"     # not alphabetic
        "cat 0 0 1\n"     # duplicate once lower-cased
        "car 0 3 4\n",
        encoding="utf-8",
    )
    config = Config(data_dir=tmp_path / "data")

    V = preprocess_glove(glove, config.vocab_path, config.embeddings_path, expected_dim=3)
    assert V == 3

    with open(config.vocab_path, encoding="utf-8") as f:
        assert json.load(f) == ["cat", "dog", "car"]

    store = load_store(config)
    assert store.vector("dog").tolist() == pytest.approx([0.0, 1.0, 0.0])
    assert store.vector("car").tolist() == pytest.approx([0.0, 0.6, 0.8])


def test_preprocess_max_words(tmp_path):
    glove = tmp_path / "glove.txt"
    glove.write_text("cat 1 0\ndog 0 1\ncar 1 1\n", encoding="utf-8")
    config = Config(data_dir=tmp_path)

    assert preprocess_glove(glove, config.vocab_path, config.embeddings_path, expected_dim=2, max_words=2) == 2
    assert load_store(config).words == ["cat", "dog"]


def test_preprocess_rejects_empty_input(tmp_path):
    glove = tmp_path / "glove.txt"
    glove.write_text("a 1 0\n", encoding="utf-8")
    config = Config(data_dir=tmp_path)
    with pytest.raises(ValueError):
        preprocess_glove(glove, config.vocab_path, config.embeddings_path, expected_dim=2)


def test_load_store_missing_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_store(Config(data_dir=tmp_path))
