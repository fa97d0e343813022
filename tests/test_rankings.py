import numpy as np
import pytest

from semantle.errors import MalformedInput, UnknownWord
from semantle.rankings import compute_rankings, nearest_words, pin_to_top, rank_table_for_word


def test_every_word_ranks_first_against_itself(random_store):
    for word in random_store.words[::17]:
        table = rank_table_for_word(random_store, word)
        assert table.rank[random_store.id_of(word)] == 0
        assert table.id_at(0) == random_store.id_of(word)


def test_rank_follows_descending_score(tiny_store):
    table = rank_table_for_word(tiny_store, "cat")
    assert [tiny_store.words[i] for i in table.order] == ["cat", "dog", "car"]
    assert list(table.rank) == [0, 1, 2]
    assert table.percent(tiny_store.id_of("dog")) == pytest.approx(90.0)


def test_rank_is_a_permutation(random_store):
    table = rank_table_for_word(random_store, "w007")
    assert sorted(table.rank.tolist()) == list(range(len(random_store)))
    scores = table.scores[table.order]
    assert np.all(np.diff(scores) <= 0)


def test_ties_get_consecutive_ranks_in_vocab_order():
    vectors = np.array([[0.0, 1.0], [1.0, 0.0], [1.0, 0.0]], dtype=np.float32)
    table = compute_rankings(vectors, np.array([1.0, 0.0], dtype=np.float32))
    assert table.rank.tolist() == [2, 0, 1]


def test_pin_to_top_moves_one_id_and_keeps_the_rest():
    vectors = np.array([[1.0, 0.0], [0.9, 0.1], [0.0, 1.0], [0.5, 0.5]], dtype=np.float32)
    table = compute_rankings(vectors, vectors[1])
    assert table.order.tolist() == [0, 1, 3, 2]

    pinned = pin_to_top(table, 3)
    assert pinned.order.tolist() == [3, 0, 1, 2]
    assert pinned.rank.tolist() == [1, 2, 3, 0]
    assert pinned.scores is table.scores


def test_nearest_words_excludes_query(tiny_store):
    neighbors = nearest_words(tiny_store, "cat")
    assert [nb.word for nb in neighbors] == ["dog", "car"]
    assert [nb.rank for nb in neighbors] == [1, 2]
    assert neighbors[0].score == pytest.approx(90.0)


def test_nearest_words_top_n_and_ascending(random_store):
    full = nearest_words(random_store, "w000")
    assert len(full) == len(random_store) - 1

    top = nearest_words(random_store, "w000", n=5)
    assert top == full[:5]

    bottom = nearest_words(random_store, "w000", n=3, ascending=True)
    assert bottom == list(reversed(full))[:3]
    assert bottom[0].rank == len(full)


def test_nearest_words_restricted_to_pool(random_store):
    pool = np.array([0, 3, 5, 9], dtype=np.int64)
    neighbors = nearest_words(random_store, "w003", pool=pool)
    assert {nb.word for nb in neighbors} == {"w000", "w005", "w009"}


def test_nearest_words_errors(tiny_store):
    with pytest.raises(UnknownWord):
        nearest_words(tiny_store, "xyz")
    with pytest.raises(MalformedInput):
        nearest_words(tiny_store, "cat", n=-1)
