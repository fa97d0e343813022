import numpy as np

from semantle.advisor import block_rows, distinct_similarity_counts, find_best
from semantle.config import Config
from semantle.embeddings import EmbeddingStore


def _axis_store() -> EmbeddingStore:
    # y collides (0 twice), x and z each see three distinct values
    return EmbeddingStore.from_mapping({
        "y": [0.0, 1.0],
        "x": [1.0, 0.0],
        "z": [-1.0, 0.0],
    })


def test_distinct_counts_include_self():
    store = _axis_store()
    counts = distinct_similarity_counts(store.vectors, store.all_ids())
    assert counts.tolist() == [2, 3, 3]


def test_distinct_counts_independent_of_max_cells(grid_store):
    ids = grid_store.all_ids()[::3]
    whole = distinct_similarity_counts(grid_store.vectors, ids, max_cells=10**6)
    blocked = distinct_similarity_counts(grid_store.vectors, ids, max_cells=7 * len(ids))
    single_rows = distinct_similarity_counts(grid_store.vectors, ids, max_cells=1)
    assert whole.tolist() == blocked.tolist() == single_rows.tolist()


def test_block_rows_shrink_as_candidates_grow():
    assert block_rows(1000, 4_000_000) == 4000
    assert block_rows(400_000, 4_000_000) == 10
    # a row wider than the budget is still processed one at a time
    assert block_rows(5_000_000, 4_000_000) == 1
    for n in (10, 1000, 400_000):
        assert block_rows(n, 4_000_000) * n <= 4_000_000


def test_distinct_counts_bucket_at_precision():
    store = EmbeddingStore.from_mapping({
        "a": [1.0, 0.0],
        "b": [0.70001, 0.0],
        "c": [0.70002, 0.0],
    })
    coarse = distinct_similarity_counts(store.vectors, store.all_ids(), precision=2)
    assert coarse[0] == 2


def test_find_best_picks_most_discriminating_first_in_vocab_order():
    store = _axis_store()
    best = find_best(store, store.all_ids(), has_constraints=True)
    assert best.word == "x"
    assert best.distinct == 3


def test_find_best_bootstrap_word_on_empty_log():
    store = _axis_store()
    best = find_best(store, store.all_ids(), has_constraints=False, config=Config(bootstrap_word="z"))
    assert best.word == "z"


def test_find_best_scans_when_bootstrap_missing():
    store = _axis_store()
    best = find_best(store, store.all_ids(), has_constraints=False)  # "eget" not in vocab
    assert best.word == "x"

    best = find_best(store, store.all_ids(), has_constraints=False, config=Config(bootstrap_word=None))
    assert best.word == "x"


def test_find_best_no_candidates():
    store = _axis_store()
    assert find_best(store, np.array([], dtype=np.int64), has_constraints=True) is None


def test_find_best_restricted_to_candidates():
    store = _axis_store()
    ids = np.array([0, 2], dtype=np.int64)  # y, z
    best = find_best(store, ids, has_constraints=True)
    # y: {1, 0}, z: {0, 1} -> tie, first wins
    assert best.word == "y"
