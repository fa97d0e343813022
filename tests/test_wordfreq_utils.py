from semantle.wordfreq_utils import (
    ScoredWord,
    load_secret_candidates,
    score_vocab,
    secret_pool,
    write_secret_candidates,
)


def test_common_words_make_the_pool():
    assert secret_pool(["water", "qzxjvw"], min_zipf=3.0) == ["water"]


def test_score_vocab_keeps_zipf():
    scored = score_vocab(["water"], min_zipf=0.0)
    assert scored[0].word == "water"
    assert scored[0].zipf > 3.0


def test_candidates_file_round_trip(tmp_path):
    path = tmp_path / "data" / "secret_candidates.json"
    write_secret_candidates([ScoredWord("water", 5.1), ScoredWord("fire", 4.9)], path, 3.0)
    assert load_secret_candidates(path) == ["water", "fire"]
