import argparse
import json

import numpy as np
import pytest

from semantle import cli
from semantle.config import Config
from semantle.embeddings import EmbeddingStore


@pytest.fixture
def data_dir(tmp_path):
    with open(tmp_path / "words.json", "w", encoding="utf-8") as f:
        json.dump(["cat", "dog", "car"], f)
    np.save(tmp_path / "embeddings_normed.npy", np.array([[1, 0], [0.9, 0.1], [0, 1]], dtype=np.float32))
    return tmp_path


def _feed(monkeypatch, lines):
    it = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


def test_solve_session(monkeypatch, capsys, data_dir):
    _feed(monkeypatch, ["w cat 100", "p", "q"])
    assert cli.main(["solve", "--data-dir", str(data_dir)]) == 0
    out = capsys.readouterr().out
    assert "1 possible word remains" in out


def test_play_session_until_win(monkeypatch, capsys, data_dir):
    store = cli.load_or_exit(Config(data_dir=data_dir))
    _feed(monkeypatch, ["xyz", "dog", "cat"])
    assert cli.run_game(store, Config(), pool=["cat"]) == 0
    out = capsys.readouterr().out
    assert "Unknown word xyz" in out
    assert "999/1000" in out
    assert "You found it in 2!" in out


def test_missing_data_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["solve", "--data-dir", str(tmp_path)])
    assert exc.value.code == 1
    assert "error:" in capsys.readouterr().out


def test_min_zipf_flag_restricts_the_secret_pool(monkeypatch, data_dir):
    seen = {}

    def fake_run_game(store, config, pool=None):
        seen["config"] = config
        seen["pool"] = pool
        return 0

    monkeypatch.setattr(cli, "run_game", fake_run_game)
    assert cli.main(["play", "--data-dir", str(data_dir), "--min-zipf", "3.0"]) == 0
    assert seen["config"].min_zipf == 3.0
    assert seen["pool"] == ["cat", "dog", "car"]


def test_secret_pool_follows_config():
    store = EmbeddingStore.from_mapping({"water": [1.0, 0.0], "qzxjvw": [0.0, 1.0]})
    args = argparse.Namespace(secret_candidates=None)
    assert cli._secret_pool(args, store, Config(min_zipf=3.0)) == ["water"]
    assert cli._secret_pool(args, store, Config()) is None
