"""helpers for using wordfreq to pick friendlier secrets.

the raw vocab is full of obscure tokens that make miserable secrets.
we score words with zipf frequencies from the `wordfreq` library and
only draw secrets from the common-ish ones.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from wordfreq import zipf_frequency


@dataclass
class ScoredWord:
  word: str
  zipf: float


def score_vocab(
  vocab: Iterable[str],
  *,
  lang: str = "en",
  wordlist: str = "small",
  min_zipf: float = 3.0,
) -> list[ScoredWord]:
  """score each vocab word with its zipf frequency.

  only keeps words with zipf >= min_zipf.
  """
  scored: list[ScoredWord] = []
  for w in vocab:
    z = float(zipf_frequency(w, lang, wordlist=wordlist))
    if z >= min_zipf:
      scored.append(ScoredWord(word=w, zipf=z))
  return scored


def secret_pool(vocab: Iterable[str], min_zipf: float) -> list[str]:
  """words common enough to be drawn as a secret."""
  return [s.word for s in score_vocab(vocab, min_zipf=min_zipf)]


def write_secret_candidates(scored: list[ScoredWord], path: Path, min_zipf: float) -> None:
  payload = {
    "lang": "en",
    "wordlist": "small",
    "min_zipf": min_zipf,
    "words": [s.word for s in scored],
    "zipf": [s.zipf for s in scored],
  }
  path.parent.mkdir(parents=True, exist_ok=True)
  with open(path, "w", encoding="utf-8") as f:
    json.dump(payload, f)


def load_secret_candidates(path: Path) -> list[str]:
  with open(path, "r", encoding="utf-8") as f:
    return json.load(f).get("words", [])
