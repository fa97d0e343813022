#!/usr/bin/env python3
"""build a list of reasonable secret words using wordfreq.

usage:
    python scripts/build_secret_candidates.py --min-zipf 3.0

outputs:
    data/secret_candidates.json with structure:
      {
        "lang": "en",
        "wordlist": "small",
        "min_zipf": 3.0,
        "words": ["..."],
        "zipf": [3.42, ...]
      }

pass it to `semantle play --secret-candidates data/secret_candidates.json`
to keep secrets to common-ish words.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# add parent dir to path so we can import semantle
sys.path.insert(0, str(Path(__file__).parent.parent))

from semantle.config import DEFAULT_CONFIG
from semantle.embeddings import load_vocab
from semantle.wordfreq_utils import score_vocab, write_secret_candidates


def main() -> None:
  parser = argparse.ArgumentParser(description="build a wordfreq-based secret pool")
  parser.add_argument("--min-zipf", type=float, default=3.0, help="minimum zipf frequency (default: 3.0)")
  parser.add_argument(
    "--output",
    type=Path,
    default=DEFAULT_CONFIG.data_dir / "secret_candidates.json",
    help="where to write the pool",
  )
  args = parser.parse_args()

  if not DEFAULT_CONFIG.vocab_path.exists():
    print(f"error: vocab not found at {DEFAULT_CONFIG.vocab_path}")
    print("run scripts/preprocess_glove.py first!")
    sys.exit(1)

  vocab = load_vocab(DEFAULT_CONFIG)
  print(f"loaded vocab: {len(vocab):,} words")

  print(f"scoring with wordfreq (en, small, min_zipf={args.min_zipf})...")
  scored = score_vocab(vocab, lang="en", wordlist="small", min_zipf=args.min_zipf)

  if scored:
    zs = [s.zipf for s in scored]
    print(f"  candidates: {len(scored):,}")
    print(f"  zipf range: {min(zs):.2f} – {max(zs):.2f}")
  else:
    print("  no candidates found (min_zipf too high?)")

  write_secret_candidates(scored, args.output, args.min_zipf)
  print(f"wrote {len(scored):,} candidates to {args.output}")


if __name__ == "__main__":
  main()
