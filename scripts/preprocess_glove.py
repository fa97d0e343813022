#!/usr/bin/env python3
"""
one-time preprocessing: convert GloVe .txt → words.json + embeddings_normed.npy

usage:
    python scripts/preprocess_glove.py path/to/glove.6B.100d.txt --max-words 50000

this creates:
    - data/words.json (vocab list)
    - data/embeddings_normed.npy (normalized embeddings)

you only need to run this once. `semantle solve|play` loads these files.
"""

import argparse
import sys
from pathlib import Path

# add parent dir to path so we can import semantle
sys.path.insert(0, str(Path(__file__).parent.parent))

from semantle.config import DEFAULT_CONFIG
from semantle.embeddings import preprocess_glove


def main():
    parser = argparse.ArgumentParser(
        description="preprocess GloVe embeddings into fast-loadable format"
    )
    parser.add_argument(
        "glove_path",
        type=Path,
        help="path to a GloVe text file"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=DEFAULT_CONFIG.data_dir,
        help=f"output directory (default: {DEFAULT_CONFIG.data_dir})"
    )
    parser.add_argument(
        "--dim",
        type=int,
        default=100,
        help="embedding dimension (default: 100)"
    )
    parser.add_argument(
        "--min-length",
        type=int,
        default=3,
        help="minimum word length (default: 3)"
    )
    parser.add_argument(
        "--max-words",
        type=int,
        default=None,
        help="keep only the first N usable words (default: all)"
    )
    parser.add_argument(
        "--no-filter",
        action="store_true",
        help="disable vocabulary filtering (keep all words)"
    )

    args = parser.parse_args()

    if not args.glove_path.exists():
        print(f"error: file not found: {args.glove_path}")
        sys.exit(1)

    output_vocab = args.output_dir / DEFAULT_CONFIG.vocab_file
    output_embeddings = args.output_dir / DEFAULT_CONFIG.embeddings_file

    vocab_size = preprocess_glove(
        glove_path=args.glove_path,
        output_vocab_path=output_vocab,
        output_embeddings_path=output_embeddings,
        expected_dim=args.dim,
        min_word_length=args.min_length,
        filter_vocab=not args.no_filter,
        max_words=args.max_words,
    )

    print("\npreprocessing complete!")
    print(f"  vocab: {output_vocab} ({vocab_size:,} words)")
    print(f"  embeddings: {output_embeddings}")


if __name__ == "__main__":
    main()
