"""
interactive entry point.

usage:
    semantle solve
    semantle play --seed 7 --min-zipf 3.5
"""

import argparse
import sys
from pathlib import Path

from .config import Config
from .embeddings import EmbeddingStore, load_store
from .game import GameSession, GameState, OutcomeKind
from .scoreboard import render_scoreboard
from .solver import SolverSession, run_line

PROMPT = "semantle> "


def _read_line() -> str | None:
    try:
        return input(PROMPT)
    except (EOFError, KeyboardInterrupt):
        print()
        return None


def load_or_exit(config: Config, verbose: bool = False) -> EmbeddingStore:
    """load the embedding store, or print an error and exit(1)."""
    for path in (config.vocab_path, config.embeddings_path):
        if not path.exists():
            print(f"error: {path.name} not found at {path}")
            print("run scripts/preprocess_glove.py first!")
            sys.exit(1)
    try:
        return load_store(config, verbose=verbose)
    except (OSError, ValueError) as e:
        print(f"error: couldn't load embeddings from {config.data_dir}: {e}")
        sys.exit(1)


def run_solver(store: EmbeddingStore, config: Config) -> int:
    session = SolverSession(store, config)
    print("Ready! Type a valid command or type h for help.")
    while True:
        line = _read_line()
        if line is None:
            return 0
        result = run_line(session, line)
        if result is None:
            continue
        if result.message:
            print(result.message)
        if result.exit_code is not None:
            return result.exit_code


def run_game(store: EmbeddingStore, config: Config, pool: list[str] | None = None) -> int:
    game = GameSession(store, config, pool=pool)
    print(
        "Ready! Enter a word to start. Similarity ranges from -100 (worst) to "
        "100 (best). Type !quit to exit or !help for help."
    )
    while game.state is GameState.AWAITING_GUESS:
        line = _read_line()
        if line is None:
            return 0
        outcome = game.submit(line)
        if outcome is None:
            continue
        if outcome.message:
            print(outcome.message)
        if outcome.kind in (OutcomeKind.WON, OutcomeKind.QUIT):
            break
        if outcome.kind is OutcomeKind.UNKNOWN_WORD and game.most_recent is None:
            continue
        if outcome.kind in (OutcomeKind.HELP, OutcomeKind.NO_HINT):
            continue
        print(render_scoreboard(game, config))
    return 0


def _secret_pool(args: argparse.Namespace, store: EmbeddingStore, config: Config) -> list[str] | None:
    if args.secret_candidates is not None:
        from .wordfreq_utils import load_secret_candidates
        if not args.secret_candidates.exists():
            print(f"error: secret candidates not found at {args.secret_candidates}")
            sys.exit(1)
        return load_secret_candidates(args.secret_candidates)
    if config.min_zipf is not None:
        from .wordfreq_utils import secret_pool
        print(f"scoring vocab with wordfreq (min_zipf={config.min_zipf})...")
        pool = secret_pool(store.words, config.min_zipf)
        print(f"  {len(pool):,} secret candidates")
        return pool
    return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="semantle",
        description="play semantle, or narrow down a semantle secret from revealed similarities",
    )
    parser.add_argument("mode", choices=["solve", "play"], help="solve or play")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="preprocessed data directory (default: data/)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="rng seed for the secret word (play mode)"
    )
    parser.add_argument(
        "--min-zipf",
        type=float,
        default=None,
        help="only draw secrets with at least this wordfreq zipf score (play mode)"
    )
    parser.add_argument(
        "--secret-candidates",
        type=Path,
        default=None,
        help="json file from scripts/build_secret_candidates.py (play mode)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="print extra info"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = Config(seed=args.seed, min_zipf=args.min_zipf)
    if args.data_dir:
        config.data_dir = args.data_dir

    print("Loading...")
    store = load_or_exit(config, verbose=args.verbose)

    if args.mode == "solve":
        return run_solver(store, config)
    return run_game(store, config, pool=_secret_pool(args, store, config))


if __name__ == "__main__":
    sys.exit(main())
