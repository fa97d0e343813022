"""
semantle engine

a word-guessing game over GloVe embeddings, plus a solver that narrows
down the secret from revealed similarities and suggests the next guess.
"""

from .config import Config, DEFAULT_CONFIG
from .embeddings import EmbeddingStore, load_embeddings, load_store, load_vocab
from .similarity import similarity, percent_similarity
from .rankings import RankTable, compute_rankings, nearest_words
from .constraints import Constraint, ConstraintLog, filter_candidates, is_consistent
from .advisor import find_best
from .solver import SolverSession, execute, parse_command
from .game import GameSession, GuessRecord, OutcomeKind
from .errors import (
    DuplicateConstraint,
    GameOver,
    MalformedInput,
    SemantleError,
    UnknownConstraint,
    UnknownWord,
)

__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "EmbeddingStore",
    "load_embeddings",
    "load_store",
    "load_vocab",
    "similarity",
    "percent_similarity",
    "RankTable",
    "compute_rankings",
    "nearest_words",
    "Constraint",
    "ConstraintLog",
    "filter_candidates",
    "is_consistent",
    "find_best",
    "SolverSession",
    "execute",
    "parse_command",
    "GameSession",
    "GuessRecord",
    "OutcomeKind",
    "DuplicateConstraint",
    "GameOver",
    "MalformedInput",
    "SemantleError",
    "UnknownConstraint",
    "UnknownWord",
]
