"""
play mode: guess the secret word by semantic similarity.

a secret is drawn from the vocabulary and every word is ranked
against it once, up front. each guess is then a lookup into that
rank table.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .config import Config, DEFAULT_CONFIG
from .embeddings import EmbeddingStore
from .errors import GameOver
from .rankings import RankTable, rank_table_for_word

HELP_TEXT = (
    "Enter a word. You'll receive a number, which represents the semantic "
    "similarity between your word and the answer. -100 is the worst, 100 is "
    "the best. Type !hint for a hint, !quit to exit or !help to see this "
    "message again."
)

QUIT_COMMAND = "!quit"
HELP_COMMAND = "!help"
HINT_COMMAND = "!hint"


class GameState(Enum):
    AWAITING_GUESS = "awaiting_guess"
    WON = "won"
    QUIT = "quit"


class OutcomeKind(Enum):
    NEW = "new"
    REPEAT = "repeat"
    WON = "won"
    UNKNOWN_WORD = "unknown_word"
    HELP = "help"
    QUIT = "quit"
    NO_HINT = "no_hint"


@dataclass(frozen=True)
class GuessRecord:
    number: int
    word: str
    score: float  # percentage similarity, rounded for display
    rank: int  # 0 = the secret


@dataclass
class GuessOutcome:
    kind: OutcomeKind
    record: GuessRecord | None = None
    message: str = ""
    hint: bool = False

    @property
    def refresh(self) -> bool:
        """whether the scoreboard should be redrawn."""
        return self.record is not None


def pick_secret(
    store: EmbeddingStore,
    rng: random.Random,
    pool: Sequence[str] | None = None,
) -> str:
    """uniformly random secret from `pool` (restricted to vocab) or the whole vocab."""
    if pool is not None:
        choices = [w for w in pool if w in store]
        if choices:
            return rng.choice(choices)
        print("  warning: secret pool had no usable entries, falling back to full vocab")
    return rng.choice(store.words)


def proximity_label(record: GuessRecord, config: Config = DEFAULT_CONFIG) -> str:
    """'N/1000' inside the top window, otherwise '(tepid)' or '(cold)'."""
    if record.rank < config.proximity_window:
        return f"{config.proximity_window - record.rank}/{config.proximity_window}"
    if record.score >= config.tepid_threshold:
        return "(tepid)"
    return "(cold)"


class GameSession:
    """one game: the secret, its rank table, and the guesses so far."""

    def __init__(
        self,
        store: EmbeddingStore,
        config: Config = DEFAULT_CONFIG,
        secret: str | None = None,
        rng: random.Random | None = None,
        pool: Sequence[str] | None = None,
    ):
        self.store = store
        self.config = config
        if secret is None:
            secret = pick_secret(store, rng or random.Random(config.seed), pool)
        self.secret = secret
        self.table: RankTable = rank_table_for_word(store, secret)

        self.state = GameState.AWAITING_GUESS
        self.history: list[GuessRecord] = []
        self._by_word: dict[str, GuessRecord] = {}
        self.most_recent: GuessRecord | None = None

    @property
    def guess_count(self) -> int:
        return len(self.history)

    @property
    def best_rank(self) -> int | None:
        if not self.history:
            return None
        return min(r.rank for r in self.history)

    def lookup(self, word: str) -> tuple[float, int]:
        """(rounded percentage score, rank index) of a vocab word."""
        word_id = self.store.id_of(word)
        return (
            self.table.percent(word_id, self.config.display_decimals),
            int(self.table.rank[word_id]),
        )

    def submit(self, line: str) -> GuessOutcome | None:
        """
        handle one line of player input.

        returns None for a blank line, otherwise what happened.
        """
        if self.state is not GameState.AWAITING_GUESS:
            raise GameOver(f"game is over ({self.state.value})")

        word = line.strip().lower()
        if not word:
            return None

        if word == QUIT_COMMAND:
            self.state = GameState.QUIT
            return GuessOutcome(OutcomeKind.QUIT, message=f"The word was {self.secret}.")
        if word == HELP_COMMAND:
            return GuessOutcome(OutcomeKind.HELP, message=HELP_TEXT)
        if word == HINT_COMMAND:
            return self.hint()

        return self.guess(word)

    def guess(self, word: str) -> GuessOutcome:
        if self.state is not GameState.AWAITING_GUESS:
            raise GameOver(f"game is over ({self.state.value})")

        if word not in self.store:
            return GuessOutcome(OutcomeKind.UNKNOWN_WORD, message=f"Unknown word {word}")

        previous = self._by_word.get(word)
        if previous is not None:
            self.most_recent = previous
            return GuessOutcome(OutcomeKind.REPEAT, record=previous)

        score, rank = self.lookup(word)
        record = GuessRecord(self.guess_count + 1, word, score, rank)
        self.history.append(record)
        self._by_word[word] = record
        self.most_recent = record

        if word == self.secret:
            self.state = GameState.WON
            return GuessOutcome(
                OutcomeKind.WON,
                record=record,
                message=f"You found it in {record.number}! The word is {self.secret}.",
            )
        return GuessOutcome(OutcomeKind.NEW, record=record)

    def hint(self) -> GuessOutcome:
        """
        guess the next word closer than anything found so far.

        walks down one rank at a time from the best rank reached, and
        stops at rank 1 so the secret is never handed out.
        """
        start = self.best_rank
        if start is None:
            start = min(self.config.hint_start_rank, len(self.table))
        target = start - 1
        secret_id = self.store.id_of(self.secret)
        while target >= 0 and self.table.id_at(target) == secret_id:
            target -= 1
        if target < 1:
            return GuessOutcome(OutcomeKind.NO_HINT, message="No more hints available.")

        word = self.store.words[self.table.id_at(target)]
        outcome = self.guess(word)
        outcome.hint = True
        outcome.message = f"Hint: {word}"
        return outcome

    def history_for_display(self) -> tuple[GuessRecord | None, list[GuessRecord]]:
        """most recent guess, then the rest by descending score."""
        rest = [r for r in self.history if r is not self.most_recent]
        rest.sort(key=lambda r: r.score, reverse=True)
        return self.most_recent, rest
