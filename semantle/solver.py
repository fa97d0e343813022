"""
solver mode: narrow the vocabulary from revealed similarities.

the user plays semantle somewhere else and types back what they saw.
each (word, similarity) pair becomes a constraint; the session keeps
the words still consistent with all of them and can suggest what to
guess next.

input lines are parsed into small command objects and run through
execute(), which never raises for user mistakes: it returns a
CommandResult describing what happened.
"""

import math
from dataclasses import dataclass
from typing import Callable

import numpy as np
from numpy.typing import NDArray

from .advisor import Suggestion, find_best
from .config import Config, DEFAULT_CONFIG
from .constraints import Constraint, ConstraintLog, filter_candidates, narrow
from .embeddings import EmbeddingStore
from .errors import MalformedInput, SemantleError, UnknownWord
from .rankings import Neighbor, nearest_words


class SolverSession:
    """
    all mutable solver state: the constraint log and the candidate ids.

    the store itself is shared and read-only.
    """

    def __init__(self, store: EmbeddingStore, config: Config = DEFAULT_CONFIG):
        self.store = store
        self.config = config
        self.log = ConstraintLog()
        self.candidates: NDArray[np.int64] = store.all_ids()

    # --- constraint log operations ---

    def add(self, word: str, value: float) -> Constraint:
        if word not in self.store:
            raise UnknownWord(word)
        constraint = self.log.add(word, value)
        # filtering is an AND, so only the new constraint needs applying
        self.candidates = narrow(
            self.store.vectors,
            self.candidates,
            self.store.vector(word),
            constraint.value,
            self.config.tolerance,
        )
        return constraint

    def edit(self, word: str, value: float) -> Constraint:
        constraint = self.log.edit(word, value)
        self.recompute()
        return constraint

    def remove(self, word: str) -> Constraint:
        constraint = self.log.remove(word)
        self.recompute()
        return constraint

    def recompute(self) -> None:
        """rebuild the candidate set from the full vocabulary."""
        self.candidates = filter_candidates(self.store, self.log, self.config.tolerance)

    def constraints(self) -> list[Constraint]:
        return list(self.log)

    # --- read-only views ---

    def candidate_words(self) -> list[str]:
        return [self.store.words[i] for i in self.candidates]

    def candidate_mapping(self) -> dict[str, NDArray[np.float32]]:
        return {self.store.words[i]: self.store.vectors[i] for i in self.candidates}

    def find_best(self) -> Suggestion | None:
        return find_best(self.store, self.candidates, len(self.log) > 0, self.config)

    def neighbors(
        self,
        word: str,
        n: int | None = None,
        ascending: bool = False,
        candidates_only: bool = False,
    ) -> list[Neighbor]:
        pool = self.candidates if candidates_only else None
        return nearest_words(
            self.store,
            word,
            n=n,
            ascending=ascending,
            pool=pool,
            decimals=self.config.display_decimals,
        )


# -------------------- commands --------------------


@dataclass(frozen=True)
class Add:
    word: str
    value: float


@dataclass(frozen=True)
class Edit:
    word: str
    value: float


@dataclass(frozen=True)
class Remove:
    word: str


@dataclass(frozen=True)
class ListConstraints:
    debug: bool = False


@dataclass(frozen=True)
class Possible:
    debug: bool = False
    show_embeddings: bool = False


@dataclass(frozen=True)
class FindBest:
    pass


@dataclass(frozen=True)
class Neighbors:
    word: str
    count: int | None = None
    ascending: bool = False
    candidates_only: bool = False
    debug: bool = False


@dataclass(frozen=True)
class Help:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Command = Add | Edit | Remove | ListConstraints | Possible | FindBest | Neighbors | Help | Quit


@dataclass
class CommandResult:
    ok: bool
    message: str = ""
    exit_code: int | None = None


@dataclass(frozen=True)
class CommandSpec:
    name: str
    usage: str
    description: str


COMMANDS = [
    CommandSpec(
        "w",
        "w <word> <value|-r|value -e>",
        "Add a word with its similarity, edit an existing word's similarity, or remove a word",
    ),
    CommandSpec(
        "l",
        "l [-d]",
        "List the guessed words with their similarities in human-readable or debug mode",
    ),
    CommandSpec("p", "p [-d|-e]", "View remaining possible words"),
    CommandSpec(
        "n",
        "n <word> [count] [-a] [-c] [-d]",
        "Show the closest words to a word (-a least similar first, -c only possible words, -d debug)",
    ),
    CommandSpec("fb", "fb", "Find the best word according to current information"),
    CommandSpec("q", "q", "Quit"),
    CommandSpec("h", "h", "Display this help message"),
]
USAGE = {entry.name: entry.usage for entry in COMMANDS}


# -------------------- parsing --------------------


def _parse_value(term: str, usage: str) -> float:
    try:
        value = float(term)
    except ValueError:
        raise MalformedInput(usage) from None
    if not math.isfinite(value):
        raise MalformedInput(usage)
    return value


def _parse_word_command(args: list[str]) -> Command:
    usage = USAGE["w"]
    mode = "add"
    positional: list[str] = []
    for term in args:
        if term == "-n":
            mode = "add"
        elif term == "-e":
            mode = "edit"
        elif term == "-r":
            mode = "remove"
        else:
            positional.append(term)

    if not positional or len(positional) > 2:
        raise MalformedInput(usage)
    word = positional[0]
    value = _parse_value(positional[1], usage) if len(positional) == 2 else None

    if mode == "remove":
        return Remove(word)
    if value is None:
        raise MalformedInput(usage)
    if mode == "edit":
        return Edit(word, value)
    return Add(word, value)


def _parse_neighbors(args: list[str]) -> Command:
    usage = USAGE["n"]
    flags = {"-a": False, "-c": False, "-d": False}
    positional: list[str] = []
    for term in args:
        if term in flags:
            flags[term] = True
        else:
            positional.append(term)

    if not positional or len(positional) > 2:
        raise MalformedInput(usage)
    count = None
    if len(positional) == 2:
        try:
            count = int(positional[1])
        except ValueError:
            raise MalformedInput(usage) from None
        if count < 0:
            raise MalformedInput(usage)

    return Neighbors(
        word=positional[0],
        count=count,
        ascending=flags["-a"],
        candidates_only=flags["-c"],
        debug=flags["-d"],
    )


def _parse_list(args: list[str]) -> Command:
    if not args:
        return ListConstraints()
    if args == ["-d"]:
        return ListConstraints(debug=True)
    raise MalformedInput(USAGE["l"])


def _parse_possible(args: list[str]) -> Command:
    debug = show_embeddings = False
    for term in args:
        if term == "-d":
            debug = True
        elif term == "-e":
            debug = show_embeddings = True
        else:
            raise MalformedInput(USAGE["p"])
    return Possible(debug=debug, show_embeddings=show_embeddings)


def _no_args(name: str, command: Command) -> Callable[[list[str]], Command]:
    def parse(args: list[str]) -> Command:
        if args:
            raise MalformedInput(USAGE[name])
        return command
    return parse


PARSERS: dict[str, Callable[[list[str]], Command]] = {
    "w": _parse_word_command,
    "l": _parse_list,
    "p": _parse_possible,
    "n": _parse_neighbors,
    "fb": _no_args("fb", FindBest()),
    "q": _no_args("q", Quit()),
    "h": _no_args("h", Help()),
}


def parse_command(line: str) -> Command | None:
    """
    turn one input line into a command.

    returns None for a blank line; raises MalformedInput for unknown
    commands or bad arguments.
    """
    terms = line.strip().lower().split()
    if not terms:
        return None
    parser = PARSERS.get(terms[0])
    if parser is None:
        raise MalformedInput(detail="Unknown command, please try again.")
    return parser(terms[1:])


# -------------------- interpreter --------------------


def _remaining(session: SolverSession) -> str:
    n = len(session.candidates)
    return f"{n:,} possible word{'s' if n != 1 else ''} remain{'s' if n == 1 else ''}."


def _run_add(session: SolverSession, cmd: Add) -> CommandResult:
    c = session.add(cmd.word, cmd.value)
    return CommandResult(True, f"Added `{c.word}` with a similarity of `{c.value:g}`. {_remaining(session)}")


def _run_edit(session: SolverSession, cmd: Edit) -> CommandResult:
    c = session.edit(cmd.word, cmd.value)
    return CommandResult(True, f"Changed `{c.word}` to a similarity of `{c.value:g}`. {_remaining(session)}")


def _run_remove(session: SolverSession, cmd: Remove) -> CommandResult:
    c = session.remove(cmd.word)
    return CommandResult(True, f"Removed `{c.word}`. {_remaining(session)}")


def _run_list(session: SolverSession, cmd: ListConstraints) -> CommandResult:
    if cmd.debug:
        return CommandResult(True, repr(session.log))
    lines = ["Here are the words and similarities you've provided so far:"]
    for i, c in enumerate(session.constraints(), 1):
        lines.append(f"\t{i}. `{c.word}` with a similarity of `{c.value:g}`")
    return CommandResult(True, "\n".join(lines))


def _run_possible(session: SolverSession, cmd: Possible) -> CommandResult:
    if cmd.show_embeddings:
        mapping = {w: v.tolist() for w, v in session.candidate_mapping().items()}
        return CommandResult(True, repr(mapping))
    if cmd.debug:
        return CommandResult(True, repr(session.candidate_words()))
    return CommandResult(True, "\n".join(session.candidate_words()))


def _run_find_best(session: SolverSession, cmd: FindBest) -> CommandResult:
    best = session.find_best()
    if best is None:
        return CommandResult(False, "No possible words remain. Check the values you've entered.")
    return CommandResult(True, f"The optimal word based on your current information is {best.word}")


def _run_neighbors(session: SolverSession, cmd: Neighbors) -> CommandResult:
    count = cmd.count if cmd.count is not None else session.config.neighbor_count
    neighbors = session.neighbors(
        cmd.word,
        n=count,
        ascending=cmd.ascending,
        candidates_only=cmd.candidates_only,
    )
    if cmd.debug:
        return CommandResult(True, repr([tuple(nb) for nb in neighbors]))
    lines = [f"Closest words to `{cmd.word}`:" if not cmd.ascending else f"Farthest words from `{cmd.word}`:"]
    for nb in neighbors:
        lines.append(f"\t{nb.rank}. `{nb.word}` with a similarity of `{nb.score:g}`")
    return CommandResult(True, "\n".join(lines))


def _run_help(session: SolverSession, cmd: Help) -> CommandResult:
    lines = ["Type one of the following commands:"]
    for entry in COMMANDS:
        lines.append(f"\t{entry.usage}")
        lines.append(f"\t\t{entry.description}")
    return CommandResult(True, "\n".join(lines))


def _run_quit(session: SolverSession, cmd: Quit) -> CommandResult:
    return CommandResult(True, exit_code=0)


HANDLERS: dict[type, Callable[[SolverSession, Command], CommandResult]] = {
    Add: _run_add,
    Edit: _run_edit,
    Remove: _run_remove,
    ListConstraints: _run_list,
    Possible: _run_possible,
    FindBest: _run_find_best,
    Neighbors: _run_neighbors,
    Help: _run_help,
    Quit: _run_quit,
}


def execute(session: SolverSession, command: Command) -> CommandResult:
    """run one command against the session; user errors become failed results."""
    handler = HANDLERS[type(command)]
    try:
        return handler(session, command)
    except SemantleError as e:
        return CommandResult(False, str(e))


def run_line(session: SolverSession, line: str) -> CommandResult | None:
    """parse + execute one input line (None for a blank line)."""
    try:
        command = parse_command(line)
    except MalformedInput as e:
        return CommandResult(False, str(e))
    if command is None:
        return None
    return execute(session, command)
