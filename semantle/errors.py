"""
error types raised by the engine.

every error here is recoverable: the caller reports the message and the
session state is left exactly as it was.
"""


class SemantleError(Exception):
    """base class for user-facing engine errors."""


class UnknownWord(SemantleError):
    """word is not in the vocabulary."""

    def __init__(self, word: str):
        super().__init__(f"Unknown word {word}")
        self.word = word


class DuplicateConstraint(SemantleError):
    """word already has a declared similarity."""

    def __init__(self, word: str):
        super().__init__(
            f"'{word}' already has a value. Try using -e to change an existing value."
        )
        self.word = word


class UnknownConstraint(SemantleError):
    """edit/remove of a word that has no declared similarity."""

    def __init__(self, word: str):
        super().__init__(f"'{word}' has no value yet. Add it first.")
        self.word = word


class MalformedInput(SemantleError):
    """wrong argument count or type for a command."""

    def __init__(self, usage: str | None = None, detail: str | None = None):
        if detail is None:
            detail = f"Usage: {usage}" if usage else "Malformed input"
        super().__init__(detail)
        self.usage = usage


class GameOver(SemantleError):
    """guess submitted after the game already ended."""
