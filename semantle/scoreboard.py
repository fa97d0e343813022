"""
plain-text scoreboard for play mode.

most recent guess on top, then everything else by descending score.
"""

from .config import Config, DEFAULT_CONFIG
from .game import GameSession, GuessRecord, proximity_label


def _row(record: GuessRecord, widths: tuple[int, int, int, int], config: Config) -> str:
    cells = (
        str(record.number).ljust(widths[0]),
        record.word.ljust(widths[1]),
        f"{record.score:g}".ljust(widths[2]),
        proximity_label(record, config).ljust(widths[3]),
    )
    return "│ " + " ".join(cells) + " │"


def render_scoreboard(game: GameSession, config: Config = DEFAULT_CONFIG) -> str:
    """box-drawn table of the guesses so far (empty string if none)."""
    recent, rest = game.history_for_display()
    if recent is None:
        return ""

    records = [recent] + rest
    widths = (
        max(len(str(r.number)) for r in records),
        max(len(r.word) for r in records),
        max(len(f"{r.score:g}") for r in records),
        max(len(proximity_label(r, config)) for r in records),
    )
    inner = sum(widths) + 5

    lines = [
        "┌" + "─" * inner + "┐",
        _row(recent, widths, config),
    ]
    if rest:
        lines.append("├" + "─" * inner + "┤")
        lines.extend(_row(r, widths, config) for r in rest)
    lines.append("└" + "─" * inner + "┘")
    return "\n".join(lines)
