"""Reading PGN files that may hold several games."""

import io
from pathlib import Path
from typing import TextIO

import chess.pgn


def _export(game: chess.pgn.Game) -> str:
    """Re-export a game with its whole mainline on a single movetext line."""
    exporter = chess.pgn.StringExporter(headers=True, variations=False, comments=True, columns=None)
    return game.accept(exporter)


def read_games(source: Path | str | TextIO) -> list[str]:
    """Split a PGN file into single-game PGN strings.

    Column-wrapped movetext is joined onto one line and side variations are
    dropped; comments (and the ``%eval``/``%clk`` annotations in them) are
    kept.
    """
    if isinstance(source, (str, Path)):
        with open(source, encoding="utf-8-sig", errors="replace") as handle:
            return read_games(handle)

    games = []
    while True:
        game = chess.pgn.read_game(source)
        if game is None:
            break
        games.append(_export(game))
    return games


def read_games_from_text(text: str) -> list[str]:
    return read_games(io.StringIO(text))
