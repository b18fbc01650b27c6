"""Movetext tokenizer producing annotated plies."""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal

from .annotations import elapsed_seconds, format_elapsed, parse_clock, parse_eval

Side = Literal["white", "black"]

WHITE: Side = "white"
BLACK: Side = "black"

# "1." / "1..." / "12.Nf3" (number glued to the move)
_NUMBER_RE = re.compile(r"(\d+)(\.+)(.*)")
_NAG_RE = re.compile(r"\$\d+")
_RESULT_TOKENS = {"1-0", "0-1", "1/2-1/2", "*"}


@dataclass(frozen=True, slots=True)
class MoveToken:
    """One ply together with the annotations found in its comment block."""

    text: str
    side: Side
    move_number: int
    evaluation: float | None = None
    clock: str | None = None
    time_spent: str | None = None

    @property
    def is_black(self) -> bool:
        return self.side == BLACK


@dataclass(frozen=True, slots=True)
class _RunMove:
    text: str
    number: int | None
    black: bool


def _split_runs(movetext: str) -> Iterator[tuple[str, str | None]]:
    """Split movetext into (run, comment) pairs.

    ``comment`` is None when the run is not closed by a ``{...}`` block:
    trailing text, text before a stray ``}``, or an unterminated block.
    """
    pos = 0
    while pos < len(movetext):
        open_at = movetext.find("{", pos)
        close_at = movetext.find("}", pos)

        if close_at != -1 and (open_at == -1 or close_at < open_at):
            yield movetext[pos:close_at], None
            pos = close_at + 1
            continue

        if open_at == -1:
            yield movetext[pos:], None
            return

        end = movetext.find("}", open_at + 1)
        if end == -1:
            yield movetext[pos:], None
            return

        yield movetext[pos:open_at], movetext[open_at + 1:end]
        pos = end + 1


def _last_move(run: str) -> _RunMove | None:
    """Return the move directly preceding a comment block.

    Earlier moves in the same run carry no comment and are dropped, along
    with the number prefix they consumed.
    """
    number: int | None = None
    black = False
    move: str | None = None

    for word in run.split():
        match = _NUMBER_RE.fullmatch(word)
        if match:
            number = int(match.group(1))
            black = len(match.group(2)) >= 3
            move = None
            word = match.group(3)
            if not word:
                continue
        elif word.strip(".") == "":
            black = len(word) >= 3
            move = None
            continue

        if _NAG_RE.fullmatch(word) or word in _RESULT_TOKENS:
            continue

        if move is not None:
            number = None
            black = False
        move = word

    if move is None:
        return None
    return _RunMove(text=move, number=number, black=black)


def parse_moves_with_analysis(movetext: str) -> list[MoveToken]:
    """Extract annotated plies from a single movetext line.

    Only moves followed by a ``{...}`` comment block become tokens. Each
    token carries the ``%eval`` and ``%clk`` values found in its block and,
    when the side's clock went down since its previous reading, the time
    spent on the move.
    """
    tokens: list[MoveToken] = []
    move_number = 1
    last_clock: dict[Side, str | None] = {WHITE: None, BLACK: None}

    for run, comment in _split_runs(movetext):
        if comment is None:
            continue
        found = _last_move(run)
        if found is None:
            continue

        side = BLACK if found.black else WHITE
        clock = parse_clock(comment)

        time_spent = None
        if clock:
            spent = elapsed_seconds(last_clock[side], clock)
            if spent is not None:
                time_spent = format_elapsed(spent)
            last_clock[side] = clock

        tokens.append(
            MoveToken(
                text=found.text,
                side=side,
                move_number=found.number if found.number is not None else move_number,
                evaluation=parse_eval(comment),
                clock=clock,
                time_spent=time_spent,
            )
        )

        if side == BLACK:
            move_number += 1

    return tokens
