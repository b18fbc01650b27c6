"""Shared fixtures for pgnview tests."""

import pytest

ANNOTATED_PGN = """[Event "Rated Blitz game"]
[Site "https://lichess.org/abcd1234"]
[Date "2024.01.15"]
[White "magnus"]
[Black "hikaru"]
[Result "1-0"]
[WhiteElo "3200"]
[BlackElo "3190"]
[TimeControl "300+0"]
[ECO "C50"]
[Opening "Italian Game"]

1. e4 { [%eval 0.3] [%clk 0:05:00] } 1... e5 { [%eval 0.25] [%clk 0:05:00] } 2. Nf3 { [%eval 0.31] [%clk 0:04:40] } 2... Nc6 { [%eval 0.28] [%clk 0:04:55] } 3. Bc4 { [%eval -0.1] [%clk 0:04:41] } 1-0
"""


@pytest.fixture
def annotated_pgn():
    """A short Lichess-style export carrying evals and clocks."""
    return ANNOTATED_PGN

