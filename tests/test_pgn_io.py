"""Tests for pgnview.pgn_io module."""

from pgnview.moves import parse_moves_with_analysis
from pgnview.pgn_io import read_games, read_games_from_text
from pgnview.tags import parse_pgn

TWO_GAMES = """[Event "First"]
[White "a"]
[Black "b"]
[Result "1-0"]

1. e4 { [%eval 0.3] [%clk 0:05:00] } 1... e5 { [%eval 0.2] [%clk 0:05:00] }
2. Nf3 { [%eval 0.3] [%clk 0:04:40] } ( 2. Nc3 { sidelines are dropped } ) 2... Nc6 1-0

[Event "Second"]
[White "c"]
[Black "d"]
[Result "0-1"]

1. d4 d5 0-1
"""


def test_read_games_splits_and_joins_movetext(tmp_path):
    path = tmp_path / "games.pgn"
    path.write_text(TWO_GAMES, encoding="utf-8")

    pgns = read_games(path)

    assert len(pgns) == 2
    first = parse_pgn(pgns[0])
    assert first["event"] == "First"
    assert "Nc3" not in first["moves"]

    tokens = parse_moves_with_analysis(first["moves"])
    assert [t.text for t in tokens] == ["e4", "e5", "Nf3"]
    assert tokens[2].time_spent == "0:20"

    second = parse_pgn(pgns[1])
    assert second["result"] == "0-1"
    assert second["moves"].startswith("1. d4 d5")


def test_read_games_from_text_empty():
    assert read_games_from_text("") == []
