"""Tests for pgnview.chesscom_client module."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from pgnview.chesscom_client import _get_archives, _parse_game, fetch_games
from pgnview.errors import GameFetchError

SAMPLE_PGN = """[Event "Live Chess"]
[Site "Chess.com"]
[White "magnus"]
[Black "hikaru"]
[Result "1-0"]

1. e4 {[%clk 0:02:59.9]} 1... c5 {[%clk 0:02:58.1]} 1-0"""


def _game(uuid: str, end_time: int, white_result: str = "win", black_result: str = "resigned") -> dict:
    return {
        "uuid": uuid,
        "url": f"https://www.chess.com/game/live/{uuid}",
        "pgn": SAMPLE_PGN,
        "time_control": "180",
        "end_time": end_time,
        "rated": True,
        "time_class": "blitz",
        "white": {"username": "magnus", "rating": 3200, "result": white_result},
        "black": {"username": "hikaru", "rating": 3190, "result": black_result},
    }


def _json_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status = MagicMock()
    return response


def test_parse_game_results():
    assert _parse_game(_game("a", 1))["result"] == "1-0"
    assert _parse_game(_game("a", 1, "checkmated", "win"))["result"] == "0-1"
    assert _parse_game(_game("a", 1, "agreed", "agreed"))["result"] == "1/2-1/2"


def test_parse_game_fields():
    parsed = _parse_game(_game("u1", 1700000000))
    assert parsed["id"] == "u1"
    assert parsed["pgn"] == SAMPLE_PGN
    assert parsed["white"] == {"username": "magnus", "rating": 3200}
    assert parsed["time_class"] == "blitz"


def test_parse_game_id_falls_back_to_url():
    data = _game("u1", 1)
    del data["uuid"]
    assert _parse_game(data)["id"] == "https://www.chess.com/game/live/u1"


def test_get_archives():
    mock_response = _json_response({
        "archives": [
            "https://api.chess.com/pub/player/magnus/games/2024/01",
            "https://api.chess.com/pub/player/magnus/games/2024/02",
        ]
    })

    with patch("pgnview.chesscom_client.httpx.get", return_value=mock_response):
        urls = _get_archives("magnus")

    assert len(urls) == 2
    assert "2024/01" in urls[0]


def test_fetch_games_uses_recent_archives_sorted():
    archives = [f"https://api.chess.com/pub/player/u/games/2024/{m:02d}" for m in range(1, 6)]
    by_url = {
        archives[2]: _json_response({"games": [_game("march", 300)]}),
        archives[3]: _json_response({"games": [_game("april-1", 400), _game("april-2", 450)]}),
        archives[4]: _json_response({"games": [_game("may", 500)]}),
    }
    requested = []

    def mock_get(url, **kwargs):
        requested.append(url)
        if url.endswith("/archives"):
            return _json_response({"archives": archives})
        return by_url[url]

    with patch("pgnview.chesscom_client.httpx.get", side_effect=mock_get):
        games = fetch_games("u", max_games=3)

    assert requested[1:] == archives[-3:]
    assert [g["id"] for g in games] == ["may", "april-2", "april-1"]


def test_fetch_games_skips_failing_archive():
    archives = ["https://api.chess.com/pub/player/u/games/2024/01", "https://api.chess.com/pub/player/u/games/2024/02"]
    broken = MagicMock()
    broken.raise_for_status.side_effect = httpx.ConnectError("down")

    def mock_get(url, **kwargs):
        if url.endswith("/archives"):
            return _json_response({"archives": archives})
        if url == archives[0]:
            return broken
        return _json_response({"games": [_game("ok", 1)]})

    with patch("pgnview.chesscom_client.httpx.get", side_effect=mock_get):
        games = fetch_games("u")

    assert [g["id"] for g in games] == ["ok"]


def test_fetch_games_no_archives():
    with patch("pgnview.chesscom_client.httpx.get", return_value=_json_response({"archives": []})):
        assert fetch_games("u") == []


@pytest.mark.parametrize(
    "status, message",
    [(404, "User not found on Chess.com"), (403, "restricted"), (429, "Too many requests")],
)
def test_fetch_games_archive_list_errors(status, message):
    request = httpx.Request("GET", "https://api.chess.com/pub/player/u/games/archives")
    error = httpx.HTTPStatusError("error", request=request, response=httpx.Response(status, request=request))
    response = MagicMock()
    response.raise_for_status.side_effect = error

    with patch("pgnview.chesscom_client.httpx.get", return_value=response):
        with pytest.raises(GameFetchError, match=message):
            fetch_games("u")


def test_fetch_games_empty_username():
    with pytest.raises(GameFetchError):
        fetch_games("")
