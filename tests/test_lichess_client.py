"""Tests for pgnview.lichess_client module."""

import json
from unittest.mock import MagicMock, patch

import httpx
import pytest

from pgnview.errors import GameFetchError
from pgnview.lichess_client import _parse_lines, fetch_game_json, fetch_game_pgn, fetch_games

GAME = {
    "id": "xyz",
    "createdAt": 1704067200000,
    "speed": "blitz",
    "players": {
        "white": {"user": {"name": "A", "rating": 2000}},
        "black": {"user": {"name": "B"}, "rating": 1900},
    },
    "winner": "black",
    "clock": {"initial": 300, "increment": 3, "totalTime": 420},
}


def _stream_response(lines):
    mock_response = MagicMock()
    mock_response.raise_for_status = MagicMock()
    mock_response.iter_lines.return_value = lines
    mock_response.__enter__ = MagicMock(return_value=mock_response)
    mock_response.__exit__ = MagicMock(return_value=False)
    return mock_response


def _status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://lichess.org/api/games/user/x")
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError("error", request=request, response=response)


def test_parse_lines_skips_blank_and_bad_lines():
    lines = ["", json.dumps(GAME), "{not json", json.dumps({"id": "no-players"}), "  "]
    games = _parse_lines(lines)
    assert [g["id"] for g in games] == ["xyz"]


def test_fetch_games_yields_parsed():
    mock_response = _stream_response([json.dumps(GAME)])

    with patch("pgnview.lichess_client.httpx.stream", return_value=mock_response) as mock_stream:
        games = fetch_games("testuser", max_games=5)

    assert len(games) == 1
    assert games[0]["players"]["white"]["user"]["name"] == "A"
    args, kwargs = mock_stream.call_args
    assert args == ("GET", "https://lichess.org/api/games/user/testuser")
    assert kwargs["params"]["max"] == "5"
    assert kwargs["params"]["moves"] == "false"
    assert kwargs["headers"]["Accept"] == "application/x-ndjson"


def test_fetch_games_empty_username():
    with patch("pgnview.lichess_client.httpx.stream") as mock_stream:
        with pytest.raises(GameFetchError, match="Username not specified"):
            fetch_games("  ")
    mock_stream.assert_not_called()


@pytest.mark.parametrize(
    "status, message",
    [
        (404, "User not found"),
        (429, "Too many requests"),
        (400, "Bad request"),
        (500, "lichess returned HTTP 500"),
    ],
)
def test_fetch_games_http_errors(status, message):
    mock_response = _stream_response([])
    mock_response.raise_for_status.side_effect = _status_error(status)

    with patch("pgnview.lichess_client.httpx.stream", return_value=mock_response):
        with pytest.raises(GameFetchError, match=message) as excinfo:
            fetch_games("someone")
    assert excinfo.value.status_code == status


def test_fetch_games_network_error():
    with patch("pgnview.lichess_client.httpx.stream", side_effect=httpx.ConnectError("down")):
        with pytest.raises(GameFetchError, match="Network error"):
            fetch_games("someone")


def test_fetch_game_pgn_merges_options():
    mock_response = MagicMock()
    mock_response.text = '[Event "x"]\n\n1. e4 *\n'

    with patch("pgnview.lichess_client.httpx.get", return_value=mock_response) as mock_get:
        pgn = fetch_game_pgn("abc123", {"evals": True})

    assert pgn.startswith('[Event "x"]')
    args, kwargs = mock_get.call_args
    assert args == ("https://lichess.org/game/export/abc123.pgn",)
    assert kwargs["params"] == {
        "moves": "1",
        "tags": "1",
        "clocks": "1",
        "evals": "1",
        "accuracy": "0",
        "opening": "0",
        "literate": "0",
    }
    assert kwargs["headers"]["Accept"] == "application/x-chess-pgn"


def test_fetch_game_pgn_error():
    mock_response = MagicMock()
    mock_response.raise_for_status.side_effect = _status_error(404)

    with patch("pgnview.lichess_client.httpx.get", return_value=mock_response):
        with pytest.raises(GameFetchError, match="Failed to fetch the game PGN") as excinfo:
            fetch_game_pgn("missing")
    assert excinfo.value.status_code == 404


def test_fetch_game_json():
    mock_response = MagicMock()
    mock_response.json.return_value = {"id": "abc123", "pgn": "1. e4 *"}

    with patch("pgnview.lichess_client.httpx.get", return_value=mock_response) as mock_get:
        data = fetch_game_json("abc123")

    assert data["id"] == "abc123"
    assert mock_get.call_args.kwargs["params"]["evals"] == "true"
