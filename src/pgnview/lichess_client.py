"""Lichess API client — streams game lists as NDJSON, exports single PGNs."""

import json
import logging

import httpx

from .errors import GameFetchError, from_http_error

logger = logging.getLogger(__name__)

LICHESS_BASE = "https://lichess.org"
LICHESS_API_BASE = f"{LICHESS_BASE}/api"
USER_AGENT = "pgnview/0.1.0"

DEFAULT_PGN_OPTIONS = {
    "moves": True,
    "tags": True,
    "clocks": True,
    "evals": False,
    "accuracy": False,
    "opening": False,
    "literate": False,
}


def _status(exc: httpx.HTTPError) -> int | None:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code
    return None


def _parse_lines(lines) -> list[dict]:
    """Decode NDJSON lines, skipping blanks, bad JSON and non-game objects."""
    games = []
    for line in lines:
        if not line.strip():
            continue
        try:
            data = json.loads(line)
        except json.JSONDecodeError:
            logger.warning("Failed to parse game line: %.80s", line)
            continue
        if isinstance(data, dict) and data.get("id") and data.get("players"):
            games.append(data)
    return games


def fetch_games(username: str, max_games: int = 10) -> list[dict]:
    """Fetch the most recent games of a Lichess user (no moves, no tags)."""
    if not username.strip():
        raise GameFetchError("Username not specified")

    url = f"{LICHESS_API_BASE}/games/user/{username}"
    params = {
        "max": str(max_games),
        "moves": "false",
        "pgnInJson": "false",
        "tags": "false",
        "clocks": "false",
        "evals": "false",
    }
    headers = {
        "Accept": "application/x-ndjson",
        "User-Agent": USER_AGENT,
    }

    logger.debug("GET %s %s", url, params)
    try:
        with httpx.stream("GET", url, headers=headers, params=params, timeout=15.0) as response:
            response.raise_for_status()
            return _parse_lines(response.iter_lines())
    except httpx.HTTPError as exc:
        raise from_http_error(exc, "lichess") from exc


def fetch_game_pgn(game_id: str, options: dict[str, bool] | None = None) -> str:
    """Export one game as PGN text; ``options`` override the export flags."""
    merged = {**DEFAULT_PGN_OPTIONS, **(options or {})}
    params = {key: "1" if value else "0" for key, value in merged.items()}
    url = f"{LICHESS_BASE}/game/export/{game_id}.pgn"
    headers = {
        "Accept": "application/x-chess-pgn",
        "User-Agent": USER_AGENT,
    }

    logger.debug("GET %s %s", url, params)
    try:
        response = httpx.get(url, headers=headers, params=params, timeout=10.0)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise GameFetchError("Failed to fetch the game PGN", _status(exc)) from exc
    return response.text


def fetch_game_json(game_id: str) -> dict:
    """Fetch one game as JSON with moves, clocks, evals and opening."""
    url = f"{LICHESS_API_BASE}/game/{game_id}"
    params = {
        "moves": "true",
        "pgnInJson": "true",
        "tags": "true",
        "clocks": "true",
        "evals": "true",
        "accuracy": "true",
        "opening": "true",
    }
    headers = {
        "Accept": "application/json",
        "User-Agent": USER_AGENT,
    }

    logger.debug("GET %s", url)
    try:
        response = httpx.get(url, headers=headers, params=params, timeout=10.0)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise GameFetchError("Failed to fetch the game as JSON", _status(exc)) from exc
    return response.json()
