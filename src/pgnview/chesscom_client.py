"""Chess.com API client — fetches recent games via monthly archives."""

import logging

import httpx

from .errors import GameFetchError, from_http_error

logger = logging.getLogger(__name__)

CHESSCOM_API_BASE = "https://api.chess.com/pub"
USER_AGENT = "pgnview/0.1.0"

# Number of most recent monthly archives searched for games.
RECENT_ARCHIVES = 3


def _parse_result(white: dict, black: dict) -> str:
    """Derive the PGN result from the per-player ``result`` fields."""
    if white.get("result") == "win":
        return "1-0"
    elif black.get("result") == "win":
        return "0-1"
    else:
        return "1/2-1/2"


def _parse_game(data: dict) -> dict:
    """Reduce a Chess.com archive game to the fields the viewer needs."""
    white = data.get("white", {})
    black = data.get("black", {})
    return {
        "id": data.get("uuid") or data.get("url", ""),
        "url": data.get("url"),
        "pgn": data.get("pgn"),
        "time_control": data.get("time_control"),
        "end_time": data.get("end_time"),
        "rated": data.get("rated"),
        "time_class": data.get("time_class"),
        "white": {"username": white.get("username"), "rating": white.get("rating")},
        "black": {"username": black.get("username"), "rating": black.get("rating")},
        "result": _parse_result(white, black),
    }


def _get_archives(username: str) -> list[str]:
    """Get list of monthly archive URLs for a Chess.com user."""
    url = f"{CHESSCOM_API_BASE}/player/{username}/games/archives"
    headers = {"User-Agent": USER_AGENT}
    logger.debug("GET %s", url)
    response = httpx.get(url, headers=headers, timeout=10.0)
    response.raise_for_status()
    return response.json().get("archives") or []


def fetch_games(username: str, max_games: int = 10) -> list[dict]:
    """Fetch the most recent games of a Chess.com user.

    Only the last few monthly archives are searched. An archive that fails
    to load is logged and skipped; failing to list the archives is an error.
    """
    if not username.strip():
        raise GameFetchError("Username not specified")

    try:
        archives = _get_archives(username)
    except httpx.HTTPError as exc:
        raise from_http_error(exc, "chesscom") from exc

    headers = {"User-Agent": USER_AGENT}
    games: list[dict] = []
    for archive_url in archives[-RECENT_ARCHIVES:]:
        logger.debug("GET %s", archive_url)
        try:
            response = httpx.get(archive_url, headers=headers, timeout=10.0)
            response.raise_for_status()
            month_games = response.json().get("games", [])
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Error fetching games from archive %s: %s", archive_url, exc)
            continue
        games.extend(_parse_game(game) for game in month_games)

    games.sort(key=lambda game: game["end_time"] or 0, reverse=True)
    return games[:max_games]
