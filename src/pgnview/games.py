"""Platform-neutral game summaries for list views."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from . import chesscom_client, lichess_client
from .errors import GameFetchError
from .pgn_formats import get_pgn_options
from .render import RESULT_PHRASES

Platform = Literal["lichess", "chesscom"]
PLATFORMS: tuple[Platform, ...] = ("lichess", "chesscom")


@dataclass(frozen=True)
class Player:
    name: str
    rating: int | None = None


@dataclass(frozen=True)
class Game:
    id: str
    platform: Platform
    white: Player
    black: Player
    result: str
    speed: str | None = None
    time_class: str | None = None
    rated: bool | None = None
    created_at: int | None = None  # epoch milliseconds
    time_control: str | None = None
    url: str | None = None
    pgn: str | None = field(default=None, repr=False)


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


def player_name(player: dict | None) -> str:
    """Best-effort display name from a Lichess player object."""
    if not player:
        return "Unknown"
    user = player.get("user")
    if isinstance(user, dict) and user.get("name"):
        return user["name"]
    if player.get("name"):
        return player["name"]
    if isinstance(user, str) and user:
        return user
    return "Unknown"


def player_rating(player: dict | None) -> int | None:
    if not player:
        return None
    user = player.get("user")
    if isinstance(user, dict) and user.get("rating") is not None:
        return user["rating"]
    return player.get("rating")


def result_from_winner(winner: str | None) -> str:
    """Convert Lichess winner field to PGN result."""
    if winner == "white":
        return "1-0"
    elif winner == "black":
        return "0-1"
    else:
        return "1/2-1/2"


def result_phrase(result: str | None) -> str:
    if not result:
        return "Draw"
    return RESULT_PHRASES.get(result, result)


def format_game_time(timestamp_ms: int | None) -> str:
    """Local date and time of an epoch-milliseconds timestamp."""
    if not timestamp_ms:
        return "Unknown"
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%d.%m.%Y, %H:%M:%S")


def format_rating_diff(diff: int | None) -> str:
    if diff is None:
        return ""
    return f"+{diff}" if diff > 0 else str(diff)


def _minutes(seconds: int) -> str:
    return f"{seconds // 60}" if seconds % 60 == 0 else f"{seconds / 60:g}"


def game_label(game: Game) -> str:
    """One-line summary used by the game lists."""
    white = f"{game.white.name} ({game.white.rating or '?'})"
    black = f"{game.black.name} ({game.black.rating or '?'})"
    kind = game.speed or game.time_class or "unknown"
    return f"{white} vs {black} · {game.result} · {kind} · {format_game_time(game.created_at)}"


# ---------------------------------------------------------------------------
# Platform records -> Game
# ---------------------------------------------------------------------------


def from_lichess(data: dict) -> Game:
    players = data.get("players", {})
    white = players.get("white", {})
    black = players.get("black", {})

    clock = data.get("clock")
    time_control = None
    if clock:
        time_control = f"{_minutes(clock.get('initial', 0))}+{clock.get('increment', 0)}"

    return Game(
        id=data["id"],
        platform="lichess",
        white=Player(player_name(white), player_rating(white)),
        black=Player(player_name(black), player_rating(black)),
        result=result_from_winner(data.get("winner")),
        speed=data.get("speed"),
        rated=data.get("rated"),
        created_at=data.get("createdAt"),
        time_control=time_control,
        url=f"https://lichess.org/{data['id']}",
    )


def from_chesscom(data: dict) -> Game:
    white = data.get("white", {})
    black = data.get("black", {})
    end_time = data.get("end_time")
    return Game(
        id=data["id"],
        platform="chesscom",
        white=Player(white.get("username") or "Unknown", white.get("rating")),
        black=Player(black.get("username") or "Unknown", black.get("rating")),
        result=data.get("result") or "1/2-1/2",
        time_class=data.get("time_class"),
        rated=data.get("rated"),
        created_at=end_time * 1000 if end_time else None,
        time_control=data.get("time_control"),
        url=data.get("url"),
        pgn=data.get("pgn"),
    )


# ---------------------------------------------------------------------------
# Fetching
# ---------------------------------------------------------------------------


def fetch_recent_games(username: str, platform: Platform, max_games: int = 10) -> list[Game]:
    """Fetch a user's recent games from either platform."""
    if platform == "lichess":
        return [from_lichess(g) for g in lichess_client.fetch_games(username, max_games=max_games)]
    return [from_chesscom(g) for g in chesscom_client.fetch_games(username, max_games=max_games)]


def fetch_pgn(game: Game, pgn_format: str = "with-evals") -> str:
    """Return the PGN of a listed game.

    Lichess games are exported on demand; Chess.com games carry their PGN
    in the archive listing.
    """
    if game.platform == "lichess":
        return lichess_client.fetch_game_pgn(game.id, get_pgn_options(pgn_format))
    if not game.pgn:
        raise GameFetchError("PGN not available")
    return game.pgn
