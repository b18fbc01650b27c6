"""Command-line interface for pgnview."""

import logging
import os
from pathlib import Path

import click
from dotenv import load_dotenv

from . import games as games_mod
from . import lichess_client
from .errors import GameFetchError
from .pgn_formats import FORMAT_DESCRIPTIONS, PGN_FORMATS, get_pgn_options
from .pgn_io import read_games
from .render import DEFAULT_MAX_MOVES, format_pgn_compact, format_pgn_for_display

_ENV_KEYS = {
    "lichess": "LICHESS_USERNAME",
    "chesscom": "CHESSCOM_USERNAME",
}


def _resolve_username(username: str | None, platform: str) -> str:
    """Return explicit username or fall back to the matching env var."""
    if username:
        return username
    env_key = _ENV_KEYS[platform]
    val = os.environ.get(env_key)
    if not val:
        raise click.UsageError(f"{env_key} not set in .env")
    return val


def _render(pgn: str, compact: bool, as_html: bool, max_moves: int) -> str:
    fmt = "html" if as_html else "text"
    if compact:
        return format_pgn_compact(pgn, max_moves, fmt)
    return format_pgn_for_display(pgn, max_moves, fmt)


def _view_options(func):
    func = click.option("--html", "as_html", is_flag=True, help="Emit HTML instead of plain text.")(func)
    func = click.option("--compact", is_flag=True, help="Compact single-block view.")(func)
    func = click.option(
        "--max-moves",
        type=click.IntRange(min=0),
        envvar="PGNVIEW_MAX_MOVES",
        default=DEFAULT_MAX_MOVES,
        show_default=True,
        help="Maximum full moves to display.",
    )(func)
    return func


_platform_option = click.option(
    "--platform",
    type=click.Choice(games_mod.PLATFORMS),
    default="lichess",
    show_default=True,
    help="Platform to fetch games from.",
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """pgnview - Browse chess games from Lichess and Chess.com with annotated moves."""
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)


@main.command(name="games")
@click.option("-u", "--username", default=None, help="Username (defaults to .env value).")
@_platform_option
@click.option("--max", "max_games", type=click.IntRange(min=1), default=20, show_default=True, help="Max games to list.")
def games_cmd(username: str | None, platform: str, max_games: int) -> None:
    """List a user's recent games."""
    user = _resolve_username(username, platform)
    try:
        games = games_mod.fetch_recent_games(user, platform, max_games=max_games)
    except GameFetchError as exc:
        raise click.ClickException(str(exc)) from exc

    if not games:
        click.echo(f"No games found for {user} on {platform}.")
        return

    click.echo(f"{'ID':<14} {'White':<20} {'Black':<20} {'Result':<8} {'Speed':<12} {'Played'}")
    click.echo("-" * 100)
    for game in games:
        white_disp = (game.white.name[:17] + "...") if len(game.white.name) > 20 else game.white.name
        black_disp = (game.black.name[:17] + "...") if len(game.black.name) > 20 else game.black.name
        game_id = game.id if len(game.id) <= 14 else game.id[:11] + "..."
        kind = game.speed or game.time_class or "-"
        click.echo(
            f"{game_id:<14} {white_disp:<20} {black_disp:<20} {game.result:<8} "
            f"{kind:<12} {games_mod.format_game_time(game.created_at)}"
        )


@main.command()
@click.argument("game_id")
@click.option("-u", "--username", default=None, help="Chess.com username to search (defaults to .env value).")
@_platform_option
@click.option(
    "--pgn-format",
    type=click.Choice(list(PGN_FORMATS)),
    default="with-evals",
    show_default=True,
    help="Lichess export preset.",
)
@_view_options
def show(
    game_id: str,
    username: str | None,
    platform: str,
    pgn_format: str,
    compact: bool,
    as_html: bool,
    max_moves: int,
) -> None:
    """Fetch one game and render its annotated moves."""
    try:
        if platform == "lichess":
            pgn = lichess_client.fetch_game_pgn(game_id, get_pgn_options(pgn_format))
        else:
            user = _resolve_username(username, platform)
            recent = games_mod.fetch_recent_games(user, platform, max_games=100)
            game = next((g for g in recent if g.id == game_id), None)
            if game is None:
                raise click.ClickException(f"Game {game_id} not found among {user}'s recent games.")
            pgn = games_mod.fetch_pgn(game)
    except GameFetchError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(_render(pgn, compact, as_html, max_moves))


@main.command()
@click.argument("pgn_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--game", "game_index", type=click.IntRange(min=1), default=None, help="Render only the N-th game.")
@_view_options
def render(pgn_file: Path, game_index: int | None, compact: bool, as_html: bool, max_moves: int) -> None:
    """Render games from a local PGN file."""
    pgns = read_games(pgn_file)
    if not pgns:
        raise click.ClickException(f"No games found in {pgn_file}.")

    if game_index is not None:
        if game_index > len(pgns):
            raise click.UsageError(f"--game {game_index} out of range ({len(pgns)} game(s) in file)")
        pgns = [pgns[game_index - 1]]

    for i, pgn in enumerate(pgns):
        if i:
            click.echo()
        click.echo(_render(pgn, compact, as_html, max_moves))


@main.command()
def formats() -> None:
    """List Lichess PGN export presets."""
    for name, description in FORMAT_DESCRIPTIONS.items():
        click.echo(f"{name:<14} {description}")


if __name__ == "__main__":
    main()
