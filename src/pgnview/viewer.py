"""Streamlit viewer: list a player's recent games and show annotated moves.

Run with ``streamlit run src/pgnview/viewer.py``.
"""

import os

import streamlit as st
from dotenv import load_dotenv

from pgnview import games
from pgnview.errors import GameFetchError
from pgnview.render import DEFAULT_MAX_MOVES, format_pgn_compact, format_pgn_for_display

MAX_GAMES = 20

_ENV_KEYS = {
    "lichess": "LICHESS_USERNAME",
    "chesscom": "CHESSCOM_USERNAME",
}

PGN_CSS = """
<style>
.pgn-header { margin-bottom: .75rem; }
.pgn-label { font-weight: 600; }
.pgn-moves-container, .compact-moves { white-space: pre-wrap; font-family: monospace; line-height: 1.7; }
.move-number, .compact-move-number { color: #6b7280; }
.move, .compact-move { font-weight: 600; }
.analysis, .clock, .time-spent { color: #6b7280; font-size: .85rem; }
.eval { padding: 0 .25rem; border-radius: .25rem; }
.eval-white-very-good { background: #f8fafc; color: #111827; border: 1px solid #cbd5e1; }
.eval-white-good { background: #e2e8f0; color: #111827; }
.eval-white-slightly-good { background: #cbd5e1; color: #111827; }
.eval-black-very-good { background: #111827; color: #f8fafc; }
.eval-black-good { background: #374151; color: #f8fafc; }
.eval-black-slightly-good { background: #6b7280; color: #f8fafc; }
.eval-neutral { background: #9ca3af; color: #111827; }
.more-moves { margin-top: .5rem; color: #6b7280; font-style: italic; }
</style>
"""


@st.cache_data(ttl=300, show_spinner=False)
def load_games(username: str, platform: str) -> list[games.Game]:
    return games.fetch_recent_games(username, platform, max_games=MAX_GAMES)


@st.cache_data(ttl=300, show_spinner=False)
def load_pgn(game: games.Game) -> str:
    return games.fetch_pgn(game)


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

st.set_page_config(page_title="Chess Games Viewer", page_icon="♟", layout="wide")
st.title("Chess Games Viewer")
st.markdown(PGN_CSS, unsafe_allow_html=True)

load_dotenv()

platform = st.radio(
    "Platform",
    games.PLATFORMS,
    format_func=lambda p: "Lichess.org" if p == "lichess" else "Chess.com",
    horizontal=True,
)
default_user = os.getenv(_ENV_KEYS[platform], "").strip()
username = st.text_input("Username", value=default_user).strip()

if not username:
    st.info("Enter a username to load recent games.")
    st.stop()

try:
    with st.spinner("Loading games..."):
        game_list = load_games(username, platform)
except GameFetchError as exc:
    st.error(str(exc))
    st.stop()

if not game_list:
    st.info("No games found. The user may not have played recently, or the name is misspelled.")
    st.stop()

col_list, col_game = st.columns([2, 3])

with col_list:
    st.subheader(f"Games of {username}")
    selected = st.radio(
        "Games",
        range(len(game_list)),
        format_func=lambda i: games.game_label(game_list[i]),
        label_visibility="collapsed",
    )

with col_game:
    game = game_list[selected]
    view_mode = st.radio("View", ["Detailed", "Compact"], horizontal=True)

    try:
        with st.spinner("Loading PGN..."):
            pgn = load_pgn(game)
    except GameFetchError as exc:
        st.error(f"Failed to load PGN: {exc}")
        st.stop()

    if view_mode == "Detailed":
        body = format_pgn_for_display(pgn, DEFAULT_MAX_MOVES)
    else:
        body = format_pgn_compact(pgn, DEFAULT_MAX_MOVES)
    # raw newlines end an HTML block in markdown
    st.markdown(body.replace("\n", "<br>"), unsafe_allow_html=True)

    if game.url:
        st.caption(f"[Open on {game.platform}]({game.url})")
