"""Detailed and compact renderings of an annotated PGN.

Both views are built as a tree of :class:`Segment` objects and serialized
at the end, either to class-tagged HTML (:func:`to_html`) or to plain text
(:func:`to_text`).
"""

import html
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal, Union

from .annotations import eval_class, format_eval
from .moves import MoveToken, parse_moves_with_analysis
from .tags import parse_pgn

logger = logging.getLogger(__name__)

DEFAULT_MAX_MOVES = 300

OutputFormat = Literal["html", "text"]

RESULT_PHRASES = {
    "1-0": "White wins",
    "0-1": "Black wins",
    "1/2-1/2": "Draw",
    "*": "Unfinished",
}

Node = Union["Segment", str]


@dataclass(slots=True)
class Segment:
    """A labelled piece of output: ``tag`` is ``div``, ``span`` or ``strong``."""

    tag: str
    cls: str | None = None
    children: list[Node] = field(default_factory=list)


def _div(cls: str | None, *children: Node) -> Segment:
    return Segment("div", cls, list(children))


def _span(cls: str | None, *children: Node) -> Segment:
    return Segment("span", cls, list(children))


# ---------------------------------------------------------------------------
# Serializers
# ---------------------------------------------------------------------------


def to_html(nodes: Sequence[Node]) -> str:
    """Serialize segments to markup; text content is HTML-escaped."""
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, str):
            parts.append(html.escape(node, quote=False))
            continue
        attrs = f' class="{html.escape(node.cls)}"' if node.cls else ""
        parts.append(f"<{node.tag}{attrs}>{to_html(node.children)}</{node.tag}>")
    return "".join(parts)


def _text(nodes: Sequence[Node]) -> str:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, str):
            parts.append(node)
        elif node.tag == "div":
            parts.append(f"\n{_text(node.children)}\n")
        else:
            parts.append(_text(node.children))
    return "".join(parts)


def to_text(nodes: Sequence[Node]) -> str:
    """Serialize segments to plain text, one line per block element."""
    lines = [line.rstrip() for line in _text(nodes).splitlines()]
    return "\n".join(line for line in lines if line)


def serialize(nodes: Sequence[Node], fmt: OutputFormat = "html") -> str:
    if fmt == "text":
        return to_text(nodes)
    return to_html(nodes)


# ---------------------------------------------------------------------------
# Shared pieces
# ---------------------------------------------------------------------------


def _ply_cap(max_moves: int) -> int:
    return max(0, max_moves) * 2


def _time_fragment(move: MoveToken) -> str | None:
    return move.time_spent or move.clock


def _eval_span(move: MoveToken) -> Segment:
    return _span(f"eval {eval_class(move.evaluation)}", format_eval(move.evaluation))


def _truncated_raw(moves: str, max_moves: int) -> str:
    """Whitespace-truncate raw movetext to the ply cap."""
    cap = _ply_cap(max_moves)
    parts = moves.split()
    if len(parts) > cap:
        return " ".join(parts[:cap]) + "..."
    return moves


# ---------------------------------------------------------------------------
# Detailed view
# ---------------------------------------------------------------------------


def _info(label: str, value: str) -> Segment:
    return _div("pgn-info", _span("pgn-label", f"{label}:"), f" {value}")


def detailed_header(info: dict[str, str]) -> Segment:
    header = _div("pgn-header")
    rows = header.children

    if info.get("event"):
        rows.append(_info("Event", info["event"]))
    if info.get("date"):
        rows.append(_info("Date", info["date"]))
    if info.get("white"):
        rows.append(_info("White", info["white"]))
    if info.get("black"):
        rows.append(_info("Black", info["black"]))
    if info.get("result"):
        result = info["result"]
        rows.append(_info("Result", RESULT_PHRASES.get(result, result)))
    if info.get("eco") and info.get("opening"):
        rows.append(_info("Opening", f"{info['eco']} - {info['opening']}"))
    if info.get("timecontrol"):
        rows.append(_info("Time control", info["timecontrol"]))

    return header


def detailed_moves(moves: Sequence[MoveToken], max_moves: int = DEFAULT_MAX_MOVES) -> list[Node]:
    """Lay out plies one full move per line with ``(eval time)`` fragments."""
    cap = _ply_cap(max_moves)
    nodes: list[Node] = []
    current_number = 0

    for move in moves[:cap]:
        if not move.is_black and move.move_number != current_number:
            if nodes:
                nodes.append("\n")
            nodes.append(_span("move-number", f"{move.move_number}."))
            nodes.append(" ")
            current_number = move.move_number

        nodes.append(_span("move", move.text))

        analysis: list[Node] = []
        if move.evaluation is not None:
            analysis.append(_eval_span(move))
        time_text = _time_fragment(move)
        if time_text:
            if analysis:
                analysis.append(" ")
            cls = "time-spent" if move.time_spent else "clock"
            analysis.append(_span(cls, time_text))

        if analysis:
            nodes.append(" ")
            nodes.append(_span("analysis", "(", *analysis, ")"))

        nodes.append(" ")

    if len(moves) > cap:
        nodes.append(_div("more-moves", f"... and {len(moves) - cap} more moves"))

    return nodes


def build_detailed(pgn: str, max_moves: int = DEFAULT_MAX_MOVES) -> list[Node]:
    parsed = parse_pgn(pgn)
    nodes: list[Node] = [detailed_header(parsed)]

    if parsed.get("moves"):
        container = _div("pgn-moves-container")
        try:
            moves = parse_moves_with_analysis(parsed["moves"])
            container.children.extend(detailed_moves(moves, max_moves))
        except Exception:
            logger.warning("Failed to lay out moves, showing raw movetext", exc_info=True)
            container.children = [_div(None, f"Moves: {_truncated_raw(parsed['moves'], max_moves)}")]
        nodes.append(container)

    return nodes


def format_pgn_for_display(
    pgn: str, max_moves: int = DEFAULT_MAX_MOVES, fmt: OutputFormat = "html"
) -> str:
    """Render the detailed view of a PGN. Never raises."""
    if not isinstance(pgn, str):
        pgn = ""
    try:
        return serialize(build_detailed(pgn, max_moves), fmt)
    except Exception:
        logger.warning("Failed to render PGN", exc_info=True)
        return ""


# ---------------------------------------------------------------------------
# Compact view
# ---------------------------------------------------------------------------


def compact_header(info: dict[str, str]) -> list[Node]:
    nodes: list[Node] = []
    if info.get("white") and info.get("black"):
        nodes.append(
            _div("compact-header", Segment("strong", None, [f"{info['white']} - {info['black']}"]))
        )
    if info.get("result"):
        nodes.append(_div("compact-info", f"Result: {info['result']}"))
    if info.get("eco") and info.get("opening"):
        nodes.append(_div("compact-info", f"Opening: {info['eco']} {info['opening']}"))
    return nodes


def compact_moves(moves: Sequence[MoveToken], max_moves: int = DEFAULT_MAX_MOVES) -> list[Node]:
    """Inline move stream: ``1. e4(+0.30)[0:05:00] e5 ...``."""
    cap = _ply_cap(max_moves)
    nodes: list[Node] = []
    current_number = 0

    for move in moves[:cap]:
        if not move.is_black and move.move_number != current_number:
            nodes.append(_span("compact-move-number", f"{move.move_number}."))
            nodes.append(" ")
            current_number = move.move_number

        nodes.append(_span("compact-move", move.text))
        if move.evaluation is not None:
            nodes.extend(["(", _eval_span(move), ")"])
        time_text = _time_fragment(move)
        if time_text:
            nodes.append(f"[{time_text}]")
        nodes.append(" ")

    if len(moves) > cap:
        nodes.append("...")

    return nodes


def build_compact(pgn: str, max_moves: int = DEFAULT_MAX_MOVES) -> list[Node]:
    parsed = parse_pgn(pgn)
    nodes = compact_header(parsed)

    if parsed.get("moves"):
        container = _div("compact-moves")
        try:
            moves = parse_moves_with_analysis(parsed["moves"])
            container.children.extend(compact_moves(moves, max_moves))
        except Exception:
            logger.warning("Failed to lay out moves, showing raw movetext", exc_info=True)
            container.children = [_truncated_raw(parsed["moves"], max_moves)]
        nodes.append(container)

    return nodes


def format_pgn_compact(
    pgn: str, max_moves: int = DEFAULT_MAX_MOVES, fmt: OutputFormat = "html"
) -> str:
    """Render the compact view of a PGN. Never raises."""
    if not isinstance(pgn, str):
        pgn = ""
    try:
        return serialize(build_compact(pgn, max_moves), fmt)
    except Exception:
        logger.warning("Failed to render PGN", exc_info=True)
        return ""
