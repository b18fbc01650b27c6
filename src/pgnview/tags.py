"""PGN tag-pair extraction."""

import re

TAG_RE = re.compile(r'\[(\w+)\s+"([^"]+)"\]')


def is_movetext_line(line: str) -> bool:
    """True for a non-empty line that is neither a tag pair nor an escape."""
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith(("[", "%"))


def parse_pgn(pgn: str) -> dict[str, str]:
    """Parse PGN tag pairs into a dict keyed by lower-cased tag name.

    The first movetext line, if any, is stored under ``moves``.
    Non-matching lines are ignored; a repeated tag keeps its last value.
    """
    info: dict[str, str] = {}
    lines = pgn.splitlines()

    for line in lines:
        match = TAG_RE.fullmatch(line)
        if match:
            tag, value = match.groups()
            info[tag.lower()] = value

    moves_line = next((line for line in lines if is_movetext_line(line)), None)
    if moves_line is not None:
        info["moves"] = moves_line.strip()

    return info
