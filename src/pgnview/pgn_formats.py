"""Lichess PGN export presets."""

PGN_OPTION_KEYS = ("moves", "tags", "clocks", "evals", "accuracy", "opening", "literate")


def _options(*enabled: str) -> dict[str, bool]:
    return {key: key in enabled for key in PGN_OPTION_KEYS}


PGN_FORMATS: dict[str, dict[str, bool]] = {
    "basic": _options("moves", "tags", "clocks"),
    "with-evals": _options("moves", "tags", "clocks", "evals"),
    "with-analysis": _options("moves", "tags", "clocks", "evals", "accuracy", "opening"),
    "moves-only": _options("moves"),
    "literate": _options("moves", "tags", "clocks", "evals", "accuracy", "opening", "literate"),
    "tournament": _options("moves", "tags", "clocks", "opening"),
    "minimal": _options("moves"),
}

FORMAT_DESCRIPTIONS = {
    "basic": "Standard PGN with tags and moves",
    "with-evals": "PGN with computer evaluations",
    "with-analysis": "Full analysis with accuracy and opening",
    "moves-only": "Moves only, no tags",
    "literate": "With literate annotations",
    "tournament": "Tournament style with opening information",
    "minimal": "Minimal (moves only)",
}


def get_pgn_options(name: str) -> dict[str, bool]:
    """Return a copy of the export options for a preset name."""
    try:
        return dict(PGN_FORMATS[name])
    except KeyError:
        raise ValueError(f"Unknown PGN format: {name!r}") from None
