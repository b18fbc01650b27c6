"""Errors raised while talking to the chess platforms."""

import httpx

_STATUS_MESSAGES = {
    400: "Bad request. The user may not exist",
    403: "Access to the user's games is restricted",
    404: "User not found",
    429: "Too many requests. Try again later",
}


class GameFetchError(Exception):
    """A game list or PGN could not be retrieved."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def from_http_error(exc: httpx.HTTPError, platform: str) -> GameFetchError:
    """Translate an httpx failure into a user-facing :class:`GameFetchError`."""
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        message = _STATUS_MESSAGES.get(status, f"{platform} returned HTTP {status}")
        if status == 404 and platform == "chesscom":
            message = "User not found on Chess.com"
        return GameFetchError(message, status_code=status)
    if isinstance(exc, httpx.TransportError):
        return GameFetchError("Network error. Check your internet connection")
    return GameFetchError(str(exc) or f"Failed to fetch data from {platform}")
