"""Errors raised by remote collaborators."""

from typing import Optional


class GameServiceError(Exception):
    """A remote call was rejected; the message is suitable for the player."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
