"""Remote collaborators: game service and progress reporting."""

from .errors import GameServiceError
from .client import GameService, HttpGameService, ROUTES, build_session, unwrap
from .progress import ProgressReporter

__all__ = [
    "GameService",
    "GameServiceError",
    "HttpGameService",
    "ROUTES",
    "build_session",
    "unwrap",
    "ProgressReporter",
]
