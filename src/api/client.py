"""
Remote collaborators for the game engine.

The engine only needs three operations per game: fetch a playable item,
fetch a hint, and validate an attempt. `GameService` is the protocol the
engine depends on; `HttpGameService` implements it over the platform's
REST API with requests, running each call in a worker thread so the
engine's event loop is never blocked.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, NamedTuple, Optional, Protocol

import requests

from ..engine.models import ApiConfig, GameType
from .errors import GameServiceError

logger = logging.getLogger(__name__)


class GameService(Protocol):
    async def fetch_playable_item(self, activity_id: str, item_index: int) -> Dict[str, Any]:
        ...

    async def fetch_hint(self, activity_id: str, item_index: int, sub_unit_id: Optional[int] = None) -> Dict[str, Any]:
        ...

    async def validate_attempt(self, activity_id: str, item_index: int, submission: Dict[str, Any]) -> Dict[str, Any]:
        ...


class Routes(NamedTuple):
    play: Callable[[str], str]
    validate: Callable[[str], str]
    hint: Callable[[str, int, Optional[int]], str]
    index_param: Optional[str]  # query parameter selecting the item, if any


ROUTES: Dict[str, Routes] = {
    "word_search": Routes(
        play=lambda a: f"/v1/word-search/activity/{a}/play",
        validate=lambda a: f"/v1/word-search/activity/{a}/validate",
        hint=lambda a, item, word: f"/v1/word-search/activity/{a}/hint/{word}",
        index_param=None,
    ),
    "hanging": Routes(
        play=lambda a: f"/v1/hanging/activity/{a}/play",
        validate=lambda a: f"/v1/hanging/activity/{a}/validate",
        hint=lambda a, item, _: f"/v1/hanging/activity/{a}/hint/{item}",
        index_param="wordIndex",
    ),
    "complete_phrase": Routes(
        play=lambda a: f"/v1/complete-phrase/activity/{a}/play",
        validate=lambda a: f"/v1/complete-phrase/activity/{a}/validate",
        hint=lambda a, item, blank: f"/v1/complete-phrase/activity/{a}/hint/{item}/{blank}",
        index_param="phraseIndex",
    ),
}


def build_session(config: ApiConfig) -> requests.Session:
    """Create a requests session with JSON and (optional) bearer auth headers."""
    session = requests.Session()
    session.headers.update({"Content-Type": "application/json"})
    if config.token:
        session.headers["Authorization"] = f"Bearer {config.token}"
    return session


def unwrap(response: requests.Response, default_message: str) -> Any:
    """
    Return the `data` of a `{success, message, data}` envelope.

    Raises:
        GameServiceError: on a non-2xx status or `success: false`, carrying
            the server's message when it sent one.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    message = body.get("message") if isinstance(body, dict) else None

    if not response.ok:
        raise GameServiceError(message or default_message, status_code=response.status_code)
    if not isinstance(body, dict) or not body.get("success", False):
        raise GameServiceError(message or default_message, status_code=response.status_code)

    return body.get("data")


class HttpGameService:
    """GameService over the platform REST API for one game type."""

    def __init__(
        self,
        game_type: GameType,
        config: Optional[ApiConfig] = None,
        session: Optional[requests.Session] = None,
        from_module: bool = False,
    ) -> None:
        if game_type not in ROUTES:
            raise ValueError(f"Unknown game type: {game_type}")
        self.game_type = game_type
        self.config = config or ApiConfig()
        self.session = session or build_session(self.config)
        self.from_module = from_module
        self.routes = ROUTES[game_type]

    def _url(self, path: str) -> str:
        return self.config.base_url.rstrip("/") + path

    def _request(self, method: str, path: str, default_message: str, **kwargs: Any) -> Any:
        url = self._url(path)
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, timeout=self.config.timeout, **kwargs)
        except requests.RequestException as e:
            raise GameServiceError(f"{default_message}: {e}") from e
        return unwrap(response, default_message)

    async def fetch_playable_item(self, activity_id: str, item_index: int) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if self.routes.index_param:
            params[self.routes.index_param] = item_index
        if self.game_type == "complete_phrase":
            params["fromModule"] = str(self.from_module).lower()

        return await asyncio.to_thread(
            self._request, "GET", self.routes.play(activity_id),
            "Failed to load the game", params=params or None,
        )

    async def fetch_hint(self, activity_id: str, item_index: int, sub_unit_id: Optional[int] = None) -> Dict[str, Any]:
        if self.game_type != "hanging" and sub_unit_id is None:
            raise GameServiceError(f"A {self.game_type} hint needs a word or blank id")

        return await asyncio.to_thread(
            self._request, "GET", self.routes.hint(activity_id, item_index, sub_unit_id),
            "Failed to fetch hint",
        )

    async def validate_attempt(self, activity_id: str, item_index: int, submission: Dict[str, Any]) -> Dict[str, Any]:
        return await asyncio.to_thread(
            self._request, "POST", self.routes.validate(activity_id),
            "Failed to validate answers", json=submission,
        )

    def close(self) -> None:
        self.session.close()
