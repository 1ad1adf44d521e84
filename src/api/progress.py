"""Marks a module item complete once an embedded game session finishes."""

import logging
from typing import Any, Dict, Optional

import requests

from ..engine.models import ApiConfig, SessionOutcome
from .client import build_session, unwrap
from .errors import GameServiceError

logger = logging.getLogger(__name__)


class ProgressReporter:
    """Client for the user-progress endpoint of the enclosing course module."""

    def __init__(self, config: Optional[ApiConfig] = None, session: Optional[requests.Session] = None) -> None:
        self.config = config or ApiConfig()
        self.session = session or build_session(self.config)

    def complete_item(
        self,
        item_id: str,
        score: Optional[float] = None,
        percentage: Optional[float] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Mark a module item complete.

        Raises:
            GameServiceError: if the request fails or the server rejects it
        """
        payload: Dict[str, Any] = {}
        if score is not None:
            payload["score"] = score
        if percentage is not None:
            payload["percentage"] = percentage
        if metadata:
            payload["metadata"] = metadata

        url = self.config.base_url.rstrip("/") + f"/v1/user-progress/items/{item_id}/complete"
        try:
            response = self.session.put(url, json=payload, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise GameServiceError(f"Failed to save progress: {e}") from e
        return unwrap(response, "Failed to save progress")

    def report(self, item_id: str, outcome: SessionOutcome) -> bool:
        """
        Report a finished session. Failures are logged, not raised.

        Returns:
            True if the server accepted the update
        """
        metadata = {"gameType": outcome.game_type, "activityId": outcome.activity_id}
        if outcome.aggregate is not None:
            metadata["totalItems"] = outcome.aggregate.total_items
            metadata["totalCorrect"] = outcome.aggregate.total_correct

        try:
            self.complete_item(item_id, score=outcome.score, percentage=outcome.percentage, metadata=metadata)
        except GameServiceError as e:
            logger.warning("Could not save progress for item %s: %s", item_id, e)
            return False
        return True
