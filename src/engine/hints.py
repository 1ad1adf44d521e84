"""Hint requests for the item being played."""

import logging
from typing import Callable, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from .models import Hint
from ..api.errors import GameServiceError

logger = logging.getLogger(__name__)


class HintCoordinator(BaseModel):
    """
    Fetches hints and keeps the latest one per sub-unit of the current item.

    Hints are display state only. A failed request is logged and play
    continues; a hint that resolves after its item was finalized or
    replaced is dropped.

    Attributes:
        hints: Latest hint per sub-unit key (blank id, word index or item index)
        hints_used: Number of hints received for the current item
    """

    hints: Dict[int, Hint] = Field(default_factory=dict)
    hints_used: int = 0

    def reset(self) -> None:
        self.hints = {}
        self.hints_used = 0

    def get(self, key: int) -> Optional[Hint]:
        return self.hints.get(key)

    async def request(
        self,
        service,
        activity_id: str,
        item_index: int,
        sub_unit_id: Optional[int],
        is_current: Callable[[], bool],
    ) -> Optional[Hint]:
        """
        Fetch a hint and merge it in if its item is still being played.

        Args:
            service: The GameService to ask
            activity_id: Activity being played
            item_index: Index of the item the hint is for
            sub_unit_id: Blank id or word index; None for whole-item hints
            is_current: Checked after the call resolves; False drops the hint

        Returns:
            The merged hint, or None if it failed or went stale
        """
        key = item_index if sub_unit_id is None else sub_unit_id

        try:
            data = await service.fetch_hint(activity_id, item_index, sub_unit_id)
            hint = Hint.model_validate(data or {})
        except (GameServiceError, ValidationError) as e:
            logger.warning("Hint for item %d (unit %s) failed: %s", item_index, sub_unit_id, e)
            return None

        if not is_current():
            logger.debug("Dropping stale hint for item %d (unit %s)", item_index, sub_unit_id)
            return None

        self.hints[key] = hint
        self.hints_used += 1
        return hint
