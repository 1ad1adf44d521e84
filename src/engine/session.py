"""
Session state machine shared by every mini-game.

A GameSession drives one activity through

    loading -> playing -> (word_completed | completed) | error

and delegates everything game-specific to a GameRules strategy: how to read
an item, what the player's board looks like, when to submit on its own and
what to send. Remote calls are awaited; a result that resolves after the
session moved on (another item, a retry) is discarded.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .hints import HintCoordinator
from .models import GameType, Hint, PlayableItem, SessionOutcome, SessionStatus
from ..api.errors import GameServiceError
from ..rules.aggregate import aggregate_results
from ..rules.models import AggregatedResult, ValidationResult

logger = logging.getLogger(__name__)


LOAD_FAILED = "Failed to load the game"
VALIDATION_FAILED = "Failed to validate answers"


class GameRules(ABC):
    """Per-game strategy plugged into GameSession."""

    game_type: GameType
    # Validate item by item, pausing in word_completed between items
    supports_auto_advance: bool = False

    @abstractmethod
    def parse_item(self, data: Dict[str, Any]) -> PlayableItem:
        """Build the playable item from the service payload."""

    @abstractmethod
    def parse_result(self, data: Dict[str, Any]) -> ValidationResult:
        """Build the validation result from the service payload."""

    @abstractmethod
    def new_board(self, item: PlayableItem) -> Any:
        """Fresh player state for an item."""

    def completion_predicate(self, board: Any) -> bool:
        """Whether the board should be submitted without an explicit action."""
        return False

    @abstractmethod
    def can_submit(self, board: Any) -> bool:
        """Whether an explicit submit is allowed."""

    @abstractmethod
    def build_submission(self, board: Any, item_index: int, hints_used: int) -> Dict[str, Any]:
        """Request body for the validation call."""


class GameSession(BaseModel):
    """
    Single authority for which item is being played, what the player has
    entered, and whether it is safe to submit.

    Attributes:
        rules: Game-specific strategy
        service: GameService collaborator
        activity_id: Activity being played
        from_module: Notify `on_complete` when the session finishes
        on_complete: Completion callback, called at most once per attempt
        status: Current SessionStatus
        current_index: 0-based index of the item in play
        item: The current PlayableItem (None until loaded)
        board: Player state for the current item
        hints: Hints received for the current item
        results: Validation results of finished items, in order
        last_result: Result of the most recently validated item
        aggregate: Session summary, set once the last item is validated
        error: Last error message surfaced to the player
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    rules: GameRules
    service: Any
    activity_id: str
    from_module: bool = False
    on_complete: Optional[Callable[[SessionOutcome], None]] = None

    status: SessionStatus = SessionStatus.LOADING
    current_index: int = 0
    item: Optional[PlayableItem] = None
    board: Optional[Any] = None
    hints: HintCoordinator = Field(default_factory=HintCoordinator)
    results: List[ValidationResult] = Field(default_factory=list)
    last_result: Optional[ValidationResult] = None
    aggregate: Optional[AggregatedResult] = None
    error: Optional[str] = None

    # Bumped whenever the item in play is replaced; captured by remote calls
    _epoch: int = 0
    _submitting: bool = False
    _notified: bool = False

    @property
    def total_items(self) -> int:
        return self.item.total_items if self.item else 1

    @property
    def is_last_item(self) -> bool:
        return self.current_index >= self.total_items - 1

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def can_advance(self) -> bool:
        """Whether `next_item` would move to another item."""
        return self.status in (SessionStatus.WORD_COMPLETED, SessionStatus.COMPLETED) and not self.is_last_item

    def _is_current(self, epoch: int, index: int) -> bool:
        return epoch == self._epoch and index == self.current_index

    async def start(self) -> None:
        """Load the first item."""
        self.current_index = 0
        await self.load()

    async def load(self) -> None:
        """Fetch the item at `current_index` and reset the player's state for it."""
        self._epoch += 1
        self._submitting = False
        epoch, index = self._epoch, self.current_index
        self.status = SessionStatus.LOADING
        self.error = None

        try:
            data = await self.service.fetch_playable_item(self.activity_id, index)
            item = self.rules.parse_item(data or {})
        except (GameServiceError, ValidationError) as e:
            if not self._is_current(epoch, index):
                logger.debug("Ignoring load failure for stale item %d", index)
                return
            message = e.message if isinstance(e, GameServiceError) else None
            self.error = message or LOAD_FAILED
            self.status = SessionStatus.ERROR
            logger.info("Loading item %d of %s failed: %s", index, self.activity_id, e)
            return

        if not self._is_current(epoch, index):
            logger.debug("Discarding stale item %d", index)
            return

        item.item_index = index
        self.item = item
        self.board = self.rules.new_board(item)
        self.hints.reset()
        self.last_result = None
        self.status = SessionStatus.PLAYING
        logger.info("Playing item %d/%d of %s", index + 1, item.total_items, self.activity_id)

    async def after_input(self) -> Optional[ValidationResult]:
        """Submit if the board now meets the game's completion condition."""
        if self.status == SessionStatus.PLAYING and self.rules.completion_predicate(self.board):
            return await self.submit()
        return None

    async def submit(self) -> Optional[ValidationResult]:
        """
        Validate the current item, at most once at a time.

        A second call while a validation is in flight is ignored. On failure
        the message is surfaced in `error` and play continues.

        Returns:
            The validation result, or None if nothing was (successfully) validated
        """
        if self._submitting:
            logger.debug("Submission already in flight for item %d", self.current_index)
            return None
        if self.status != SessionStatus.PLAYING or self.board is None:
            return None
        if not self.rules.can_submit(self.board):
            return None

        self._submitting = True
        epoch, index = self._epoch, self.current_index
        submission = self.rules.build_submission(self.board, index, self.hints.hints_used)

        try:
            data = await self.service.validate_attempt(self.activity_id, index, submission)
            result = self.rules.parse_result(data or {})
        except (GameServiceError, ValidationError) as e:
            if self._is_current(epoch, index):
                message = e.message if isinstance(e, GameServiceError) else None
                self.error = message or VALIDATION_FAILED
                logger.info("Validation of item %d failed: %s", index, e)
            return None
        finally:
            if self._is_current(epoch, index):
                self._submitting = False

        if not self._is_current(epoch, index) or self.status != SessionStatus.PLAYING:
            logger.debug("Discarding stale validation result for item %d", index)
            return None

        self._finalize(result)
        return result

    def _finalize(self, result: ValidationResult) -> None:
        self.error = None
        self.last_result = result
        self.results.append(result)

        if self.rules.supports_auto_advance and not self.is_last_item:
            self.status = SessionStatus.WORD_COMPLETED
            logger.info("Item %d of %s validated", self.current_index + 1, self.activity_id)
            return

        if self.is_last_item:
            self.aggregate = aggregate_results(self.results)
            self.status = SessionStatus.COMPLETED
            logger.info(
                "Session %s completed: score=%s percentage=%s",
                self.activity_id, self.aggregate.total_score, self.aggregate.percentage,
            )
            self._notify()
        else:
            self.status = SessionStatus.COMPLETED

    def _notify(self) -> None:
        """Fire the completion callback once, and only inside an enclosing module."""
        if not self.from_module or self.on_complete is None or self._notified:
            return
        self._notified = True
        self.on_complete(self.outcome())

    def outcome(self) -> SessionOutcome:
        return SessionOutcome(
            game_type=self.rules.game_type,
            activity_id=self.activity_id,
            result=self.last_result,
            aggregate=self.aggregate,
        )

    async def request_hint(self, sub_unit_id: Optional[int] = None) -> Optional[Hint]:
        """Ask for a hint on the current item (a blank, a word, or the whole item)."""
        if self.status != SessionStatus.PLAYING:
            return None

        epoch, index = self._epoch, self.current_index
        return await self.hints.request(
            self.service,
            self.activity_id,
            index,
            sub_unit_id,
            is_current=lambda: self._is_current(epoch, index) and self.status == SessionStatus.PLAYING,
        )

    async def next_item(self) -> bool:
        """
        Move on to the next item after one was validated.

        Returns:
            True if another item was requested
        """
        if not self.can_advance:
            return False
        self.current_index += 1
        await self.load()
        return True

    async def retry(self) -> None:
        """
        Start over.

        From `error` the failed fetch is repeated for the same item; from
        any other state the attempt restarts at the first item with all
        accumulated results cleared.
        """
        if self.status == SessionStatus.ERROR:
            await self.load()
            return

        self.current_index = 0
        self.results = []
        self.last_result = None
        self.aggregate = None
        self._notified = False
        await self.load()
