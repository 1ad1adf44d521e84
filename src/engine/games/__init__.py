"""Game-specific boards, rules and sessions."""

from typing import Callable, Dict, Optional, Type

from ..models import GameType, SessionOutcome
from ..session import GameSession
from .word_search import WordSearchBoard, WordSearchRules, WordSearchSession
from .hanging import HangingBoard, HangingRules, HangingSession
from .complete_phrase import PhraseBoard, CompletePhraseRules, CompletePhraseSession


SESSION_TYPES: Dict[str, Type[GameSession]] = {
    "word_search": WordSearchSession,
    "hanging": HangingSession,
    "complete_phrase": CompletePhraseSession,
}


def create_session(
    game_type: GameType,
    service,
    activity_id: str,
    from_module: bool = False,
    on_complete: Optional[Callable[[SessionOutcome], None]] = None,
) -> GameSession:
    """
    Factory for the session class of a game type.

    Raises:
        ValueError: for an unknown game type
    """
    if game_type not in SESSION_TYPES:
        raise ValueError(f"Unknown game type: {game_type}")

    return SESSION_TYPES[game_type](
        service=service,
        activity_id=activity_id,
        from_module=from_module,
        on_complete=on_complete,
    )


__all__ = [
    "SESSION_TYPES",
    "create_session",
    "WordSearchBoard",
    "WordSearchRules",
    "WordSearchSession",
    "HangingBoard",
    "HangingRules",
    "HangingSession",
    "PhraseBoard",
    "CompletePhraseRules",
    "CompletePhraseSession",
]
