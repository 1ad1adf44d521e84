"""Session engine for the learning-platform mini-games."""

from .models import (
    GameType,
    SessionStatus,
    PlayableItem,
    WordSearchItem,
    WordSearchConfiguration,
    WordClue,
    HangingItem,
    PhraseItem,
    Blank,
    BlankOption,
    Hint,
    ApiConfig,
    SessionConfig,
    SessionOutcome,
)
from .hints import HintCoordinator
from .session import GameRules, GameSession
from .games import (
    SESSION_TYPES,
    create_session,
    WordSearchBoard,
    WordSearchSession,
    HangingBoard,
    HangingSession,
    PhraseBoard,
    CompletePhraseSession,
)

__all__ = [
    "GameType",
    "SessionStatus",
    "PlayableItem",
    "WordSearchItem",
    "WordSearchConfiguration",
    "WordClue",
    "HangingItem",
    "PhraseItem",
    "Blank",
    "BlankOption",
    "Hint",
    "ApiConfig",
    "SessionConfig",
    "SessionOutcome",
    "HintCoordinator",
    "GameRules",
    "GameSession",
    "SESSION_TYPES",
    "create_session",
    "WordSearchBoard",
    "WordSearchSession",
    "HangingBoard",
    "HangingSession",
    "PhraseBoard",
    "CompletePhraseSession",
]
