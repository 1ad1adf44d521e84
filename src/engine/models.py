"""
Pydantic models for the engine layer.

Playable items, hints, session configuration and the completion payload.
The session logic itself lives in session.py and the per-game modules.
"""

from enum import Enum
from typing import List, Optional, Literal
from pydantic import AliasChoices, BaseModel, Field, SerializeAsAny

from ..rules.models import ApiModel, ValidationResult, AggregatedResult


GameType = Literal["word_search", "hanging", "complete_phrase"]


class SessionStatus(str, Enum):
    LOADING = "loading"
    PLAYING = "playing"
    WORD_COMPLETED = "word_completed"  # hangman: feedback between words
    COMPLETED = "completed"
    ERROR = "error"


class PlayableItem(ApiModel):
    """One solvable unit of a session. Replaced wholesale when advancing."""
    item_index: int = Field(default=0, ge=0, exclude=True)

    @property
    def total_items(self) -> int:
        return 1


class WordClue(ApiModel):
    word: Optional[str] = None  # hidden when the word list is not shown
    clue: Optional[str] = None
    category: Optional[str] = None


class WordSearchConfiguration(ApiModel):
    show_word_list: bool = True
    show_clues: bool = False
    case_sensitive: bool = False


class WordSearchItem(PlayableItem):
    grid: List[List[str]]
    words: List[WordClue] = Field(default_factory=list)
    width: int = 0
    height: int = 0
    configuration: WordSearchConfiguration = Field(default_factory=WordSearchConfiguration)

    def model_post_init(self, __context) -> None:
        """Derive the dimensions from the grid when the payload omits them."""
        if not self.height:
            self.height = len(self.grid)
        if not self.width and self.grid:
            self.width = len(self.grid[0])


class HangingItem(PlayableItem):
    word: str = Field(..., min_length=1)
    word_length: int = 0
    category: Optional[str] = None
    max_attempts: int = Field(default=6, ge=1)
    show_word_length: bool = True
    has_multiple_words: bool = False
    total_words: int = Field(default=1, ge=1)

    @property
    def total_items(self) -> int:
        # Further words are only served when the activity is multi-word
        return self.total_words if self.has_multiple_words else 1

    def model_post_init(self, __context) -> None:
        if not self.word_length:
            self.word_length = len(self.word)


class BlankOption(ApiModel):
    text: str


class Blank(ApiModel):
    """A fill-in slot; its id is the template index it answers."""
    id: int
    type: Literal["text", "select", "drag_drop"] = "text"
    options: List[BlankOption] = Field(default_factory=list)

    @property
    def is_choice(self) -> bool:
        # drag_drop is answered like a select
        return self.type in ("select", "drag_drop")


class PhraseItem(PlayableItem):
    phrase: str
    blanks: List[Blank] = Field(default_factory=list)
    category: Optional[str] = None
    difficulty: Optional[str] = None
    total_blanks: int = 0
    shuffle_options: bool = False
    has_multiple_phrases: bool = Field(
        default=False,
        validation_alias=AliasChoices("hasMutiplePhrases", "hasMultiplePhrases", "has_multiple_phrases"),
    )
    total_phrases: int = Field(default=1, ge=1)

    @property
    def total_items(self) -> int:
        return self.total_phrases if self.has_multiple_phrases else 1

    def model_post_init(self, __context) -> None:
        if not self.total_blanks:
            self.total_blanks = len(self.blanks)

    def blank(self, blank_id: int) -> Optional[Blank]:
        for blank in self.blanks:
            if blank.id == blank_id:
                return blank
        return None


class Hint(ApiModel):
    """A hint for one sub-unit (a word, a blank). Never affects scoring."""
    hint: Optional[str] = None
    first_letter: Optional[str] = None
    word_length: Optional[int] = None
    revealed_letter: Optional[str] = None
    revealed_position: Optional[int] = None


class ApiConfig(BaseModel):
    """Connection settings for the game service."""
    base_url: str = "http://localhost:3020"
    timeout: float = Field(default=10.0, gt=0)
    token: Optional[str] = None


class SessionConfig(BaseModel):
    """Configuration for one play session."""
    game_type: GameType
    activity_id: str = Field(..., min_length=1)
    from_module: bool = False
    module_item_id: Optional[str] = None
    api: ApiConfig = Field(default_factory=ApiConfig)


class SessionOutcome(ApiModel):
    """Payload of the completion notification sent to an enclosing module."""
    game_type: GameType
    activity_id: str
    result: Optional[SerializeAsAny[ValidationResult]] = None
    aggregate: Optional[AggregatedResult] = None

    @property
    def score(self) -> float:
        if self.aggregate is not None:
            return self.aggregate.total_score
        return self.result.score if self.result else 0

    @property
    def percentage(self) -> float:
        if self.aggregate is not None:
            return self.aggregate.percentage
        return self.result.item_percentage() if self.result else 0.0
