"""Data models for grid selections and validation results."""

from typing import List, Optional, NamedTuple
from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for records exchanged with the game service (camelCase on the wire)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CellPosition(NamedTuple):
    """A cell on the word-search grid."""
    row: int
    col: int


class FoundWord(ApiModel):
    """A word-search match, recorded by its endpoints only."""
    word: str
    start_row: int
    start_col: int
    end_row: int
    end_col: int

    @property
    def start(self) -> CellPosition:
        return CellPosition(self.start_row, self.start_col)

    @property
    def end(self) -> CellPosition:
        return CellPosition(self.end_row, self.end_col)


class ValidationResult(ApiModel):
    """
    Outcome of one validated item, as asserted by the game service.

    Subclasses map each game's payload; the aggregator only relies on
    `score`, `passed()`, `error_total()` and `item_percentage()`.
    """
    score: float = 0
    percentage: Optional[float] = None

    def passed(self) -> bool:
        return False

    def error_total(self) -> int:
        return 0

    def item_percentage(self) -> float:
        """The item's own percentage, or 100/0 from its correctness."""
        if self.percentage is not None:
            return self.percentage
        return 100.0 if self.passed() else 0.0


class HangingResult(ValidationResult):
    """Result of one hangman word."""
    is_correct: bool = False
    correct_word: str = ""
    errors_count: int = Field(default=0, ge=0)
    matched_letters: List[str] = Field(default_factory=list)
    missed_letters: List[str] = Field(default_factory=list)

    def passed(self) -> bool:
        return self.is_correct

    def error_total(self) -> int:
        return self.errors_count


class WordDetail(ApiModel):
    word: str
    is_correct: bool


class WordSearchResult(ValidationResult):
    """Result of a whole word-search grid."""
    correct: int = 0
    incorrect: int = 0
    missing: int = 0
    details: List[WordDetail] = Field(default_factory=list)

    def passed(self) -> bool:
        return self.incorrect == 0 and self.missing == 0

    def error_total(self) -> int:
        return self.incorrect


class BlankDetail(ApiModel):
    blank_id: int
    user_answer: str = ""
    correct_answer: str = ""
    is_correct: bool


class PhraseResult(ValidationResult):
    """Result of one phrase with its blanks."""
    correct_blanks: int = 0
    incorrect_blanks: int = 0
    total_blanks: int = 0
    is_perfect: bool = False
    details: List[BlankDetail] = Field(default_factory=list)

    def passed(self) -> bool:
        return self.is_perfect

    def error_total(self) -> int:
        return self.incorrect_blanks

    def detail_for(self, blank_id: int) -> Optional[BlankDetail]:
        for detail in self.details:
            if detail.blank_id == blank_id:
                return detail
        return None


class AggregatedResult(ApiModel):
    """Session-level fold of every item's validation result."""
    total_score: float = 0
    total_correct: int = 0
    total_incorrect: int = 0
    total_errors: int = 0
    percentage: float = 0.0
    items: List[SerializeAsAny[ValidationResult]] = Field(default_factory=list)

    @property
    def total_items(self) -> int:
        return len(self.items)
