"""Pure game rules: text normalization, grid geometry, templates and scoring folds."""

from .models import (
    CellPosition,
    FoundWord,
    ValidationResult,
    HangingResult,
    WordSearchResult,
    WordDetail,
    PhraseResult,
    BlankDetail,
    AggregatedResult,
)
from .text import normalize_text, is_letter_in_word, unique_letters, letters_match
from .geometry import (
    is_straight_line,
    expand_path,
    in_bounds,
    word_along,
    match_word,
    path_contains,
    is_cell_found,
)
from .template import parse_template, blank_indices, layout_template, unknown_indices, TemplateSlot
from .aggregate import aggregate_results

__all__ = [
    # Models
    "CellPosition",
    "FoundWord",
    "ValidationResult",
    "HangingResult",
    "WordSearchResult",
    "WordDetail",
    "PhraseResult",
    "BlankDetail",
    "AggregatedResult",
    # Text
    "normalize_text",
    "is_letter_in_word",
    "unique_letters",
    "letters_match",
    # Geometry
    "is_straight_line",
    "expand_path",
    "in_bounds",
    "word_along",
    "match_word",
    "path_contains",
    "is_cell_found",
    # Templates
    "parse_template",
    "blank_indices",
    "layout_template",
    "unknown_indices",
    "TemplateSlot",
    # Aggregation
    "aggregate_results",
]
