"""
Word search.

The player drags across the grid; a straight selection spelling a listed
word (either direction) is recorded by its endpoints. The whole grid is
validated in one call when the player submits.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..models import SessionStatus, WordSearchItem
from ..session import GameRules, GameSession
from ...rules.geometry import expand_path, in_bounds, is_cell_found, is_straight_line, match_word, word_along
from ...rules.models import CellPosition, FoundWord, WordSearchResult


class WordSearchBoard(BaseModel):
    """
    Found words and the selection currently being dragged.

    Attributes:
        item: The grid being played
        found_words: Matches so far, in the order they were found
        selection: Cells of the current drag, starting at its anchor
    """

    item: WordSearchItem
    found_words: List[FoundWord] = Field(default_factory=list)
    selection: List[CellPosition] = Field(default_factory=list)

    @property
    def is_selecting(self) -> bool:
        return bool(self.selection)

    def _check_cell(self, cell: CellPosition) -> None:
        if not in_bounds(self.item.grid, cell):
            raise ValueError(f"Cell {tuple(cell)} is outside the {self.item.height}x{self.item.width} grid")

    def begin_selection(self, cell: CellPosition) -> None:
        self._check_cell(cell)
        self.selection = [CellPosition(*cell)]

    def extend_selection(self, cell: CellPosition) -> bool:
        """
        Move the end of the drag to `cell`.

        The path is always rebuilt from the drag's first cell. A path off the
        8 directions, or crossing a cell the grid lacks (short rows), leaves
        the selection unchanged.
        """
        if not self.selection:
            return False
        cell = CellPosition(*cell)
        anchor = self.selection[0]
        if not is_straight_line(anchor, cell):
            return False
        path = expand_path(anchor, cell)
        if not all(in_bounds(self.item.grid, step) for step in path):
            return False
        self.selection = path
        return True

    def end_selection(self) -> Optional[FoundWord]:
        """
        Release the drag and record the word it spells, if any.

        Returns:
            The new FoundWord, or None if nothing new was matched
        """
        path, self.selection = self.selection, []
        if len(path) < 2:
            return None

        candidate = word_along(self.item.grid, path)
        listed = match_word(
            candidate,
            (w.word for w in self.item.words),
            case_sensitive=self.item.configuration.case_sensitive,
        )
        if listed is None:
            return None

        start, end = path[0], path[-1]
        if self.is_recorded(start, end):
            return None

        found = FoundWord(
            word=listed,
            start_row=start.row,
            start_col=start.col,
            end_row=end.row,
            end_col=end.col,
        )
        self.found_words.append(found)
        return found

    def select(self, start: CellPosition, end: CellPosition) -> Optional[FoundWord]:
        """Drag from `start` to `end` in one go."""
        self.begin_selection(start)
        self.extend_selection(end)
        return self.end_selection()

    def is_recorded(self, start: CellPosition, end: CellPosition) -> bool:
        return any(fw.start == start and fw.end == end for fw in self.found_words)

    def is_cell_selected(self, cell: CellPosition) -> bool:
        return CellPosition(*cell) in self.selection

    def is_cell_found(self, cell: CellPosition) -> bool:
        return is_cell_found(self.found_words, CellPosition(*cell))

    def found(self, word: str) -> bool:
        return any(fw.word == word for fw in self.found_words)


class WordSearchRules(GameRules):
    game_type = "word_search"

    def parse_item(self, data: Dict[str, Any]) -> WordSearchItem:
        return WordSearchItem.model_validate(data)

    def parse_result(self, data: Dict[str, Any]) -> WordSearchResult:
        return WordSearchResult.model_validate(data)

    def new_board(self, item: WordSearchItem) -> WordSearchBoard:
        return WordSearchBoard(item=item)

    def can_submit(self, board: WordSearchBoard) -> bool:
        return len(board.found_words) > 0

    def build_submission(self, board: WordSearchBoard, item_index: int, hints_used: int) -> Dict[str, Any]:
        return {
            "foundWords": [fw.model_dump(by_alias=True) for fw in board.found_words],
            "hintsUsed": hints_used,
        }


class WordSearchSession(GameSession):
    """Word-search session; the grid is a single item."""

    rules: GameRules = Field(default_factory=WordSearchRules)

    def _playing(self) -> bool:
        return self.status == SessionStatus.PLAYING and self.board is not None

    def begin_selection(self, cell: CellPosition) -> bool:
        if not self._playing():
            return False
        self.board.begin_selection(CellPosition(*cell))
        return True

    def extend_selection(self, cell: CellPosition) -> bool:
        return self._playing() and self.board.extend_selection(cell)

    def end_selection(self) -> Optional[FoundWord]:
        if not self._playing():
            return None
        return self.board.end_selection()

    def select_word(self, start: CellPosition, end: CellPosition) -> Optional[FoundWord]:
        if not self._playing():
            return None
        return self.board.select(CellPosition(*start), CellPosition(*end))
