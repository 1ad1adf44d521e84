"""
Tests for the word-search board and session.
"""

import asyncio

import pytest
from src.api import GameServiceError
from src.engine import SessionStatus, WordSearchBoard, WordSearchItem, create_session
from src.rules import CellPosition, WordSearchResult

from fakes import FakeService, word_search_item

C = CellPosition


def make_board(case_sensitive: bool = False) -> WordSearchBoard:
    return WordSearchBoard(item=WordSearchItem.model_validate(word_search_item(case_sensitive)))


class TestWordSearchItem:
    """Parsing the grid payload."""

    def test_dimensions_derived(self):
        """Width and height come from the grid when omitted."""
        item = WordSearchItem.model_validate(word_search_item())
        assert (item.height, item.width) == (4, 4)
        assert item.total_items == 1
        assert item.configuration.show_word_list is True


class TestSelection:
    """Dragging across the grid."""

    def test_horizontal_word(self):
        """Dragging over C-A-T records 'cat' by its endpoints."""
        board = make_board()
        found = board.select(C(0, 0), C(0, 2))

        assert found.word == "cat"
        assert (found.start, found.end) == (C(0, 0), C(0, 2))
        assert board.found("cat") is True

    def test_vertical_and_reversed(self):
        """A word dragged backwards matches the listed word."""
        board = make_board()
        found = board.select(C(2, 0), C(0, 0))

        assert found.word == "cow"
        assert found.start == C(2, 0)

    def test_same_pair_recorded_once(self):
        """Tracing the same endpoints twice yields one record."""
        board = make_board()
        board.select(C(3, 1), C(3, 3))
        assert board.select(C(3, 1), C(3, 3)) is None
        assert len(board.found_words) == 1

    def test_non_word_ignored(self):
        """A straight path spelling nothing listed records nothing."""
        board = make_board()
        assert board.select(C(1, 1), C(2, 2)) is None
        assert board.found_words == []

    def test_single_cell_ignored(self):
        """A click without a drag never matches."""
        board = make_board()
        board.begin_selection(C(0, 0))
        assert board.end_selection() is None

    def test_crooked_extension_keeps_selection(self):
        """Moving off the 8 directions leaves the last straight selection."""
        board = make_board()
        board.begin_selection(C(0, 0))
        assert board.extend_selection(C(0, 2)) is True
        assert board.extend_selection(C(1, 3)) is False
        assert board.selection == [C(0, 0), C(0, 1), C(0, 2)]
        assert board.is_cell_selected(C(0, 1)) is True
        assert board.end_selection().word == "cat"
        assert board.selection == []

    def test_path_rebuilt_from_anchor(self):
        """Each extension re-expands from the first cell."""
        board = make_board()
        board.begin_selection(C(0, 0))
        board.extend_selection(C(2, 0))
        board.extend_selection(C(0, 2))
        assert board.selection == [C(0, 0), C(0, 1), C(0, 2)]

    def test_begin_off_grid(self):
        """Starting outside the grid is an error."""
        board = make_board()
        with pytest.raises(ValueError):
            board.begin_selection(C(4, 0))

    def test_drag_across_short_row(self):
        """A drag through a cell missing from a ragged grid is refused."""
        item = WordSearchItem(grid=[["A", "B", "C"], ["D"], ["G", "H", "I"]], words=[{"word": "CI"}])
        board = WordSearchBoard(item=item)

        board.begin_selection(C(0, 2))
        assert board.extend_selection(C(2, 2)) is False
        assert board.selection == [C(0, 2)]
        assert board.end_selection() is None
        assert board.select(C(0, 0), C(2, 0)) is None
        assert board.found_words == []

    def test_case_sensitive_grid(self):
        """Case-sensitive activities need matching letter case."""
        board = make_board(case_sensitive=True)
        assert board.select(C(0, 0), C(0, 2)) is None

    def test_found_cells(self):
        """Cells of found words are reported from stored endpoints."""
        board = make_board()
        board.select(C(3, 1), C(3, 3))
        assert board.is_cell_found(C(3, 2)) is True
        assert board.is_cell_found(C(2, 2)) is False


class TestWordSearchSession:
    """Submitting a grid."""

    RESULT = {
        "score": 20,
        "percentage": 66.67,
        "correct": 2,
        "incorrect": 0,
        "missing": 1,
        "details": [
            {"word": "cat", "isCorrect": True},
            {"word": "dog", "isCorrect": True},
            {"word": "cow", "isCorrect": False},
        ],
    }

    def test_submit_found_words(self):
        """The found words are sent by endpoints with the hint count."""
        service = FakeService([word_search_item()], [self.RESULT])
        session = create_session("word_search", service, "ws-1")

        async def scenario():
            await session.start()
            session.select_word(C(0, 0), C(0, 2))
            session.select_word(C(3, 3), C(3, 1))
            return await session.submit()

        result = asyncio.run(scenario())

        assert isinstance(result, WordSearchResult)
        assert service.submissions == [{
            "foundWords": [
                {"word": "cat", "startRow": 0, "startCol": 0, "endRow": 0, "endCol": 2},
                {"word": "dog", "startRow": 3, "startCol": 3, "endRow": 3, "endCol": 1},
            ],
            "hintsUsed": 0,
        }]
        assert session.status == SessionStatus.COMPLETED
        assert session.aggregate.total_score == 20
        assert session.aggregate.percentage == 66.67

    def test_nothing_found_cannot_submit(self):
        """An empty grid is not submitted."""
        service = FakeService([word_search_item()], [self.RESULT])
        session = create_session("word_search", service, "ws-1")

        async def scenario():
            await session.start()
            return await session.submit()

        assert asyncio.run(scenario()) is None
        assert service.submissions == []
        assert session.status == SessionStatus.PLAYING

    def test_no_auto_submit(self):
        """Finding every word still waits for an explicit submit."""
        service = FakeService([word_search_item()], [self.RESULT])
        session = create_session("word_search", service, "ws-1")

        async def scenario():
            await session.start()
            session.select_word(C(0, 0), C(0, 2))
            session.select_word(C(0, 0), C(2, 0))
            session.select_word(C(3, 1), C(3, 3))

        asyncio.run(scenario())

        assert len(session.board.found_words) == 3
        assert service.submissions == []

    def test_word_hint(self):
        """Hints are requested per word index."""
        service = FakeService(
            [word_search_item()],
            hints={(0, 1): {"hint": "Da leche", "firstLetter": "C", "wordLength": 3}},
        )
        session = create_session("word_search", service, "ws-1")

        async def scenario():
            await session.start()
            return await session.request_hint(1)

        hint = asyncio.run(scenario())

        assert hint.first_letter == "C"
        assert session.hints.get(1).word_length == 3
        assert service.hint_requests == [(0, 1)]

    def test_selection_ignored_when_not_playing(self):
        """Input is ignored while the grid failed to load."""
        service = FakeService([GameServiceError("boom")])
        session = create_session("word_search", service, "ws-1")

        asyncio.run(session.start())

        assert session.select_word(C(0, 0), C(0, 2)) is None
        assert session.begin_selection(C(0, 0)) is False
