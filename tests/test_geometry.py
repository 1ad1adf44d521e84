"""
Tests for word-search selection geometry.
"""

import pytest
from src.rules import (
    CellPosition,
    FoundWord,
    expand_path,
    in_bounds,
    is_cell_found,
    is_straight_line,
    match_word,
    path_contains,
    word_along,
)

C = CellPosition

GRID = [
    ["G", "A", "T", "O"],
    ["X", "O", "X", "X"],
    ["X", "X", "T", "X"],
    ["O", "X", "X", "A"],
]


class TestStraightLine:
    """The 8 compass directions."""

    @pytest.mark.parametrize("end", [C(2, 5), C(2, 0), C(0, 2), C(5, 2), C(0, 0), C(4, 4), C(0, 4), C(4, 0)])
    def test_compass_directions(self, end):
        """Horizontal, vertical and both diagonals are straight."""
        assert is_straight_line(C(2, 2), end) is True

    @pytest.mark.parametrize("end", [C(3, 4), C(0, 3), C(4, 1)])
    def test_knight_moves_are_not_straight(self, end):
        """Anything off the 8 directions is rejected."""
        assert is_straight_line(C(2, 2), end) is False

    def test_same_cell(self):
        """A single cell counts as a straight line."""
        assert is_straight_line(C(1, 1), C(1, 1)) is True


class TestExpandPath:
    """Expanding endpoints into cells."""

    def test_horizontal(self):
        """Cells are listed from start to end inclusive."""
        assert expand_path(C(0, 0), C(0, 3)) == [C(0, 0), C(0, 1), C(0, 2), C(0, 3)]

    def test_diagonal_up_left(self):
        """Diagonals step both coordinates."""
        assert expand_path(C(3, 3), C(1, 1)) == [C(3, 3), C(2, 2), C(1, 1)]

    def test_single_cell(self):
        """start == end gives just that cell."""
        assert expand_path(C(2, 1), C(2, 1)) == [C(2, 1)]

    @pytest.mark.parametrize("start,end", [
        (C(0, 0), C(0, 3)),
        (C(3, 0), C(0, 3)),
        (C(1, 4), C(5, 4)),
        (C(4, 4), C(1, 1)),
    ])
    def test_length_and_reversibility(self, start, end):
        """Length is max(|Δrow|, |Δcol|) + 1 and reversing the endpoints reverses the path."""
        path = expand_path(start, end)
        assert len(path) == max(abs(end.row - start.row), abs(end.col - start.col)) + 1
        assert expand_path(end, start) == list(reversed(path))

    def test_crooked_pair_terminates(self):
        """A pair off the 8 directions still yields max(|Δrow|, |Δcol|) + 1 cells."""
        assert len(expand_path(C(0, 0), C(2, 5))) == 6


class TestWordMatching:
    """Reading words off the grid."""

    def test_word_along_path(self):
        """Letters are read in path order."""
        assert word_along(GRID, expand_path(C(0, 0), C(0, 3))) == "GATO"

    def test_case_insensitive_match(self):
        """GATO on the grid matches a listed 'gato'."""
        assert match_word("GATO", ["perro", "gato"]) == "gato"

    def test_reversed_match(self):
        """A path dragged backwards still matches the listed word."""
        backwards = word_along(GRID, expand_path(C(0, 3), C(0, 0)))
        assert backwards == "OTAG"
        assert match_word(backwards, ["GATO"]) == "GATO"

    def test_listed_reversal_matches(self):
        """A listed 'OTAG' matches GATO read forwards."""
        assert match_word("GATO", ["OTAG"]) == "OTAG"

    def test_case_sensitive(self):
        """With case sensitivity, letter case must agree."""
        assert match_word("GATO", ["gato"], case_sensitive=True) is None
        assert match_word("GATO", ["GATO"], case_sensitive=True) == "GATO"

    def test_hidden_words_skipped(self):
        """Words withheld by the service (None) never match."""
        assert match_word("GATO", [None, "gato"]) == "gato"
        assert match_word("GATO", [None]) is None

    def test_no_match(self):
        """Unlisted letters return None."""
        assert match_word("XOX", ["gato"]) is None


class TestCells:
    """Bounds and found-cell lookups."""

    def test_in_bounds(self):
        """Cells outside the grid are rejected."""
        assert in_bounds(GRID, C(3, 3)) is True
        assert in_bounds(GRID, C(4, 0)) is False
        assert in_bounds(GRID, C(0, -1)) is False

    def test_path_contains(self):
        """Membership is computed from the endpoints."""
        assert path_contains(C(0, 0), C(3, 3), C(2, 2)) is True
        assert path_contains(C(0, 0), C(3, 3), C(2, 1)) is False

    def test_is_cell_found(self):
        """A cell inside any found word is found."""
        found = [FoundWord(word="GATO", start_row=0, start_col=0, end_row=0, end_col=3)]
        assert is_cell_found(found, C(0, 2)) is True
        assert is_cell_found(found, C(1, 1)) is False
